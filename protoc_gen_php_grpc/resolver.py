"""Cross-file type resolution.

Given the file a service is declared in, every method input/output type is
turned into a :class:`Local` or :class:`Foreign` reference. References are
structured (segments, not strings), so the resolver knows nothing about the
target language's separator.

Example::

    resolver = ImportResolver(index)
    view = resolver.view(index.file("import/service.proto"))
    view.resolve("import.Message")      # Local(local_name="Message")
    view.resolve("import.sub.Message")  # Foreign(package=("import", "sub"), ...)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .descriptors import FileDescriptor, TypeSymbol, split_name
from .errors import UnresolvedImportError
from .index import DescriptorIndex


class ImportPolicy(str, enum.Enum):
    """Which files a consuming file may take types from."""

    # Direct imports plus whatever they re-export with ``import public``.
    DIRECT = "direct"
    # Anything reachable through any chain of imports.
    TRANSITIVE = "transitive"


@dataclass(frozen=True)
class Local:
    """A type declared in the consuming file's own package."""

    local_name: str

    @property
    def segments(self) -> tuple[str, ...]:
        return split_name(self.local_name)


@dataclass(frozen=True)
class Foreign:
    """A type from another package, reached through the import graph."""

    package: tuple[str, ...]
    local_name: str
    file: str

    @property
    def segments(self) -> tuple[str, ...]:
        return self.package + split_name(self.local_name)

    @property
    def full_name(self) -> str:
        return ".".join(self.segments)


QualifiedReference = Union[Local, Foreign]


class ImportResolver:
    """Resolves type references against a shared, read-only index.

    The resolver itself holds no mutable state; per-file memoization lives in
    the :class:`ResolverView` returned by :meth:`view`.
    """

    def __init__(self, index: DescriptorIndex, policy: ImportPolicy = ImportPolicy.DIRECT) -> None:
        self.index = index
        self.policy = policy

    def reachable_files(self, file: FileDescriptor) -> frozenset[str]:
        """Paths whose types ``file`` may reference under the current policy.

        Raises:
            UnknownFileError: If an import names a file missing from the index.
        """
        reachable: set[str] = set()
        pending = list(file.dependencies)
        while pending:
            path = pending.pop()
            if path in reachable:
                continue
            reachable.add(path)
            dep = self.index.file(path)
            if self.policy is ImportPolicy.TRANSITIVE:
                pending.extend(dep.dependencies)
            else:
                pending.extend(dep.public_dependencies)
        return frozenset(reachable)

    def resolve(
        self,
        consuming: FileDescriptor,
        target: TypeSymbol,
        method: Optional[str] = None,
        reachable: Optional[frozenset[str]] = None,
    ) -> QualifiedReference:
        """Qualify ``target`` as seen from ``consuming``.

        Raises:
            UnresolvedImportError: If the defining file is not reachable.
        """
        if target.package == consuming.package:
            return Local(target.local_name)

        if reachable is None:
            reachable = self.reachable_files(consuming)
        if target.file not in reachable:
            raise UnresolvedImportError(target.full_name, consuming.path, method)

        return Foreign(target.package_segments, target.local_name, target.file)

    def view(self, consuming: FileDescriptor) -> ResolverView:
        return ResolverView(self, consuming)


class ResolverView:
    """An :class:`ImportResolver` bound to one consuming file.

    Not shared between threads; each emission task creates its own.
    """

    def __init__(self, resolver: ImportResolver, consuming: FileDescriptor) -> None:
        self.resolver = resolver
        self.file = consuming
        self._reachable: Optional[frozenset[str]] = None
        self._cache: dict[str, QualifiedReference] = {}

    @property
    def index(self) -> DescriptorIndex:
        return self.resolver.index

    def reachable_files(self) -> frozenset[str]:
        if self._reachable is None:
            self._reachable = self.resolver.reachable_files(self.file)
        return self._reachable

    def resolve(self, type_name: str, method: Optional[str] = None) -> QualifiedReference:
        """Look up ``type_name`` in the index and qualify it for this file.

        Raises:
            UnknownTypeError: If no file declares ``type_name``.
            UnresolvedImportError: If the defining file is not reachable.
        """
        key = type_name.lstrip(".")
        ref = self._cache.get(key)
        if ref is not None:
            return ref

        target = self.index.lookup(key)
        reachable = None if target.package == self.file.package else self.reachable_files()
        ref = self.resolver.resolve(self.file, target, method, reachable)
        self._cache[key] = ref
        return ref


def resolve(
    consuming: FileDescriptor,
    target: TypeSymbol,
    index: DescriptorIndex,
    policy: ImportPolicy = ImportPolicy.DIRECT,
) -> QualifiedReference:
    """Qualify ``target`` as seen from ``consuming``."""
    return ImportResolver(index, policy).resolve(consuming, target)
