"""Descriptor index: every declared type across a generation run.

The index is built once, single-threaded, from the complete descriptor set
and is read-only afterwards, so it can be shared by reference between
emission workers.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from .descriptors import FileDescriptor, TypeSymbol
from .errors import DuplicateTypeError, GeneratorError, UnknownFileError, UnknownTypeError

logger = structlog.get_logger()


class DescriptorIndex:
    """Lookup of type symbols by fully qualified name and of files by path."""

    def __init__(
        self,
        files: dict[str, FileDescriptor],
        symbols: dict[str, TypeSymbol],
        declared: dict[str, frozenset[TypeSymbol]],
    ) -> None:
        self._files = files
        self._symbols = symbols
        self._declared = declared

    @classmethod
    def build(cls, files: Iterable[FileDescriptor]) -> DescriptorIndex:
        """Index all types declared by ``files``.

        Raises:
            DuplicateTypeError: If two distinct files declare the same type.
            GeneratorError: If one path is given twice with different content.
        """
        by_path: dict[str, FileDescriptor] = {}
        symbols: dict[str, TypeSymbol] = {}
        declared: dict[str, frozenset[TypeSymbol]] = {}

        for file in files:
            seen = by_path.get(file.path)
            if seen is not None:
                if seen == file:
                    continue
                raise GeneratorError(f"conflicting descriptors for file {file.path}")
            by_path[file.path] = file

            for symbol in file.types:
                existing = symbols.get(symbol.full_name)
                if existing is not None:
                    raise DuplicateTypeError(symbol.full_name, existing.file, file.path)
                symbols[symbol.full_name] = symbol
            declared[file.path] = frozenset(file.types)

        logger.debug("index_built", files=len(by_path), types=len(symbols))
        return cls(by_path, symbols, declared)

    @property
    def files(self) -> tuple[FileDescriptor, ...]:
        """Indexed files in input order."""
        return tuple(self._files.values())

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name.lstrip(".") in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def lookup(self, qualified_name: str) -> TypeSymbol:
        """Return the symbol for a fully qualified name (leading dot optional)."""
        try:
            return self._symbols[qualified_name.lstrip(".")]
        except KeyError:
            raise UnknownTypeError(qualified_name.lstrip(".")) from None

    def file(self, path: str) -> FileDescriptor:
        """Return the file descriptor registered under ``path``."""
        try:
            return self._files[path]
        except KeyError:
            raise UnknownFileError(path) from None

    def types_declared_in(self, path: str) -> frozenset[TypeSymbol]:
        """Return the types declared directly in ``path``."""
        try:
            return self._declared[path]
        except KeyError:
            raise UnknownFileError(path) from None


def build_index(files: Iterable[FileDescriptor]) -> DescriptorIndex:
    """Build a :class:`DescriptorIndex` from ``files``."""
    return DescriptorIndex.build(files)
