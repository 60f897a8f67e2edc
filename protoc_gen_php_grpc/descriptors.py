"""Immutable views over protoc file descriptors.

protoc hands the plugin ``FileDescriptorProto`` messages. The generator only
needs a small, read-only slice of them: the package, the import graph, the
declared messages and enums, and the services. This module converts the
protobuf messages into frozen dataclasses so the rest of the pipeline never
touches mutable protobuf objects.

Example::

    from google.protobuf import descriptor_pb2
    from protoc_gen_php_grpc.descriptors import FileDescriptor

    proto = descriptor_pb2.FileDescriptorProto(name="import/service.proto", package="import")
    proto.message_type.add(name="Message")
    FileDescriptor.from_proto(proto).types[0].full_name  # "import.Message"
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from google.protobuf import descriptor_pb2


class TypeKind(enum.Enum):
    """Kind of a declared type."""

    MESSAGE = "message"
    ENUM = "enum"


def split_name(name: str) -> tuple[str, ...]:
    """Split a dotted name into segments, ignoring a leading dot."""
    name = name.lstrip(".")
    if not name:
        return ()
    return tuple(name.split("."))


def join_name(package: str, local_name: str) -> str:
    """Join a package and a local name into a fully qualified name."""
    if package:
        return f"{package}.{local_name}"
    return local_name


@dataclass(frozen=True)
class TypeSymbol:
    """A message or enum declared somewhere in the descriptor set.

    ``local_name`` is relative to the package, so a nested message reads
    ``Outer.Inner``. ``file`` is the defining file path, used for lookups only.
    """

    package: str
    local_name: str
    kind: TypeKind
    file: str

    @property
    def full_name(self) -> str:
        return join_name(self.package, self.local_name)

    @property
    def package_segments(self) -> tuple[str, ...]:
        return split_name(self.package)

    @property
    def name_segments(self) -> tuple[str, ...]:
        return split_name(self.local_name)


@dataclass(frozen=True)
class MethodDescriptor:
    """A single RPC. Type names are fully qualified, without the leading dot."""

    name: str
    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False

    @classmethod
    def from_proto(cls, proto: descriptor_pb2.MethodDescriptorProto) -> MethodDescriptor:
        return cls(
            name=proto.name,
            input_type=proto.input_type.lstrip("."),
            output_type=proto.output_type.lstrip("."),
            client_streaming=proto.client_streaming,
            server_streaming=proto.server_streaming,
        )


@dataclass(frozen=True)
class ServiceDescriptor:
    """A service and its methods in declaration order."""

    name: str
    package: str
    file: str
    methods: tuple[MethodDescriptor, ...] = ()

    @property
    def full_name(self) -> str:
        return join_name(self.package, self.name)

    @classmethod
    def from_proto(
        cls,
        proto: descriptor_pb2.ServiceDescriptorProto,
        package: str,
        file: str,
    ) -> ServiceDescriptor:
        return cls(
            name=proto.name,
            package=package,
            file=file,
            methods=tuple(MethodDescriptor.from_proto(m) for m in proto.method),
        )


@dataclass(frozen=True)
class FileDescriptor:
    """A compiled ``.proto`` file, identified by its canonical path."""

    path: str
    package: str = ""
    dependencies: tuple[str, ...] = ()
    public_dependencies: tuple[str, ...] = ()
    types: tuple[TypeSymbol, ...] = ()
    services: tuple[ServiceDescriptor, ...] = ()
    php_namespace: Optional[str] = None

    @property
    def package_segments(self) -> tuple[str, ...]:
        return split_name(self.package)

    @classmethod
    def from_proto(cls, proto: descriptor_pb2.FileDescriptorProto) -> FileDescriptor:
        """Convert a ``FileDescriptorProto`` into an immutable descriptor.

        Nested messages and enums are flattened depth first, in declaration
        order. ``public_dependency`` holds indexes into ``dependency``.
        """
        types: list[TypeSymbol] = []
        for enum_proto in proto.enum_type:
            types.append(TypeSymbol(proto.package, enum_proto.name, TypeKind.ENUM, proto.name))
        for message in proto.message_type:
            _collect_message(types, message, proto.package, "", proto.name)

        php_namespace = None
        if proto.HasField("options") and proto.options.HasField("php_namespace"):
            php_namespace = proto.options.php_namespace

        dependencies = tuple(proto.dependency)
        return cls(
            path=proto.name,
            package=proto.package,
            dependencies=dependencies,
            public_dependencies=tuple(dependencies[i] for i in proto.public_dependency),
            types=tuple(types),
            services=tuple(
                ServiceDescriptor.from_proto(s, proto.package, proto.name) for s in proto.service
            ),
            php_namespace=php_namespace,
        )


def _collect_message(
    out: list[TypeSymbol],
    message: descriptor_pb2.DescriptorProto,
    package: str,
    parent: str,
    file: str,
) -> None:
    local_name = f"{parent}.{message.name}" if parent else message.name
    out.append(TypeSymbol(package, local_name, TypeKind.MESSAGE, file))

    for enum_proto in message.enum_type:
        out.append(TypeSymbol(package, f"{local_name}.{enum_proto.name}", TypeKind.ENUM, file))

    # Map entry messages are included; they cannot be method types but keep
    # the table complete for duplicate detection.
    for nested in message.nested_type:
        _collect_message(out, nested, package, local_name, file)


def load_files(protos: Iterable[descriptor_pb2.FileDescriptorProto]) -> list[FileDescriptor]:
    """Convert a sequence of ``FileDescriptorProto`` messages, preserving order."""
    return [FileDescriptor.from_proto(p) for p in protos]
