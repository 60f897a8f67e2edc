"""Shared descriptor builders for consistent test inputs across all component tests.

Files:
- import/service.proto: package ``import``, local ``Message``, imports the sub package
- import/sub/message.proto: package ``import.sub``, ``Message``
- a chain a.proto -> b.proto -> c.proto for reachability policies
"""

from typing import Iterable, Optional, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_php_grpc.descriptors import FileDescriptor, load_files

SERVICE_PROTO = "import/service.proto"
SUB_PROTO = "import/sub/message.proto"

PKG_IMPORT = "import"
PKG_SUB = "import.sub"

Method = tuple[str, str, str]


def make_file(
    name: str,
    package: str = "",
    messages: Iterable[str] = (),
    enums: Iterable[str] = (),
    services: Optional[dict[str, Sequence[Method]]] = None,
    dependencies: Sequence[str] = (),
    public: Sequence[str] = (),
    php_namespace: Optional[str] = None,
) -> descriptor_pb2.FileDescriptorProto:
    """Build a FileDescriptorProto the way protoc would send it.

    Method types are written as protoc writes them, e.g. ``.import.Message``.
    """
    proto = descriptor_pb2.FileDescriptorProto(name=name)
    if package:
        proto.package = package
    for message in messages:
        proto.message_type.add(name=message)
    for enum in enums:
        proto.enum_type.add(name=enum)
    for dep in dependencies:
        proto.dependency.append(dep)
    for dep in public:
        proto.public_dependency.append(list(dependencies).index(dep))
    for service_name, methods in (services or {}).items():
        service = proto.service.add(name=service_name)
        for method_name, input_type, output_type in methods:
            service.method.add(name=method_name, input_type=input_type, output_type=output_type)
    if php_namespace is not None:
        proto.options.php_namespace = php_namespace
    return proto


def sub_message_proto() -> descriptor_pb2.FileDescriptorProto:
    return make_file(SUB_PROTO, PKG_SUB, messages=["Message"])


def import_service_proto() -> descriptor_pb2.FileDescriptorProto:
    return make_file(
        SERVICE_PROTO,
        PKG_IMPORT,
        messages=["Message"],
        services={
            "Service": [
                ("SimpleMethod", ".import.Message", ".import.Message"),
                ("ImportMethod", ".import.sub.Message", ".import.sub.Message"),
            ],
        },
        dependencies=[SUB_PROTO],
    )


def import_protos() -> list[descriptor_pb2.FileDescriptorProto]:
    """The descriptor set protoc sends for ``import/service.proto``."""
    return [sub_message_proto(), import_service_proto()]


def import_files() -> list[FileDescriptor]:
    return load_files(import_protos())


def chain_protos(public: bool = False) -> list[descriptor_pb2.FileDescriptorProto]:
    """a.proto imports b.proto, which imports c.proto (publicly if asked)."""
    c = make_file("chain/c.proto", "chain.c", messages=["Deep"])
    b = make_file(
        "chain/b.proto",
        "chain.b",
        messages=["Middle"],
        dependencies=["chain/c.proto"],
        public=["chain/c.proto"] if public else [],
    )
    a = make_file(
        "chain/a.proto",
        "chain.a",
        services={
            "Chain": [
                ("Middle", ".chain.b.Middle", ".chain.b.Middle"),
                ("Deep", ".chain.c.Deep", ".chain.c.Deep"),
            ],
        },
        dependencies=["chain/b.proto"],
    )
    return [c, b, a]


def make_request(
    protos: Sequence[descriptor_pb2.FileDescriptorProto],
    files_to_generate: Sequence[str],
    parameter: str = "",
) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    request.file_to_generate.extend(files_to_generate)
    request.proto_file.extend(protos)
    return request
