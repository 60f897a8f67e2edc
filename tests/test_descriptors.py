"""Tests for the descriptor model."""

from google.protobuf import descriptor_pb2

from protoc_gen_php_grpc.descriptors import (
    FileDescriptor,
    MethodDescriptor,
    TypeKind,
    TypeSymbol,
    join_name,
    load_files,
    split_name,
)

from .fixtures import SERVICE_PROTO, SUB_PROTO, import_service_proto, make_file


class TestNames:
    def test_split_strips_leading_dot(self) -> None:
        assert split_name(".import.sub.Message") == ("import", "sub", "Message")

    def test_split_empty(self) -> None:
        assert split_name("") == ()

    def test_join_with_package(self) -> None:
        assert join_name("import.sub", "Message") == "import.sub.Message"

    def test_join_without_package(self) -> None:
        assert join_name("", "Message") == "Message"


class TestTypeSymbol:
    def test_segments(self) -> None:
        symbol = TypeSymbol("import.sub", "Outer.Inner", TypeKind.MESSAGE, SUB_PROTO)
        assert symbol.full_name == "import.sub.Outer.Inner"
        assert symbol.package_segments == ("import", "sub")
        assert symbol.name_segments == ("Outer", "Inner")


class TestFileDescriptor:
    """Tests for FileDescriptor.from_proto."""

    def test_import_service_file(self) -> None:
        file = FileDescriptor.from_proto(import_service_proto())

        assert file.path == SERVICE_PROTO
        assert file.package == "import"
        assert file.dependencies == (SUB_PROTO,)
        assert file.public_dependencies == ()
        assert [t.full_name for t in file.types] == ["import.Message"]
        assert file.php_namespace is None

    def test_methods_keep_order_and_strip_dots(self) -> None:
        file = FileDescriptor.from_proto(import_service_proto())
        service = file.services[0]

        assert service.name == "Service"
        assert service.full_name == "import.Service"
        assert service.file == SERVICE_PROTO
        assert service.methods == (
            MethodDescriptor("SimpleMethod", "import.Message", "import.Message"),
            MethodDescriptor("ImportMethod", "import.sub.Message", "import.sub.Message"),
        )

    def test_nested_types_are_flattened(self) -> None:
        proto = descriptor_pb2.FileDescriptorProto(name="n.proto", package="pkg")
        outer = proto.message_type.add(name="Outer")
        inner = outer.nested_type.add(name="Inner")
        inner.enum_type.add(name="Kind")
        proto.enum_type.add(name="Status")

        file = FileDescriptor.from_proto(proto)

        assert [(t.local_name, t.kind) for t in file.types] == [
            ("Status", TypeKind.ENUM),
            ("Outer", TypeKind.MESSAGE),
            ("Outer.Inner", TypeKind.MESSAGE),
            ("Outer.Inner.Kind", TypeKind.ENUM),
        ]

    def test_public_dependencies_resolved_to_paths(self) -> None:
        proto = make_file("p.proto", dependencies=["x.proto", "y.proto"], public=["y.proto"])
        file = FileDescriptor.from_proto(proto)
        assert file.public_dependencies == ("y.proto",)

    def test_php_namespace_option(self) -> None:
        proto = make_file("p.proto", "pkg", php_namespace="Test\\CustomNamespace")
        assert FileDescriptor.from_proto(proto).php_namespace == "Test\\CustomNamespace"

    def test_streaming_flags(self) -> None:
        proto = descriptor_pb2.MethodDescriptorProto(
            name="Watch",
            input_type=".pkg.Req",
            output_type=".pkg.Resp",
            server_streaming=True,
        )
        method = MethodDescriptor.from_proto(proto)
        assert method.server_streaming is True
        assert method.client_streaming is False

    def test_load_files_preserves_order(self) -> None:
        files = load_files([make_file("b.proto"), make_file("a.proto")])
        assert [f.path for f in files] == ["b.proto", "a.proto"]
