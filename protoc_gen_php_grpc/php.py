"""PHP rendering of interface definitions for the RoadRunner gRPC server."""

from __future__ import annotations

from .descriptors import FileDescriptor, split_name
from .emitter import InterfaceDefinition, MethodSignature
from .index import DescriptorIndex
from .naming import NAMESPACE_SEPARATOR, class_name, identifier, php_namespace
from .resolver import Foreign, QualifiedReference

GENERATED_HEADER = (
    "# Generated by the protocol buffer compiler (roadrunner-server/grpc). DO NOT EDIT!"
)
INTERFACE_SUFFIX = "interface"


def type_name(ref: QualifiedReference, consuming: FileDescriptor, index: DescriptorIndex) -> str:
    """PHP spelling of a resolved type reference.

    Local types stay relative to the file namespace; foreign types are fully
    qualified through the defining file's namespace.
    """
    if isinstance(ref, Foreign):
        defining = index.file(ref.file)
        package = ".".join(ref.package)
        name = class_name(split_name(ref.local_name), package)
        namespace = php_namespace(defining)
        if namespace:
            return f"{NAMESPACE_SEPARATOR}{namespace}{NAMESPACE_SEPARATOR}{name}"
        return f"{NAMESPACE_SEPARATOR}{name}"
    return class_name(ref.segments, consuming.package)


def interface_name(service_name: str) -> str:
    return identifier(service_name, INTERFACE_SUFFIX)


def interface_filename(file: FileDescriptor, service_name: str) -> str:
    """Output path of the interface, e.g. ``Import/ServiceInterface.php``."""
    directory = php_namespace(file).replace(NAMESPACE_SEPARATOR, "/")
    name = f"{interface_name(service_name)}.php"
    if directory:
        return f"{directory}/{name}"
    return name


def _render_method(method: MethodSignature, file: FileDescriptor, index: DescriptorIndex) -> list[str]:
    input_type = type_name(method.input, file, index)
    output_type = type_name(method.output, file, index)
    return [
        "    /**",
        "    * @param GRPC\\ContextInterface $ctx",
        f"    * @param {input_type} $in",
        f"    * @return {output_type}",
        "    *",
        "    * @throws GRPC\\Exception\\InvokeException",
        "    */",
        f"    public function {method.name}(GRPC\\ContextInterface $ctx, {input_type} $in): {output_type};",
    ]


def render(definition: InterfaceDefinition, file: FileDescriptor, index: DescriptorIndex) -> str:
    """Render ``definition`` as the PHP source of its service interface."""
    lines = [
        "<?php",
        GENERATED_HEADER,
        f"# source: {file.path}",
        "",
    ]

    namespace = php_namespace(file)
    if namespace:
        lines += [f"namespace {namespace};", ""]

    lines += [
        "use Spiral\\RoadRunner\\GRPC;",
        "",
        f"interface {interface_name(definition.name)} extends GRPC\\ServiceInterface",
        "{",
        "    // GRPC specific service name.",
        f'    public const NAME = "{definition.full_name}";',
    ]

    for method in definition.methods:
        lines.append("")
        lines += _render_method(method, file, index)

    lines.append("}")
    return "\n".join(lines) + "\n"
