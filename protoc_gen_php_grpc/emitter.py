"""Service emission: services in, language-neutral interface definitions out."""

from __future__ import annotations

from dataclasses import dataclass

from .descriptors import FileDescriptor, ServiceDescriptor
from .resolver import ImportResolver, QualifiedReference, ResolverView


@dataclass(frozen=True)
class MethodSignature:
    """One interface method: name plus resolved input and output types."""

    name: str
    input: QualifiedReference
    output: QualifiedReference


@dataclass(frozen=True)
class InterfaceDefinition:
    """A service interface ready for rendering.

    ``full_name`` is the value of the generated ``NAME`` constant.
    """

    name: str
    full_name: str
    file: str
    methods: tuple[MethodSignature, ...] = ()


def emit(service: ServiceDescriptor, resolver: ResolverView) -> InterfaceDefinition:
    """Resolve every method of ``service``, keeping declaration order.

    Errors raised while resolving (unknown types, unresolved imports)
    propagate unchanged.
    """
    methods = tuple(
        MethodSignature(
            name=method.name,
            input=resolver.resolve(method.input_type, method.name),
            output=resolver.resolve(method.output_type, method.name),
        )
        for method in service.methods
    )
    return InterfaceDefinition(
        name=service.name,
        full_name=service.full_name,
        file=service.file,
        methods=methods,
    )


def emit_file(file: FileDescriptor, resolver: ImportResolver) -> list[InterfaceDefinition]:
    """Emit every service declared in ``file``, in declaration order."""
    view = resolver.view(file)
    return [emit(service, view) for service in file.services]
