"""protoc plugin generating PHP service interfaces for the RoadRunner gRPC server."""

from .descriptors import (
    TypeKind,
    TypeSymbol,
    MethodDescriptor,
    ServiceDescriptor,
    FileDescriptor,
    load_files,
)
from .errors import (
    GeneratorError,
    DuplicateTypeError,
    UnresolvedImportError,
    UnknownFileError,
    UnknownTypeError,
    InvalidParameterError,
)
from .index import DescriptorIndex, build_index
from .resolver import (
    ImportPolicy,
    ImportResolver,
    ResolverView,
    Local,
    Foreign,
    QualifiedReference,
    resolve,
)
from .emitter import MethodSignature, InterfaceDefinition, emit, emit_file
from .php import render, interface_filename, type_name
from .config import ErrorMode, GeneratorConfig
from .generator import Generator, GeneratedFile, GenerationResult, generate_file
from .plugin import configure_logging, run, main

__all__ = [
    # Descriptors
    "TypeKind",
    "TypeSymbol",
    "MethodDescriptor",
    "ServiceDescriptor",
    "FileDescriptor",
    "load_files",
    # Errors
    "GeneratorError",
    "DuplicateTypeError",
    "UnresolvedImportError",
    "UnknownFileError",
    "UnknownTypeError",
    "InvalidParameterError",
    # Index
    "DescriptorIndex",
    "build_index",
    # Resolution
    "ImportPolicy",
    "ImportResolver",
    "ResolverView",
    "Local",
    "Foreign",
    "QualifiedReference",
    "resolve",
    # Emission
    "MethodSignature",
    "InterfaceDefinition",
    "emit",
    "emit_file",
    # PHP
    "render",
    "interface_filename",
    "type_name",
    # Generation
    "ErrorMode",
    "GeneratorConfig",
    "Generator",
    "GeneratedFile",
    "GenerationResult",
    "generate_file",
    "configure_logging",
    "run",
    "main",
]
