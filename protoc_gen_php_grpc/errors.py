"""Error types for the PHP gRPC interface generator."""

from typing import Optional


class GeneratorError(Exception):
    """Base class for generator errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class DuplicateTypeError(GeneratorError):
    """Two files declare the same fully qualified type."""

    def __init__(self, type_name: str, first_file: str, second_file: str):
        super().__init__(
            f"duplicate type {type_name}: declared in {first_file} and {second_file}"
        )
        self.type_name = type_name
        self.first_file = first_file
        self.second_file = second_file


class UnresolvedImportError(GeneratorError):
    """A method uses a type whose file is not imported by the consuming file."""

    def __init__(self, type_name: str, consuming_file: str, method: Optional[str] = None):
        where = f"method {method} in {consuming_file}" if method else consuming_file
        super().__init__(f"unresolved import: {where} uses {type_name} without importing it")
        self.type_name = type_name
        self.consuming_file = consuming_file
        self.method = method


class UnknownFileError(GeneratorError):
    """A referenced file is absent from the descriptor set."""

    def __init__(self, path: str):
        super().__init__(f"unknown file: {path}")
        self.path = path


class UnknownTypeError(GeneratorError):
    """A referenced type is not declared by any file in the descriptor set."""

    def __init__(self, type_name: str):
        super().__init__(f"unknown type: {type_name}")
        self.type_name = type_name


class InvalidParameterError(GeneratorError):
    """Malformed plugin parameter."""

    def __init__(self, message: str):
        super().__init__(f"invalid parameter: {message}")
