"""Generation driver: one run over a protoc request.

The index is built once up front; files are then generated independently on
a thread pool, sharing the read-only index and nothing else.
"""

from __future__ import annotations

from concurrent import futures
from dataclasses import dataclass, field
from typing import Optional, Sequence

import structlog
from google.protobuf.compiler import plugin_pb2

from .config import ErrorMode, GeneratorConfig
from .descriptors import FileDescriptor, load_files
from .emitter import emit_file
from .errors import GeneratorError
from .index import build_index
from .php import interface_filename, render
from .resolver import ImportResolver


@dataclass(frozen=True)
class GeneratedFile:
    """A rendered output file, path relative to the protoc output directory."""

    name: str
    content: str


@dataclass
class GenerationResult:
    """Output of a batch run. ``errors`` is only populated in collect mode."""

    files: list[GeneratedFile] = field(default_factory=list)
    errors: list[GeneratorError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_message(self) -> str:
        return "\n".join(str(e) for e in self.errors)


def generate_file(file: FileDescriptor, resolver: ImportResolver) -> list[GeneratedFile]:
    """Render one interface per service declared in ``file``."""
    return [
        GeneratedFile(
            name=interface_filename(file, definition.name),
            content=render(definition, file, resolver.index),
        )
        for definition in emit_file(file, resolver)
    ]


class Generator:
    """Turns descriptor sets into PHP service interfaces."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self._log = logger or structlog.get_logger()

    def generate_files(
        self,
        files: Sequence[FileDescriptor],
        files_to_generate: Sequence[str],
    ) -> GenerationResult:
        """Generate interfaces for ``files_to_generate``.

        ``files`` is the complete descriptor set, imports included.

        Raises:
            DuplicateTypeError: While indexing, regardless of error mode.
            UnknownFileError: If a requested file is not in ``files``.
            GeneratorError: The first per-file failure in fail-fast mode.
        """
        index = build_index(files)
        resolver = ImportResolver(index, self.config.import_policy)
        targets = [index.file(path) for path in files_to_generate]

        result = GenerationResult()
        with futures.ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            pending = [(target, pool.submit(generate_file, target, resolver)) for target in targets]
            for target, future in pending:
                try:
                    generated = future.result()
                except GeneratorError as e:
                    self._log.error("file_generation_failed", file=target.path, error=str(e))
                    if self.config.error_mode is ErrorMode.FAIL_FAST:
                        for _, other in pending:
                            other.cancel()
                        raise
                    result.errors.append(e)
                    continue

                for out in generated:
                    self._log.debug("file_generated", source=target.path, name=out.name)
                result.files.extend(generated)

        self._log.info(
            "generation_finished",
            requested=len(targets),
            generated=len(result.files),
            failed=len(result.errors),
        )
        return result

    def generate(self, request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
        """Answer a protoc request. Failures are reported in ``response.error``."""
        response = plugin_pb2.CodeGeneratorResponse(
            supported_features=plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL,
        )

        try:
            result = self.generate_files(
                load_files(request.proto_file),
                list(request.file_to_generate),
            )
        except GeneratorError as e:
            response.error = str(e)
            return response

        for out in result.files:
            response.file.add(name=out.name, content=out.content)
        if not result.ok:
            response.error = result.error_message()
        return response
