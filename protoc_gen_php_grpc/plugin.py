"""protoc plugin entry point.

protoc writes a serialized ``CodeGeneratorRequest`` to stdin and reads the
``CodeGeneratorResponse`` from stdout. Stdout belongs to the protocol, so all
logging goes to stderr.

Usage::

    protoc --plugin=protoc-gen-php-grpc --php-grpc_out=./out -Iproto import/service.proto
"""

import logging
import os
import sys
from typing import BinaryIO, Mapping, Optional, TextIO

import structlog
from google.protobuf.compiler import plugin_pb2

from .config import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL, GeneratorConfig
from .errors import GeneratorError
from .generator import Generator


def configure_logging(level: str = DEFAULT_LOG_LEVEL, stream: Optional[TextIO] = None) -> None:
    """Configure structlog with JSON rendering and ISO timestamps on stderr."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
    )


def run(
    input: Optional[BinaryIO] = None,
    output: Optional[BinaryIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Serve one protoc request. Returns the process exit code.

    Generation failures are reported to protoc through ``response.error``
    and still exit 0, as the plugin protocol expects.
    """
    if input is None:
        input = sys.stdin.buffer
    if output is None:
        output = sys.stdout.buffer
    if environ is None:
        environ = os.environ

    configure_logging(environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))
    logger = structlog.get_logger()

    request = plugin_pb2.CodeGeneratorRequest.FromString(input.read())

    try:
        config = GeneratorConfig.from_parameter(request.parameter, environ)
    except GeneratorError as e:
        logger.error("invalid_configuration", error=str(e))
        response = plugin_pb2.CodeGeneratorResponse(error=str(e))
    else:
        configure_logging(config.log_level)
        logger.info(
            "request_received",
            files=list(request.file_to_generate),
            import_policy=config.import_policy.value,
            errors=config.error_mode.value,
            workers=config.max_workers,
        )
        response = Generator(config, logger).generate(request)
        if response.error:
            logger.error("generation_failed", error=response.error)

    output.write(response.SerializeToString())
    output.flush()
    return 0


def main() -> None:
    sys.exit(run())
