"""Generator configuration from the protoc plugin parameter and environment.

protoc passes plugin options as one comma separated string::

    protoc --php-grpc_out=import_policy=transitive,errors=collect:./out ...
    protoc --php-grpc_opt=workers=2 ...

Environment variables:
    PROTOC_GEN_PHP_GRPC_LOG_LEVEL: structlog level name (default: warning)
    PROTOC_GEN_PHP_GRPC_WORKERS: default worker count (default: 4)
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import InvalidParameterError
from .resolver import ImportPolicy

ENV_LOG_LEVEL = "PROTOC_GEN_PHP_GRPC_LOG_LEVEL"
ENV_WORKERS = "PROTOC_GEN_PHP_GRPC_WORKERS"

DEFAULT_LOG_LEVEL = "warning"
DEFAULT_WORKERS = 4
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class ErrorMode(str, enum.Enum):
    """How a batch run reacts to a file that fails to generate."""

    FAIL_FAST = "fail_fast"
    COLLECT = "collect"


def parse_parameter(parameter: str) -> dict[str, str]:
    """Split ``key=value,key2=value2`` into a dict. Bare keys map to ``""``."""
    options: dict[str, str] = {}
    for part in parameter.split(","):
        part = part.strip()
        if not part:
            continue
        key, _, value = part.partition("=")
        options[key.strip()] = value.strip()
    return options


def _parse_workers(value: str, source: str) -> int:
    try:
        workers = int(value)
    except ValueError:
        raise InvalidParameterError(f"{source} must be an integer, got {value!r}") from None
    if workers <= 0:
        raise InvalidParameterError(f"{source} must be positive, got {workers}")
    return workers


def _parse_enum(enum_cls: type[enum.Enum], value: str, key: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidParameterError(f"{key} must be one of {allowed}, got {value!r}") from None


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one generation run."""

    import_policy: ImportPolicy = ImportPolicy.DIRECT
    error_mode: ErrorMode = ErrorMode.FAIL_FAST
    max_workers: int = DEFAULT_WORKERS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_parameter(
        cls,
        parameter: str = "",
        environ: Optional[Mapping[str, str]] = None,
    ) -> GeneratorConfig:
        """Build a config from the plugin parameter, environment and defaults.

        Plugin options take precedence over the environment.

        Raises:
            InvalidParameterError: On unknown keys or invalid values.
        """
        if environ is None:
            environ = os.environ

        log_level = environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).lower()
        if log_level not in LOG_LEVELS:
            raise InvalidParameterError(
                f"{ENV_LOG_LEVEL} must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        max_workers = DEFAULT_WORKERS
        if environ.get(ENV_WORKERS):
            max_workers = _parse_workers(environ[ENV_WORKERS], ENV_WORKERS)

        import_policy = ImportPolicy.DIRECT
        error_mode = ErrorMode.FAIL_FAST

        for key, value in parse_parameter(parameter).items():
            if key == "import_policy":
                import_policy = _parse_enum(ImportPolicy, value, key)
            elif key == "errors":
                error_mode = _parse_enum(ErrorMode, value, key)
            elif key == "workers":
                max_workers = _parse_workers(value, key)
            else:
                raise InvalidParameterError(f"unknown option {key!r}")

        return cls(
            import_policy=import_policy,
            error_mode=error_mode,
            max_workers=max_workers,
            log_level=log_level,
        )
