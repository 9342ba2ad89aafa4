"""Runtime settings read from the environment (overridable from the CLI)."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field, replace

_DEFAULT_TIMEOUT = 120.0
_DEFAULT_BATCH_SIZE = 10
_DEFAULT_DEPCHECK = "npx --yes depcheck"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


@dataclass(frozen=True)
class Settings:
    """Per-invocation configuration.

    ``timeout`` bounds every external command, ``npm`` is the package manager
    executable, and ``depcheck`` is the command prefix used to run the usage
    analyzer.
    """

    timeout: float = _DEFAULT_TIMEOUT
    npm: str = "npm"
    depcheck: list[str] = field(default_factory=lambda: shlex.split(_DEFAULT_DEPCHECK))
    batch_size: int = _DEFAULT_BATCH_SIZE
    log_level: str = "WARNING"
    log_format: str = "console"

    def with_overrides(self, **overrides: object) -> Settings:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_settings() -> Settings:
    """Build :class:`Settings` from ``DEPENDENCY_CLI_*`` environment variables."""
    batch_size = _env_int("DEPENDENCY_CLI_BATCH_SIZE", _DEFAULT_BATCH_SIZE)
    if batch_size < 1:
        raise ValueError("DEPENDENCY_CLI_BATCH_SIZE must be a positive integer")
    log_level = os.environ.get("DEPENDENCY_CLI_LOG_LEVEL", "WARNING").upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"DEPENDENCY_CLI_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
    return Settings(
        timeout=_env_float("DEPENDENCY_CLI_TIMEOUT", _DEFAULT_TIMEOUT),
        npm=os.environ.get("DEPENDENCY_CLI_NPM", "npm"),
        depcheck=shlex.split(os.environ.get("DEPENDENCY_CLI_DEPCHECK", _DEFAULT_DEPCHECK)),
        batch_size=batch_size,
        log_level=log_level,
        log_format=os.environ.get("DEPENDENCY_CLI_LOG_FORMAT", "console").lower(),
    )
