"""
Configuration for ignore filtering, read from the environment and
overridden by command-line flags
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from .constants import (
    DEFAULT_SYNTAX,
    DEFAULT_WORKERS,
    ENV_LOG_LEVEL,
    ENV_SYNTAX,
    ENV_WORKERS,
    MAX_WORKERS,
    SUPPORTED_SYNTAXES,
)
from .errors import ConfigError


@dataclass(frozen=True)
class FilterConfig:
    """Settings for one filtering run"""
    syntax: str = DEFAULT_SYNTAX
    workers: int = DEFAULT_WORKERS
    log_level: Optional[str] = None

    def __post_init__(self):
        """Validate configuration values"""
        if self.syntax not in SUPPORTED_SYNTAXES:
            raise ConfigError(
                f"Unknown ignore syntax {self.syntax!r} "
                f"(expected one of: {', '.join(SUPPORTED_SYNTAXES)})"
            )
        if not 1 <= self.workers <= MAX_WORKERS:
            raise ConfigError(f"Worker count must be between 1 and {MAX_WORKERS}, got {self.workers}")

    @classmethod
    def from_env(cls) -> 'FilterConfig':
        """
        Build configuration from IGNOREFILTER_* environment variables

        Raises:
            ConfigError: if a variable holds an invalid value
        """
        workers_str = os.environ.get(ENV_WORKERS, '').strip()
        try:
            workers = int(workers_str) if workers_str else DEFAULT_WORKERS
        except ValueError:
            raise ConfigError(f"{ENV_WORKERS} must be an integer, got {workers_str!r}") from None

        return cls(
            syntax=os.environ.get(ENV_SYNTAX, '').strip() or DEFAULT_SYNTAX,
            workers=workers,
            log_level=os.environ.get(ENV_LOG_LEVEL) or None,
        )

    def with_overrides(self, **overrides) -> 'FilterConfig':
        """Return a copy with every non-None override applied"""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
