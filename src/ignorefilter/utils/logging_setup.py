"""
Logging configuration for ignore-filter.

Provides environment-aware logging that:
- Uses stderr exclusively, since stdout carries the surviving paths
- Outputs JSON in Docker environments
- Provides human-readable output for local use
- Supports an optional rotating log file
- Includes custom TRACE level for per-path verdicts
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Any

from ..constants import ENV_LOG_LEVEL

# Define TRACE level (lower number = more detailed)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_LEVEL = "WARNING"


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


def add_trace_to_logger():
    """Ensure trace method is available on all logger instances"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


class DockerFormatter(logging.Formatter):
    """JSON formatter optimized for container logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
            'pid': os.getpid(),
        }

        # Context passed through log_with_context()
        if hasattr(record, 'context'):
            log_data.update(record.context)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def resolve_level(level_str: Optional[str] = None) -> int:
    """
    Convert a level name to a numeric level.

    Args:
        level_str: Level name; falls back to IGNOREFILTER_LOG_LEVEL, then
            LOG_LEVEL, then WARNING

    Returns:
        Numeric logging level (unknown names map to WARNING)
    """
    level_str = level_str or os.environ.get(ENV_LOG_LEVEL) or os.environ.get('LOG_LEVEL', DEFAULT_LEVEL)
    if level_str.upper() == 'TRACE':
        return TRACE_LEVEL
    level = getattr(logging, level_str.upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def in_docker() -> bool:
    return (
        os.path.exists('/.dockerenv') or
        os.environ.get('DOCKER_CONTAINER', '').lower() == 'true'
    )


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure logging based on environment.

    Args:
        log_level: Override log level (defaults to IGNOREFILTER_LOG_LEVEL/LOG_LEVEL or WARNING)
        log_file: Optional path of a rotating log file, in addition to stderr
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
    """
    add_trace_to_logger()
    level = resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    if in_docker():
        handler.setFormatter(DockerFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)

    logger = logging.getLogger('ignorefilter')
    logger.debug(f"Logging configured - Level: {logging.getLevelName(level)}, Docker: {in_docker()}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (e.g., logging.INFO)
        message: Log message
        **context: Additional fields to include in structured logs
    """
    extra = {'context': context} if context else {}
    logger.log(level, message, extra=extra)
