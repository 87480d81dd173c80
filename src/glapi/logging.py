"""Logging helpers for glapi.

The library only emits records under the ``glapi`` logger tree. Handlers are
attached by the application, or on request through ``setup_logging``.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "glapi"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SECRET_PATTERNS = [
    (re.compile(r"glpat-[a-zA-Z0-9_\-]{20,}"), "[GITLAB_TOKEN]"),  # Personal access token
    (re.compile(r"gloas-[a-zA-Z0-9_\-]{20,}"), "[GITLAB_TOKEN]"),  # OAuth application secret
    (re.compile(r"(?i)PRIVATE-TOKEN: *[a-zA-Z0-9._\-]+"), "PRIVATE-TOKEN: [REDACTED]"),
    (re.compile(r"Bearer [a-zA-Z0-9._\-]+"), "Bearer [REDACTED]"),
    (re.compile(r"private_token=[a-zA-Z0-9._\-]+"), "private_token=[REDACTED]"),
]


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    console: bool = True,
) -> logging.Logger:
    """Attach handlers to the glapi logger.

    Nothing is written to disk unless ``log_file`` is given.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to WARNING.
               Can be overridden with GLAPI_LOG_LEVEL environment variable.
        log_file: Path of a rotating log file. Its directory is created.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated files to keep.
        console: Whether to log to stderr.

    Returns:
        The root glapi logger.
    """
    if level is None:
        level = os.environ.get("GLAPI_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the glapi tree.

    Args:
        name: Component name (e.g., 'client', 'labels').
              Will be prefixed with 'glapi.'.
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 5000) -> str:
    """Truncate long output for logging."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove GitLab credentials from text.

    Args:
        text: Text that may contain tokens (request URLs, headers, error bodies).

    Returns:
        Sanitized text safe for logs and exception messages.
    """
    result = text
    for pattern, replacement in _SECRET_PATTERNS:
        result = pattern.sub(replacement, result)
    return result
