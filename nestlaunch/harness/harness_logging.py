"""
Harness logging configuration helpers.

Build and session output stream straight to the terminal; harness log lines
are interleaved with them, so every line is tagged with the harness version
and the `nestlaunch` logger name.
"""

from __future__ import annotations

import logging

from nestlaunch import __version__

__all__ = [
    "logging_setup",
    "logLevel_resolve",
    "logFormatWithVersion_get",
]


def logLevel_resolve(level: str) -> int:
    """
    Translate a level token into a numeric logging level.

    Args:
        level:
            Level token such as `INFO` (case-insensitive).

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If the token is not a standard logging level.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def logging_setup(level: str, log_format: str, log_file: str | None) -> None:
    """
    Configure root handlers for the harness run.

    Args:
        level:
            Effective log level token.
        log_format:
            Base formatter string.
        log_file:
            Optional log file path, appended to across runs.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logLevel_resolve(level),
        format=logFormatWithVersion_get(log_format),
        handlers=handlers,
        force=True,
    )


def logFormatWithVersion_get(log_format: str) -> str:
    """
    Inject the harness version after the timestamp token.

    Formats without `%(asctime)s` are returned unchanged.

    Args:
        log_format:
            Base formatter string.

    Returns:
        Formatter string with embedded version token.
    """
    return log_format.replace("%(asctime)s", f"%(asctime)s [nestlaunch v{__version__}]")
