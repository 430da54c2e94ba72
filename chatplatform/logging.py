"""Logging helpers built on femtologging.

Provider bindings log through these helpers so that level handling and
percent-style formatting stay uniform across the platform.

Examples
--------
Configure logging and emit a conversion message:

>>> level, used_default = configure_logging("DEBUG")
>>> log_debug(get_logger(__name__), "Converted %s result", "text")
"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels accepted by ``configure_logging``."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_LOG_LEVEL = LogLevel.WARNING


def normalise_level(level: str | None) -> tuple[LogLevel, bool]:
    """Resolve a requested level name.

    Parameters
    ----------
    level : str | None
        Requested level name in any case, or None.

    Returns
    -------
    tuple[LogLevel, bool]
        The resolved level and whether the default was substituted because
        the input was missing or unrecognised.
    """
    requested = level.strip().upper() if level else None
    if not requested or requested not in LogLevel.__members__:
        return (DEFAULT_LOG_LEVEL, True)
    return (LogLevel(requested), False)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging and return the effective level.

    Parameters
    ----------
    level : str | None
        Requested log level, or None to use ``DEFAULT_LOG_LEVEL``.
    force : bool, optional
        Whether to replace handlers installed by an earlier call.

    Returns
    -------
    tuple[str, bool]
        ``(effective_level, used_default)``.
    """
    normalised, used_default = normalise_level(level)
    basicConfig(level=normalised, force=force)
    return (normalised, used_default)


class _SupportsLog(typ.Protocol):
    """Structural type for femtologging loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> None: ...


def _format_message(template: str, args: tuple[object, ...]) -> str:
    return template % args if args else template


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    message: str,
    exc_info: object | None = None,
) -> None:
    logger.log(
        level,
        message,
        exc_info=exc_info,
        stack_info=False,
    )


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit a DEBUG log message."""
    _emit(logger, LogLevel.DEBUG, _format_message(template, args), exc_info=exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit a WARNING log message.

    Parameters
    ----------
    logger : _SupportsLog
        Logger instance that supports the femtologging log API.
    template : str
        Percent-style format string for the log message.
    *args : object
        Arguments interpolated into the template.
    exc_info : object | None, optional
        Exception info to attach to the log record.

    Raises
    ------
    TypeError
        If the template and arguments do not align for percent formatting.
    """
    _emit(logger, LogLevel.WARNING, _format_message(template, args), exc_info=exc_info)


__all__ = (
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_warning",
    "normalise_level",
)
