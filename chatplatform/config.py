"""Environment-driven configuration for the chat platform.

Settings are read lazily from environment variables. Malformed values never
raise; callers receive the documented defaults instead.
"""

from __future__ import annotations

import os

from chatplatform.logging import configure_logging

LOG_LEVEL_ENV = "CHATPLATFORM_LOG_LEVEL"
DEEPSEEK_MODELS_ENV = "CHATPLATFORM_DEEPSEEK_MODELS"


def _parse_name_list(value: str | None) -> tuple[str, ...]:
    """Parse a comma-separated list of names.

    Blank entries are dropped and duplicates keep their first position.
    """
    if value is None:
        return ()
    names: list[str] = []
    for candidate in value.split(","):
        name = candidate.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)


def deepseek_model_names_from_environment() -> tuple[str, ...]:
    """Return extra DeepSeek model names registered via the environment."""
    return _parse_name_list(os.getenv(DEEPSEEK_MODELS_ENV))


def configure_logging_from_environment(*, force: bool = False) -> tuple[str, bool]:
    """Configure logging using ``CHATPLATFORM_LOG_LEVEL``.

    Returns
    -------
    tuple[str, bool]
        ``(effective_level, used_default)`` as reported by
        ``chatplatform.logging.configure_logging``.
    """
    return configure_logging(os.getenv(LOG_LEVEL_ENV), force=force)


__all__ = [
    "DEEPSEEK_MODELS_ENV",
    "LOG_LEVEL_ENV",
    "configure_logging_from_environment",
    "deepseek_model_names_from_environment",
]
