"""Settings and logging for ScriptBoard.

Modules get their logger through :func:`get_logger`; the first call
configures structlog from the active settings, so importing a module never
depends on logging having been set up by the CLI.
"""

from __future__ import annotations

from typing import Any

from scriptboard.config.logging import configure_logging
from scriptboard.config.logging import get_logger as _structlog_logger
from scriptboard.config.settings import (
    BUILTIN_COLUMNS,
    ScriptBoardSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

__all__ = [
    "BUILTIN_COLUMNS",
    "ScriptBoardSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "get_settings_for_cli",
    "reset_settings",
    "set_settings",
]

_configured = False
_loggers: dict[str, Any] = {}


def get_logger(name: str) -> Any:
    """Logger for a ScriptBoard module, configuring logging on first use."""
    global _configured
    logger = _loggers.get(name)
    if logger is None:
        if not _configured:
            configure_logging(get_settings())
            _configured = True
        logger = _loggers[name] = _structlog_logger(name)
    return logger


def reset_settings() -> None:
    """Forget cached settings and loggers so the next use reconfigures."""
    global _configured
    clear_settings_cache()
    _configured = False
    _loggers.clear()
