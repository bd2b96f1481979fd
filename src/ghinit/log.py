"""Levelled terminal logging for ghinit commands.

Messages at WARNING and above go to stderr; everything else goes to stdout.
The threshold comes from ``--log-level`` or ``GHINIT_LOG_LEVEL``.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LEVEL_NAMES = ("trace", "debug", "info", "success", "warning", "error")

_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_DEFAULT_LEVEL = LogLevel.INFO
_configured_level: LogLevel | None = None
_no_color_override: bool | None = None


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to a ``LogLevel``; unknown or blank names give INFO.

    Example:
        >>> parse_level(" Warn ").name
        'WARNING'
        >>> parse_level("loud").name
        'INFO'
    """
    name = (value or "").strip().lower()
    if name in LEVEL_NAMES:
        return LogLevel[name.upper()]
    return _ALIASES.get(name, _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = parse_level(os.environ.get("GHINIT_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    global _configured_level
    _configured_level = parse_level(value)


def set_no_color(value: bool) -> None:
    """Force colour output off (``True``) or defer to the environment."""
    global _no_color_override
    _no_color_override = True if value else None


def _no_color() -> bool:
    if _no_color_override is not None:
        return _no_color_override
    return bool(os.environ.get("NO_COLOR") or os.environ.get("GHINIT_NO_COLOR"))


def _emit(level: LogLevel, message: str) -> None:
    if level < configured_level():
        return
    console = Console(
        file=sys.stderr if level >= LogLevel.WARNING else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=_no_color(),
    )
    console.print(Text(message, style=_STYLES.get(level, "")))


def trace(message: str) -> None:
    _emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    _emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    _emit(LogLevel.INFO, message)


def success(message: str) -> None:
    _emit(LogLevel.SUCCESS, message)


def warning(message: str) -> None:
    _emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    _emit(LogLevel.ERROR, message)
