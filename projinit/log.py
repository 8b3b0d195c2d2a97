"""Leveled terminal output for projinit."""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40


_LEVEL_BY_NAME = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "success": LogLevel.SUCCESS,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}
_DEFAULT_LEVEL = LogLevel.INFO
_configured_level: LogLevel | None = None

_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}


def _normalize_level(value: str | None) -> LogLevel:
    if not value or not value.strip():
        return _DEFAULT_LEVEL
    return _LEVEL_BY_NAME.get(value.strip().lower(), _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _normalize_level(os.environ.get("PROJINIT_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    global _configured_level
    _configured_level = _normalize_level(value)


def _console(*, stderr: bool) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=bool(os.environ.get("NO_COLOR")),
    )


def emit(level: LogLevel, message: str, *, style: str | None = None) -> None:
    if level < configured_level():
        return
    text = Text(message, style=style or _STYLES.get(level, ""))
    _console(stderr=level >= LogLevel.WARNING).print(text)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.INFO, message, style=style)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)
