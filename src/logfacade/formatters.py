"""
Message substitution and line formatters.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from structlog.typing import EventDict

from .levels import Level

# =============================================================================
# Message Templates
# =============================================================================


def render_message(template: str, args: tuple[Any, ...]) -> str:
    """Apply printf-style ``args`` to ``template``.

    Without args the template is returned untouched, so a literal ``%`` needs
    no escaping. A mismatch raises whatever ``%`` raises.
    """
    if not args:
        return str(template)
    return template % args


# =============================================================================
# File Line Formatter
# =============================================================================

FILE_LINE_FORMAT = "%s %3s [%s] %s"
FILE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def file_timestamp(now: datetime | None = None) -> str:
    """Local time with millisecond precision: ``2024-05-01 13:45:02.117``."""
    now = now or datetime.now()
    return f"{now.strftime(FILE_TIMESTAMP_FORMAT)}.{now.microsecond // 1000:03d}"


def format_file_line(level: Level, identifier: str, message: str, now: datetime | None = None) -> str:
    return FILE_LINE_FORMAT % (file_timestamp(now), level.abbr, identifier, message)


# =============================================================================
# Developer Console Formatter
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Human-readable console rendering for dev mode.

    Every message is prefixed with ``[identifier]``. The identifier is not
    repeated among the key/value extras, and ``caller`` only shows up when
    the caller option put it into the event.
    """

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "TRACE": "\x1b[2m",
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARN": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "FATAL": "\x1b[1;31m",
        "PANIC": "\x1b[1;31m",
    }

    EXCLUDED_KEYS = {"level", "event", "logger", "timestamp", "caller"}

    def __init__(self, identifier: str, *, level_width: int = 5, separator: str = " | ", use_color: bool = False):
        self.identifier = identifier
        self.level_width = level_width
        self.separator = separator
        self.use_color = use_color

    def _maybe_color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return colorize(text, color)

    def _colorize_level(self, text: str, level_upper: str) -> str:
        color = self._LEVEL_COLORS.get(level_upper)
        if not self.use_color or not color:
            return text
        return f"{color}{text}{self._RESET}"

    def format(self, event_dict: EventDict) -> str:
        """Format an event dict into a single aligned line."""
        level_upper = str(event_dict.get("level", "")).upper()
        message = f"[{self.identifier}] {event_dict.get('event', '')}"

        extras = []
        for k, v in event_dict.items():
            if k in self.EXCLUDED_KEYS:
                continue
            extras.append(f"{self._maybe_color(k, 'key')}={self._maybe_color(str(v), 'dim')}")
        if extras:
            message = f"{message} " + " ".join(extras)

        parts = [
            self._maybe_color(str(event_dict.get("timestamp", "")), "timestamp"),
            self._colorize_level(f"{level_upper:<{self.level_width}}", level_upper),
        ]
        caller = event_dict.get("caller")
        if caller:
            parts.append(str(caller))
        parts.append(message)
        return self.separator.join(parts)

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> str:
        """structlog renderer entry point."""
        return self.format(event_dict)
