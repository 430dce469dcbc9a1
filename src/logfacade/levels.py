"""
Severity levels and the level resolver.

A logger's effective level comes from the environment:

    LOGGING_LEVEL_<ID>   per-identifier override (ID uppercased, '-' -> '_')
    LOGGING_LEVEL_ROOT   fallback for every identifier
    INFO                 built-in default

Resolution never fails: blank, missing and unreadable values all end at INFO.
"""

from __future__ import annotations

import logging
import os
from enum import IntEnum

from .config import LEVEL_ENV_PREFIX, LevelSettings

_log = logging.getLogger(__name__)


class Level(IntEnum):
    """Ordered severities plus the UNSET and OFF sentinels."""

    UNSET = 0
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60
    OFF = 100

    @property
    def label(self) -> str:
        """Rendered name, as reported by ``Logger.get_level``."""
        return _LABELS[self]

    @property
    def abbr(self) -> str:
        """Three-letter abbreviation used by the file sink."""
        return _ABBREVIATIONS.get(self, "NON")

    def effective(self) -> Level:
        return Level.INFO if self is Level.UNSET else self


# Severities that have an emission method, lowest first.
SEVERITIES: tuple[Level, ...] = (
    Level.TRACE,
    Level.DEBUG,
    Level.INFO,
    Level.WARNING,
    Level.ERROR,
    Level.FATAL,
    Level.PANIC,
)

_LABELS = {
    Level.UNSET: "",
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARNING: "warn",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
    Level.OFF: "off",
}

_ABBREVIATIONS = {
    Level.TRACE: "TRC",
    Level.DEBUG: "DBG",
    Level.INFO: "INF",
    Level.WARNING: "WRN",
    Level.ERROR: "ERR",
    Level.FATAL: "FAT",
    Level.PANIC: "PNC",
}

_BY_NAME = {label: level for level, label in _LABELS.items() if label}


def parse_level(value: str | None) -> Level | None:
    """Parse a textual level (case-insensitive). Returns None when unrecognized."""
    if value is None:
        return None
    return _BY_NAME.get(value.strip().lower())


def level_env_key(identifier: str) -> str:
    """Environment key holding the level override for ``identifier``."""
    return LEVEL_ENV_PREFIX + identifier.replace("-", "_").upper()


def configured_level(identifier: str) -> str:
    """Raw configured value for ``identifier``, falling back to the root key."""
    value = os.environ.get(level_env_key(identifier), "")
    if not value.strip():
        value = LevelSettings().level_root
    return value


def resolve_level(identifier: str) -> Level:
    """Effective level for ``identifier``. Never raises."""
    raw = configured_level(identifier)
    level = parse_level(raw)
    if level is None:
        if raw.strip():
            _log.debug("invalid log level %r for %r, using info", raw, identifier)
        return Level.INFO
    return level.effective()


def coerce_level(value: Level | str) -> Level:
    """Level for a runtime update.

    Accepts a ``Level``, a textual level name, or an identifier whose
    configured level should be applied.
    """
    if isinstance(value, Level):
        return value.effective()
    if not isinstance(value, str):
        _log.debug("unsupported log level %r, using info", value)
        return Level.INFO
    level = parse_level(value)
    if level is not None:
        return level.effective()
    return resolve_level(value)
