"""
Logging facade with per-identifier logger caching.

Call sites ask for a logger by identifier and never see the backend:
- console: structlog, JSON on stdout or a developer console on stderr (APP_ENV=dev)
- file: fixed single-line format on a caller-owned file handle
- noop: structurally present, semantically disabled

Levels come from LOGGING_LEVEL_<ID>, then LOGGING_LEVEL_ROOT, then INFO.

Library: structlog + orjson for the console backend, pydantic-settings for configuration.
"""

from .core import Logger, NoOpLogger
from .exceptions import LoggerPanic, LoggingError, LogWriteError
from .levels import Level, resolve_level
from .options import Option, with_caller, with_hook, with_level
from .registry import (
    LoggerRegistry,
    get_file_logger,
    get_logger,
    get_noop_logger,
    get_registry,
    reset_registry,
)

__all__ = [
    "Level",
    "Logger",
    "LoggerPanic",
    "LoggerRegistry",
    "LoggingError",
    "LogWriteError",
    "NoOpLogger",
    "Option",
    "get_file_logger",
    "get_logger",
    "get_noop_logger",
    "get_registry",
    "reset_registry",
    "resolve_level",
    "with_caller",
    "with_hook",
    "with_level",
]
