"""
LoggerRegistry: process-wide logger cache.

One logger per (sink family, identifier). The first request for an
identifier builds the logger; every later request, from any thread, gets
that same instance. Nothing is ever evicted.

Options and file handles passed after the first construction of an
identifier are ignored.
"""

from __future__ import annotations

import logging
import threading
from typing import IO, Callable, Optional, Sequence

from pydantic import ValidationError

from .config import LoggingSettings, Settings
from .core import Logger, NoOpLogger
from .levels import resolve_level
from .options import BuildContext, Option, apply_options
from .sinks import ConsoleSink, FileSink

_log = logging.getLogger(__name__)

ConsoleFactory = Callable[["LoggerRegistry", str, Sequence[Option]], Logger]
FileFactory = Callable[["LoggerRegistry", Optional[IO[str]], str], Logger]


def build_console_logger(registry: LoggerRegistry, identifier: str, options: Sequence[Option]) -> Logger:
    """Resolve the level, apply options in order and bind a console sink."""
    settings = Settings()
    try:
        layout = settings.logging
    except ValidationError as exc:
        _log.debug("invalid console layout settings, using defaults: %s", exc)
        layout = LoggingSettings.model_construct()
    ctx = apply_options(BuildContext(identifier=identifier, level=resolve_level(identifier)), options)
    sink = ConsoleSink(
        ctx,
        dev=settings.environment.is_dev,
        level_width=layout.console_level_width,
        separator=layout.console_separator,
    )
    return Logger(sink, ctx.level, registry=registry, options=options)


def build_file_logger(registry: LoggerRegistry, file: IO[str] | None, identifier: str) -> Logger:
    sink = FileSink(file, identifier)
    return Logger(sink, resolve_level(identifier), registry=registry)


class LoggerRegistry:
    """Identifier-keyed logger cache, one lock per sink family.

    Args:
        console_factory: Builds console loggers (default: ``build_console_logger``)
        file_factory: Builds file loggers (default: ``build_file_logger``)
    """

    def __init__(
        self,
        console_factory: ConsoleFactory = build_console_logger,
        file_factory: FileFactory = build_file_logger,
    ):
        self._console_factory = console_factory
        self._file_factory = file_factory
        self._console: dict[str, Logger] = {}
        self._files: dict[str, Logger] = {}
        self._console_lock = threading.Lock()
        self._file_lock = threading.Lock()
        self._noop = NoOpLogger()

    def get_logger(self, identifier: str, *options: Option) -> Logger:
        """Console logger for ``identifier``."""
        logger = self._console.get(identifier)
        if logger is not None:
            return logger
        with self._console_lock:
            logger = self._console.get(identifier)
            if logger is None:
                logger = self._console_factory(self, identifier, options)
                self._console[identifier] = logger
            return logger

    def get_file_logger(self, file: IO[str] | None, identifier: str) -> Logger:
        """File logger for ``identifier`` writing to the caller-owned ``file``."""
        logger = self._files.get(identifier)
        if logger is not None:
            return logger
        with self._file_lock:
            logger = self._files.get(identifier)
            if logger is None:
                logger = self._file_factory(self, file, identifier)
                self._files[identifier] = logger
            return logger

    def get_noop_logger(self) -> Logger:
        return self._noop

    def identifiers(self, family: str = "console") -> list[str]:
        """Identifiers cached for a sink family ('console' or 'file')."""
        if family == "console":
            return list(self._console)
        if family == "file":
            return list(self._files)
        raise ValueError(f"Unknown sink family: {family}. Supported: ['console', 'file']")


# Module-level singleton
_registry_instance: LoggerRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> LoggerRegistry:
    """Process-wide registry, created on first use."""
    global _registry_instance

    registry = _registry_instance
    if registry is None:
        with _registry_lock:
            if _registry_instance is None:
                _registry_instance = LoggerRegistry()
            registry = _registry_instance
    return registry


def reset_registry() -> None:
    """Drop the process-wide registry (for tests)."""
    global _registry_instance
    with _registry_lock:
        _registry_instance = None


def get_logger(identifier: str, *options: Option) -> Logger:
    """Get the console logger for ``identifier``."""
    return get_registry().get_logger(identifier, *options)


def get_file_logger(file: IO[str] | None, identifier: str) -> Logger:
    """Get the file logger for ``identifier``; ``file`` stays owned by the caller."""
    return get_registry().get_file_logger(file, identifier)


def get_noop_logger() -> Logger:
    """Get a logger that discards everything."""
    return get_registry().get_noop_logger()


__all__ = [
    "LoggerRegistry",
    "build_console_logger",
    "build_file_logger",
    "get_registry",
    "reset_registry",
    "get_logger",
    "get_file_logger",
    "get_noop_logger",
]
