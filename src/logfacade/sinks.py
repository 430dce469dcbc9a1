"""
Log sink abstractions and concrete implementations.

A sink is the immutable half of a logger: where records go and how they are
rendered. The mutable half (the effective level) lives on ``Logger``.

- ConsoleSink: structlog backend, JSON to stdout or dev console to stderr
- FileSink: fixed single-line format written to a caller-owned file handle
- NoOpSink: discards everything
"""

from __future__ import annotations

import os
import sys
import threading
from abc import ABC, abstractmethod
from contextlib import nullcontext
from datetime import datetime
from typing import IO, TYPE_CHECKING, Any, ClassVar, Sequence

import orjson
import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from .exceptions import LogWriteError
from .formatters import ConsoleFormatter, format_file_line
from .levels import Level, parse_level
from .options import BuildContext, Hook, Option

if TYPE_CHECKING:
    from .core import Logger
    from .registry import LoggerRegistry


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add an RFC 3339 timestamp (local time with offset) to the event."""
    event_dict["timestamp"] = datetime.now().astimezone().isoformat(timespec="seconds")
    return event_dict


def hook_processor(hook: Hook) -> Processor:
    """Wrap a side-channel hook as a pass-through processor."""

    def run_hook(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        level = parse_level(event_dict.get("level")) or Level.UNSET
        hook(level, str(event_dict.get("event", "")), event_dict)
        return event_dict

    return run_hook


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    family: ClassVar[str]
    caller_skip: int | None = None

    def __init__(self, identifier: str):
        self.identifier = identifier

    @abstractmethod
    def emit(self, level: Level, message: str, caller: str | None = None) -> None:
        """Write one record. ``message`` is already rendered."""
        ...

    @abstractmethod
    def reacquire(self, registry: LoggerRegistry, identifier: str, options: Sequence[Option]) -> Logger:
        """Logger of the same family under ``identifier``, obtained through ``registry``."""
        ...


class ConsoleSink(BaseSink):
    """Console sink backed by a structlog bound logger.

    Args:
        ctx: Construction context after options were applied
        dev: Use the human-readable developer console on stderr
        stream: Output stream override (defaults depend on ``dev``)
    """

    family = "console"

    def __init__(
        self,
        ctx: BuildContext,
        *,
        dev: bool = False,
        stream: IO[str] | None = None,
        level_width: int = 5,
        separator: str = " | ",
    ):
        super().__init__(ctx.identifier)
        self.dev = dev
        self.caller_skip = ctx.caller_skip
        if stream is None:
            stream = sys.stderr if dev else sys.stdout
        self._stream = stream

        processors: list[Processor] = [add_timestamp]
        processors.extend(hook_processor(hook) for hook in ctx.hooks)
        if dev:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            processors.append(
                ConsoleFormatter(ctx.identifier, level_width=level_width, separator=separator, use_color=use_color)
            )
        else:
            processors.append(structlog.processors.JSONRenderer(serializer=orjson_dumps))

        self._backend = structlog.BoundLogger(
            structlog.PrintLogger(file=self._stream),
            processors=processors,
            context={"logger": ctx.identifier},
        )

    def emit(self, level: Level, message: str, caller: str | None = None) -> None:
        fields: dict[str, Any] = {"level": level.label}
        if caller is not None:
            fields["caller"] = caller
        self._backend.msg(message, **fields)

    def reacquire(self, registry: LoggerRegistry, identifier: str, options: Sequence[Option]) -> Logger:
        return registry.get_logger(identifier, *options)


# =============================================================================
# File Sink
# =============================================================================


class FileLockTable:
    """One lock per canonical file path.

    Loggers built independently on handles to the same file share a lock, so
    their lines never interleave.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    @staticmethod
    def canonical_path(file: Any) -> str | None:
        """Absolute, symlink-free path of ``file``; None if it has no usable path."""
        name = getattr(file, "name", None)
        if not isinstance(name, (str, bytes, os.PathLike)):
            return None
        try:
            return os.fsdecode(os.path.realpath(name))
        except (OSError, ValueError):
            return None

    def lock_for(self, file: Any) -> threading.Lock | None:
        path = self.canonical_path(file)
        if path is None:
            return None
        with self._guard:
            lock = self._locks.get(path)
            if lock is None:
                lock = self._locks[path] = threading.Lock()
            return lock


# Process-wide: every file sink shares one table unless given its own.
FILE_LOCKS = FileLockTable()


class FileSink(BaseSink):
    """Writes ``timestamp ABR [identifier] message`` lines to a caller-owned handle.

    The sink never opens, rotates or closes the file.
    """

    family = "file"

    def __init__(self, file: IO[str] | None, identifier: str, locks: FileLockTable | None = None):
        super().__init__(identifier)
        self._file = file
        self.path = FileLockTable.canonical_path(file)
        if locks is None:
            locks = FILE_LOCKS
        self._lock = locks.lock_for(file) if file is not None else None

    @property
    def file(self) -> IO[str] | None:
        return self._file

    @property
    def lock(self) -> threading.Lock | None:
        return self._lock

    def emit(self, level: Level, message: str, caller: str | None = None) -> None:
        if self._file is None:
            return
        line = format_file_line(level, self.identifier, message)
        with self._lock or nullcontext():
            try:
                self._file.write(line + "\n")
                self._file.flush()
            except (OSError, ValueError) as exc:
                raise LogWriteError(self.path, exc) from exc

    def reacquire(self, registry: LoggerRegistry, identifier: str, options: Sequence[Option]) -> Logger:
        return registry.get_file_logger(self._file, identifier)


# =============================================================================
# No-Op Sink
# =============================================================================


class NoOpSink(BaseSink):
    """Discards every record."""

    family = "noop"

    def __init__(self, identifier: str = "noop"):
        super().__init__(identifier)

    def emit(self, level: Level, message: str, caller: str | None = None) -> None:
        pass

    def reacquire(self, registry: LoggerRegistry, identifier: str, options: Sequence[Option]) -> Logger:
        return registry.get_noop_logger()
