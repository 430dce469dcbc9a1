"""
The logger facade handed to call sites.

A ``Logger`` pairs an immutable sink with a mutable effective level. The
registry hands out one instance per identifier, so a level change made
through any reference is seen by every holder of that identifier.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, Sequence

from .exceptions import LoggerPanic
from .formatters import render_message
from .levels import Level, coerce_level
from .sinks import BaseSink, NoOpSink

if TYPE_CHECKING:
    from .options import Option
    from .registry import LoggerRegistry


def _caller_location(skip: int) -> str | None:
    """``file:line`` of the frame ``skip`` levels above this function."""
    try:
        frame = sys._getframe(skip)
    except ValueError:
        return None
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


class Logger:
    """
    Level-gated facade over a sink.

    Usage:
        log = get_logger("billing")
        log.info("charged %s for %d items", customer, count)
        if log.is_debug_enabled():
            log.debug("cart: %s", expensive_dump(cart))

    Every emission method checks the level before formatting. ``panic``
    writes its record (when enabled) and then always raises ``LoggerPanic``.
    """

    def __init__(
        self,
        sink: BaseSink,
        level: Level,
        *,
        registry: LoggerRegistry | None = None,
        options: Sequence[Option] = (),
    ):
        self._sink = sink
        self._level = level.effective()
        self._registry = registry
        self._options = tuple(options)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.identifier!r} {self._sink.family} level={self.get_level()}>"

    @property
    def identifier(self) -> str:
        return self._sink.identifier

    @property
    def sink(self) -> BaseSink:
        return self._sink

    @property
    def level(self) -> Level:
        return self._level

    # =========================================================================
    # Emission
    # =========================================================================

    def _log(self, level: Level, message: str, args: tuple[Any, ...]) -> str | None:
        if level < self._level:
            return None
        rendered = render_message(message, args)
        caller = None
        if self._sink.caller_skip is not None:
            caller = _caller_location(self._sink.caller_skip)
        self._sink.emit(level, rendered, caller)
        return rendered

    def trace(self, message: str, *args: Any) -> None:
        self._log(Level.TRACE, message, args)

    def debug(self, message: str, *args: Any) -> None:
        self._log(Level.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        self._log(Level.INFO, message, args)

    def warning(self, message: str, *args: Any) -> None:
        self._log(Level.WARNING, message, args)

    def error(self, message: str, *args: Any) -> None:
        self._log(Level.ERROR, message, args)

    def fatal(self, message: str, *args: Any) -> None:
        self._log(Level.FATAL, message, args)

    def panic(self, message: str, *args: Any) -> None:
        rendered = self._log(Level.PANIC, message, args)
        if rendered is None:
            rendered = render_message(message, args)
        raise LoggerPanic(self.identifier, rendered)

    # =========================================================================
    # Predicates
    # =========================================================================

    def is_enabled(self, level: Level) -> bool:
        return level >= self._level

    def is_trace_enabled(self) -> bool:
        return self.is_enabled(Level.TRACE)

    def is_debug_enabled(self) -> bool:
        return self.is_enabled(Level.DEBUG)

    def is_info_enabled(self) -> bool:
        return self.is_enabled(Level.INFO)

    def is_warning_enabled(self) -> bool:
        return self.is_enabled(Level.WARNING)

    def is_error_enabled(self) -> bool:
        return self.is_enabled(Level.ERROR)

    def is_fatal_enabled(self) -> bool:
        return self.is_enabled(Level.FATAL)

    def is_panic_enabled(self) -> bool:
        return self.is_enabled(Level.PANIC)

    # =========================================================================
    # Level
    # =========================================================================

    def set_level(self, level: Level | str) -> Level:
        """Change the effective level for every holder of this logger.

        ``level`` is a ``Level``, a level name, or an identifier whose
        configured level is applied. Unreadable values become INFO.
        Concurrent calls are last-write-wins with no extra synchronization.
        """
        self._level = coerce_level(level)
        return self._level

    def get_level(self) -> str:
        return self._level.label

    # =========================================================================
    # Cloning
    # =========================================================================

    def clone(self, identifier: str) -> Logger:
        """Logger of the same family and options under another identifier."""
        registry = self._registry
        if registry is None:
            from .registry import get_registry

            registry = get_registry()
        return self._sink.reacquire(registry, identifier, self._options)


class NoOpLogger(Logger):
    """Structurally present, semantically disabled.

    Nothing is written, nothing is raised, every predicate is False and the
    level is pinned to OFF.
    """

    def __init__(self) -> None:
        super().__init__(NoOpSink(), Level.OFF)

    def _log(self, level: Level, message: str, args: tuple[Any, ...]) -> str | None:
        return None

    def panic(self, message: str, *args: Any) -> None:
        pass

    def is_enabled(self, level: Level) -> bool:
        return False

    def set_level(self, level: Level | str) -> Level:
        return Level.OFF

    def clone(self, identifier: str) -> Logger:
        return self
