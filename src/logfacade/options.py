"""
Construction options for console loggers.

An option is a value carrying a function over the ``BuildContext``. Options
are applied once, in the order given, before the logger is finalized; a later
option overwrites what an earlier one set on the same field.

    log = get_logger("billing", with_caller(), with_hook(collect), with_level("debug"))
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Iterable

from structlog.typing import EventDict

from .levels import Level, coerce_level

Hook = Callable[[Level, str, EventDict], None]

DEFAULT_CALLER_SKIP = 3


@dataclass(frozen=True)
class BuildContext:
    """Everything a sink needs to know at construction time."""

    identifier: str
    level: Level
    caller_skip: int | None = None
    hooks: tuple[Hook, ...] = field(default_factory=tuple)

    @property
    def caller_enabled(self) -> bool:
        return self.caller_skip is not None


@dataclass(frozen=True)
class Option:
    """A named transformation over ``BuildContext``."""

    name: str
    transform: Callable[[BuildContext], BuildContext]

    def __call__(self, ctx: BuildContext) -> BuildContext:
        return self.transform(ctx)


def with_caller(skip: int = DEFAULT_CALLER_SKIP) -> Option:
    """Attach the caller's ``file:line``.

    ``skip`` counts frames from the capture point inside the logger; the
    default lands on the code that called the emission method.
    """
    if skip < 0:
        raise ValueError(f"caller skip must be non-negative, got {skip}")
    return Option("caller", lambda ctx: replace(ctx, caller_skip=skip))


def with_hook(hook: Hook) -> Option:
    """Invoke ``hook(level, message, event_dict)`` synchronously for every emitted record."""
    return Option("hook", lambda ctx: replace(ctx, hooks=ctx.hooks + (hook,)))


def with_level(level: Level | str) -> Option:
    """Override the environment-resolved level."""
    resolved = coerce_level(level)
    return Option("level", lambda ctx: replace(ctx, level=resolved))


def apply_options(ctx: BuildContext, options: Iterable[Option | None]) -> BuildContext:
    for opt in options:
        if opt is not None:
            ctx = opt(ctx)
    return ctx
