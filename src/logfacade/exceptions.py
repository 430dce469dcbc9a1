"""
Error taxonomy for the logging facade.

Configuration problems never surface here: an unreadable level is replaced by
INFO. Only write failures and the deliberate Panic escalation raise.
"""

from __future__ import annotations


class LoggingError(Exception):
    """Base class for errors raised by logfacade."""


class LogWriteError(LoggingError):
    """A sink failed to write a record. Raised once, never retried."""

    def __init__(self, path: str | None, cause: BaseException):
        self.path = path
        self.cause = cause
        target = path or "<unnamed stream>"
        super().__init__(f"failed to write log record to {target}: {cause}")


class LoggerPanic(LoggingError):
    """Raised by ``Logger.panic`` after the record has been written."""

    def __init__(self, identifier: str, message: str):
        self.identifier = identifier
        self.message = message
        super().__init__(message)
