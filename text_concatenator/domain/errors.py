"""
Error taxonomy for reading sources.

Open failures only affect the source that caused them; read failures abort
the whole run. The severity is carried on the exception so callers can
branch on it without knowing every subclass.
"""

from enum import Enum


class Severity(str, Enum):
    """How far a source error reaches."""

    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class SourceError(Exception):
    """Base error for a single source token."""

    severity: Severity = Severity.FATAL

    def __init__(self, token: str, cause: BaseException):
        self.token = token
        self.cause = cause
        super().__init__(f"{token}: {self.reason}")

    @property
    def reason(self) -> str:
        """Human readable cause, preferring the OS error text."""
        strerror = getattr(self.cause, "strerror", None)
        if strerror:
            return strerror
        return str(self.cause)

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL


class OpenError(SourceError):
    """Raised when a source cannot be opened (missing, no permission, directory)."""

    severity = Severity.RECOVERABLE


class ReadError(SourceError):
    """Raised when pulling a line from an open source fails."""

    severity = Severity.FATAL
