"""
Recovery strategy classifications for error handling.

Recoverable errors never leave the controller; they are turned into a
transient ERROR state that heals itself after the error display duration.
"""

from typing import Any, Optional


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from automatically."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class CommitFailedError(RecoverableError):
    """The host commit callback raised instead of returning."""

    def __init__(self, message: str, value: Any = None,
                 cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.value = value
        self.cause = cause
