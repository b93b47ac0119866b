"""
Error classification for the inline edit controller.

Recoverable errors are routed into the transient ERROR state; system failures
indicate programming errors and propagate to the caller.
"""

from .configuration import ConfigurationError, ValidationError
from .recovery import CommitFailedError, RecoverableError
from .system_failures import (
    StateTransitionError,
    SystemFailureError,
    TimerServiceError,
)

__all__ = [
    # Configuration
    "ConfigurationError",
    "ValidationError",
    # Recovery Categories
    "RecoverableError",
    "CommitFailedError",
    # System Failures
    "SystemFailureError",
    "StateTransitionError",
    "TimerServiceError",
]
