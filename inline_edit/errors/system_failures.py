"""
System failure error classifications for unrecoverable errors.

These exceptions represent programming errors in the controller or misuse of
its collaborators and are not converted into widget states.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class StateTransitionError(SystemFailureError):
    """Transition outside the allowed lifecycle graph."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class TimerServiceError(SystemFailureError):
    """Invalid timer request or use of a closed timer service."""

    def __init__(self, message: str, duration_ms: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.duration_ms = duration_ms
