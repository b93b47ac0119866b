"""
State machine data models for the inline edit lifecycle.

This module defines immutable data structures for the controller runtime
state, the editable-value context, configuration and inbound events.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional


class EditState(str, Enum):
    """Lifecycle states of an inline edit widget."""
    DISABLED = "disabled"
    VIEW = "view"
    EDIT = "edit"
    PENDING = "pending"
    SAVED = "saved"
    ERROR = "error"


class EventType(str, Enum):
    """Events accepted by the controller."""
    ACTIVATE = "activate"
    CHANGE = "change"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    ACK = "ack"
    TIMER_EXPIRED = "timer_expired"
    PUSH_VALUE = "push_value"
    CONFIGURE = "configure"


class CommitMode(str, Enum):
    """Commit strategy."""
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"


class TimerKind(str, Enum):
    """Delayed auto-transitions, one per timed state."""
    SAVE_TIMEOUT = "save_timeout"
    SAVED_DISPLAY = "saved_display"
    ERROR_DISPLAY = "error_display"


class ErrorReason(str, Enum):
    """Why the widget entered the error state."""
    INVALID_DRAFT = "invalid_draft"
    SAVE_TIMEOUT = "save_timeout"
    COMMIT_FAILED = "commit_failed"


# Timer owned by each timed state
STATE_TIMERS: dict[EditState, TimerKind] = {
    EditState.PENDING: TimerKind.SAVE_TIMEOUT,
    EditState.SAVED: TimerKind.SAVED_DISPLAY,
    EditState.ERROR: TimerKind.ERROR_DISPLAY,
}


@dataclass(frozen=True)
class EditorConfig:
    """Controller configuration."""

    disabled: bool = False
    allow_edit_while_pending: bool = False
    mode: CommitMode = CommitMode.OPTIMISTIC

    # Durations in milliseconds
    save_timeout_ms: int = 2000                      # Wait for ACK in pessimistic mode
    saved_duration_ms: int = 700                     # Saved feedback display
    error_duration_ms: int = 1000                    # Error feedback display

    @property
    def optimistic(self) -> bool:
        return self.mode == CommitMode.OPTIMISTIC

    def duration_for(self, kind: TimerKind) -> int:
        """Get the configured duration for a timer kind."""
        if kind == TimerKind.SAVE_TIMEOUT:
            return self.save_timeout_ms
        elif kind == TimerKind.SAVED_DISPLAY:
            return self.saved_duration_ms
        return self.error_duration_ms

    def with_changes(self, **changes: Any) -> 'EditorConfig':
        """Create new config with the given fields replaced."""
        if 'mode' in changes and not isinstance(changes['mode'], CommitMode):
            changes['mode'] = CommitMode(changes['mode'])
        return replace(self, **changes)


@dataclass(frozen=True)
class EditContext:
    """Value context owned by the controller."""

    confirmed_value: Any
    draft_value: Any
    is_valid: bool = True

    def with_draft(self, draft_value: Any, is_valid: bool) -> 'EditContext':
        """Replace the draft and its validity."""
        return EditContext(
            confirmed_value=self.confirmed_value,
            draft_value=draft_value,
            is_valid=is_valid
        )

    def with_confirmed(self, confirmed_value: Any) -> 'EditContext':
        """Replace the confirmed value, keeping the draft."""
        return EditContext(
            confirmed_value=confirmed_value,
            draft_value=self.draft_value,
            is_valid=self.is_valid
        )

    def reset_to(self, confirmed_value: Any, is_valid: bool = True) -> 'EditContext':
        """Set confirmed value and mirror it into the draft."""
        return EditContext(
            confirmed_value=confirmed_value,
            draft_value=confirmed_value,
            is_valid=is_valid
        )


@dataclass(frozen=True)
class EditorRuntimeState:
    """Runtime state for a single controller instance."""

    # Core lifecycle state
    state: EditState
    context: EditContext

    # State to restore when re-enabled
    resume_state: Optional[EditState] = None

    # Populated while in ERROR
    error_reason: Optional[ErrorReason] = None

    # Pessimistic commit still awaiting its ACK or timeout
    commit_in_flight: bool = False
    in_flight_value: Any = None

    def with_state(self, new_state: EditState,
                   context: Optional[EditContext] = None,
                   error_reason: Optional[ErrorReason] = None) -> 'EditorRuntimeState':
        """Create new runtime state with updated lifecycle state."""
        return EditorRuntimeState(
            state=new_state,
            context=context if context is not None else self.context,
            resume_state=self.resume_state,
            error_reason=error_reason if new_state == EditState.ERROR else None,
            commit_in_flight=self.commit_in_flight,
            in_flight_value=self.in_flight_value
        )

    def with_context(self, context: EditContext) -> 'EditorRuntimeState':
        """Replace the context, keeping the lifecycle state."""
        return replace(self, context=context)

    def with_commit_in_flight(self, value: Any) -> 'EditorRuntimeState':
        """Record a commit whose outcome is still unknown."""
        return replace(self, commit_in_flight=True, in_flight_value=value)

    def with_commit_resolved(self) -> 'EditorRuntimeState':
        """Forget the in-flight commit once it was acknowledged or timed out."""
        return replace(self, commit_in_flight=False, in_flight_value=None)


@dataclass(frozen=True)
class WidgetEvent:
    """Inbound event funnelled into the controller queue."""

    type: EventType
    value: Any = None

    # CONFIGURE payload
    changes: Optional[dict] = None

    # TIMER_EXPIRED payload
    timer_kind: Optional[TimerKind] = None
    ticket: Optional[int] = None


@dataclass(frozen=True)
class StateTransition:
    """Represents a state machine transition result."""

    runtime: EditorRuntimeState
    trigger: str

    # Side effects for the controller to perform
    arm_timer: Optional[TimerKind] = None
    cancel_timer: bool = False
    commit_value: Any = None
    should_commit: bool = False

    # Configuration replacing the current one
    config: Optional[EditorConfig] = None

    @property
    def new_state(self) -> EditState:
        return self.runtime.state


@dataclass(frozen=True)
class EditorSnapshot:
    """Read-only view of the controller handed to the rendering layer."""

    state: EditState
    confirmed_value: Any
    draft_value: Any
    is_valid: bool
    error_reason: Optional[ErrorReason] = None

    @classmethod
    def from_runtime(cls, runtime: EditorRuntimeState) -> 'EditorSnapshot':
        return cls(
            state=runtime.state,
            confirmed_value=runtime.context.confirmed_value,
            draft_value=runtime.context.draft_value,
            is_valid=runtime.context.is_valid,
            error_reason=runtime.error_reason if runtime.state == EditState.ERROR else None
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "state": self.state.value,
            "confirmed_value": self.confirmed_value,
            "draft_value": self.draft_value,
            "is_valid": self.is_valid,
            "error_reason": self.error_reason.value if self.error_reason else None,
        }
