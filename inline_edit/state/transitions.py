"""
State transition handling for the inline edit lifecycle.

Validates transitions produced by the machine against the lifecycle graph
and logs them with a standard structure.
"""

from typing import Optional

from ..errors import StateTransitionError
from ..logging.config import get_state_logger, log_state_transition
from .models import EditorRuntimeState, EditState, StateTransition

state_logger = get_state_logger(__name__)


# Valid lifecycle moves; self-loops cover context-only updates
ALLOWED_TRANSITIONS: dict[EditState, set[EditState]] = {
    EditState.DISABLED: set(EditState),
    EditState.VIEW: {EditState.VIEW, EditState.EDIT, EditState.DISABLED},
    EditState.EDIT: {
        EditState.EDIT,
        EditState.VIEW,
        EditState.PENDING,
        EditState.SAVED,
        EditState.ERROR,
        EditState.DISABLED,
    },
    EditState.PENDING: {
        EditState.PENDING,
        EditState.SAVED,
        EditState.ERROR,
        EditState.EDIT,
        EditState.DISABLED,
    },
    EditState.SAVED: {EditState.SAVED, EditState.VIEW, EditState.DISABLED},
    EditState.ERROR: {EditState.ERROR, EditState.EDIT, EditState.VIEW, EditState.DISABLED},
}


class StateTransitionHandler:
    """Applies machine transitions with validation and logging."""

    def __init__(self):
        self.logger = state_logger
        self.transition_count = 0

    def can_transition(self, from_state: EditState, to_state: EditState) -> bool:
        """Check if a lifecycle move is allowed."""
        return to_state in ALLOWED_TRANSITIONS.get(from_state, set())

    def apply_transition(
        self,
        current: EditorRuntimeState,
        transition: StateTransition,
        widget_id: str
    ) -> EditorRuntimeState:
        """
        Validate and apply a transition.

        Raises:
            StateTransitionError: If the move is not part of the lifecycle graph
        """
        from_state = current.state
        to_state = transition.new_state

        if not self.can_transition(from_state, to_state):
            raise StateTransitionError(
                f"Invalid transition: {from_state.value} -> {to_state.value}",
                current_state=from_state.value,
                attempted_transition=f"{transition.trigger}:{to_state.value}",
                context={"widget_id": widget_id}
            )

        self.transition_count += 1

        if from_state != to_state:
            log_state_transition(
                self.logger,
                widget_id=widget_id,
                from_state=from_state.value,
                to_state=to_state.value,
                trigger=transition.trigger,
                context=self._describe(transition)
            )
        else:
            self.logger.debug(
                "Context updated",
                widget_id=widget_id,
                state=to_state.value,
                trigger=transition.trigger
            )

        return transition.runtime

    def _describe(self, transition: StateTransition) -> Optional[dict]:
        context = {}
        if transition.arm_timer:
            context["arm_timer"] = transition.arm_timer.value
        if transition.should_commit:
            context["commit"] = True
        if transition.runtime.error_reason and transition.new_state == EditState.ERROR:
            context["error_reason"] = transition.runtime.error_reason.value
        return context or None
