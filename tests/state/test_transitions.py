"""Tests for state transition handling."""

import pytest
from unittest.mock import Mock

from inline_edit.errors import StateTransitionError
from inline_edit.state.models import (
    EditContext, EditorRuntimeState, EditState, StateTransition, TimerKind
)
from inline_edit.state.transitions import ALLOWED_TRANSITIONS, StateTransitionHandler


def runtime(state):
    return EditorRuntimeState(state=state, context=EditContext(confirmed_value="a", draft_value="a"))


class TestStateTransitionHandler:
    """Test StateTransitionHandler class."""

    def test_apply_transition_returns_new_runtime(self):
        handler = StateTransitionHandler()
        target = runtime(EditState.EDIT)
        transition = StateTransition(runtime=target, trigger="activate")

        result = handler.apply_transition(runtime(EditState.VIEW), transition, "w1")

        assert result is target
        assert handler.transition_count == 1

    def test_invalid_transition_raises(self):
        handler = StateTransitionHandler()
        transition = StateTransition(runtime=runtime(EditState.SAVED), trigger="bogus")

        with pytest.raises(StateTransitionError) as exc_info:
            handler.apply_transition(runtime(EditState.VIEW), transition, "w1")

        assert exc_info.value.current_state == "view"
        assert exc_info.value.attempted_transition == "bogus:saved"
        assert exc_info.value.recoverable is False
        assert handler.transition_count == 0

    def test_state_change_logged_as_transition(self):
        handler = StateTransitionHandler()
        handler.logger = Mock()
        transition = StateTransition(
            runtime=runtime(EditState.PENDING),
            trigger="commit_pessimistic",
            arm_timer=TimerKind.SAVE_TIMEOUT,
            should_commit=True
        )

        handler.apply_transition(runtime(EditState.EDIT), transition, "w1")

        handler.logger.bind.assert_called_once_with(
            widget_id="w1",
            from_state="edit",
            to_state="pending",
            trigger="commit_pessimistic"
        )
        bound = handler.logger.bind.return_value
        bound.bind.assert_called_once_with(context={"arm_timer": "save_timeout", "commit": True})
        bound.bind.return_value.info.assert_called_once_with("State transition")

    def test_context_update_logged_at_debug(self):
        handler = StateTransitionHandler()
        handler.logger = Mock()
        transition = StateTransition(runtime=runtime(EditState.EDIT), trigger="change")

        handler.apply_transition(runtime(EditState.EDIT), transition, "w1")

        handler.logger.debug.assert_called_once()
        handler.logger.bind.assert_not_called()


class TestAllowedTransitions:
    """Test the lifecycle graph."""

    def test_every_state_can_be_disabled(self):
        for state, targets in ALLOWED_TRANSITIONS.items():
            assert EditState.DISABLED in targets, state

    def test_disabled_can_restore_any_state(self):
        assert ALLOWED_TRANSITIONS[EditState.DISABLED] == set(EditState)

    def test_view_only_opens_editor(self):
        assert ALLOWED_TRANSITIONS[EditState.VIEW] == {EditState.VIEW, EditState.EDIT, EditState.DISABLED}
