"""Tests for logging integration in the controller and state machine components."""

import structlog
from unittest.mock import Mock

from inline_edit.controller import InlineEditController
from inline_edit.logging.config import (
    configure_logging, get_state_logger, log_event_ignored, log_state_transition
)
from inline_edit.state.models import CommitMode, EditorConfig, EventType, TimerKind, WidgetEvent
from inline_edit.timers import ManualTimerService


class TestLoggingIntegration:
    """Test log output for transitions and ignored events."""

    def setup_method(self):
        """Build a controller whose loggers are captured."""
        self.log_messages = []
        self.timers = ManualTimerService()
        self.controller = InlineEditController(
            "Alice",
            config=EditorConfig(mode=CommitMode.PESSIMISTIC),
            timer_service=self.timers,
            widget_id="logged",
        )

        def capture(level):
            def record(message, **kwargs):
                self.log_messages.append({'message': message, 'level': level, 'kwargs': kwargs})
            return record

        self.controller_logger = Mock()
        for level in ("debug", "info", "error", "exception"):
            setattr(self.controller_logger, level, capture(level))
        self.controller.logger = self.controller_logger
        self.controller.transition_handler.logger = Mock()

    def teardown_method(self):
        self.controller.dispose()

    def test_transitions_logged_with_trigger(self):
        self.controller.activate()
        self.controller.change("Bob")
        self.controller.confirm()

        bind_calls = self.controller.transition_handler.logger.bind.call_args_list
        triggers = [call.kwargs["trigger"] for call in bind_calls]
        assert triggers == ["activate", "commit_pessimistic"]
        assert bind_calls[1].kwargs["to_state"] == "pending"

    def test_ignored_event_logged_with_reason(self):
        self.controller.confirm()

        ignored = [m for m in self.log_messages if m['message'] == "Event ignored"]
        assert len(ignored) == 1
        assert ignored[0]['level'] == "debug"
        assert ignored[0]['kwargs']['event_type'] == "confirm"
        assert ignored[0]['kwargs']['reason'] == "not_handled_in_state"

    def test_stale_timer_logged(self):
        self.controller.send(WidgetEvent(EventType.TIMER_EXPIRED, timer_kind=TimerKind.SAVE_TIMEOUT, ticket=42))

        ignored = [m for m in self.log_messages if m['message'] == "Event ignored"]
        assert ignored[0]['kwargs']['reason'] == "stale_timer"

    def test_commit_failure_logged_as_error(self):
        self.controller.commit_adapter.callback = Mock(side_effect=OSError("unreachable"))
        self.controller.activate()
        self.controller.change("Bob")
        self.controller.confirm()

        errors = [m for m in self.log_messages if m['level'] == "error"]
        assert errors[0]['message'] == "Commit attempt failed"
        assert "unreachable" in errors[0]['kwargs']['error']
        assert errors[0]['kwargs']['failures'] == 1

    def test_dispose_logs_adapter_counters(self):
        self.controller.activate()
        self.controller.change("Bob")
        self.controller.confirm()
        self.controller.dispose()

        disposed = [m for m in self.log_messages if m['message'] == "Inline edit controller disposed"]
        assert disposed[0]['kwargs']['commit_attempts'] == 1
        assert disposed[0]['kwargs']['commit_failures'] == 0
        assert disposed[0]['kwargs']['validations'] == 0

    def test_listener_failure_logged(self):
        self.controller.subscribe(Mock(side_effect=KeyError("x")))
        self.controller.activate()

        failures = [m for m in self.log_messages if m['level'] == "exception"]
        assert failures[0]['message'] == "Snapshot listener raised"
        assert failures[0]['kwargs']['state'] == "edit"


class TestLoggingHelpers:
    """Test the logging helper functions."""

    def test_log_state_transition_without_context(self):
        logger = Mock()

        log_state_transition(logger, "w1", "view", "edit", "activate")

        bound = logger.bind.return_value
        bound.bind.assert_not_called()
        bound.info.assert_called_once_with("State transition")

    def test_log_event_ignored(self):
        logger = Mock()

        log_event_ignored(logger, "w1", "disabled", "activate", "not_handled_in_state")

        logger.debug.assert_called_once_with(
            "Event ignored",
            widget_id="w1",
            state="disabled",
            event_type="activate",
            reason="not_handled_in_state"
        )

    def test_configure_logging_json(self):
        try:
            configure_logging(level="DEBUG", format_json=True, include_caller=True)
            assert structlog.is_configured()
            assert get_state_logger("tests") is not None
        finally:
            structlog.reset_defaults()
