"""
End-to-end tests for the inline edit lifecycle.

Drive a controller through its binding the way a rendering surface and host
application would, with time supplied by the manual timer service.
"""

import threading

from inline_edit import CommitMode, EditorConfig, EditState, InlineEditController
from inline_edit.binding import InlineEditBinding
from inline_edit.config import ConfigLoader
from inline_edit.state.models import ErrorReason
from inline_edit.timers import ManualTimerService, ThreadingTimerService


class TestOptimisticLifecycle:
    """Invalid then valid edit with optimistic commit."""

    def test_invalid_then_valid_edit(self, make_controller, commits, timers):
        controller = make_controller("Alice")
        history = []
        controller.subscribe(lambda s: history.append((s.state, s.confirmed_value, s.draft_value, s.is_valid)))

        controller.activate()
        assert controller.state == EditState.EDIT
        assert controller.context.draft_value == "Alice"

        controller.change("")
        controller.confirm()
        assert controller.state == EditState.ERROR
        assert controller.context.is_valid is False

        timers.advance(1000)
        assert controller.state == EditState.EDIT
        assert controller.context.draft_value == "Alice"

        controller.change("Bob")
        controller.confirm()
        assert commits == ["Bob"]
        assert controller.context.confirmed_value == "Bob"
        assert controller.state == EditState.SAVED

        timers.advance(700)
        assert controller.state == EditState.VIEW

        assert [entry[0] for entry in history] == [
            EditState.EDIT,
            EditState.EDIT,
            EditState.ERROR,
            EditState.EDIT,
            EditState.EDIT,
            EditState.SAVED,
            EditState.VIEW,
        ]


class TestPessimisticLifecycle:
    """Confirm-or-timeout commits driven through the binding."""

    def test_host_round_trip(self, make_controller, commits, timers):
        controller = make_controller("Alice", mode=CommitMode.PESSIMISTIC)
        binding = InlineEditBinding(controller)

        binding.click()
        binding.input_changed("Bob")
        binding.key_down("Enter")
        assert controller.state == EditState.PENDING
        assert binding.view_value() == "Alice"

        timers.advance(800)
        binding.receive_value(commits[-1])

        assert controller.state == EditState.SAVED
        assert binding.view_value() == "Bob"

        timers.advance(700)
        assert controller.state == EditState.VIEW

    def test_host_never_answers(self, make_controller, commits, timers):
        controller = make_controller("Alice", mode=CommitMode.PESSIMISTIC)
        binding = InlineEditBinding(controller)

        binding.click()
        binding.input_changed("Bob")
        binding.blur()
        timers.advance(2000)

        assert controller.state == EditState.ERROR
        assert controller.snapshot().error_reason == ErrorReason.SAVE_TIMEOUT

        timers.advance(1000)
        assert binding.is_editing is True
        assert controller.context.draft_value == "Alice"

        # Retry succeeds
        binding.input_changed("Bob")
        binding.blur()
        binding.receive_value("Bob")
        assert controller.state == EditState.SAVED
        assert commits == ["Bob", "Bob"]

    def test_late_ack_after_timeout_is_absorbed(self, make_controller, timers):
        controller = make_controller("Alice", mode=CommitMode.PESSIMISTIC)
        controller.activate()
        controller.change("Bob")
        controller.confirm()
        timers.advance(2000)
        timers.advance(1000)

        controller.ack()

        assert controller.state == EditState.EDIT
        assert controller.context.confirmed_value == "Alice"


class TestProfileDrivenWidget:
    """Widgets built from the bundled YAML profiles."""

    def test_status_profile(self):
        loader = ConfigLoader.create()
        merged = loader.merge_config("status")
        config = loader.build_editor_config("status")
        timers = ManualTimerService()
        controller = InlineEditController(1, config=config, timer_service=timers, widget_id="status")
        binding = InlineEditBinding.from_config(
            controller,
            merged["input"],
            options=[{"id": 1, "name": "Open"}, {"id": 2, "name": "Closed"}],
        )

        binding.click()
        binding.input_changed(2)
        assert controller.state == EditState.PENDING

        # Profile allows re-opening the editor while the save is in flight
        binding.click()
        assert controller.state == EditState.EDIT
        binding.receive_value(2)

        assert controller.context.confirmed_value == 2
        binding.key_down("Escape")
        assert binding.view_value() == "Closed"
        controller.dispose()


class TestThreadedTimers:
    """Timer expirations delivered from a timer thread."""

    def test_saved_feedback_expires(self):
        reached_view = threading.Event()
        controller = InlineEditController(
            "Alice",
            config=EditorConfig(saved_duration_ms=20),
            timer_service=ThreadingTimerService(),
        )
        controller.subscribe(lambda s: s.state == EditState.VIEW and reached_view.set())

        controller.activate()
        controller.change("Bob")
        controller.confirm()
        assert controller.state == EditState.SAVED

        assert reached_view.wait(timeout=2.0)
        assert controller.context.confirmed_value == "Bob"
        controller.dispose()
