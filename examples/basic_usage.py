#!/usr/bin/env python3
"""
Basic Usage Example - Inline Edit Lifecycle Controller

This script drives an inline edit controller the way a rendering surface and
a host application would. It shows how to:
- Create a controller with a validator and commit callback
- Send user gestures through the input binding
- Observe state snapshots
- Run optimistic and pessimistic commits with a virtual clock

Run: python examples/basic_usage.py
"""

from inline_edit import CommitMode, EditorConfig, InlineEditController
from inline_edit.binding import InlineEditBinding
from inline_edit.logging import configure_logging
from inline_edit.state.models import EditorSnapshot
from inline_edit.timers import ManualTimerService


def print_snapshot(snapshot: EditorSnapshot) -> None:
    """Print a compact snapshot line."""
    print(f"   [{snapshot.state.value:>8}] confirmed={snapshot.confirmed_value!r} "
          f"draft={snapshot.draft_value!r} valid={snapshot.is_valid}")


def optimistic_demo() -> None:
    print("1. Optimistic commit")
    timers = ManualTimerService()
    saved_values = []

    controller = InlineEditController(
        "Alice",
        config=EditorConfig(mode=CommitMode.OPTIMISTIC),
        validate=lambda v: len(v) > 0,
        on_commit=saved_values.append,
        timer_service=timers,
        widget_id="name",
    )
    controller.subscribe(print_snapshot)
    binding = InlineEditBinding(controller)

    binding.click()
    binding.input_changed("")
    binding.key_down("Enter")
    timers.advance(controller.config.error_duration_ms)

    binding.input_changed("Bob")
    binding.key_down("Enter")
    timers.advance(controller.config.saved_duration_ms)

    print(f"   Commit callback received: {saved_values}")
    print()


def pessimistic_demo() -> None:
    print("2. Pessimistic commit with acknowledgment")
    timers = ManualTimerService()

    controller = InlineEditController(
        "draft",
        config=EditorConfig(mode=CommitMode.PESSIMISTIC, save_timeout_ms=2000),
        timer_service=timers,
        widget_id="status",
    )
    controller.subscribe(print_snapshot)
    binding = InlineEditBinding(
        controller,
        input_type="select",
        options=[{"value": "draft", "label": "Draft"}, {"value": "live", "label": "Live"}],
    )

    binding.click()
    binding.input_changed("live")            # select auto-confirms
    timers.advance(500)
    binding.receive_value("live")            # host persisted and pushed the value
    timers.advance(controller.config.saved_duration_ms)
    print(f"   View shows: {binding.view_value()}")
    print()

    print("3. Pessimistic commit without acknowledgment")
    binding.click()
    binding.input_changed("draft")
    timers.advance(controller.config.save_timeout_ms)
    timers.advance(controller.config.error_duration_ms)
    print()


def main() -> None:
    configure_logging(level="WARNING")
    print("🚀 Inline Edit Controller Demo")
    print("=" * 40)
    optimistic_demo()
    pessimistic_demo()
    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
