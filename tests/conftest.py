"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Callable, List

from inline_edit.controller import InlineEditController
from inline_edit.state.models import CommitMode, EditorConfig
from inline_edit.timers import ManualTimerService


@pytest.fixture
def timers() -> ManualTimerService:
    """Virtual-clock timer service."""
    return ManualTimerService()


@pytest.fixture
def commits() -> List[Any]:
    """Values received by the commit callback."""
    return []


@pytest.fixture
def non_empty() -> Callable[[Any], bool]:
    """Validator rejecting empty drafts."""
    return lambda value: len(value) > 0


@pytest.fixture
def make_controller(timers, commits, non_empty) -> Callable[..., InlineEditController]:
    """Factory for controllers wired to the manual timer and recording commit callback."""
    created = []

    def factory(value: Any = "Alice", validate: Any = non_empty, **config: Any) -> InlineEditController:
        controller = InlineEditController(
            value,
            config=EditorConfig(**config),
            validate=validate,
            on_commit=commits.append,
            timer_service=timers,
            widget_id="test-widget",
        )
        created.append(controller)
        return controller

    yield factory

    for controller in created:
        controller.dispose()


@pytest.fixture
def pessimistic_config() -> EditorConfig:
    """Pessimistic configuration with short timings."""
    return EditorConfig(
        mode=CommitMode.PESSIMISTIC,
        save_timeout_ms=2000,
        saved_duration_ms=700,
        error_duration_ms=1000,
    )
