"""Unit tests for timer services."""

import asyncio
import threading
import time

import pytest

from inline_edit.errors import TimerServiceError
from inline_edit.timers import AsyncioTimerService, ManualTimerService, ThreadingTimerService


class TestManualTimerService:
    """Test the virtual-clock timer."""

    def test_fires_when_due(self):
        timers = ManualTimerService()
        fired = []
        timers.arm(100, lambda: fired.append(timers.now_ms))

        assert timers.advance(99) == 0
        assert timers.advance(1) == 1
        assert fired == [100]
        assert timers.pending is False

    def test_fires_exactly_once(self):
        timers = ManualTimerService()
        fired = []
        timers.arm(10, lambda: fired.append(1))

        timers.advance(10)
        timers.advance(1000)

        assert fired == [1]

    def test_rearm_replaces_pending(self):
        timers = ManualTimerService()
        fired = []
        first = timers.arm(100, lambda: fired.append("first"))
        second = timers.arm(300, lambda: fired.append("second"))

        assert second != first
        timers.advance(299)
        assert fired == []
        timers.advance(1)
        assert fired == ["second"]

    def test_cancel_discards(self):
        timers = ManualTimerService()
        fired = []
        timers.arm(100, lambda: fired.append(1))
        timers.cancel()

        assert timers.due_ms is None
        assert timers.advance(500) == 0
        assert fired == []

    def test_cascading_timers_fire_within_one_advance(self):
        timers = ManualTimerService()
        fired = []

        def first():
            fired.append(timers.now_ms)
            timers.arm(50, lambda: fired.append(timers.now_ms))

        timers.arm(100, first)

        assert timers.advance(1000) == 2
        assert fired == [100, 150]
        assert timers.now_ms == 1000

    def test_zero_duration(self):
        timers = ManualTimerService()
        fired = []
        timers.arm(0, lambda: fired.append(1))

        assert timers.advance(0) == 1

    @pytest.mark.parametrize("duration", [-1, 1.5, "100", True])
    def test_invalid_duration_rejected(self, duration):
        timers = ManualTimerService()

        with pytest.raises(TimerServiceError) as exc_info:
            timers.arm(duration, lambda: None)

        assert exc_info.value.duration_ms == duration
        assert exc_info.value.recoverable is False

    def test_closed_service_rejects_arm(self):
        timers = ManualTimerService()
        timers.arm(100, lambda: None)
        timers.close()

        assert timers.pending is False
        with pytest.raises(TimerServiceError):
            timers.arm(100, lambda: None)


class TestThreadingTimerService:
    """Test the wall-clock timer."""

    def test_fires_on_timer_thread(self):
        timers = ThreadingTimerService()
        done = threading.Event()
        timers.arm(10, done.set)

        assert done.wait(timeout=2.0)
        assert timers.pending is False

    def test_cancelled_timer_does_not_fire(self):
        timers = ThreadingTimerService()
        fired = threading.Event()
        timers.arm(50, fired.set)
        timers.cancel()

        assert not fired.wait(timeout=0.2)

    def test_only_latest_fires(self):
        timers = ThreadingTimerService()
        calls = []
        done = threading.Event()
        timers.arm(50, lambda: calls.append("first"))

        def second():
            calls.append("second")
            done.set()

        timers.arm(20, second)

        assert done.wait(timeout=2.0)
        time.sleep(0.1)
        assert calls == ["second"]
        timers.close()


class TestAsyncioTimerService:
    """Test the event-loop timer."""

    def test_fires_on_running_loop(self):
        async def scenario():
            timers = AsyncioTimerService()
            fired = asyncio.Event()
            timers.arm(10, fired.set)
            await asyncio.wait_for(fired.wait(), timeout=2.0)
            return timers.pending

        assert asyncio.run(scenario()) is False

    def test_cancel_before_expiry(self):
        async def scenario():
            timers = AsyncioTimerService()
            fired = []
            timers.arm(20, lambda: fired.append(1))
            timers.cancel()
            await asyncio.sleep(0.1)
            return fired

        assert asyncio.run(scenario()) == []

    def test_explicit_loop(self):
        loop = asyncio.new_event_loop()
        try:
            timers = AsyncioTimerService(loop=loop)
            fired = []
            timers.arm(0, lambda: fired.append(1))
            loop.run_until_complete(asyncio.sleep(0.05))
            assert fired == [1]
        finally:
            loop.close()
