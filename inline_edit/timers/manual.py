"""Virtual-clock timer service driven by explicit advance() calls."""

from dataclasses import dataclass
from typing import Callable, Optional

from .base import BaseTimerService


@dataclass
class _ManualHandle:
    due_ms: int
    callback: Callable[[], None]
    cancelled: bool = False


class ManualTimerService(BaseTimerService):
    """
    Deterministic timer for hosts with their own frame loop, and for tests.

    Time only moves when advance() is called. Timers armed by a firing
    callback are honoured within the same advance() call.
    """

    def __init__(self, name: str = "manual"):
        super().__init__(name)
        self.now_ms = 0
        self._next: Optional[_ManualHandle] = None

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(due_ms=self.now_ms + delay_ms, callback=callback)
        self._next = handle
        return handle

    def _unschedule(self, handle: _ManualHandle) -> None:
        handle.cancelled = True
        if self._next is handle:
            self._next = None

    @property
    def due_ms(self) -> Optional[int]:
        """Virtual time at which the pending timer fires."""
        if self._next is None or self._next.cancelled:
            return None
        return self._next.due_ms

    def advance(self, ms: int) -> int:
        """
        Move the virtual clock forward, firing every timer that falls due.

        Returns:
            Number of callbacks fired
        """
        target = self.now_ms + ms
        fired = 0

        while self._next is not None and not self._next.cancelled and self._next.due_ms <= target:
            handle = self._next
            self._next = None
            self.now_ms = handle.due_ms
            handle.callback()
            fired += 1

        self.now_ms = target
        return fired
