"""Base class for single-slot timer services."""

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from ..errors import TimerServiceError
from ..logging.config import get_logger


class BaseTimerService(ABC):
    """
    Schedules at most one delayed callback at a time.

    Arming again, or cancelling, discards the previous schedule without
    invoking its callback. A natural expiry invokes the callback exactly once.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = get_logger(f"inline_edit.timers.{name}")
        self._lock = threading.Lock()
        self._ticket = 0
        self._armed_ticket: Optional[int] = None
        self._handle: Any = None
        self._closed = False

    @abstractmethod
    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """Schedule callback after delay_ms and return a backend handle."""
        pass

    @abstractmethod
    def _unschedule(self, handle: Any) -> None:
        """Discard a handle returned by _schedule."""
        pass

    def arm(self, duration_ms: int, on_fire: Callable[[], None]) -> int:
        """
        Schedule on_fire after duration_ms, replacing any pending timer.

        Args:
            duration_ms: Delay in milliseconds (zero fires on the next tick)
            on_fire: Callback invoked once on natural expiry

        Returns:
            Ticket identifying this schedule
        """
        if self._closed:
            raise TimerServiceError(f"Timer service '{self.name}' is closed", duration_ms=duration_ms)
        if not isinstance(duration_ms, int) or isinstance(duration_ms, bool) or duration_ms < 0:
            raise TimerServiceError("Timer duration must be a non-negative integer", duration_ms=duration_ms)

        with self._lock:
            self._discard_locked()
            self._ticket += 1
            ticket = self._ticket
            self._armed_ticket = ticket

        handle = self._schedule(duration_ms, lambda: self._fire(ticket, on_fire))

        with self._lock:
            # A zero-delay backend may already have fired
            if self._armed_ticket == ticket:
                self._handle = handle

        self.logger.debug("Timer armed", service=self.name, ticket=ticket, duration_ms=duration_ms)
        return ticket

    def cancel(self) -> None:
        """Discard the pending timer, if any."""
        with self._lock:
            ticket = self._armed_ticket
            self._discard_locked()
        if ticket is not None:
            self.logger.debug("Timer cancelled", service=self.name, ticket=ticket)

    def close(self) -> None:
        """Cancel the pending timer and refuse further arming."""
        self.cancel()
        self._closed = True

    @property
    def pending(self) -> bool:
        return self._armed_ticket is not None

    @property
    def armed_ticket(self) -> Optional[int]:
        return self._armed_ticket

    def _discard_locked(self) -> None:
        if self._handle is not None:
            self._unschedule(self._handle)
        self._handle = None
        self._armed_ticket = None

    def _fire(self, ticket: int, on_fire: Callable[[], None]) -> None:
        with self._lock:
            if ticket != self._armed_ticket:
                return
            self._armed_ticket = None
            self._handle = None
        on_fire()
