"""Wall-clock timer service backed by threading.Timer."""

import threading
from typing import Callable

from .base import BaseTimerService


class ThreadingTimerService(BaseTimerService):
    """Fires callbacks on a daemon timer thread."""

    def __init__(self, name: str = "threading"):
        super().__init__(name)

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer

    def _unschedule(self, handle: threading.Timer) -> None:
        handle.cancel()
