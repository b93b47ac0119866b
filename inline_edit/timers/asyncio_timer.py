"""Timer service for hosts running an asyncio event loop."""

import asyncio
from typing import Callable, Optional

from .base import BaseTimerService


class AsyncioTimerService(BaseTimerService):
    """
    Fires callbacks through loop.call_later.

    Must be armed and cancelled from the loop's thread. Without an explicit
    loop the running loop at arm time is used.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, name: str = "asyncio"):
        super().__init__(name)
        self._loop = loop

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)

    def _unschedule(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
