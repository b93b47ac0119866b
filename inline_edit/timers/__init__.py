"""
Timer services for delayed auto-transitions.

Each controller owns one service; a service holds at most one pending timer.
"""
from .asyncio_timer import AsyncioTimerService
from .base import BaseTimerService
from .manual import ManualTimerService
from .threaded import ThreadingTimerService

__all__ = [
    "BaseTimerService",
    "ThreadingTimerService",
    "AsyncioTimerService",
    "ManualTimerService",
]
