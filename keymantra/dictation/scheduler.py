# keymantra/dictation/scheduler.py
"""Cancellable delayed callbacks for the session controllers.

Controllers only need `call_later(delay, callback)` returning something with
`cancel()`. `AsyncioScheduler` is used by the running service;
`ManualScheduler` is driven explicitly, which keeps timer behaviour
deterministic in tests and scripted sessions.
"""
import asyncio
from typing import Callable, List, Optional


class AsyncioScheduler:
    """Schedules on the asyncio event loop. Must be called from inside a running loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualHandle:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """A clock that only moves when `advance()` is called."""

    def __init__(self):
        self.now = 0.0
        self._handles: List[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + delay, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> List[ManualHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float) -> int:
        """Moves the clock forward and runs every due callback in order.

        Returns the number of callbacks that fired.
        """
        self.now += seconds
        fired = 0
        while True:
            due = [h for h in self._handles if not h.cancelled and h.when <= self.now]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            handle.callback()
            fired += 1
        self._handles = [h for h in self._handles if not h.cancelled]
        return fired
