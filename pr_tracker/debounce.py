from __future__ import annotations

import asyncio
from typing import Callable


class Debouncer:
    """Run a callback once a burst of ``schedule`` calls has been quiet for ``delay`` seconds.

    Holds at most one pending timer: scheduling again cancels the previous one,
    so only the last call in a burst fires.
    """

    def __init__(self, delay: float, loop: asyncio.AbstractEventLoop | None = None):
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()
