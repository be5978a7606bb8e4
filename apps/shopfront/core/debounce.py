"""Cancellable delayed callbacks on the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional


class Debouncer:
    """Runs only the most recently scheduled callback once ``delay`` passes quietly.

    Scheduling again before the timer fires cancels the pending callback.
    Must be used from a thread running an asyncio loop.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._callback: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._callback = callback
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def flush(self) -> bool:
        """Run the pending callback now; returns False when nothing was pending."""
        callback = self._callback
        if callback is None:
            return False
        self.cancel()
        callback()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
