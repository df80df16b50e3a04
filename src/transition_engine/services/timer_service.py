"""
Timer Service

Thin wrapper over the asyncio event loop's timer primitives, so the
lifecycle code can be driven by a fake clock in tests.
"""

import asyncio
from typing import Any, Callable, Optional


class TimerService:
    """
    schedule-after / cancel / call-soon on an asyncio loop

    The loop is resolved lazily (running loop) unless one is given, so the
    service can be created outside of a coroutine.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Run callback after delay_ms milliseconds; returns a cancellable handle"""
        return self._get_loop().call_later(delay_ms / 1000, callback)

    def cancel(self, handle: Optional[Any]) -> None:
        """Cancel a handle. None, fired or already cancelled handles are ignored."""
        if handle is not None:
            handle.cancel()

    def call_soon(self, callback: Callable[[], None]) -> None:
        """Run callback on the next loop iteration"""
        self._get_loop().call_soon(callback)
