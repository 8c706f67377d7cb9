# src/gotestadapter/runtime/cancellation.py

"""
Cooperative cancellation for a test run.
"""

import asyncio

from gotestadapter.exceptions import RunCancelledError


class CancellationToken:
    """Set once by `cancel()`; checked by the engine and the process runner."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RunCancelledError("Test run was cancelled.")

    async def wait(self) -> None:
        await self._event.wait()
