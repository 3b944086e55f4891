# =============================================================================
# lib/debounce.py - Cancellable Debounced Task
# =============================================================================
# Runs a coroutine once per pause in a stream of triggers.
#
# Every trigger() cancels the pending run and schedules a new one `delay`
# seconds later. The owner must call cancel() on teardown; after that no
# further run can fire.
#
# Usage:
#   debouncer = Debouncer(0.5, check_and_reply)
#   debouncer.trigger("sao-joao")   # each keystroke
#   ...
#   await debouncer.aclose()        # on disconnect
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Single-slot debounced scheduler bound to the running event loop."""

    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]):
        self.delay = delay
        self.callback = callback
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args: Any) -> None:
        """Cancel any pending run and schedule a fresh one."""
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self.cancel_pending()
        self._task = asyncio.get_running_loop().create_task(self._run(args))

    async def _run(self, args: tuple) -> None:
        await asyncio.sleep(self.delay)
        try:
            await self.callback(*args)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Debounced callback failed: {e}")

    def cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def aclose(self) -> None:
        """Cancel the pending run (if any) and refuse new triggers."""
        self._closed = True
        task = self._task
        self.cancel_pending()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
