"""
Pass Scheduler

Single-flight, trailing-debounce scheduling of extraction passes.

Change notifications re-arm one debounce timer. When it fires while a
pass is running, the run is deferred (not queued): at most one more pass
follows the current one, however many notifications arrived meanwhile.
Everything runs on one event loop, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

PassCallable = Callable[[], Awaitable[object]]


class PassScheduler:
    """
    Coalesces change notifications into extraction passes.

    Usage:
        scheduler = PassScheduler(run_pass, debounce_delay=0.5)
        host.subscribe(scheduler.notify)
        await scheduler.run_now()
    """

    def __init__(
        self,
        run_pass: PassCallable,
        debounce_delay: float = 0.5,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Args:
            run_pass: Coroutine function running one pass
            debounce_delay: Quiet period in seconds before a pass starts
            loop: Event loop to schedule on (the running loop if None)
        """
        self.run_pass = run_pass
        self.debounce_delay = debounce_delay
        self._loop = loop
        self._timer: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None
        self._in_flight = False
        self._rerun_pending = False
        self.passes_run = 0
        self.closed = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def idle(self) -> bool:
        return self._timer is None and not self._in_flight and not self._rerun_pending

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def notify(self) -> None:
        """Change notification: (re)start the debounce timer."""
        if self.closed:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._get_loop().call_later(self.debounce_delay, self._fire)

    def notify_threadsafe(self) -> None:
        """Change notification from a thread other than the loop's."""
        self._get_loop().call_soon_threadsafe(self.notify)

    def _fire(self) -> None:
        self._timer = None
        if self._in_flight:
            self._rerun_pending = True
            return
        self._in_flight = True
        self._task = self._get_loop().create_task(self._run())

    async def run_now(self) -> None:
        """Run a pass immediately unless one is already in flight."""
        if self._in_flight:
            self._rerun_pending = True
            return
        self._in_flight = True
        await self._run()

    async def _run(self) -> None:
        try:
            await self.run_pass()
        except Exception:
            logger.exception("Extraction pass crashed")
        finally:
            self._in_flight = False
            self.passes_run += 1

        if self._rerun_pending:
            self._rerun_pending = False
            self.notify()

    async def wait_idle(self, poll: float = 0.01) -> None:
        """Wait until no timer is armed and no pass is running."""
        while not self.idle:
            await asyncio.sleep(poll)

    def close(self) -> None:
        """Cancel the pending timer and ignore further notifications."""
        self.closed = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
