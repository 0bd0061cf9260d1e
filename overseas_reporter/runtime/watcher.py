"""
Shop Watcher

Wires a page host to the extraction orchestrator and the reporter:
waits for the shop to render, runs a first pass, then re-runs a pass
after each burst of page mutations.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from ..extraction import ExtractionOrchestrator, PageHost
from ..reporting import ChangeGatedReporter, ReportOutcome
from .scheduler import PassScheduler

logger = logging.getLogger(__name__)


class ShopWatcher:
    """
    Keeps the collector up to date with the shop page.

    Usage:
        watcher = ShopWatcher.from_settings(host, reporter, settings)
        await watcher.start()
        ...
        watcher.stop()
    """

    def __init__(
        self,
        host: PageHost,
        orchestrator: ExtractionOrchestrator,
        reporter: ChangeGatedReporter,
        debounce_delay: float = 0.5,
        ready_attempts: int = 20,
        ready_interval: float = 0.3,
    ):
        self.host = host
        self.orchestrator = orchestrator
        self.reporter = reporter
        self.ready_attempts = ready_attempts
        self.ready_interval = ready_interval
        self.scheduler = PassScheduler(self.run_pass, debounce_delay=debounce_delay)
        self.last_outcome: Optional[ReportOutcome] = None

    @classmethod
    def from_settings(
        cls,
        host: PageHost,
        reporter: ChangeGatedReporter,
        settings: Dict[str, Dict[str, Any]],
    ) -> "ShopWatcher":
        """Build a watcher and its orchestrator from settings sections."""
        scheduler_settings = settings["scheduler"]
        return cls(
            host,
            ExtractionOrchestrator(host, settings=settings),
            reporter,
            debounce_delay=scheduler_settings.get("debounce_delay", 0.5),
            ready_attempts=scheduler_settings.get("ready_attempts", 20),
            ready_interval=scheduler_settings.get("ready_interval", 0.3),
        )

    async def run_pass(self) -> ReportOutcome:
        """Extract once and hand the batch to the reporter."""
        batch = await self.orchestrator.run()
        self.last_outcome = await self.reporter.report(batch)
        logger.debug("Pass finished: %s", self.last_outcome.value)
        return self.last_outcome

    async def wait_until_ready(self) -> bool:
        """Poll until the shop has rendered; False if it never did."""
        for _ in range(self.ready_attempts):
            if self.orchestrator.page_ready():
                return True
            await asyncio.sleep(self.ready_interval)
        logger.info("Shop not rendered after %d checks", self.ready_attempts)
        return False

    async def start(self) -> None:
        """Subscribe to page changes and run the first pass."""
        await self.wait_until_ready()
        self.host.subscribe(self.scheduler.notify)
        await self.scheduler.run_now()

    def stop(self) -> None:
        self.scheduler.close()
