"""
Change-Gated Reporter

Decides whether an extracted batch is worth uploading and drives the
upload and status collaborators.

A batch is uploaded only when it is valid, its fingerprint differs from
the last one this process reported, and its location is not cooling down.
The last fingerprint lives in memory for the lifetime of the reporter and
is only touched here.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from ..models import ExtractionBatch
from .collector_client import CollectorClient, UploadResult
from .cooldown import CooldownStore, MemoryCooldown
from .fingerprint import batch_fingerprint
from .status import LogStatus, StatusSink

logger = logging.getLogger(__name__)


class ReportOutcome(str, Enum):
    INVALID = "invalid"
    UNCHANGED = "unchanged"
    COOLDOWN = "cooldown"
    UPLOADED = "uploaded"
    FAILED = "failed"


def format_breakdown(batch: ExtractionBatch) -> str:
    """Per-shop item counts: "General Store: 3 | Arms Dealer: 2"."""
    return " | ".join(f"{shop}: {count}" for shop, count in batch.shop_counts().items())


class ChangeGatedReporter:
    """
    Uploads batches that changed since the last report.

    Usage:
        reporter = ChangeGatedReporter(client)
        outcome = await reporter.report(batch)
    """

    def __init__(
        self,
        client: CollectorClient,
        cooldown: Optional[CooldownStore] = None,
        status: Optional[StatusSink] = None,
    ):
        self.client = client
        self.cooldown = cooldown if cooldown is not None else MemoryCooldown()
        self.status = status if status is not None else LogStatus()
        self.last_fingerprint: Optional[str] = None
        self.uploads_attempted = 0

    async def report(self, batch: ExtractionBatch) -> ReportOutcome:
        """
        Report a batch if it changed.

        Returns:
            What happened to the batch
        """
        if not batch.is_valid:
            logger.debug("Nothing to report (tier=%s)", batch.tier.value)
            return ReportOutcome.INVALID

        fingerprint = batch_fingerprint(batch)
        if fingerprint == self.last_fingerprint:
            logger.debug("%s unchanged since last report", batch.location)
            return ReportOutcome.UNCHANGED

        if self.cooldown.recently_uploaded(batch.location):
            logger.info("%s uploaded recently, waiting for cooldown", batch.location)
            return ReportOutcome.COOLDOWN

        previous = self.last_fingerprint
        self.last_fingerprint = fingerprint

        self.status.show(f"Uploading… {len(batch.items)} items for {batch.location}")
        self.uploads_attempted += 1
        result: UploadResult = await asyncio.to_thread(
            self.client.submit, batch.location, batch.items,
        )

        if not result.ok:
            # Roll back so the next pass retries the same data
            self.last_fingerprint = previous
            self.status.show(f"Upload Failed {result.error}")
            return ReportOutcome.FAILED

        self.cooldown.mark_uploaded(batch.location)
        self.status.show(f"Uploaded ✓ {result.items_sent} items\n{format_breakdown(batch)}")
        return ReportOutcome.UPLOADED
