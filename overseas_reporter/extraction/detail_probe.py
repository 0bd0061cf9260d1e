"""
Detail Probe Resolver

Recovers fields an item card doesn't show by clicking the card, reading
the detail overlay it opens, and closing the overlay again.

The overlay is an explicit dialog (role="dialog", aria-modal) or, failing
that, the largest newly visible block whose text carries both a price and
a stock label. The close attempt always runs once an overlay was found,
so the next probe starts from a clean page.
"""

from __future__ import annotations

import asyncio
import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

from ..common.dom_utils import (
    HEADING_SELECTOR,
    INTERACTIVE_SELECTOR,
    is_visible,
    visible_lines,
    visible_text,
)
from ..common.text_utils import MONEY_PATTERN, is_plausible_name, normalize_text, parse_money
from ..models import ItemRecord, make_item
from .page import PageHost
from .parsers.loose_scanner import Candidate, parse_stock

logger = logging.getLogger(__name__)

MODAL_SELECTOR = "[role='dialog'], [role='alertdialog'], [aria-modal='true'], dialog[open]"

BLOCK_SELECTOR = "div, section, aside, article, dialog"

STOCK_LABEL_PATTERN = re.compile(r'\b(?:stock|available|in stock)\b', re.IGNORECASE)

CLOSE_LABELS = {"×", "✕", "✖", "x", "close", "cancel", "back"}

# Overlay chrome that is never an item name
UI_WORDS = {"close", "cancel", "back", "buy", "ok", "details", "info"}


class DetailProbeResolver:
    """
    Opens, reads and closes item detail overlays.

    Usage:
        probe = DetailProbeResolver(host)
        item = await probe.resolve(candidate)
    """

    def __init__(
        self,
        host: PageHost,
        poll_attempts: int = 12,
        poll_interval: float = 0.1,
        settle_delay: float = 0.15,
        pace_every: int = 3,
        pace_pause: float = 0.25,
        overlay_min_chars: int = 10,
        overlay_max_chars: int = 2000,
        label_vocabulary: Iterable[str] = (),
    ):
        """
        Initialize the resolver.

        Args:
            host: Page host used to click and dismiss
            poll_attempts: Overlay lookups before giving up on a candidate
            poll_interval: Seconds between overlay lookups
            settle_delay: Seconds to wait after closing an overlay
            pace_every: Pause after this many completed probes (0 = never)
            pace_pause: Seconds to pause when pacing
            overlay_min_chars: Smallest text length of a fallback overlay block
            overlay_max_chars: Largest text length of a fallback overlay block
            label_vocabulary: Extra words never accepted as an item name
        """
        self.host = host
        self.poll_attempts = poll_attempts
        self.poll_interval = poll_interval
        self.settle_delay = settle_delay
        self.pace_every = pace_every
        self.pace_pause = pace_pause
        self.overlay_min_chars = overlay_min_chars
        self.overlay_max_chars = overlay_max_chars
        self.ignored_names = UI_WORDS | {w.lower() for w in label_vocabulary}
        self.probes_completed = 0

    @classmethod
    def from_settings(
        cls,
        host: PageHost,
        probe_settings: Dict,
        label_vocabulary: Iterable[str] = (),
    ) -> "DetailProbeResolver":
        """Build a resolver from the 'probe' section of settings.yaml."""
        return cls(
            host,
            poll_attempts=probe_settings.get("poll_attempts", 12),
            poll_interval=probe_settings.get("poll_interval", 0.1),
            settle_delay=probe_settings.get("settle_delay", 0.15),
            pace_every=probe_settings.get("pace_every", 3),
            pace_pause=probe_settings.get("pace_pause", 0.25),
            overlay_min_chars=probe_settings.get("overlay_min_chars", 10),
            overlay_max_chars=probe_settings.get("overlay_max_chars", 2000),
            label_vocabulary=label_vocabulary,
        )

    async def resolve(self, candidate: Candidate) -> Optional[ItemRecord]:
        """
        Probe one candidate.

        Returns:
            Record read from the overlay, or None on timeout or missing fields
        """
        async with self.opened_overlay(candidate.element) as overlay:
            item = self.read_overlay(overlay, candidate.shop) if overlay is not None else None

        self.probes_completed += 1
        if self.pace_every and self.probes_completed % self.pace_every == 0:
            await asyncio.sleep(self.pace_pause)

        if item is None:
            logger.debug("Probe gave nothing for %r", candidate.text[:60])
        return item

    @asynccontextmanager
    async def opened_overlay(self, element: Tag) -> AsyncIterator[Optional[Tag]]:
        """
        Click element and yield the overlay it opens (None on timeout).

        The overlay is closed on exit even if reading it failed. After a
        timeout the host is still dismissed, so an overlay that opens late
        does not linger into the next probe.
        """
        soup = self.host.document
        # Keep references so ids of existing elements cannot be recycled
        existing = self._overlay_pool(soup, element)
        existing_ids = {id(el) for el in existing}

        overlay = None
        if self.host.activate(element):
            overlay = await self._wait_for_overlay(existing_ids, element)
            if overlay is None:
                self.host.dismiss()
                await asyncio.sleep(self.settle_delay)
        else:
            logger.debug("Host refused to activate <%s>", element.name)

        try:
            yield overlay
        finally:
            if overlay is not None:
                await self.close_overlay(overlay)

    async def _wait_for_overlay(self, existing_ids: set, element: Tag) -> Optional[Tag]:
        for _ in range(self.poll_attempts):
            await asyncio.sleep(self.poll_interval)
            overlay = self.find_overlay(self.host.document, existing_ids, element)
            if overlay is not None:
                return overlay

        logger.debug("No overlay after %d attempts", self.poll_attempts)
        return None

    def find_overlay(
        self,
        soup: BeautifulSoup,
        existing_ids: set,
        element: Optional[Tag] = None,
    ) -> Optional[Tag]:
        """Newly visible overlay: an explicit dialog first, else the largest qualifying block."""
        for modal in soup.select(MODAL_SELECTOR):
            if id(modal) not in existing_ids and is_visible(modal) and visible_text(modal):
                return modal

        blocks = [
            block for block in self._fallback_blocks(soup, element)
            if id(block) not in existing_ids
        ]
        if not blocks:
            return None
        return max(blocks, key=lambda block: len(visible_text(block)))

    def _overlay_pool(self, soup: BeautifulSoup, element: Optional[Tag]) -> List[Tag]:
        """Everything that would qualify as an overlay right now."""
        modals = [m for m in soup.select(MODAL_SELECTOR) if is_visible(m)]
        return modals + self._fallback_blocks(soup, element)

    def _fallback_blocks(self, soup: BeautifulSoup, element: Optional[Tag]) -> List[Tag]:
        blocks = []
        for block in soup.select(BLOCK_SELECTOR):
            if element is not None and (block is element or self._contains(block, element)):
                continue
            if not is_visible(block):
                continue
            text = visible_text(block)
            if not self.overlay_min_chars <= len(text) <= self.overlay_max_chars:
                continue
            if MONEY_PATTERN.search(text) and STOCK_LABEL_PATTERN.search(text):
                blocks.append(block)
        return blocks

    @staticmethod
    def _contains(block: Tag, element: Tag) -> bool:
        return any(parent is block for parent in element.parents)

    def read_overlay(self, overlay: Tag, shop: str) -> Optional[ItemRecord]:
        """Extract name, cost and stock from an open overlay."""
        text = visible_text(overlay)
        return make_item(
            name=self._overlay_name(overlay),
            unit_cost=parse_money(text),
            stock=parse_stock(text),
            shop=shop,
        )

    def _overlay_name(self, overlay: Tag) -> Optional[str]:
        for heading in overlay.select(HEADING_SELECTOR):
            name = visible_text(heading)
            if self._acceptable_name(name):
                return name

        for line in visible_lines(overlay):
            if self._acceptable_name(line):
                return line
        return None

    def _acceptable_name(self, text: str) -> bool:
        return is_plausible_name(text) and normalize_text(text).lower() not in self.ignored_names

    async def close_overlay(self, overlay: Tag) -> None:
        """Click the overlay's close control, or dismiss via the backdrop, then settle."""
        control = self._find_close_control(overlay)
        closed = control is not None and self.host.activate(control)
        if not closed:
            self.host.dismiss()
        await asyncio.sleep(self.settle_delay)

    @staticmethod
    def _find_close_control(overlay: Tag) -> Optional[Tag]:
        for control in overlay.select(INTERACTIVE_SELECTOR):
            label = " ".join([
                str(control.get('aria-label', '')),
                str(control.get('title', '')),
                " ".join(control.get('class', [])),
            ]).lower()
            if 'close' in label or visible_text(control).lower() in CLOSE_LABELS:
                return control
        return None
