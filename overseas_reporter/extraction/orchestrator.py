"""
Extraction Orchestrator

Runs one extraction pass over the live page:

    location -> strict walker -> (nothing?) loose scanner + detail probe

The first tier producing a valid batch wins. A pass that yields nothing
usable returns an empty batch tagged Tier.NONE; it is not an error.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from ..common.config_loader import load_selectors, load_settings, load_shop_config
from ..models import ExtractionBatch, ItemRecord, Tier
from .detail_probe import DetailProbeResolver
from .location import LocationResolver
from .page import PageHost
from .parsers.loose_scanner import LooseCandidateScanner
from .parsers.strict_walker import StrictSectionWalker
from .validator import BatchValidator, dedupe_items

logger = logging.getLogger(__name__)

class ExtractionOrchestrator:
    """
    Tiered extraction over a page host.

    Usage:
        orchestrator = ExtractionOrchestrator(host)
        batch = await orchestrator.run()
        if batch.is_valid:
            ...
    """

    def __init__(
        self,
        host: PageHost,
        settings: Optional[Dict[str, Dict[str, Any]]] = None,
        location_resolver: Optional[LocationResolver] = None,
        selectors: Optional[Dict[str, Any]] = None,
        shop_config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            host: Page host supplying the live document
            settings: Settings sections (loaded from settings.yaml if None)
            location_resolver: Resolver instance (built from config if None)
            selectors: Strict-tier selectors (loaded from selectors.yaml if None)
            shop_config: Shop labels and vocabulary (loaded from shops.yaml if None)
        """
        self.host = host
        self.settings = settings if settings is not None else load_settings()
        self.location_resolver = location_resolver or LocationResolver()
        self.selectors = selectors if selectors is not None else load_selectors()
        self.shop_config = shop_config if shop_config is not None else load_shop_config()
        self.validator = BatchValidator(
            min_loose_yield=self.settings["extraction"]["min_loose_yield"],
        )

    async def run(self) -> ExtractionBatch:
        """
        Run one extraction pass.

        Returns:
            Batch tagged with the tier that produced it; Tier.NONE and no
            items when the location is unknown or no tier produced enough
        """
        soup = self.host.document
        try:
            location = self.location_resolver.resolve(soup)
            if not location:
                logger.info("Location not detected, skipping pass")
                return ExtractionBatch(location=None)

            items = self.run_strict(soup)
            batch = self._accept(location, Tier.STRICT, items)
            if batch is not None:
                return batch

            items = await self.run_loose(soup)
            batch = self._accept(location, Tier.LOOSE_PROBE, items)
            if batch is not None:
                return batch

        except Exception as e:
            logger.exception("Extraction pass failed: %s: %s", type(e).__name__, e)
            return ExtractionBatch(location=None)

        logger.info("%s: no usable items this pass", location)
        return ExtractionBatch(location=location)

    def _accept(
        self, location: str, tier: Tier, items: List[ItemRecord]
    ) -> Optional[ExtractionBatch]:
        items = dedupe_items(items)
        result = self.validator.validate(location, tier, items)
        if not result["overall_valid"]:
            logger.debug("%s tier rejected: %s", tier.value, "; ".join(result["errors"]))
            return None

        logger.info("%s: %d items via %s tier", location, len(items), tier.value)
        return ExtractionBatch(location=location, tier=tier, items=items)

    def run_strict(self, soup: BeautifulSoup) -> List[ItemRecord]:
        """Strict tier: structural anchors only."""
        walker = StrictSectionWalker(
            soup,
            selectors=self.selectors,
            header_keywords=self.shop_config["header_keywords"],
        )
        return walker.extract_items()

    async def run_loose(self, soup: BeautifulSoup) -> List[ItemRecord]:
        """Loose tier: card text first, detail probe for cards missing a field."""
        scanner = LooseCandidateScanner(
            soup,
            shops=self.shop_config["shops"],
            label_vocabulary=self.shop_config["label_vocabulary"],
        )
        probe = DetailProbeResolver.from_settings(
            self.host,
            self.settings["probe"],
            label_vocabulary=self.shop_config["label_vocabulary"],
        )

        items: List[ItemRecord] = []
        parsed = probed = 0
        for candidate in scanner.find_candidates():
            try:
                item = scanner.parse_candidate(candidate)
                if item is not None:
                    parsed += 1
                else:
                    item = await probe.resolve(candidate)
                    if item is not None:
                        probed += 1
            except Exception:
                # One broken card only drops that card
                logger.exception("Loose tier: candidate %r failed", candidate.text[:60])
                continue
            if item is not None:
                items.append(item)

        logger.debug("Loose tier: %d parsed from cards, %d from probes", parsed, probed)
        return items

    def page_ready(self) -> bool:
        """True once the page shows a shop section or a priced item card."""
        soup = self.host.document
        walker = StrictSectionWalker(
            soup,
            selectors=self.selectors,
            header_keywords=self.shop_config["header_keywords"],
        )
        if any(shop for shop, _ in walker.find_headers()):
            return True

        scanner = LooseCandidateScanner(
            soup,
            shops=self.shop_config["shops"],
            label_vocabulary=self.shop_config["label_vocabulary"],
        )
        return bool(scanner.find_candidates())
