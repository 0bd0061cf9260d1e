"""
Loose Candidate Scanner

Fallback for layouts without the structural anchors (mobile app webview,
alternate skins). Shop sections are located by header text alone, and any
visible clickable element between two headers whose text carries a price
and a number is treated as a candidate item card.

Candidates are parsed from their own text first. Cards that don't show
every field are handed to the detail probe by the orchestrator.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ...common.config_loader import load_shop_config
from ...common.dom_utils import (
    HEADING_SELECTOR,
    INTERACTIVE_SELECTOR,
    document_order,
    has_ancestor_in,
    is_visible,
    visible_text,
)
from ...common.text_utils import (
    CURRENCY_SYMBOL,
    DIGIT_RUN_PATTERN,
    is_plausible_name,
    normalize_text,
    parse_integer,
    parse_money,
    strip_money,
)
from ...models import ItemRecord, make_item

logger = logging.getLogger(__name__)

HEADER_LIKE_SELECTOR = ", ".join([
    HEADING_SELECTOR,
    "[class*='title']",
    "[class*='Title']",
    "[class*='header']",
    "[class*='Header']",
])

# Card text longer than this is a container, not a single item
MAX_CANDIDATE_CHARS = 800

NAME_FALLBACK_TOKENS = 3

STOCK_PATTERNS = [
    re.compile(r'(\d[\d,]*)\s+in\s+stock\b', re.IGNORECASE),
    re.compile(r'\b(?:stock|available)\b\s*[:\-]?\s*(\d[\d,]*)', re.IGNORECASE),
]


def parse_stock(text: str) -> Optional[int]:
    """
    Parse a stock count from free text.

    Label-anchored forms ("Stock: 12", "Available 12", "12 in stock") win;
    otherwise the largest number left once prices are removed.
    """
    if not text:
        return None

    for pattern in STOCK_PATTERNS:
        match = pattern.search(text)
        if match:
            return parse_integer(match.group(1))

    values = [parse_integer(run) for run in DIGIT_RUN_PATTERN.findall(strip_money(text))]
    values = [v for v in values if v is not None]
    return max(values) if values else None


@dataclass
class Candidate:
    """A clickable element suspected of representing one priced item."""
    element: Tag
    shop: str
    text: str


class LooseCandidateScanner:
    """
    Scans for item cards under shop headers matched by text.

    Usage:
        scanner = LooseCandidateScanner(soup)
        for candidate in scanner.find_candidates():
            item = scanner.parse_candidate(candidate)
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        shops: Optional[List[str]] = None,
        label_vocabulary: Optional[List[str]] = None,
    ):
        """
        Initialize the scanner.

        Args:
            soup: Parsed document
            shops: Shop labels (loaded from shops.yaml if None)
            label_vocabulary: Words never part of an item name (from shops.yaml if None)
        """
        if shops is None or label_vocabulary is None:
            shop_config = load_shop_config()
            shops = shop_config['shops'] if shops is None else shops
            if label_vocabulary is None:
                label_vocabulary = shop_config['label_vocabulary']

        self.soup = soup
        self.shops: Dict[str, str] = {shop.lower(): shop for shop in shops}
        self.label_vocabulary = [w.lower() for w in label_vocabulary]

        # Longest phrases first so "in stock" goes before "stock"
        words = sorted(set(self.shops) | set(self.label_vocabulary), key=len, reverse=True)
        self._vocabulary_pattern = re.compile(
            r'\b(?:' + '|'.join(re.escape(w) for w in words) + r')\b',
            re.IGNORECASE,
        ) if words else None

    def find_headers(self) -> List[Tuple[str, Tag]]:
        """
        Header-like elements whose visible text is exactly a shop label.

        A label matched more than once (tab strips, nested wrappers) keeps
        its last occurrence, the one closest to the items.
        """
        latest: Dict[str, Tag] = {}
        for element in self.soup.select(HEADER_LIKE_SELECTOR):
            if not is_visible(element):
                continue
            shop = self.shops.get(visible_text(element).lower())
            if shop:
                latest[shop] = element

        order = document_order(self.soup)
        headers = sorted(latest.items(), key=lambda pair: order.get(id(pair[1]), -1))
        return headers

    def find_candidates(self) -> List[Candidate]:
        """Candidate item cards grouped under their shop, in document order."""
        headers = self.find_headers()
        if not headers:
            logger.debug("Loose tier: no shop headers found")
            return []

        order = document_order(self.soup)
        boundaries = [order[id(header)] for _, header in headers]

        admitted: List[Tuple[int, Tag, str]] = []
        kept: List[Tag] = []
        for element in self.soup.select(INTERACTIVE_SELECTOR):
            if not is_visible(element) or has_ancestor_in(element, kept):
                continue
            text = visible_text(element)
            if not self._looks_priced(text):
                continue
            kept.append(element)
            admitted.append((order[id(element)], element, text))

        candidates = []
        for i, (shop, _) in enumerate(headers):
            start = boundaries[i]
            end = boundaries[i + 1] if i + 1 < len(boundaries) else len(order)
            for position, element, text in admitted:
                if start < position < end:
                    candidates.append(Candidate(element=element, shop=shop, text=text))

        logger.debug("Loose tier: %d candidates under %d headers", len(candidates), len(headers))
        return candidates

    @staticmethod
    def _looks_priced(text: str) -> bool:
        if not text or len(text) > MAX_CANDIDATE_CHARS:
            return False
        return CURRENCY_SYMBOL in text and DIGIT_RUN_PATTERN.search(text) is not None

    def parse_candidate(self, candidate: Candidate) -> Optional[ItemRecord]:
        """Parse a card from its own text, or None if any field is missing."""
        text = candidate.text
        return make_item(
            name=self.extract_name(text),
            unit_cost=parse_money(text),
            stock=parse_stock(text),
            shop=candidate.shop,
        )

    def strip_vocabulary(self, text: str) -> str:
        """Remove shop labels, field labels and stock phrases from text."""
        for pattern in STOCK_PATTERNS:
            text = pattern.sub(' ', text)
        if self._vocabulary_pattern is not None:
            text = self._vocabulary_pattern.sub(' ', text)
        return normalize_text(text)

    def extract_name(self, text: str) -> Optional[str]:
        """
        Guess the item name from card text.

        Uses the text before the first price; falls back to the first few
        tokens containing a letter.
        """
        prefix = text.split(CURRENCY_SYMBOL, 1)[0]
        prefix = self.strip_vocabulary(prefix)
        prefix = prefix.strip(' :-|')
        if is_plausible_name(prefix):
            return prefix

        rest = self.strip_vocabulary(strip_money(text))
        tokens = [token for token in rest.split() if re.search(r'[^\W\d_]', token)]
        name = " ".join(tokens[:NAME_FALLBACK_TOKENS])
        return name if is_plausible_name(name) else None
