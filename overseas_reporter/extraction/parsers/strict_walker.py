"""
Strict Section Walker

Extracts items from the desktop layout, where every shop section starts
with a recognisable header element and each item sits in a row container
with tagged name, price and stock elements.

Rows laid out as table rows without tagged controls are read by column
position (Item | Name | Type | Cost | Stock | Amount | Buy).

An empty result means the structural anchors are missing; the caller
falls back to the loose scanner.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ...common.config_loader import load_selectors, load_shop_config
from ...common.dom_utils import document_order, visible_text
from ...common.text_utils import is_plausible_name, parse_money, parse_trailing_integer
from ...models import ItemRecord, make_item

logger = logging.getLogger(__name__)

STRICT_ROLES = ("header", "row", "name", "price", "stock")


class StrictSectionWalker:
    """
    Walks shop sections between structural header markers.

    Usage:
        walker = StrictSectionWalker(soup)
        items = walker.extract_items()
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        selectors: Optional[Dict[str, Any]] = None,
        header_keywords: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the walker.

        Args:
            soup: Parsed document
            selectors: Selector config (loaded from selectors.yaml if None)
            header_keywords: Lowercase keyword -> shop label (from shops.yaml if None)
        """
        if selectors is None:
            selectors = load_selectors()
        if header_keywords is None:
            header_keywords = load_shop_config()['header_keywords']

        self.soup = soup
        self.selectors = selectors.get('strict', {})
        self.columns = selectors.get('table_columns', {})
        self.header_keywords = header_keywords

        missing = [role for role in STRICT_ROLES if not self.selectors.get(role)]
        if missing:
            raise ValueError(f"Strict selectors missing: {', '.join(missing)}")

    def normalize_shop_name(self, raw: str) -> Optional[str]:
        """Map header text to a shop label by keyword ("Black Market Deals" -> Black Market)."""
        text = raw.lower()
        if not text:
            return None
        for keyword, shop in self.header_keywords.items():
            if keyword in text:
                return shop
        return None

    def find_headers(self) -> List[Tuple[Optional[str], Tag]]:
        """
        Header markers in document order, paired with their shop label.

        Markers whose text names no known shop get None; they still end
        the previous section.
        """
        return [
            (self.normalize_shop_name(visible_text(header)), header)
            for header in self.soup.select(self.selectors['header'])
        ]

    def extract_items(self) -> List[ItemRecord]:
        """
        Extract every valid row under every recognised header.

        Returns:
            Records in document order (may contain duplicate keys; the
            orchestrator deduplicates). Empty when no header markers exist.
        """
        headers = self.find_headers()
        if not any(shop for shop, _ in headers):
            logger.debug("Strict tier: no section headers found")
            return []

        order = document_order(self.soup)
        rows = [
            (order[id(row)], row)
            for row in self.soup.select(self.selectors['row'])
            if id(row) in order
        ]

        items: List[ItemRecord] = []
        for i, (shop, header) in enumerate(headers):
            if shop is None:
                continue
            start = order[id(header)]
            end = order[id(headers[i + 1][1])] if i + 1 < len(headers) else len(order)

            for position, row in rows:
                if not start < position < end:
                    continue
                item = self.parse_row(row, shop)
                if item:
                    items.append(item)

        logger.debug("Strict tier: %d rows parsed from %d sections", len(items), len(headers))
        return items

    def parse_row(self, row: Tag, shop: str) -> Optional[ItemRecord]:
        """Extract one record from a row container, or None if any field is missing."""
        name_el = row.select_one(self.selectors['name'])
        if name_el is None and row.name == 'tr':
            return self._parse_table_row(row, shop)

        price_el = row.select_one(self.selectors['price'])
        stock_el = row.select_one(self.selectors['stock'])
        if name_el is None or price_el is None or stock_el is None:
            return None

        name = visible_text(name_el)
        if not is_plausible_name(name):
            return None

        # Stock text may carry a screen-reader prefix, so take the trailing number
        return make_item(
            name=name,
            unit_cost=parse_money(price_el.get_text(" ")),
            stock=parse_trailing_integer(stock_el.get_text(" ")),
            shop=shop,
        )

    def _parse_table_row(self, row: Tag, shop: str) -> Optional[ItemRecord]:
        """Read a table row by column position."""
        cells = row.find_all('td', recursive=False)
        if len(cells) < self.columns.get('min_cells', 6):
            return None

        try:
            name = visible_text(cells[self.columns.get('name', 1)])
            cost_text = visible_text(cells[self.columns.get('cost', 3)])
            stock_text = visible_text(cells[self.columns.get('stock', 4)])
        except IndexError:
            return None

        if not is_plausible_name(name):
            return None

        return make_item(
            name=name,
            unit_cost=parse_money(cost_text),
            stock=parse_trailing_integer(stock_text),
            shop=shop,
        )
