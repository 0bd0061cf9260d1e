"""
Location Resolver

Determines which travel destination the shop page belongs to.

Priority:
1. The "You are in X and have $..." narrative sentence (canonical name or alias)
2. A heading whose text is exactly a canonical location
3. Unresolved (None)

Resolution never raises; an unresolved location stops the pass so stock
is never reported under the wrong destination.
"""

import logging
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from ..common.config_loader import load_location_aliases, load_locations
from ..common.dom_utils import HEADING_SELECTOR, visible_text
from ..common.text_utils import normalize_text

logger = logging.getLogger(__name__)

NARRATIVE_PATTERN = re.compile(
    r"\byou are (?:currently )?in\s+([A-Za-z][A-Za-z .'-]*?)"
    r"(?=\s+and\b|\s*[.,!;:]|\s*$)",
    re.IGNORECASE,
)


def _key(text: str) -> str:
    return normalize_text(text).lower()


class LocationResolver:
    """
    Resolves the current location from the live document.

    Usage:
        resolver = LocationResolver()
        location = resolver.resolve(soup)   # "Mexico" or None
    """

    def __init__(
        self,
        locations: Optional[List[str]] = None,
        aliases: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the resolver.

        Args:
            locations: Canonical location names (loaded from config if None)
            aliases: Alias -> canonical name (loaded from config if None)
        """
        if locations is None:
            locations = load_locations()
        if aliases is None:
            aliases = load_location_aliases()

        self._canonical = {_key(name): name for name in locations}
        self._aliases = {}
        for alias, name in aliases.items():
            canonical = self._canonical.get(_key(name))
            if canonical:
                self._aliases[_key(alias)] = canonical
            else:
                logger.warning("Alias %r points to unknown location %r", alias, name)

    def match(self, phrase: str) -> Optional[str]:
        """Map a phrase to a canonical location via exact name or alias."""
        key = _key(phrase)
        if not key:
            return None
        if key.startswith("the ") and key not in self._canonical and key not in self._aliases:
            key = key[4:]
        return self._canonical.get(key) or self._aliases.get(key)

    def resolve(self, soup: BeautifulSoup) -> Optional[str]:
        """
        Resolve the location for the current document.

        Returns:
            Canonical location name, or None if unresolved
        """
        body = soup.body or soup
        text = visible_text(body)

        for match in NARRATIVE_PATTERN.finditer(text):
            location = self.match(match.group(1))
            if location:
                logger.debug("Location from narrative: %s", location)
                return location

        for heading in soup.select(HEADING_SELECTOR):
            location = self._canonical.get(_key(visible_text(heading)))
            if location:
                logger.debug("Location from heading: %s", location)
                return location

        logger.debug("Location unresolved")
        return None
