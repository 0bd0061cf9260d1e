"""
Page Hosts

The live document is owned by the hosting runtime. Extraction only needs
a parsed tree to read, a way to click an element, a way to dismiss an
overlay, and change notifications.

Hosts mutate `document` in place; element identity (id() of a Tag) stays
stable for the lifetime of an element.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Protocol

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]


class PageHost(Protocol):
    """Interface the extraction engine expects from the hosting page."""

    @property
    def document(self) -> BeautifulSoup:
        """Current parsed document."""
        ...

    def activate(self, element: Tag) -> bool:
        """Simulate the element's primary interaction. False if not possible."""
        ...

    def dismiss(self) -> None:
        """Synthesize a backdrop click / escape to close any overlay."""
        ...

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback fired whenever the document mutates."""
        ...


class StaticPage:
    """
    Host over a fixed HTML snapshot.

    Useful for saved pages: nothing can be clicked, so detail probes abort
    immediately. `load_html` replaces the snapshot and notifies subscribers
    as a live page would after a re-render.

    Usage:
        page = StaticPage(html)
        soup = page.document
    """

    def __init__(self, html: str = ""):
        self._subscribers: List[ChangeCallback] = []
        self._soup = BeautifulSoup(html, "lxml")

    @property
    def document(self) -> BeautifulSoup:
        return self._soup

    def load_html(self, html: str) -> None:
        """Replace the snapshot and fire change notifications."""
        self._soup = BeautifulSoup(html, "lxml")
        for callback in list(self._subscribers):
            callback()

    def activate(self, element: Tag) -> bool:
        logger.debug("Static page cannot activate <%s>", element.name)
        return False

    def dismiss(self) -> None:
        return None

    def subscribe(self, callback: ChangeCallback) -> None:
        self._subscribers.append(callback)
