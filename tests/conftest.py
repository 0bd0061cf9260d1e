"""Shared test fixtures."""

from typing import Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from bs4 import BeautifulSoup, Tag

from overseas_reporter.common.config_loader import merge_settings
from overseas_reporter.models import ItemRecord
from overseas_reporter.reporting import UploadResult

STRICT_PAGE_HTML = """
<html><body>
<div class="travelMessage">You are in Mexico and have $5,000 to spend.</div>
<div class="shopHeader___a1">General Store</div>
<ul class="items___x">
  <li class="row___b2">
    <button class="itemNameButton___c3">Xanax</button>
    <span class="displayPrice___d4">$1,000</span>
    <span data-tt-content-type="stock"><span class="sr-only">Stock:</span> 12</span>
  </li>
  <li class="row___b2">
    <button class="itemNameButton___c3">Flowers</button>
    <span class="displayPrice___d4">$45</span>
    <span data-tt-content-type="stock">Stock 200</span>
  </li>
  <li class="row___b2">
    <button class="itemNameButton___c3">Broken Item</button>
    <span data-tt-content-type="stock">Stock 3</span>
  </li>
</ul>
</body></html>
"""

LOOSE_PAGE_HTML = """
<html><body>
<div id="app">
  <h4 class="title___t1">Japan</h4>
  <h5>General Store</h5>
  <div role="button" tabindex="0" class="card">Sushi <span>$1,200</span> <span>Stock: 30</span></div>
  <div role="button" tabindex="0" class="card">Paper Lantern $3,400 Available 15</div>
  <div role="button" tabindex="0" class="card">Kimono $950k 7 in stock</div>
  <h5>Black Market</h5>
  <div role="button" tabindex="0" class="card">Cherry Blossom $500 Stock 1,250</div>
  <div role="button" tabindex="0" class="card" data-detail="neko">Maneki Neko $2.5b</div>
  <div role="button" tabindex="0" class="card" data-detail="sake">$8,000 Buy</div>
</div>
</body></html>
"""

LOOSE_DETAILS = {
    "neko": """
        <div role="dialog" class="itemModal">
          <button class="close" aria-label="Close">×</button>
          <h3>Maneki Neko</h3>
          <p>Cost: $2.5b</p>
          <p>Stock: 40</p>
        </div>
    """,
    "sake": """
        <div class="popup">
          <p>Sake</p>
          <p>Price: $8,000</p>
          <p>Available: 22</p>
          <button>Close</button>
        </div>
    """,
}


class FakeShopPage:
    """
    Interactive page host for tests.

    Clicking an element with data-detail="<key>" appends the matching
    overlay to <body>. Clicking a close control inside an open overlay, or
    dismiss(), removes it.
    """

    def __init__(self, html: str, details: Optional[Dict[str, str]] = None):
        self._soup = BeautifulSoup(html, "lxml")
        self.details = details or {}
        self.open_overlays: List[Tag] = []
        self.activations: List[Tag] = []
        self.dismiss_calls = 0
        self._subscribers: List[Callable[[], None]] = []

    @property
    def document(self) -> BeautifulSoup:
        return self._soup

    def activate(self, element: Tag) -> bool:
        self.activations.append(element)

        for overlay in list(self.open_overlays):
            if any(parent is overlay for parent in element.parents):
                self._close(overlay)
                return True

        key = element.get("data-detail")
        if key in self.details:
            fragment = BeautifulSoup(self.details[key], "html.parser")
            overlay = next(c for c in fragment.contents if isinstance(c, Tag))
            self._soup.body.append(overlay.extract())
            self.open_overlays.append(overlay)
        return True

    def dismiss(self) -> None:
        self.dismiss_calls += 1
        for overlay in list(self.open_overlays):
            self._close(overlay)

    def subscribe(self, callback: Callable[[], None]) -> None:
        self._subscribers.append(callback)

    def mutate(self) -> None:
        """Fire change notifications as a re-render would."""
        for callback in list(self._subscribers):
            callback()

    def _close(self, overlay: Tag) -> None:
        self.open_overlays.remove(overlay)
        overlay.decompose()


@pytest.fixture
def fast_settings():
    """Settings with every delay zeroed for fast tests."""
    return merge_settings({
        "probe": {
            "poll_attempts": 3,
            "poll_interval": 0,
            "settle_delay": 0,
            "pace_pause": 0,
        },
        "scheduler": {
            "debounce_delay": 0.01,
            "ready_attempts": 2,
            "ready_interval": 0,
        },
        "collector": {
            "url": "https://collector.example.com/api/report-stock",
        },
    })


@pytest.fixture
def strict_page():
    return FakeShopPage(STRICT_PAGE_HTML)


@pytest.fixture
def loose_page():
    return FakeShopPage(LOOSE_PAGE_HTML, LOOSE_DETAILS)


@pytest.fixture
def sample_locations():
    return ["Mexico", "Cayman Islands", "United Kingdom", "UAE", "Japan"]


@pytest.fixture
def sample_aliases():
    return {
        "uk": "United Kingdom",
        "united arab emirates": "UAE",
        "caymans": "Cayman Islands",
    }


@pytest.fixture
def sample_items():
    return [
        ItemRecord(name="Xanax", unit_cost=1000, stock=12, shop="General Store"),
        ItemRecord(name="Flowers", unit_cost=45, stock=200, shop="General Store"),
    ]


@pytest.fixture
def fake_client():
    """Collector client stand-in that accepts every upload."""
    client = MagicMock()
    client.submit.side_effect = lambda location, items: UploadResult(
        ok=True, status_code=200, items_sent=len(items),
    )
    return client


@pytest.fixture
def make_page():
    """Factory for interactive pages built from inline HTML."""
    return FakeShopPage


@pytest.fixture
def loose_markup():
    """Raw loose-page HTML and its detail overlays, for building variants."""
    return LOOSE_PAGE_HTML, LOOSE_DETAILS
