"""
Collector API Client

Posts extracted batches to the stock collector.
Transport failures are returned as typed results, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests

from ..models import ItemRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Outcome of one upload attempt."""
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None  # "HTTP <status>", "Network error" or "Timeout"
    items_sent: int = 0


class CollectorClient:
    """
    Client for the stock collector endpoint.

    Usage:
        with CollectorClient(url="https://collector.example/api/report-stock") as client:
            result = client.submit("Mexico", items)
            if not result.ok:
                print(result.error)
    """

    MAX_ITEMS = 300
    DEFAULT_TIMEOUT = 20

    def __init__(
        self,
        url: str,
        client_header: str = "overseas-reporter",
        timeout: float = DEFAULT_TIMEOUT,
        max_items: int = MAX_ITEMS,
    ):
        """
        Initialize the client.

        Args:
            url: Collector endpoint accepting POSTed JSON
            client_header: Value of the X-Client header identifying this reporter
            timeout: Request timeout in seconds
            max_items: Maximum number of items sent per upload
        """
        self.url = url
        self.timeout = timeout
        self.max_items = max_items

        self.session = requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "X-Client": client_header,
        })

    @classmethod
    def from_settings(cls, collector_settings: Dict) -> "CollectorClient":
        """Build a client from the 'collector' section of settings.yaml."""
        return cls(
            url=collector_settings["url"],
            client_header=collector_settings.get("client_header", "overseas-reporter"),
            timeout=collector_settings.get("timeout", cls.DEFAULT_TIMEOUT),
            max_items=collector_settings.get("max_items", cls.MAX_ITEMS),
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def build_payload(self, location: str, items: List[ItemRecord]) -> Dict:
        """JSON body for an upload, capped to max_items."""
        return {
            "location": location,
            "items": [item.to_payload() for item in items[:self.max_items]],
        }

    def submit(self, location: str, items: List[ItemRecord]) -> UploadResult:
        """
        Upload a batch.

        Args:
            location: Canonical location name
            items: Records in document order

        Returns:
            UploadResult; ok for any 2xx response
        """
        payload = self.build_payload(location, items)
        sent = len(payload["items"])

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error("Upload timeout after %ss: %s", self.timeout, self.url)
            return UploadResult(ok=False, error="Timeout")
        except requests.exceptions.RequestException as e:
            logger.error("Upload failed: %s", e)
            return UploadResult(ok=False, error="Network error")

        if 200 <= response.status_code < 300:
            logger.info("Uploaded %d items for %s (HTTP %d)", sent, location, response.status_code)
            return UploadResult(ok=True, status_code=response.status_code, items_sent=sent)

        logger.error("Collector error %d: %s", response.status_code, response.text[:200])
        return UploadResult(
            ok=False,
            status_code=response.status_code,
            error=f"HTTP {response.status_code}",
        )
