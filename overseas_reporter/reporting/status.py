"""
Status Presentation

The reporter only produces short human-readable status strings; where
they are displayed (page badge, terminal) is up to the sink.
"""

import logging
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class StatusSink(Protocol):
    """Receives progress/result strings from the reporter."""

    def show(self, text: str) -> None:
        ...

    def hide(self) -> None:
        ...


class LogStatus:
    """Status sink that writes to the log and remembers what it showed."""

    def __init__(self) -> None:
        self.current: Optional[str] = None
        self.history: List[str] = []

    def show(self, text: str) -> None:
        self.current = text
        self.history.append(text)
        logger.info("Status: %s", text.replace("\n", " | "))

    def hide(self) -> None:
        self.current = None
