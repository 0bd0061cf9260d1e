"""
Upload Cooldown

Remembers when each location was last uploaded successfully, so the same
location isn't reported again within the cooldown interval.
"""

from __future__ import annotations

import json
import logging
import os
import time
from datetime import datetime
from typing import Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class CooldownStore(Protocol):
    """Per-location upload cooldown persistence."""

    def recently_uploaded(self, location: str) -> bool:
        ...

    def mark_uploaded(self, location: str) -> None:
        ...


class MemoryCooldown:
    """Cooldown kept in process memory; forgotten on restart."""

    def __init__(self, interval: float = 60, clock: Callable[[], float] = time.time):
        """
        Args:
            interval: Seconds a location stays blocked after a successful upload
            clock: Time source (seconds since epoch)
        """
        self.interval = interval
        self.clock = clock
        self.last_uploaded: Dict[str, float] = {}

    def recently_uploaded(self, location: str) -> bool:
        last = self.last_uploaded.get(location)
        if last is None or self.interval <= 0:
            return False
        return self.clock() - last < self.interval

    def mark_uploaded(self, location: str) -> None:
        self.last_uploaded[location] = self.clock()


class JsonFileCooldown(MemoryCooldown):
    """Cooldown persisted to a JSON state file between runs."""

    def __init__(
        self,
        state_file: str,
        interval: float = 60,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(interval=interval, clock=clock)
        self.state_file = state_file
        self.load_state()

    def load_state(self) -> bool:
        """Load previous upload timestamps."""
        if not os.path.exists(self.state_file):
            return False
        try:
            with open(self.state_file, "r", encoding="utf-8") as f:
                state = json.load(f)
            self.last_uploaded = {
                str(location): float(ts)
                for location, ts in state.get("last_uploaded", {}).items()
            }
            logger.debug("Loaded cooldown state for %d locations", len(self.last_uploaded))
            return True
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning("Could not load cooldown state: %s", e)
            return False

    def save_state(self) -> None:
        """Save upload timestamps."""
        directory = os.path.dirname(self.state_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        state = {
            "last_uploaded": self.last_uploaded,
            "last_updated": datetime.now().isoformat(),
        }
        with open(self.state_file, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2, ensure_ascii=False)

    def mark_uploaded(self, location: str) -> None:
        super().mark_uploaded(location)
        self.save_state()


def cooldown_from_settings(cooldown_settings: Dict, persistent: bool = False) -> CooldownStore:
    """Build a cooldown store from the 'cooldown' section of settings.yaml."""
    interval = cooldown_settings.get("interval", 60)
    state_file: Optional[str] = cooldown_settings.get("state_file")
    if persistent and state_file:
        return JsonFileCooldown(state_file, interval=interval)
    return MemoryCooldown(interval=interval)
