"""
Batch Validator

Deduplicates extracted records and decides whether a pass produced a
batch worth reporting.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..models import ItemRecord, Tier


def dedupe_items(items: Iterable[ItemRecord]) -> List[ItemRecord]:
    """
    Collapse records sharing shop + name (case-insensitive).

    The last record wins but keeps the position of the first occurrence,
    so output order stays document order.
    """
    by_key: Dict[str, ItemRecord] = {}
    for item in items:
        by_key[item.key] = item
    return list(by_key.values())


class BatchValidator:
    """Validates a pass result against the yield rules of its tier."""

    def __init__(self, min_loose_yield: int = 5):
        self.min_loose_yield = min_loose_yield

    def validate(self, location: Optional[str], tier: Tier, items: List[ItemRecord]) -> dict:
        """
        Check a deduplicated pass result.

        Returns a dict with keys:
          overall_valid - True if the batch may be reported
          item_count    - number of records checked
          errors        - reasons the batch was rejected
        """
        errors: list[str] = []

        if not location:
            errors.append("location: unresolved")

        if tier is Tier.NONE:
            errors.append("tier: no strategy produced records")
        elif not items:
            errors.append(f"items: {tier.value} tier produced no records")
        elif tier is Tier.LOOSE_PROBE and len(items) < self.min_loose_yield:
            errors.append(
                f"items: loose yield too low ({len(items)}, min {self.min_loose_yield})"
            )

        keys = [item.key for item in items]
        if len(keys) != len(set(keys)):
            errors.append("items: duplicate shop/name keys")

        return {
            "overall_valid": not errors,
            "item_count": len(items),
            "errors": errors,
        }
