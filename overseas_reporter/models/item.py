"""
Item data models.

Pure data classes for representing extracted shop stock.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Tier(str, Enum):
    """Extraction strategy that produced a batch."""
    STRICT = "strict"
    LOOSE_PROBE = "loose-probe"
    NONE = "none"


@dataclass(frozen=True)
class ItemRecord:
    """One priced, stocked item in a shop."""
    name: str
    unit_cost: int
    stock: int
    shop: str

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Item name is required")
        if not isinstance(self.unit_cost, int) or self.unit_cost < 0:
            raise ValueError(f"Invalid unit cost: {self.unit_cost!r}")
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValueError(f"Invalid stock: {self.stock!r}")

    @property
    def key(self) -> str:
        """Identity within a pass: shop + name, case-insensitive."""
        return f"{self.shop.lower()}\x1f{self.name.lower()}"

    def to_payload(self) -> Dict[str, object]:
        """Wire representation expected by the collector."""
        return {
            "name": self.name,
            "cost": self.unit_cost,
            "stock": self.stock,
            "shop": self.shop,
        }


def make_item(
    name: Optional[str],
    unit_cost: Optional[int],
    stock: Optional[int],
    shop: str,
) -> Optional[ItemRecord]:
    """Build an ItemRecord, or return None when any field is absent or invalid."""
    if not name or unit_cost is None or stock is None:
        return None
    try:
        return ItemRecord(name=name, unit_cost=unit_cost, stock=stock, shop=shop)
    except ValueError:
        return None


@dataclass
class ExtractionBatch:
    """
    Result of one extraction pass.

    Items are distinct by ItemRecord.key and kept in document order.
    """
    location: Optional[str]
    tier: Tier = Tier.NONE
    items: List[ItemRecord] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return bool(self.location) and self.tier is not Tier.NONE and bool(self.items)

    def shop_counts(self) -> Dict[str, int]:
        """Item count per shop, in first-seen order."""
        counts: Dict[str, int] = {}
        for item in self.items:
            counts[item.shop] = counts.get(item.shop, 0) + 1
        return counts
