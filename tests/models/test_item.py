"""Tests for overseas_reporter/models/item.py"""

import pytest

from overseas_reporter.models import ExtractionBatch, ItemRecord, Tier, make_item


class TestItemRecord:
    def test_valid_record(self):
        item = ItemRecord(name="Xanax", unit_cost=1000, stock=12, shop="General Store")
        assert item.name == "Xanax"

    def test_missing_name_raises(self):
        with pytest.raises(ValueError, match="name"):
            ItemRecord(name="", unit_cost=1, stock=1, shop="General Store")

    def test_negative_cost_raises(self):
        with pytest.raises(ValueError, match="cost"):
            ItemRecord(name="Xanax", unit_cost=-1, stock=1, shop="General Store")

    def test_key_is_case_insensitive(self):
        a = ItemRecord(name="Xanax", unit_cost=1, stock=1, shop="General Store")
        b = ItemRecord(name="XANAX", unit_cost=2, stock=3, shop="general store")
        assert a.key == b.key

    def test_payload(self):
        item = ItemRecord(name="Xanax", unit_cost=1000, stock=12, shop="General Store")
        assert item.to_payload() == {
            "name": "Xanax", "cost": 1000, "stock": 12, "shop": "General Store",
        }


class TestMakeItem:
    def test_builds_record(self):
        assert make_item("Xanax", 1000, 12, "General Store") is not None

    @pytest.mark.parametrize("name, cost, stock", [
        (None, 1000, 12),
        ("Xanax", None, 12),
        ("Xanax", 1000, None),
        ("Xanax", -5, 12),
    ])
    def test_absent_field_gives_none(self, name, cost, stock):
        assert make_item(name, cost, stock, "General Store") is None


class TestExtractionBatch:
    def test_empty_batch_invalid(self):
        assert not ExtractionBatch(location="Mexico").is_valid

    def test_batch_without_location_invalid(self, sample_items):
        assert not ExtractionBatch(location=None, tier=Tier.STRICT, items=sample_items).is_valid

    def test_valid_batch(self, sample_items):
        assert ExtractionBatch(location="Mexico", tier=Tier.STRICT, items=sample_items).is_valid

    def test_shop_counts(self, sample_items):
        extra = ItemRecord(name="Knife", unit_cost=5, stock=1, shop="Arms Dealer")
        batch = ExtractionBatch(location="Mexico", tier=Tier.STRICT, items=sample_items + [extra])
        assert batch.shop_counts() == {"General Store": 2, "Arms Dealer": 1}
