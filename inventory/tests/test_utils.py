"""Tests for id, timestamp and text helpers."""

from datetime import datetime

from inventory.utils import generate_row_id, slugify, unique, utc_timestamp


class TestIdentifiers:
    def test_row_ids_are_unique(self):
        ids = {generate_row_id() for _ in range(50)}
        assert len(ids) == 50

    def test_utc_timestamp(self):
        parsed = datetime.fromisoformat(utc_timestamp())
        assert parsed.utcoffset().total_seconds() == 0


class TestText:
    """Test slug and unique helpers."""

    def test_slugify(self):
        assert slugify("Order Sync (v2)") == "order_sync_v2"
        assert slugify("  --  ") == "workflow"

    def test_unique_keeps_first_occurrence(self):
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
