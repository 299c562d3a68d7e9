"""Unit tests for the bid board and catalog store."""

from __future__ import annotations

from lotbid.bidding.board import BidBoard
from lotbid.catalog.store import CatalogStore, Lot


class TestBidBoard:
    def test_unknown_lot_is_zero(self):
        assert BidBoard().get("missing") == 0

    def test_record_overwrites(self):
        board = BidBoard()
        board.record_bid("L", 500)
        assert board.get("L") == 500
        board.record_bid("L", 600)
        assert board.get("L") == 600

    def test_initial_values_and_snapshot_copy(self):
        board = BidBoard({"A": 400})
        snapshot = board.snapshot()
        snapshot["A"] = 9999
        assert board.get("A") == 400
        assert len(board) == 1


class TestCatalogStore:
    def test_preserves_order_and_images(self):
        catalog = CatalogStore(
            [Lot("B", "https://img/b.jpg"), Lot("A"), Lot("C", "https://img/c.jpg")]
        )
        assert catalog.lot_ids() == ["B", "A", "C"]
        assert catalog.image_for("B") == "https://img/b.jpg"
        assert catalog.image_for("A") is None
        assert catalog.image_for("nope") is None
        assert "C" in catalog
        assert "D" not in catalog
        assert len(catalog) == 3

    def test_duplicate_rows_keep_first_position_last_image(self):
        catalog = CatalogStore([Lot("A", "one"), Lot("B"), Lot("A", "two")])
        assert catalog.lot_ids() == ["A", "B"]
        assert catalog.image_for("A") == "two"

    def test_has_image(self):
        assert Lot("A", "https://img/a.jpg").has_image is True
        assert Lot("A").has_image is False
