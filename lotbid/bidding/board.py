"""Current accepted bid per lot."""

from __future__ import annotations

from typing import Mapping


class BidBoard:
    """Mapping of lot to its current accepted bid; a lot with no entry stands at 0.

    ``record_bid`` does not validate: amounts are checked by the bid policy
    before the submission controller writes them.
    """

    def __init__(self, initial: Mapping[str, int] | None = None) -> None:
        self._bids: dict[str, int] = dict(initial or {})

    def get(self, lot_id: str) -> int:
        return self._bids.get(lot_id, 0)

    def record_bid(self, lot_id: str, amount: int) -> None:
        self._bids[lot_id] = amount

    def snapshot(self) -> dict[str, int]:
        return dict(self._bids)

    def __len__(self) -> int:
        return len(self._bids)
