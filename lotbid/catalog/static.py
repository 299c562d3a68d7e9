"""Catalog source backed by values from the server config."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .sources import bids_from_rows, lots_from_rows
from .store import Lot


class StaticCatalogSource:
    def __init__(
        self,
        *,
        lots: Iterable[Mapping[str, Any]] | None = None,
        bids: Mapping[str, Any] | None = None,
    ) -> None:
        self._lot_rows = [(item.get("lot_id"), item.get("image_url")) for item in lots or []]
        self._bid_rows = list((bids or {}).items())

    async def load_lots(self) -> list[Lot]:
        return lots_from_rows(self._lot_rows)

    async def load_bids(self) -> dict[str, int]:
        return bids_from_rows(self._bid_rows)
