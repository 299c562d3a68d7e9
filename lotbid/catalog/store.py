"""Session catalog of sale lots and their images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Lot:
    lot_id: str
    image_url: str | None = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)


class CatalogStore:
    """Ordered, read-only collection of lots loaded once per session."""

    def __init__(self, lots: Iterable[Lot]) -> None:
        self._order: list[str] = []
        self._lots: dict[str, Lot] = {}
        for lot in lots:
            if lot.lot_id in self._lots:
                # later rows replace the image, first row keeps the position
                self._lots[lot.lot_id] = lot
                continue
            self._order.append(lot.lot_id)
            self._lots[lot.lot_id] = lot

    def __contains__(self, lot_id: object) -> bool:
        return lot_id in self._lots

    def __iter__(self) -> Iterator[Lot]:
        return (self._lots[lot_id] for lot_id in self._order)

    def __len__(self) -> int:
        return len(self._order)

    def lot_ids(self) -> list[str]:
        return list(self._order)

    def get(self, lot_id: str) -> Lot | None:
        return self._lots.get(lot_id)

    def image_for(self, lot_id: str) -> str | None:
        lot = self._lots.get(lot_id)
        return lot.image_url if lot else None
