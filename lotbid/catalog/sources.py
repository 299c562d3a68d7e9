"""Catalog source protocol and row normalisation shared by the backends."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol

from .store import Lot

logger = logging.getLogger(__name__)


class LoadError(RuntimeError):
    """Raised when the lot catalog or the bid board cannot be loaded."""


class CatalogSource(Protocol):
    async def load_lots(self) -> list[Lot]: ...

    async def load_bids(self) -> dict[str, int]: ...


def normalize_lot_id(value: Any) -> str | None:
    """Sheet cells may hold numbers; ``12.0`` and ``12`` both become ``"12"``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def normalize_bid(value: Any) -> int:
    if value is None or value == "" or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip().replace(",", "").lstrip("$")
        if not value:
            return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError) as exc:
        raise LoadError(f"bid value {value!r} is not a number") from exc


def lots_from_rows(rows: Iterable[tuple[Any, Any]]) -> list[Lot]:
    lots = []
    for raw_id, raw_image in rows:
        lot_id = normalize_lot_id(raw_id)
        if not lot_id:
            continue
        image_url = str(raw_image).strip() if raw_image else None
        lots.append(Lot(lot_id=lot_id, image_url=image_url or None))
    return lots


def bids_from_rows(rows: Iterable[tuple[Any, Any]]) -> dict[str, int]:
    bids: dict[str, int] = {}
    for raw_id, raw_bid in rows:
        lot_id = normalize_lot_id(raw_id)
        if lot_id:
            bids[lot_id] = normalize_bid(raw_bid)
    return bids


def restrict_to_catalog(bids: Mapping[str, int], lot_ids: Iterable[str]) -> dict[str, int]:
    known = set(lot_ids)
    kept = {}
    for lot_id, amount in bids.items():
        if lot_id not in known:
            logger.warning("dropping bid board row for unknown lot %s", lot_id)
            continue
        kept[lot_id] = amount
    return kept
