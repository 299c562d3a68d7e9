"""In-memory bid recorder for local runs."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any


class InMemoryBidRecorder:
    def __init__(self) -> None:
        self._records: list[dict[str, Any]] = []
        self._lock = asyncio.Lock()

    async def record(
        self,
        lot_id: str,
        bidder_name: str,
        bidding_number: str,
        amount: int,
    ) -> dict[str, Any]:
        entry = {
            "sale_lot": lot_id,
            "bidder_name": bidder_name,
            "bidding_number": bidding_number,
            "bid_amount": amount,
            "recorded_at": datetime.now(timezone.utc).isoformat(),
        }
        async with self._lock:
            self._records.append(entry)
        return {"result": "success", "row": len(self._records)}

    async def list_records(self) -> list[dict[str, Any]]:
        async with self._lock:
            return [dict(record) for record in self._records]

    async def close(self) -> None:
        return None
