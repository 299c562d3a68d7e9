"""Bid recorder backends."""

from __future__ import annotations

from typing import Any, Protocol

from ..config import ServerConfig
from .client import HttpBidRecorder
from .errors import SubmissionError
from .in_memory import InMemoryBidRecorder

__all__ = [
    "BidRecorder",
    "HttpBidRecorder",
    "InMemoryBidRecorder",
    "SubmissionError",
    "build_recorder",
]


class BidRecorder(Protocol):
    async def record(
        self,
        lot_id: str,
        bidder_name: str,
        bidding_number: str,
        amount: int,
    ) -> dict[str, Any]: ...

    async def close(self) -> None: ...


def build_recorder(config: ServerConfig) -> BidRecorder:
    backend = config.recorder.backend
    options = dict(config.recorder.options)
    if backend == "http":
        return HttpBidRecorder(**options)
    if backend == "in_memory":
        return InMemoryBidRecorder()
    raise ValueError(f"unknown bid recorder backend {backend}")
