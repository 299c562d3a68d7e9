"""Per-session state: the loaded catalog, the bid board and the submission controller."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .bidding import policy
from .bidding.board import BidBoard
from .bidding.controller import SubmissionController
from .catalog.sources import CatalogSource, LoadError, restrict_to_catalog
from .catalog.store import CatalogStore
from .config import NotificationConfig
from .recorder import BidRecorder

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load sale lots. Please refresh the page."


@dataclass
class AuctionSession:
    catalog: CatalogStore
    board: BidBoard
    controller: SubmissionController
    loaded_at: datetime

    def lot_view(self, lot_id: str) -> dict[str, Any] | None:
        lot = self.catalog.get(lot_id)
        if lot is None:
            return None
        current_bid = self.board.get(lot_id)
        return {
            "lot_id": lot.lot_id,
            "image_url": lot.image_url,
            "has_image": lot.has_image,
            "current_bid": current_bid,
            "suggested_bid": policy.next_suggested_bid(current_bid),
            "minimum_bid": policy.minimum_opening_bid(),
            "increment": policy.increment(),
            "opening": policy.is_opening(current_bid),
            "prompt": policy.prompt_text(current_bid),
        }


async def load_session(
    source: CatalogSource,
    recorder: BidRecorder,
    notification: NotificationConfig,
    *,
    lock: asyncio.Lock | None = None,
) -> AuctionSession:
    """Load lots and bids; nothing is built unless both reads succeed.

    ``lock`` is handed to the controller so submissions stay serialised across
    reloads. Raises ``LoadError`` when either read fails.
    """
    lots = await source.load_lots()
    bids = await source.load_bids()
    catalog = CatalogStore(lots)
    board = BidBoard(restrict_to_catalog(bids, catalog.lot_ids()))
    controller = SubmissionController(
        catalog,
        board,
        recorder,
        notification_message=notification.message,
        dismiss_after_ms=notification.dismiss_after_ms,
        lock=lock,
    )
    logger.info("session loaded: %d lots, %d with bids", len(catalog), len(board))
    return AuctionSession(
        catalog=catalog,
        board=board,
        controller=controller,
        loaded_at=datetime.now(timezone.utc),
    )


async def refresh_session(state: Any) -> AuctionSession | None:
    """Reload into ``state.session``; a failed load keeps whatever session was there.

    Holds ``state.submission_lock`` for the whole reload, so an in-flight
    submission commits to the board it was validated against before the
    session is replaced.
    """
    async with state.submission_lock:
        try:
            session = await load_session(
                state.source,
                state.recorder,
                state.server_config.notification,
                lock=state.submission_lock,
            )
        except LoadError as exc:
            logger.error("error initializing data: %s", exc, exc_info=True)
            state.load_error = LOAD_FAILED_MESSAGE
            return None
        state.session = session
        state.load_error = None
        return session
