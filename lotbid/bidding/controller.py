"""Bid submission orchestration: validate, record externally, then commit locally."""

from __future__ import annotations

import asyncio
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any

from ..catalog.store import CatalogStore
from ..recorder import BidRecorder, SubmissionError
from . import policy
from .board import BidBoard
from .fsm import SubmissionEvent, SubmissionState, transition

logger = logging.getLogger(__name__)

MISSING_LOT_MESSAGE = "Please select a Sale Lot."
MISSING_NAME_MESSAGE = "Please enter your name."
MISSING_NUMBER_MESSAGE = "Please enter your bidding number."
SUBMISSION_FAILED_MESSAGE = "Failed to submit bid. Please try again."


_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_bid_amount(value: Any) -> int | None:
    """Read the amount field the way the bid form does: leading integer digits, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # past the interpreter's int digit limit
        return None


@dataclass(frozen=True)
class BidSubmission:
    lot_id: str
    bidder_name: str
    bidding_number: str
    amount: int | None


@dataclass(frozen=True)
class Notification:
    message: str
    dismiss_after_ms: int


@dataclass(frozen=True)
class SubmissionResult:
    state: SubmissionState
    lot_id: str
    amount: int | None
    kind: str | None = None
    errors: dict[str, str] = field(default_factory=dict)
    message: str | None = None
    reset_form: bool = False
    notification: Notification | None = None

    @property
    def committed(self) -> bool:
        return self.state is SubmissionState.COMMITTED

    def as_dict(self) -> dict[str, Any]:
        if self.committed:
            notification = self.notification
            return {
                "status": self.state.value,
                "lot_id": self.lot_id,
                "amount": self.amount,
                "reset_form": self.reset_form,
                "notification": {
                    "message": notification.message,
                    "dismiss_after_ms": notification.dismiss_after_ms,
                }
                if notification
                else None,
            }
        payload: dict[str, Any] = {"status": self.state.value, "kind": self.kind}
        if self.errors:
            payload["errors"] = dict(self.errors)
        if self.message:
            payload["message"] = self.message
        return payload


class SubmissionController:
    def __init__(
        self,
        catalog: CatalogStore,
        board: BidBoard,
        recorder: BidRecorder,
        *,
        notification_message: str = "Your bid has been submitted.",
        dismiss_after_ms: int = 3000,
        lock: asyncio.Lock | None = None,
    ) -> None:
        self._catalog = catalog
        self._board = board
        self._recorder = recorder
        self._notification = Notification(notification_message, dismiss_after_ms)
        self._state = SubmissionState.IDLE
        self._lock = lock or asyncio.Lock()

    @property
    def state(self) -> SubmissionState:
        return self._state

    def _advance(self, event: SubmissionEvent) -> None:
        self._state = transition(self._state, event)

    def validate(self, submission: BidSubmission) -> dict[str, str]:
        """Run every field check and return the messages keyed by field."""
        errors: dict[str, str] = {}
        lot_id = (submission.lot_id or "").strip()
        if not lot_id or lot_id not in self._catalog:
            errors["sale_lot"] = MISSING_LOT_MESSAGE
        if not (submission.bidder_name or "").strip():
            errors["bidder_name"] = MISSING_NAME_MESSAGE
        if not (submission.bidding_number or "").strip():
            errors["bidding_number"] = MISSING_NUMBER_MESSAGE
        amount_error = policy.bid_amount_error(submission.amount, self._board.get(lot_id))
        if amount_error:
            errors["bid_amount"] = amount_error
        return errors

    async def submit(self, submission: BidSubmission) -> SubmissionResult:
        async with self._lock:
            try:
                return await self._submit(submission)
            finally:
                if self._state in (SubmissionState.COMMITTED, SubmissionState.FAILED):
                    self._advance(SubmissionEvent.REPORTED)
                else:
                    # aborted by an unexpected exception
                    self._state = SubmissionState.IDLE

    async def _submit(self, submission: BidSubmission) -> SubmissionResult:
        self._advance(SubmissionEvent.SUBMIT)
        lot_id = (submission.lot_id or "").strip()
        errors = self.validate(submission)
        if errors:
            self._advance(SubmissionEvent.VALIDATION_FAILED)
            logger.info("rejected bid for lot %r: %s", lot_id, errors)
            return SubmissionResult(
                state=self._state,
                lot_id=lot_id,
                amount=submission.amount,
                kind="validation",
                errors=errors,
            )

        self._advance(SubmissionEvent.VALIDATION_PASSED)
        amount = submission.amount
        try:
            await self._recorder.record(
                lot_id,
                submission.bidder_name.strip(),
                submission.bidding_number.strip(),
                amount,
            )
        except SubmissionError as exc:
            self._advance(SubmissionEvent.RECORD_FAILED)
            logger.error("error submitting bid for lot %s: %s", lot_id, exc, exc_info=True)
            return SubmissionResult(
                state=self._state,
                lot_id=lot_id,
                amount=amount,
                kind="submission",
                message=SUBMISSION_FAILED_MESSAGE,
            )

        self._advance(SubmissionEvent.RECORD_CONFIRMED)
        self._board.record_bid(lot_id, amount)
        logger.info("recorded bid of $%d on lot %s", amount, lot_id)
        return SubmissionResult(
            state=self._state,
            lot_id=lot_id,
            amount=amount,
            reset_form=True,
            notification=self._notification,
        )
