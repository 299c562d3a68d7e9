"""Unit tests for the bid submission controller."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from lotbid.bidding import policy
from lotbid.bidding.board import BidBoard
from lotbid.bidding.controller import (
    MISSING_LOT_MESSAGE,
    MISSING_NAME_MESSAGE,
    MISSING_NUMBER_MESSAGE,
    SUBMISSION_FAILED_MESSAGE,
    BidSubmission,
    SubmissionController,
    parse_bid_amount,
)
from lotbid.bidding.fsm import SubmissionState
from lotbid.catalog.store import CatalogStore, Lot
from lotbid.recorder import SubmissionError


@pytest.fixture
def catalog():
    return CatalogStore([Lot("A", "https://img/a.jpg"), Lot("B")])


@pytest.fixture
def board():
    return BidBoard()


@pytest.fixture
def mock_recorder():
    recorder = AsyncMock()
    recorder.record = AsyncMock(return_value={"result": "success"})
    return recorder


@pytest.fixture
def controller(catalog, board, mock_recorder):
    return SubmissionController(catalog, board, mock_recorder)


def _bid(amount, lot="A", name="Ada Lovelace", number="42"):
    return BidSubmission(lot_id=lot, bidder_name=name, bidding_number=number, amount=amount)


class TestBidScenarios:
    @pytest.mark.asyncio
    async def test_sequence_of_bids_on_one_lot(self, controller, board, mock_recorder):
        result = await controller.submit(_bid(400))
        assert result.committed
        assert board.get("A") == 400

        result = await controller.submit(_bid(450))
        assert not result.committed
        assert result.kind == "validation"
        assert result.errors == {"bid_amount": policy.INCREMENT_MESSAGE}
        assert board.get("A") == 400

        result = await controller.submit(_bid(500))
        assert result.committed
        assert board.get("A") == 500
        assert mock_recorder.record.await_count == 2

    @pytest.mark.asyncio
    async def test_empty_name_is_rejected_before_recording(
        self, controller, board, mock_recorder
    ):
        result = await controller.submit(_bid(400, name="   "))

        assert result.state is SubmissionState.FAILED
        assert result.errors == {"bidder_name": MISSING_NAME_MESSAGE}
        assert board.get("A") == 0
        mock_recorder.record.assert_not_called()

    @pytest.mark.asyncio
    async def test_recorder_failure_leaves_board_unchanged(
        self, controller, board, mock_recorder
    ):
        board.record_bid("A", 400)
        mock_recorder.record.side_effect = SubmissionError("connection reset")

        result = await controller.submit(_bid(500))

        assert result.state is SubmissionState.FAILED
        assert result.kind == "submission"
        assert result.message == SUBMISSION_FAILED_MESSAGE
        assert board.get("A") == 400
        assert controller.state is SubmissionState.IDLE

    @pytest.mark.asyncio
    async def test_retry_after_failure_succeeds(self, controller, board, mock_recorder):
        mock_recorder.record.side_effect = [SubmissionError("timeout"), {"result": "success"}]

        first = await controller.submit(_bid(400))
        second = await controller.submit(_bid(400))

        assert first.kind == "submission"
        assert second.committed
        assert board.get("A") == 400


class TestValidation:
    @pytest.mark.asyncio
    async def test_every_failing_field_is_reported(self, controller, mock_recorder):
        result = await controller.submit(_bid(350, lot="", name="", number=""))

        assert result.errors == {
            "sale_lot": MISSING_LOT_MESSAGE,
            "bidder_name": MISSING_NAME_MESSAGE,
            "bidding_number": MISSING_NUMBER_MESSAGE,
            "bid_amount": policy.INCREMENT_MESSAGE,
        }
        mock_recorder.record.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_lot_is_rejected(self, controller, board, mock_recorder):
        result = await controller.submit(_bid(400, lot="Z"))

        assert result.errors == {"sale_lot": MISSING_LOT_MESSAGE}
        assert board.get("Z") == 0
        mock_recorder.record.assert_not_called()

    @pytest.mark.asyncio
    async def test_bid_not_above_current(self, controller, board):
        board.record_bid("B", 600)

        result = await controller.submit(_bid(600, lot="B"))

        assert result.errors == {"bid_amount": policy.BELOW_MINIMUM_MESSAGE}
        assert board.get("B") == 600

    @pytest.mark.asyncio
    async def test_unreadable_amount(self, controller):
        result = await controller.submit(_bid(None))
        assert result.errors == {"bid_amount": policy.INCREMENT_MESSAGE}


class TestCommit:
    @pytest.mark.asyncio
    async def test_recorder_receives_trimmed_fields(self, controller, mock_recorder):
        await controller.submit(_bid(400, name="  Ada  ", number=" 42 "))
        mock_recorder.record.assert_awaited_once_with("A", "Ada", "42", 400)

    @pytest.mark.asyncio
    async def test_committed_result_resets_form_and_notifies(self, catalog, board, mock_recorder):
        controller = SubmissionController(
            catalog,
            board,
            mock_recorder,
            notification_message="Thanks!",
            dismiss_after_ms=3000,
        )

        result = await controller.submit(_bid(400))
        payload = result.as_dict()

        assert payload["status"] == "committed"
        assert payload["reset_form"] is True
        assert payload["notification"] == {"message": "Thanks!", "dismiss_after_ms": 3000}
        assert controller.state is SubmissionState.IDLE

    @pytest.mark.asyncio
    async def test_unexpected_recorder_error_propagates_and_resets_state(
        self, controller, board, mock_recorder
    ):
        mock_recorder.record.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await controller.submit(_bid(400))

        assert controller.state is SubmissionState.IDLE
        assert board.get("A") == 0


class TestParseBidAmount:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (500, 500),
            (500.0, 500),
            ("500", 500),
            (" 600 ", 600),
            ("450.5", 450),
            ("700abc", 700),
            ("", None),
            ("abc", None),
            (None, None),
            (True, None),
            ("1" * 5000 + "00", None),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_bid_amount(raw) == expected
