"""Bid increment rules: opening minimum, step size and validity."""

from __future__ import annotations

MINIMUM_OPENING_BID = 400
BID_INCREMENT = 100

BELOW_MINIMUM_MESSAGE = (
    f"Bid must be at least ${MINIMUM_OPENING_BID} and greater than current bid."
)
INCREMENT_MESSAGE = f"Bid must be in increments of ${BID_INCREMENT}."


def minimum_opening_bid() -> int:
    return MINIMUM_OPENING_BID


def increment() -> int:
    return BID_INCREMENT


def is_opening(current_bid: int) -> bool:
    return current_bid < MINIMUM_OPENING_BID


def next_suggested_bid(current_bid: int) -> int:
    if is_opening(current_bid):
        return MINIMUM_OPENING_BID
    return current_bid + BID_INCREMENT


def prompt_text(current_bid: int) -> str:
    if is_opening(current_bid):
        return (
            "You are placing the opening bid. "
            f"Minimum starting bid is ${MINIMUM_OPENING_BID}."
        )
    return (
        f"Current bid is ${current_bid}. "
        f"Your bid is autofilled ${BID_INCREMENT} above."
    )


def is_valid_bid(proposed: int, current_bid: int) -> bool:
    at_least_minimum = proposed >= MINIMUM_OPENING_BID
    above_current = proposed > current_bid
    on_increment = proposed % BID_INCREMENT == 0
    return at_least_minimum and above_current and on_increment


def bid_amount_error(proposed: int | None, current_bid: int) -> str | None:
    """Return the message for the bid amount field, or None when the bid is valid.

    Both checks run; when both fail the increment message wins.
    An amount that could not be read as an integer fails only the increment check.
    """
    if proposed is None:
        return INCREMENT_MESSAGE
    error = None
    if proposed < MINIMUM_OPENING_BID or proposed <= current_bid:
        error = BELOW_MINIMUM_MESSAGE
    if proposed % BID_INCREMENT != 0:
        error = INCREMENT_MESSAGE
    return error
