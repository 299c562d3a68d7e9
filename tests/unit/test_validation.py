"""Unit tests for the payload schema registry."""

from __future__ import annotations

import pytest
from jsonschema import ValidationError

from lotbid.validation.validator import get_schema_registry


def test_all_schemas_load():
    assert get_schema_registry().names() == [
        "bid_submission",
        "gviz_table",
        "recorder_response",
    ]


def test_unknown_schema():
    with pytest.raises(ValueError):
        get_schema_registry().validate("auction_result", {})


def test_bid_submission_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        get_schema_registry().validate("bid_submission", {"sale_lot": "A", "lot": "A"})


def test_bid_submission_allows_missing_fields():
    get_schema_registry().validate("bid_submission", {})
