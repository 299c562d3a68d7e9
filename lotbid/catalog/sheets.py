"""Catalog source reading the lot listing and bid board tabs of a Google Sheet."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx
import orjson
from jsonschema import ValidationError

from ..validation.validator import SchemaRegistry, get_schema_registry
from .sources import LoadError, bids_from_rows, lots_from_rows
from .store import Lot

logger = logging.getLogger(__name__)

GVIZ_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/gviz/tq"

# the gviz endpoint answers with JSONP: /*O_o*/ google.visualization.Query.setResponse({...});
_JSONP_RE = re.compile(r"setResponse\((?P<body>.*)\)\s*;?\s*$", re.DOTALL)


def unwrap_gviz(text: str) -> dict[str, Any]:
    match = _JSONP_RE.search(text)
    body = match.group("body") if match else text
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise LoadError("sheet response is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise LoadError("sheet response is not a JSON object")
    return payload


def table_cells(payload: dict[str, Any]) -> list[tuple[Any, Any]]:
    """Return the values of the first two columns of every row."""
    rows = []
    for row in payload["table"]["rows"]:
        cells = row.get("c") or []
        values = [cell.get("v") if isinstance(cell, dict) else None for cell in cells[:2]]
        values.extend([None] * (2 - len(values)))
        rows.append((values[0], values[1]))
    return rows


class SheetsCatalogSource:
    def __init__(
        self,
        *,
        spreadsheet_id: str,
        lots_sheet: str = "Lot Listings",
        bids_sheet: str = "Bid Board",
        timeout_ms: int = 10000,
        client: httpx.AsyncClient | None = None,
        schemas: SchemaRegistry | None = None,
    ) -> None:
        if not spreadsheet_id:
            raise ValueError("sheets backend requires spreadsheet_id")
        self._url = GVIZ_URL.format(spreadsheet_id=spreadsheet_id)
        self._lots_sheet = lots_sheet
        self._bids_sheet = bids_sheet
        self._timeout = timeout_ms / 1000
        self._client = client
        self._schemas = schemas

    async def load_lots(self) -> list[Lot]:
        rows = await self.fetch_rows(self._lots_sheet)
        lots = lots_from_rows(rows)
        logger.info("loaded %d lots from sheet %r", len(lots), self._lots_sheet)
        return lots

    async def load_bids(self) -> dict[str, int]:
        rows = await self.fetch_rows(self._bids_sheet)
        bids = bids_from_rows(rows)
        logger.info("loaded %d bid board rows from sheet %r", len(bids), self._bids_sheet)
        return bids

    async def fetch_rows(self, sheet_name: str) -> list[tuple[Any, Any]]:
        params = {"tqx": "out:json", "sheet": sheet_name}
        try:
            text = await self._get(params)
        except httpx.HTTPError as exc:
            raise LoadError(f"failed to fetch sheet {sheet_name!r}: {exc}") from exc
        payload = unwrap_gviz(text)
        if payload.get("status") == "error":
            raise LoadError(f"sheet {sheet_name!r} query failed: {payload.get('errors')}")
        schemas = self._schemas or get_schema_registry()
        try:
            schemas.validate("gviz_table", payload)
        except ValidationError as exc:
            raise LoadError(f"sheet {sheet_name!r} has unexpected shape: {exc.message}") from exc
        return table_cells(payload)

    async def _get(self, params: dict[str, str]) -> str:
        if self._client is not None:
            response = await self._client.get(self._url, params=params, timeout=self._timeout)
            response.raise_for_status()
            return response.text
        async with httpx.AsyncClient(follow_redirects=True, timeout=self._timeout) as client:
            response = await client.get(self._url, params=params)
            response.raise_for_status()
            return response.text
