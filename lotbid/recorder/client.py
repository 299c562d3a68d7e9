"""HTTP client for the bid recording web app."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import orjson
from jsonschema import ValidationError

from ..validation.validator import SchemaRegistry, get_schema_registry
from .errors import SubmissionError

logger = logging.getLogger(__name__)

_ERROR_RESULTS = {"error", "failure", "failed"}


class HttpBidRecorder:
    """Posts each accepted bid to the web app as a form-encoded request.

    Requests carry no idempotency key and are never retried here.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        timeout_ms: int = 15000,
        client: httpx.AsyncClient | None = None,
        schemas: SchemaRegistry | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError("http recorder requires endpoint")
        self._endpoint = endpoint
        self._timeout = timeout_ms / 1000
        self._client = client or httpx.AsyncClient(follow_redirects=True)
        self._schemas = schemas

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def close(self) -> None:
        await self._client.aclose()

    async def record(
        self,
        lot_id: str,
        bidder_name: str,
        bidding_number: str,
        amount: int,
    ) -> dict[str, Any]:
        form = {
            "saleLot": lot_id,
            "bidderName": bidder_name,
            "biddingNumber": bidding_number,
            "bidAmount": str(amount),
        }
        try:
            response = await self._client.post(
                self._endpoint,
                data=form,
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = orjson.loads(response.content)
        except httpx.HTTPError as exc:
            raise SubmissionError(f"bid recorder request failed: {exc}") from exc
        except orjson.JSONDecodeError as exc:
            raise SubmissionError("bid recorder returned a non-JSON response") from exc
        self._check_response(data)
        logger.info("bid recorder response for lot %s: %s", lot_id, data)
        return data

    def _check_response(self, data: Any) -> None:
        schemas = self._schemas or get_schema_registry()
        try:
            schemas.validate("recorder_response", data)
        except ValidationError as exc:
            raise SubmissionError(f"unexpected bid recorder response: {exc.message}") from exc
        outcome = str(data.get("result") or data.get("status") or "").lower()
        if outcome in _ERROR_RESULTS:
            raise SubmissionError(
                f"bid recorder rejected the bid: {data.get('message') or outcome}"
            )
