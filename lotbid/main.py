from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from jsonschema import ValidationError

from .admin import board as admin_board
from .admin import config as admin_config
from .admin import health as admin_health
from .bidding.controller import BidSubmission, parse_bid_amount
from .catalog import build_catalog_source
from .config import ServerConfig, get_server_config
from .recorder import build_recorder
from .session import LOAD_FAILED_MESSAGE, AuctionSession, refresh_session
from .validation.validator import SchemaRegistry, get_schema_registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    server_config = get_server_config()
    schema_registry = get_schema_registry()
    source = build_catalog_source(server_config)
    recorder = build_recorder(server_config)

    app.state.server_config = server_config
    app.state.schema_registry = schema_registry
    app.state.source = source
    app.state.recorder = recorder
    app.state.session = None
    app.state.load_error = None
    app.state.submission_lock = asyncio.Lock()
    app.state.start_time = datetime.now(timezone.utc)

    await refresh_session(app.state)

    yield

    await recorder.close()


app = FastAPI(
    title="Lot Bidding Server",
    version="1.0.0",
    docs_url="/docs",
    lifespan=lifespan,
)

app.include_router(admin_health.router)
app.include_router(admin_config.router)
app.include_router(admin_board.router)


# Dependency helpers ---------------------------------------------------------


def get_server_settings(request: Request) -> ServerConfig:
    return request.app.state.server_config


def get_schema_service(request: Request) -> SchemaRegistry:
    return request.app.state.schema_registry


def get_session(request: Request) -> AuctionSession:
    session = request.app.state.session
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=request.app.state.load_error or LOAD_FAILED_MESSAGE,
        )
    return session


# Routes ---------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root(settings: ServerConfig = Depends(get_server_settings)) -> dict[str, Any]:
    return {
        "service": "lotbid",
        "version": app.version,
        "source_backend": settings.source.backend,
        "recorder_backend": settings.recorder.backend,
    }


@app.get("/lots", tags=["lots"])
async def list_lots(session: AuctionSession = Depends(get_session)) -> list[dict[str, Any]]:
    return [
        {"lot_id": lot.lot_id, "image_url": lot.image_url, "has_image": lot.has_image}
        for lot in session.catalog
    ]


@app.get("/lots/{lot_id}", tags=["lots"])
async def lot_detail(lot_id: str, session: AuctionSession = Depends(get_session)) -> dict[str, Any]:
    view = session.lot_view(lot_id)
    if view is None:
        raise HTTPException(status_code=404, detail="unknown sale lot")
    return view


@app.post("/bids", tags=["bids"])
async def submit_bid(
    payload: dict[str, Any] = Body(...),
    schemas: SchemaRegistry = Depends(get_schema_service),
    session: AuctionSession = Depends(get_session),
) -> JSONResponse:
    try:
        schemas.validate("bid_submission", payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc.message)) from exc
    submission = build_submission(payload)
    result = await session.controller.submit(submission)
    if result.committed:
        status_code = status.HTTP_200_OK
    elif result.kind == "validation":
        status_code = 422
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return JSONResponse(status_code=status_code, content=result.as_dict())


def build_submission(payload: dict[str, Any]) -> BidSubmission:
    """Map the bid form body onto a submission; absent fields become empty."""

    def text(key: str) -> str:
        value = payload.get(key)
        return "" if value is None else str(value)

    return BidSubmission(
        lot_id=text("sale_lot").strip(),
        bidder_name=text("bidder_name"),
        bidding_number=text("bidding_number"),
        amount=parse_bid_amount(payload.get("bid_amount")),
    )
