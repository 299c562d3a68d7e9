"""Bid board overview and catalog reload."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from ..session import refresh_session

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/board")
async def board(request: Request) -> dict[str, Any]:
    session = request.app.state.session
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=request.app.state.load_error,
        )
    bids = session.board.snapshot()
    lots = session.catalog.lot_ids()
    return {
        "total_lots": len(lots),
        "lots_with_bids": sum(1 for lot_id in lots if bids.get(lot_id, 0) > 0),
        "highest_bid": max(bids.values(), default=0),
        "controller_state": session.controller.state.value,
        "bids": {lot_id: session.board.get(lot_id) for lot_id in lots},
    }


@router.post("/reload")
async def reload(request: Request) -> dict[str, Any]:
    session = await refresh_session(request.app.state)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=request.app.state.load_error,
        )
    return {
        "status": "reloaded",
        "lot_count": len(session.catalog),
        "loaded_at": session.loaded_at.isoformat(),
    }
