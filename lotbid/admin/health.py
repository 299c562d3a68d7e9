"""Admin health endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health")
async def health(request: Request) -> dict[str, int | str | bool | None]:
    start_time = getattr(request.app.state, "start_time", None)
    if start_time:
        uptime = int((datetime.now(timezone.utc) - start_time).total_seconds())
    else:
        uptime = 0
    session = request.app.state.session
    return {
        "status": "healthy" if session is not None else "degraded",
        "uptime_seconds": uptime,
        "version": request.app.version,
        "loaded": session is not None,
        "lot_count": len(session.catalog) if session else 0,
        "loaded_at": session.loaded_at.isoformat() if session else None,
        "load_error": request.app.state.load_error,
    }
