"""Expose currently loaded server config for debugging."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..bidding import policy
from ..config import ServerConfig

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_config(request: Request) -> ServerConfig:
    return request.app.state.server_config


@router.get("/config")
async def config(
    request: Request,
    config: ServerConfig = Depends(_get_config),
) -> dict:
    recorder_options = dict(config.recorder.options)
    return {
        "version": request.app.version,
        "source_backend": config.source.backend,
        "lots_sheet": config.source.options.get("lots_sheet"),
        "bids_sheet": config.source.options.get("bids_sheet"),
        "recorder_backend": config.recorder.backend,
        "recorder_endpoint": recorder_options.get("endpoint"),
        "recorder_timeout_ms": recorder_options.get("timeout_ms"),
        "notification_dismiss_after_ms": config.notification.dismiss_after_ms,
        "minimum_opening_bid": policy.minimum_opening_bid(),
        "bid_increment": policy.increment(),
    }
