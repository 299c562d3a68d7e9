"""Configuration helpers for the bidding service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

_DEFAULT_SERVER_CONFIG = Path(__file__).resolve().parent / "server.yaml"


@dataclass(frozen=True)
class SourceConfig:
    backend: str
    options: Mapping[str, Any]


@dataclass(frozen=True)
class RecorderConfig:
    backend: str
    options: Mapping[str, Any]


@dataclass(frozen=True)
class NotificationConfig:
    message: str
    dismiss_after_ms: int


@dataclass(frozen=True)
class ServerConfig:
    listen: Mapping[str, Any]
    source: SourceConfig
    recorder: RecorderConfig
    notification: NotificationConfig


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    return yaml.safe_load(path.read_text()) or {}


def parse_server_config(data: Mapping[str, Any]) -> ServerConfig:
    source = data.get("source", {})
    recorder = data.get("recorder", {})
    notification = data.get("notification", {})
    return ServerConfig(
        listen=data.get("listen", {}),
        source=SourceConfig(
            backend=str(source.get("backend", "sheets")),
            options=dict(source.get("options") or {}),
        ),
        recorder=RecorderConfig(
            backend=str(recorder.get("backend", "http")),
            options=dict(recorder.get("options") or {}),
        ),
        notification=NotificationConfig(
            message=str(notification.get("message", "Your bid has been submitted.")),
            dismiss_after_ms=int(notification.get("dismiss_after_ms", 3000)),
        ),
    )


@lru_cache(maxsize=1)
def get_server_config() -> ServerConfig:
    path = Path(os.getenv("LOTBID_CONFIG_PATH", _DEFAULT_SERVER_CONFIG))
    return parse_server_config(_load_yaml(path))
