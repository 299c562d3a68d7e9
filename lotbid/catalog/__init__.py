"""Lot catalog store and the source backends that populate it."""

from __future__ import annotations

from ..config import ServerConfig
from .sources import CatalogSource, LoadError
from .static import StaticCatalogSource
from .sheets import SheetsCatalogSource
from .store import CatalogStore, Lot

__all__ = [
    "CatalogSource",
    "CatalogStore",
    "LoadError",
    "Lot",
    "SheetsCatalogSource",
    "StaticCatalogSource",
    "build_catalog_source",
]


def build_catalog_source(config: ServerConfig) -> CatalogSource:
    backend = config.source.backend
    options = dict(config.source.options)
    if backend == "sheets":
        return SheetsCatalogSource(**options)
    if backend == "static":
        return StaticCatalogSource(**options)
    raise ValueError(f"unknown catalog source backend {backend}")
