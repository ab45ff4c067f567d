"""Ingestion helpers."""

from __future__ import annotations

import pathlib

import yaml

from shelfwire.ingest.models import CatalogEntry

CATALOG_PATH = pathlib.Path(__file__).with_name("catalog.yml")


def load_catalog(limit: int | None = None, path: pathlib.Path = CATALOG_PATH) -> list[CatalogEntry]:
    data = yaml.safe_load(path.read_text())
    entries = [CatalogEntry(**item) for item in data]
    if limit:
        return entries[:limit]
    return entries
