"""Write records into the store, deriving canonical title keys."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Sequence

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncEngine

from shelfwire.db.store import KINDS, EntityKind
from shelfwire.ingest.titles import title_key

logger = logging.getLogger(__name__)

KEYED_KINDS = {EntityKind.CATALOG, EntityKind.ROYALTY, EntityKind.PAGE_READ}


def to_row(kind: EntityKind, record: Any) -> dict[str, Any]:
    row = dataclasses.asdict(record)
    if kind in KEYED_KINDS:
        row["title_key"] = title_key(record.title)
    return row


async def append_records(engine: AsyncEngine, kind: EntityKind, records: Iterable[Any]) -> int:
    rows = [to_row(kind, record) for record in records]
    if not rows:
        return 0
    table = KINDS[kind].table
    async with engine.begin() as conn:
        await conn.execute(table.insert(), rows)
    logger.info("Appended %d %s records", len(rows), kind.value)
    return len(rows)


async def replace_records(engine: AsyncEngine, kind: EntityKind, records: Sequence[Any]) -> int:
    """Swap the whole record set for ``kind`` in one transaction."""
    rows = [to_row(kind, record) for record in records]
    table: Table = KINDS[kind].table
    async with engine.begin() as conn:
        await conn.execute(table.delete())
        if rows:
            await conn.execute(table.insert(), rows)
    logger.info("Replaced %s records with %d rows", kind.value, len(rows))
    return len(rows)
