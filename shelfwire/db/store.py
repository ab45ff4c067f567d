"""Read access to the five record sets.

Every finder is an async generator yielding the records of one
``EntityKind``. Date-bounded finders exist in two shapes: strictly after a
cutoff, and a closed ``[start, end]`` range. Database errors propagate to the
caller untouched.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Any, AsyncIterator, Callable, Mapping, Protocol, TypeVar

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Select

from shelfwire.db.tables import ad_snapshots, books, campaigns, page_reads, royalty_statements
from shelfwire.ingest.models import AdSnapshot, Campaign, CatalogEntry, PageReadStatement, RoyaltyStatement

T = TypeVar("T")


class EntityKind(enum.Enum):
    CATALOG = "catalog"
    CAMPAIGN = "campaign"
    AD_SNAPSHOT = "ad_snapshot"
    ROYALTY = "royalty"
    PAGE_READ = "page_read"


class RecordStore(Protocol):
    def find_by_key(self, kind: EntityKind, key: str, *, by: str | None = None) -> AsyncIterator[Any]: ...

    def find_by_key_after_date(
        self, kind: EntityKind, key: str, after: date, *, by: str | None = None
    ) -> AsyncIterator[Any]: ...

    def find_by_key_in_date_range(
        self, kind: EntityKind, key: str, start: date, end: date, *, by: str | None = None
    ) -> AsyncIterator[Any]: ...

    def find_all(self, kind: EntityKind) -> AsyncIterator[Any]: ...


@dataclass(frozen=True, slots=True)
class KindSpec:
    table: Table
    key: str
    date: str | None
    build: Callable[[Mapping[str, Any]], Any]


def _catalog_entry(row: Mapping[str, Any]) -> CatalogEntry:
    return CatalogEntry(
        title=row["title"],
        author=row["author"],
        subtitle=row["subtitle"],
        short_code=row["short_code"],
        series=row["series"],
        series_number=row["series_number"],
        asin=row["asin"],
        full_read_pages=row["full_read_pages"],
    )


def _campaign(row: Mapping[str, Any]) -> Campaign:
    return Campaign(
        name=row["name"],
        type=row["type"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        budget=row["budget"],
        linked_title=row["linked_title"],
        linked_series=row["linked_series"],
    )


def _snapshot(row: Mapping[str, Any]) -> AdSnapshot:
    return AdSnapshot(
        campaign_name=row["campaign_name"],
        ts_date=row["ts_date"],
        impressions=row["impressions"],
        clicks=row["clicks"],
        average_cpc=row["average_cpc"],
    )


def _royalty(row: Mapping[str, Any]) -> RoyaltyStatement:
    return RoyaltyStatement(
        title=row["title"],
        royalty_date=row["royalty_date"],
        net_units_sold=row["net_units_sold"],
        royalty=row["royalty"],
        currency=row["currency"],
    )


def _page_read(row: Mapping[str, Any]) -> PageReadStatement:
    return PageReadStatement(title=row["title"], order_date=row["order_date"], pages_read=row["pages_read"])


KINDS: dict[EntityKind, KindSpec] = {
    EntityKind.CATALOG: KindSpec(books, "title", None, _catalog_entry),
    EntityKind.CAMPAIGN: KindSpec(campaigns, "name", None, _campaign),
    EntityKind.AD_SNAPSHOT: KindSpec(ad_snapshots, "campaign_name", "ts_date", _snapshot),
    EntityKind.ROYALTY: KindSpec(royalty_statements, "title_key", "royalty_date", _royalty),
    EntityKind.PAGE_READ: KindSpec(page_reads, "title_key", "order_date", _page_read),
}


class SqlRecordStore:
    """``RecordStore`` backed by an async SQLAlchemy engine."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def find_by_key(self, kind: EntityKind, key: str, *, by: str | None = None) -> AsyncIterator[Any]:
        spec = KINDS[kind]
        stmt = self._select(spec).where(spec.table.c[by or spec.key] == key)
        async for record in self._stream(spec, stmt):
            yield record

    async def find_by_key_after_date(
        self, kind: EntityKind, key: str, after: date, *, by: str | None = None
    ) -> AsyncIterator[Any]:
        spec = KINDS[kind]
        date_column = spec.table.c[_date_column(kind, spec)]
        stmt = self._select(spec).where(spec.table.c[by or spec.key] == key, date_column > after)
        async for record in self._stream(spec, stmt):
            yield record

    async def find_by_key_in_date_range(
        self, kind: EntityKind, key: str, start: date, end: date, *, by: str | None = None
    ) -> AsyncIterator[Any]:
        spec = KINDS[kind]
        date_column = spec.table.c[_date_column(kind, spec)]
        stmt = self._select(spec).where(
            spec.table.c[by or spec.key] == key, date_column.between(start, end)
        )
        async for record in self._stream(spec, stmt):
            yield record

    async def find_all(self, kind: EntityKind) -> AsyncIterator[Any]:
        spec = KINDS[kind]
        async for record in self._stream(spec, self._select(spec)):
            yield record

    def _select(self, spec: KindSpec) -> Select:
        order = spec.table.c[spec.date] if spec.date else spec.table.c[spec.key]
        return select(spec.table).order_by(order)

    async def _stream(self, spec: KindSpec, stmt: Select) -> AsyncIterator[Any]:
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            rows = result.mappings().all()
        for row in rows:
            yield spec.build(row)


def _date_column(kind: EntityKind, spec: KindSpec) -> str:
    if spec.date is None:
        raise ValueError(f"{kind.value} records carry no date")
    return spec.date


async def collect(stream: AsyncIterator[T]) -> list[T]:
    return [record async for record in stream]
