from datetime import date

import pytest

from shelfwire.db.store import EntityKind, SqlRecordStore, collect
from shelfwire.ingest.models import RoyaltyStatement
from shelfwire.ingest.writer import replace_records
from shelfwire.logic.resolver import JoinResolver


@pytest.mark.asyncio
async def test_find_by_key_after_date_is_strict(store):
    rows = await collect(store.find_by_key_after_date(EntityKind.AD_SNAPSHOT, "DL auto", date(2018, 8, 2)))
    assert [row.ts_date for row in rows] == [date(2018, 8, 3)]


@pytest.mark.asyncio
async def test_find_by_key_in_date_range_is_closed(store):
    rows = await collect(
        store.find_by_key_in_date_range(EntityKind.AD_SNAPSHOT, "DL auto", date(2018, 8, 1), date(2018, 8, 2))
    )
    assert [row.ts_date for row in rows] == [date(2018, 8, 1), date(2018, 8, 2)]
    assert rows[1].clicks is None


@pytest.mark.asyncio
async def test_find_all_and_undated_kinds(store):
    books = await collect(store.find_all(EntityKind.CATALOG))
    assert {book.title for book in books} == {"Darklight", "Ashfall", "Kindling", "Quiet Harbor"}
    with pytest.raises(ValueError):
        await collect(store.find_by_key_after_date(EntityKind.CATALOG, "Darklight", date(2018, 8, 1)))


@pytest.mark.asyncio
async def test_replace_records_swaps_whole_set(seeded_engine):
    await replace_records(
        seeded_engine,
        EntityKind.ROYALTY,
        [RoyaltyStatement("Quiet Harbor: A Novel", date(2018, 9, 1), net_units_sold=4, royalty=9.0)],
    )
    store = SqlRecordStore(seeded_engine)
    rows = await collect(store.find_all(EntityKind.ROYALTY))
    assert len(rows) == 1
    assert await collect(store.find_by_key(EntityKind.ROYALTY, "quiet harbor")) == rows


@pytest.mark.asyncio
async def test_resolver_joins(store):
    resolver = JoinResolver(store)
    assert sorted(await resolver.campaigns_for_title("Darklight")) == ["DL auto", "DL manual"]
    assert await resolver.campaigns_for_title("Quiet Harbor") == []
    assert [c.name for c in await resolver.unlinked_campaigns()] == ["Orphan"]
    assert await resolver.all_series() == ["Ember Saga"]
    assert len(await resolver.books_in_series("Ember Saga")) == 3
    assert await resolver.catalog_entry("Nope") is None


@pytest.mark.asyncio
async def test_resolver_matches_statements_by_main_title(store):
    resolver = JoinResolver(store)
    royalties = await resolver.royalties_for_title("Darklight")
    assert len(royalties) == 3
    assert {r.title for r in royalties} == {"Darklight: The Ember Saga Book One", "Darklight"}
    reads = await resolver.page_reads_for_title("Darklight", since=date(2018, 8, 1))
    assert [r.order_date for r in reads] == [date(2018, 8, 3)]
    assert await resolver.snapshots_for_title("Quiet Harbor") == []
