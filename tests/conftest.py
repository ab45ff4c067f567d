from datetime import date, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from shelfwire.db.migrate import run_migrations
from shelfwire.db.store import EntityKind, SqlRecordStore
from shelfwire.ingest.models import AdSnapshot, Campaign, CatalogEntry, PageReadStatement, RoyaltyStatement
from shelfwire.ingest.writer import append_records
from shelfwire.logic.service import AnalyticsService

BASE = date(2018, 8, 1)


def day(offset: int) -> date:
    return BASE + timedelta(days=offset)


BOOKS = [
    CatalogEntry(title="Darklight", subtitle="The Ember Saga Book One", author="Jo Harrow", series="Ember Saga", series_number=1, full_read_pages=400),
    CatalogEntry(title="Ashfall", subtitle="The Ember Saga Book Two", author="Jo Harrow", series="Ember Saga", series_number=2, full_read_pages=400),
    CatalogEntry(title="Kindling", author="Jo Harrow", series="Ember Saga", series_number=3, full_read_pages=0),
    CatalogEntry(title="Quiet Harbor", author="Jo Harrow", full_read_pages=300),
]

CAMPAIGNS = [
    Campaign(name="DL auto", type="SP", start_date=day(0), budget=10.0, linked_title="Darklight", linked_series="Ember Saga"),
    Campaign(name="DL manual", type="SP", start_date=day(0), budget=5.0, linked_title="Darklight"),
    Campaign(name="AF auto", type="SP", start_date=day(0), budget=5.0, linked_title="Ashfall"),
    Campaign(name="Orphan", type="SB", start_date=day(0), budget=1.0),
]

SNAPSHOTS = [
    AdSnapshot("DL auto", day(0), impressions=1000, clicks=10, average_cpc=0.5),
    AdSnapshot("DL auto", day(1), impressions=500, clicks=None, average_cpc=0.4),
    AdSnapshot("DL auto", day(2), impressions=None, clicks=4, average_cpc=None),
    AdSnapshot("DL manual", day(1), impressions=200, clicks=2, average_cpc=1.0),
    AdSnapshot("AF auto", day(0), impressions=300, clicks=3, average_cpc=0.5),
    AdSnapshot("Orphan", day(0), impressions=999, clicks=9, average_cpc=2.0),
]

ROYALTIES = [
    RoyaltyStatement("Darklight: The Ember Saga Book One", day(0), net_units_sold=2, royalty=5.0),
    RoyaltyStatement("Darklight: The Ember Saga Book One", day(2), net_units_sold=1, royalty=2.5),
    RoyaltyStatement("Darklight", day(3), net_units_sold=None, royalty=None),
    RoyaltyStatement("Ashfall: The Ember Saga Book Two", day(1), net_units_sold=1, royalty=2.0),
]

PAGE_READS = [
    PageReadStatement("Darklight: The Ember Saga Book One", day(0), pages_read=400),
    PageReadStatement("Darklight: The Ember Saga Book One", day(2), pages_read=None),
    PageReadStatement("Ashfall: The Ember Saga Book Two", day(1), pages_read=200),
    PageReadStatement("Kindling", day(1), pages_read=1000),
]


@pytest_asyncio.fixture()
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shelfwire.db'}")
    await run_migrations(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def seeded_engine(engine):
    await append_records(engine, EntityKind.CATALOG, BOOKS)
    await append_records(engine, EntityKind.CAMPAIGN, CAMPAIGNS)
    await append_records(engine, EntityKind.AD_SNAPSHOT, SNAPSHOTS)
    await append_records(engine, EntityKind.ROYALTY, ROYALTIES)
    await append_records(engine, EntityKind.PAGE_READ, PAGE_READS)
    return engine


@pytest.fixture()
def store(seeded_engine):
    return SqlRecordStore(seeded_engine)


@pytest.fixture()
def service(store):
    return AnalyticsService(store)
