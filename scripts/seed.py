"""Seed database with the demo catalog and a few campaigns."""

from __future__ import annotations

import asyncio
from datetime import timedelta

from shelfwire.db.migrate import run_migrations
from shelfwire.db.session import create_engine_from_env
from shelfwire.db.store import EntityKind
from shelfwire.ingest import load_catalog
from shelfwire.ingest.models import AdSnapshot, Campaign, PageReadStatement, RoyaltyStatement
from shelfwire.ingest.writer import replace_records
from shelfwire.utils.dates import today_in_tz


async def seed() -> None:
    engine = create_engine_from_env()
    today = today_in_tz()
    catalog = load_catalog()
    campaigns = [
        Campaign(
            name=f"{book.short_code} - auto",
            type="Sponsored Products",
            start_date=today - timedelta(days=30),
            budget=10.0,
            linked_title=book.title,
            linked_series=book.series,
        )
        for book in catalog
    ]
    snapshots = []
    royalties = []
    reads = []
    for offset in range(30):
        day = today - timedelta(days=offset)
        for idx, book in enumerate(catalog):
            snapshots.append(
                AdSnapshot(
                    campaign_name=campaigns[idx].name,
                    ts_date=day,
                    impressions=400.0 + 10 * offset,
                    clicks=float(3 + offset % 4),
                    average_cpc=0.35,
                )
            )
            if offset % 3 == idx % 3:
                royalties.append(
                    RoyaltyStatement(
                        title=book.complete_title(),
                        royalty_date=day,
                        net_units_sold=1.0,
                        royalty=2.74,
                    )
                )
            reads.append(PageReadStatement(title=book.complete_title(), order_date=day, pages_read=120.0))
    try:
        await run_migrations(engine)
        await replace_records(engine, EntityKind.CATALOG, catalog)
        await replace_records(engine, EntityKind.CAMPAIGN, campaigns)
        await replace_records(engine, EntityKind.AD_SNAPSHOT, snapshots)
        await replace_records(engine, EntityKind.ROYALTY, royalties)
        await replace_records(engine, EntityKind.PAGE_READ, reads)
    finally:
        await engine.dispose()
    print("Seed complete")


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
