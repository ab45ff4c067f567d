"""Join resolution across catalog, campaigns, snapshots and statements."""

from __future__ import annotations

import asyncio
from datetime import date

from shelfwire.db.store import EntityKind, RecordStore, collect
from shelfwire.ingest.models import AdSnapshot, Campaign, CatalogEntry, PageReadStatement, RoyaltyStatement
from shelfwire.ingest.titles import title_key


class JoinResolver:
    """Read-side joins. Missing data comes back as empty lists."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def catalog_entry(self, title: str) -> CatalogEntry | None:
        entries = await collect(self.store.find_by_key(EntityKind.CATALOG, title))
        return entries[0] if entries else None

    async def all_books(self) -> list[CatalogEntry]:
        return await collect(self.store.find_all(EntityKind.CATALOG))

    async def books_in_series(self, series: str) -> list[CatalogEntry]:
        return await collect(self.store.find_by_key(EntityKind.CATALOG, series, by="series"))

    async def all_series(self) -> list[str]:
        books = await self.all_books()
        return sorted({book.series for book in books if book.series})

    async def campaigns_for_title(self, title: str) -> list[str]:
        linked = await collect(self.store.find_by_key(EntityKind.CAMPAIGN, title, by="linked_title"))
        return [campaign.name for campaign in linked if campaign.linked]

    async def unlinked_campaigns(self) -> list[Campaign]:
        campaigns = await collect(self.store.find_all(EntityKind.CAMPAIGN))
        return [campaign for campaign in campaigns if not campaign.linked]

    async def snapshots_for_campaign(self, name: str, since: date | None = None) -> list[AdSnapshot]:
        if since is None:
            return await collect(self.store.find_by_key(EntityKind.AD_SNAPSHOT, name))
        return await collect(self.store.find_by_key_after_date(EntityKind.AD_SNAPSHOT, name, since))

    async def snapshots_for_campaign_between(self, name: str, start: date, end: date) -> list[AdSnapshot]:
        return await collect(self.store.find_by_key_in_date_range(EntityKind.AD_SNAPSHOT, name, start, end))

    async def snapshots_for_title(self, title: str, since: date | None = None) -> list[AdSnapshot]:
        names = await self.campaigns_for_title(title)
        batches = await asyncio.gather(*(self.snapshots_for_campaign(name, since) for name in names))
        return [snapshot for batch in batches for snapshot in batch]

    async def snapshots_for_title_between(self, title: str, start: date, end: date) -> list[AdSnapshot]:
        names = await self.campaigns_for_title(title)
        batches = await asyncio.gather(
            *(self.snapshots_for_campaign_between(name, start, end) for name in names)
        )
        return [snapshot for batch in batches for snapshot in batch]

    async def royalties_for_title(self, title: str, since: date | None = None) -> list[RoyaltyStatement]:
        key = title_key(title)
        if since is None:
            return await collect(self.store.find_by_key(EntityKind.ROYALTY, key))
        return await collect(self.store.find_by_key_after_date(EntityKind.ROYALTY, key, since))

    async def royalties_for_title_between(self, title: str, start: date, end: date) -> list[RoyaltyStatement]:
        key = title_key(title)
        return await collect(self.store.find_by_key_in_date_range(EntityKind.ROYALTY, key, start, end))

    async def page_reads_for_title(self, title: str, since: date | None = None) -> list[PageReadStatement]:
        key = title_key(title)
        if since is None:
            return await collect(self.store.find_by_key(EntityKind.PAGE_READ, key))
        return await collect(self.store.find_by_key_after_date(EntityKind.PAGE_READ, key, since))

    async def page_reads_for_title_between(
        self, title: str, start: date, end: date
    ) -> list[PageReadStatement]:
        key = title_key(title)
        return await collect(self.store.find_by_key_in_date_range(EntityKind.PAGE_READ, key, start, end))
