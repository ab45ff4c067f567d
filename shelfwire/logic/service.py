"""Analytics entry points used by reports and jobs.

``AnalyticsService`` is a thin coordinator. It resolves records through
``JoinResolver``, folds them with the reducers, and assembles
``BookMetrics``/``SeriesMetrics``. Every call is a pure function of the
current store contents, so repeating a call against an unchanged store gives
the same result.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from shelfwire.db.store import RecordStore
from shelfwire.ingest.models import CatalogEntry
from shelfwire.logic import ratios
from shelfwire.logic.metrics import (
    AdPoint,
    BookMetrics,
    DatedMetric,
    DatedValue,
    IntervalValue,
    MetricKind,
    MovingAverage,
    ReadThrough,
    SeriesMetrics,
)
from shelfwire.logic.ratios import SeriesIndex
from shelfwire.logic.reducers import (
    PAGE_READ_RATE,
    ad_performance,
    ad_spend,
    pages_read,
    royalty_total,
    total_earnings,
    units_sold,
    units_via_page_reads,
)
from shelfwire.logic.resolver import JoinResolver
from shelfwire.logic.rollup import apply_read_through, read_through_rows, sum_book_metrics
from shelfwire.logic.windows import WindowedAggregator
from shelfwire.utils.concurrency import FANOUT_CONCURRENCY, bounded_gather

logger = logging.getLogger(__name__)


def _series_order(entry: CatalogEntry) -> tuple[bool, int, str]:
    return (entry.series_number is None, entry.series_number or 0, entry.title)


class AnalyticsService:
    def __init__(
        self,
        store: RecordStore,
        *,
        rate: float = PAGE_READ_RATE,
        concurrency: int = FANOUT_CONCURRENCY,
    ) -> None:
        self.resolver = JoinResolver(store)
        self.windows = WindowedAggregator(self.resolver, rate=rate)
        self.rate = rate
        self.concurrency = concurrency

    async def book_metrics(self, title: str, since: date | None = None) -> BookMetrics:
        entry = await self.resolver.catalog_entry(title) or CatalogEntry(title=title)
        metrics = await self._book_totals(entry, since)
        if entry.series and entry.series_number is not None:
            index = SeriesIndex.build(await self.resolver.books_in_series(entry.series))
            successor = index.successor(entry)
            if successor is not None:
                next_units = await self._units_total(successor, since)
                metrics.read_through = ratios.read_through(metrics.units_sold_total, next_units)
        return metrics

    async def all_book_metrics(self, since: date | None = None, *, active_only: bool = True) -> list[BookMetrics]:
        """Every catalog entry's metrics, best ROI first."""
        entries = await self.resolver.all_books()
        books = await bounded_gather(
            lambda entry: self._book_totals(entry, since), entries, concurrency=self.concurrency
        )
        apply_read_through(entries, books)
        if active_only:
            books = [book for book in books if book.impressions > 0]
        books.sort(key=lambda book: ratios.roi_sort_key(book.roi), reverse=True)
        return books

    async def series_metrics(self, series: str, since: date | None = None) -> SeriesMetrics:
        entries = sorted(await self.resolver.books_in_series(series), key=_series_order)
        books = await bounded_gather(
            lambda entry: self._book_totals(entry, since), entries, concurrency=self.concurrency
        )
        apply_read_through(entries, books)
        return sum_book_metrics(series, books)

    async def all_series_metrics(self, since: date | None = None) -> list[SeriesMetrics]:
        names = await self.resolver.all_series()
        results = await bounded_gather(
            lambda name: self.series_metrics(name, since), names, concurrency=self.concurrency
        )
        results.sort(key=lambda series: ratios.roi_sort_key(series.roi), reverse=True)
        return results

    async def read_through(self, series: str, since: date | None = None) -> list[ReadThrough]:
        entries = sorted(await self.resolver.books_in_series(series), key=_series_order)
        books = await bounded_gather(
            lambda entry: self._book_totals(entry, since), entries, concurrency=self.concurrency
        )
        apply_read_through(entries, books)
        return read_through_rows(entries, books)

    async def range_metric(self, title: str, kind: MetricKind, start: date, end: date) -> float:
        return await self.windows.range_metric(title, kind, start, end)

    async def series_range_metric(self, series: str, kind: MetricKind, start: date, end: date) -> float:
        entries = await self.resolver.books_in_series(series)
        values = await bounded_gather(
            lambda entry: self.windows.range_metric(entry.title, kind, start, end),
            entries,
            concurrency=self.concurrency,
        )
        return sum(values, 0.0)

    async def moving_average(self, title: str, kind: MetricKind, anchor: date, window: int) -> MovingAverage:
        return await self.windows.moving_average(title, kind, anchor, window)

    async def roi(self, title: str, start: date, end: date) -> DatedMetric:
        return await self.windows.roi(title, start, end)

    async def daily_series(self, title: str, kind: MetricKind, start: date, end: date) -> list[DatedValue]:
        return await self.windows.daily_series(title, kind, start, end)

    async def clicks_per_sale(self, title: str, since: date | None = None) -> list[IntervalValue]:
        return await self.windows.clicks_per_sale(title, since)

    async def ad_chart(self, title: str, since: date | None = None) -> list[AdPoint]:
        return await self.windows.ad_chart(title, since)

    async def _book_totals(self, entry: CatalogEntry, since: date | None) -> BookMetrics:
        snapshots, royalties, reads = await asyncio.gather(
            self.resolver.snapshots_for_title(entry.title, since),
            self.resolver.royalties_for_title(entry.title, since),
            self.resolver.page_reads_for_title(entry.title, since),
        )
        performance = ad_performance(snapshots)
        royalty = royalty_total(royalties)
        pages = pages_read(reads)
        logger.debug("%s: totaling up $%.2f along with %.0f pages read", entry.title, royalty, pages)
        return BookMetrics(
            title=entry.title,
            impressions=performance.impressions,
            clicks=performance.clicks,
            units_sold=units_sold(royalties),
            pages_read=pages,
            full_read_pages=entry.full_read_pages,
            ad_spend=ad_spend(snapshots),
            earnings=total_earnings(royalty, pages, self.rate),
        )

    async def _units_total(self, entry: CatalogEntry, since: date | None) -> float:
        royalties, reads = await asyncio.gather(
            self.resolver.royalties_for_title(entry.title, since),
            self.resolver.page_reads_for_title(entry.title, since),
        )
        return units_sold(royalties) + units_via_page_reads(pages_read(reads), entry.full_read_pages)
