"""Range totals, moving averages and daily series for one title."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import date, timedelta

import numpy as np
import pandas as pd

from shelfwire.ingest.models import AdSnapshot, PageReadStatement, RoyaltyStatement
from shelfwire.logic import ratios
from shelfwire.logic.metrics import AD_KINDS, AdPoint, DatedMetric, DatedValue, IntervalValue, MetricKind, MovingAverage
from shelfwire.logic.reducers import (
    PAGE_READ_RATE,
    ad_performance,
    ad_spend,
    page_reads_to_dollars,
    pages_read,
    royalty_total,
    total_earnings,
    units_sold,
)
from shelfwire.logic.resolver import JoinResolver

logger = logging.getLogger(__name__)

ROYALTY_KINDS = frozenset({MetricKind.UNITS_SOLD, MetricKind.ROYALTY})
PAGE_READ_KINDS = frozenset({MetricKind.PAGES_READ, MetricKind.PAGE_READ_REVENUE})


class UnsupportedMetricError(ValueError):
    pass


def padded_average(samples: Sequence[float], window: int) -> float:
    """Average over ``window`` slots, zero-filling the ones without a sample."""
    if window < 1:
        raise ValueError("window must be at least one day")
    padded = list(samples) + [0.0] * max(window - len(samples), 0)
    return float(np.mean(padded))


def _snapshot_value(kind: MetricKind, snapshot: AdSnapshot) -> float:
    if kind is MetricKind.IMPRESSIONS:
        return snapshot.impressions or 0.0
    if kind is MetricKind.CLICKS:
        return snapshot.clicks or 0.0
    return snapshot.spend


def _royalty_value(kind: MetricKind, statement: RoyaltyStatement) -> float:
    if kind is MetricKind.UNITS_SOLD:
        return statement.net_units_sold or 0.0
    return statement.royalty or 0.0


class WindowedAggregator:
    def __init__(self, resolver: JoinResolver, *, rate: float = PAGE_READ_RATE) -> None:
        self.resolver = resolver
        self.rate = rate

    async def range_metric(self, title: str, kind: MetricKind, start: date, end: date) -> float:
        """Total of ``kind`` for records dated within ``[start, end]``."""
        if kind in AD_KINDS:
            snapshots = await self.resolver.snapshots_for_title_between(title, start, end)
            if kind is MetricKind.AD_SPEND:
                return ad_spend(snapshots)
            performance = ad_performance(snapshots)
            return performance.impressions if kind is MetricKind.IMPRESSIONS else performance.clicks
        if kind in ROYALTY_KINDS:
            statements = await self.resolver.royalties_for_title_between(title, start, end)
            return units_sold(statements) if kind is MetricKind.UNITS_SOLD else royalty_total(statements)
        if kind in PAGE_READ_KINDS:
            pages = pages_read(await self.resolver.page_reads_for_title_between(title, start, end))
            return pages if kind is MetricKind.PAGES_READ else page_reads_to_dollars(pages, self.rate)
        royalties, reads = await asyncio.gather(
            self.resolver.royalties_for_title_between(title, start, end),
            self.resolver.page_reads_for_title_between(title, start, end),
        )
        return total_earnings(royalty_total(royalties), pages_read(reads), self.rate)

    async def moving_average(self, title: str, kind: MetricKind, anchor: date, window: int) -> MovingAverage:
        if window < 1:
            raise ValueError("window must be at least one day")
        if kind is MetricKind.PAGE_READ_REVENUE:
            pages = await self.moving_average(title, MetricKind.PAGES_READ, anchor, window)
            return MovingAverage(date=anchor, raw=[], average=page_reads_to_dollars(pages.average, self.rate))

        start = anchor - timedelta(days=window)
        raw: list[RoyaltyStatement] | list[PageReadStatement]
        if kind in ROYALTY_KINDS:
            raw = await self.resolver.royalties_for_title_between(title, start, anchor)
            samples = [_royalty_value(kind, statement) for statement in raw]
        elif kind is MetricKind.PAGES_READ:
            raw = await self.resolver.page_reads_for_title_between(title, start, anchor)
            samples = [statement.pages_read or 0.0 for statement in raw]
        else:
            raise UnsupportedMetricError(f"No moving average for {kind.value}")

        logger.debug("Averaging %s for %s over %d days: %s", kind.value, title, window, samples)
        return MovingAverage(date=anchor, raw=raw, average=padded_average(samples, window))

    async def roi(self, title: str, start: date, end: date) -> DatedMetric:
        earnings, spend = await asyncio.gather(
            self.range_metric(title, MetricKind.COMBINED_REVENUE, start, end),
            self.range_metric(title, MetricKind.AD_SPEND, start, end),
        )
        return DatedMetric(date=end, value=ratios.roi(earnings, spend))

    async def daily_series(self, title: str, kind: MetricKind, start: date, end: date) -> list[DatedValue]:
        """One value per day in ``[start, end]``; days without records are 0."""
        values = await self._dated_values(title, kind, start, end)
        index = pd.date_range(start, end, freq="D")
        if not values:
            series = pd.Series(0.0, index=index)
        else:
            frame = pd.DataFrame(values, columns=["date", "value"])
            frame["date"] = pd.to_datetime(frame["date"])
            series = frame.groupby("date")["value"].sum().reindex(index, fill_value=0.0)
        series = series.sort_index()
        return [DatedValue(date=stamp.date(), value=float(value)) for stamp, value in series.items()]

    async def clicks_per_sale(self, title: str, since: date | None = None) -> list[IntervalValue]:
        """Clicks per unit sold for each statement.

        Each statement owns the clicks dated after the previous statement up to
        and including its own date, so no day is counted twice.
        """
        statements = sorted(
            await self.resolver.royalties_for_title(title, since), key=lambda s: s.royalty_date
        )
        intervals = list(zip(statements, statements[1:]))
        clicks = await asyncio.gather(
            *(
                self.range_metric(
                    title, MetricKind.CLICKS, previous.royalty_date + timedelta(days=1), current.royalty_date
                )
                for previous, current in intervals
            )
        )
        result: list[IntervalValue] = []
        for (_, current), total in zip(intervals, clicks):
            sold = current.net_units_sold or 0.0
            if sold == 0:
                continue
            result.append(IntervalValue(value=total / sold, date=current.royalty_date))
        return result

    async def ad_chart(self, title: str, since: date | None = None) -> list[AdPoint]:
        snapshots = await self.resolver.snapshots_for_title(title, since)
        points = [
            AdPoint(
                date=snapshot.ts_date,
                campaign_name=snapshot.campaign_name,
                impressions=snapshot.impressions or 0.0,
                clicks=snapshot.clicks or 0.0,
                spend=snapshot.spend,
            )
            for snapshot in snapshots
            if (snapshot.clicks or 0.0) > 0 and (snapshot.impressions or 0.0) > 0
        ]
        points.sort(key=lambda point: (point.date, point.campaign_name))
        return points

    async def _dated_values(
        self, title: str, kind: MetricKind, start: date, end: date
    ) -> list[tuple[date, float]]:
        if kind in AD_KINDS:
            snapshots = await self.resolver.snapshots_for_title_between(title, start, end)
            return [(s.ts_date, _snapshot_value(kind, s)) for s in snapshots]
        royalties: list[RoyaltyStatement] = []
        reads: list[PageReadStatement] = []
        if kind in ROYALTY_KINDS:
            royalties = await self.resolver.royalties_for_title_between(title, start, end)
        elif kind in PAGE_READ_KINDS:
            reads = await self.resolver.page_reads_for_title_between(title, start, end)
        else:
            royalties, reads = await asyncio.gather(
                self.resolver.royalties_for_title_between(title, start, end),
                self.resolver.page_reads_for_title_between(title, start, end),
            )
        revenue_kind = MetricKind.UNITS_SOLD if kind is MetricKind.UNITS_SOLD else MetricKind.ROYALTY
        values = [(s.royalty_date, _royalty_value(revenue_kind, s)) for s in royalties]
        for statement in reads:
            pages = statement.pages_read or 0.0
            if kind is not MetricKind.PAGES_READ:
                pages = page_reads_to_dollars(pages, self.rate)
            values.append((statement.order_date, pages))
        return values
