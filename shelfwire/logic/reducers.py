"""Null-safe folds over record streams.

Each reducer takes already-resolved records and returns a total. An absent
numeric field contributes zero. Folding never suspends and never raises for
missing data.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from shelfwire.ingest.models import AdSnapshot, PageReadStatement, RoyaltyStatement

PAGE_READ_RATE = 0.0046


@dataclass(frozen=True, slots=True)
class AdPerformance:
    impressions: float = 0.0
    clicks: float = 0.0


def _value(value: float | None) -> float:
    return 0.0 if value is None else float(value)


def ad_performance(snapshots: Iterable[AdSnapshot]) -> AdPerformance:
    impressions = 0.0
    clicks = 0.0
    for snapshot in snapshots:
        impressions += _value(snapshot.impressions)
        clicks += _value(snapshot.clicks)
    return AdPerformance(impressions=impressions, clicks=clicks)


def ad_spend(snapshots: Iterable[AdSnapshot]) -> float:
    total = 0.0
    for snapshot in snapshots:
        total += snapshot.spend
    return total


def units_sold(statements: Iterable[RoyaltyStatement]) -> float:
    total = 0.0
    for statement in statements:
        total += _value(statement.net_units_sold)
    return total


def royalty_total(statements: Iterable[RoyaltyStatement]) -> float:
    total = 0.0
    for statement in statements:
        total += _value(statement.royalty)
    return total


def pages_read(statements: Iterable[PageReadStatement]) -> float:
    total = 0.0
    for statement in statements:
        total += _value(statement.pages_read)
    return total


def units_via_page_reads(pages: float, full_read_pages: float) -> float:
    """Whole-book equivalents of ``pages``; 0 when the page count is unset."""
    if full_read_pages >= 1.0:
        return pages / full_read_pages
    return 0.0


def page_reads_to_dollars(pages: float, rate: float = PAGE_READ_RATE) -> float:
    return pages * rate


def total_earnings(royalty: float, pages: float, rate: float = PAGE_READ_RATE) -> float:
    return royalty + page_reads_to_dollars(pages, rate)
