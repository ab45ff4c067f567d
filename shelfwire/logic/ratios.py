"""Derived ratios with explicit zero-denominator handling.

Each ratio has its own policy. Click-through and conversion report a
sentinel when there were no clicks. ROI reports ``NO_AD_SPEND`` whenever
spend is zero. Read-through falls back to ``0.0`` and never uses a sentinel.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from shelfwire.ingest.models import CatalogEntry


class Sentinel(enum.Enum):
    NO_CLICKS = "No clicks were used in the selling of this product"
    NO_AD_SPEND = "No ad spend (great)"
    NO_SALES = "No sales (terrible)"

    def __str__(self) -> str:
        return self.value


Metric = float | Sentinel


def click_through(impressions: float, clicks: float) -> Metric:
    """Impressions per click."""
    if clicks == 0:
        return Sentinel.NO_CLICKS
    return impressions / clicks


def conversion(clicks: float, units_total: float) -> Metric:
    """Clicks per unit sold."""
    if clicks == 0:
        return Sentinel.NO_CLICKS
    if units_total == 0:
        return Sentinel.NO_SALES
    return clicks / units_total


def roi(earnings: float, ad_spend: float, *, no_sales_sentinel: bool = False) -> Metric:
    """Return on ad spend as a percentage.

    With ``no_sales_sentinel``, spend that earned nothing reports ``NO_SALES``
    instead of -100.0. Series totals use that form.
    """
    if ad_spend == 0:
        return Sentinel.NO_AD_SPEND
    if no_sales_sentinel and earnings == 0:
        return Sentinel.NO_SALES
    return (earnings - ad_spend) * 100.0 / ad_spend


def read_through(this_units: float, next_units: float | None) -> float:
    """Share of this book's sales carried on to its successor."""
    if next_units is None or this_units == 0:
        return 0.0
    return next_units / this_units


def roi_sort_key(value: Metric) -> float:
    if value is Sentinel.NO_AD_SPEND:
        return math.inf
    if isinstance(value, Sentinel):
        return -math.inf
    return value


def format_metric(value: Metric, *, suffix: str = "") -> str:
    if isinstance(value, Sentinel):
        return str(value)
    return f"{value:.1f}{suffix}"


@dataclass(slots=True)
class SeriesIndex:
    """(series, sequence number) lookup for successor resolution."""

    entries: dict[tuple[str, int], CatalogEntry] = field(default_factory=dict)

    @classmethod
    def build(cls, books: Iterable[CatalogEntry]) -> SeriesIndex:
        index = cls()
        for book in books:
            if book.series and book.series_number is not None:
                index.entries[(book.series, book.series_number)] = book
        return index

    def successor(self, book: CatalogEntry) -> CatalogEntry | None:
        if not book.series or book.series_number is None:
            return None
        return self.entries.get((book.series, book.series_number + 1))
