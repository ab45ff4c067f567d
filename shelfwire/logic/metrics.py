"""Computed, never-persisted metric results."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Any, NamedTuple

from shelfwire.logic import ratios
from shelfwire.logic.ratios import Metric
from shelfwire.logic.reducers import units_via_page_reads


class MetricKind(enum.Enum):
    UNITS_SOLD = "units_sold"
    ROYALTY = "royalty"
    PAGES_READ = "pages_read"
    PAGE_READ_REVENUE = "page_read_revenue"
    COMBINED_REVENUE = "combined_revenue"
    IMPRESSIONS = "impressions"
    CLICKS = "clicks"
    AD_SPEND = "ad_spend"


AD_KINDS = frozenset({MetricKind.IMPRESSIONS, MetricKind.CLICKS, MetricKind.AD_SPEND})


@dataclass(slots=True)
class BookMetrics:
    title: str
    impressions: float = 0.0
    clicks: float = 0.0
    units_sold: float = 0.0
    pages_read: float = 0.0
    full_read_pages: float = 0.0
    ad_spend: float = 0.0
    earnings: float = 0.0
    read_through: float = 0.0

    @property
    def units_sold_via_page_reads(self) -> float:
        return units_via_page_reads(self.pages_read, self.full_read_pages)

    @property
    def units_sold_total(self) -> float:
        return self.units_sold + self.units_sold_via_page_reads

    @property
    def click_through(self) -> Metric:
        return ratios.click_through(self.impressions, self.clicks)

    @property
    def conversion(self) -> Metric:
        return ratios.conversion(self.clicks, self.units_sold_total)

    @property
    def roi(self) -> Metric:
        return ratios.roi(self.earnings, self.ad_spend)


@dataclass(slots=True)
class SeriesMetrics:
    series_name: str
    impressions: float = 0.0
    clicks: float = 0.0
    units_sold: float = 0.0
    pages_read: float = 0.0
    units_sold_via_page_reads: float = 0.0
    ad_spend: float = 0.0
    earnings: float = 0.0
    books: list[BookMetrics] = field(default_factory=list)

    @property
    def units_sold_total(self) -> float:
        return self.units_sold + self.units_sold_via_page_reads

    @property
    def click_through(self) -> Metric:
        return ratios.click_through(self.impressions, self.clicks)

    @property
    def conversion(self) -> Metric:
        return ratios.conversion(self.clicks, self.units_sold_total)

    @property
    def roi(self) -> Metric:
        return ratios.roi(self.earnings, self.ad_spend, no_sales_sentinel=True)


@dataclass(slots=True)
class MovingAverage:
    date: date
    raw: list[Any]
    average: float


class DatedValue(NamedTuple):
    date: date
    value: float


class DatedMetric(NamedTuple):
    date: date
    value: Metric


class IntervalValue(NamedTuple):
    value: float
    date: date


@dataclass(slots=True)
class AdPoint:
    date: date
    campaign_name: str
    impressions: float
    clicks: float
    spend: float


@dataclass(slots=True)
class ReadThrough:
    title: str
    series_number: int
    next_title: str | None
    ratio: float
