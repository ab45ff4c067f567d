"""Record models shared by ingestion and analytics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(slots=True)
class CatalogEntry:
    title: str
    author: str = ""
    subtitle: str = ""
    short_code: str = ""
    series: str | None = None
    series_number: int | None = None
    asin: str = ""
    full_read_pages: float = 0.0

    def complete_title(self) -> str:
        if not self.subtitle:
            return self.title
        return f"{self.title}: {self.subtitle}"


@dataclass(slots=True)
class Campaign:
    name: str
    type: str = ""
    start_date: date | None = None
    end_date: date | None = None
    budget: float = 0.0
    linked_title: str | None = None
    linked_series: str | None = None

    @property
    def linked(self) -> bool:
        return bool(self.linked_title)


@dataclass(slots=True)
class AdSnapshot:
    campaign_name: str
    ts_date: date
    impressions: float | None = None
    clicks: float | None = None
    average_cpc: float | None = None

    @property
    def spend(self) -> float:
        if self.average_cpc is None or self.clicks is None:
            return 0.0
        return self.average_cpc * self.clicks


@dataclass(slots=True)
class RoyaltyStatement:
    title: str
    royalty_date: date
    net_units_sold: float | None = None
    royalty: float | None = None
    currency: str = "USD"


@dataclass(slots=True)
class PageReadStatement:
    title: str
    order_date: date
    pages_read: float | None = None
