"""Series-level rollup of per-book metrics."""

from __future__ import annotations

from collections.abc import Sequence

from shelfwire.ingest.models import CatalogEntry
from shelfwire.logic import ratios
from shelfwire.logic.metrics import BookMetrics, ReadThrough, SeriesMetrics
from shelfwire.logic.ratios import SeriesIndex


def sum_book_metrics(series_name: str, books: Sequence[BookMetrics]) -> SeriesMetrics:
    """Add up the additive fields; ratios are derived from the sums."""
    totals = SeriesMetrics(series_name=series_name, books=list(books))
    for book in books:
        totals.impressions += book.impressions
        totals.clicks += book.clicks
        totals.units_sold += book.units_sold
        totals.pages_read += book.pages_read
        totals.units_sold_via_page_reads += book.units_sold_via_page_reads
        totals.ad_spend += book.ad_spend
        totals.earnings += book.earnings
    return totals


def apply_read_through(entries: Sequence[CatalogEntry], books: Sequence[BookMetrics]) -> None:
    """Fill ``read_through`` on ``books`` (parallel to ``entries``) in place."""
    index = SeriesIndex.build(entries)
    by_title = {book.title: book for book in books}
    for entry, book in zip(entries, books):
        successor = index.successor(entry)
        next_book = by_title.get(successor.title) if successor else None
        next_units = next_book.units_sold_total if next_book else None
        book.read_through = ratios.read_through(book.units_sold_total, next_units)


def read_through_rows(entries: Sequence[CatalogEntry], books: Sequence[BookMetrics]) -> list[ReadThrough]:
    index = SeriesIndex.build(entries)
    rows: list[ReadThrough] = []
    for entry, book in zip(entries, books):
        if entry.series_number is None:
            continue
        successor = index.successor(entry)
        rows.append(
            ReadThrough(
                title=entry.title,
                series_number=entry.series_number,
                next_title=successor.title if successor else None,
                ratio=book.read_through,
            )
        )
    rows.sort(key=lambda row: row.series_number)
    return rows
