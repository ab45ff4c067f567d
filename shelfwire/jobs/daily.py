"""Daily conversions report job."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from shelfwire.db.session import create_engine_from_env
from shelfwire.db.store import SqlRecordStore
from shelfwire.logic.export_csv import generate_conversions_csv
from shelfwire.logic.metrics import MetricKind
from shelfwire.logic.service import AnalyticsService
from shelfwire.utils.dates import LOOKBACK_WINDOWS, format_date, lookback_cutoff, parse_iso_date, today_in_tz

logger = logging.getLogger(__name__)

MOVING_AVERAGE_WINDOW = int(os.environ.get("MOVING_AVERAGE_WINDOW", 7))


async def run_daily(as_of: date | None = None, *, upload: bool = False) -> list[Path]:
    load_dotenv()
    engine = create_engine_from_env()
    target_date = as_of or today_in_tz()
    service = AnalyticsService(SqlRecordStore(engine))
    reports: list[Path] = []
    try:
        await _log_unlinked(service)
        for window in LOOKBACK_WINDOWS:
            since = lookback_cutoff(window, target_date)
            try:
                books = await service.all_book_metrics(since)
                series = await service.all_series_metrics(since)
            except SQLAlchemyError as exc:
                logger.warning("Skipping %s window: %s", window, exc)
                continue
            reports.append(generate_conversions_csv(books, target_date, window, series=series, upload=upload))
            logger.info("%s window: %d active books, %d series", window, len(books), len(series))
        await _log_trends(service, target_date)
    finally:
        await engine.dispose()
    return reports


async def _log_unlinked(service: AnalyticsService) -> None:
    names = [campaign.name for campaign in await service.resolver.unlinked_campaigns()]
    if names:
        logger.warning("%d campaigns are not linked to a title: %s", len(names), ", ".join(names))


async def _log_trends(service: AnalyticsService, as_of: date) -> None:
    books = await service.resolver.all_books()
    for book in books:
        units, pages = await asyncio.gather(
            service.moving_average(book.title, MetricKind.UNITS_SOLD, as_of, MOVING_AVERAGE_WINDOW),
            service.moving_average(book.title, MetricKind.PAGE_READ_REVENUE, as_of, MOVING_AVERAGE_WINDOW),
        )
        logger.info(
            "%s %s: %d-day avg %.2f units, $%.2f page-read revenue",
            format_date(as_of),
            book.title,
            MOVING_AVERAGE_WINDOW,
            units.average,
            pages.average,
        )


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    report_date = os.environ.get("REPORT_DATE")
    as_of = parse_iso_date(report_date) if report_date else None
    try:
        asyncio.run(run_daily(as_of, upload=True))
    except SQLAlchemyError as exc:
        print(f"Daily report failed: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
