"""CSV export of conversion reports."""

from __future__ import annotations

import csv
import os
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path

import boto3

from shelfwire.logic.metrics import BookMetrics, SeriesMetrics
from shelfwire.logic.ratios import format_metric
from shelfwire.utils.dates import format_date

OUTPUT_DIR = Path(os.environ.get("CSV_OUTPUT_DIR", "artifacts/csv"))

CSV_COLUMNS = [
    "name",
    "impressions",
    "clicks",
    "pages_read",
    "units_sold",
    "units_sold_via_page_reads",
    "units_sold_total",
    "click_through",
    "conversion",
    "ad_spend",
    "earnings",
    "roi",
    "read_through",
]


def generate_conversions_csv(
    books: Sequence[BookMetrics],
    as_of: date,
    window: str,
    *,
    series: Sequence[SeriesMetrics] = (),
    upload: bool = False,
) -> Path:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    file_path = OUTPUT_DIR / f"conversions-{window}-{format_date(as_of)}.csv"
    with file_path.open("w", newline="") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        writer.writerows(_rows(books, series))
    if upload:
        _upload_to_s3(file_path)
    return file_path


def _rows(books: Iterable[BookMetrics], series: Iterable[SeriesMetrics]) -> Iterable[dict[str, object]]:
    for book in books:
        yield {**_common(book.title, book), "read_through": round(book.read_through, 4)}
    for totals in series:
        yield {**_common(totals.series_name, totals), "read_through": None}


def _common(name: str, metrics: BookMetrics | SeriesMetrics) -> dict[str, object]:
    return {
        "name": name,
        "impressions": metrics.impressions,
        "clicks": metrics.clicks,
        "pages_read": metrics.pages_read,
        "units_sold": metrics.units_sold,
        "units_sold_via_page_reads": round(metrics.units_sold_via_page_reads, 2),
        "units_sold_total": round(metrics.units_sold_total, 2),
        "click_through": format_metric(metrics.click_through),
        "conversion": format_metric(metrics.conversion),
        "ad_spend": f"${metrics.ad_spend:.2f}",
        "earnings": f"${metrics.earnings:.2f}",
        "roi": format_metric(metrics.roi, suffix="%"),
    }


def _upload_to_s3(path: Path) -> None:
    bucket = os.environ.get("AWS_S3_BUCKET")
    if not bucket:
        return
    endpoint = os.environ.get("AWS_S3_ENDPOINT")
    session = boto3.session.Session()
    client = session.client(
        "s3",
        endpoint_url=endpoint,
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY"),
    )
    client.upload_file(str(path), bucket, path.name)
