import csv
from datetime import date

from shelfwire.logic import export_csv
from shelfwire.logic.metrics import BookMetrics
from shelfwire.logic.rollup import sum_book_metrics


def test_generate_conversions_csv(monkeypatch, tmp_path):
    monkeypatch.setattr(export_csv, "OUTPUT_DIR", tmp_path)
    books = [
        BookMetrics("Darklight", impressions=1700, clicks=16, units_sold=3, pages_read=400, full_read_pages=400, ad_spend=7.0, earnings=9.34, read_through=0.375),
        BookMetrics("Quiet Harbor"),
    ]
    series = [sum_book_metrics("Ember Saga", books[:1])]

    path = export_csv.generate_conversions_csv(books, date(2018, 8, 10), "30days", series=series)

    assert path.name == "conversions-30days-2018-08-10.csv"
    with path.open() as handle:
        rows = list(csv.DictReader(handle))
    assert [row["name"] for row in rows] == ["Darklight", "Quiet Harbor", "Ember Saga"]
    assert rows[0]["click_through"] == "106.2"
    assert rows[0]["roi"] == "33.4%"
    assert rows[0]["ad_spend"] == "$7.00"
    assert rows[0]["read_through"] == "0.375"
    assert rows[1]["roi"] == "No ad spend (great)"
    assert rows[1]["conversion"] == "No clicks were used in the selling of this product"
    assert rows[2]["read_through"] == ""
