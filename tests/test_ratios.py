import math

import pytest

from shelfwire.ingest.models import CatalogEntry
from shelfwire.logic import ratios
from shelfwire.logic.ratios import SeriesIndex, Sentinel


def test_click_through():
    assert ratios.click_through(1000, 10) == 100.0
    assert ratios.click_through(1000, 0) is Sentinel.NO_CLICKS


def test_conversion():
    assert ratios.conversion(16, 4) == 4.0
    assert ratios.conversion(0, 4) is Sentinel.NO_CLICKS
    assert ratios.conversion(0, 0) is Sentinel.NO_CLICKS
    assert ratios.conversion(5, 0) is Sentinel.NO_SALES


def test_roi():
    assert ratios.roi(15.0, 10.0) == pytest.approx(50.0)
    assert ratios.roi(0.0, 10.0) == pytest.approx(-100.0)


def test_roi_without_spend_is_sentinel():
    assert ratios.roi(0.0, 0.0) is Sentinel.NO_AD_SPEND
    assert ratios.roi(25.0, 0.0) is Sentinel.NO_AD_SPEND


def test_read_through_defaults_to_zero():
    assert ratios.read_through(4.0, None) == 0.0
    assert not isinstance(ratios.read_through(4.0, None), Sentinel)
    assert ratios.read_through(0.0, 3.0) == 0.0
    assert ratios.read_through(4.0, 1.0) == 0.25


def test_roi_sort_key_orders_sentinels():
    values = [12.5, Sentinel.NO_AD_SPEND, -40.0, Sentinel.NO_SALES]
    ordered = sorted(values, key=ratios.roi_sort_key, reverse=True)
    assert ordered == [Sentinel.NO_AD_SPEND, 12.5, -40.0, Sentinel.NO_SALES]
    assert ratios.roi_sort_key(Sentinel.NO_CLICKS) == -math.inf


def test_format_metric():
    assert ratios.format_metric(33.4285, suffix="%") == "33.4%"
    assert ratios.format_metric(Sentinel.NO_AD_SPEND) == "No ad spend (great)"


def test_series_index_successor():
    first = CatalogEntry(title="One", series="S", series_number=1)
    second = CatalogEntry(title="Two", series="S", series_number=2)
    loose = CatalogEntry(title="Loose")
    index = SeriesIndex.build([first, second, loose])
    assert index.successor(first) is second
    assert index.successor(second) is None
    assert index.successor(loose) is None


def test_series_roi_reports_no_sales():
    assert ratios.roi(0.0, 8.5, no_sales_sentinel=True) is Sentinel.NO_SALES
    assert ratios.roi(0.0, 0.0, no_sales_sentinel=True) is Sentinel.NO_AD_SPEND
    assert ratios.roi(17.0, 8.5, no_sales_sentinel=True) == pytest.approx(100.0)
    assert ratios.roi(0.0, 8.5) == pytest.approx(-100.0)
