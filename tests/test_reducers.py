from datetime import date

import pytest

from shelfwire.ingest.models import AdSnapshot, PageReadStatement, RoyaltyStatement
from shelfwire.logic import reducers

DAY = date(2018, 8, 1)


def test_ad_performance_skips_missing_fields():
    snapshots = [
        AdSnapshot("a", DAY, impressions=100, clicks=None),
        AdSnapshot("a", DAY, impressions=None, clicks=7),
        AdSnapshot("b", DAY, impressions=50, clicks=3),
    ]
    result = reducers.ad_performance(snapshots)
    assert result.impressions == 150
    assert result.clicks == 10


def test_ad_performance_empty_is_zero():
    assert reducers.ad_performance([]) == reducers.AdPerformance(0.0, 0.0)


def test_ad_spend_requires_cpc_and_clicks():
    snapshots = [
        AdSnapshot("a", DAY, clicks=10, average_cpc=0.5),
        AdSnapshot("a", DAY, clicks=10, average_cpc=None),
        AdSnapshot("a", DAY, clicks=None, average_cpc=0.8),
    ]
    assert reducers.ad_spend(snapshots) == 5.0


def test_statement_reducers_are_null_safe():
    royalties = [
        RoyaltyStatement("T", DAY, net_units_sold=2, royalty=3.5),
        RoyaltyStatement("T", DAY, net_units_sold=None, royalty=None),
    ]
    reads = [PageReadStatement("T", DAY, pages_read=120), PageReadStatement("T", DAY, pages_read=None)]
    assert reducers.units_sold(royalties) == 2
    assert reducers.royalty_total(royalties) == 3.5
    assert reducers.pages_read(reads) == 120


def test_units_via_page_reads_needs_page_count():
    assert reducers.units_via_page_reads(600, 300) == 2.0
    assert reducers.units_via_page_reads(600, 0.5) == 0.0
    assert reducers.units_via_page_reads(600, 0) == 0.0


def test_total_earnings_uses_page_rate():
    assert reducers.total_earnings(10.0, 1000) == pytest.approx(14.6)
    assert reducers.total_earnings(10.0, 1000, rate=0.01) == pytest.approx(20.0)
