"""Table definitions for the five record sets."""

from __future__ import annotations

from sqlalchemy import Column, Date, Float, Index, Integer, MetaData, Table, Text

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("title", Text, primary_key=True),
    Column("title_key", Text, nullable=False, index=True),
    Column("subtitle", Text, nullable=False, default=""),
    Column("author", Text, nullable=False, default=""),
    Column("short_code", Text, nullable=False, default=""),
    Column("series", Text, index=True),
    Column("series_number", Integer),
    Column("asin", Text, nullable=False, default=""),
    Column("full_read_pages", Float, nullable=False, default=0.0),
)

campaigns = Table(
    "campaigns",
    metadata,
    Column("name", Text, primary_key=True),
    Column("type", Text, nullable=False, default=""),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("budget", Float, nullable=False, default=0.0),
    Column("linked_title", Text, index=True),
    Column("linked_series", Text),
)

ad_snapshots = Table(
    "ad_snapshots",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("campaign_name", Text, nullable=False),
    Column("ts_date", Date, nullable=False),
    Column("impressions", Float),
    Column("clicks", Float),
    Column("average_cpc", Float),
    Index("ix_ad_snapshots_campaign_date", "campaign_name", "ts_date"),
)

royalty_statements = Table(
    "royalty_statements",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("title_key", Text, nullable=False),
    Column("royalty_date", Date, nullable=False),
    Column("net_units_sold", Float),
    Column("royalty", Float),
    Column("currency", Text, nullable=False, default="USD"),
    Index("ix_royalty_statements_key_date", "title_key", "royalty_date"),
)

page_reads = Table(
    "page_reads",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("title_key", Text, nullable=False),
    Column("order_date", Date, nullable=False),
    Column("pages_read", Float),
    Index("ix_page_reads_key_date", "title_key", "order_date"),
)
