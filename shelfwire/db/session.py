"""Database engine helpers."""

from __future__ import annotations

import os

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


DEFAULT_DATABASE_URL = "postgresql+asyncpg://user:pass@db:5432/shelfwire"


def create_engine_from_env() -> AsyncEngine:
    """Create an async engine using the DATABASE_URL environment variable."""
    url = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
    return create_async_engine(url, pool_pre_ping=True)
