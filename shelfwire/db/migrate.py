"""Database migration helpers."""

from __future__ import annotations

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from shelfwire.db.session import create_engine_from_env
from shelfwire.db.tables import metadata


async def run_migrations(engine: AsyncEngine) -> None:
    """Create any missing record tables."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def _migrate() -> None:
    engine = create_engine_from_env()
    try:
        await run_migrations(engine)
    finally:
        await engine.dispose()


def main() -> None:
    try:
        asyncio.run(_migrate())
    except SQLAlchemyError as exc:
        print(f"Migration failed: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
