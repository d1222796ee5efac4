#!/usr/bin/env python3
"""
Tag legacy service records.

Older rows store parts_used items without a serviceType tag, so the edit
form has to guess which service each item belongs to. This script rewrites
those rows once with explicit tags.

Usage:
    python scripts/tag_legacy_service_records.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add server directory to path
sys.path.append(str(Path(__file__).parent.parent / "server"))

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from servicebook.config import settings
from servicebook.tools.service_record_tools import retag_legacy_records

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def main() -> int:
    if not settings.DATABASE_URL:
        logger.error("DATABASE_URL is not set")
        return 1

    engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with async_session_maker() as db:
            result = await retag_legacy_records(db)
    finally:
        await engine.dispose()

    if not result["success"]:
        logger.error(f"{result['message']}: {result['error']}")
        return 1

    data = result["data"]
    print(f"Scanned {data['scanned']} records, tagged {data['updated']}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
