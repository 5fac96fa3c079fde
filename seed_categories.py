#!/usr/bin/env python3
"""
Standalone script to seed the system-default categories
Usage: python seed_categories.py
"""

import asyncio
import logging
from expense_tracker.core.database import AsyncSessionLocal, engine
from expense_tracker.crud.category import SYSTEM_CATEGORIES, seed_system_categories
# Register every table on the metadata before touching the categories
from expense_tracker.core import auth  # noqa: F401
from expense_tracker.models import transaction  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

async def seed():
    logger.info("🌱 Seeding default categories...")

    try:
        async with AsyncSessionLocal() as session:
            created = await seed_system_categories(session)
        for category in created:
            logger.info(f"✅ Seeded category: {category.icon} {category.name}")
        skipped = len(SYSTEM_CATEGORIES) - len(created)
        if skipped:
            logger.info(f"⏭️  {skipped} categories already exist")
    finally:
        await engine.dispose()

    logger.info("✅ Default categories seeded successfully!")

if __name__ == "__main__":
    asyncio.run(seed())
