#!/usr/bin/env python3
"""
Initialize the MongoDB collections and indexes UniMeal relies on.
Can be run from the host machine or inside the container.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pymongo.errors import PyMongoError

from adapters.mongo_adapter import build_store
from app.config import settings

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("unimeal.init_db")


def backfill_engagement_fields(store) -> None:
    """Give legacy meals the fields the engagement engine expects"""
    for name in (settings.meals_collection, settings.upcoming_meals_collection):
        col = store.collection(name)
        likes = col.update_many({"likes": {"$not": {"$type": "array"}}}, {"$set": {"likes": []}})
        reviews = col.update_many(
            {"reviews": {"$not": {"$type": "array"}}},
            {"$set": {"reviews": [], "rating": 0.0, "reviewCount": 0}},
        )
        version = col.update_many(
            {"reviewsVersion": {"$exists": False}}, {"$set": {"reviewsVersion": 0}}
        )
        logger.info(
            "%s: likes=%d reviews=%d reviewsVersion=%d documents backfilled",
            name,
            likes.modified_count,
            reviews.modified_count,
            version.modified_count,
        )


def main() -> int:
    logger.info("=" * 60)
    logger.info("%s database initialization (%s)", settings.app_name, settings.mongo_db_name)
    logger.info("=" * 60)

    store = build_store(settings)
    try:
        store.connect()
        store.ensure_indexes(settings)
        backfill_engagement_fields(store)
    except PyMongoError as e:
        logger.error("Failed to initialize MongoDB: %s", e)
        return 1
    finally:
        store.close()

    logger.info("MongoDB initialized successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
