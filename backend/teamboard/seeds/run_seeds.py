import asyncio
import logging

from teamboard.db.database import MongoDatabase, create_indexes
from teamboard.seeds.seed_skills import seed_skills

logger = logging.getLogger(__name__)


async def main():
    logger.info("Starting DB seeding...")
    await create_indexes()
    count = await seed_skills()
    logger.info("Seeded %d skills", count)
    MongoDatabase.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
