# teamboard/db/database.py
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from teamboard.core.config import settings

logger = logging.getLogger(__name__)

USERS = "users"
BOARDS = "boards"
SKILLS = "skills"


class MongoDatabase:
    client: Optional[AsyncIOMotorClient] = None
    db_name: str = settings.MONGO_DB_NAME

    @classmethod
    def connect(cls, mongo_url: Optional[str] = None):
        if cls.client is None:
            cls.client = AsyncIOMotorClient(mongo_url or settings.MONGO_URL)
            logger.info("MongoDB client created for database %s", cls.db_name)
        return cls.client

    @classmethod
    def close(cls):
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            logger.info("Closed MongoDB connection")

    @classmethod
    def get_db(cls):
        if cls.client is None:
            cls.connect()
        return cls.client[cls.db_name]

    @classmethod
    def get_collection(cls, collection_name: str):
        return cls.get_db()[collection_name]


def user_collection():
    return MongoDatabase.get_collection(USERS)


def board_collection():
    return MongoDatabase.get_collection(BOARDS)


def skill_collection():
    return MongoDatabase.get_collection(SKILLS)


async def create_indexes():
    await user_collection().create_index("email", unique=True)
    await user_collection().create_index("username", unique=True)
    await skill_collection().create_index("value", unique=True)
    await board_collection().create_index("members")
