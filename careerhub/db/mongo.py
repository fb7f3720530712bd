# careerhub/db/mongo.py
from typing import Optional
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from careerhub.core.config import settings

logger = logging.getLogger(__name__)

_mongo_client: Optional[AsyncIOMotorClient] = None
_db_override: Optional[AsyncIOMotorDatabase] = None

def get_mongo_client() -> AsyncIOMotorClient:
    """
    Returns a cached Motor client.
    """
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = AsyncIOMotorClient(settings.MONGODB_URI)
    return _mongo_client

def get_db() -> AsyncIOMotorDatabase:
    if _db_override is not None:
        return _db_override
    client = get_mongo_client()
    return client[settings.MONGODB_DB]

def use_database(db: Optional[AsyncIOMotorDatabase]) -> None:
    """Point every repository at `db` (tests pass an in-memory database). None resets."""
    global _db_override
    _db_override = db

async def init_db() -> None:
    db = get_db()
    # equality filters used by the portal and dashboard screens
    await db["jobs"].create_index("slug")
    await db["applications"].create_index("candidate_uid")
    await db["applications"].create_index("job_id")
    await db["assessment_questions"].create_index("assessment_id")
    await db["assessment_sessions"].create_index([("candidate_uid", 1), ("assessment_id", 1)])
    await db["auth_accounts"].create_index("email", unique=True)
    logger.info("MongoDB ready (db=%s)", db.name)

def close_db() -> None:
    global _mongo_client
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
