"""
MongoDB connection and collections

MongoDB stores:
- users: accounts, profile, skills, resume record, activity log
- jobs: postings with skill requirements and applicants
- courses: course catalogue with taught skills

The client is process-scoped: created lazily on first use (or injected with
set_mongo_client) and released by close_mongo_client on shutdown.
"""
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None


def set_mongo_client(client: Optional[MongoClient]) -> None:
    """Install the client used by every collection service (tests inject one here)."""
    global _client
    _client = client


def get_mongo_client() -> MongoClient:
    """Get or create the process-wide MongoDB client."""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def close_mongo_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def get_mongo_db() -> Database:
    """Get the portal database"""
    return get_mongo_client()[settings.mongodb_db]


def get_collection(name: str) -> Collection:
    """Collection by name; see COLLECTIONS."""
    return get_mongo_db()[name]


def test_mongo_connection() -> bool:
    """Ping the server; False (and a warning) when it cannot be reached."""
    try:
        get_mongo_client().admin.command("ping")
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection names
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "courses": "courses",
}


def init_mongo_indexes():
    """Idempotent; run on app startup and by the seed script."""
    db = get_mongo_db()

    # One account per email
    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["users"]].create_index("skills.name")

    db[COLLECTIONS["jobs"]].create_index("status")
    db[COLLECTIONS["jobs"]].create_index("requirements.skills.name")
    db[COLLECTIONS["jobs"]].create_index("applicants.user")
    db[COLLECTIONS["jobs"]].create_index([("created_at", ASCENDING)])

    db[COLLECTIONS["courses"]].create_index("status")
    db[COLLECTIONS["courses"]].create_index("skills.name")

    logger.info("MongoDB indexes created successfully")
