"""
Database module - MongoDB connection.
"""
from career_portal.db.mongodb import (
    get_mongo_db,
    get_collection,
    set_mongo_client,
    close_mongo_client,
    test_mongo_connection,
)

__all__ = [
    "get_mongo_db",
    "get_collection",
    "set_mongo_client",
    "close_mongo_client",
    "test_mongo_connection",
]
