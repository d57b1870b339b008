"""
MongoDB connection helpers.

``connect_mongo`` opens a client, pings the server once and returns
the configured database, or ``None`` when the server cannot be
reached.  ``ensure_indexes`` declares the indexes used by the
queries in ``stores.mongo_store``; creating an existing index is a
no‑op in MongoDB so the function may run on every start.
"""

import logging
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import settings


logger = logging.getLogger(__name__)

USERS = "users"
SERVICES = "services"
CONTACTS = "contacts"


def connect_mongo(
    uri: Optional[str] = None,
    db_name: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> Optional[Database]:
    """Return a live database handle or ``None`` if MongoDB is unavailable.

    Missing arguments are taken from ``settings``.  An empty URI means
    MongoDB is not configured and no connection is attempted.
    """
    uri = settings.mongodb_uri if uri is None else uri
    db_name = db_name or settings.mongodb_db
    timeout_ms = timeout_ms or settings.mongodb_timeout_ms
    if not uri:
        logger.info("MONGODB_URI is not set")
        return None
    client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        logger.warning("MongoDB at %s is not reachable: %s", uri, exc)
        client.close()
        return None
    return client[db_name]


def ensure_indexes(db: Database) -> None:
    """Create the indexes the stores rely on."""
    db[USERS].create_index([("email", ASCENDING)], unique=True)
    db[SERVICES].create_index([("category", ASCENDING), ("is_active", ASCENDING)])
    db[SERVICES].create_index([("order", ASCENDING)])
    db[CONTACTS].create_index([("status", ASCENDING), ("priority", ASCENDING)])
    db[CONTACTS].create_index([("created_at", DESCENDING)])
