"""
Motor client factory and collection bootstrap for MongoDB.
"""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from config.settings import Settings

logger = logging.getLogger(__name__)

TODOS = "todos"
USERS = "users"


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Build the process-wide client; connections are opened lazily."""
    return AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    """Database named in the URI, falling back to ``settings.mongodb_database``."""
    return client.get_default_database(settings.mongodb_database)


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the repositories rely on (idempotent)."""
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
    await db[USERS].create_index([("tokens.token", ASCENDING)])
    logger.info("Indexes ensured on %s", USERS)
