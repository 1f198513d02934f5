"""
MongoDB integration.

This module opens the process‑wide client used by the application
(``connect_to_storage``) and closes it on shutdown
(``close_storage``).  The client is created once by the application
lifespan and the resulting database handle is passed down to the
repository, so tests can substitute any object exposing the same
collection API.

Connecting is fail‑fast: the server is pinged before the application
accepts traffic and a failure raises ``StorageError`` instead of
leaving the service half initialised.  There is no retry.
"""

import logging
from typing import Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from .config import Settings
from .errors import StorageError

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Build a client for ``settings.mongodb_uri``.

    The configured timeout bounds server selection, connection set up
    and individual socket operations, so a hung store surfaces as an
    error rather than a request that never completes.
    """
    timeout = settings.storage_timeout_ms
    return AsyncIOMotorClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
        socketTimeoutMS=timeout,
        tz_aware=True,
    )


async def connect_to_storage(settings: Settings) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """Open the client, ping the server and return ``(client, database)``."""
    try:
        client = create_client(settings)
    except PyMongoError as exc:
        logger.error("Invalid MongoDB connection string: %s", exc)
        raise StorageError(f"Could not connect to MongoDB: {exc}") from exc
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        logger.error("MongoDB connection error: %s", exc)
        raise StorageError(f"Could not connect to MongoDB: {exc}") from exc
    database = client.get_default_database(default=settings.database_name)
    logger.info("MongoDB connected successfully (database %s)", database.name)
    return client, database


def close_storage(client: AsyncIOMotorClient) -> None:
    client.close()
    logger.info("MongoDB connection closed")
