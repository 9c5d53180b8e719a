"""
Database connection management for MongoDB.

A single process-wide client is opened lazily on the first request. The
connect attempt is shared as one asyncio task, so concurrent first requests
all wait on the same attempt instead of racing to open their own client.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import get_settings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], Awaitable[AsyncIOMotorClient]]


async def open_mongo_client() -> AsyncIOMotorClient:
    """
    Create a client for the configured cluster and verify it is reachable.

    Motor connects lazily, so a ping forces server selection here rather than
    on the first real query.
    """
    settings = get_settings()
    client = AsyncIOMotorClient(settings.mongodb_uri)
    try:
        await client.admin.command("ping")
    except Exception:
        client.close()
        raise
    logger.info("Connected to MongoDB")
    return client


class ConnectionManager:
    """Owns the shared MongoDB client and its one-time initialization."""

    def __init__(self, factory: ClientFactory = open_mongo_client):
        self._factory = factory
        self._client: Optional[AsyncIOMotorClient] = None
        self._connecting: Optional[asyncio.Task] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def acquire(self) -> AsyncIOMotorClient:
        """
        Return the shared client, connecting on first use.

        Only one connect runs at a time. If it fails, every waiter gets the
        error and the next call starts a fresh attempt.
        """
        if self._client is not None:
            return self._client

        if self._connecting is None:
            self._connecting = asyncio.ensure_future(self._connect())

        return await asyncio.shield(self._connecting)

    async def _connect(self) -> AsyncIOMotorClient:
        try:
            self._client = await self._factory()
            return self._client
        finally:
            self._connecting = None

    def close(self) -> None:
        """Close the shared client if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None


# Global connection manager
_connection_manager = ConnectionManager()


def get_connection_manager() -> ConnectionManager:
    """Get the process-wide connection manager."""
    return _connection_manager


async def get_mongo_client() -> AsyncIOMotorClient:
    """Get or create MongoDB client."""
    return await _connection_manager.acquire()


async def close_connections():
    """Close all database connections."""
    _connection_manager.close()
