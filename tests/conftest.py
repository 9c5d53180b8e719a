"""
Global test fixtures for the Mongo Query Gateway.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Connection managers bound to mock clients
- Document factories with known ObjectId / oplog timestamps
- FastAPI test clients
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId, Timestamp
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_metrics_db(mock_async_mongo_client):
    """Provide mock metrics database with a results collection."""
    db = mock_async_mongo_client["metrics"]
    await db.results.insert_many([
        {"name": "p90", "Percentile": 90},
        {"name": "p50", "Percentile": 50},
        {"name": "p99", "Percentile": 99},
    ])
    yield db


# =============================================================================
# Connection Manager Fixtures
# =============================================================================

def make_connection_manager(client: Any):
    """
    Build a ConnectionManager whose connect step returns the given client.

    Args:
        client: Any object standing in for AsyncIOMotorClient

    Returns:
        Tuple of (manager, factory mock) so tests can count connects
    """
    from app.database.connections import ConnectionManager

    factory = AsyncMock(return_value=client)
    return ConnectionManager(factory), factory


@pytest.fixture
def mongomock_connections(mock_async_mongo_client):
    """ConnectionManager backed by the mongomock-motor client."""
    manager, _ = make_connection_manager(mock_async_mongo_client)
    return manager


@pytest.fixture
def failing_connections():
    """ConnectionManager whose connect always fails."""
    from app.database.connections import ConnectionManager

    factory = AsyncMock(side_effect=ConnectionError("mongo-secret-host:27017 refused connection"))
    return ConnectionManager(factory)


# =============================================================================
# Driver Mock Helpers
# =============================================================================

def make_cursor(documents: list[dict]) -> MagicMock:
    """
    Create a chainable cursor mock: find(...).sort(...).limit(...).to_list(...).
    """
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


def make_driver_client(
    database_names: list[str] | None = None,
    collection_names: list[str] | None = None,
    documents: list[dict] | None = None,
) -> MagicMock:
    """
    Create a MagicMock shaped like AsyncIOMotorClient.

    client[db] and client[db][collection] resolve to the same mocks for any
    name, so configured results apply to every lookup.
    """
    client = MagicMock()
    client.list_database_names = AsyncMock(return_value=database_names or [])

    database = MagicMock()
    database.list_collection_names = AsyncMock(return_value=collection_names or [])
    client.__getitem__.return_value = database

    collection = MagicMock()
    collection.find.return_value = make_cursor(documents or [])
    database.__getitem__.return_value = collection

    return client


# =============================================================================
# Timestamp Fixtures
# =============================================================================

@pytest.fixture
def insert_time() -> datetime:
    """Creation time of the newest document."""
    return datetime(2024, 10, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def update_time() -> datetime:
    """Time of a later update to an existing document."""
    return datetime(2024, 10, 15, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def object_id_at(insert_time) -> ObjectId:
    """ObjectId generated at insert_time."""
    return ObjectId.from_datetime(insert_time)


@pytest.fixture
def oplog_update_entry(update_time) -> dict:
    """An oplog update entry for metrics.results at update_time."""
    return {
        "ts": Timestamp(int(update_time.timestamp()), 1),
        "op": "u",
        "ns": "metrics.results",
        "o": {"$v": 2, "diff": {"u": {"Percentile": 95}}},
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    Create FastAPI app for testing.

    Dependency overrides set by tests are cleared afterwards.
    """
    from app.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Use this for synchronous endpoint testing.
    """
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(app):
    """
    Create an async test client.

    Use this for testing concurrent requests against the app.
    """
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


# =============================================================================
# Factory Fixtures
# =============================================================================

@pytest.fixture
def connection_manager_factory():
    """Expose make_connection_manager to tests."""
    return make_connection_manager


@pytest.fixture
def driver_client_factory():
    """Expose make_driver_client to tests."""
    return make_driver_client


@pytest.fixture
def cursor_factory():
    """Expose make_cursor to tests."""
    return make_cursor
