"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for routing
requests through an ExplorerService bound to a chosen connection manager.
"""

import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Explorer Override Fixtures
# =============================================================================

@pytest.fixture
def use_connections(app):
    """
    Route the databases endpoints through a given ConnectionManager.

    Usage in tests:
        def test_something(use_connections, mongomock_connections, client):
            use_connections(mongomock_connections)
            response = client.get("/databases")
    """
    from app.routers.databases import get_explorer_service
    from app.services.explorer_service import ExplorerService

    def _use(manager):
        app.dependency_overrides[get_explorer_service] = lambda: ExplorerService(manager)
        return manager

    return _use


@pytest.fixture
def use_driver_client(use_connections, connection_manager_factory):
    """
    Route the databases endpoints to a mocked driver client.

    Returns the factory mock so tests can assert how often it connected.
    """
    def _use(driver_client):
        manager, factory = connection_manager_factory(driver_client)
        use_connections(manager)
        return factory

    return _use


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_text_error():
    """Helper to assert a fixed plain-text error response."""
    def _assert(response, status_code: int, text: str, leaked: str = None):
        assert response.status_code == status_code
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == text
        if leaked:
            assert leaked not in response.text
    return _assert
