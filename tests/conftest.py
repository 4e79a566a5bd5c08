"""
Global pytest fixtures for the LinkHub test suite.

Responsibilities:
    - Force the in-memory backend before `main` is imported (its module-level
      `app = create_app()` would otherwise demand a PostgreSQL DSN)
    - Provide a fresh TestClient built by the app factory around its own Storage
    - Provide isolated Storage and LinkManager fixtures for direct testing
    - Provide an async LinkService wired to the app through ASGITransport
"""

import os

os.environ["LINKHUB_STORAGE_BACKEND"] = "memory"

import httpx
import pytest
from fastapi.testclient import TestClient

from main import create_app
from linkhub.client.api import LinkService
from linkhub.manager.link_manager import LinkManager
from linkhub.storage.storage import Storage


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def manager(storage: Storage) -> LinkManager:
    """LinkManager wired to the storage fixture."""
    return LinkManager(storage=storage)


@pytest.fixture
def app(storage: Storage):
    """App instance sharing the storage fixture, so tests can inspect state directly."""
    return create_app(storage=storage)


@pytest.fixture
def client(app) -> TestClient:
    """
    Fresh TestClient per test.

    Notes:
        - Not entered as a context manager, so the lifespan (connect/close)
          does not run; in-memory storage needs neither.
    """
    return TestClient(app)


@pytest.fixture
def make_service(app):
    """
    Factory for a LinkService talking to the in-process app.

    Must be called inside a running event loop (i.e. within the coroutine
    passed to asyncio.run).
    """
    def _make() -> LinkService:
        http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
        return LinkService(base_url="http://testserver/api", http=http)
    return _make
