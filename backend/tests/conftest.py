"""
PawMart Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every fixture builds its own in-memory SQLite database (aiosqlite +
       StaticPool), so tests exercise real SQL and never share state.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at a fresh in-memory database
    ├── database:      Database with the documents table created
    ├── store:         DocumentStore over `database`
    ├── users / listings / orders: services bound to `store`
    ├── app:           create_app(test_settings) with its schema created
    └── test_client:   HTTPX AsyncClient talking to `app` over ASGI
"""

import os

# Must be set before anything imports pawmart.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from pawmart.config import Settings
from pawmart.database import Database
from pawmart.main import create_app
from pawmart.services.listing_service import ListingService
from pawmart.services.order_service import OrderService
from pawmart.services.user_service import UserService
from pawmart.store import DocumentStore


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite://", log_level="WARNING", _env_file=None)


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with the documents table created; disposed after the test."""
    db = Database(test_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def store(database):
    return DocumentStore(database)


@pytest.fixture
def users(store):
    return UserService(store)


@pytest.fixture
def listings(store):
    return ListingService(store)


@pytest.fixture
def orders(store):
    return OrderService(store)


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fresh application with its own database.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    application = create_app(test_settings)
    await application.state.database.create_schema()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
