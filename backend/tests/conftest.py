"""
Product API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_product_data: Field values for a Product row
    ├── product_store: Real SQLite store, reset before the test
    └── test_client: HTTPX AsyncClient wired to the FastAPI app
"""

import os
import tempfile

# Override settings BEFORE any product_api import: the engine is built from
# settings at import time.
_test_dir = tempfile.mkdtemp(prefix="product_api_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.sqlite')}"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from product_api.database import dispose_engine, init_database  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.get.return_value = Product(id=1, name="x", price=1.0)
            result = await product_service.get_product(mock_db_session, 1)
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_product_data():
    """Column values matching the seed scenario."""
    return {"id": 1, "name": "Sample Product", "price": 10.0}


@pytest_asyncio.fixture
async def product_store():
    """
    A freshly reset product store on the test SQLite file.

    The engine is disposed afterwards so no pooled connection outlives the
    test's event loop.
    """
    await init_database(reset=True)
    yield
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(product_store):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the store is prepared by the
    product_store fixture instead.
    """
    from product_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
