"""
Product API — HTTP Endpoint Tests
===================================

What:  End-to-end tests of the /products routes against a real SQLite file.
How:   HTTPX AsyncClient over ASGITransport; the store is reset per test.

What we test:
    ✅ The create → read → update → delete → read scenario
    ✅ Fixed 404 bodies for unknown and already-deleted ids
    ✅ 400 for missing or null fields, with nothing persisted
    ✅ Fixed 500 bodies when storage fails, with no internal detail
    ✅ Docs, health probe and request ID header
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock

from product_api.database import get_db_session

NOT_FOUND = {"error": "Product not found"}
INVALID = {"error": "Invalid product data"}


async def _create(client, name="Sample Product", price=10):
    response = await client.post("/products", json={"name": name, "price": price})
    assert response.status_code == 201
    return response.json()


class TestProductLifecycle:
    """The create/read/update/delete scenario and its invariants."""

    @pytest.mark.asyncio
    async def test_full_scenario(self, test_client):
        response = await test_client.post(
            "/products", json={"name": "Sample Product", "price": 10}
        )
        assert response.status_code == 201
        created = response.json()
        assert isinstance(created["id"], int)
        assert created["name"] == "Sample Product"
        assert created["price"] == 10
        product_id = created["id"]

        response = await test_client.get(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json() == created

        response = await test_client.put(
            f"/products/{product_id}", json={"name": "Updated Product", "price": 20}
        )
        assert response.status_code == 200
        assert response.json() == {"id": product_id, "name": "Updated Product", "price": 20}

        response = await test_client.delete(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}

        response = await test_client.get(f"/products/{product_id}")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_created_ids_are_distinct(self, test_client):
        ids = [(await _create(test_client, name=f"P{i}", price=i))["id"] for i in range(5)]
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_update_visible_to_next_read(self, test_client):
        created = await _create(test_client)

        await test_client.put(
            f"/products/{created['id']}", json={"name": "Renamed", "price": 12.5}
        )
        response = await test_client.get(f"/products/{created['id']}")

        assert response.json()["name"] == "Renamed"
        assert response.json()["price"] == 12.5

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, test_client):
        await _create(test_client, name="first")
        second = await _create(test_client, name="second")

        await test_client.delete(f"/products/{second['id']}")
        third = await _create(test_client, name="third")

        assert third["id"] > second["id"]

    @pytest.mark.asyncio
    async def test_put_ignores_id_in_body(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(
            f"/products/{created['id']}",
            json={"id": 999, "name": "Updated Product", "price": 20},
        )

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]


class TestProductNotFound:
    """Unknown ids always produce the fixed not-found body."""

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, test_client):
        response = await test_client.get("/products/12345")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_put_unknown_id(self, test_client):
        response = await test_client.put("/products/12345", json={"name": "X", "price": 1})
        assert response.status_code == 404
        assert response.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, test_client):
        response = await test_client.delete("/products/12345")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_second_delete_returns_404(self, test_client):
        created = await _create(test_client)

        first = await test_client.delete(f"/products/{created['id']}")
        second = await test_client.delete(f"/products/{created['id']}")

        assert first.status_code == 200
        assert second.status_code == 404
        assert second.json() == NOT_FOUND

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_not_found(self, test_client):
        """The key goes to storage as-is; nothing matches it."""
        await _create(test_client)

        response = await test_client.get("/products/abc")

        assert response.status_code == 404
        assert response.json() == NOT_FOUND


class TestProductValidation:
    """Missing or null fields are rejected before storage."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"price": 10},
            {"name": "No price"},
            {"name": None, "price": 10},
            {"name": "Null price", "price": None},
            {"name": "Bad price", "price": "ten"},
        ],
    )
    async def test_create_rejects_invalid_body(self, test_client, body):
        response = await test_client.post("/products", json=body)

        assert response.status_code == 400
        assert response.json() == INVALID

        created = await _create(test_client)
        assert created["id"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw_body",
        [
            '{"name": "Huge", "price": 1e309}',
            '{"name": "Negative huge", "price": -1e309}',
            '{"name": "Not a number", "price": NaN}',
        ],
    )
    async def test_create_rejects_non_finite_price(self, test_client, raw_body):
        """inf/NaN cannot be written back as JSON, so they never reach storage."""
        response = await test_client.post(
            "/products",
            content=raw_body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == INVALID

        missing = await test_client.get("/products/1")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_update_rejects_non_finite_price(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(
            f"/products/{created['id']}",
            content='{"name": "Huge", "price": 1e309}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        unchanged = await test_client.get(f"/products/{created['id']}")
        assert unchanged.json() == created

    @pytest.mark.asyncio
    async def test_update_rejects_partial_body(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(f"/products/{created['id']}", json={"name": "Only name"})

        assert response.status_code == 400
        assert response.json() == INVALID
        unchanged = await test_client.get(f"/products/{created['id']}")
        assert unchanged.json() == created


class TestStorageFailures:
    """Storage exceptions map to fixed per-operation 500 bodies."""

    @pytest.fixture
    def failing_session(self, mock_db_session):
        from product_api.main import app

        async def override():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = override
        return mock_db_session

    @pytest.mark.asyncio
    async def test_create_failure(self, test_client, failing_session):
        failing_session.commit = AsyncMock(side_effect=RuntimeError("secret detail"))

        response = await test_client.post("/products", json={"name": "X", "price": 1})

        assert response.status_code == 500
        assert response.json() == {"error": "Unable to create product"}
        assert "secret detail" not in response.text

    @pytest.mark.asyncio
    async def test_get_failure(self, test_client, failing_session):
        failing_session.get = AsyncMock(side_effect=RuntimeError("secret detail"))

        response = await test_client.get("/products/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Unable to retrieve product"}

    @pytest.mark.asyncio
    async def test_update_failure(self, test_client, failing_session):
        failing_session.get = AsyncMock(side_effect=RuntimeError("secret detail"))

        response = await test_client.put("/products/1", json={"name": "X", "price": 1})

        assert response.status_code == 500
        assert response.json() == {"error": "Unable to update product"}

    @pytest.mark.asyncio
    async def test_delete_failure(self, test_client, failing_session):
        failing_session.get = AsyncMock(side_effect=RuntimeError("secret detail"))

        response = await test_client.delete("/products/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Unable to delete product"}


class TestUnexpectedErrors:
    """Failures outside the product taxonomy still get a fixed body and a request ID."""

    @pytest_asyncio.fixture
    async def raising_client(self, product_store):
        from product_api.main import app

        async def broken_session():
            raise RuntimeError("session factory exploded")
            yield  # pragma: no cover

        app.dependency_overrides[get_db_session] = broken_session
        # ServerErrorMiddleware re-raises after responding; keep the response
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
        app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_fallback_body_is_generic(self, raising_client):
        response = await raising_client.get("/products/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "exploded" not in response.text

    @pytest.mark.asyncio
    async def test_fallback_keeps_client_request_id(self, raising_client):
        response = await raising_client.get("/products/1", headers={"X-Request-ID": "feedf00d"})

        assert response.headers["X-Request-ID"] == "feedf00d"

    @pytest.mark.asyncio
    async def test_fallback_carries_generated_request_id(self, raising_client):
        response = await raising_client.delete("/products/1")

        assert len(response.headers["X-Request-ID"]) == 8


class TestAmbientEndpoints:
    """Documentation, health probe and request correlation."""

    @pytest.mark.asyncio
    async def test_openapi_describes_product_routes(self, test_client):
        response = await test_client.get("/openapi.json")

        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "Product API"
        assert set(schema["paths"]["/products"]) == {"post"}
        assert set(schema["paths"]["/products/{product_id}"]) == {"get", "put", "delete"}
        assert "404" in schema["paths"]["/products/{product_id}"]["get"]["responses"]

    @pytest.mark.asyncio
    async def test_swagger_ui_served(self, test_client):
        response = await test_client.get("/api-docs")

        assert response.status_code == 200
        assert "swagger" in response.text.lower()

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/products/1", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/products/1")

        assert len(response.headers["X-Request-ID"]) == 8
