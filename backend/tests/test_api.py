"""
PawMart Backend — HTTP API Tests
==================================

What:  End-to-end requests through the FastAPI app (routing, body types,
       response shapes, error handlers, middleware).
How:   HTTPX AsyncClient over ASGITransport; each test gets its own app and
       in-memory database.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from pawmart.routes.health import LIVENESS_MESSAGE


async def _create_listing(client, **fields):
    response = await client.post("/listings", json=fields)
    assert response.status_code == 200
    return response.json()["insertedId"]


class TestRoot:

    @pytest.mark.asyncio
    async def test_liveness_message(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == LIVENESS_MESSAGE

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, app, test_client):
        app.state.database.ping = AsyncMock(return_value=False)

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        generated = await test_client.get("/users")
        echoed = await test_client.get("/users", headers={"X-Request-ID": "abc123"})

        assert len(generated.headers["X-Request-ID"]) == 8
        assert echoed.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_unexpected_error_carries_request_id(self, app, test_client):
        app.state.services.users.list_all = AsyncMock(side_effect=RuntimeError("bug"))

        response = await test_client.get("/users", headers={"X-Request-ID": "req-9"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "req-9"
        assert response.json() == {
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again or contact support.",
            "request_id": "req-9",
        }
        assert "bug" not in response.text


class TestUsersApi:

    @pytest.mark.asyncio
    async def test_register_duplicate_and_fetch(self, test_client):
        first = await test_client.post("/users", json={"email": "a@x.com"})
        second = await test_client.post("/users", json={"email": "a@x.com"})
        fetched = await test_client.get("/users/a@x.com")

        assert first.status_code == 200
        user_id = first.json()["insertedId"]
        assert first.json() == {"acknowledged": True, "insertedId": user_id}
        assert second.status_code == 200
        assert second.json() == {"message": "User already exists", "insertedId": None}
        assert fetched.json() == {"_id": user_id, "email": "a@x.com"}

    @pytest.mark.asyncio
    async def test_extra_profile_fields_are_stored(self, test_client):
        await test_client.post(
            "/users",
            json={"email": "a@x.com", "name": "Ana", "photo_url": "https://img/x.png", "phone": "017"},
        )

        user = (await test_client.get("/users/a@x.com")).json()

        assert user["name"] == "Ana"
        assert user["phone"] == "017"
        # Unsent optional fields are not stored as nulls
        assert "role" not in user

    @pytest.mark.asyncio
    async def test_email_is_required(self, test_client):
        response = await test_client.post("/users", json={"name": "Ana"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_users(self, test_client):
        await test_client.post("/users", json={"email": "a@x.com"})
        await test_client.post("/users", json={"email": "b@x.com"})

        response = await test_client.get("/users")

        assert response.status_code == 200
        assert sorted(u["email"] for u in response.json()) == ["a@x.com", "b@x.com"]

    @pytest.mark.asyncio
    async def test_unknown_email_returns_empty_body(self, test_client):
        response = await test_client.get("/users/ghost@x.com")

        assert response.status_code == 200
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_patch_by_email(self, test_client):
        await test_client.post("/users", json={"email": "a@x.com", "name": "Ana", "role": "buyer"})

        response = await test_client.patch("/users/a@x.com", json={"name": "Ana B."})

        assert response.json() == {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1}
        user = (await test_client.get("/users/a@x.com")).json()
        assert user["name"] == "Ana B."
        assert user["role"] == "buyer"

    @pytest.mark.asyncio
    async def test_patch_unknown_email(self, test_client):
        response = await test_client.patch("/users/ghost@x.com", json={"name": "Ghost"})

        assert response.json() == {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}
        assert (await test_client.get("/users")).json() == []

    @pytest.mark.asyncio
    async def test_delete_by_id(self, test_client):
        user_id = (await test_client.post("/users", json={"email": "a@x.com"})).json()["insertedId"]

        first = await test_client.delete(f"/users/{user_id}")
        second = await test_client.delete(f"/users/{user_id}")

        assert first.json() == {"acknowledged": True, "deletedCount": 1}
        assert second.json() == {"acknowledged": True, "deletedCount": 0}

    @pytest.mark.asyncio
    async def test_delete_with_malformed_id(self, test_client):
        response = await test_client.delete("/users/not-an-id")

        assert response.status_code == 200
        assert response.json()["deletedCount"] == 0


class TestListingsApi:

    @pytest.mark.asyncio
    async def test_create_and_get(self, test_client):
        listing_id = await _create_listing(
            test_client, name="Kitten", category="Pets", price=0, owner_email="a@x.com",
            vaccinated=True,
        )

        response = await test_client.get(f"/listings/{listing_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == listing_id
        assert body["name"] == "Kitten"
        assert body["vaccinated"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["not-an-id", "6651f0c2a1b2c3d4e5f60718"])
    async def test_get_malformed_id_is_empty(self, test_client, bad_id):
        response = await test_client.get(f"/listings/{bad_id}")

        assert response.status_code == 200
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_get_unknown_id_is_empty(self, test_client):
        response = await test_client.get(f"/listings/{uuid.uuid4()}")

        assert response.status_code == 200
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_filters(self, test_client):
        await _create_listing(test_client, name="Kitten", category="Pets", owner_email="a@x.com")
        await _create_listing(test_client, name="Kibble", category="Food", owner_email="a@x.com")
        await _create_listing(test_client, name="Puppy", category="Pets", owner_email="b@x.com")

        by_owner = await test_client.get("/listings/user/a@x.com")
        by_category = await test_client.get("/listings/category/Pets")
        everything = await test_client.get("/listings")

        assert sorted(r["name"] for r in by_owner.json()) == ["Kibble", "Kitten"]
        assert sorted(r["name"] for r in by_category.json()) == ["Kitten", "Puppy"]
        assert len(everything.json()) == 3

    @pytest.mark.asyncio
    async def test_patch_and_delete(self, test_client):
        listing_id = await _create_listing(test_client, name="Kitten", category="Pets", price=10)

        patched = await test_client.patch(f"/listings/{listing_id}", json={"price": 5})
        record = (await test_client.get(f"/listings/{listing_id}")).json()
        first = await test_client.delete(f"/listings/{listing_id}")
        second = await test_client.delete(f"/listings/{listing_id}")

        assert patched.json()["modifiedCount"] == 1
        assert record["price"] == 5
        assert type(record["price"]) is int
        assert record["name"] == "Kitten"
        assert first.json()["deletedCount"] == 1
        assert second.json()["deletedCount"] == 0

    @pytest.mark.asyncio
    async def test_integer_price_is_returned_as_sent(self, test_client):
        listing_id = await _create_listing(test_client, name="Kitten", price=10)

        response = await test_client.get(f"/listings/{listing_id}")

        assert '"price":10,' in response.text or '"price":10}' in response.text
        assert "10.0" not in response.text
        assert type(response.json()["price"]) is int

    @pytest.mark.asyncio
    async def test_fractional_and_negative_prices_are_stored(self, test_client):
        fractional = await _create_listing(test_client, name="Kibble", price=12.5)
        negative = await _create_listing(test_client, name="Refund", price=-1)

        first = (await test_client.get(f"/listings/{fractional}")).json()
        second = (await test_client.get(f"/listings/{negative}")).json()

        assert first["price"] == 12.5
        assert second["price"] == -1
        assert type(second["price"]) is int

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["10", True, [10]])
    async def test_wrong_price_type_rejected(self, test_client, price):
        response = await test_client.post("/listings", json={"name": "Kitten", "price": price})
        listings = await test_client.get("/listings")

        assert response.status_code == 422
        assert listings.json() == []

    @pytest.mark.asyncio
    async def test_patch_with_wrong_type_rejected(self, test_client):
        listing_id = await _create_listing(test_client, name="Kitten", price=10)

        response = await test_client.patch(f"/listings/{listing_id}", json={"name": 7})
        record = (await test_client.get(f"/listings/{listing_id}")).json()

        assert response.status_code == 422
        assert record["name"] == "Kitten"

    @pytest.mark.asyncio
    async def test_store_failure_is_500_with_message(self, app, test_client):
        app.state.services.listings.collection.find = AsyncMock(
            side_effect=SQLAlchemyError("connection refused")
        )

        response = await test_client.get("/listings", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "server_error",
            "message": "Failed to fetch listings",
            "request_id": "req-1",
        }
        assert "connection refused" not in response.text


class TestOrdersApi:

    @pytest.mark.asyncio
    async def test_order_lifecycle(self, test_client):
        listing_id = await _create_listing(test_client, name="Kitten", category="Pets")

        created = await test_client.post(
            "/orders",
            json={"buyer_email": "b@x.com", "listing_id": listing_id, "quantity": 1, "status": "pending"},
        )
        order_id = created.json()["insertedId"]
        await test_client.post("/orders", json={"buyer_email": "c@x.com", "listing_id": listing_id})

        mine = await test_client.get("/orders/user/b@x.com")
        patched = await test_client.patch(f"/orders/{order_id}", json={"status": "delivered"})
        fetched = await test_client.get(f"/orders/{order_id}")
        all_orders = await test_client.get("/orders")

        assert [o["_id"] for o in mine.json()] == [order_id]
        assert patched.json()["matchedCount"] == 1
        assert fetched.json()["status"] == "delivered"
        assert fetched.json()["listing_id"] == listing_id
        assert len(all_orders.json()) == 2

    @pytest.mark.asyncio
    async def test_delete_order(self, test_client):
        order_id = (await test_client.post("/orders", json={"buyer_email": "b@x.com"})).json()["insertedId"]

        first = await test_client.delete(f"/orders/{order_id}")
        second = await test_client.delete(f"/orders/{order_id}")

        assert first.json()["deletedCount"] == 1
        assert second.json()["deletedCount"] == 0

    @pytest.mark.asyncio
    async def test_patch_malformed_id(self, test_client):
        response = await test_client.patch("/orders/42", json={"status": "cancelled"})

        assert response.status_code == 200
        assert response.json() == {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}

    @pytest.mark.asyncio
    async def test_create_failure(self, app, test_client):
        app.state.services.orders.collection.insert_one = AsyncMock(
            side_effect=SQLAlchemyError("disk full")
        )

        response = await test_client.post("/orders", json={"buyer_email": "b@x.com"})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to create order"

    @pytest.mark.asyncio
    async def test_quantity_keeps_its_type(self, test_client):
        created = await test_client.post("/orders", json={"buyer_email": "b@x.com", "quantity": 2, "price": 10})
        order_id = created.json()["insertedId"]

        response = await test_client.get(f"/orders/{order_id}")

        assert '"quantity":2' in response.text
        assert type(response.json()["quantity"]) is int
        assert type(response.json()["price"]) is int

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", ["2", 2.5])
    async def test_wrong_quantity_type_rejected(self, test_client, quantity):
        response = await test_client.post("/orders", json={"buyer_email": "b@x.com", "quantity": quantity})
        orders = await test_client.get("/orders")

        assert response.status_code == 422
        assert orders.json() == []
