"""
End-to-end tests for the HTTP API over an in-memory database.
"""

from __future__ import annotations

from bson import ObjectId
import pytest
from pymongo.errors import PyMongoError

from app.core.exceptions import StorageConfigError
from app.models.product import Product
from app.schemas.media import UploadCredentials
from app.services.b2 import get_b2_client

pytestmark = pytest.mark.integration


async def test_root_and_health(client, monkeypatch):
    import main

    async def fake_ping():
        return True

    monkeypatch.setattr(main, "ping_db", fake_ping)

    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "Online"

    resp = await client.get("/health")
    assert resp.json() == {"status": "ok", "db": "connected"}


async def test_create_and_get_product(client, payload):
    resp = await client.post("/products/", json=payload(name="Desk Lamp", discount_percentage=25, price=40))
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Desk Lamp"
    assert body["effective_price"] == 30.0
    assert body["image_url"] == "https://placehold.co/100x100.png?text=D"
    assert body["is_low_stock"] is False

    resp = await client.get(f"/products/{body['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == body["id"]


async def test_create_product_validation_error(client, payload):
    resp = await client.post("/products/", json=payload(description="short"))
    assert resp.status_code == 422


async def test_list_products_search_and_sort(client, make_product):
    await make_product(name="Blender", stock_level=3, category="Home Goods")
    await make_product(name="Air Fryer", stock_level=8, category="Home Goods")
    await make_product(name="Chess Set", stock_level=1, category="Toys")

    resp = await client.get("/products/")
    assert [p["name"] for p in resp.json()] == ["Air Fryer", "Blender", "Chess Set"]

    resp = await client.get("/products/", params={"sort_by": "stock_level", "direction": "descending"})
    assert [p["stock_level"] for p in resp.json()] == [8, 3, 1]

    resp = await client.get("/products/", params={"search": "home"})
    assert {p["name"] for p in resp.json()} == {"Blender", "Air Fryer"}

    resp = await client.get("/products/", params={"sort_by": "image_url"})
    assert resp.status_code == 422


async def test_categories_endpoint(client):
    resp = await client.get("/products/categories")
    assert resp.status_code == 200
    assert "Electronics" in resp.json()
    assert resp.json()[-1] == "Other"


async def test_get_unknown_or_invalid_product(client):
    assert (await client.get(f"/products/{ObjectId()}")).status_code == 404
    assert (await client.get("/products/not-an-id")).status_code == 404


async def test_update_product(client, make_product):
    product = await make_product(name="Yoga Mat", price=20)

    resp = await client.put(f"/products/{product.id}", json={"price": 22.5, "category": "Sports"})
    assert resp.status_code == 200
    assert resp.json()["price"] == 22.5
    assert resp.json()["category"] == "Sports"
    assert resp.json()["name"] == "Yoga Mat"

    resp = await client.put(f"/products/{ObjectId()}", json={"price": 1})
    assert resp.status_code == 404


async def test_set_stock_level(client, make_product):
    product = await make_product(stock_level=10, reorder_point=4)

    resp = await client.patch(f"/products/{product.id}/stock", json={"stock_level": 4})
    assert resp.status_code == 200
    assert resp.json()["stock_level"] == 4
    assert resp.json()["is_low_stock"] is True

    resp = await client.patch(f"/products/{product.id}/stock", json={"stock_level": -2})
    assert resp.status_code == 422


async def test_delete_product(client, make_product):
    product = await make_product()

    resp = await client.delete(f"/products/{product.id}")
    assert resp.status_code == 200
    assert await Product.count() == 0

    resp = await client.delete(f"/products/{product.id}")
    assert resp.status_code == 404


async def test_restock_endpoint(client, make_product):
    product = await make_product(name="Candles", stock_level=2)

    resp = await client.post("/restock/", json={"product_id": str(product.id), "quantity": 5})
    assert resp.status_code == 200
    assert resp.json()["new_stock_level"] == 7
    assert resp.json()["message"] == "5 units of Candles added. New stock: 7."


async def test_restock_errors(client, make_product):
    product = await make_product()

    resp = await client.post("/restock/", json={"product_id": str(product.id), "quantity": 0})
    assert resp.status_code == 400
    assert resp.json() == {"error": "RestockError", "detail": "Quantity must be greater than zero."}

    resp = await client.post("/restock/", json={"product_id": str(ObjectId()), "quantity": 1})
    assert resp.status_code == 404
    assert resp.json()["error"] == "ProductNotFoundError"


async def test_dashboard_and_category_report(client, make_product):
    await make_product(name="Kettle", category="Home Goods", stock_level=1, reorder_point=2)
    await make_product(name="Teapot", category="Home Goods", stock_level=6, reorder_point=2)
    await make_product(name="Puzzle", category="Toys", stock_level=10, reorder_point=2)

    resp = await client.get("/reports/dashboard")
    body = resp.json()
    assert body["total_products"] == 3
    assert body["total_stock_units"] == 17
    assert body["low_stock_count"] == 1
    assert body["low_stock_items"][0]["name"] == "Kettle"
    assert body["has_more_low_stock"] is False

    resp = await client.get("/reports/categories")
    body = resp.json()
    assert body["category_count"] == 2
    assert [c["name"] for c in body["categories"]] == ["Toys", "Home Goods"]
    assert body["categories"][1]["product_count"] == 2
    assert body["categories"][1]["share_percent"] == 67


async def test_store_failure_maps_to_500(client, monkeypatch):
    def boom(*args, **kwargs):
        raise PyMongoError("server selection timeout")

    monkeypatch.setattr(Product, "find_all", boom)

    resp = await client.get("/products/")
    assert resp.status_code == 500
    assert resp.json()["error"] == "ProductStoreError"
    assert "Failed to load products from database." in resp.json()["detail"]


class FakeB2:
    def __init__(self, error=None):
        self.error = error
        self.requested = []

    async def get_upload_credentials(self, file_name):
        self.requested.append(file_name)
        if self.error:
            raise self.error
        return UploadCredentials(
            upload_url="https://pod-000.backblaze.com/upload",
            auth_token="upload-token",
            final_file_name=f"products/abc-{file_name}",
            public_file_url_base="https://f000.backblazeb2.com/file/media",
        )


async def test_upload_credentials_endpoint(client):
    from main import app

    fake = FakeB2()
    app.dependency_overrides[get_b2_client] = lambda: fake

    resp = await client.post("/media/upload-credentials", json={"file_name": "lamp.png"})

    assert resp.status_code == 200
    assert resp.json()["public_url"] == "https://f000.backblazeb2.com/file/media/products/abc-lamp.png"
    assert fake.requested == ["lamp.png"]


async def test_upload_credentials_unconfigured(client):
    from main import app

    app.dependency_overrides[get_b2_client] = lambda: FakeB2(
        StorageConfigError("Backblaze B2 credentials are not configured.")
    )

    resp = await client.post("/media/upload-credentials", json={"file_name": "lamp.png"})

    assert resp.status_code == 503
    assert resp.json()["error"] == "StorageConfigError"


async def test_oversized_stock_values_rejected(client, payload, make_product):
    resp = await client.post("/products/", json=payload(stock_level=10**19))
    assert resp.status_code == 422

    product = await make_product()
    resp = await client.post("/restock/", json={"product_id": str(product.id), "quantity": 10**19})
    assert resp.status_code == 422


async def test_null_video_url_clears_only_video(client, make_product):
    product = await make_product(
        name="Drone",
        image_url="https://cdn.example.com/drone.png",
        video_url="data:video/mp4;base64,AAAAIGZ0eXA=",
    )

    resp = await client.put(f"/products/{product.id}", json={"video_url": None})

    assert resp.status_code == 200
    body = resp.json()
    assert body["video_url"] is None
    assert body["image_url"] == "https://cdn.example.com/drone.png"
    assert body["name"] == "Drone"
    assert body["stock_level"] == product.stock_level
    assert (await Product.get(product.id)).video_url is None
