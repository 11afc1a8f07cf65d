"""
Shared fixtures for StockPilot tests.

- ``db``: Beanie initialised against an in-memory mongomock-motor client.
- ``make_product``: inserts a product through the product store.
- ``client``: httpx AsyncClient bound to the FastAPI app (no lifespan).
"""

from __future__ import annotations

import os

# Settings are read at import time
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("DATABASE_NAME", "stockpilot_test")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.core.database import init_db
from app.schemas.product import ProductCreate
from app.services import product_store


def product_payload(**overrides):
    data = {
        "name": "Wireless Keyboard",
        "description": "Compact Bluetooth keyboard with long battery life.",
        "price": 49.99,
        "discount_percentage": 0,
        "stock_level": 20,
        "reorder_point": 5,
        "category": "Electronics",
    }
    data.update(overrides)
    return data


@pytest_asyncio.fixture
async def db():
    client = await init_db(client=AsyncMongoMockClient())
    return client


@pytest_asyncio.fixture
async def make_product(db):
    async def _make(**overrides):
        return await product_store.add_product(ProductCreate(**product_payload(**overrides)))

    return _make


@pytest_asyncio.fixture
async def client(db):
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def payload():
    return product_payload
