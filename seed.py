import asyncio
from app.core.database import init_db
from app.core.config import settings
from app.models.product import Product
from app.schemas.product import ProductCreate
from app.services import product_store

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Keyboard",
        "description": "Compact Bluetooth keyboard with a two-year battery life.",
        "price": 49.99,
        "discount_percentage": 10,
        "stock_level": 25,
        "reorder_point": 10,
        "category": "Electronics",
    },
    {
        "name": "Summer Dress",
        "description": "Red cotton summer dress with a floral pattern.",
        "price": 39.5,
        "stock_level": 4,
        "reorder_point": 5,
        "category": "Clothing",
    },
    {
        "name": "Garden Hose",
        "description": "Thirty metre kink-resistant hose with spray nozzle.",
        "price": 24.0,
        "stock_level": 12,
        "reorder_point": 3,
        "category": "Garden",
    },
    {
        "name": "Espresso Beans",
        "description": "One kilogram bag of dark roast whole espresso beans.",
        "price": 18.75,
        "discount_percentage": 5,
        "stock_level": 2,
        "reorder_point": 8,
        "category": "Groceries",
    },
]

async def seed_data():
    print(f"🌱 Connecting to DB: {settings.DATABASE_NAME}...")
    await init_db()

    created = 0
    for data in SAMPLE_PRODUCTS:
        if await Product.find_one(Product.name == data["name"]):
            print(f"⚠️  '{data['name']}' already exists, skipping.")
            continue
        product = await product_store.add_product(ProductCreate(**data))
        created += 1
        print(f"   + {product.name} (stock {product.stock_level})")

    print(f"\n✅ SUCCESS! {created} product(s) created.")

if __name__ == "__main__":
    asyncio.run(seed_data())
