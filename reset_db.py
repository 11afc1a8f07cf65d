import asyncio
from app.core.database import init_db
from app.services.product_store import delete_all_products

async def reset_products():
    print("🧹 connecting to database...")
    await init_db()

    print("🔥 Deleting ALL products...")
    removed = await delete_all_products()

    print(f"✅ Removed {removed} product(s). You can now run 'python seed.py'.")

if __name__ == "__main__":
    asyncio.run(reset_products())
