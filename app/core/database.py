import logging

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from app.core.config import settings
from app.models.product import Product

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [Product]

_client: AsyncIOMotorClient | None = None


async def init_db(client: AsyncIOMotorClient | None = None):
    """Connect to MongoDB and initialize Beanie"""
    global _client

    # Tests hand in a mock client; everything else builds one from settings
    _client = client or AsyncIOMotorClient(settings.MONGODB_URL)

    await init_beanie(
        database=_client[settings.DATABASE_NAME],
        document_models=DOCUMENT_MODELS
    )

    logger.info("Beanie initialized with database '%s'", settings.DATABASE_NAME)
    return _client


async def ping_db() -> bool:
    """Return True when the server answers a ping."""
    if _client is None:
        return False
    try:
        await _client.admin.command("ping")
    except Exception as e:
        logger.warning("Database ping failed: %s", e)
        return False
    return True


def close_db():
    global _client
    if _client is not None:
        _client.close()
        _client = None
