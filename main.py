import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.database import init_db, ping_db, close_db
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging
from app.routers import product, inventory, report, media
from app.services.b2 import close_b2_client

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# 1. LIFESPAN MANAGER
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    setup_logging()
    logger.info("Initialization Started...")
    try:
        await init_db()
        logger.info("Connected to Database '%s'", settings.DATABASE_NAME)
    except Exception as e:
        logger.critical("Could not connect to Database: %s", e, exc_info=True)
        raise

    yield

    # --- SHUTDOWN ---
    logger.info("System Shutting Down...")
    await close_b2_client()
    close_db()

# ---------------------------------------------------------
# 2. APP INITIALIZATION
# ---------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    description="Inventory management API: products, stock, restocking, reports and media uploads"
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(product.router, prefix="/products", tags=["Product Management"])
app.include_router(inventory.router, prefix="/restock", tags=["Restock Simulator"])
app.include_router(report.router, prefix="/reports", tags=["Reports"])
app.include_router(media.router, prefix="/media", tags=["Media Uploads"])

@app.get("/", tags=["System"])
def root():
    return {
        "system": settings.APP_NAME,
        "status": "Online",
        "documentation": "/docs"
    }

@app.get("/health", tags=["System"])
async def health_check():
    """Liveness probe; reports whether MongoDB answers a ping."""
    db_ok = await ping_db()
    return {"status": "ok", "db": "connected" if db_ok else "unavailable"}
