from beanie import Document, Indexed
from pydantic import Field
from typing import Optional, Annotated
from datetime import datetime, timezone


# Largest value a BSON int64 holds
MAX_STOCK_UNITS = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def placeholder_image_url(name: str) -> str:
    """Placeholder shown for products saved without an image."""
    initial = name[:1] or "?"
    return f"https://placehold.co/100x100.png?text={initial}"


class Product(Document):
    # --- Identification ---
    name: Annotated[str, Indexed()]
    description: str
    category: Annotated[str, Indexed()]

    # --- Financials ---
    price: float = Field(..., ge=0.01)
    discount_percentage: float = Field(default=0, ge=0, le=100)

    # --- Stock ---
    stock_level: int = Field(default=0, ge=0, le=MAX_STOCK_UNITS)
    reorder_point: int = Field(default=0, ge=0, le=MAX_STOCK_UNITS)  # Low stock at or below this

    # --- Media (https URL or data: URI) ---
    image_url: Optional[str] = None
    video_url: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "products"

    @property
    def is_low_stock(self) -> bool:
        return self.stock_level <= self.reorder_point

    @property
    def effective_price(self) -> float:
        return round(self.price * (1 - self.discount_percentage / 100), 2)
