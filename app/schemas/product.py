import re
from pydantic import BaseModel, Field, BeforeValidator, AfterValidator
from typing import Optional, Annotated, Literal, get_args
from datetime import datetime

from app.models.product import MAX_STOCK_UNITS, Product

KNOWN_CATEGORIES = [
    "Electronics", "Clothing", "Books", "Home Goods", "Groceries", "Toys",
    "Sports", "Beauty", "Automotive", "Garden", "Other",
]

SortKey = Literal["name", "category", "price", "discount_percentage", "stock_level", "reorder_point"]
SortDirection = Literal["ascending", "descending"]
SORT_KEYS = get_args(SortKey)

_DATA_URI = re.compile(r"^data:(image|video)/[\w.+-]+;base64,[A-Za-z0-9+/=\s]+$")


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def validate_media_url(value: Optional[str]) -> Optional[str]:
    """Accept an https URL or an inline base64 image/video payload."""
    if value is None:
        return None
    if value.startswith("https://") and len(value) > len("https://"):
        return value
    if _DATA_URI.match(value):
        return value
    raise ValueError("Media URL must be an https:// URL or a base64 data: URI for an image or video.")


def _coerce_whole_number(value):
    # Form posts send "12" or 12.0
    if isinstance(value, str):
        value = value.strip()
        try:
            value = float(value)
        except ValueError:
            return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


MediaUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(validate_media_url)]
WholeNumber = Annotated[int, BeforeValidator(_coerce_whole_number), Field(ge=0, le=MAX_STOCK_UNITS)]


class ProductBase(BaseModel):
    name: str = Field(..., min_length=2)
    description: str = Field(..., min_length=10)
    price: float = Field(..., ge=0.01)
    discount_percentage: float = Field(default=0, ge=0, le=100)
    stock_level: WholeNumber
    reorder_point: WholeNumber
    category: str = Field(..., min_length=1)
    image_url: MediaUrl = None
    video_url: MediaUrl = None

class ProductCreate(ProductBase):
    pass

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = Field(default=None, min_length=10)
    price: Optional[float] = Field(default=None, ge=0.01)
    discount_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    stock_level: Optional[WholeNumber] = None
    reorder_point: Optional[WholeNumber] = None
    category: Optional[str] = Field(default=None, min_length=1)
    image_url: MediaUrl = None
    video_url: MediaUrl = None

class StockLevelUpdate(BaseModel):
    stock_level: WholeNumber

class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    discount_percentage: float
    effective_price: float
    stock_level: int
    reorder_point: int
    is_low_stock: bool
    category: str
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            discount_percentage=product.discount_percentage,
            effective_price=product.effective_price,
            stock_level=product.stock_level,
            reorder_point=product.reorder_point,
            is_low_stock=product.is_low_stock,
            category=product.category,
            image_url=product.image_url,
            video_url=product.video_url,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
