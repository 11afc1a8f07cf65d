"""
Data-access layer for product records.

Every call is wrapped so driver failures are logged and re-raised as
``ProductStoreError`` with the action that failed. Lookups by an id that is
not a valid ObjectId behave like a missing record.
"""
import logging
from typing import Any, List, Optional

from beanie import PydanticObjectId
from bson.errors import InvalidDocument, InvalidId
from pymongo.errors import PyMongoError

from app.core.exceptions import ProductStoreError
from app.models.product import Product, placeholder_image_url, utcnow
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# BSON encoding failures surface outside PyMongoError
STORE_ERRORS = (PyMongoError, OverflowError, InvalidDocument)

# Media fields may be cleared with null; every other field is required on the record
_NULLABLE_FIELDS = {"image_url", "video_url"}


def _object_id(product_id: Any) -> Optional[PydanticObjectId]:
    if isinstance(product_id, PydanticObjectId):
        return product_id
    try:
        return PydanticObjectId(str(product_id))
    except (InvalidId, TypeError):
        return None


def _fail(action: str, e: Exception) -> ProductStoreError:
    logger.error("Failed to %s: %s", action, e, exc_info=True)
    return ProductStoreError(f"Failed to {action}. Original error: {e}")


async def fetch_products() -> List[Product]:
    try:
        return await Product.find_all().sort(+Product.name).to_list()
    except STORE_ERRORS as e:
        raise _fail("load products from database", e) from e


async def add_product(data: ProductCreate) -> Product:
    fields = data.model_dump()
    fields["stock_level"] = int(fields["stock_level"])
    fields["reorder_point"] = int(fields["reorder_point"])
    if not fields.get("image_url"):
        fields["image_url"] = placeholder_image_url(fields["name"])

    product = Product(**fields)
    try:
        await product.insert()
    except STORE_ERRORS as e:
        raise _fail("add product to database", e) from e

    logger.info("Added product %s (%s)", product.id, product.name)
    return product


async def get_product_by_id(product_id: Any) -> Optional[Product]:
    oid = _object_id(product_id)
    if oid is None:
        return None
    try:
        return await Product.get(oid)
    except STORE_ERRORS as e:
        raise _fail("get product by ID from database", e) from e


async def update_product(product_id: Any, data: ProductUpdate) -> Optional[Product]:
    product = await get_product_by_id(product_id)
    if not product:
        return None

    changes = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in _NULLABLE_FIELDS
    }
    if "image_url" in changes and not changes["image_url"]:
        changes["image_url"] = placeholder_image_url(changes.get("name", product.name))
    changes["updated_at"] = utcnow()

    try:
        await product.update({"$set": changes})
        return await Product.get(product.id)
    except STORE_ERRORS as e:
        raise _fail("update product in database", e) from e


async def update_product_stock(product_id: Any, new_stock_level: int) -> Optional[Product]:
    new_stock_level = int(new_stock_level)
    if new_stock_level < 0:
        raise ValueError("Stock level cannot be negative.")

    product = await get_product_by_id(product_id)
    if not product:
        return None

    try:
        await product.update({"$set": {"stock_level": new_stock_level, "updated_at": utcnow()}})
        return await Product.get(product.id)
    except STORE_ERRORS as e:
        raise _fail("update product stock in database", e) from e


async def delete_product(product_id: Any) -> bool:
    oid = _object_id(product_id)
    if oid is None:
        return False
    try:
        result = await Product.find_one(Product.id == oid).delete()
    except STORE_ERRORS as e:
        raise _fail("delete product from database", e) from e

    deleted = bool(result and result.deleted_count)
    if deleted:
        logger.info("Deleted product %s", oid)
    return deleted


async def delete_all_products() -> int:
    try:
        result = await Product.delete_all()
    except STORE_ERRORS as e:
        raise _fail("delete products from database", e) from e
    return result.deleted_count if result else 0
