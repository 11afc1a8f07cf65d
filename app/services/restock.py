import logging

from app.core.exceptions import ProductNotFoundError, RestockError
from app.models.product import MAX_STOCK_UNITS
from app.schemas.inventory import RestockResult
from app.services import product_store

logger = logging.getLogger(__name__)


async def restock_product(product_id: str, quantity: int) -> RestockResult:
    """Add ``quantity`` units to a product's current stock."""
    if quantity <= 0:
        raise RestockError("Quantity must be greater than zero.")

    product = await product_store.get_product_by_id(product_id)
    if not product:
        raise ProductNotFoundError(product_id)

    previous = product.stock_level
    new_stock_level = previous + quantity
    if new_stock_level > MAX_STOCK_UNITS:
        raise RestockError(f"Restocking {product.name} by {quantity} exceeds the maximum stock level.")
    updated = await product_store.update_product_stock(product.id, new_stock_level)
    if not updated:
        # Deleted between the read and the write
        raise ProductNotFoundError(product_id)

    logger.info("Restocked %s: %d -> %d", product.name, previous, new_stock_level)
    return RestockResult(
        product_id=str(product.id),
        product_name=product.name,
        quantity_added=quantity,
        previous_stock_level=previous,
        new_stock_level=updated.stock_level,
        message=f"{quantity} units of {product.name} added. New stock: {updated.stock_level}.",
    )
