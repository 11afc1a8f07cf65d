from fastapi import APIRouter

from app.schemas.inventory import RestockRequest, RestockResult
from app.services.restock import restock_product

router = APIRouter()


@router.post("/", response_model=RestockResult, status_code=200)
async def restock(data: RestockRequest):
    """
    Restock simulator: add units to a product's current stock.

    Quantity must be positive; unknown products return 404.
    """
    return await restock_product(data.product_id, data.quantity)
