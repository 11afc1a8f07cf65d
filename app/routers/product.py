from fastapi import APIRouter, HTTPException, status
from typing import List, Optional

from app.schemas.product import (
    KNOWN_CATEGORIES,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    SortDirection,
    SortKey,
    StockLevelUpdate,
)
from app.services import catalog, product_store

router = APIRouter()


def _not_found(product_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product with ID {product_id} not found."
    )

# ==========================================
# 📦 CATALOG (Read)
# ==========================================

@router.get(
    "/",
    response_model=List[ProductResponse],
    summary="List Products",
    description="All products, optionally filtered by a search term and sorted by a column."
)
async def get_products(
    search: Optional[str] = None,
    sort_by: SortKey = "name",
    direction: SortDirection = "ascending",
):
    """
    - **search**: matches name, category or description (case-insensitive).
    - **sort_by**: name, category, price, discount_percentage, stock_level or reorder_point.
    """
    products = await product_store.fetch_products()
    products = catalog.sort_products(products, sort_by, direction)
    products = catalog.filter_products(products, search)
    return [ProductResponse.from_product(p) for p in products]


@router.get("/categories", response_model=List[str], summary="Known Categories")
async def get_categories():
    return KNOWN_CATEGORIES


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str):
    product = await product_store.get_product_by_id(product_id)
    if not product:
        raise _not_found(product_id)
    return ProductResponse.from_product(product)

# ==========================================
# ✏️ CATALOG (Write)
# ==========================================

@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product_data: ProductCreate):
    product = await product_store.add_product(product_data)
    return ProductResponse.from_product(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, update_data: ProductUpdate):
    product = await product_store.update_product(product_id, update_data)
    if not product:
        raise _not_found(product_id)
    return ProductResponse.from_product(product)


@router.patch("/{product_id}/stock", response_model=ProductResponse, summary="Set Stock Level")
async def update_product_stock(product_id: str, data: StockLevelUpdate):
    product = await product_store.update_product_stock(product_id, data.stock_level)
    if not product:
        raise _not_found(product_id)
    return ProductResponse.from_product(product)


@router.delete("/{product_id}")
async def delete_product(product_id: str):
    if not await product_store.delete_product(product_id):
        raise _not_found(product_id)
    return {"message": "Product deleted successfully"}
