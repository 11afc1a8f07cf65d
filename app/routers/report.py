from fastapi import APIRouter, Query

from app.schemas.report import CategoryReport, DashboardSummary
from app.services import catalog, product_store

router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardSummary,
    summary="Inventory Dashboard",
    description="Totals plus a short preview of items at or below their reorder point."
)
async def get_dashboard(preview_limit: int = Query(5, ge=0, le=100)):
    products = await product_store.fetch_products()
    return catalog.dashboard_summary(products, preview_limit=preview_limit)


@router.get(
    "/categories",
    response_model=CategoryReport,
    summary="Category Report",
    description="Product count and stock units per category, most stocked first."
)
async def get_category_report():
    products = await product_store.fetch_products()
    return catalog.category_report(products)
