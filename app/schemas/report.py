from pydantic import BaseModel
from typing import List

# --- Dashboard ---
class LowStockItem(BaseModel):
    id: str
    name: str
    stock_level: int
    reorder_point: int

class DashboardSummary(BaseModel):
    total_products: int
    total_stock_units: int
    low_stock_count: int
    low_stock_items: List[LowStockItem]
    has_more_low_stock: bool

# --- Category report ---
class CategorySummary(BaseModel):
    name: str
    slug: str
    product_count: int
    stock_units: int
    share_percent: int

class CategoryReport(BaseModel):
    total_products: int
    total_stock_units: int
    category_count: int
    categories: List[CategorySummary]
