from pydantic import BaseModel, Field

from app.models.product import MAX_STOCK_UNITS

# Used by: POST /restock/
class RestockRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., le=MAX_STOCK_UNITS, description="Units to add. Must be positive.")

class RestockResult(BaseModel):
    product_id: str
    product_name: str
    quantity_added: int
    previous_stock_level: int
    new_stock_level: int
    message: str
