from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Largest id the store accepts (signed 64-bit integer)
MAX_ID = 2**63 - 1


class ProductResponse(BaseModel):
    """Schema for product response including all fields."""
    product_id: int
    product_name: str
    description: Optional[str] = None
    price: Decimal = Field(..., description="Unit price, serialized with two decimals")
    image_url: Optional[str] = None
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)
