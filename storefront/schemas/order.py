from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.models.order import OrderStatus
from storefront.schemas.product import MAX_ID


class CartItem(BaseModel):
    """One cart line as sent by the client at checkout."""
    product_id: int = Field(
        ..., alias="productId", gt=0, le=MAX_ID, description="ID of the product to purchase"
    )
    quantity: int = Field(..., gt=0, description="Quantity to purchase")
    price_at_purchase: Decimal = Field(
        ..., alias="priceAtPurchase", ge=0, description="Unit price the client saw"
    )

    model_config = ConfigDict(populate_by_name=True)


class OrderCreate(BaseModel):
    """
    Schema for placing an order.

    Both fields default to empty so that the service reports a missing cart or
    total with its own message.
    """
    items: list[CartItem] = Field(default_factory=list)
    total: Optional[Decimal] = Field(None, ge=0, description="Order total declared by the client")


class OrderCreatedResponse(BaseModel):
    message: str
    order_id: int = Field(..., alias="orderId")

    model_config = ConfigDict(populate_by_name=True)


class OrderItemDetail(BaseModel):
    """Order line with the product's current name and image."""
    quantity: int
    price_at_purchase: Decimal
    product_name: str
    image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderWithItems(BaseModel):
    """Schema for an order in the user's history."""
    order_id: int
    total_amount: Decimal
    order_date: datetime
    order_status: OrderStatus
    items: list[OrderItemDetail]

    model_config = ConfigDict(from_attributes=True)
