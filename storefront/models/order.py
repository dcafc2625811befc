from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
import enum

from storefront.database import Base


class OrderStatus(str, enum.Enum):
    """Enum for order status."""
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Order(Base):
    """
    Order model representing a checkout.

    Attributes:
        order_id: Unique identifier for the order
        user_id: Owner of the order
        total_amount: Total declared by the client at checkout
        order_date: Timestamp when order was placed
        order_status: Current status of the order
    """
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    order_date = Column(DateTime(timezone=True), server_default=func.now())
    order_status = Column(
        Enum(
            OrderStatus,
            native_enum=False,
            length=50,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=OrderStatus.PENDING,
        nullable=False,
    )

    def __repr__(self):
        return f"<Order(order_id={self.order_id}, user_id={self.user_id}, status='{self.order_status}')>"


class OrderItem(Base):
    """
    A single line of an order.

    ``price_at_purchase`` is a snapshot of the product price when the order
    was placed and is never updated afterwards.
    """
    __tablename__ = "order_items"

    order_item_id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.order_id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price_at_purchase = Column(Numeric(10, 2), nullable=False)

    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
