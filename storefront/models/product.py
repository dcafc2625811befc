from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, CheckConstraint
from sqlalchemy.sql import func

from storefront.database import Base


class Product(Base):
    """
    Product model representing items available for sale.

    Attributes:
        product_id: Unique identifier for the product
        product_name: Display name
        description: Long description (optional)
        price: Current unit price, two decimal places
        image_url: Product image reference (optional)
        stock_quantity: Available quantity (must be non-negative)
        created_at: Timestamp when product was created
    """
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, index=True)
    product_name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(255))
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="check_stock_non_negative"),
    )

    def __repr__(self):
        return f"<Product(product_id={self.product_id}, name='{self.product_name}', stock={self.stock_quantity})>"
