from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from storefront.models.product import Product
from storefront.exceptions import ProductNotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)


class ProductService:
    """
    Read-only access to the catalog.

    Every call reads straight from the database; nothing is cached.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[Product]:
        """Get every product, ordered by ID."""
        try:
            return self.db.query(Product).order_by(Product.product_id).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            raise StoreUnavailableError("Server error fetching products.") from e

    def get_product(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        try:
            product = self.db.query(Product).filter(Product.product_id == product_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product #{product_id}: {e}")
            raise StoreUnavailableError("Server error fetching product details.") from e

        if not product:
            raise ProductNotFoundError(product_id)

        return product
