from collections import defaultdict
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, List, Optional, Sequence
import logging

from storefront.database import atomic
from storefront.models.product import Product
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.schemas.order import CartItem, OrderItemDetail, OrderWithItems
from storefront.utils.money import to_cents
from storefront.exceptions import (
    StorefrontError,
    InvalidInputError,
    ProductNotFoundError,
    InsufficientStockError,
    PriceMismatchError,
    TotalMismatchError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class OrderService:
    """
    Service class for placing orders and reading order history.

    RACE CONDITION HANDLING STRATEGY:
    =================================
    Checkout runs as one transaction that locks every product in the cart with
    SELECT ... FOR UPDATE before reading its stock and price:

    1. Rows are locked in ascending product_id order, so two carts that share
       products always lock them in the same order and cannot deadlock
    2. Stock and price checks happen while the locks are held
    3. The stock decrement is itself guarded (WHERE stock_quantity >= :qty),
       which still refuses to oversell on stores that ignore FOR UPDATE

    A second buyer of the last unit waits for the first transaction to commit,
    then sees the reduced stock and fails with InsufficientStockError.
    Any error inside the transaction rolls back the order, its items and
    every stock decrement together.
    """

    def __init__(self, db: Session, enforce_total: bool = False):
        self.db = db
        self.enforce_total = enforce_total

    def place_order(
        self,
        user_id: int,
        items: Sequence[CartItem],
        declared_total: Optional[Decimal],
    ) -> int:
        """
        Place an order for the items in a cart.

        Algorithm:
        1. Lock the cart's products (FOR UPDATE)
        2. Validate each line: product exists, enough stock, price unchanged
        3. Insert the order and one order item per line
        4. Decrement stock per product
        5. Commit (rollback on any error)

        Args:
            user_id: Owner of the new order (from the verified token)
            items: Cart lines with product, quantity and the price the client saw
            declared_total: Order total declared by the client

        Returns:
            ID of the created order

        Raises:
            InvalidInputError: Empty cart or missing total
            ProductNotFoundError: A cart product doesn't exist
            InsufficientStockError: Not enough stock for a product
            PriceMismatchError: A cart price differs from the current price
            TotalMismatchError: Declared total is wrong (only when enforce_total is on)
            StoreUnavailableError: Database failure
        """
        if not items or declared_total is None:
            raise InvalidInputError("Cart items and total are required to place an order.")

        try:
            with atomic(self.db):
                products = self._lock_products({item.product_id for item in items})
                requested = self._validate_cart(items, products)
                self._check_total(items, products, declared_total)

                order = Order(
                    user_id=user_id,
                    total_amount=to_cents(declared_total),
                    order_status=OrderStatus.PENDING,
                )
                self.db.add(order)
                self.db.flush()

                for item in items:
                    self.db.add(OrderItem(
                        order_id=order.order_id,
                        product_id=item.product_id,
                        quantity=item.quantity,
                        price_at_purchase=products[item.product_id].price,
                    ))

                for product_id in sorted(requested):
                    self._decrement_stock(products[product_id], requested[product_id])

                self.db.flush()
                order_id = order.order_id

        except StorefrontError as e:
            logger.info(f"Order rejected for user #{user_id}: {e}")
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error placing order for user #{user_id}: {e}")
            raise StoreUnavailableError("Server error placing order. Please try again.") from e

        logger.info(f"Order #{order_id} placed by user #{user_id} with {len(items)} item(s)")
        return order_id

    def list_orders(self, user_id: int) -> List[OrderWithItems]:
        """
        Get a user's orders, newest first, each with its items.

        Item name and image come from the product as it is now; only
        price_at_purchase is historical.
        """
        try:
            orders = (
                self.db.query(Order)
                .filter(Order.user_id == user_id)
                .order_by(Order.order_date.desc(), Order.order_id.desc())
                .all()
            )
            if not orders:
                return []

            rows = (
                self.db.query(
                    OrderItem.order_id,
                    OrderItem.quantity,
                    OrderItem.price_at_purchase,
                    Product.product_name,
                    Product.image_url,
                )
                .join(Product, OrderItem.product_id == Product.product_id)
                .filter(OrderItem.order_id.in_([o.order_id for o in orders]))
                .order_by(OrderItem.order_item_id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching orders for user #{user_id}: {e}")
            raise StoreUnavailableError("Server error fetching user orders.") from e

        items_by_order = defaultdict(list)
        for row in rows:
            items_by_order[row.order_id].append(OrderItemDetail.model_validate(row))

        return [
            OrderWithItems(
                order_id=order.order_id,
                total_amount=order.total_amount,
                order_date=order.order_date,
                order_status=order.order_status,
                items=items_by_order[order.order_id],
            )
            for order in orders
        ]

    def _lock_products(self, product_ids: set) -> Dict[int, Product]:
        """Load and row-lock the given products, in a stable lock order."""
        products = (
            self.db.query(Product)
            .filter(Product.product_id.in_(product_ids))
            .order_by(Product.product_id)
            .with_for_update()  # Pessimistic locking
            .all()
        )
        return {product.product_id: product for product in products}

    def _validate_cart(
        self,
        items: Sequence[CartItem],
        products: Dict[int, Product],
    ) -> Dict[int, int]:
        """
        Check every cart line against the locked products.

        Lines for the same product are summed before comparing with stock.

        Returns:
            Total quantity requested per product ID
        """
        requested: Dict[int, int] = {}

        for item in items:
            product = products.get(item.product_id)
            if product is None:
                raise ProductNotFoundError(item.product_id)

            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity
            if requested[item.product_id] > product.stock_quantity:
                raise InsufficientStockError(
                    product.product_id,
                    product.product_name,
                    requested=requested[item.product_id],
                    available=product.stock_quantity,
                )

            if to_cents(item.price_at_purchase) != to_cents(product.price):
                raise PriceMismatchError(
                    product.product_id,
                    product.product_name,
                    declared=item.price_at_purchase,
                    current=product.price,
                )

        return requested

    def _check_total(
        self,
        items: Sequence[CartItem],
        products: Dict[int, Product],
        declared_total: Decimal,
    ) -> None:
        """Compare the declared total with the sum of the lines."""
        computed = sum(
            (to_cents(products[item.product_id].price) * item.quantity for item in items),
            Decimal("0.00"),
        )
        declared = to_cents(declared_total)
        if declared == computed:
            return

        if self.enforce_total:
            raise TotalMismatchError(declared=declared, computed=computed)
        logger.warning(f"Declared order total {declared} differs from line total {computed}; accepted")

    def _decrement_stock(self, product: Product, quantity: int) -> None:
        """Deduct stock; the WHERE clause refuses to go below zero."""
        updated = (
            self.db.query(Product)
            .filter(
                Product.product_id == product.product_id,
                Product.stock_quantity >= quantity,
            )
            .update(
                {Product.stock_quantity: Product.stock_quantity - quantity},
                synchronize_session=False,
            )
        )

        if updated != 1:
            raise InsufficientStockError(
                product.product_id,
                product.product_name,
                requested=quantity,
                available=product.stock_quantity,
            )
