from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_app_settings, get_current_user
from storefront.config import Settings
from storefront.database import get_db
from storefront.exceptions import (
    ValidationError,
    ProductNotFoundError,
    InsufficientStockError,
    PriceMismatchError,
    StoreUnavailableError,
)
from storefront.schemas.order import OrderCreate, OrderCreatedResponse, OrderWithItems
from storefront.security import TokenClaims
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order (checkout)",
    description="""
    Check out a cart for the authenticated user.

    **Race Condition Handling:**
    The cart's product rows are locked with SELECT FOR UPDATE while stock and
    prices are checked, and stock is decremented in the same transaction.
    When several users buy the last unit at once, one succeeds and the others
    get a 400 with an 'Insufficient stock' message.

    Any rejected line (unknown product, not enough stock, stale price) aborts
    the whole order; nothing is written.
    """
)
def create_order(
    order_data: OrderCreate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Place an order.

    - **items**: cart lines, each with productId, quantity and priceAtPurchase
    - **total**: order total as computed by the client

    New orders start in the Pending state.
    """
    service = OrderService(db, enforce_total=settings.ENFORCE_ORDER_TOTAL)

    try:
        order_id = service.place_order(current_user.user_id, order_data.items, order_data.total)
    except (ValidationError, ProductNotFoundError, InsufficientStockError, PriceMismatchError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return OrderCreatedResponse(message="Order placed successfully!", order_id=order_id)


@router.get(
    "",
    response_model=list[OrderWithItems],
    summary="List my orders",
    description="Get the authenticated user's orders, newest first, with their items."
)
def list_orders(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the caller's order history."""
    service = OrderService(db)

    try:
        return service.list_orders(current_user.user_id)
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
