from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.exceptions import ProductNotFoundError, StoreUnavailableError
from storefront.schemas.product import MAX_ID, ProductResponse
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List all products",
    description="Get every product in the catalog."
)
def list_products(db: Session = Depends(get_db)):
    """Get the full catalog."""
    service = ProductService(db)

    try:
        return service.list_products()
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get detailed information about a specific product."
)
def get_product(
    product_id: int = Path(..., gt=0, le=MAX_ID),
    db: Session = Depends(get_db)
):
    """Get a product by ID."""
    service = ProductService(db)

    try:
        return service.get_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found."
        )
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
