"""
Domain exceptions for the storefront services.

Hierarchy:
    StorefrontError
    ├── ValidationError
    │   ├── InvalidInputError
    │   └── TotalMismatchError
    ├── ConflictError
    │   └── UsernameTakenError
    ├── UnauthorizedError
    │   ├── InvalidCredentialsError
    │   └── InvalidTokenError
    ├── NotFoundError
    │   └── ProductNotFoundError
    ├── InsufficientStockError
    ├── PriceMismatchError
    └── StoreUnavailableError

Services raise these; the API layer maps them to HTTP status codes.
"""
from decimal import Decimal
from typing import Optional


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message, safe to show to clients
        details: Extra context (ids, quantities) for logs and tests
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationError(StorefrontError):
    """Malformed or missing input."""
    pass


class InvalidInputError(ValidationError):
    pass


class TotalMismatchError(ValidationError):
    """Raised when the declared order total differs from the sum of its lines."""

    def __init__(self, declared: Decimal, computed: Decimal):
        super().__init__(
            f"Order total mismatch. Declared: {declared}, expected: {computed}",
            details={"declared": declared, "computed": computed},
        )
        self.declared = declared
        self.computed = computed


class ConflictError(StorefrontError):
    pass


class UsernameTakenError(ConflictError):
    def __init__(self, username: str):
        super().__init__(
            "Username already exists. Please choose a different one.",
            details={"username": username},
        )
        self.username = username


class UnauthorizedError(StorefrontError):
    pass


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self, username: str):
        super().__init__("Invalid username or password.", details={"username": username})
        self.username = username


class InvalidTokenError(UnauthorizedError):
    def __init__(self, reason: str):
        super().__init__("Invalid or expired token.", details={"reason": reason})
        self.reason = reason


class NotFoundError(StorefrontError):
    pass


class ProductNotFoundError(NotFoundError):
    """Exception raised when the requested product doesn't exist."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product with ID {product_id} not found.",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class InsufficientStockError(StorefrontError):
    """Exception raised when there's not enough stock to fulfill an order."""

    def __init__(self, product_id: int, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}, Requested: {requested}",
            details={"product_id": product_id, "requested": requested, "available": available},
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class PriceMismatchError(StorefrontError):
    """Raised when a cart price no longer matches the catalog price."""

    def __init__(self, product_id: int, product_name: str, declared: Decimal, current: Decimal):
        super().__init__(
            f"Price mismatch for {product_name}. Please refresh your cart.",
            details={"product_id": product_id, "declared": declared, "current": current},
        )
        self.product_id = product_id
        self.declared = declared
        self.current = current


class StoreUnavailableError(StorefrontError):
    """The database failed or could not be reached."""
    pass
