"""
Ordering error taxonomy.

Every business-rule violation is raised as one of these before any
mutation happens. The API layer maps `status_code` to the HTTP status
and `error` to the envelope's `error` field.
"""
from typing import Optional


class OrderingError(Exception):
    """Base class for all errors raised by the ordering core."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.error
        super().__init__(self.message)


class AuthenticationRequired(OrderingError):
    """Missing, malformed or expired identity."""

    status_code = 401
    error = "Authentication required"


class AccessDenied(OrderingError):
    """Role or store-ownership violation."""

    status_code = 403
    error = "Access denied"


class NotFound(OrderingError):
    status_code = 404
    error = "Not found"


class OrderNotFound(NotFound):
    error = "Order not found"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class ProductNotFound(NotFound):
    error = "Product not found"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class StoreNotFound(NotFound):
    error = "Store not found"

    def __init__(self, store_id: int):
        self.store_id = store_id
        super().__init__(f"Store {store_id} not found")


class ValidationError(OrderingError):
    """Client sent something the core cannot accept."""

    status_code = 400
    error = "Validation failed"


class InvalidQuantity(ValidationError):
    error = "Invalid quantity"

    def __init__(self, product_id: int, quantity: int):
        self.product_id = product_id
        self.quantity = quantity
        super().__init__(
            f"Quantity for product {product_id} must be between 1 and 2147483647, got {quantity}"
        )


class InvalidIdentifier(ValidationError):
    error = "Invalid identifier"


class InvalidTransition(OrderingError):
    """Status change not allowed for this caller and current state."""

    status_code = 400
    error = "Invalid status transition"


class PersistenceFailure(OrderingError):
    """Storage-layer fault; the transaction has been rolled back."""

    status_code = 500
    error = "Persistence failure"
