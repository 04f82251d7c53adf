"""Domain error codes for the orders module."""

from enum import Enum

from common.errors import (
    ConflictError,
    InactiveOrClosedError,
    InsufficientInventoryError,
    NotFoundError,
    RequestValidationError,
)


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ORDER_ID = "INVALID_ORDER_ID"
    EMPTY_ORDER = "EMPTY_ORDER"
    EVENT_REQUIRED = "EVENT_REQUIRED"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    VARIANT_NOT_FOUND = "VARIANT_NOT_FOUND"
    TICKET_TYPE_NOT_FOUND = "TICKET_TYPE_NOT_FOUND"
    PRODUCT_INACTIVE = "PRODUCT_INACTIVE"
    EVENT_NOT_AVAILABLE = "EVENT_NOT_AVAILABLE"
    TICKET_TYPE_UNAVAILABLE = "TICKET_TYPE_UNAVAILABLE"
    SALES_CLOSED = "SALES_CLOSED"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INSUFFICIENT_TICKETS = "INSUFFICIENT_TICKETS"
    MAX_PER_ORDER_EXCEEDED = "MAX_PER_ORDER_EXCEEDED"
    ORDER_NUMBER_TAKEN = "ORDER_NUMBER_TAKEN"
    ALREADY_REFUNDED = "ALREADY_REFUNDED"
    ALREADY_CANCELLED = "ALREADY_CANCELLED"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    RELEASE_MISMATCH = "RELEASE_MISMATCH"
    TRANSACTION_ALREADY_RECORDED = "TRANSACTION_ALREADY_RECORDED"


class InvalidOrderIdError(RequestValidationError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_ORDER_ID, message="Invalid order ID format")


class EmptyOrderError(RequestValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_ORDER,
            message="An order needs at least one product or ticket",
        )


class EventRequiredError(RequestValidationError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_REQUIRED,
            message="Event ID required for ticket purchase",
        )


class OrderNotFoundError(NotFoundError):
    """Raised when an order is not found."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.ORDER_NOT_FOUND, message="Order not found")


class ProductNotFoundError(NotFoundError):
    """Raised when a product is missing or not for sale."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PRODUCT_NOT_FOUND,
            message="Product not found or inactive",
        )


class VariantNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.VARIANT_NOT_FOUND, message="Product variant not found")


class TicketTypeNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_TYPE_NOT_FOUND,
            message="Ticket type not found or inactive",
        )


class ProductInactiveError(InactiveOrClosedError):
    def __init__(self, name: str) -> None:
        super().__init__(code=ErrorCode.PRODUCT_INACTIVE, message=f"{name} is no longer for sale")


class EventNotAvailableError(InactiveOrClosedError):
    """Raised when tickets are requested for an event that is not published."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_AVAILABLE, message="Event not available")


class TicketTypeUnavailableError(InactiveOrClosedError):
    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_TYPE_UNAVAILABLE,
            message=f"Tickets for {name} are not on sale",
        )


class SalesWindowClosedError(InactiveOrClosedError):
    def __init__(self, name: str) -> None:
        super().__init__(code=ErrorCode.SALES_CLOSED, message=f"Sales for {name} are not active")


class InsufficientStockError(InsufficientInventoryError):
    def __init__(self, name: str) -> None:
        super().__init__(code=ErrorCode.INSUFFICIENT_STOCK, message=f"Insufficient stock for {name}")


class InsufficientTicketsError(InsufficientInventoryError):
    def __init__(self, name: str, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_TICKETS,
            message=f"Only {available} tickets available for {name}",
        )


class MaxPerOrderExceededError(InsufficientInventoryError):
    def __init__(self, name: str, max_per_order: int) -> None:
        super().__init__(
            code=ErrorCode.MAX_PER_ORDER_EXCEEDED,
            message=f"Maximum {max_per_order} tickets per order for {name}",
        )


class OrderNumberTakenError(ConflictError):
    """Raised when the generated order number already exists; safe to retry."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ORDER_NUMBER_TAKEN,
            message="Order could not be placed, please retry",
        )


class OrderAlreadyRefundedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.ALREADY_REFUNDED, message="Order already refunded")


class OrderAlreadyCancelledError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.ALREADY_CANCELLED, message="Order already cancelled")


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot move order from {current} to {target}",
        )


class InventoryReleaseError(ConflictError):
    """Raised when a release does not match any prior reservation."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.RELEASE_MISMATCH,
            message="Inventory could not be returned",
        )


class TransactionAlreadyRecordedError(ConflictError):
    """Raised when a gateway transaction id was already used for another payment."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(
            code=ErrorCode.TRANSACTION_ALREADY_RECORDED,
            message=f"Transaction {transaction_id} was already recorded",
        )
