"""Domain primitives for orders, tickets and inventory references."""

from dataclasses import dataclass
from enum import Enum
from typing import Self, TypeAlias
from uuid import UUID

from catalog.domain import EventId, ProductId, TicketTypeId, VariantId


class OrderStatus(Enum):
    """Lifecycle of an order. CANCELLED and REFUNDED are terminal."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.CANCELLED, OrderStatus.REFUNDED)

    def can_transition_to(self, target: "OrderStatus") -> bool:
        return target in _ORDER_TRANSITIONS[self]


_ORDER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.CONFIRMED: {OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: set(),
    OrderStatus.REFUNDED: set(),
}


class PaymentStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class TicketStatus(Enum):
    VALID = "VALID"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    REDEEMED = "REDEEMED"


class OrderKind(Enum):
    PRODUCTS = "PRODUCTS"
    TICKETS = "TICKETS"
    MIXED = "MIXED"

    @classmethod
    def for_contents(cls, has_products: bool, has_tickets: bool) -> Self:
        if has_products and has_tickets:
            return cls.MIXED
        return cls.TICKETS if has_tickets else cls.PRODUCTS


@dataclass(frozen=True)
class OrderId:
    """Unique identifier for an Order."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class Customer:
    """Who placed the order. Emails are stored lower-cased."""

    email: str
    name: str
    phone: str | None = None

    def __post_init__(self) -> None:
        if "@" not in self.email:
            raise ValueError("Customer email is invalid")
        if not self.name.strip():
            raise ValueError("Customer name cannot be empty")
        object.__setattr__(self, "email", self.email.strip().lower())


@dataclass(frozen=True)
class ShippingAddress:
    address: str
    city: str
    zip_code: str
    country: str
    state: str | None = None


@dataclass(frozen=True)
class StockRef:
    """A stock-keeping unit: a product, or one of its variants."""

    product_id: ProductId
    variant_id: VariantId | None = None


@dataclass(frozen=True)
class TicketTypeRef:
    ticket_type_id: TicketTypeId


ResourceRef: TypeAlias = StockRef | TicketTypeRef


@dataclass(frozen=True)
class Reservation:
    """A quantity of one inventory resource consumed by an order."""

    ref: ResourceRef
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Reservation quantity must be positive")


@dataclass(frozen=True)
class LineItemRequest:
    product_id: ProductId
    quantity: int
    variant_id: VariantId | None = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Line item quantity must be positive")


@dataclass(frozen=True)
class TicketRequest:
    ticket_type_id: TicketTypeId
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Ticket quantity must be positive")


@dataclass(frozen=True)
class CreateOrderRequest:
    """A checkout request as accepted from the API layer."""

    customer: Customer
    items: tuple[LineItemRequest, ...] = ()
    tickets: tuple[TicketRequest, ...] = ()
    event_id: EventId | None = None
    shipping_address: ShippingAddress | None = None
    payment_method: str | None = None
