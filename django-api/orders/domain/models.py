"""Domain models representing persisted order state.

Django ORM models are in orders/models.py (persistence layer).
"""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

from catalog.domain import EventId, Money, ProductId, TicketTypeId, VariantId
from orders.domain.pricing import PriceBreakdown
from orders.domain.value_objects import (
    Customer,
    OrderId,
    OrderKind,
    OrderStatus,
    PaymentStatus,
    Reservation,
    ShippingAddress,
    StockRef,
    TicketStatus,
    TicketTypeRef,
)


@dataclass(frozen=True)
class OrderLineItem:
    product_id: ProductId
    variant_id: VariantId | None
    quantity: int
    unit_price: Money
    total_price: Money


@dataclass(frozen=True)
class Ticket:
    ticket_type_id: TicketTypeId
    code: str
    status: TicketStatus


@dataclass(frozen=True)
class Payment:
    amount: Money
    payment_method: str
    transaction_id: str
    status: PaymentStatus
    created_at: datetime


@dataclass(frozen=True)
class Order:
    """Domain representation of an Order and its children."""

    id: OrderId
    order_number: str
    customer: Customer
    kind: OrderKind
    status: OrderStatus
    payment_status: PaymentStatus
    prices: PriceBreakdown
    shipping_address: ShippingAddress | None
    event_id: EventId | None
    payment_method: str | None
    created_at: datetime
    items: tuple[OrderLineItem, ...] = ()
    tickets: tuple[Ticket, ...] = ()
    payments: tuple[Payment, ...] = ()

    def consumed_inventory(self) -> tuple[Reservation, ...]:
        """Every unit this order holds, one entry per resource."""
        units: Counter = Counter()
        for item in self.items:
            units[StockRef(item.product_id, item.variant_id)] += item.quantity
        for ticket in self.tickets:
            units[TicketTypeRef(ticket.ticket_type_id)] += 1
        return tuple(Reservation(ref, quantity) for ref, quantity in units.items())


@dataclass(frozen=True)
class LineItemDraft:
    product_id: ProductId
    variant_id: VariantId | None
    quantity: int
    unit_price: Money
    total_price: Money


@dataclass(frozen=True)
class TicketDraft:
    ticket_type_id: TicketTypeId
    code: str


@dataclass(frozen=True)
class OrderDraft:
    """A fully validated and priced order, not yet persisted."""

    order_number: str
    customer: Customer
    kind: OrderKind
    prices: PriceBreakdown
    shipping_address: ShippingAddress | None
    event_id: EventId | None
    payment_method: str | None
    placed_at: datetime
    items: tuple[LineItemDraft, ...] = ()
    tickets: tuple[TicketDraft, ...] = ()
