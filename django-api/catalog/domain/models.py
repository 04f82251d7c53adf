"""Domain models representing persisted catalog state.

These are pure domain objects with no API input rules.
Django ORM models are in catalog/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from catalog.domain.value_objects import (
    Capacity,
    EventId,
    EventStatus,
    Money,
    ProductId,
    TicketTypeId,
    VariantId,
)


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    id: TicketTypeId
    event_id: EventId
    name: str
    price: Money
    quantity: Capacity
    sold: Capacity
    max_per_order: int
    sales_start: datetime | None
    sales_end: datetime | None
    is_active: bool

    @property
    def available(self) -> int:
        return self.quantity.value - self.sold.value

    def sales_open(self, at: datetime) -> bool:
        """True when ``at`` falls inside the (possibly open-ended) sales window."""
        if self.sales_start is not None and at < self.sales_start:
            return False
        if self.sales_end is not None and at > self.sales_end:
            return False
        return True


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    title: str
    venue: str
    starts_at: datetime
    status: EventStatus
    ticket_types: tuple[TicketType, ...] = ()

    @property
    def is_published(self) -> bool:
        return self.status is EventStatus.PUBLISHED

    def ticket_type(self, ticket_type_id: TicketTypeId) -> TicketType | None:
        for ticket_type in self.ticket_types:
            if ticket_type.id == ticket_type_id:
                return ticket_type
        return None


@dataclass(frozen=True)
class ProductVariant:
    """Domain representation of a ProductVariant."""

    id: VariantId
    product_id: ProductId
    name: str
    price: Money | None
    stock: Capacity


@dataclass(frozen=True)
class Product:
    """Domain representation of a Product."""

    id: ProductId
    name: str
    sku: str
    price: Money
    stock: Capacity
    weight_grams: Decimal | None
    is_active: bool
