from catalog.domain.models import Event, Product, ProductVariant, TicketType
from catalog.domain.value_objects import (
    Capacity,
    EventId,
    EventStatus,
    Money,
    ProductId,
    TicketTypeId,
    VariantId,
)

__all__ = [
    "Event",
    "TicketType",
    "Product",
    "ProductVariant",
    "EventId",
    "EventStatus",
    "TicketTypeId",
    "ProductId",
    "VariantId",
    "Money",
    "Capacity",
]
