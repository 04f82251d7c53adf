from orders.domain.models import (
    LineItemDraft,
    Order,
    OrderDraft,
    OrderLineItem,
    Payment,
    Ticket,
    TicketDraft,
)
from orders.domain.pricing import PriceBreakdown, PricedLine, PricingPolicy, calculate_price
from orders.domain.value_objects import (
    CreateOrderRequest,
    Customer,
    LineItemRequest,
    OrderId,
    OrderKind,
    OrderStatus,
    PaymentStatus,
    Reservation,
    ResourceRef,
    ShippingAddress,
    StockRef,
    TicketRequest,
    TicketStatus,
    TicketTypeRef,
)

__all__ = [
    "Order",
    "OrderLineItem",
    "Ticket",
    "Payment",
    "OrderDraft",
    "LineItemDraft",
    "TicketDraft",
    "PriceBreakdown",
    "PricedLine",
    "PricingPolicy",
    "calculate_price",
    "CreateOrderRequest",
    "Customer",
    "LineItemRequest",
    "TicketRequest",
    "ShippingAddress",
    "OrderId",
    "OrderKind",
    "OrderStatus",
    "PaymentStatus",
    "TicketStatus",
    "Reservation",
    "ResourceRef",
    "StockRef",
    "TicketTypeRef",
]
