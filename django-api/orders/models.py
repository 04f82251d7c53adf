"""Django ORM models (persistence layer).

Orders own their line items, tickets and payments. Catalog rows are
referenced with PROTECT so a sold product or ticket type cannot vanish.
"""

import uuid

from django.db import models

from catalog.models import Event, Product, ProductVariant, TicketType
from orders.domain.value_objects import OrderKind, OrderStatus, PaymentStatus, TicketStatus


def _choices(enum_cls):
    return [(member.value, member.name.title()) for member in enum_cls]


class Order(models.Model):
    """Persistence model for orders."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=32, unique=True)
    customer_email = models.EmailField(db_index=True)
    customer_name = models.CharField(max_length=255)
    customer_phone = models.CharField(max_length=32, blank=True, null=True)
    kind = models.CharField(max_length=16, choices=_choices(OrderKind))
    event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="orders", null=True, blank=True
    )
    shipping_address = models.CharField(max_length=255, blank=True, null=True)
    shipping_city = models.CharField(max_length=100, blank=True, null=True)
    shipping_state = models.CharField(max_length=100, blank=True, null=True)
    shipping_zip = models.CharField(max_length=20, blank=True, null=True)
    shipping_country = models.CharField(max_length=100, blank=True, null=True)
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    shipping_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(max_length=50, blank=True, null=True)
    payment_intent_id = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(
        max_length=16, choices=_choices(OrderStatus), default=OrderStatus.PENDING.value
    )
    payment_status = models.CharField(
        max_length=16, choices=_choices(PaymentStatus), default=PaymentStatus.PENDING.value
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event", "status"], name="order_event_status_idx"),
        ]

    def __str__(self) -> str:
        return self.order_number


class OrderItem(models.Model):
    """A merchandise line with the price captured at order time."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_items")
    product_variant = models.ForeignKey(
        ProductVariant,
        on_delete=models.PROTECT,
        related_name="order_items",
        null=True,
        blank=True,
    )
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.quantity} x {self.product_id}"


class Ticket(models.Model):
    """One admission; a purchase of N tickets creates N rows."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="tickets")
    ticket_type = models.ForeignKey(TicketType, on_delete=models.PROTECT, related_name="tickets")
    code = models.CharField(max_length=64, unique=True)
    status = models.CharField(
        max_length=16, choices=_choices(TicketStatus), default=TicketStatus.VALID.value
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.code


class Payment(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(max_length=50)
    transaction_id = models.CharField(max_length=255, unique=True)
    status = models.CharField(max_length=16, choices=_choices(PaymentStatus))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.transaction_id
