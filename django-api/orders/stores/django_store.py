"""Django ORM implementation of the OrderStore."""

import logging
from typing import Sequence

from django.db import IntegrityError, transaction
from django.utils import timezone

from catalog.domain import EventId, Money, ProductId, TicketTypeId, VariantId
from orders import models
from orders.domain import (
    Customer,
    Order,
    OrderDraft,
    OrderId,
    OrderKind,
    OrderLineItem,
    OrderStatus,
    Payment,
    PaymentStatus,
    PriceBreakdown,
    Reservation,
    ShippingAddress,
    StockRef,
    Ticket,
    TicketStatus,
)
from orders.domain.errors import OrderNumberTakenError, TransactionAlreadyRecordedError
from orders.stores.django_ledger import DjangoInventoryLedger
from orders.stores.interfaces import InventoryLedger, OrderStore

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = [s.value for s in OrderStatus if s.is_terminal]


def _lock_order(reservation: Reservation) -> tuple:
    """Sort key giving every transaction the same row locking order."""
    ref = reservation.ref
    if isinstance(ref, StockRef):
        variant = str(ref.variant_id.value) if ref.variant_id else ""
        return (0, str(ref.product_id.value), variant)
    return (1, str(ref.ticket_type_id.value), "")


def order_to_domain(row: models.Order) -> Order:
    shipping = None
    if row.shipping_country:
        shipping = ShippingAddress(
            address=row.shipping_address or "",
            city=row.shipping_city or "",
            zip_code=row.shipping_zip or "",
            country=row.shipping_country,
            state=row.shipping_state,
        )
    return Order(
        id=OrderId(row.id),
        order_number=row.order_number,
        customer=Customer(
            email=row.customer_email, name=row.customer_name, phone=row.customer_phone
        ),
        kind=OrderKind(row.kind),
        status=OrderStatus(row.status),
        payment_status=PaymentStatus(row.payment_status),
        prices=PriceBreakdown(
            subtotal=Money(row.subtotal),
            shipping_fee=Money(row.shipping_fee),
            tax=Money(row.tax),
            total=Money(row.total),
        ),
        shipping_address=shipping,
        event_id=EventId(row.event_id) if row.event_id else None,
        payment_method=row.payment_method,
        created_at=row.created_at,
        items=tuple(
            OrderLineItem(
                product_id=ProductId(item.product_id),
                variant_id=VariantId(item.product_variant_id) if item.product_variant_id else None,
                quantity=item.quantity,
                unit_price=Money(item.unit_price),
                total_price=Money(item.total_price),
            )
            for item in row.items.all()
        ),
        tickets=tuple(
            Ticket(
                ticket_type_id=TicketTypeId(ticket.ticket_type_id),
                code=ticket.code,
                status=TicketStatus(ticket.status),
            )
            for ticket in row.tickets.all()
        ),
        payments=tuple(
            Payment(
                amount=Money(payment.amount),
                payment_method=payment.payment_method,
                transaction_id=payment.transaction_id,
                status=PaymentStatus(payment.status),
                created_at=payment.created_at,
            )
            for payment in row.payments.all()
        ),
    )


class DjangoOrderStore(OrderStore):
    """PostgreSQL-backed order store using Django ORM."""

    def __init__(self, ledger: InventoryLedger | None = None) -> None:
        self._ledger = ledger or DjangoInventoryLedger()

    def _orders(self):
        return models.Order.objects.prefetch_related("items", "tickets", "payments")

    def atomic(self):
        return transaction.atomic()

    def commit_order(self, draft: OrderDraft, reservations: Sequence[Reservation]) -> Order:
        try:
            with transaction.atomic():
                for reservation in sorted(reservations, key=_lock_order):
                    self._ledger.reserve(reservation.ref, reservation.quantity, at=draft.placed_at)
                row = self._write_order(draft)
        except IntegrityError as exc:
            if not models.Order.objects.filter(order_number=draft.order_number).exists():
                raise
            logger.warning("Order number %s already taken: %s", draft.order_number, exc)
            raise OrderNumberTakenError() from exc
        return self._load(row.pk)

    def _write_order(self, draft: OrderDraft) -> models.Order:
        shipping = draft.shipping_address
        row = models.Order.objects.create(
            order_number=draft.order_number,
            customer_email=draft.customer.email,
            customer_name=draft.customer.name,
            customer_phone=draft.customer.phone,
            kind=draft.kind.value,
            event_id=draft.event_id.value if draft.event_id else None,
            shipping_address=shipping.address if shipping else None,
            shipping_city=shipping.city if shipping else None,
            shipping_state=shipping.state if shipping else None,
            shipping_zip=shipping.zip_code if shipping else None,
            shipping_country=shipping.country if shipping else None,
            subtotal=draft.prices.subtotal.amount,
            shipping_fee=draft.prices.shipping_fee.amount,
            tax=draft.prices.tax.amount,
            total=draft.prices.total.amount,
            payment_method=draft.payment_method,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
        )
        models.OrderItem.objects.bulk_create(
            [
                models.OrderItem(
                    order=row,
                    product_id=item.product_id.value,
                    product_variant_id=item.variant_id.value if item.variant_id else None,
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    total_price=item.total_price.amount,
                )
                for item in draft.items
            ]
        )
        models.Ticket.objects.bulk_create(
            [
                models.Ticket(
                    order=row,
                    ticket_type_id=ticket.ticket_type_id.value,
                    code=ticket.code,
                    status=TicketStatus.VALID.value,
                )
                for ticket in draft.tickets
            ]
        )
        return row

    def _load(self, pk) -> Order:
        return order_to_domain(self._orders().get(pk=pk))

    def get_order(self, order_id: OrderId) -> Order | None:
        row = self._orders().filter(pk=order_id.value).first()
        return order_to_domain(row) if row is not None else None

    def get_order_by_number(self, order_number: str) -> Order | None:
        row = self._orders().filter(order_number=order_number).first()
        return order_to_domain(row) if row is not None else None

    def list_orders_for_customer(self, email: str) -> list[Order]:
        rows = self._orders().filter(customer_email=email.strip().lower()).order_by("-created_at")
        return [order_to_domain(row) for row in rows]

    def lock_order(self, order_id: OrderId) -> Order | None:
        row = self._orders().select_for_update().filter(pk=order_id.value).first()
        return order_to_domain(row) if row is not None else None

    def lock_open_orders_for_event(self, event_id: EventId) -> list[Order]:
        rows = (
            self._orders()
            .select_for_update()
            .filter(event_id=event_id.value)
            .exclude(status__in=TERMINAL_STATUSES)
            .order_by("created_at")
        )
        return [order_to_domain(row) for row in rows]

    def record_payment(self, order_id: OrderId, transaction_id: str) -> Order:
        row = models.Order.objects.get(pk=order_id.value)
        row.status = OrderStatus.CONFIRMED.value
        row.payment_status = PaymentStatus.COMPLETED.value
        row.payment_intent_id = transaction_id
        try:
            with transaction.atomic():
                row.save(
                    update_fields=["status", "payment_status", "payment_intent_id", "updated_at"]
                )
                models.Payment.objects.create(
                    order=row,
                    amount=row.total,
                    payment_method=row.payment_method or "card",
                    transaction_id=transaction_id,
                    status=PaymentStatus.COMPLETED.value,
                )
        except IntegrityError as exc:
            logger.warning(
                "Transaction %s reused for order %s", transaction_id, row.order_number
            )
            raise TransactionAlreadyRecordedError(transaction_id) from exc
        return self._load(row.pk)

    def set_status(self, order_id: OrderId, status: OrderStatus) -> Order:
        models.Order.objects.filter(pk=order_id.value).update(
            status=status.value, updated_at=timezone.now()
        )
        return self._load(order_id.value)

    def mark_reversed(
        self,
        order_id: OrderId,
        status: OrderStatus,
        payment_status: PaymentStatus,
        ticket_status: TicketStatus,
    ) -> Order:
        models.Order.objects.filter(pk=order_id.value).update(
            status=status.value,
            payment_status=payment_status.value,
            updated_at=timezone.now(),
        )
        models.Ticket.objects.filter(order_id=order_id.value).update(status=ticket_status.value)
        if payment_status is PaymentStatus.REFUNDED:
            models.Payment.objects.filter(
                order_id=order_id.value, status=PaymentStatus.COMPLETED.value
            ).update(status=PaymentStatus.REFUNDED.value)
        return self._load(order_id.value)
