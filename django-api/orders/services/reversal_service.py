"""Reversal service - compensating transactions for refunds and cancellations.

Each reversal locks the order (or event) row, returns every unit the order
consumed to the inventory ledger and moves the order and its tickets to a
terminal state, all in one transaction. Refund confirmations are queued
for every order whose payment became REFUNDED.
"""

import logging
from dataclasses import dataclass

from catalog.domain import EventId, EventStatus
from catalog.domain.errors import EventAlreadyCancelledError, EventNotFoundError
from catalog.stores.interfaces import CatalogStore
from orders.domain import Order, OrderId, OrderStatus, PaymentStatus, TicketStatus
from orders.domain.errors import (
    OrderAlreadyCancelledError,
    OrderAlreadyRefundedError,
    OrderNotFoundError,
)
from orders.notifications import Notifier
from orders.stores.interfaces import InventoryLedger, OrderStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventCancellation:
    """What an event cancellation reversed."""

    event_id: EventId
    cancelled_orders: tuple[str, ...]
    released_tickets: int


class ReversalService:
    """Service for refunds, order cancellations and event cancellations."""

    def __init__(
        self,
        orders: OrderStore,
        catalog: CatalogStore,
        ledger: InventoryLedger,
        notifier: Notifier,
    ) -> None:
        self._orders = orders
        self._catalog = catalog
        self._ledger = ledger
        self._notifier = notifier

    def refund_order(self, order_id: OrderId) -> Order:
        """Refund an order and return everything it consumed.

        Raises:
            OrderNotFoundError: If the order does not exist.
            OrderAlreadyRefundedError: If the order was refunded before.
            OrderAlreadyCancelledError: If the order was cancelled before.
        """
        with self._orders.atomic():
            order = self._lock_reversible(order_id)
            refunded = self._reverse(
                order, OrderStatus.REFUNDED, TicketStatus.REFUNDED, PaymentStatus.REFUNDED
            )

        logger.info("Order %s refunded", refunded.order_number)
        self._notify_refund(refunded)
        return refunded

    def cancel_order(self, order_id: OrderId) -> Order:
        """Cancel an order and return everything it consumed.

        The payment is marked REFUNDED only when it had been collected.
        """
        with self._orders.atomic():
            order = self._lock_reversible(order_id)
            cancelled = self._cancel(order)

        logger.info("Order %s cancelled", cancelled.order_number)
        if cancelled.payment_status is PaymentStatus.REFUNDED:
            self._notify_refund(cancelled)
        return cancelled

    def cancel_event(self, event_id: EventId) -> EventCancellation:
        """Cancel an event and every open order placed for it.

        Only orders whose payment had been collected get a refund confirmation;
        unpaid orders are cancelled without one.

        Raises:
            EventNotFoundError: If the event does not exist.
            EventAlreadyCancelledError: If the event is already cancelled.
        """
        with self._orders.atomic():
            event = self._catalog.lock_event(event_id)
            if event is None:
                raise EventNotFoundError()
            if event.status is EventStatus.CANCELLED:
                raise EventAlreadyCancelledError()

            cancelled = [self._cancel(order) for order in self._orders.lock_open_orders_for_event(event_id)]
            self._catalog.set_event_status(event_id, EventStatus.CANCELLED)

        released = sum(len(order.tickets) for order in cancelled)
        logger.info(
            "Event %s cancelled: %d orders reversed, %d tickets released",
            event_id.value,
            len(cancelled),
            released,
        )
        for order in cancelled:
            if order.payment_status is PaymentStatus.REFUNDED:
                self._notify_refund(order)
        return EventCancellation(
            event_id=event_id,
            cancelled_orders=tuple(order.order_number for order in cancelled),
            released_tickets=released,
        )

    def _lock_reversible(self, order_id: OrderId) -> Order:
        order = self._orders.lock_order(order_id)
        if order is None:
            raise OrderNotFoundError()
        if order.status is OrderStatus.REFUNDED:
            raise OrderAlreadyRefundedError()
        if order.status is OrderStatus.CANCELLED:
            raise OrderAlreadyCancelledError()
        return order

    def _cancel(self, order: Order) -> Order:
        payment_status = (
            PaymentStatus.REFUNDED
            if order.payment_status is PaymentStatus.COMPLETED
            else order.payment_status
        )
        return self._reverse(order, OrderStatus.CANCELLED, TicketStatus.CANCELLED, payment_status)

    def _reverse(
        self,
        order: Order,
        status: OrderStatus,
        ticket_status: TicketStatus,
        payment_status: PaymentStatus,
    ) -> Order:
        for reservation in order.consumed_inventory():
            self._ledger.release(reservation.ref, reservation.quantity)
        return self._orders.mark_reversed(order.id, status, payment_status, ticket_status)

    def _notify_refund(self, order: Order) -> None:
        self._notifier.send_refund_confirmation(
            order.customer.email, order.order_number, str(order.prices.total)
        )
