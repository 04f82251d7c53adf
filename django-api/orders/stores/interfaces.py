"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Ledger operations
and order writes join the transaction opened by ``OrderStore.atomic()``.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Sequence

from catalog.domain import EventId
from orders.domain import (
    Order,
    OrderDraft,
    OrderId,
    OrderStatus,
    PaymentStatus,
    Reservation,
    ResourceRef,
    TicketStatus,
)


class InventoryLedger(ABC):
    """Available quantity for stock-keeping units and ticket types."""

    @abstractmethod
    def reserve(self, ref: ResourceRef, quantity: int, at: datetime | None = None) -> None:
        """Consume ``quantity`` units or raise without changing anything.

        Raises:
            NotFoundError: If the product, variant or ticket type does not exist.
            InactiveOrClosedError: If the resource is disabled or its sales window is closed.
            InsufficientInventoryError: If availability or the per-order cap is exceeded.
        """
        ...

    @abstractmethod
    def release(self, ref: ResourceRef, quantity: int) -> None:
        """Return ``quantity`` units previously reserved.

        Raises:
            InventoryReleaseError: If no reservation of that size can be undone.
        """
        ...


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Open a unit of work; everything inside commits or rolls back together."""
        ...

    @abstractmethod
    def commit_order(self, draft: OrderDraft, reservations: Sequence[Reservation]) -> Order:
        """Reserve inventory and write the order with its children, all or nothing.

        Raises:
            OrderNumberTakenError: If the draft's order number already exists.
        """
        ...

    @abstractmethod
    def get_order(self, order_id: OrderId) -> Order | None:
        ...

    @abstractmethod
    def get_order_by_number(self, order_number: str) -> Order | None:
        ...

    @abstractmethod
    def list_orders_for_customer(self, email: str) -> list[Order]:
        """Return a customer's orders, newest first."""
        ...

    @abstractmethod
    def lock_order(self, order_id: OrderId) -> Order | None:
        """Return an order with its row locked until the enclosing transaction ends."""
        ...

    @abstractmethod
    def lock_open_orders_for_event(self, event_id: EventId) -> list[Order]:
        """Return and lock every non-terminal order for an event."""
        ...

    @abstractmethod
    def record_payment(self, order_id: OrderId, transaction_id: str) -> Order:
        """Confirm the order and store a completed payment for its total."""
        ...

    @abstractmethod
    def set_status(self, order_id: OrderId, status: OrderStatus) -> Order:
        ...

    @abstractmethod
    def mark_reversed(
        self,
        order_id: OrderId,
        status: OrderStatus,
        payment_status: PaymentStatus,
        ticket_status: TicketStatus,
    ) -> Order:
        """Move an order and all of its tickets to terminal states."""
        ...
