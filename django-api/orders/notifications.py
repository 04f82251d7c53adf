"""Fulfillment notifier.

Notifications are handed off after the surrounding transaction commits and
never affect the outcome of the operation that triggered them.
"""

import logging
from abc import ABC, abstractmethod

from django.db import transaction

from orders import tasks

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Interface for customer notifications."""

    @abstractmethod
    def send_order_confirmation(self, email: str, order_number: str, summary: dict) -> None:
        ...

    @abstractmethod
    def send_ticket_confirmation(
        self, email: str, order_number: str, event_summary: dict, ticket_count: int
    ) -> None:
        ...

    @abstractmethod
    def send_refund_confirmation(self, email: str, order_number: str, amount: str) -> None:
        ...


def _enqueue(task, *args) -> None:
    try:
        task.delay(*args)
    except Exception:
        logger.exception("Failed to queue %s for order %s", task.name, args[1])


class CeleryNotifier(Notifier):
    """Queues e-mail tasks once the current transaction has committed."""

    def _on_commit(self, task, *args) -> None:
        transaction.on_commit(lambda: _enqueue(task, *args))

    def send_order_confirmation(self, email: str, order_number: str, summary: dict) -> None:
        self._on_commit(tasks.send_order_confirmation_email, email, order_number, summary)

    def send_ticket_confirmation(
        self, email: str, order_number: str, event_summary: dict, ticket_count: int
    ) -> None:
        self._on_commit(
            tasks.send_ticket_confirmation_email, email, order_number, event_summary, ticket_count
        )

    def send_refund_confirmation(self, email: str, order_number: str, amount: str) -> None:
        self._on_commit(tasks.send_refund_confirmation_email, email, order_number, amount)
