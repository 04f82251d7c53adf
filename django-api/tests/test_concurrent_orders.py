"""Concurrent order placement against a real PostgreSQL database.

Two requests validated against the same snapshot race for the last units.
SQLite serialises whole transactions, so these only run on PostgreSQL:

    POSTGRES_DB=ticketshop pytest tests/test_concurrent_orders.py -v
"""

import threading
import time

import pytest
from django.db import connection

from catalog.models import ProductVariant, TicketType
from catalog.stores.django_store import DjangoCatalogStore
from orders import models
from orders.domain.errors import InsufficientStockError, InsufficientTicketsError
from orders.services import OrderService
from orders.stores.django_ledger import DjangoInventoryLedger
from orders.stores.django_store import DjangoOrderStore

pytestmark = [
    pytest.mark.skipif(connection.vendor != "postgresql", reason="needs PostgreSQL row locks"),
    pytest.mark.django_db(transaction=True),
]


class RacingLedger(DjangoInventoryLedger):
    """Lines both threads up before their first reservation.

    The winner keeps its locks a little longer so the loser is already
    waiting on them when it commits.
    """

    def __init__(self, parties: int = 2) -> None:
        self._start = threading.Barrier(parties, timeout=10)
        self._local = threading.local()

    def reserve(self, ref, quantity, at=None):
        if not getattr(self._local, "started", False):
            self._local.started = True
            self._start.wait()
        super().reserve(ref, quantity, at=at)
        time.sleep(0.2)


def race(service, requests):
    outcomes = []

    def place(request):
        try:
            outcomes.append(service.create_order(request))
        except (InsufficientStockError, InsufficientTicketsError) as exc:
            outcomes.append(exc)
        finally:
            connection.close()

    threads = [threading.Thread(target=place, args=(request,)) for request in requests]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


@pytest.fixture
def racing_service(notifier, now):
    ledger = RacingLedger()
    return OrderService(
        catalog=DjangoCatalogStore(),
        orders=DjangoOrderStore(ledger),
        ledger=ledger,
        notifier=notifier,
        clock=lambda: now,
    )


def test_two_orders_for_the_last_tickets(racing_service, make_request, ticket_type, event):
    TicketType.objects.filter(pk=ticket_type.pk).update(quantity=4)

    outcomes = race(
        racing_service,
        [
            make_request(tickets=[(ticket_type, 3)], event=event),
            make_request(tickets=[(ticket_type, 3)], event=event, email="late@example.com"),
        ],
    )

    assert len(outcomes) == 2
    assert sum(isinstance(o, InsufficientTicketsError) for o in outcomes) == 1
    ticket_type.refresh_from_db()
    assert ticket_type.sold == 3
    assert models.Order.objects.count() == 1
    assert models.Ticket.objects.count() == 3


def test_two_orders_for_the_last_variant_units(racing_service, make_request, product, variant):
    outcomes = race(
        racing_service,
        [
            make_request(items=[(product, 3, variant)]),
            make_request(items=[(product, 3, variant)], email="late@example.com"),
        ],
    )

    assert len(outcomes) == 2
    assert sum(isinstance(o, InsufficientStockError) for o in outcomes) == 1
    assert ProductVariant.objects.get(pk=variant.pk).stock == 2
    assert models.Order.objects.count() == 1


def test_losing_mixed_order_takes_nothing(
    racing_service, make_request, product, variant, ticket_type, event
):
    """Both orders want 3 of 4 tickets and 3 of 5 variant units; one gets both."""
    TicketType.objects.filter(pk=ticket_type.pk).update(quantity=4)

    outcomes = race(
        racing_service,
        [
            make_request(items=[(product, 3, variant)], tickets=[(ticket_type, 3)], event=event),
            make_request(
                items=[(product, 3, variant)],
                tickets=[(ticket_type, 3)],
                event=event,
                email="late@example.com",
            ),
        ],
    )

    assert len(outcomes) == 2
    assert sum(isinstance(o, Exception) for o in outcomes) == 1
    ticket_type.refresh_from_db()
    assert ticket_type.sold == 3
    assert ProductVariant.objects.get(pk=variant.pk).stock == 2
    assert models.Order.objects.count() == 1
