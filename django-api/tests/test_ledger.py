"""Tests for the inventory ledger against the database.

Run with: pytest tests/test_ledger.py -v
"""

from datetime import timedelta

import pytest
from django.db import connection, transaction
from django.test.utils import CaptureQueriesContext

from catalog.domain import EventStatus, ProductId, TicketTypeId, VariantId
from common.errors import ErrorKind
from orders.domain import StockRef, TicketTypeRef
from orders.domain.errors import (
    InsufficientStockError,
    InsufficientTicketsError,
    InventoryReleaseError,
    MaxPerOrderExceededError,
    ProductInactiveError,
    SalesWindowClosedError,
    TicketTypeNotFoundError,
    TicketTypeUnavailableError,
)


def tickets(ticket_type) -> TicketTypeRef:
    return TicketTypeRef(TicketTypeId(ticket_type.id))


def counter_updates(queries, table: str) -> list[str]:
    return [q["sql"] for q in queries if q["sql"].startswith("UPDATE") and table in q["sql"]]


@pytest.mark.django_db
class TestStockReservation:
    def test_reserve_decrements_product_stock(self, ledger, product):
        ledger.reserve(StockRef(ProductId(product.id)), 3)
        product.refresh_from_db()
        assert product.stock == 47

    def test_reserve_targets_the_variant_row(self, ledger, product, variant):
        ledger.reserve(StockRef(ProductId(product.id), VariantId(variant.id)), 2)
        product.refresh_from_db()
        variant.refresh_from_db()
        assert (product.stock, variant.stock) == (50, 3)

    def test_reserve_more_than_stock_fails_without_change(self, ledger, variant, product):
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.reserve(StockRef(ProductId(product.id), VariantId(variant.id)), 6)
        assert exc_info.value.kind is ErrorKind.INSUFFICIENT_INVENTORY
        variant.refresh_from_db()
        assert variant.stock == 5

    def test_reserve_inactive_product_is_closed(self, ledger, product):
        product.is_active = False
        product.save()
        with pytest.raises(ProductInactiveError):
            ledger.reserve(StockRef(ProductId(product.id)), 1)

    def test_inactive_parent_product_closes_its_variants(self, ledger, product, variant):
        product.is_active = False
        product.save()
        with pytest.raises(ProductInactiveError):
            ledger.reserve(StockRef(ProductId(product.id), VariantId(variant.id)), 1)
        variant.refresh_from_db()
        assert variant.stock == 5

    def test_variant_update_touches_only_the_variant_table(self, ledger, product, variant):
        with CaptureQueriesContext(connection) as ctx:
            ledger.reserve(StockRef(ProductId(product.id), VariantId(variant.id)), 1)

        updates = counter_updates(ctx.captured_queries, "catalog_productvariant")
        assert len(updates) == 1
        assert "IN (SELECT" not in updates[0]
        assert "JOIN" not in updates[0]

    def test_reserve_then_release_restores_stock(self, ledger, product):
        ref = StockRef(ProductId(product.id))
        ledger.reserve(ref, 7)
        ledger.release(ref, 7)
        product.refresh_from_db()
        assert product.stock == 50


@pytest.mark.django_db
class TestTicketReservation:
    def test_reserve_increments_sold(self, ledger, ticket_type, now):
        ledger.reserve(tickets(ticket_type), 4, at=now)
        ticket_type.refresh_from_db()
        assert ticket_type.sold == 4

    def test_reserve_past_capacity_is_rejected(self, ledger, ticket_type, now):
        """quantity=10, sold=8, max_per_order=5: asking for 3 leaves sold at 8."""
        ticket_type.quantity, ticket_type.sold, ticket_type.max_per_order = 10, 8, 5
        ticket_type.save()

        with pytest.raises(InsufficientTicketsError) as exc_info:
            ledger.reserve(tickets(ticket_type), 3, at=now)

        assert "Only 2 tickets available" in exc_info.value.message
        ticket_type.refresh_from_db()
        assert ticket_type.sold == 8

    def test_reserve_exactly_remaining_capacity(self, ledger, ticket_type, now):
        ticket_type.quantity, ticket_type.sold = 10, 8
        ticket_type.save()
        ledger.reserve(tickets(ticket_type), 2, at=now)
        ticket_type.refresh_from_db()
        assert ticket_type.sold == 10

    def test_reserve_over_max_per_order(self, ledger, ticket_type, now):
        with pytest.raises(MaxPerOrderExceededError):
            ledger.reserve(tickets(ticket_type), 11, at=now)

    def test_reserve_outside_sales_window(self, ledger, ticket_type, now):
        with pytest.raises(SalesWindowClosedError) as exc_info:
            ledger.reserve(tickets(ticket_type), 1, at=now + timedelta(days=41))
        assert exc_info.value.kind is ErrorKind.INACTIVE_OR_CLOSED

    def test_reserve_for_unpublished_event(self, ledger, ticket_type, event, now):
        event.status = EventStatus.DRAFT.value
        event.save()
        with pytest.raises(TicketTypeUnavailableError):
            ledger.reserve(tickets(ticket_type), 1, at=now)

    def test_ticket_update_touches_only_the_ticket_table(self, ledger, ticket_type, now):
        """Event status is checked under the event row lock, not joined into the UPDATE."""
        with CaptureQueriesContext(connection) as ctx:
            ledger.reserve(tickets(ticket_type), 2, at=now)

        updates = counter_updates(ctx.captured_queries, "catalog_tickettype")
        assert len(updates) == 1
        assert "IN (SELECT" not in updates[0]
        assert "JOIN" not in updates[0]
        assert "catalog_event" not in updates[0]

    def test_reserve_unknown_ticket_type(self, ledger, ticket_type, now):
        missing = tickets(ticket_type)
        ticket_type.delete()
        with pytest.raises(TicketTypeNotFoundError):
            ledger.reserve(missing, 1, at=now)

    def test_reserve_then_release_restores_availability(self, ledger, ticket_type, now):
        ticket_type.sold = 13
        ticket_type.save()
        ledger.reserve(tickets(ticket_type), 5, at=now)
        ledger.release(tickets(ticket_type), 5)
        ticket_type.refresh_from_db()
        assert ticket_type.sold == 13

    def test_release_more_than_sold_is_fatal(self, ledger, ticket_type):
        with pytest.raises(InventoryReleaseError):
            ledger.release(tickets(ticket_type), 1)

    def test_attempts_never_exceed_capacity(self, ledger, ticket_type, now):
        """Whatever the order of attempts, at most `available` units are handed out."""
        ticket_type.quantity, ticket_type.sold = 20, 3
        ticket_type.save()

        granted = 0
        for quantity in [4, 9, 1, 6, 3, 2, 5, 1, 1, 2]:
            try:
                ledger.reserve(tickets(ticket_type), quantity, at=now)
            except InsufficientTicketsError:
                continue
            granted += quantity

        ticket_type.refresh_from_db()
        assert granted == 17
        assert ticket_type.sold == 20


@pytest.mark.django_db(transaction=True)
def test_ledger_refuses_to_run_outside_a_transaction(ledger, product):
    ref = StockRef(ProductId(product.id))

    with pytest.raises(RuntimeError):
        ledger.reserve(ref, 1)

    with transaction.atomic():
        ledger.reserve(ref, 1)
    product.refresh_from_db()
    assert product.stock == 49
