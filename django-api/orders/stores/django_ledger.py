"""Django ORM implementation of the InventoryLedger.

Every reservation is a single conditional UPDATE on the counter table, so
the check and the decrement happen in one statement under its row lock.
Conditions that live on a parent row (event status, product activity) are
read under a SELECT ... FOR UPDATE on that parent first. When no row
matches, the row is re-read only to report why.
"""

from datetime import datetime

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from catalog import models as catalog_models
from catalog.domain import EventStatus
from orders.domain import ResourceRef, StockRef, TicketTypeRef
from orders.domain.errors import (
    InsufficientStockError,
    InsufficientTicketsError,
    InventoryReleaseError,
    MaxPerOrderExceededError,
    ProductInactiveError,
    ProductNotFoundError,
    SalesWindowClosedError,
    TicketTypeNotFoundError,
    TicketTypeUnavailableError,
    VariantNotFoundError,
)
from orders.stores.interfaces import InventoryLedger


def _ensure_atomic() -> None:
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("Inventory ledger calls must run inside transaction.atomic()")


def _sales_window(at: datetime) -> Q:
    return (Q(sales_start__isnull=True) | Q(sales_start__lte=at)) & (
        Q(sales_end__isnull=True) | Q(sales_end__gte=at)
    )


class DjangoInventoryLedger(InventoryLedger):
    """Stock and ticket counters kept in the catalog tables."""

    def reserve(self, ref: ResourceRef, quantity: int, at: datetime | None = None) -> None:
        _ensure_atomic()
        if quantity <= 0:
            raise ValueError("Reservation quantity must be positive")
        if isinstance(ref, TicketTypeRef):
            self._reserve_tickets(ref, quantity, at or timezone.now())
        else:
            self._reserve_stock(ref, quantity)

    def release(self, ref: ResourceRef, quantity: int) -> None:
        _ensure_atomic()
        if quantity <= 0:
            raise ValueError("Release quantity must be positive")
        if isinstance(ref, TicketTypeRef):
            updated = catalog_models.TicketType.objects.filter(
                pk=ref.ticket_type_id.value, sold__gte=quantity
            ).update(sold=F("sold") - quantity)
        else:
            updated = self._stock_rows(ref).update(stock=F("stock") + quantity)
        if updated != 1:
            raise InventoryReleaseError()

    def _stock_rows(self, ref: StockRef):
        if ref.variant_id is not None:
            return catalog_models.ProductVariant.objects.filter(
                pk=ref.variant_id.value, product_id=ref.product_id.value
            )
        return catalog_models.Product.objects.filter(pk=ref.product_id.value)

    def _reserve_stock(self, ref: StockRef, quantity: int) -> None:
        rows = self._stock_rows(ref)
        if ref.variant_id is not None:
            # The product row lock keeps is_active stable until commit
            product = (
                catalog_models.Product.objects.select_for_update()
                .filter(pk=ref.product_id.value)
                .first()
            )
            if product is None:
                raise VariantNotFoundError()
            if not product.is_active:
                raise ProductInactiveError(product.name)
            updated = rows.filter(stock__gte=quantity).update(stock=F("stock") - quantity)
        else:
            updated = rows.filter(is_active=True, stock__gte=quantity).update(
                stock=F("stock") - quantity
            )
        if updated == 1:
            return

        row = rows.first()
        if row is None:
            if ref.variant_id is not None:
                raise VariantNotFoundError()
            raise ProductNotFoundError()
        if ref.variant_id is None and not row.is_active:
            raise ProductInactiveError(row.name)
        raise InsufficientStockError(str(row))

    def _reserve_tickets(self, ref: TicketTypeRef, quantity: int, at: datetime) -> None:
        rows = catalog_models.TicketType.objects.filter(pk=ref.ticket_type_id.value)
        event_id = rows.values_list("event_id", flat=True).first()
        if event_id is None:
            raise TicketTypeNotFoundError()
        # Holding the event row blocks a concurrent cancellation until commit
        event_status = (
            catalog_models.Event.objects.select_for_update()
            .filter(pk=event_id)
            .values_list("status", flat=True)
            .first()
        )
        updated = 0
        if event_status == EventStatus.PUBLISHED.value:
            updated = rows.filter(
                _sales_window(at),
                is_active=True,
                max_per_order__gte=quantity,
                sold__lte=F("quantity") - quantity,
            ).update(sold=F("sold") + quantity)
        if updated == 1:
            return

        row = rows.first()
        if row is None:
            raise TicketTypeNotFoundError()
        if not row.is_active or event_status != EventStatus.PUBLISHED.value:
            raise TicketTypeUnavailableError(row.name)
        if not rows.filter(_sales_window(at)).exists():
            raise SalesWindowClosedError(row.name)
        if quantity > row.max_per_order:
            raise MaxPerOrderExceededError(row.name, row.max_per_order)
        raise InsufficientTicketsError(row.name, row.quantity - row.sold)
