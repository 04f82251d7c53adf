"""Django ORM implementation of the CatalogStore."""

from django.utils import timezone

from catalog import models
from catalog.domain import (
    Capacity,
    Event,
    EventId,
    EventStatus,
    Money,
    Product,
    ProductId,
    ProductVariant,
    TicketType,
    TicketTypeId,
    VariantId,
)
from catalog.stores.interfaces import CatalogStore


def ticket_type_to_domain(row: models.TicketType) -> TicketType:
    return TicketType(
        id=TicketTypeId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        price=Money(row.price),
        quantity=Capacity(row.quantity),
        sold=Capacity(row.sold),
        max_per_order=row.max_per_order,
        sales_start=row.sales_start,
        sales_end=row.sales_end,
        is_active=row.is_active,
    )


def event_to_domain(row: models.Event, ticket_types=()) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        venue=row.venue,
        starts_at=row.starts_at,
        status=EventStatus(row.status),
        ticket_types=tuple(ticket_type_to_domain(tt) for tt in ticket_types),
    )


def product_to_domain(row: models.Product) -> Product:
    return Product(
        id=ProductId(row.id),
        name=row.name,
        sku=row.sku,
        price=Money(row.price),
        stock=Capacity(row.stock),
        weight_grams=row.weight_grams,
        is_active=row.is_active,
    )


def variant_to_domain(row: models.ProductVariant) -> ProductVariant:
    return ProductVariant(
        id=VariantId(row.id),
        product_id=ProductId(row.product_id),
        name=row.name,
        price=Money(row.price) if row.price is not None else None,
        stock=Capacity(row.stock),
    )


class DjangoCatalogStore(CatalogStore):
    """Relational catalog store using Django ORM."""

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            return None
        return event_to_domain(row, row.ticket_types.all())

    def lock_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
        if row is None:
            return None
        return event_to_domain(row)

    def set_event_status(
        self, event_id: EventId, status: EventStatus, expected: EventStatus | None = None
    ) -> bool:
        rows = models.Event.objects.filter(pk=event_id.value)
        if expected is not None:
            rows = rows.filter(status=expected.value)
        return rows.update(status=status.value, updated_at=timezone.now()) == 1

    def get_product(self, product_id: ProductId) -> Product | None:
        row = models.Product.objects.filter(pk=product_id.value).first()
        return product_to_domain(row) if row is not None else None

    def get_variant(self, variant_id: VariantId) -> ProductVariant | None:
        row = models.ProductVariant.objects.filter(pk=variant_id.value).first()
        return variant_to_domain(row) if row is not None else None
