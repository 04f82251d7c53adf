"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from catalog.domain import EventId, EventStatus, ProductId, TicketTypeId, VariantId
from catalog.models import Event, Product, ProductVariant, TicketType
from catalog.stores.django_store import DjangoCatalogStore
from orders.domain import (
    CreateOrderRequest,
    Customer,
    LineItemRequest,
    ShippingAddress,
    TicketRequest,
)
from orders.notifications import Notifier
from orders.services import OrderService, ReversalService
from orders.stores.django_ledger import DjangoInventoryLedger
from orders.stores.django_store import DjangoOrderStore

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


class RecordingNotifier(Notifier):
    """Keeps every notification instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[tuple] = []

    def send_order_confirmation(self, email, order_number, summary):
        self.sent.append(("order", email, order_number, summary))

    def send_ticket_confirmation(self, email, order_number, event_summary, ticket_count):
        self.sent.append(("tickets", email, order_number, event_summary, ticket_count))

    def send_refund_confirmation(self, email, order_number, amount):
        self.sent.append(("refund", email, order_number, amount))

    def kinds(self) -> list[str]:
        return [entry[0] for entry in self.sent]


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def event(db) -> Event:
    return Event.objects.create(
        title="Summer Music Festival",
        venue="Central Park Arena",
        city="New York",
        country="USA",
        starts_at=NOW + timedelta(days=45),
        status=EventStatus.PUBLISHED.value,
    )


@pytest.fixture
def ticket_type(event) -> TicketType:
    return TicketType.objects.create(
        event=event,
        name="General Admission",
        price=Decimal("79.99"),
        quantity=100,
        max_per_order=10,
        sales_start=NOW - timedelta(days=30),
        sales_end=NOW + timedelta(days=40),
    )


@pytest.fixture
def product(db) -> Product:
    return Product.objects.create(
        name="Tour T-Shirt",
        sku="TEE-001",
        price=Decimal("25.00"),
        stock=50,
        weight_grams=Decimal("250"),
    )


@pytest.fixture
def variant(product) -> ProductVariant:
    return ProductVariant.objects.create(
        product=product, name="XL", sku="TEE-001-XL", price=Decimal("27.50"), stock=5
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def ledger() -> DjangoInventoryLedger:
    return DjangoInventoryLedger()


@pytest.fixture
def order_service(ledger, notifier) -> OrderService:
    return OrderService(
        catalog=DjangoCatalogStore(),
        orders=DjangoOrderStore(ledger),
        ledger=ledger,
        notifier=notifier,
        clock=lambda: NOW,
    )


@pytest.fixture
def reversal_service(ledger, notifier) -> ReversalService:
    return ReversalService(
        orders=DjangoOrderStore(ledger),
        catalog=DjangoCatalogStore(),
        ledger=ledger,
        notifier=notifier,
    )


@pytest.fixture
def make_request():
    """Build a CreateOrderRequest from ORM rows.

    ``items`` is a list of ``(product, quantity)`` or ``(product, quantity, variant)``;
    ``tickets`` a list of ``(ticket_type, quantity)``.
    """

    def build(items=(), tickets=(), event=None, shipping=None, email="fan@example.com"):
        return CreateOrderRequest(
            customer=Customer(email=email, name="Jamie Fan", phone="555-0100"),
            items=tuple(
                LineItemRequest(
                    product_id=ProductId(entry[0].id),
                    quantity=entry[1],
                    variant_id=VariantId(entry[2].id) if len(entry) > 2 else None,
                )
                for entry in items
            ),
            tickets=tuple(
                TicketRequest(TicketTypeId(tt.id), quantity) for tt, quantity in tickets
            ),
            event_id=EventId(event.id) if event is not None else None,
            shipping_address=shipping,
            payment_method="card",
        )

    return build


@pytest.fixture
def ca_address() -> ShippingAddress:
    return ShippingAddress(
        address="1 Market St", city="San Francisco", zip_code="94105", country="USA", state="CA"
    )
