from catalog.stores.django_store import DjangoCatalogStore
from orders.notifications import CeleryNotifier
from orders.services.order_service import OrderService
from orders.services.reversal_service import EventCancellation, ReversalService
from orders.stores.django_ledger import DjangoInventoryLedger
from orders.stores.django_store import DjangoOrderStore

__all__ = [
    "OrderService",
    "ReversalService",
    "EventCancellation",
    "build_order_service",
    "build_reversal_service",
]


def build_order_service() -> OrderService:
    """Wire the order service to the Django stores and the Celery notifier."""
    ledger = DjangoInventoryLedger()
    return OrderService(
        catalog=DjangoCatalogStore(),
        orders=DjangoOrderStore(ledger),
        ledger=ledger,
        notifier=CeleryNotifier(),
    )


def build_reversal_service() -> ReversalService:
    ledger = DjangoInventoryLedger()
    return ReversalService(
        orders=DjangoOrderStore(ledger),
        catalog=DjangoCatalogStore(),
        ledger=ledger,
        notifier=CeleryNotifier(),
    )
