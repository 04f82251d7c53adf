"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from catalog.domain import Event, EventId, EventStatus, Product, ProductId, ProductVariant, VariantId


class CatalogStore(ABC):
    """Interface for catalog reads and event lifecycle writes."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with its ticket types, or None if not found."""
        ...

    @abstractmethod
    def lock_event(self, event_id: EventId) -> Event | None:
        """Return an event with its row locked until the enclosing transaction ends."""
        ...

    @abstractmethod
    def set_event_status(
        self, event_id: EventId, status: EventStatus, expected: EventStatus | None = None
    ) -> bool:
        """Persist a new lifecycle status for an event.

        When ``expected`` is given the write only applies while the event is
        still in that status. Returns whether a row changed.
        """
        ...

    @abstractmethod
    def get_product(self, product_id: ProductId) -> Product | None:
        """Return a product by ID, or None if not found."""
        ...

    @abstractmethod
    def get_variant(self, variant_id: VariantId) -> ProductVariant | None:
        """Return a product variant by ID, or None if not found."""
        ...
