"""Event service - event lifecycle business logic.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from typing import TYPE_CHECKING

from catalog.domain import Event, EventId, EventStatus
from catalog.domain.errors import EventNotDraftError, EventNotFoundError, InvalidEventIdError
from catalog.stores.interfaces import CatalogStore

if TYPE_CHECKING:
    from orders.services.reversal_service import EventCancellation, ReversalService

logger = logging.getLogger(__name__)


class EventService:
    """Service for event lifecycle operations."""

    def __init__(self, store: CatalogStore, reversal: "ReversalService") -> None:
        self._store = store
        self._reversal = reversal

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(self._parse_id(event_id))
        if event is None:
            raise EventNotFoundError()
        return event

    def publish_event(self, event_id: str) -> Event:
        """Open a draft event for ticket sales.

        Raises:
            EventNotDraftError: If the event is published or cancelled already.
        """
        parsed = self._parse_id(event_id)
        event = self._store.get_event(parsed)
        if event is None:
            raise EventNotFoundError()
        if event.status is not EventStatus.DRAFT:
            raise EventNotDraftError()
        # A cancellation may have committed since the read
        if not self._store.set_event_status(parsed, EventStatus.PUBLISHED, expected=EventStatus.DRAFT):
            raise EventNotDraftError()
        logger.info("Event %s published", parsed.value)
        return self._store.get_event(parsed)

    def cancel_event(self, event_id: str) -> "EventCancellation":
        """Cancel an event, cascading to its open orders and tickets."""
        return self._reversal.cancel_event(self._parse_id(event_id))

    @staticmethod
    def _parse_id(event_id: str) -> EventId:
        try:
            return EventId.from_string(event_id)
        except (ValueError, TypeError) as exc:
            raise InvalidEventIdError() from exc
