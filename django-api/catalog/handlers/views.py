"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.handlers.serializers import EventCancellationSerializer, EventSerializer
from catalog.services.event_service import EventService
from catalog.stores.django_store import DjangoCatalogStore
from common.errors import DomainError
from common.responses import error_response
from orders.services import build_reversal_service


def get_event_service() -> EventService:
    return EventService(DjangoCatalogStore(), build_reversal_service())


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            event = get_event_service().get_event(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(EventSerializer(event).data)


class EventPublishView(APIView):
    """Handler for POST /api/events/{event_id}/publish"""

    def post(self, request: Request, event_id: str) -> Response:
        try:
            event = get_event_service().publish_event(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(EventSerializer(event).data)


class EventCancelView(APIView):
    """Handler for POST /api/events/{event_id}/cancel"""

    def post(self, request: Request, event_id: str) -> Response:
        try:
            result = get_event_service().cancel_event(event_id)
        except DomainError as error:
            return error_response(error)
        return Response(EventCancellationSerializer(result).data)
