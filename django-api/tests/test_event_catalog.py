"""Integration tests for the event endpoints.

Run with: pytest tests/test_event_catalog.py -v
"""

import uuid

import pytest
from rest_framework.test import APIClient

from catalog.domain import EventStatus
from catalog.models import Event, TicketType


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details(self, api_client: APIClient, event, ticket_type):
        """Given event exists, returns event details with its ticket types."""
        response = api_client.get(f"/api/events/{event.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Summer Music Festival"
        assert data["status"] == "PUBLISHED"
        assert data["ticket_types"][0]["price"] == "79.99"
        assert data["ticket_types"][0]["available"] == 100

    def test_get_event_not_found(self, api_client: APIClient, db):
        """Given event does not exist, returns 404."""
        response = api_client.get(f"/api/events/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EVENT_NOT_FOUND"

    def test_get_event_invalid_id_format(self, api_client: APIClient, db):
        """Given invalid UUID, returns 400."""
        response = api_client.get("/api/events/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_EVENT_ID"


@pytest.mark.django_db
class TestEventPublish:
    """Tests for POST /api/events/{id}/publish"""

    def test_publish_draft(self, api_client: APIClient, event):
        Event.objects.filter(pk=event.pk).update(status=EventStatus.DRAFT.value)

        response = api_client.post(f"/api/events/{event.id}/publish")

        assert response.status_code == 200
        assert response.json()["status"] == "PUBLISHED"

    def test_publish_twice_conflicts(self, api_client: APIClient, event):
        response = api_client.post(f"/api/events/{event.id}/publish")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EVENT_NOT_DRAFT"


@pytest.mark.django_db
class TestEventCancel:
    """Tests for POST /api/events/{id}/cancel"""

    def test_cancel_releases_tickets(self, api_client: APIClient, event, ticket_type):
        TicketType.objects.filter(pk=ticket_type.pk).update(sales_start=None, sales_end=None)
        placed = api_client.post(
            "/api/orders",
            {
                "customer_email": "fan@example.com",
                "customer_name": "Jamie Fan",
                "payment_method": "card",
                "event_id": str(event.id),
                "tickets": [{"ticket_type_id": str(ticket_type.id), "quantity": 3}],
            },
            format="json",
        ).json()

        response = api_client.post(f"/api/events/{event.id}/cancel")

        assert response.status_code == 200
        assert response.json() == {
            "event_id": str(event.id),
            "cancelled_orders": [placed["order_number"]],
            "released_tickets": 3,
        }
        ticket_type.refresh_from_db()
        assert ticket_type.sold == 0

    def test_cancel_twice_conflicts(self, api_client: APIClient, event):
        api_client.post(f"/api/events/{event.id}/cancel")

        response = api_client.post(f"/api/events/{event.id}/cancel")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EVENT_ALREADY_CANCELLED"
