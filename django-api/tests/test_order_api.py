"""API tests for the order endpoints.

Run with: pytest tests/test_order_api.py -v
"""

import uuid

import pytest

from catalog.models import TicketType
from orders import models


@pytest.fixture
def on_sale(ticket_type):
    """The ticket type with an open-ended sales window, since the API uses the real clock."""
    TicketType.objects.filter(pk=ticket_type.pk).update(sales_start=None, sales_end=None)
    ticket_type.refresh_from_db()
    return ticket_type


def order_payload(product=None, ticket_type=None, event=None, **overrides):
    payload = {
        "customer_email": "fan@example.com",
        "customer_name": "Jamie Fan",
        "payment_method": "card",
    }
    if product is not None:
        payload["items"] = [{"product_id": str(product.id), "quantity": 2}]
        payload["shipping_address"] = {
            "address": "1 Market St",
            "city": "San Francisco",
            "state": "CA",
            "zip": "94105",
            "country": "USA",
        }
    if ticket_type is not None:
        payload["tickets"] = [{"ticket_type_id": str(ticket_type.id), "quantity": 2}]
        payload["event_id"] = str(event.id)
    payload.update(overrides)
    return payload


def place(api_client, **kwargs):
    return api_client.post("/api/orders", order_payload(**kwargs), format="json")


@pytest.mark.django_db
class TestCreateOrderEndpoint:
    def test_create_mixed_order(self, api_client, product, on_sale, event):
        response = place(api_client, product=product, ticket_type=on_sale, event=event)

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "MIXED"
        assert data["status"] == "PENDING"
        assert data["subtotal"] == "209.98"
        assert data["shipping_fee"] == "7.99"
        assert data["tax"] == "15.22"
        assert data["total"] == "233.19"
        assert len(data["tickets"]) == 2
        assert data["items"][0]["unit_price"] == "25.00"

    def test_empty_order_is_a_validation_error(self, api_client, db):
        response = api_client.post("/api/orders", order_payload(), format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_malformed_quantity(self, api_client, product):
        payload = order_payload(product=product)
        payload["items"][0]["quantity"] = 0

        response = api_client.post("/api/orders", payload, format="json")

        assert response.status_code == 400
        assert "items" in response.json()["error"]["details"]

    def test_unknown_product_is_not_found(self, api_client, db):
        payload = order_payload(items=[{"product_id": str(uuid.uuid4()), "quantity": 1}])

        response = api_client.post("/api/orders", payload, format="json")

        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NOT_FOUND"

    def test_insufficient_stock_is_conflict(self, api_client, product):
        payload = order_payload(items=[{"product_id": str(product.id), "quantity": 500}])

        response = api_client.post("/api/orders", payload, format="json")

        assert response.status_code == 409
        assert response.json()["error"] == {
            "code": "INSUFFICIENT_STOCK",
            "kind": "INSUFFICIENT_INVENTORY",
            "message": "Insufficient stock for Tour T-Shirt",
        }
        assert models.Order.objects.count() == 0

    def test_tickets_without_event(self, api_client, on_sale):
        payload = order_payload(tickets=[{"ticket_type_id": str(on_sale.id), "quantity": 1}])

        response = api_client.post("/api/orders", payload, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["kind"] == "VALIDATION_ERROR"


@pytest.mark.django_db
class TestOrderLifecycleEndpoints:
    @pytest.fixture
    def order(self, api_client, product):
        return place(api_client, product=product).json()

    def test_get_order(self, api_client, order):
        response = api_client.get(f"/api/orders/{order['id']}")
        assert response.status_code == 200
        assert response.json()["order_number"] == order["order_number"]

    def test_get_order_invalid_id(self, api_client, db):
        response = api_client.get("/api/orders/not-a-uuid")
        assert response.status_code == 400

    def test_get_order_not_found(self, api_client, db):
        response = api_client.get(f"/api/orders/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_get_order_by_number(self, api_client, order):
        response = api_client.get(f"/api/orders/number/{order['order_number']}")
        assert response.status_code == 200
        assert response.json()["id"] == order["id"]

    def test_customer_orders(self, api_client, order):
        response = api_client.get("/api/orders/customer/fan@example.com")
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [order["id"]]

    def test_payment(self, api_client, order):
        response = api_client.post(
            f"/api/orders/{order['id']}/payment", {"transaction_id": "pi_1"}, format="json"
        )
        assert response.status_code == 200
        data = response.json()
        assert (data["status"], data["payment_status"]) == ("CONFIRMED", "COMPLETED")
        assert data["payments"][0]["amount"] == data["total"]

    def test_status_update_rejects_unknown_status(self, api_client, order):
        response = api_client.patch(
            f"/api/orders/{order['id']}/status", {"status": "SHIPPED"}, format="json"
        )
        assert response.status_code == 400

    def test_status_update_out_of_terminal_state(self, api_client, order):
        api_client.post(f"/api/orders/{order['id']}/cancel")

        response = api_client.patch(
            f"/api/orders/{order['id']}/status", {"status": "CONFIRMED"}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    def test_refund_twice(self, api_client, product, order):
        first = api_client.post(f"/api/orders/{order['id']}/refund")
        second = api_client.post(f"/api/orders/{order['id']}/refund")

        assert first.status_code == 200
        assert first.json()["status"] == "REFUNDED"
        assert second.status_code == 409
        product.refresh_from_db()
        assert product.stock == 50

    def test_cancel(self, api_client, product, order):
        response = api_client.post(f"/api/orders/{order['id']}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "CANCELLED"
        product.refresh_from_db()
        assert product.stock == 50
