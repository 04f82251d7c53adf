"""Tests for the Celery notifier and the e-mail tasks.

Celery runs eagerly and mail goes to the locmem outbox in test settings.
"""

import pytest
from django.core import mail

from catalog.stores.django_store import DjangoCatalogStore
from orders import tasks
from orders.notifications import CeleryNotifier
from orders.services import OrderService
from orders.stores.django_store import DjangoOrderStore


class TestEmailTasks:
    def test_order_confirmation(self):
        sent = tasks.send_order_confirmation_email(
            "fan@example.com", "ORD-ABC-12345", {"total": "52.50", "item_count": 2}
        )

        assert sent is True
        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.subject == "Order Confirmation - ORD-ABC-12345"
        assert message.to == ["fan@example.com"]
        assert "$52.50" in message.body

    def test_ticket_confirmation_mentions_event(self):
        tasks.send_ticket_confirmation_email(
            "fan@example.com",
            "ORD-ABC-12345",
            {"title": "Jazz Night", "venue": "Blue Room", "starts_at": "2026-07-01T20:00:00+00:00"},
            3,
        )

        message = mail.outbox[0]
        assert message.subject == "Ticket Confirmation - Jazz Night"
        assert "Number of Tickets: 3" in message.body
        assert message.alternatives[0][1] == "text/html"

    def test_refund_confirmation(self):
        tasks.send_refund_confirmation_email("fan@example.com", "ORD-ABC-12345", "107.25")
        assert "$107.25" in mail.outbox[0].body

    def test_delivery_failure_is_logged_not_raised(self, monkeypatch, caplog):
        def broken_send_mail(*args, **kwargs):
            raise ConnectionRefusedError("smtp down")

        monkeypatch.setattr(tasks, "send_mail", broken_send_mail)

        sent = tasks.send_refund_confirmation_email("fan@example.com", "ORD-ABC-12345", "10.00")

        assert sent is False
        assert "Email sending failed" in caplog.text


@pytest.mark.django_db
class TestCeleryNotifier:
    def test_nothing_is_sent_before_commit(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            CeleryNotifier().send_refund_confirmation("fan@example.com", "ORD-1", "10.00")

        assert len(callbacks) == 1
        assert mail.outbox == []

    def test_sent_after_commit(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            CeleryNotifier().send_order_confirmation(
                "fan@example.com", "ORD-1", {"total": "25.00", "item_count": 1}
            )

        assert [m.subject for m in mail.outbox] == ["Order Confirmation - ORD-1"]

    def test_queueing_failure_does_not_propagate(
        self, monkeypatch, caplog, django_capture_on_commit_callbacks
    ):
        def broken_delay(*args, **kwargs):
            raise OSError("broker unreachable")

        monkeypatch.setattr(tasks.send_refund_confirmation_email, "delay", broken_delay)

        with django_capture_on_commit_callbacks(execute=True):
            CeleryNotifier().send_refund_confirmation("fan@example.com", "ORD-1", "10.00")

        assert mail.outbox == []
        assert "Failed to queue" in caplog.text

    def test_placed_order_is_confirmed_by_mail(
        self, ledger, now, make_request, product, ticket_type, event, django_capture_on_commit_callbacks
    ):
        service = OrderService(
            catalog=DjangoCatalogStore(),
            orders=DjangoOrderStore(ledger),
            ledger=ledger,
            notifier=CeleryNotifier(),
            clock=lambda: now,
        )

        with django_capture_on_commit_callbacks(execute=True):
            order = service.create_order(
                make_request(items=[(product, 1)], tickets=[(ticket_type, 2)], event=event)
            )

        assert sorted(m.subject for m in mail.outbox) == [
            f"Order Confirmation - {order.order_number}",
            "Ticket Confirmation - Summer Music Festival",
        ]
