"""
Celery tasks for order notifications.

Each task sends one e-mail. They run after the order transaction has
committed; a failure is logged and the task is not retried.
"""
from __future__ import annotations

import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _deliver(to: str, subject: str, text: str, html: str) -> bool:
    try:
        send_mail(
            subject,
            text,
            settings.DEFAULT_FROM_EMAIL,
            [to],
            html_message=html,
        )
    except Exception:
        logger.exception("Email sending failed: %s to %s", subject, to)
        return False
    logger.info("Email sent to %s: %s", to, subject)
    return True


@shared_task
def send_order_confirmation_email(email: str, order_number: str, summary: dict) -> bool:
    """Thank the customer for a merchandise order.

    Args:
        email: Customer address.
        order_number: Human-readable order number.
        summary: ``{"total": "<decimal string>", "item_count": int}``.
    """
    subject = f"Order Confirmation - {order_number}"
    text = (
        f"Thank you for your order!\n"
        f"Order Number: {order_number}\n"
        f"Total: ${summary['total']}\n"
        f"You'll receive another email once your order ships."
    )
    html = (
        "<h1>Thank you for your order!</h1>"
        f"<p>Order Number: <strong>{order_number}</strong></p>"
        "<p>We've received your order and will process it shortly.</p>"
        f"<p>Items: {summary.get('item_count', 0)}</p>"
        f"<p>Total: ${summary['total']}</p>"
        "<p>You'll receive another email once your order ships.</p>"
    )
    return _deliver(email, subject, text, html)


@shared_task
def send_ticket_confirmation_email(
    email: str, order_number: str, event_summary: dict, ticket_count: int
) -> bool:
    """Confirm tickets for an event.

    ``event_summary`` carries the event ``title``, ``venue`` and ``starts_at``
    (ISO 8601).
    """
    subject = f"Ticket Confirmation - {event_summary['title']}"
    text = (
        f"Your tickets are confirmed!\n"
        f"Order Number: {order_number}\n"
        f"Event: {event_summary['title']} at {event_summary['venue']}\n"
        f"Date: {event_summary['starts_at']}\n"
        f"Number of Tickets: {ticket_count}"
    )
    html = (
        "<h1>Your tickets are confirmed!</h1>"
        f"<p>Order Number: <strong>{order_number}</strong></p>"
        f"<p><strong>{event_summary['title']}</strong></p>"
        f"<p>Date: {event_summary['starts_at']}</p>"
        f"<p>Venue: {event_summary['venue']}</p>"
        f"<p>Number of Tickets: {ticket_count}</p>"
        "<p>Please present your ticket codes at the venue.</p>"
    )
    return _deliver(email, subject, text, html)


@shared_task
def send_refund_confirmation_email(email: str, order_number: str, amount: str) -> bool:
    subject = f"Refund Processed - {order_number}"
    text = (
        f"A refund of ${amount} for order {order_number} has been processed "
        f"to your original payment method."
    )
    html = (
        "<h1>Refund Processed</h1>"
        f"<p>Order Number: <strong>{order_number}</strong></p>"
        f"<p>A refund of ${amount} has been processed to your original payment method.</p>"
        "<p>Please allow 5-10 business days for the refund to appear in your account.</p>"
    )
    return _deliver(email, subject, text, html)
