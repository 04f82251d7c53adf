"""
Project package for the ticketshop backend.

The Celery application is imported here so that shared tasks bind to
`ticketshop.celery_app` by default.
"""
from .celery import celery_app

__all__ = ["celery_app"]
