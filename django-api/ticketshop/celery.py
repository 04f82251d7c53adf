"""
Celery configuration for the ticketshop backend.

Tasks are discovered from the `tasks.py` module of every installed app.
Post-commit notifications are the only work handed to Celery.
"""
import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ticketshop.settings.dev")

celery_app = Celery("ticketshop")

# Settings are read from Django with the "CELERY_" prefix
celery_app.config_from_object("django.conf:settings", namespace="CELERY")
celery_app.autodiscover_tasks()
