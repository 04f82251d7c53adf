"""
Test settings.

In-memory mail and Celery tasks executed inline. The database is an
in-memory SQLite unless POSTGRES_DB is set, in which case the PostgreSQL
settings from base are used so row locking is exercised for real:

    POSTGRES_DB=ticketshop pytest
"""
import os

from .base import *  # noqa

if os.getenv("POSTGRES_DB"):
    DATABASES["default"]["CONN_MAX_AGE"] = 0  # noqa: F405
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
