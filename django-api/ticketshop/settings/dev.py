"""
Development settings.

Extends the base settings with debugging enabled and mail printed to the
console. Do not use these settings in production.
"""
from .base import *  # noqa

DEBUG = True
ALLOWED_HOSTS = ["*"]
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
