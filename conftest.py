# type: ignore
"""
Shared test setup: in-memory SQLite, no outbound email or webhooks, and a
clean document table before every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RESEND_API_KEY"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["SMTP_USER"] = ""
os.environ["BUILD_WEBHOOK_URL"] = ""
os.environ["ADMIN_NOTIFICATION_EMAILS"] = "info@studio.example"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest

from studio.core.dependencies import get_store

get_store().create_schema()


@pytest.fixture(autouse=True)
def clean_store():
    """Reset every collection before each test."""
    get_store().clear()
    yield
