"""
Shared pytest fixtures for contact form tests.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from contact.conf import ContactFormConfig
from contact.rate_limiting import InMemorySubmissionStore, RateLimiter
from contact.translations import get_catalog

NOW_MS = 1_760_000_000_000


class FakeWebhookClient:
    """Records payloads instead of posting them."""

    def __init__(self, error=None):
        self.error = error
        self.payloads = []

    def submit(self, payload):
        self.payloads.append(payload)
        if self.error:
            raise self.error


class FixedClock:
    def __init__(self, now=NOW_MS):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before and after each test to prevent pollution."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def config():
    return ContactFormConfig(webhook_url='https://hooks.example.com/contact')


@pytest.fixture
def messages():
    return get_catalog().messages('en')


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    return InMemorySubmissionStore()


@pytest.fixture
def limiter(store, clock):
    return RateLimiter(store, max_submissions=5, window_seconds=600, clock=clock)


@pytest.fixture
def webhook():
    return FakeWebhookClient()
