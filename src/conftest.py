import pytest
from django.core.cache import caches
from django.conf import settings

from src.payments.tests.fakes import FakeCheckoutGateway


@pytest.fixture(autouse=True)
def clear_all_caches():
    """Reset throttle history and any per-site cache before every test."""
    for alias in settings.CACHES.keys():
        caches[alias].clear()


@pytest.fixture
def fake_gateway():
    return FakeCheckoutGateway()


@pytest.fixture
def payments_gateway(monkeypatch, fake_gateway):
    """Route the payments views to the fake gateway."""
    monkeypatch.setattr("src.payments.views.get_checkout_gateway", lambda: fake_gateway)
    return fake_gateway
