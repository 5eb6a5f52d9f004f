"""
Pytest configuration for viralboard tests.

Every test gets fresh Django cache backends so the snapshot slot never
leaks between tests.
"""

import os

import django
import pytest


def pytest_configure():
    """Configure Django settings before tests run."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "viralboard.settings_test")
    django.setup()


@pytest.fixture(autouse=True)
def _clear_django_caches():
    from django.core.cache import caches

    for alias in caches:
        caches[alias].clear()
    yield
    for alias in caches:
        caches[alias].clear()


@pytest.fixture
def clock():
    """Controllable epoch-seconds clock."""
    from tests.fixtures.trends import FakeClock

    return FakeClock()
