"""
Settings accessors for the trends subsystem.

Every knob is read from Django settings at call time, so tests can override
them with pytest-django's `settings` fixture.
"""

from __future__ import annotations

from django.conf import settings

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_TTL_SECONDS = 12 * 60 * 60
DEFAULT_CLEANUP_INTERVAL_SECONDS = 30 * 60
DEFAULT_PROVIDER_TIMEOUT_SECONDS = 15.0
DEFAULT_PROVIDER_MAX_WORKERS = 4
DEFAULT_PLACEHOLDER_TTL_SECONDS = 15 * 60
DEFAULT_MAX_KEYWORDS = 8


def get_max_entries() -> int:
    return getattr(settings, "TRENDS_CACHE_MAX_ENTRIES", DEFAULT_MAX_ENTRIES)


def get_default_ttl_seconds() -> int:
    return getattr(settings, "TRENDS_CACHE_DEFAULT_TTL_SECONDS", DEFAULT_TTL_SECONDS)


def get_cleanup_interval_seconds() -> int:
    return getattr(
        settings,
        "TRENDS_CACHE_CLEANUP_INTERVAL_SECONDS",
        DEFAULT_CLEANUP_INTERVAL_SECONDS,
    )


def is_persistence_enabled() -> bool:
    return getattr(settings, "TRENDS_CACHE_PERSISTENCE_ENABLED", True)


def get_persistence_alias() -> str:
    return getattr(settings, "TRENDS_CACHE_PERSISTENCE_ALIAS", "trends_snapshot")


def get_persistence_key() -> str:
    return getattr(settings, "TRENDS_CACHE_PERSISTENCE_KEY", "trends_cache:v1")


def get_provider_timeout_seconds() -> float:
    return getattr(
        settings,
        "TRENDS_PROVIDER_TIMEOUT_SECONDS",
        DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    )


def get_provider_max_workers() -> int:
    return getattr(settings, "TRENDS_PROVIDER_MAX_WORKERS", DEFAULT_PROVIDER_MAX_WORKERS)


def get_placeholder_ttl_seconds() -> int:
    return getattr(
        settings,
        "TRENDS_PLACEHOLDER_TTL_SECONDS",
        DEFAULT_PLACEHOLDER_TTL_SECONDS,
    )


def get_max_keywords() -> int:
    return getattr(settings, "TRENDS_MAX_KEYWORDS", DEFAULT_MAX_KEYWORDS)


def get_default_providers() -> list[str]:
    return list(getattr(settings, "TRENDS_DEFAULT_PROVIDERS", ["hackernews", "reddit"]))
