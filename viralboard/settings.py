"""
Django settings for the viralboard trends backend.

- Loads overrides from environment variables (and .env for local dev)
- No database: the trends cache is in-process, snapshotted to a Django cache
- Trend cache, provider and persistence knobs live under TRENDS_*
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present (for local dev); test settings opt out
if os.environ.get("VIRALBOARD_TEST_MODE") != "true":
    load_dotenv()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


# =============================================================================
# SECURITY SETTINGS (env-driven)
# =============================================================================

SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY",
    "dev-insecure-key-do-not-use-in-production",
)

DEBUG = _env_bool("DJANGO_DEBUG", "False")

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")


# =============================================================================
# APPLICATION DEFINITION
# =============================================================================

INSTALLED_APPS = [
    "viralboard.core",
    "viralboard.trends",
]

TIME_ZONE = "UTC"
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# =============================================================================
# CACHES
# =============================================================================
# "trends_snapshot" is the durable slot the trend cache warm-starts from.
# It must survive process restarts, so it is file-backed and never expires.

TRENDS_SNAPSHOT_DIR = os.environ.get(
    "TRENDS_SNAPSHOT_DIR",
    str(BASE_DIR / "var" / "trends_snapshot"),
)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    },
    "trends_snapshot": {
        "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
        "LOCATION": TRENDS_SNAPSHOT_DIR,
        "TIMEOUT": None,
    },
}


# =============================================================================
# TREND CACHE
# =============================================================================

TRENDS_CACHE_MAX_ENTRIES = int(os.environ.get("TRENDS_CACHE_MAX_ENTRIES", "1000"))

# Fallback TTL for callers that do not pass one (12 hours)
TRENDS_CACHE_DEFAULT_TTL_SECONDS = int(
    os.environ.get("TRENDS_CACHE_DEFAULT_TTL_SECONDS", "43200")
)

# Background sweep of expired entries (30 minutes)
TRENDS_CACHE_CLEANUP_INTERVAL_SECONDS = int(
    os.environ.get("TRENDS_CACHE_CLEANUP_INTERVAL_SECONDS", "1800")
)

TRENDS_CACHE_PERSISTENCE_ENABLED = _env_bool("TRENDS_CACHE_PERSISTENCE_ENABLED", "True")
TRENDS_CACHE_PERSISTENCE_ALIAS = "trends_snapshot"
TRENDS_CACHE_PERSISTENCE_KEY = "trends_cache:v1"


# =============================================================================
# CONTENT PROVIDERS
# =============================================================================

# Live HTTP calls to search providers are off unless explicitly enabled
TRENDS_LIVE_PROVIDERS_ENABLED = _env_bool("TRENDS_LIVE_PROVIDERS_ENABLED", "False")

TRENDS_DEFAULT_PROVIDERS = os.environ.get(
    "TRENDS_DEFAULT_PROVIDERS",
    "hackernews,reddit",
).split(",")

TRENDS_PROVIDER_TIMEOUT_SECONDS = float(
    os.environ.get("TRENDS_PROVIDER_TIMEOUT_SECONDS", "15")
)
TRENDS_PROVIDER_MAX_WORKERS = int(os.environ.get("TRENDS_PROVIDER_MAX_WORKERS", "4"))

# Placeholder summaries are cached briefly so live data replaces them soon
TRENDS_PLACEHOLDER_TTL_SECONDS = int(
    os.environ.get("TRENDS_PLACEHOLDER_TTL_SECONDS", "900")
)

TRENDS_MAX_KEYWORDS = int(os.environ.get("TRENDS_MAX_KEYWORDS", "8"))


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "viralboard": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
