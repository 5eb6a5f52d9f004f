"""
Cache key management for trend summaries.

CRITICAL INVARIANTS:
- Identical (keyword, period, options) always yields the same key
- Keyword is normalized (case + whitespace) before hashing
- Options are fingerprinted order-independently: canonical JSON with
  sorted keys, so {"a": 1, "b": 2} and {"b": 2, "a": 1} collide on purpose
- Keys and fingerprints are 64-bit (16 hex chars) SHA-256 prefixes

TTL POLICY:
Larger windows change more slowly and cache longer. PERIOD_TTL_SECONDS is
the only TTL the orchestrator uses for real data.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

# 16 hex chars = 64 bits
HASH_HEX_CHARS = 16

PERIOD_TTL_SECONDS: dict[str, int] = {
    "1d": 2 * 60 * 60,
    "3d": 4 * 60 * 60,
    "7d": 8 * 60 * 60,
    "14d": 12 * 60 * 60,
    "30d": 24 * 60 * 60,
}


def normalize_keyword(keyword: str) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return " ".join(keyword.lower().split())


def _short_hash(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:HASH_HEX_CHARS]


def canonical_metadata(metadata: dict[str, Any] | None) -> str:
    """Order-independent serialization of cache options."""
    return json.dumps(metadata or {}, sort_keys=True, separators=(",", ":"), default=str)


def metadata_fingerprint(metadata: dict[str, Any] | None) -> str:
    """Fingerprint of cache options. None and {} share a fingerprint."""
    return _short_hash(canonical_metadata(metadata))


def get_cache_key(keyword: str, period: str, metadata: dict[str, Any] | None = None) -> str:
    """
    Generate cache key for a keyword/period/options triple.

    Args:
        keyword: Raw keyword (normalized here)
        period: Period value ("1d", "7d", ...)
        metadata: Caller options (analysis depth, source priority, ...)

    Returns:
        64-bit hex digest over "<keyword>_<period>_<fingerprint>"
    """
    base = f"{normalize_keyword(keyword)}_{str(period)}_{metadata_fingerprint(metadata)}"
    return _short_hash(base)


def ttl_for_period(period: str) -> int:
    """
    TTL in seconds for a search window.

    Raises:
        ValueError: If period is not a known Period value
    """
    try:
        return PERIOD_TTL_SECONDS[str(period)]
    except KeyError:
        raise ValueError(f"Unknown period: {period!r}") from None
