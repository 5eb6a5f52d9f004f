"""
Trend cache: TTL store, key derivation, durable snapshot, expiry sweep.
"""

from viralboard.trends.cache.cleanup import CleanupScheduler
from viralboard.trends.cache.keys import PERIOD_TTL_SECONDS, get_cache_key, normalize_keyword, ttl_for_period
from viralboard.trends.cache.persistence import CacheSnapshotStore, NullSnapshotStore, build_snapshot_store
from viralboard.trends.cache.store import CacheEntry, TrendCache

__all__ = [
    "PERIOD_TTL_SECONDS",
    "CacheEntry",
    "CacheSnapshotStore",
    "CleanupScheduler",
    "NullSnapshotStore",
    "TrendCache",
    "build_snapshot_store",
    "get_cache_key",
    "normalize_keyword",
    "ttl_for_period",
]
