"""
Durable snapshot slot for the trend cache.

The whole cache is serialized into ONE key of a Django cache backend so a
fresh process can warm-start from prior state:

    {"entries": [...], "stats": {"hits": N, "misses": N}, "timestamp": T}

FAILURE POLICY:
- A missing slot is a cold start
- Corrupt data is a cold start
- Read/write failures are logged and swallowed; the cache keeps working
  in-memory only. Persistence must never break the main code path.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from django.core.cache import caches

from viralboard.trends import conf
from viralboard.trends.exceptions import PersistenceError

logger = logging.getLogger("viralboard.trends.cache.persistence")


class NullSnapshotStore:
    """Snapshot store that remembers nothing. Used when persistence is disabled."""

    def load(self) -> dict[str, Any] | None:
        return None

    def save(self, payload: dict[str, Any]) -> bool:
        return False

    def clear(self) -> bool:
        return False


class CacheSnapshotStore:
    """
    Snapshot store backed by a Django cache alias.

    The payload is stored as a JSON string with no expiry; expiry of
    individual entries is enforced by the trend cache on load.
    """

    def __init__(self, alias: str | None = None, key: str | None = None):
        """
        Args:
            alias: Django cache alias (default: TRENDS_CACHE_PERSISTENCE_ALIAS)
            key: Cache key holding the snapshot (default: TRENDS_CACHE_PERSISTENCE_KEY)
        """
        self.alias = alias or conf.get_persistence_alias()
        self.key = key or conf.get_persistence_key()

    def load(self) -> dict[str, Any] | None:
        """
        Read the snapshot.

        Returns:
            Decoded payload, or None for a missing/corrupt/unreadable slot
        """
        try:
            raw = caches[self.alias].get(self.key)
            if raw is None:
                return None
            return self._decode(raw)
        except Exception as e:
            logger.warning(
                "Cache snapshot read failed, starting cold: %s",
                str(e),
                extra={"alias": self.alias, "key": self.key},
            )
            return None

    def save(self, payload: dict[str, Any]) -> bool:
        """
        Write the snapshot.

        Returns:
            True if written, False on any failure (logged)
        """
        try:
            caches[self.alias].set(self.key, json.dumps(payload, default=str), timeout=None)
            return True
        except Exception as e:
            logger.warning(
                "Cache snapshot write failed: %s",
                str(e),
                extra={"alias": self.alias, "key": self.key},
            )
            return False

    def clear(self) -> bool:
        """Remove the snapshot. Returns False on failure (logged)."""
        try:
            caches[self.alias].delete(self.key)
            return True
        except Exception as e:
            logger.warning(
                "Cache snapshot delete failed: %s",
                str(e),
                extra={"alias": self.alias, "key": self.key},
            )
            return False

    @staticmethod
    def _decode(raw: Any) -> dict[str, Any]:
        if isinstance(raw, (bytes, str)):
            try:
                raw = json.loads(raw)
            except ValueError as e:
                raise PersistenceError(f"Snapshot is not valid JSON: {e}") from e
        if not isinstance(raw, dict) or not isinstance(raw.get("entries"), list):
            raise PersistenceError("Snapshot has no entries list")
        return raw


def build_snapshot_store() -> CacheSnapshotStore | NullSnapshotStore:
    """Snapshot store per TRENDS_CACHE_PERSISTENCE_ENABLED."""
    if conf.is_persistence_enabled():
        return CacheSnapshotStore()
    return NullSnapshotStore()
