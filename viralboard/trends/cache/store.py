"""
Trend cache store.

In-process TTL cache of TrendSummaryDTO lists keyed by
(keyword, period, options fingerprint), with a capacity bound, hit/miss
accounting and an optional durable snapshot.

CRITICAL INVARIANTS:
- Entries are never mutated in place; reads hand out deep copies
- expires_at > created_at for every entry (ttl must be positive)
- get/has: absent -> miss; expired -> delete + miss; else hit.
  hits + misses grows by exactly one per get/has call
- hit_rate_percent is 0 when no requests were made
- set at capacity first evicts ceil(10%) of entries, oldest created_at first
- Deleting an already-absent key is a no-op
- Every mutation is followed by a snapshot write (best effort)

LOCKING:
One re-entrant lock guards the table and both counters. Nothing slow
happens under it apart from the snapshot write; provider calls never run
while it is held.
"""

from __future__ import annotations

import json
import logging
import math
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from viralboard.trends import conf
from viralboard.trends.cache.keys import get_cache_key, metadata_fingerprint, normalize_keyword
from viralboard.trends.cache.persistence import NullSnapshotStore
from viralboard.trends.dto import (
    CacheEntrySnapshotDTO,
    CacheSnapshotDTO,
    CacheStatsDTO,
    KeywordEntryDTO,
    TrendSummaryDTO,
)

logger = logging.getLogger("viralboard.trends.cache")

# Fraction of entries evicted when the store is full
EVICTION_FRACTION = 0.1


@dataclass(frozen=True)
class CacheEntry:
    """One cached payload. Created on set, read-only thereafter."""

    key: str
    keyword: str
    period: str
    data: tuple[TrendSummaryDTO, ...]
    created_at: float
    expires_at: float
    metadata: dict[str, Any] = field(default_factory=dict)
    metadata_fingerprint: str = ""

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def to_json(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "keyword": self.keyword,
            "period": self.period,
            "data": [summary.model_dump(mode="json") for summary in self.data],
            "created_at": self.created_at,
            "expires_at": self.expires_at,
            "metadata": self.metadata,
            "metadata_fingerprint": self.metadata_fingerprint,
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> "CacheEntry":
        return cls(
            key=raw["key"],
            keyword=raw["keyword"],
            period=raw["period"],
            data=tuple(TrendSummaryDTO.model_validate(item) for item in raw["data"]),
            created_at=float(raw["created_at"]),
            expires_at=float(raw["expires_at"]),
            metadata=dict(raw.get("metadata") or {}),
            metadata_fingerprint=raw.get("metadata_fingerprint", ""),
        )


def format_duration(seconds: float) -> str:
    """Human readable duration, e.g. "2h 5m"."""
    total = max(int(seconds), 0)
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_size(size_bytes: int) -> str:
    """Human readable byte size, e.g. "1.2 KB"."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def _to_datetime(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


class TrendCache:
    """
    TTL cache for per-keyword trend summaries.

    Construct one per process (or per test) and pass it to the orchestrator;
    there is no module-level instance.
    """

    def __init__(
        self,
        max_entries: int | None = None,
        default_ttl_seconds: int | None = None,
        persistence=None,
        clock: Callable[[], float] | None = None,
    ):
        """
        Args:
            max_entries: Capacity bound (default: TRENDS_CACHE_MAX_ENTRIES)
            default_ttl_seconds: TTL when set() gets none
                (default: TRENDS_CACHE_DEFAULT_TTL_SECONDS)
            persistence: Snapshot store (default: no persistence)
            clock: Returns epoch seconds (default: time.time)
        """
        self.max_entries = max_entries if max_entries is not None else conf.get_max_entries()
        self.default_ttl_seconds = (
            default_ttl_seconds if default_ttl_seconds is not None else conf.get_default_ttl_seconds()
        )
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.persistence = persistence or NullSnapshotStore()
        self._clock = clock or time.time
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # =========================================================================
    # CORE OPERATIONS
    # =========================================================================

    def set(
        self,
        keyword: str,
        period: str,
        data: list[TrendSummaryDTO],
        ttl_seconds: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """
        Store summaries for a keyword/period/options triple.

        Args:
            keyword: Raw keyword (normalized for the key)
            period: Period value
            data: Summaries to cache (copied)
            ttl_seconds: Lifetime (default: self.default_ttl_seconds)
            metadata: Caller options folded into the key

        Raises:
            ValueError: If ttl_seconds is not positive
        """
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl}")

        key = get_cache_key(keyword, period, metadata)

        with self._lock:
            if len(self._entries) >= self.max_entries:
                self._evict_oldest()

            now = self._clock()
            self._entries[key] = CacheEntry(
                key=key,
                keyword=normalize_keyword(keyword),
                period=str(period),
                data=tuple(summary.model_copy(deep=True) for summary in data),
                created_at=now,
                expires_at=now + ttl,
                metadata=dict(metadata or {}),
                metadata_fingerprint=metadata_fingerprint(metadata),
            )
            logger.debug(
                "CACHE_SET keyword=%s period=%s key=%s expires_in=%s",
                keyword,
                period,
                key,
                format_duration(ttl),
            )
            self._persist()

    def get(
        self,
        keyword: str,
        period: str,
        metadata: dict[str, Any] | None = None,
    ) -> list[TrendSummaryDTO] | None:
        """
        Read cached summaries.

        Returns:
            Deep copy of the cached summaries, or None on miss/expiry
        """
        entry = self._lookup(keyword, period, metadata)
        if entry is None:
            return None
        return [summary.model_copy(deep=True) for summary in entry.data]

    def has(
        self,
        keyword: str,
        period: str,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """Like get(), including hit/miss accounting and lazy expiry."""
        return self._lookup(keyword, period, metadata) is not None

    def delete(
        self,
        keyword: str,
        period: str,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """
        Invalidate one key.

        Returns:
            True if an entry was removed, False if none existed
        """
        key = get_cache_key(keyword, period, metadata)
        with self._lock:
            removed = self._entries.pop(key, None) is not None
            if removed:
                logger.debug("CACHE_DELETE keyword=%s period=%s key=%s", keyword, period, key)
                self._persist()
            return removed

    def invalidate_keyword(self, keyword: str, period: str | None = None) -> int:
        """
        Invalidate every entry for a keyword, whatever its options.

        Args:
            keyword: Raw keyword (normalized before matching)
            period: Restrict to one period (default: all periods)

        Returns:
            Number of entries removed
        """
        normalized = normalize_keyword(keyword)
        with self._lock:
            doomed = [
                key
                for key, entry in self._entries.items()
                if entry.keyword == normalized and (period is None or entry.period == str(period))
            ]
            for key in doomed:
                del self._entries[key]
            if doomed:
                logger.info(
                    "CACHE_INVALIDATE keyword=%s period=%s removed=%d",
                    normalized,
                    period or "*",
                    len(doomed),
                )
                self._persist()
            return len(doomed)

    def cleanup(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                self._entries.pop(key, None)
            if expired:
                logger.info("CACHE_CLEANUP removed=%d", len(expired))
                self._persist()
            return len(expired)

    def clear(self) -> None:
        """Drop all entries, reset counters and the durable snapshot."""
        with self._lock:
            size = len(self._entries)
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self.persistence.clear()
            logger.info("CACHE_CLEAR removed=%d", size)

    # =========================================================================
    # DIAGNOSTICS
    # =========================================================================

    def stats(self) -> CacheStatsDTO:
        """Statistics computed from current state. Counters are not touched."""
        with self._lock:
            now = self._clock()
            entries = list(self._entries.values())
            hits, misses = self._hits, self._misses
            size_bytes = len(
                json.dumps([entry.to_json() for entry in entries], default=str).encode("utf-8")
            )

        total_requests = hits + misses
        hit_rate = (hits / total_requests) * 100 if total_requests else 0.0
        created = [entry.created_at for entry in entries]

        return CacheStatsDTO(
            total_entries=len(entries),
            expired_entries=sum(1 for entry in entries if entry.is_expired(now)),
            hits=hits,
            misses=misses,
            hit_rate_percent=round(hit_rate, 2),
            oldest_entry=_to_datetime(min(created)) if created else None,
            newest_entry=_to_datetime(max(created)) if created else None,
            size_bytes=size_bytes,
            size_display=format_size(size_bytes),
        )

    def export_snapshot(self) -> CacheSnapshotDTO:
        """Diagnostic export of every entry (payload sizes only)."""
        with self._lock:
            now = self._clock()
            entries = [
                CacheEntrySnapshotDTO(
                    key=entry.key,
                    keyword=entry.keyword,
                    period=entry.period,
                    created_at=_to_datetime(entry.created_at),
                    expires_at=_to_datetime(entry.expires_at),
                    is_expired=entry.is_expired(now),
                    metadata=dict(entry.metadata),
                    data_size=len(
                        json.dumps([s.model_dump(mode="json") for s in entry.data]).encode("utf-8")
                    ),
                )
                for entry in self._entries.values()
            ]
            stats = self.stats()

        return CacheSnapshotDTO(
            stats=stats,
            config={
                "max_entries": self.max_entries,
                "default_ttl_seconds": self.default_ttl_seconds,
            },
            entries=entries,
            exported_at=_to_datetime(now),
        )

    def entries_for_keyword(self, keyword: str) -> list[KeywordEntryDTO]:
        """Valid entries for a keyword across periods, latest expiry first."""
        normalized = normalize_keyword(keyword)
        with self._lock:
            now = self._clock()
            matches = [
                entry
                for entry in self._entries.values()
                if entry.keyword == normalized and not entry.is_expired(now)
            ]
            result = [
                KeywordEntryDTO(
                    period=entry.period,
                    data=[summary.model_copy(deep=True) for summary in entry.data],
                    expires_at=_to_datetime(entry.expires_at),
                )
                for entry in matches
            ]
        return sorted(result, key=lambda item: item.expires_at, reverse=True)

    def update_config(
        self,
        max_entries: int | None = None,
        default_ttl_seconds: int | None = None,
    ) -> None:
        """Change capacity and/or default TTL. Shrinking capacity trims oldest entries."""
        with self._lock:
            if default_ttl_seconds is not None:
                if default_ttl_seconds <= 0:
                    raise ValueError("default_ttl_seconds must be positive")
                self.default_ttl_seconds = default_ttl_seconds
            if max_entries is not None:
                if max_entries < 1:
                    raise ValueError("max_entries must be at least 1")
                self.max_entries = max_entries
                if len(self._entries) > max_entries:
                    self._trim_to(max_entries)
                    self._persist()
            logger.info(
                "CACHE_CONFIG max_entries=%d default_ttl=%s",
                self.max_entries,
                format_duration(self.default_ttl_seconds),
            )

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def load(self) -> int:
        """
        Warm-start from the durable snapshot.

        Restores non-expired entries (newest first, up to capacity) and the
        hit/miss counters verbatim. Corrupt data is a cold start.

        Returns:
            Number of entries restored
        """
        payload = self.persistence.load()
        if payload is None:
            return 0

        try:
            restored = [CacheEntry.from_json(raw) for raw in payload["entries"]]
            stats = payload.get("stats") or {}
            if not isinstance(stats, dict):
                raise TypeError(f"stats must be an object, got {type(stats).__name__}")
            hits = int(stats.get("hits", 0))
            misses = int(stats.get("misses", 0))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Cache snapshot corrupt, starting cold: %s", str(e))
            return 0

        with self._lock:
            now = self._clock()
            valid = sorted(
                (entry for entry in restored if not entry.is_expired(now)),
                key=lambda entry: entry.created_at,
            )[-self.max_entries:]
            self._entries = {entry.key: entry for entry in valid}
            self._hits = hits
            self._misses = misses

        logger.info("CACHE_LOADED entries=%d hits=%d misses=%d", len(valid), hits, misses)
        return len(valid)

    def close(self) -> None:
        """Flush a final snapshot."""
        with self._lock:
            self._persist()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _lookup(
        self,
        keyword: str,
        period: str,
        metadata: dict[str, Any] | None,
    ) -> CacheEntry | None:
        key = get_cache_key(keyword, period, metadata)
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self._misses += 1
                logger.debug("CACHE_MISS keyword=%s period=%s key=%s", keyword, period, key)
                self._persist()
                return None

            now = self._clock()
            if entry.is_expired(now):
                self._entries.pop(key, None)
                self._misses += 1
                logger.debug("CACHE_EXPIRED keyword=%s period=%s key=%s", keyword, period, key)
                self._persist()
                return None

            self._hits += 1
            logger.debug(
                "CACHE_HIT keyword=%s period=%s key=%s valid_for=%s",
                keyword,
                period,
                key,
                format_duration(entry.expires_at - now),
            )
            self._persist()
            return entry

    def _evict_oldest(self) -> None:
        """Evict ceil(EVICTION_FRACTION) of entries, oldest created_at first. Lock held."""
        count = math.ceil(len(self._entries) * EVICTION_FRACTION)
        oldest = sorted(self._entries.values(), key=lambda entry: entry.created_at)[:count]
        for entry in oldest:
            del self._entries[entry.key]
        logger.info("CACHE_EVICT removed=%d remaining=%d", count, len(self._entries))

    def _trim_to(self, limit: int) -> None:
        """Drop oldest entries until at most limit remain. Lock held."""
        ordered = sorted(self._entries.values(), key=lambda entry: entry.created_at)
        for entry in ordered[: len(ordered) - limit]:
            del self._entries[entry.key]

    def _persist(self) -> None:
        """Snapshot current state. Lock held. Never raises."""
        payload = {
            "entries": [entry.to_json() for entry in self._entries.values()],
            "stats": {"hits": self._hits, "misses": self._misses},
            "timestamp": self._clock(),
        }
        self.persistence.save(payload)
