"""
Trend fetch orchestrator.

Cache-first collection for a batch of keywords:

1. Cached keywords are served from the cache (flagged cached=True)
2. Only the misses go to the provider, one call per keyword on a bounded
   worker pool, each bounded by a timeout
3. Fresh items are scored, aggregated per keyword and written back with the
   period TTL
4. Keywords whose provider call failed get degraded placeholders, cached
   with a short TTL so live data replaces them quickly

CRITICAL INVARIANTS:
- The provider is never called for a keyword that was a cache hit
- No cache lock is held while waiting on a provider
- Provider failures and unscorable items never escape fetch(); they degrade
  to placeholders
- Results are sorted by score, highest first
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable

from viralboard.trends import conf
from viralboard.trends.cache.keys import normalize_keyword, ttl_for_period
from viralboard.trends.capture.base import ContentProvider, RawItem
from viralboard.trends.dto import TrendSummaryDTO
from viralboard.trends.exceptions import ProviderError
from viralboard.trends.services.aggregation import build_scored_item, build_summary, filter_items
from viralboard.trends.services.placeholders import build_placeholder

logger = logging.getLogger(__name__)


def _sort_by_score(summaries: list[TrendSummaryDTO]) -> list[TrendSummaryDTO]:
    return sorted(summaries, key=lambda summary: summary.score, reverse=True)


class TrendFetchOrchestrator:
    """Serves keyword batches from cache, fetching only what is missing."""

    def __init__(
        self,
        cache,
        provider: ContentProvider,
        *,
        provider_timeout_seconds: float | None = None,
        max_workers: int | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.cache = cache
        self.provider = provider
        self.provider_timeout_seconds = (
            provider_timeout_seconds
            if provider_timeout_seconds is not None
            else conf.get_provider_timeout_seconds()
        )
        self.max_workers = max_workers if max_workers is not None else conf.get_provider_max_workers()
        self._clock = clock or time.time

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def fetch(
        self,
        keywords: list[str],
        period: str,
        metadata: dict[str, Any] | None = None,
        *,
        force_refresh: bool = False,
    ) -> list[TrendSummaryDTO]:
        """
        Summaries for keywords over period, cache first.

        Args:
            keywords: Raw keywords (normalized and de-duplicated here)
            period: Period value
            metadata: Search options; part of the cache key and passed to
                the provider
            force_refresh: Invalidate these keys before looking them up

        Returns:
            Summaries sorted by score descending. Keywords with no items
            are omitted; failed keywords are represented by placeholders.

        Raises:
            ValueError: If period is unknown
        """
        period = str(period)
        ttl = ttl_for_period(period)
        keywords = self._unique_keywords(keywords)

        if force_refresh:
            for keyword in keywords:
                self.cache.delete(keyword, period, metadata)

        cached_results: list[TrendSummaryDTO] = []
        to_fetch: list[str] = []
        for keyword in keywords:
            hit = self.cache.get(keyword, period, metadata)
            if hit is None:
                to_fetch.append(keyword)
                continue
            cached_results.extend(summary.model_copy(update={"cached": True}) for summary in hit)

        if not to_fetch:
            logger.info(
                "All keywords served from cache",
                extra={"keywords": keywords, "period": period},
            )
            return _sort_by_score(cached_results)

        logger.info(
            "Fetching uncached keywords",
            extra={"cached": len(keywords) - len(to_fetch), "to_fetch": to_fetch, "period": period},
        )

        collected, failed = self._collect(to_fetch, period, metadata)
        fresh, unscorable = self._summarize(collected, period, metadata, ttl)
        failed = [keyword for keyword in to_fetch if keyword in failed or keyword in unscorable]

        if failed:
            fresh.extend(self._placeholders(failed, period, metadata, ttl))

        return _sort_by_score(cached_results + fresh)

    def force_refresh(
        self,
        keywords: list[str],
        period: str,
        metadata: dict[str, Any] | None = None,
    ) -> list[TrendSummaryDTO]:
        """Invalidate keys for keywords/period/metadata, then fetch."""
        return self.fetch(keywords, period, metadata, force_refresh=True)

    # =========================================================================
    # STAGES
    # =========================================================================

    @staticmethod
    def _unique_keywords(keywords: list[str]) -> list[str]:
        seen = set()
        unique = []
        for keyword in keywords:
            normalized = normalize_keyword(keyword)
            if not normalized or normalized in seen:
                continue
            seen.add(normalized)
            unique.append(keyword.strip())
        return unique

    def _collect(
        self,
        keywords: list[str],
        period: str,
        metadata: dict[str, Any] | None,
    ) -> tuple[dict[str, list[RawItem]], list[str]]:
        """
        One provider call per keyword on a bounded pool.

        Returns:
            (items by keyword for successes, failed keywords in request order)
        """
        workers = max(1, min(self.max_workers, len(keywords)))
        # Queued calls only start once a worker frees up, so the batch
        # deadline scales with the number of rounds
        rounds = math.ceil(len(keywords) / workers)
        batch_timeout = self.provider_timeout_seconds * rounds

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="trend-provider")
        try:
            futures = {
                executor.submit(self.provider.search, [keyword], period, metadata or {}): keyword
                for keyword in keywords
            }
            done, not_done = wait(futures, timeout=batch_timeout)
        finally:
            # Timed-out workers are abandoned, their results discarded
            executor.shutdown(wait=False, cancel_futures=True)

        results: dict[str, list[RawItem]] = {}
        for future in done:
            keyword = futures[future]
            try:
                results[keyword] = list(future.result())
            except ProviderError as e:
                logger.warning(
                    "Provider call failed",
                    extra={"keyword": keyword, "period": period, "error": str(e)},
                )
            except Exception as e:
                logger.exception(
                    "Provider call raised unexpected error",
                    extra={"keyword": keyword, "period": period, "error": str(e)},
                )

        for future in not_done:
            logger.warning(
                "Provider call timed out",
                extra={"keyword": futures[future], "period": period, "batch_timeout": batch_timeout},
            )

        collected = {keyword: results[keyword] for keyword in keywords if keyword in results}
        failed = [keyword for keyword in keywords if keyword not in results]
        if failed and len(failed) == len(keywords):
            logger.error(
                "All provider calls failed, serving placeholders",
                extra={"keywords": keywords, "period": period},
            )
        return collected, failed

    def _summarize(
        self,
        collected: dict[str, list[RawItem]],
        period: str,
        metadata: dict[str, Any] | None,
        ttl: int,
    ) -> tuple[list[TrendSummaryDTO], list[str]]:
        """
        Score, filter and summarize each keyword's items, caching the result.

        Returns:
            (summaries, keywords whose items could not be scored)
        """
        options = metadata or {}
        now = datetime.fromtimestamp(self._clock(), tz=timezone.utc)

        summaries = []
        unscorable = []
        for keyword, raw_items in collected.items():
            try:
                scored = [build_scored_item(raw, reference_year=now.year) for raw in raw_items]
                items = filter_items(
                    scored,
                    min_engagement=options.get("min_engagement", 0),
                    max_items_per_source=options.get("max_items_per_source"),
                )
                summary = build_summary(keyword, items, period, now)
            except Exception as e:
                logger.exception(
                    "Scoring provider items failed, serving placeholder",
                    extra={"keyword": keyword, "period": period, "error": str(e)},
                )
                unscorable.append(keyword)
                continue

            if summary is None:
                logger.info("No items for keyword, omitting", extra={"keyword": keyword, "period": period})
                continue

            self.cache.set(keyword, period, [summary], ttl_seconds=ttl, metadata=metadata)
            summaries.append(summary)
        return summaries, unscorable

    def _placeholders(
        self,
        keywords: list[str],
        period: str,
        metadata: dict[str, Any] | None,
        ttl: int,
    ) -> list[TrendSummaryDTO]:
        placeholder_ttl = min(conf.get_placeholder_ttl_seconds(), ttl)
        depth = (metadata or {}).get("analysis_depth")

        placeholders = []
        for keyword in keywords:
            placeholder = build_placeholder(keyword, depth)
            self.cache.set(keyword, period, [placeholder], ttl_seconds=placeholder_ttl, metadata=metadata)
            placeholders.append(placeholder)

        logger.warning(
            "Serving placeholder summaries",
            extra={"keywords": keywords, "period": period, "ttl_seconds": placeholder_ttl},
        )
        return placeholders
