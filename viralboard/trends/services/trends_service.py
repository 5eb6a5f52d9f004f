"""
Trends query surface.

The only entry point the UI layer and management commands use. Wires one
TrendCache, one orchestrator and the cleanup scheduler together; build it
with build_trends_service() and close() it on shutdown.

None of the methods here raise on provider or persistence failures.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from viralboard.trends.cache.cleanup import CleanupScheduler
from viralboard.trends.cache.persistence import build_snapshot_store
from viralboard.trends.cache.store import TrendCache
from viralboard.trends.capture import build_provider
from viralboard.trends.dto import (
    CacheSnapshotDTO,
    CacheStatsDTO,
    TrendPredictionDTO,
    TrendSearchConfig,
    TrendSummaryDTO,
)
from viralboard.trends.services.orchestrator import TrendFetchOrchestrator
from viralboard.trends.services.predictions import generate_predictions

logger = logging.getLogger(__name__)


class TrendsService:
    """Facade over the trend cache and fetch orchestrator."""

    def __init__(
        self,
        cache: TrendCache,
        orchestrator: TrendFetchOrchestrator,
        scheduler: CleanupScheduler | None = None,
    ):
        self.cache = cache
        self.orchestrator = orchestrator
        self.scheduler = scheduler

    def scrape_advanced_trends(self, config: TrendSearchConfig) -> list[TrendSummaryDTO]:
        """Summaries for config.keywords, served from cache where possible."""
        logger.info(
            "Trend search",
            extra={"keywords": config.keywords, "period": str(config.period)},
        )
        return self.orchestrator.fetch(config.keywords, config.period, config.cache_metadata())

    def force_refresh(self, config: TrendSearchConfig) -> list[TrendSummaryDTO]:
        """Like scrape_advanced_trends, but bypassing any cached entry."""
        logger.info(
            "Forced trend refresh",
            extra={"keywords": config.keywords, "period": str(config.period)},
        )
        return self.orchestrator.force_refresh(config.keywords, config.period, config.cache_metadata())

    def get_cache_stats(self) -> CacheStatsDTO:
        return self.cache.stats()

    def clear_cache(self) -> None:
        self.cache.clear()

    def invalidate_cache(self, keyword: str, period: str | None = None) -> int:
        """Drop every cached entry for keyword (optionally one period)."""
        return self.cache.invalidate_keyword(keyword, period)

    def cleanup_cache(self) -> int:
        return self.cache.cleanup()

    def export_cache(self) -> CacheSnapshotDTO:
        return self.cache.export_snapshot()

    def generate_predictions(
        self,
        trends: list[TrendSummaryDTO],
        volatility: float = 0.0,
    ) -> list[TrendPredictionDTO]:
        return generate_predictions(trends, volatility)

    def close(self) -> None:
        """Stop the cleanup scheduler and flush a final snapshot."""
        if self.scheduler is not None:
            self.scheduler.stop()
        self.cache.close()
        logger.info("Trends service closed")


def build_trends_service(
    *,
    provider=None,
    clock: Callable[[], float] | None = None,
    start_scheduler: bool = True,
) -> TrendsService:
    """
    Build a TrendsService from Django settings.

    Loads the durable snapshot (warm start) and starts the cleanup
    scheduler unless start_scheduler is False.

    Args:
        provider: Content provider (default: build_provider() from
            TRENDS_DEFAULT_PROVIDERS)
        clock: Epoch seconds source shared by cache and orchestrator
        start_scheduler: Start the periodic expiry sweep
    """
    clock = clock or time.time
    cache = TrendCache(persistence=build_snapshot_store(), clock=clock)
    cache.load()

    orchestrator = TrendFetchOrchestrator(
        cache,
        provider if provider is not None else build_provider(),
        clock=clock,
    )

    scheduler = CleanupScheduler(cache)
    if start_scheduler:
        scheduler.start()

    return TrendsService(cache, orchestrator, scheduler)
