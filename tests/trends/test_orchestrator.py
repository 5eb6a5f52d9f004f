"""
Tests for the cache-first fetch orchestrator.
"""

from unittest.mock import patch

import pytest

from tests.fixtures.trends import (
    FailingProvider,
    FakeProvider,
    SlowProvider,
    make_raw_item,
)
from viralboard.trends.cache.store import TrendCache
from viralboard.trends.capture.base import ContentProvider
from viralboard.trends.dto import PLACEHOLDER_SOURCE
from viralboard.trends.services.orchestrator import TrendFetchOrchestrator


@pytest.fixture
def cache(clock):
    return TrendCache(max_entries=100, default_ttl_seconds=3600, clock=clock)


def _orchestrator(cache, provider, clock, **kwargs):
    kwargs.setdefault("provider_timeout_seconds", 2.0)
    kwargs.setdefault("max_workers", 2)
    return TrendFetchOrchestrator(cache, provider, clock=clock, **kwargs)


class TestCacheFirst:
    """Tests for cache hit/miss routing."""

    def test_miss_fetches_and_caches(self, cache, clock):
        """A miss calls the provider and writes the result back."""
        provider = FakeProvider()
        results = _orchestrator(cache, provider, clock).fetch(["openai"], "7d")

        assert provider.fetched_keywords == ["openai"]
        assert [r.keyword for r in results] == ["openai"]
        assert results[0].cached is False
        assert cache.has("openai", "7d") is True

    def test_all_hits_skip_provider(self, cache, clock):
        """No provider call when every keyword is cached."""
        provider = FakeProvider()
        orchestrator = _orchestrator(cache, provider, clock)
        orchestrator.fetch(["openai", "rust"], "7d")
        provider.calls.clear()

        results = orchestrator.fetch(["openai", "rust"], "7d")

        assert provider.calls == []
        assert len(results) == 2
        assert all(r.cached for r in results)

    def test_half_cached_half_fetched(self, cache, clock):
        """Only the misses reach the provider; results are merged."""
        provider = FakeProvider()
        orchestrator = _orchestrator(cache, provider, clock)
        orchestrator.fetch(["openai"], "7d")
        provider.calls.clear()

        results = orchestrator.fetch(["openai", "rust"], "7d")

        assert provider.fetched_keywords == ["rust"]
        cached_flags = {r.keyword: r.cached for r in results}
        assert cached_flags == {"openai": True, "rust": False}

    def test_written_with_period_ttl(self, cache, clock):
        """Fresh results live for the period TTL (7d -> 8h)."""
        orchestrator = _orchestrator(cache, FakeProvider(), clock)
        orchestrator.fetch(["openai"], "7d")

        clock.advance(8 * 3600)
        assert cache.has("openai", "7d") is True
        clock.advance(1)
        assert cache.has("openai", "7d") is False

    def test_metadata_partitions_cache(self, cache, clock):
        """Different options are fetched separately."""
        provider = FakeProvider()
        orchestrator = _orchestrator(cache, provider, clock)

        orchestrator.fetch(["openai"], "7d", {"analysis_depth": "basic"})
        orchestrator.fetch(["openai"], "7d", {"analysis_depth": "detailed"})
        orchestrator.fetch(["openai"], "7d", {"analysis_depth": "basic"})

        assert provider.fetched_keywords == ["openai", "openai"]

    def test_duplicate_keywords_fetched_once(self, cache, clock):
        """Keywords are normalized and de-duplicated."""
        provider = FakeProvider()
        results = _orchestrator(cache, provider, clock).fetch(["OpenAI", "openai ", "  OPENAI"], "7d")

        assert len(provider.calls) == 1
        assert len(results) == 1

    def test_force_refresh_refetches(self, cache, clock):
        """force_refresh bypasses a valid cached entry."""
        provider = FakeProvider()
        orchestrator = _orchestrator(cache, provider, clock)
        orchestrator.fetch(["openai"], "7d")

        results = orchestrator.force_refresh(["openai"], "7d")

        assert provider.fetched_keywords == ["openai", "openai"]
        assert results[0].cached is False

    def test_unknown_period_rejected(self, cache, clock):
        """Unknown periods raise before any work."""
        with pytest.raises(ValueError):
            _orchestrator(cache, FakeProvider(), clock).fetch(["openai"], "2w")


class TestAggregationRules:
    """Tests for filtering and ordering of fresh results."""

    def test_sorted_by_score_desc(self, cache, clock):
        """Results come back highest score first."""
        provider = FakeProvider({
            "plain": [make_raw_item("Hello", url="https://a.example.com/1")],
            "strong": [make_raw_item(
                "How 10 amazing AI tips change work",
                url="https://www.techcrunch.com/ai",
                snippet="Incredible research shows 40% gains",
            )],
        })
        results = _orchestrator(cache, provider, clock).fetch(["plain", "strong"], "7d")

        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert results[0].keyword == "strong"

    def test_keyword_without_items_dropped(self, cache, clock):
        """Zero items means no summary and nothing cached."""
        provider = FakeProvider({"empty": []})
        results = _orchestrator(cache, provider, clock).fetch(["empty"], "7d")

        assert results == []
        assert cache.has("empty", "7d") is False

    def test_min_engagement_from_metadata(self, cache, clock):
        """Low-engagement items are filtered out."""
        provider = FakeProvider({
            "openai": [
                make_raw_item("low", url="https://example.com/low", engagement=5),
                make_raw_item("high", url="https://example.com/high", engagement=50),
            ],
        })
        results = _orchestrator(cache, provider, clock).fetch(["openai"], "7d", {"min_engagement": 10})

        assert results[0].volume == 50
        assert len(results[0].items) == 1

    def test_duplicate_urls_collapsed(self, cache, clock):
        """Items with the same URL count once."""
        provider = FakeProvider({
            "openai": [
                make_raw_item("one", url="https://example.com/x", engagement=10),
                make_raw_item("two", url="HTTPS://EXAMPLE.COM/X", engagement=10),
            ],
        })
        results = _orchestrator(cache, provider, clock).fetch(["openai"], "7d")
        assert len(results[0].items) == 1


class TestDegradation:
    """Tests for provider failure handling."""

    def test_total_failure_serves_placeholders(self, cache, clock):
        """Every keyword gets a tagged placeholder."""
        results = _orchestrator(cache, FailingProvider(), clock).fetch(["openai", "rust"], "7d")

        assert {r.keyword for r in results} == {"openai", "rust"}
        for summary in results:
            assert summary.is_placeholder is True
            assert summary.sources == [PLACEHOLDER_SOURCE]
            assert 4.7 <= summary.score <= 5.3
            assert 1 <= len(summary.items) <= 2
            assert all(item.source == PLACEHOLDER_SOURCE for item in summary.items)

    def test_placeholders_cached_briefly(self, cache, clock, settings):
        """Placeholders expire after the placeholder TTL."""
        settings.TRENDS_PLACEHOLDER_TTL_SECONDS = 900
        _orchestrator(cache, FailingProvider(), clock).fetch(["openai"], "7d")

        cached = cache.get("openai", "7d")
        assert cached[0].is_placeholder is True

        clock.advance(901)
        assert cache.get("openai", "7d") is None

    def test_placeholder_ttl_never_exceeds_period_ttl(self, cache, clock, settings):
        """A long placeholder TTL is capped at the period TTL."""
        settings.TRENDS_PLACEHOLDER_TTL_SECONDS = 10 * 24 * 3600
        _orchestrator(cache, FailingProvider(), clock).fetch(["openai"], "1d")

        clock.advance(2 * 3600 + 1)
        assert cache.get("openai", "1d") is None

    def test_placeholder_deterministic(self, cache, clock):
        """Same keyword, same placeholder score."""
        first = _orchestrator(cache, FailingProvider(), clock).fetch(["openai"], "7d")
        other = TrendCache(clock=clock)
        second = _orchestrator(other, FailingProvider(), clock).fetch(["openai"], "7d")
        assert first[0].score == second[0].score

    def test_partial_failure(self, cache, clock):
        """Failed keywords get placeholders, others real data."""
        provider = FailingProvider(failing_keywords={"rust"})
        results = _orchestrator(cache, provider, clock).fetch(["openai", "rust"], "7d")

        by_keyword = {r.keyword: r for r in results}
        assert by_keyword["openai"].is_placeholder is False
        assert by_keyword["rust"].is_placeholder is True

    def test_timeout_serves_placeholders(self, cache, clock):
        """A provider that never answers is abandoned."""
        provider = SlowProvider()
        try:
            results = _orchestrator(
                cache, provider, clock, provider_timeout_seconds=0.05
            ).fetch(["openai"], "7d")
        finally:
            provider.release.set()

        assert len(results) == 1
        assert results[0].is_placeholder is True

    def test_timeout_logged_with_deadline(self, cache, clock):
        """The timeout warning carries the batch deadline as a field."""
        provider = SlowProvider()
        try:
            with patch("viralboard.trends.services.orchestrator.logger") as mock_logger:
                _orchestrator(cache, provider, clock, provider_timeout_seconds=0.05).fetch(["openai"], "7d")
        finally:
            provider.release.set()

        timeouts = [c for c in mock_logger.warning.call_args_list if c.args[0] == "Provider call timed out"]
        assert len(timeouts) == 1
        assert timeouts[0].kwargs["extra"]["keyword"] == "openai"
        assert timeouts[0].kwargs["extra"]["batch_timeout"] == pytest.approx(0.05)

    def test_unexpected_exception_degrades(self, cache, clock):
        """Non-provider exceptions are also recovered."""

        class BrokenProvider(ContentProvider):
            name = "broken"

            def search(self, keywords, period, options=None):
                raise KeyError("missing field")

        results = _orchestrator(cache, BrokenProvider(), clock).fetch(["openai"], "7d")
        assert results[0].is_placeholder is True

    def test_negative_image_count_clamped(self, cache, clock):
        """A negative image count from a provider is scored as zero."""
        provider = FakeProvider({"openai": [make_raw_item("OpenAI launch", image_count=-1)]})
        results = _orchestrator(cache, provider, clock).fetch(["openai"], "7d")

        assert results[0].is_placeholder is False
        assert results[0].items[0].image_count == 0

    def test_unscorable_items_degrade_one_keyword(self, cache, clock):
        """Items that cannot be scored turn only their keyword into a placeholder."""
        provider = FakeProvider(
            {
                "good": [make_raw_item("Good news", url="https://example.com/good")],
                "bad": [make_raw_item("Bad data", url="https://example.com/bad", engagement="lots")],
            }
        )
        results = _orchestrator(cache, provider, clock).fetch(["good", "bad"], "7d")

        flags = {r.keyword: r.is_placeholder for r in results}
        assert flags == {"good": False, "bad": True}
        assert cache.get("good", "7d")[0].is_placeholder is False
        assert cache.get("bad", "7d")[0].is_placeholder is True

    def test_cache_usable_while_provider_runs(self, cache, clock):
        """No cache lock is held while waiting on the provider."""
        seen = []

        class PeekingProvider(ContentProvider):
            name = "peek"

            def search(self, keywords, period, options=None):
                seen.append(cache.stats().total_entries)
                return [make_raw_item(f"{keywords[0]} news", url=f"https://example.com/{keywords[0]}")]

        results = _orchestrator(cache, PeekingProvider(), clock, provider_timeout_seconds=1.0).fetch(
            ["openai"], "7d"
        )

        assert seen == [0]
        assert results[0].is_placeholder is False
