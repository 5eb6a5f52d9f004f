"""
Trend test fixtures.

Fake clock and fake providers for cache and orchestrator tests.

CRITICAL: These are test fixtures only. They never make HTTP calls.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from viralboard.trends.capture.base import ContentProvider, RawItem
from viralboard.trends.dto import ScoredItemDTO, TrendSummaryDTO, ViralAnalysisDTO
from viralboard.trends.exceptions import ProviderError

# 2026-03-02 12:00:00 UTC, a Monday
FIXED_EPOCH = 1772452800.0


class FakeClock:
    """Epoch-seconds clock that only moves when told to."""

    def __init__(self, start: float = FIXED_EPOCH):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def as_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.now, tz=timezone.utc)


def make_raw_item(
    title: str = "OpenAI ships new reasoning model",
    *,
    url: str | None = None,
    source: str = "hackernews",
    published_at: datetime | None = None,
    engagement: int | None = 120,
    snippet: str = "",
    text: str = "",
    image_count: int = 0,
) -> RawItem:
    """Create a RawItem with sensible defaults."""
    return RawItem(
        title=title,
        url=url if url is not None else f"https://example.com/{'-'.join(title.lower().split())}",
        snippet=snippet,
        source=source,
        published_at=published_at,
        engagement=engagement,
        text=text,
        image_count=image_count,
    )


def make_summary(keyword: str = "openai", score: float = 6.0, **overrides) -> TrendSummaryDTO:
    """Create a minimal TrendSummaryDTO."""
    analysis = ViralAnalysisDTO(
        emotion_score=score,
        clarity_score=score,
        carousel_potential=score,
        trend_score=score,
        authority_score=score,
        overall_score=score,
    )
    item = ScoredItemDTO(
        id=f"{keyword}-1",
        title=f"{keyword} headline",
        url=f"https://example.com/{keyword}",
        source="hackernews",
        engagement=50,
        analysis=analysis,
    )
    fields = {
        "keyword": keyword,
        "score": score,
        "sentiment": 0.5,
        "volume": 50,
        "sources": ["hackernews"],
        "items": [item],
    }
    fields.update(overrides)
    return TrendSummaryDTO(**fields)


class FakeProvider(ContentProvider):
    """
    Provider returning canned items per keyword.

    Records every call so tests can assert exactly which keywords were
    fetched.
    """

    name = "fake"

    def __init__(self, items_by_keyword: dict[str, list[RawItem]] | None = None, *, now: datetime | None = None):
        self.items_by_keyword = items_by_keyword or {}
        self.now = now or datetime.fromtimestamp(FIXED_EPOCH, tz=timezone.utc)
        self.calls: list[list[str]] = []
        self._lock = threading.Lock()

    def search(self, keywords, period, options=None):
        with self._lock:
            self.calls.append(list(keywords))
        items = []
        for keyword in keywords:
            if keyword in self.items_by_keyword:
                items.extend(self.items_by_keyword[keyword])
            else:
                items.append(make_raw_item(
                    f"{keyword} is trending right now",
                    url=f"https://news.example.com/{keyword}",
                    published_at=self.now - timedelta(hours=6),
                ))
        return items

    @property
    def fetched_keywords(self) -> list[str]:
        return [keyword for call in self.calls for keyword in call]


class FailingProvider(ContentProvider):
    """Provider failing for every keyword, or only for the listed ones."""

    name = "failing"

    def __init__(self, failing_keywords: set[str] | None = None, fallback: ContentProvider | None = None):
        self.failing_keywords = failing_keywords
        self.fallback = fallback or FakeProvider()
        self.calls: list[list[str]] = []

    def search(self, keywords, period, options=None):
        self.calls.append(list(keywords))
        if self.failing_keywords is None or any(k in self.failing_keywords for k in keywords):
            raise ProviderError(f"boom for {keywords}")
        return self.fallback.search(keywords, period, options)


class SlowProvider(ContentProvider):
    """Provider that blocks until released, for timeout tests."""

    name = "slow"

    def __init__(self):
        self.release = threading.Event()

    def search(self, keywords, period, options=None):
        self.release.wait(10)
        return []
