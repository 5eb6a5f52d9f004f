"""
Aggregation of scored items into per-keyword trend summaries.

Pure functions over (items, period, now). The orchestrator supplies "now"
from its clock so results are reproducible in tests.

GROWTH HEURISTIC:
growth_percent = (recent_fraction - 0.5) * 100, where recent_fraction is
the share of in-window items published in the last RECENT_SPAN_DAYS days
(or the whole window, when the window is shorter). Items with no timestamp
or a future timestamp count as recent. This is a heuristic volume skew,
not a time series growth rate.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timedelta, timezone

from viralboard.core.enums import PERIOD_HOURS, TrendDirection
from viralboard.trends.capture.base import RawItem
from viralboard.trends.dto import ScoredItemDTO, TemporalDataDTO, TrendSummaryDTO
from viralboard.trends.scoring import ScoringInput, analyze_sentiment, estimate_engagement, score_item

logger = logging.getLogger(__name__)

RECENT_SPAN_DAYS = 3
DAILY_BUCKETS = 30
PEAK_DAY_COUNT = 3
DIRECTION_THRESHOLD_PERCENT = 20.0

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


# =============================================================================
# ITEM SCORING
# =============================================================================


def _item_id(raw: RawItem) -> str:
    if raw.item_id:
        return raw.item_id
    digest = hashlib.sha256(f"{raw.source}|{raw.url}|{raw.title}".encode("utf-8")).hexdigest()
    return f"{raw.source or 'item'}-{digest[:12]}"


def build_scored_item(raw: RawItem, *, reference_year: int | None = None) -> ScoredItemDTO:
    """
    Score one raw item.

    Provider-reported engagement wins over the lexical estimate.
    """
    image_count = max(int(raw.image_count or 0), 0)
    analysis = score_item(
        ScoringInput(
            title=raw.title,
            description=raw.snippet,
            text=raw.text,
            url=raw.url,
            image_count=image_count,
        ),
        reference_year=reference_year,
    )
    if raw.engagement is not None:
        engagement = max(int(raw.engagement), 0)
    else:
        engagement = estimate_engagement(raw.title, raw.snippet, raw.text, raw.url)

    return ScoredItemDTO(
        id=_item_id(raw),
        title=raw.title,
        snippet=raw.snippet,
        url=raw.url,
        source=raw.source,
        published_at=raw.published_at,
        engagement=engagement,
        sentiment=analyze_sentiment(" ".join(part for part in (raw.title, raw.snippet, raw.text) if part)),
        image_count=image_count,
        analysis=analysis,
    )


def filter_items(
    items: list[ScoredItemDTO],
    *,
    min_engagement: int = 0,
    max_items_per_source: int | None = None,
) -> list[ScoredItemDTO]:
    """
    De-duplicate by URL (case-insensitive), drop low-engagement items and
    cap each source at max_items_per_source. Order is preserved.
    """
    seen_urls: set[str] = set()
    per_source: dict[str, int] = {}
    kept = []

    for item in items:
        url_key = item.url.strip().lower()
        if url_key:
            if url_key in seen_urls:
                continue
            seen_urls.add(url_key)

        if item.engagement < min_engagement:
            continue

        count = per_source.get(item.source, 0)
        if max_items_per_source is not None and count >= max_items_per_source:
            continue
        per_source[item.source] = count + 1
        kept.append(item)

    return kept


# =============================================================================
# TEMPORAL ANALYSIS
# =============================================================================


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_growth(items: list[ScoredItemDTO], period: str, now: datetime) -> float:
    """Growth heuristic in percent, rounded to one decimal. 0.0 with no in-window items."""
    window = timedelta(hours=PERIOD_HOURS.get(str(period), 168))
    recent_span = min(window, timedelta(days=RECENT_SPAN_DAYS))

    in_window = 0
    recent = 0
    for item in items:
        if item.published_at is None:
            in_window += 1
            recent += 1
            continue
        age = now - _as_utc(item.published_at)
        if age <= timedelta(0):
            in_window += 1
            recent += 1
        elif age <= window:
            in_window += 1
            if age <= recent_span:
                recent += 1

    if not in_window:
        return 0.0
    return round((recent / in_window - 0.5) * 100, 1)


def direction_for_growth(growth_percent: float) -> TrendDirection:
    if growth_percent > DIRECTION_THRESHOLD_PERCENT:
        return TrendDirection.RISING
    if growth_percent < -DIRECTION_THRESHOLD_PERCENT:
        return TrendDirection.FALLING
    return TrendDirection.STABLE


def build_temporal(items: list[ScoredItemDTO], growth_percent: float, now: datetime) -> TemporalDataDTO:
    """
    Daily volume over the last DAILY_BUCKETS days (last index is today),
    peak weekdays and direction.
    """
    daily_volume = [0] * DAILY_BUCKETS
    weekday_counts = [0] * 7
    today = now.date()

    for item in items:
        if item.published_at is None:
            daily_volume[-1] += 1
            continue
        published = _as_utc(item.published_at)
        days_ago = max((today - published.date()).days, 0)
        if days_ago < DAILY_BUCKETS:
            daily_volume[DAILY_BUCKETS - 1 - days_ago] += 1
        weekday_counts[published.weekday()] += 1

    ranked = sorted(
        (index for index in range(7) if weekday_counts[index]),
        key=lambda index: (-weekday_counts[index], index),
    )

    return TemporalDataDTO(
        daily_volume=daily_volume,
        peak_days=[WEEKDAY_NAMES[index] for index in ranked[:PEAK_DAY_COUNT]],
        direction=direction_for_growth(growth_percent),
        weekly_growth=growth_percent,
    )


# =============================================================================
# SUMMARY
# =============================================================================


def build_summary(keyword: str, items: list[ScoredItemDTO], period: str, now: datetime) -> TrendSummaryDTO | None:
    """
    Aggregate one keyword's items into a summary.

    Returns:
        TrendSummaryDTO, or None when items is empty
    """
    if not items:
        return None

    growth = compute_growth(items, period, now)
    return TrendSummaryDTO(
        keyword=keyword,
        score=round(sum(item.analysis.overall_score for item in items) / len(items), 1),
        sentiment=round(sum(item.sentiment for item in items) / len(items), 3),
        volume=sum(item.engagement for item in items),
        growth_percent=growth,
        sources=[item.source for item in items if item.source],
        items=items,
        temporal=build_temporal(items, growth, now),
    )
