"""
Degraded placeholder summaries.

Served when live collection fails so the UI always has something to show.
Placeholders are clearly tagged: is_placeholder=True and the only source is
PLACEHOLDER_SOURCE. Jitter is derived from the keyword hash, so the same
keyword always gets the same placeholder.
"""

from __future__ import annotations

import hashlib

from viralboard.core.enums import AnalysisDepth
from viralboard.trends.dto import (
    PLACEHOLDER_SOURCE,
    ScoredItemDTO,
    TemporalDataDTO,
    TrendSummaryDTO,
    ViralAnalysisDTO,
    ViralInsightsDTO,
)

PLACEHOLDER_BASE_SCORE = 5.0
PLACEHOLDER_MAX_JITTER = 0.3

PLACEHOLDER_TITLES = (
    "Latest Market Analysis",
    "Industry Impact Report",
)

PLACEHOLDER_DESCRIPTIONS = {
    AnalysisDepth.BASIC.value: "Overview of {keyword} trends and basic market implications",
    AnalysisDepth.DETAILED.value: "Analysis of {keyword} trends, market implications and expert insights",
    AnalysisDepth.COMPREHENSIVE.value: (
        "In-depth analysis of {keyword} trends, market implications, expert insights "
        "and sentiment"
    ),
}


def _keyword_hash(keyword: str) -> int:
    return int(hashlib.sha256(keyword.lower().encode("utf-8")).hexdigest()[:8], 16)


def placeholder_score(keyword: str) -> float:
    """PLACEHOLDER_BASE_SCORE plus a keyword-stable jitter within +/-PLACEHOLDER_MAX_JITTER."""
    fraction = _keyword_hash(keyword) / 0xFFFFFFFF
    jitter = (fraction * 2 - 1) * PLACEHOLDER_MAX_JITTER
    return round(PLACEHOLDER_BASE_SCORE + jitter, 1)


def build_placeholder(keyword: str, analysis_depth: str | None = None) -> TrendSummaryDTO:
    """One degraded summary for keyword, carrying 1-2 placeholder items."""
    score = placeholder_score(keyword)
    digest = _keyword_hash(keyword)
    description = PLACEHOLDER_DESCRIPTIONS.get(
        str(analysis_depth or AnalysisDepth.DETAILED.value),
        PLACEHOLDER_DESCRIPTIONS[AnalysisDepth.DETAILED.value],
    ).format(keyword=keyword)

    analysis = ViralAnalysisDTO(
        emotion_score=score,
        clarity_score=score,
        carousel_potential=score,
        trend_score=score,
        authority_score=score,
        overall_score=score,
        insights=ViralInsightsDTO(weaknesses=["Live data unavailable; showing placeholder"]),
    )
    items = [
        ScoredItemDTO(
            id=f"placeholder-{digest:08x}-{index}",
            title=f"{keyword}: {PLACEHOLDER_TITLES[index]}",
            snippet=description,
            source=PLACEHOLDER_SOURCE,
            analysis=analysis,
        )
        for index in range(1 + digest % 2)
    ]

    return TrendSummaryDTO(
        keyword=keyword,
        score=score,
        sentiment=0.5,
        volume=0,
        growth_percent=0.0,
        sources=[PLACEHOLDER_SOURCE],
        items=items,
        temporal=TemporalDataDTO(),
        is_placeholder=True,
    )
