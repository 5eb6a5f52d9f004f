"""
Trends DTOs.

These Pydantic v2 BaseModels define the shapes exchanged between the cache,
the orchestrator and the UI query surface. They serve as contracts - once
defined, fields cannot be renamed or removed without UI coordination.

Cached payloads are lists of TrendSummaryDTO; the cache stores them as-is and
hands out deep copies, so every model here must stay JSON round-trippable
(the snapshot store serializes them with model_dump(mode="json")).
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from viralboard.core.enums import AnalysisDepth, Period, SourcePriority, TrendDirection
from viralboard.trends import conf

logger = logging.getLogger("viralboard.trends.dto")

# Source label carried by degraded placeholder data. Never used by a real provider.
PLACEHOLDER_SOURCE = "placeholder"


# =============================================================================
# SEARCH CONFIG
# =============================================================================


class TrendSearchConfig(BaseModel):
    """
    Request shape for scrape_advanced_trends / force_refresh.

    Every field except keywords and period participates in the cache
    metadata fingerprint.
    """
    keywords: list[str] = Field(min_length=1)
    period: Period = Period.SEVEN_DAYS
    analysis_depth: AnalysisDepth = AnalysisDepth.DETAILED
    include_full_content: bool = True
    source_priority: SourcePriority = SourcePriority.ALL
    min_engagement: int = Field(default=10, ge=0)
    max_items_per_source: int = Field(default=20, ge=1, le=100)
    include_videos: bool = False
    video_transcription: bool = False

    @field_validator("keywords")
    @classmethod
    def _clean_keywords(cls, value: list[str]) -> list[str]:
        cleaned = [keyword.strip() for keyword in value if keyword and keyword.strip()]
        if not cleaned:
            raise ValueError("at least one non-empty keyword is required")
        max_keywords = conf.get_max_keywords()
        if len(cleaned) > max_keywords:
            logger.warning(
                "Truncating keyword batch",
                extra={"requested": len(cleaned), "max_keywords": max_keywords},
            )
            cleaned = cleaned[:max_keywords]
        return cleaned

    def cache_metadata(self) -> dict[str, Any]:
        """Options that disambiguate cache keys for the same keyword/period."""
        return self.model_dump(mode="json", exclude={"keywords", "period"})


# =============================================================================
# SCORING
# =============================================================================


class ViralInsightsDTO(BaseModel):
    """Advisory text derived from sub-score thresholds."""
    emotions: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ViralAnalysisDTO(BaseModel):
    """Five sub-scores plus the weighted overall score, all on a 0-10 scale."""
    emotion_score: float = Field(ge=0, le=10)
    clarity_score: float = Field(ge=0, le=10)
    carousel_potential: float = Field(ge=0, le=10)
    trend_score: float = Field(ge=0, le=10)
    authority_score: float = Field(ge=0, le=10)
    overall_score: float = Field(ge=0, le=10)
    insights: ViralInsightsDTO = Field(default_factory=ViralInsightsDTO)


class ScoredItemDTO(BaseModel):
    """One collected content unit plus its viral analysis."""
    id: str
    title: str
    snippet: str = ""
    url: str = ""
    source: str = ""
    published_at: datetime | None = None
    engagement: int = Field(default=0, ge=0)
    sentiment: float = Field(default=0.5, ge=0, le=1)
    image_count: int = Field(default=0, ge=0)
    analysis: ViralAnalysisDTO


# =============================================================================
# TREND SUMMARIES
# =============================================================================


class TemporalDataDTO(BaseModel):
    """Temporal breakdown of one keyword's items."""
    daily_volume: list[int] = Field(default_factory=lambda: [0] * 30)
    peak_days: list[str] = Field(default_factory=list)
    direction: TrendDirection = TrendDirection.STABLE
    weekly_growth: float = 0.0


class TrendSummaryDTO(BaseModel):
    """
    One aggregated topic.

    is_placeholder marks degraded fallback data produced when live collection
    failed; such summaries always carry PLACEHOLDER_SOURCE in sources.
    """
    keyword: str
    score: float = Field(ge=0, le=10)
    sentiment: float = Field(ge=0, le=1)
    volume: int = Field(ge=0)
    growth_percent: float = 0.0
    sources: list[str] = Field(default_factory=list)
    items: list[ScoredItemDTO] = Field(default_factory=list)
    temporal: TemporalDataDTO | None = None
    is_placeholder: bool = False
    cached: bool = False

    @field_validator("sources")
    @classmethod
    def _unique_sources(cls, value: list[str]) -> list[str]:
        return sorted(set(value))


# =============================================================================
# CACHE DIAGNOSTICS
# =============================================================================


class CacheStatsDTO(BaseModel):
    """Derived cache statistics. Computed on demand, never persisted."""
    total_entries: int = 0
    expired_entries: int = 0
    hits: int = 0
    misses: int = 0
    hit_rate_percent: float = 0.0
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None
    size_bytes: int = 0
    size_display: str = "0 B"


class CacheEntrySnapshotDTO(BaseModel):
    """One entry as shown in a diagnostic export (payload omitted)."""
    key: str
    keyword: str
    period: str
    created_at: datetime
    expires_at: datetime
    is_expired: bool
    metadata: dict[str, Any] = Field(default_factory=dict)
    data_size: int = 0


class CacheSnapshotDTO(BaseModel):
    """Diagnostic export of the whole cache."""
    stats: CacheStatsDTO
    config: dict[str, Any] = Field(default_factory=dict)
    entries: list[CacheEntrySnapshotDTO] = Field(default_factory=list)
    exported_at: datetime


class KeywordEntryDTO(BaseModel):
    """Valid cached data for one keyword/period."""
    period: str
    data: list[TrendSummaryDTO]
    expires_at: datetime


# =============================================================================
# PREDICTIONS
# =============================================================================


class TrendPredictionDTO(BaseModel):
    """Short-horizon score projection for one trend."""
    keyword: str
    current_score: float
    predicted_score: float = Field(ge=0, le=10)
    direction: TrendDirection
    confidence: float = Field(ge=0, le=1)
    timeframe: str = "7 days"
