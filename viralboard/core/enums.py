"""
Viralboard domain enums.

All enums are defined as Django TextChoices so their values are plain
lowercase strings. Pydantic v2 accepts them directly because TextChoices
inherit from both str and Enum.
"""

from django.db import models


class Period(models.TextChoices):
    """Time window a trend search covers."""
    ONE_DAY = "1d", "Last 24 hours"
    THREE_DAYS = "3d", "Last 3 days"
    SEVEN_DAYS = "7d", "Last 7 days"
    FOURTEEN_DAYS = "14d", "Last 14 days"
    THIRTY_DAYS = "30d", "Last 30 days"


class AnalysisDepth(models.TextChoices):
    """How deep a trend search digs per keyword."""
    BASIC = "basic", "Basic"
    DETAILED = "detailed", "Detailed"
    COMPREHENSIVE = "comprehensive", "Comprehensive"


class SourcePriority(models.TextChoices):
    """Which family of sources a search favours."""
    ALL = "all", "All"
    NEWS = "news", "News"
    SOCIAL = "social", "Social"
    TECH = "tech", "Tech"


class TrendDirection(models.TextChoices):
    """Direction tag derived from growth percent."""
    RISING = "rising", "Rising"
    FALLING = "falling", "Falling"
    STABLE = "stable", "Stable"


# Hours covered by each period window
PERIOD_HOURS: dict[str, int] = {
    "1d": 24,
    "3d": 72,
    "7d": 168,
    "14d": 336,
    "30d": 720,
}
