"""
Short-horizon score projections for trend summaries.

A linear blend of growth, sentiment, volume and temporal direction applied
to the current score. volatility is supplied by the caller (0.0 for a
reproducible projection).
"""

from __future__ import annotations

import math

from viralboard.core.enums import TrendDirection
from viralboard.trends.dto import TrendPredictionDTO, TrendSummaryDTO

MIN_PREDICTED_SCORE = 0.1
MAX_PREDICTED_SCORE = 10.0
DIRECTION_CHANGE_THRESHOLD = 0.5
TEMPORAL_FACTOR = 0.2

BASE_CONFIDENCE = 0.4
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 0.95

PREDICTION_TIMEFRAME = "7 days"


def _temporal_factor(trend: TrendSummaryDTO) -> float:
    if trend.temporal is None:
        return 0.0
    if trend.temporal.direction == TrendDirection.RISING:
        return TEMPORAL_FACTOR
    if trend.temporal.direction == TrendDirection.FALLING:
        return -TEMPORAL_FACTOR
    return 0.0


def _confidence(trend: TrendSummaryDTO) -> float:
    volume_confidence = min(0.3, trend.volume / 100 * 0.3)
    source_confidence = min(0.2, len(trend.sources) / 5 * 0.2)
    sentiment_confidence = abs(trend.sentiment - 0.5) * 0.4
    temporal_confidence = 0.1 if trend.temporal is not None else 0.0

    confidence = BASE_CONFIDENCE + volume_confidence + source_confidence + sentiment_confidence + temporal_confidence
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


def predict_trend(trend: TrendSummaryDTO, volatility: float = 0.0) -> TrendPredictionDTO:
    """Projection for one summary."""
    growth_factor = trend.growth_percent / 100
    sentiment_factor = (trend.sentiment - 0.5) * 2
    volume_factor = math.log(trend.volume + 1) / 10

    projection = trend.score * (
        1
        + growth_factor * 0.3
        + sentiment_factor * 0.2
        + volume_factor * 0.1
        + _temporal_factor(trend)
        + volatility * 0.1
    )
    predicted = max(MIN_PREDICTED_SCORE, min(MAX_PREDICTED_SCORE, projection))

    change = predicted - trend.score
    if change > DIRECTION_CHANGE_THRESHOLD:
        direction = TrendDirection.RISING
    elif change < -DIRECTION_CHANGE_THRESHOLD:
        direction = TrendDirection.FALLING
    else:
        direction = TrendDirection.STABLE

    return TrendPredictionDTO(
        keyword=trend.keyword,
        current_score=trend.score,
        predicted_score=round(predicted, 1),
        direction=direction,
        confidence=round(_confidence(trend), 2),
        timeframe=PREDICTION_TIMEFRAME,
    )


def generate_predictions(trends: list[TrendSummaryDTO], volatility: float = 0.0) -> list[TrendPredictionDTO]:
    """Projections for a batch of summaries, in input order."""
    return [predict_trend(trend, volatility) for trend in trends]
