"""
Viral scoring engine.

Stateless and reentrant: every function here is a pure mapping from
content fields to scores.
"""

from viralboard.trends.scoring.sentiment import analyze_sentiment, estimate_engagement
from viralboard.trends.scoring.viral_score import (
    SCORE_WEIGHTS,
    ScoringInput,
    score_item,
    score_items,
)

__all__ = [
    "SCORE_WEIGHTS",
    "ScoringInput",
    "analyze_sentiment",
    "estimate_engagement",
    "score_item",
    "score_items",
]
