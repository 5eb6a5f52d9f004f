"""
Viral potential scoring engine.

Maps one content item to five sub-scores and a weighted overall score.

CRITICAL INVARIANTS:
- Pure and deterministic: no network, no randomness, no clock reads unless
  reference_year is omitted (then the current UTC year is used)
- Every sub-score starts at BASE_SCORE, is adjusted, clamped to [0, 10]
  and rounded to one decimal
- overall = weighted sum of the reported sub-scores, rounded to one decimal
- Weights sum to exactly 1.0
- Scoring never raises; missing inputs contribute no adjustment and a
  malformed URL degrades the authority score

Display jitter (if any) belongs in presentation code, never here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import urlsplit

from viralboard.trends.dto import ViralAnalysisDTO, ViralInsightsDTO
from viralboard.trends.scoring import lexicons
from viralboard.trends.scoring.lexicons import count_terms

logger = logging.getLogger(__name__)

BASE_SCORE = 5.0
MIN_SCORE = 0.0
MAX_SCORE = 10.0

# Overall score weights. Changing the distribution is a behavior change.
SCORE_WEIGHTS: dict[str, float] = {
    "emotion_score": 0.25,
    "clarity_score": 0.20,
    "carousel_potential": 0.25,
    "trend_score": 0.20,
    "authority_score": 0.10,
}

# Threshold rules for the advisory insights
STRONG_THRESHOLD = 7.0
MODERATE_THRESHOLD = 5.0

_CAPS_PATTERN = re.compile(r"[A-Z]{2,}")
_DIGITS_PATTERN = re.compile(r"\d+")


@dataclass
class ScoringInput:
    """
    Content fields the engine reads.

    Everything except title is optional; text falls back to description
    wherever a body is needed.
    """

    title: str
    description: str = ""
    text: str = ""
    url: str = ""
    image_count: int = 0


def _clamp(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def _finalize(value: float) -> float:
    return round(_clamp(value), 1)


# =============================================================================
# SUB-SCORES
# =============================================================================


def score_emotion(item: ScoringInput) -> float:
    """Emotional charge of title + body."""
    content = f"{item.title} {item.description} {item.text}".lower()
    score = BASE_SCORE

    score += count_terms(content, lexicons.EMOTION_HIGH) * 1.5
    score += count_terms(content, lexicons.EMOTION_MEDIUM) * 0.8
    score -= count_terms(content, lexicons.EMOTION_LOW) * 0.5

    score += min(content.count("!") * 0.3, 1.0)

    caps_tokens = len(_CAPS_PATTERN.findall(item.title))
    score += min(caps_tokens * 0.2, 0.8)

    return _finalize(score)


def score_clarity(item: ScoringInput) -> float:
    """How clear and actionable the title reads."""
    title = item.title
    lowered = title.lower()
    score = BASE_SCORE

    if 30 <= len(title) <= 60:
        score += 2.0
    elif len(title) < 20 or len(title) > 80:
        score -= 1.5

    score += min(len(_DIGITS_PATTERN.findall(title)) * 0.5, 1.5)
    score += min(count_terms(lowered, lexicons.ACTIONABLE_TERMS) * 0.8, 2.0)
    score -= count_terms(lowered, lexicons.JARGON_TERMS) * 0.5

    if ":" in title or "—" in title or "-" in title:
        score += 0.8

    return _finalize(score)


def score_carousel_potential(item: ScoringInput) -> float:
    """How easily the body splits into carousel slides."""
    body = item.text or item.description
    score = BASE_SCORE

    score += min(len(lexicons.LIST_MARKER_PATTERN.findall(body)) * 0.3, 2.0)
    score += min(len(lexicons.TRANSITION_PATTERN.findall(body)) * 0.4, 1.5)

    if 500 < len(body) <= 3000:
        score += 1.5
    elif len(body) > 3000:
        score += 2.0

    score += min(max(item.image_count, 0) * 0.2, 1.0)
    score += min(len(lexicons.STATISTIC_PATTERN.findall(body)) * 0.3, 1.5)
    score += count_terms(item.title.lower(), lexicons.LIST_TITLE_TERMS) * 1.0

    return _finalize(score)


def score_trend(item: ScoringInput, reference_year: int) -> float:
    """How current and forward-looking the topic is."""
    content = f"{item.title} {item.description} {item.text}".lower()
    score = BASE_SCORE

    score += min(count_terms(content, lexicons.TRENDING_TERMS) * 0.8, 3.0)
    score += min(count_terms(content, lexicons.NOVELTY_TERMS) * 0.5, 2.0)

    recent_years = (str(reference_year), str(reference_year - 1))
    score += sum(1 for year in recent_years if year in content) * 0.5

    score += min(count_terms(content, lexicons.FUTURITY_TERMS) * 0.3, 1.0)

    return _finalize(score)


def _parse_host(url: str) -> str | None:
    """Lowercased host of url, or None when the URL is unusable."""
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    return parts.hostname.lower()


def score_authority(item: ScoringInput) -> float:
    """Credibility of the source domain and authority cues in the text."""
    score = BASE_SCORE
    host = _parse_host(item.url)

    if host is None:
        score -= 1.0
    else:
        if any(domain in host for domain in lexicons.HIGH_AUTHORITY_DOMAINS):
            score += 3.0
        elif any(domain in host for domain in lexicons.MEDIUM_AUTHORITY_DOMAINS):
            score += 1.5
        elif any(marker in host for marker in lexicons.LOW_AUTHORITY_MARKERS):
            score -= 2.0

        if item.url.strip().lower().startswith("https://"):
            score += 0.5
        if host.startswith("www."):
            score += 0.3

    content = f"{item.title} {item.description}".lower()
    score += min(count_terms(content, lexicons.AUTHORITY_TERMS) * 0.4, 1.5)

    return _finalize(score)


# =============================================================================
# OVERALL + INSIGHTS
# =============================================================================


def weighted_overall(sub_scores: dict[str, float]) -> float:
    """
    Weighted overall score from the five sub-scores.

    Args:
        sub_scores: Mapping with every key of SCORE_WEIGHTS

    Returns:
        Weighted sum clamped to [0, 10], rounded to one decimal
    """
    total = sum(sub_scores[name] * weight for name, weight in SCORE_WEIGHTS.items())
    return _finalize(total)


def build_insights(sub_scores: dict[str, float]) -> ViralInsightsDTO:
    """Advisory tags from threshold rules on the sub-scores."""
    insights = ViralInsightsDTO()

    emotion = sub_scores["emotion_score"]
    if emotion >= STRONG_THRESHOLD:
        insights.emotions.append("high emotional impact")
        insights.strengths.append("Emotionally engaging content")
    elif emotion >= MODERATE_THRESHOLD:
        insights.emotions.append("moderate emotional impact")
    else:
        insights.emotions.append("low emotional impact")
        insights.weaknesses.append("Lacks emotional hooks")
        insights.recommendations.append("Use more impactful wording")

    if sub_scores["clarity_score"] >= STRONG_THRESHOLD:
        insights.strengths.append("Clear, direct title")
    else:
        insights.weaknesses.append("Title could be clearer")
        insights.recommendations.append("Simplify the title language")

    if sub_scores["carousel_potential"] >= STRONG_THRESHOLD:
        insights.strengths.append("Excellent carousel material")
    else:
        insights.recommendations.append("Structure the content into topics")

    if sub_scores["trend_score"] >= STRONG_THRESHOLD:
        insights.strengths.append("Trending subject")
    else:
        insights.recommendations.append("Connect the piece to current trends")

    if sub_scores["authority_score"] >= STRONG_THRESHOLD:
        insights.strengths.append("Trustworthy source")
    else:
        insights.weaknesses.append("Low-authority source")

    return insights


def score_item(item: ScoringInput, *, reference_year: int | None = None) -> ViralAnalysisDTO:
    """
    Compute the viral analysis for one content item.

    Args:
        item: Content to score
        reference_year: Year treated as "current" by the trend score
            (default: current UTC year)

    Returns:
        ViralAnalysisDTO with five sub-scores, overall score and insights
    """
    year = reference_year if reference_year is not None else datetime.now(timezone.utc).year

    sub_scores = {
        "emotion_score": score_emotion(item),
        "clarity_score": score_clarity(item),
        "carousel_potential": score_carousel_potential(item),
        "trend_score": score_trend(item, year),
        "authority_score": score_authority(item),
    }
    overall = weighted_overall(sub_scores)

    logger.debug("Scored item", extra={"title": item.title[:80], "overall": overall})

    return ViralAnalysisDTO(
        **sub_scores,
        overall_score=overall,
        insights=build_insights(sub_scores),
    )


def score_items(
    items: list[ScoringInput],
    *,
    reference_year: int | None = None,
) -> list[ViralAnalysisDTO]:
    """Score a batch of items, preserving order."""
    return [score_item(item, reference_year=reference_year) for item in items]
