"""
Sentiment and engagement proxies for collected items.

Both are cheap lexical heuristics used when a provider reports no real
signal. They are deterministic, like the viral scoring engine.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from viralboard.trends.scoring import lexicons

NEUTRAL_SENTIMENT = 0.5
SENTIMENT_STEP = 0.05

MIN_ENGAGEMENT_ESTIMATE = 10
MAX_ENGAGEMENT_ESTIMATE = 100


def analyze_sentiment(text: str) -> float:
    """
    Lexicon sentiment of text on a 0-1 scale.

    Every occurrence of a positive term adds SENTIMENT_STEP, every
    occurrence of a negative term subtracts it. Empty text is neutral.
    """
    if not text:
        return NEUTRAL_SENTIMENT

    lowered = text.lower()
    sentiment = NEUTRAL_SENTIMENT
    for term in lexicons.POSITIVE_TERMS:
        sentiment += lowered.count(term) * SENTIMENT_STEP
    for term in lexicons.NEGATIVE_TERMS:
        sentiment -= lowered.count(term) * SENTIMENT_STEP

    return round(max(0.0, min(1.0, sentiment)), 3)


def estimate_engagement(title: str, snippet: str, content: str, url: str) -> int:
    """
    Engagement proxy for items whose provider exposes no counters.

    Args:
        title: Item title
        snippet: Short description
        content: Full body text (may be empty)
        url: Item URL

    Returns:
        Integer in [MIN_ENGAGEMENT_ESTIMATE, MAX_ENGAGEMENT_ESTIMATE]
    """
    engagement = 50

    if 30 <= len(title) <= 60:
        engagement += 20
    if len(snippet) > 100:
        engagement += 15
    if len(content) > 1000:
        engagement += 25

    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        host = ""
    if host and any(domain in host for domain in lexicons.ENGAGEMENT_AUTHORITY_DOMAINS):
        engagement += 30

    return max(MIN_ENGAGEMENT_ESTIMATE, min(MAX_ENGAGEMENT_ESTIMATE, engagement))
