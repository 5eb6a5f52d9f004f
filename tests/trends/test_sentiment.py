"""
Tests for sentiment and engagement proxies.
"""

from viralboard.trends.scoring.sentiment import analyze_sentiment, estimate_engagement


class TestAnalyzeSentiment:
    """Tests for lexicon sentiment."""

    def test_empty_text_is_neutral(self):
        """Empty text scores 0.5."""
        assert analyze_sentiment("") == 0.5

    def test_positive_occurrences_add(self):
        """Every occurrence counts, not just distinct terms."""
        assert analyze_sentiment("great great") == 0.6

    def test_negative_occurrences_subtract(self):
        """Negative terms pull below neutral."""
        assert analyze_sentiment("terrible and awful") == 0.4

    def test_clamped_to_zero(self):
        """Sentiment never drops below 0."""
        assert analyze_sentiment("bad " * 20) == 0.0

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert analyze_sentiment("GREAT") == analyze_sentiment("great")


class TestEstimateEngagement:
    """Tests for the engagement estimate."""

    def test_baseline(self):
        """No signals gives the 50 baseline."""
        assert estimate_engagement("", "", "", "") == 50

    def test_authority_news_domain(self):
        """Authority news hosts add 30."""
        assert estimate_engagement("", "", "", "https://www.bbc.com/news/1") == 80

    def test_capped_at_100(self):
        """All bonuses together cap at 100."""
        engagement = estimate_engagement(
            "x" * 35,
            "y" * 101,
            "z" * 1001,
            "https://techcrunch.com/story",
        )
        assert engagement == 100

    def test_malformed_url_ignored(self):
        """A malformed URL just gets no domain bonus."""
        assert estimate_engagement("", "", "", "http://[broken") == 50
