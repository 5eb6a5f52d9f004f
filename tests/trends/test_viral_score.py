"""
Tests for the viral scoring engine.

Scores are deterministic, so most tests assert exact values.
"""

import itertools

import pytest

from viralboard.trends.scoring import lexicons
from viralboard.trends.scoring.viral_score import (
    SCORE_WEIGHTS,
    ScoringInput,
    score_authority,
    score_carousel_potential,
    score_clarity,
    score_emotion,
    score_item,
    score_items,
    score_trend,
)


class TestWeights:
    """Tests for the overall score weights."""

    def test_weights_sum_to_one(self):
        """Weights sum to exactly 1.0."""
        assert sum(SCORE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_weights_cover_every_sub_score(self):
        """Every sub-score has a weight."""
        assert set(SCORE_WEIGHTS) == {
            "emotion_score",
            "clarity_score",
            "carousel_potential",
            "trend_score",
            "authority_score",
        }


class TestScoreItem:
    """Tests for full item scoring."""

    def test_minimal_item(self):
        """A bare short title gets the documented baseline scores."""
        analysis = score_item(ScoringInput(title="Hello"), reference_year=2026)

        assert analysis.emotion_score == 5.0
        assert analysis.clarity_score == 3.5
        assert analysis.carousel_potential == 5.0
        assert analysis.trend_score == 5.0
        assert analysis.authority_score == 4.0
        assert analysis.overall_score == 4.6

    def test_deterministic(self):
        """Same input, same output."""
        item = ScoringInput(
            title="How AI is changing remote work in 2026",
            description="A new study shows 40% of teams automate reporting.",
            url="https://www.wired.com/story/ai-remote-work",
        )
        assert score_item(item, reference_year=2026) == score_item(item, reference_year=2026)

    def test_overall_is_weighted_sum_of_reported_scores(self):
        """Overall score is computed from the rounded sub-scores."""
        item = ScoringInput(
            title="10 tips: how to ship faster",
            description="Amazing and important results from research at mit.edu",
            url="https://news.mit.edu/2026/shipping",
        )
        analysis = score_item(item, reference_year=2026)
        expected = sum(getattr(analysis, name) * weight for name, weight in SCORE_WEIGHTS.items())
        assert analysis.overall_score == round(expected, 1)

    def test_all_scores_within_bounds(self):
        """Extreme input still yields scores in [0, 10]."""
        item = ScoringInput(
            title="!!!" + " ".join(lexicons.EMOTION_HIGH).upper(),
            description=" ".join(lexicons.TRENDING_TERMS),
            text="1. 2. 3. 4. 5. 6. 7. 8. first second third 50% " * 200,
            url="https://www.techcrunch.com/",
            image_count=50,
        )
        analysis = score_item(item, reference_year=2026)
        for name in SCORE_WEIGHTS:
            assert 0.0 <= getattr(analysis, name) <= 10.0
        assert 0.0 <= analysis.overall_score <= 10.0

    def test_empty_title_does_not_raise(self):
        """Malformed input degrades scores instead of raising."""
        analysis = score_item(ScoringInput(title="", url="::not a url::"), reference_year=2026)
        assert 0.0 <= analysis.overall_score <= 10.0

    def test_score_items_preserves_order(self):
        """Batch scoring keeps input order."""
        items = [ScoringInput(title="Hello"), ScoringInput(title="How to build a better product today")]
        analyses = score_items(items, reference_year=2026)
        assert [a.clarity_score for a in analyses] == [3.5, 7.8]


def _sweep_inputs():
    titles = [
        "",
        "x" * 19,
        "x" * 20,
        "How to " + "a" * 23,
        "Why teams fail: " + "b" * 44,
        "10 tips " + "c" * 72,
        "Amazing URGENT paradigma " + "d" * 70,
        " ".join(lexicons.EMOTION_HIGH + lexicons.EMOTION_LOW),
    ]
    bodies = [
        "",
        "plain words " * 41 + "abcd",
        "1. first 2. second " * 26,
        "y" * 500,
        "y" * 501,
        "z" * 3000,
        "z" * 3001,
        " ".join(lexicons.TRENDING_TERMS + lexicons.NOVELTY_TERMS + lexicons.FUTURITY_TERMS) + " 42% 2026",
    ]
    urls = [
        "",
        f"https://www.{lexicons.HIGH_AUTHORITY_DOMAINS[0]}/story",
        f"https://{lexicons.MEDIUM_AUTHORITY_DOMAINS[0]}/post",
        "https://someone.blogspot.com/entry",
        "example.com/no-scheme",
        "::garbage::",
        "http://[::1",
    ]
    image_counts = [-5, 0, 3, 10_000]

    cases = []
    for index, (title, body, url) in enumerate(itertools.product(titles, bodies, urls)):
        # Alternate the body between description and full text
        if index % 2:
            item = ScoringInput(title=title, text=body, url=url, image_count=image_counts[index % 4])
        else:
            item = ScoringInput(title=title, description=body, url=url, image_count=image_counts[index % 4])
        cases.append(item)
    return cases


@pytest.mark.parametrize("item", _sweep_inputs())
class TestScoreInvariantsSweep:
    """Invariants checked over a grid of generated inputs."""

    def test_sub_scores_within_bounds(self, item):
        """Every sub-score and the overall score stay in [0, 10]."""
        analysis = score_item(item, reference_year=2026)
        for name in SCORE_WEIGHTS:
            assert 0.0 <= getattr(analysis, name) <= 10.0
        assert 0.0 <= analysis.overall_score <= 10.0

    def test_overall_is_weighted_sum(self, item):
        """Overall is the weighted sum of the reported sub-scores."""
        analysis = score_item(item, reference_year=2026)
        expected = (
            analysis.emotion_score * 0.25
            + analysis.clarity_score * 0.20
            + analysis.carousel_potential * 0.25
            + analysis.trend_score * 0.20
            + analysis.authority_score * 0.10
        )
        assert abs(analysis.overall_score - expected) <= 0.05 + 1e-9


class TestEmotionScore:
    """Tests for the emotion sub-score."""

    def test_high_emotion_terms(self):
        """Each distinct high-emotion term adds 1.5."""
        item = ScoringInput(title="Hello", description="amazing and incredible")
        assert score_emotion(item) == 8.0

    def test_low_emotion_terms(self):
        """Low-emotion terms subtract 0.5 each."""
        item = ScoringInput(title="A basic simple common thing")
        assert score_emotion(item) == 3.5

    def test_clamped_at_ten(self):
        """Many high-emotion terms clamp at 10."""
        item = ScoringInput(title="Hello", description=" ".join(lexicons.EMOTION_HIGH))
        assert score_emotion(item) == 10.0


class TestClarityScore:
    """Tests for the clarity sub-score."""

    def test_ideal_length_actionable_title(self):
        """30-60 chars (+2.0) with an actionable term (+0.8)."""
        assert score_clarity(ScoringInput(title="How to build a better product today")) == 7.8

    def test_short_title_penalized(self):
        """Titles under 20 chars lose 1.5."""
        assert score_clarity(ScoringInput(title="Hello")) == 3.5


class TestCarouselPotential:
    """Tests for the carousel sub-score."""

    def test_exactly_500_chars_gets_no_length_bonus(self):
        """The middle band starts above 500 chars."""
        assert score_carousel_potential(ScoringInput(title="Hello", text="x" * 500)) == 5.0

    def test_middle_length_band(self):
        """500 < len <= 3000 adds 1.5."""
        assert score_carousel_potential(ScoringInput(title="Hello", text="x" * 1000)) == 6.5

    def test_long_body_band(self):
        """len > 3000 adds 2.0."""
        assert score_carousel_potential(ScoringInput(title="Hello", text="x" * 3200)) == 7.0

    def test_description_used_when_no_text(self):
        """Body falls back to description."""
        assert score_carousel_potential(ScoringInput(title="Hello", description="x" * 1000)) == 6.5


class TestTrendScore:
    """Tests for the trend sub-score."""

    def test_reference_year_bonus(self):
        """Mentioning the reference year adds 0.5."""
        item = ScoringInput(title="Hello 2026")
        assert score_trend(item, 2026) == 5.5
        assert score_trend(item, 2030) == 5.0


class TestAuthorityScore:
    """Tests for the authority sub-score."""

    def test_high_authority_domain(self):
        """High-authority host +3.0, https +0.5, www +0.3."""
        item = ScoringInput(title="Hello", url="https://www.techcrunch.com/x")
        assert score_authority(item) == 8.8

    def test_blog_host_penalized(self):
        """Blog-platform hosts lose 2.0."""
        item = ScoringInput(title="Hello", url="http://myblog.example.com/post")
        assert score_authority(item) == 3.0

    def test_malformed_url_penalized(self):
        """Unparseable URL loses 1.0."""
        assert score_authority(ScoringInput(title="Hello", url="not a url")) == 4.0

    def test_missing_url_penalized(self):
        """Missing URL is treated like a malformed one."""
        assert score_authority(ScoringInput(title="Hello")) == 4.0


class TestInsights:
    """Tests for advisory insights."""

    def test_low_emotion_flagged(self):
        """Low emotion adds a weakness and a recommendation."""
        analysis = score_item(ScoringInput(title="A basic simple common thing"), reference_year=2026)
        assert "low emotional impact" in analysis.insights.emotions
        assert "Lacks emotional hooks" in analysis.insights.weaknesses

    def test_strong_authority_is_a_strength(self):
        """Authority >= 7 is listed as a strength."""
        analysis = score_item(
            ScoringInput(title="Hello", url="https://www.techcrunch.com/x"),
            reference_year=2026,
        )
        assert "Trustworthy source" in analysis.insights.strengths
