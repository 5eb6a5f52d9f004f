"""
Tests for cache key derivation and period TTLs.
"""

import pytest

from viralboard.core.enums import Period
from viralboard.trends.cache.keys import (
    HASH_HEX_CHARS,
    PERIOD_TTL_SECONDS,
    get_cache_key,
    metadata_fingerprint,
    normalize_keyword,
    ttl_for_period,
)


class TestNormalizeKeyword:
    """Tests for keyword normalization."""

    def test_lowercases_and_collapses_whitespace(self):
        """Case and runs of whitespace are normalized."""
        assert normalize_keyword("  OpenAI   Tools ") == "openai tools"


class TestGetCacheKey:
    """Tests for cache key generation."""

    def test_key_is_16_hex_chars(self):
        """Keys are 64-bit hex digests."""
        key = get_cache_key("openai", "7d")
        assert len(key) == HASH_HEX_CHARS
        int(key, 16)

    def test_keyword_normalized(self):
        """Case/whitespace variants share a key."""
        assert get_cache_key(" OpenAI  Tools ", "7d") == get_cache_key("openai tools", "7d")

    def test_period_distinguishes(self):
        """Different periods, different keys."""
        assert get_cache_key("openai", "7d") != get_cache_key("openai", "1d")

    def test_period_enum_equals_value(self):
        """Period enum members key like their values."""
        assert get_cache_key("openai", Period.SEVEN_DAYS) == get_cache_key("openai", "7d")

    def test_metadata_order_independent(self):
        """Metadata key order does not matter."""
        a = get_cache_key("openai", "7d", {"analysis_depth": "basic", "min_engagement": 10})
        b = get_cache_key("openai", "7d", {"min_engagement": 10, "analysis_depth": "basic"})
        assert a == b

    def test_metadata_distinguishes(self):
        """Different options, different keys."""
        a = get_cache_key("openai", "7d", {"analysis_depth": "basic"})
        b = get_cache_key("openai", "7d", {"analysis_depth": "detailed"})
        assert a != b

    def test_none_and_empty_metadata_collide(self):
        """None and {} share a fingerprint and a key."""
        assert metadata_fingerprint(None) == metadata_fingerprint({})
        assert get_cache_key("openai", "7d") == get_cache_key("openai", "7d", {})


class TestTtlForPeriod:
    """Tests for period TTLs."""

    @pytest.mark.parametrize(
        "period,hours",
        [("1d", 2), ("3d", 4), ("7d", 8), ("14d", 12), ("30d", 24)],
    )
    def test_ttl_table(self, period, hours):
        """Larger windows cache longer."""
        assert ttl_for_period(period) == hours * 3600

    def test_every_period_has_a_ttl(self):
        """No Period value is missing from the table."""
        assert set(PERIOD_TTL_SECONDS) == set(Period.values)

    def test_unknown_period_raises(self):
        """Unknown periods are rejected."""
        with pytest.raises(ValueError):
            ttl_for_period("2w")
