"""
Base provider interface for content collection.

A provider turns (keywords, period, options) into RawItems. The orchestrator
scores and aggregates them; providers never see the cache.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import requests

from viralboard.trends.exceptions import ProviderError

logger = logging.getLogger(__name__)

# Some public endpoints (Reddit) reject requests without a User-Agent
USER_AGENT = "viralboard-trends/1.0 (trend detection research)"

DEFAULT_REQUEST_TIMEOUT = 10


@dataclass
class RawItem:
    """
    One content unit as returned by a provider.

    engagement is None when the platform exposes no counters; the scorer
    then falls back to a lexical estimate.
    """

    title: str
    url: str = ""
    snippet: str = ""
    source: str = ""
    published_at: datetime | None = None
    item_id: str = ""
    text: str = ""
    engagement: int | None = None
    image_count: int = 0
    video_count: int = 0
    keywords: list[str] = field(default_factory=list)


class ContentProvider(ABC):
    """
    Abstract base class for content providers.

    Each source (Hacker News, Reddit, ...) has its own implementation.
    """

    name: str = ""

    @abstractmethod
    def search(self, keywords: list[str], period: str, options: dict[str, Any] | None = None) -> list[RawItem]:
        """
        Search the source for items matching keywords within period.

        Args:
            keywords: Keywords to search for
            period: Period value ("1d", "7d", ...)
            options: Search options (max_items_per_source, source_priority, ...)

        Returns:
            List of raw items, possibly empty.

        Raises:
            ProviderError: If the source cannot be queried.
        """
        pass


def fetch_json(provider: str, url: str, params: dict[str, Any], timeout: float = DEFAULT_REQUEST_TIMEOUT) -> dict:
    """
    GET a JSON document, logging PROVIDER_CALL_START/END.

    Raises:
        ProviderError: On transport failure, HTTP error or invalid JSON
    """
    call_start_ms = time.monotonic() * 1000
    logger.info("PROVIDER_CALL_START provider=%s url=%s", provider, url)

    try:
        response = requests.get(
            url,
            params=params,
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        duration_ms = int(time.monotonic() * 1000 - call_start_ms)
        logger.error(
            "PROVIDER_CALL_END provider=%s status=ERROR duration_ms=%d error=%s",
            provider,
            duration_ms,
            str(e),
        )
        raise ProviderError(f"{provider} request failed: {e}", original_error=e) from e
    except ValueError as e:
        duration_ms = int(time.monotonic() * 1000 - call_start_ms)
        logger.error(
            "PROVIDER_CALL_END provider=%s status=INVALID_JSON duration_ms=%d error=%s",
            provider,
            duration_ms,
            str(e),
        )
        raise ProviderError(f"{provider} returned invalid JSON", original_error=e) from e

    duration_ms = int(time.monotonic() * 1000 - call_start_ms)
    logger.info(
        "PROVIDER_CALL_END provider=%s status=OK duration_ms=%d",
        provider,
        duration_ms,
    )
    if not isinstance(data, dict):
        raise ProviderError(f"{provider} returned unexpected payload type {type(data).__name__}")
    return data
