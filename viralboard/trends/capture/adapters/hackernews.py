"""
Hacker News Search Provider.

Uses the public Algolia HN search API. No authentication required.

FRAGILITY: Low - Algolia's HN endpoint has been stable for years.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

from viralboard.core.enums import PERIOD_HOURS
from viralboard.core.guardrails import require_live_providers_enabled
from viralboard.trends.capture.base import ContentProvider, RawItem, fetch_json

logger = logging.getLogger(__name__)

SEARCH_URL = "https://hn.algolia.com/api/v1/search"
ITEM_URL = "https://news.ycombinator.com/item?id={id}"


class HackerNewsProvider(ContentProvider):
    """Stories from Hacker News matching the keywords within the period."""

    name = "hackernews"

    def __init__(self, clock: Callable[[], float] | None = None):
        self._clock = clock or time.time

    def search(self, keywords: list[str], period: str, options: dict[str, Any] | None = None) -> list[RawItem]:
        require_live_providers_enabled()
        options = options or {}

        since = int(self._clock()) - PERIOD_HOURS.get(str(period), 168) * 3600
        params = {
            "query": " ".join(keywords),
            "tags": "story",
            "hitsPerPage": options.get("max_items_per_source", 20),
            "numericFilters": f"created_at_i>{since}",
        }
        data = fetch_json(self.name, SEARCH_URL, params)

        items = []
        for hit in data.get("hits", []):
            title = hit.get("title") or hit.get("story_title") or ""
            if not title:
                continue
            object_id = str(hit.get("objectID", ""))
            created = hit.get("created_at_i")
            engagement = (hit.get("points") or 0) + (hit.get("num_comments") or 0)

            items.append(RawItem(
                title=title,
                url=hit.get("url") or ITEM_URL.format(id=object_id),
                snippet=(hit.get("story_text") or "")[:300],
                source=self.name,
                published_at=datetime.fromtimestamp(created, tz=timezone.utc) if created else None,
                item_id=f"hn-{object_id}",
                text=hit.get("story_text") or "",
                engagement=engagement,
                keywords=list(keywords),
            ))

        logger.info(
            "Hacker News search completed",
            extra={"keywords": keywords, "item_count": len(items)},
        )
        return items
