"""
Reddit Search Provider.

Uses Reddit's public search.json endpoint. No authentication required.

FRAGILITY: Low - Reddit JSON endpoints are stable.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from viralboard.core.guardrails import require_live_providers_enabled
from viralboard.trends.capture.base import ContentProvider, RawItem, fetch_json

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.reddit.com/search.json"

# Reddit only understands coarse time filters
PERIOD_TIME_FILTER = {
    "1d": "day",
    "3d": "week",
    "7d": "week",
    "14d": "month",
    "30d": "month",
}


class RedditSearchProvider(ContentProvider):
    """Hot posts across Reddit matching the keywords."""

    name = "reddit"

    def search(self, keywords: list[str], period: str, options: dict[str, Any] | None = None) -> list[RawItem]:
        require_live_providers_enabled()
        options = options or {}

        params = {
            "q": " ".join(keywords),
            "sort": "hot",
            "t": PERIOD_TIME_FILTER.get(str(period), "week"),
            "limit": options.get("max_items_per_source", 20),
        }
        data = fetch_json(self.name, SEARCH_URL, params)

        items = []
        for post_data in data.get("data", {}).get("children", []):
            post = post_data.get("data", {})
            if not post or not post.get("title"):
                continue

            images = post.get("preview", {}).get("images", []) if isinstance(post.get("preview"), dict) else []
            created = post.get("created_utc")

            items.append(RawItem(
                title=post["title"],
                url=f"https://reddit.com{post['permalink']}" if post.get("permalink") else post.get("url", ""),
                snippet=(post.get("selftext") or "")[:300],
                source=self.name,
                published_at=datetime.fromtimestamp(created, tz=timezone.utc) if created else None,
                item_id=f"reddit-{post.get('id', '')}",
                text=post.get("selftext") or "",
                engagement=(post.get("score") or 0) + (post.get("num_comments") or 0),
                image_count=len(images),
                video_count=1 if post.get("is_video") else 0,
                keywords=list(keywords),
            ))

        logger.info(
            "Reddit search completed",
            extra={"keywords": keywords, "item_count": len(items)},
        )
        return items
