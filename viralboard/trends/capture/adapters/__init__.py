"""
Content providers for the supported sources.

Each provider implements ContentProvider for one source.
"""

from viralboard.trends.capture.adapters.hackernews import HackerNewsProvider
from viralboard.trends.capture.adapters.reddit_search import RedditSearchProvider
from viralboard.trends.capture.base import ContentProvider

# Registry of available providers by name
PROVIDER_REGISTRY: dict[str, type[ContentProvider]] = {
    "hackernews": HackerNewsProvider,
    "reddit": RedditSearchProvider,
}

__all__ = [
    "PROVIDER_REGISTRY",
    "HackerNewsProvider",
    "RedditSearchProvider",
]
