"""
Content capture: providers that collect raw items for keywords.
"""

from __future__ import annotations

from viralboard.trends import conf
from viralboard.trends.capture.adapters import PROVIDER_REGISTRY, HackerNewsProvider, RedditSearchProvider
from viralboard.trends.capture.base import ContentProvider, RawItem
from viralboard.trends.capture.composite import (
    SOURCE_PRIORITY_PROVIDERS,
    CompositeProvider,
    provider_names_for_priority,
)
from viralboard.trends.exceptions import ProviderError


def build_provider(names: list[str] | None = None) -> CompositeProvider:
    """
    Build a composite provider from registry names.

    Args:
        names: Provider names (default: TRENDS_DEFAULT_PROVIDERS)

    Raises:
        ValueError: If a name is not registered
    """
    names = names if names is not None else conf.get_default_providers()
    unknown = [name for name in names if name not in PROVIDER_REGISTRY]
    if unknown:
        raise ValueError(f"Unknown provider(s): {', '.join(unknown)}")
    return CompositeProvider([PROVIDER_REGISTRY[name]() for name in names])


__all__ = [
    "PROVIDER_REGISTRY",
    "SOURCE_PRIORITY_PROVIDERS",
    "CompositeProvider",
    "ContentProvider",
    "HackerNewsProvider",
    "ProviderError",
    "RawItem",
    "RedditSearchProvider",
    "build_provider",
    "provider_names_for_priority",
]
