"""
Composite provider: one search fanned out to several sources.
"""

from __future__ import annotations

import logging
from typing import Any

from viralboard.core.enums import SourcePriority
from viralboard.trends.capture.base import ContentProvider, RawItem
from viralboard.trends.exceptions import ProviderError

logger = logging.getLogger(__name__)

# Provider names favoured by each source priority
SOURCE_PRIORITY_PROVIDERS: dict[str, tuple[str, ...]] = {
    SourcePriority.ALL.value: ("hackernews", "reddit"),
    SourcePriority.NEWS.value: ("hackernews",),
    SourcePriority.TECH.value: ("hackernews",),
    SourcePriority.SOCIAL.value: ("reddit",),
}


def provider_names_for_priority(source_priority: str | None) -> tuple[str, ...]:
    return SOURCE_PRIORITY_PROVIDERS.get(str(source_priority or SourcePriority.ALL.value), ())


class CompositeProvider(ContentProvider):
    """
    Queries every child provider and concatenates their items.

    When options carry a source_priority, only the matching children are
    queried (all of them if none match). A failing child is logged and
    skipped; ProviderError is raised only when every queried child fails.
    """

    name = "composite"

    def __init__(self, providers: list[ContentProvider]):
        self.providers = list(providers)

    def select(self, source_priority: str | None) -> list[ContentProvider]:
        wanted = provider_names_for_priority(source_priority)
        selected = [provider for provider in self.providers if provider.name in wanted]
        return selected or list(self.providers)

    def search(self, keywords: list[str], period: str, options: dict[str, Any] | None = None) -> list[RawItem]:
        options = options or {}
        providers = self.select(options.get("source_priority"))
        if not providers:
            raise ProviderError("No content providers configured")

        items: list[RawItem] = []
        errors: list[ProviderError] = []
        for provider in providers:
            try:
                items.extend(provider.search(keywords, period, options))
            except ProviderError as e:
                logger.warning(
                    "Provider failed, skipping",
                    extra={"provider": provider.name, "keywords": keywords, "error": str(e)},
                )
                errors.append(e)

        if len(errors) == len(providers):
            raise ProviderError(
                f"All providers failed: {'; '.join(str(e) for e in errors)}",
                original_error=errors[-1],
            )
        return items
