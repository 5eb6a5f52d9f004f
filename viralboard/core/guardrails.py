"""
Provider spend guardrails.

Live search providers are rate limited and some are metered, so every
outbound provider call goes through a guard that fails fast unless live
calls were explicitly enabled in settings.

This module provides:
1. Flag readers for guardrail configuration
2. Guard functions that fail fast when a flag forbids the operation
"""

from __future__ import annotations

import logging

from django.conf import settings

from viralboard.trends.exceptions import ProvidersDisabledError

logger = logging.getLogger("viralboard.core.guardrails")


# =============================================================================
# FLAG READERS
# =============================================================================


def is_live_providers_enabled() -> bool:
    """
    Check if live provider HTTP calls are enabled.

    Returns:
        True if TRENDS_LIVE_PROVIDERS_ENABLED=true, False otherwise

    Default is False (safe). Must be explicitly enabled for live calls.
    """
    return getattr(settings, "TRENDS_LIVE_PROVIDERS_ENABLED", False)


# =============================================================================
# GUARD FUNCTIONS
# =============================================================================


def require_live_providers_enabled() -> None:
    """
    Guard: Raise if live provider calls are not enabled.

    Call this at the start of any function that makes provider HTTP calls.
    The raised error is a ProviderError, so the orchestrator treats a
    disabled provider exactly like an outage and serves placeholders.

    Raises:
        ProvidersDisabledError: If TRENDS_LIVE_PROVIDERS_ENABLED is not true
    """
    if not is_live_providers_enabled():
        logger.debug("Live provider call blocked by guardrail")
        raise ProvidersDisabledError(
            "Live provider calls are disabled. "
            "Set TRENDS_LIVE_PROVIDERS_ENABLED=true to enable."
        )
