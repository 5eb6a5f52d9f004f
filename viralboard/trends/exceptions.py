"""
Exceptions for the trends subsystem.

None of these escape the public query surface: provider errors are
recovered with placeholder summaries and persistence errors are logged and
ignored. They exist so each boundary can catch exactly what it recovers from.
"""


class TrendsError(Exception):
    """Base class for trends subsystem errors."""


class ProviderError(TrendsError):
    """Raised when an external content provider fails or times out."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class ProvidersDisabledError(ProviderError):
    """Raised when a live provider call is attempted with live calls disabled."""

    def __init__(self, message: str = "Live providers are disabled (TRENDS_LIVE_PROVIDERS_ENABLED=false)"):
        super().__init__(message)


class PersistenceError(TrendsError):
    """Raised when the cache snapshot cannot be read or written."""
