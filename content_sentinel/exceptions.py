"""Exception taxonomy for the classification and verification engine.

Only InvalidInputError and AllProvidersFailedError ever reach callers of the
engine entry points. ProviderCallError and MetadataFetchError are raised by
collaborators and absorbed into ProviderError values / degraded factors.
"""

from typing import Optional, Sequence


class SentinelError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(SentinelError, ValueError):
    """Input text is empty or not text; rejected before any scoring."""


class ConfigurationError(SentinelError):
    """Engine configuration names an unknown mode or provider."""


class ProviderCallError(SentinelError):
    """A single provider adapter failed to produce a classification."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")


class AllProvidersFailedError(SentinelError):
    """Combined mode had providers configured and none of them responded."""

    def __init__(self, errors: Sequence, message: Optional[str] = None):
        # errors is a sequence of schemas.ProviderError values
        self.errors = list(errors)
        detail = "; ".join(f"{e.provider}: {e.reason}" for e in self.errors)
        super().__init__(message or f"All providers failed ({detail})")


class MetadataFetchError(SentinelError):
    """Page metadata could not be fetched for a submission URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


__all__ = [
    "AllProvidersFailedError",
    "ConfigurationError",
    "InvalidInputError",
    "MetadataFetchError",
    "ProviderCallError",
    "SentinelError",
]
