"""Base class for external classification providers."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from content_sentinel.exceptions import ProviderCallError
from content_sentinel.schemas import Category, ClassificationResult
from content_sentinel.utils.logging import get_structured_logger


class ProviderAdapter(ABC):
    """
    Abstract external classifier.

    Subclasses implement classify() and translate every transport or payload
    failure into ProviderCallError. The consensus analyzer enforces the
    timeout; adapters also pass it to their HTTP/SDK client so sockets do not
    linger after the analyzer gives up.

    Attributes:
        name: Provenance tag written into ClassificationResult.source
        category_map: Static provider-label -> Category table
    """

    name: str = "provider"
    category_map: dict[str, Category] = {}

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key
        self._logger = get_structured_logger(type(self).__name__)

    @property
    def configured(self) -> bool:
        """Whether credentials are present."""
        return bool(self.api_key)

    @abstractmethod
    async def classify(self, text: str, timeout: float) -> ClassificationResult:
        """
        Classify text with the external provider.

        Args:
            text: Raw submission text
            timeout: Seconds the call may take

        Returns:
            ClassificationResult tagged with this provider's name

        Raises:
            ProviderCallError: On any transport, status or payload failure
        """

    def map_category(self, label: Optional[str]) -> Category:
        """Map a provider label to a Category (unmapped -> OTHER)."""
        if not label:
            return Category.OTHER
        return self.category_map.get(str(label).strip().upper(), Category.OTHER)

    def _require_key(self) -> str:
        if not self.api_key:
            raise ProviderCallError(self.name, "API key not configured")
        return self.api_key

    def _http_failure(self, error: Exception) -> ProviderCallError:
        """Translate an httpx failure into ProviderCallError."""
        if isinstance(error, httpx.TimeoutException):
            reason = "timeout"
        elif isinstance(error, httpx.HTTPStatusError):
            reason = f"HTTP error {error.response.status_code}"
        elif isinstance(error, httpx.RequestError):
            reason = f"request failed: {error}"
        else:
            reason = f"unexpected error: {error}"
        self._logger.warning("provider_call_failed", provider=self.name, reason=reason)
        return ProviderCallError(self.name, reason)

    async def close(self) -> None:
        """Release network resources (no-op by default)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, configured={self.configured})"


__all__ = ["ProviderAdapter"]
