"""External classification providers.

Every provider implements ProviderAdapter.classify(text, timeout) and raises
ProviderCallError on failure; the consensus analyzer turns those errors into
ProviderError values.
"""

from content_sentinel.providers.base import ProviderAdapter
from content_sentinel.providers.gemini_provider import GeminiProvider
from content_sentinel.providers.huggingface_provider import HuggingFaceProvider
from content_sentinel.providers.perspective_provider import PerspectiveProvider
from content_sentinel.providers.registry import PROVIDER_FACTORIES, ProviderRegistry

__all__ = [
    "GeminiProvider",
    "HuggingFaceProvider",
    "PerspectiveProvider",
    "PROVIDER_FACTORIES",
    "ProviderAdapter",
    "ProviderRegistry",
]
