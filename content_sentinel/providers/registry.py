"""Provider registry: name -> adapter lookup and construction from settings."""

from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional

from loguru import logger

from content_sentinel.config.settings import Settings, settings as default_settings
from content_sentinel.exceptions import ConfigurationError
from content_sentinel.providers.base import ProviderAdapter
from content_sentinel.providers.gemini_provider import GeminiProvider
from content_sentinel.providers.huggingface_provider import HuggingFaceProvider
from content_sentinel.providers.perspective_provider import PerspectiveProvider

# Factories keyed by provider name; each receives the Settings instance
PROVIDER_FACTORIES: Dict[str, Callable[[Settings], ProviderAdapter]] = {
    "gemini": lambda s: GeminiProvider(api_key=s.gemini_api_key, model_name=s.gemini_model),
    "huggingface": lambda s: HuggingFaceProvider(api_key=s.huggingface_api_key),
    "perspective": lambda s: PerspectiveProvider(api_key=s.perspective_api_key),
}


class ProviderRegistry:
    """
    Read-only mapping of provider name to adapter.

    Usage:
        registry = ProviderRegistry([GeminiProvider(api_key="...")])
        adapter = registry.get("gemini")
    """

    def __init__(self, adapters: Iterable[ProviderAdapter] = ()):
        table: Dict[str, ProviderAdapter] = {}
        for adapter in adapters:
            if adapter.name == "local":
                raise ConfigurationError("'local' is reserved for the lexical classifier")
            if adapter.name in table:
                raise ConfigurationError(f"Duplicate provider: {adapter.name}")
            table[adapter.name] = adapter
        self._adapters: Mapping[str, ProviderAdapter] = MappingProxyType(table)

    @classmethod
    def from_settings(
        cls,
        names: Iterable[str],
        settings: Optional[Settings] = None,
    ) -> "ProviderRegistry":
        """
        Build adapters for the named providers.

        Args:
            names: Provider names (gemini, huggingface, perspective)
            settings: Settings holding credentials (module singleton if None)

        Raises:
            ConfigurationError: If a name has no known adapter
        """
        settings = settings or default_settings
        adapters = []
        for name in names:
            factory = PROVIDER_FACTORIES.get(name)
            if factory is None:
                raise ConfigurationError(f"Unknown provider: {name}")
            adapters.append(factory(settings))
        logger.bind(component="ProviderRegistry").info(
            "Provider registry built", providers=[a.name for a in adapters]
        )
        return cls(adapters)

    def get(self, name: str) -> Optional[ProviderAdapter]:
        return self._adapters.get(name)

    def names(self) -> list[str]:
        return list(self._adapters)

    def adapters(self) -> list[ProviderAdapter]:
        return list(self._adapters.values())

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    async def close(self) -> None:
        """Close every adapter's network resources."""
        for adapter in self._adapters.values():
            await adapter.close()


__all__ = ["PROVIDER_FACTORIES", "ProviderRegistry"]
