"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic import Field
from pydantic_settings import BaseSettings

from content_sentinel.config.engine_config import AnalysisMode, EngineConfig
from content_sentinel.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        gemini_api_key: Google Gemini API key (optional, enables Gemini provider)
        gemini_model: Gemini model used for classification
        huggingface_api_key: Hugging Face Inference API token
        perspective_api_key: Google Perspective API key
        analysis_mode: Consensus mode (local_only, single_provider, combined)
        single_provider: Provider used in single_provider mode
        provider_priority: Comma-separated provider call order and tie-break priority
        provider_timeout: Per-provider call timeout in seconds
        analysis_deadline: Overall deadline for one analysis in seconds
        metadata_timeout: Timeout for page metadata fetches in seconds
        confidence_boost: Multiplicative boost applied when local and external agree
        selective_external: Only consult providers for texts that need a second opinion
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
    """

    gemini_api_key: str | None = Field(
        default=None,
        description="Google Gemini API key"
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Gemini model identifier used for classification"
    )
    huggingface_api_key: str | None = Field(
        default=None,
        description="Hugging Face Inference API token"
    )
    perspective_api_key: str | None = Field(
        default=None,
        description="Google Perspective API key"
    )
    analysis_mode: str = Field(
        default="local_only",
        description="Consensus mode: local_only, single_provider or combined"
    )
    single_provider: str = Field(
        default="gemini",
        description="Provider consulted in single_provider mode"
    )
    provider_priority: str = Field(
        default="gemini,huggingface,perspective,local",
        description="Comma-separated provider order; earlier entries win ties"
    )
    provider_timeout: float = Field(
        default=8.0,
        description="Per-provider timeout in seconds"
    )
    analysis_deadline: float = Field(
        default=15.0,
        description="Overall analysis deadline in seconds"
    )
    metadata_timeout: float = Field(
        default=10.0,
        description="Page metadata fetch timeout in seconds"
    )
    confidence_boost: float = Field(
        default=1.2,
        description="Confidence multiplier when local and external categories agree"
    )
    selective_external: bool = Field(
        default=False,
        description="Skip providers for short, unambiguous texts"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def priority_list(self) -> list[str]:
        """Parse provider_priority into a clean, lower-cased list."""
        return [
            name.strip().lower()
            for name in self.provider_priority.split(",")
            if name.strip()
        ]

    def configured_providers(self) -> list[str]:
        """Providers that have credentials, in priority order."""
        keys = {
            "gemini": self.gemini_api_key,
            "huggingface": self.huggingface_api_key,
            "perspective": self.perspective_api_key,
        }
        return [name for name in self.priority_list() if keys.get(name)]

    def to_engine_config(self) -> EngineConfig:
        """
        Build the immutable engine configuration snapshot from settings.

        Raises:
            ConfigurationError: If the mode or a numeric setting is invalid
        """
        try:
            return EngineConfig(
                mode=AnalysisMode(self.analysis_mode.lower()),
                single_provider=self.single_provider.lower(),
                providers=tuple(self.configured_providers()),
                priority=tuple(self.priority_list()),
                provider_timeout=self.provider_timeout,
                analysis_deadline=self.analysis_deadline,
                metadata_timeout=self.metadata_timeout,
                confidence_boost=self.confidence_boost,
                selective_external=self.selective_external,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid engine settings: {e}") from e


# Singleton instance - import this throughout the application
settings = Settings()
