"""Immutable engine configuration snapshot.

The engine never reads process-wide mutable globals at request time. A single
frozen EngineConfig is built once (usually from Settings.to_engine_config())
and handed to the ModerationPipeline. Reloads build a new instance and swap
the reference, so in-flight requests keep observing the snapshot they started
with.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from content_sentinel.config.verification_rubric import (
    CONTENT_LONG_POINTS,
    CONTENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    CONTENT_QUALITY_POINTS,
    CONTENT_SHORT_POINTS,
    CRITICAL_TOXICITY,
    ENGAGEMENT_POINTS,
    HIGH_TOXICITY,
    LEVEL_THRESHOLDS,
    LOW_TOXICITY,
    LOW_VERIFICATION,
    MEDIUM_TOXICITY,
    MEDIUM_VERIFICATION,
    METADATA_FIELD_POINTS,
    METADATA_PASS_THRESHOLD,
    PROFILE_URL_POINTS,
    URL_PATTERN_POINTS,
    VERIFIED_AUTHOR_POINTS,
)


class AnalysisMode(str, Enum):
    """How the consensus analyzer combines local and external opinions."""

    LOCAL_ONLY = "local_only"
    SINGLE_PROVIDER = "single_provider"
    COMBINED = "combined"


class RubricConfig(BaseModel):
    """Point weights, level thresholds and risk thresholds of the verification rubric."""

    model_config = ConfigDict(frozen=True)

    url_pattern_points: int = Field(URL_PATTERN_POINTS, ge=0)
    verified_author_points: int = Field(VERIFIED_AUTHOR_POINTS, ge=0)
    profile_url_points: int = Field(PROFILE_URL_POINTS, ge=0)
    content_quality_points: int = Field(CONTENT_QUALITY_POINTS, ge=0)
    content_short_points: int = Field(CONTENT_SHORT_POINTS, ge=0)
    content_long_points: int = Field(CONTENT_LONG_POINTS, ge=0)
    content_min_length: int = Field(CONTENT_MIN_LENGTH, ge=0)
    content_max_length: int = Field(CONTENT_MAX_LENGTH, ge=0)
    metadata_field_points: int = Field(METADATA_FIELD_POINTS, ge=0)
    metadata_pass_threshold: int = Field(METADATA_PASS_THRESHOLD, ge=0)
    engagement_points: int = Field(ENGAGEMENT_POINTS, ge=0)
    level_thresholds: tuple[tuple[str, int], ...] = LEVEL_THRESHOLDS

    # Risk table: toxicity as a percentage, verification as a total
    critical_toxicity: float = Field(CRITICAL_TOXICITY, ge=0, le=100)
    high_toxicity: float = Field(HIGH_TOXICITY, ge=0, le=100)
    medium_toxicity: float = Field(MEDIUM_TOXICITY, ge=0, le=100)
    low_toxicity: float = Field(LOW_TOXICITY, ge=0, le=100)
    low_verification: int = Field(LOW_VERIFICATION, ge=0, le=100)
    medium_verification: int = Field(MEDIUM_VERIFICATION, ge=0, le=100)

    @property
    def metadata_points(self) -> int:
        """Maximum points for metadata richness (four fields)."""
        return self.metadata_field_points * 4


class EngineConfig(BaseModel):
    """Process-wide, read-only engine configuration.

    Attributes:
        mode: Default consensus mode for classify() calls
        single_provider: Provider consulted in single_provider mode
        providers: Providers called in combined mode, in call order
        priority: Tie-break order for majority votes ("local" may appear)
        provider_timeout: Independent timeout for each provider call (seconds)
        analysis_deadline: Overall deadline for one analyze() call (seconds)
        metadata_timeout: Timeout for the page metadata collaborator (seconds)
        confidence_boost: Multiplier applied when local and external agree
        boost_ceiling: Confidence at or above which no boost is applied
        external_weight: Weight of the external confidence in hybrid mode
        min_confidence: Insufficient-evidence confidence threshold
        min_category_score: Insufficient-evidence raw score threshold
        keyword_limit: Number of keywords returned by the lexical classifier
        selective_external: Serve short, unambiguous texts locally
        rubric: Verification rubric weights and thresholds
    """

    model_config = ConfigDict(frozen=True)

    mode: AnalysisMode = AnalysisMode.LOCAL_ONLY
    single_provider: str = "gemini"
    providers: tuple[str, ...] = ()
    priority: tuple[str, ...] = Field(
        ("gemini", "huggingface", "perspective", "local"), validate_default=True
    )
    provider_timeout: float = Field(8.0, gt=0)
    analysis_deadline: float = Field(15.0, gt=0)
    metadata_timeout: float = Field(10.0, gt=0)
    confidence_boost: float = Field(1.2, ge=1.0)
    boost_ceiling: float = Field(0.9, ge=0.0, le=1.0)
    external_weight: float = Field(0.7, ge=0.0, le=1.0)
    min_confidence: float = Field(0.30, ge=0.0, le=1.0)
    min_category_score: int = Field(2, ge=0)
    keyword_limit: int = Field(10, ge=0)
    selective_external: bool = False
    rubric: RubricConfig = Field(default_factory=RubricConfig)

    @field_validator("priority")
    @classmethod
    def _priority_covers_providers(
        cls, value: tuple[str, ...], info: ValidationInfo
    ) -> tuple[str, ...]:
        """Every configured provider (and local) must have a place in the priority order."""
        priority = tuple(value)
        for name in tuple(info.data.get("providers", ())) + ("local",):
            if name not in priority:
                priority += (name,)
        return priority

    def rank(self, source: str) -> int:
        """Position of a source in the priority order (unknown sources rank last)."""
        try:
            return self.priority.index(source)
        except ValueError:
            return len(self.priority)


__all__ = ["AnalysisMode", "EngineConfig", "RubricConfig"]
