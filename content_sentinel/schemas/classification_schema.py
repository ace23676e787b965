"""Classification schema for analysed submissions.

Results are request-scoped value objects:
- ClassificationResult: one opinion (local lexical classifier or a provider)
- ProviderError: a provider that could not give an opinion
- ConsensusResult: the reconciled opinion returned to callers

Numeric fields are clamped into their declared ranges rather than rejected,
so a misbehaving provider can never push a score out of bounds.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from content_sentinel.config.engine_config import AnalysisMode


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))


class Category(str, Enum):
    """Harm categories.

    OTHER covers benign content and content without enough evidence
    for any specific harm category.
    """

    VIOLENCE = "violence"
    HATE_SPEECH = "hate_speech"
    HARASSMENT = "harassment"
    CYBERBULLYING = "cyberbullying"
    SEXUAL_HARASSMENT = "sexual_harassment"
    FAKE_NEWS = "fake_news"
    SCAM = "scam"
    MISINFORMATION = "misinformation"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Category":
        """Map a free-form label onto the fixed set (unknown -> OTHER)."""
        if not label:
            return cls.OTHER
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            return cls.OTHER


class SentimentLabel(str, Enum):
    """Polarity label derived from the sentiment score."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "SentimentLabel":
        """Map provider labels (POSITIVE, Negative, ...) onto the fixed set."""
        if not label:
            return cls.NEUTRAL
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            return cls.NEUTRAL


class Sentiment(BaseModel):
    """Sentiment assessment.

    score is None only on provider results that report a label without a
    numeric score; local and consensus results always carry a score.
    """

    score: Optional[float] = Field(None, description="Polarity in [-1, 1]")
    label: SentimentLabel = SentimentLabel.NEUTRAL

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return _clamp(value, -1.0, 1.0)


class ToxicityContribution(BaseModel):
    """One pattern group (or source) that contributed to the toxicity score."""

    name: str
    score: float = Field(0.0, description="Contribution in [0, 1]")

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)


class Toxicity(BaseModel):
    """Aggregate harmfulness estimate with its ordered contributions."""

    score: float = Field(0.0, description="Aggregate toxicity in [0, 1]")
    contributions: list[ToxicityContribution] = Field(default_factory=list)

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)


class TextMetadata(BaseModel):
    """Basic measurements of the analysed text."""

    text_length: int = Field(0, ge=0)
    word_count: int = Field(0, ge=0)
    processed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ClassificationResult(BaseModel):
    """A single classification opinion.

    Attributes:
        category: Harm category from the fixed set
        confidence: Confidence in the category (0.0-1.0)
        sentiment: Sentiment score and label
        toxicity: Toxicity score and contributions
        keywords: Stems ordered by frequency rank
        source: Which component produced this result (local, gemini, ...)
        explanation: Human-readable reason for the category
        language: Language reported by a provider, if any
        text_metadata: Length/word count of the analysed text (local results)
    """

    category: Category = Category.OTHER
    confidence: float = Field(0.0, description="Confidence in [0, 1]")
    sentiment: Sentiment = Field(default_factory=Sentiment)
    toxicity: Toxicity = Field(default_factory=Toxicity)
    keywords: list[str] = Field(default_factory=list)
    source: str = Field(..., description="Provenance tag of the producing component")
    explanation: Optional[str] = None
    language: Optional[str] = None
    text_metadata: Optional[TextMetadata] = None

    @field_validator("confidence")
    @classmethod
    def clamp_confidence(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "category": "cyberbullying",
                    "confidence": 0.78,
                    "sentiment": {"score": -0.8, "label": "negative"},
                    "toxicity": {
                        "score": 0.84,
                        "contributions": [
                            {"name": "negative_sentiment", "score": 0.8},
                            {"name": "violence", "score": 0.2},
                        ],
                    },
                    "keywords": ["stupid", "ugli", "kill", "yourself"],
                    "source": "local",
                }
            ]
        }
    }


class ProviderError(BaseModel):
    """A provider that failed, timed out or was cancelled for one request."""

    provider: str
    reason: str


ProviderOutcome = Union[ClassificationResult, ProviderError]


class ConsensusResult(ClassificationResult):
    """Reconciled classification returned by the consensus analyzer.

    Invariant: needs_review is True iff agreement is False and at least one
    external source responded.
    """

    mode: AnalysisMode = AnalysisMode.LOCAL_ONLY
    agreement: bool = True
    agreement_boosted: bool = False
    needs_review: bool = False
    local_category: Category = Category.OTHER
    external_category: Optional[Category] = None
    disagreement_reason: Optional[str] = None
    contributing_sources: set[str] = Field(default_factory=set)
    provider_errors: list[ProviderError] = Field(default_factory=list)
    cancelled: bool = False
    explanations: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _review_follows_disagreement(self) -> "ConsensusResult":
        external_responded = any(s != "local" for s in self.contributing_sources)
        expected = (not self.agreement) and external_responded
        if self.needs_review != expected:
            raise ValueError(
                "needs_review must be True iff agreement is False and an external source responded"
            )
        return self

    @property
    def external_sources(self) -> list[str]:
        """Contributing sources other than the local classifier."""
        return sorted(s for s in self.contributing_sources if s != "local")


__all__ = [
    "Category",
    "ClassificationResult",
    "ConsensusResult",
    "ProviderError",
    "ProviderOutcome",
    "Sentiment",
    "SentimentLabel",
    "TextMetadata",
    "Toxicity",
    "ToxicityContribution",
]
