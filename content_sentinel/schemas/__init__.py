"""Schema package for classification and verification data structures.

All models are request-scoped pydantic value objects:
- ClassificationResult / ConsensusResult: harm category, sentiment, toxicity
- ProviderError: a provider that could not answer (value, not exception)
- Submission / PageMetadata: provenance inputs for verification
- VerificationScore / RiskAssessment: credibility and risk outputs

Usage:
    from content_sentinel.schemas import Category, ConsensusResult
    from content_sentinel.schemas import Submission, VerificationScore
"""

# Classification schemas
from content_sentinel.schemas.classification_schema import (
    Category,
    ClassificationResult,
    ConsensusResult,
    ProviderError,
    ProviderOutcome,
    Sentiment,
    SentimentLabel,
    TextMetadata,
    Toxicity,
    ToxicityContribution,
)

# Verification schemas
from content_sentinel.schemas.verification_schema import (
    Author,
    Engagement,
    FactorStatus,
    PageMetadata,
    Platform,
    RiskAssessment,
    RiskLevel,
    Submission,
    VerificationFactor,
    VerificationLevel,
    VerificationRecord,
    VerificationScore,
)

__all__ = [
    # Classification
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
    # Verification
    "Author",
    "Engagement",
    "FactorStatus",
    "PageMetadata",
    "Platform",
    "RiskAssessment",
    "RiskLevel",
    "Submission",
    "VerificationFactor",
    "VerificationLevel",
    "VerificationRecord",
    "VerificationScore",
]
