"""Submission credibility scoring and risk assessment.

Components:
    PlatformValidator: URL vs declared platform check
    VerificationScorer: Six-factor rubric producing a bounded score and level
    assess_risk: First-match risk decision table over toxicity and score

Usage:
    from content_sentinel.sifters.verification import VerificationScorer

    score, risk = VerificationScorer().score(submission, consensus, metadata)
"""

from content_sentinel.sifters.verification.platform_validator import (
    PlatformValidator,
    UrlValidation,
)
from content_sentinel.sifters.verification.risk_assessor import assess_risk
from content_sentinel.sifters.verification.verification_scorer import VerificationScorer

__all__ = ["PlatformValidator", "UrlValidation", "VerificationScorer", "assess_risk"]
