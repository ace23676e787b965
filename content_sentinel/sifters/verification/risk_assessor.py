"""Risk decision table over toxicity and verification total.

Rows are evaluated top to bottom; the first match wins. With the default
RubricConfig thresholds:

    1. toxicity > 70 and verification < 40  -> critical
    2. toxicity > 50 and verification < 60  -> high
    3. toxicity > 30 or  verification < 40  -> medium
    4. toxicity > 10 or  verification < 60  -> low
    5. otherwise                            -> very_low

Toxicity is expressed as a percentage (score * 100).
"""

from typing import Optional

from content_sentinel.config.engine_config import RubricConfig
from content_sentinel.schemas import RiskAssessment, RiskLevel


def assess_risk(
    toxicity_score: float,
    verification_total: int,
    rubric: Optional[RubricConfig] = None,
) -> RiskAssessment:
    """
    Derive the risk level for a toxicity score and verification total.

    Args:
        toxicity_score: Toxicity in [0, 1]
        verification_total: Verification total in [0, 100]
        rubric: Source of the risk thresholds (defaults if None)

    Returns:
        RiskAssessment carrying the matched rule number
    """
    rubric = rubric or RubricConfig()
    tox = max(0.0, min(1.0, toxicity_score)) * 100
    ver = verification_total

    if tox > rubric.critical_toxicity and ver < rubric.low_verification:
        level, rule = RiskLevel.CRITICAL, 1
    elif tox > rubric.high_toxicity and ver < rubric.medium_verification:
        level, rule = RiskLevel.HIGH, 2
    elif tox > rubric.medium_toxicity or ver < rubric.low_verification:
        level, rule = RiskLevel.MEDIUM, 3
    elif tox > rubric.low_toxicity or ver < rubric.medium_verification:
        level, rule = RiskLevel.LOW, 4
    else:
        level, rule = RiskLevel.VERY_LOW, 5

    return RiskAssessment(
        risk_level=level,
        toxicity_percent=tox,
        verification_total=ver,
        rule=rule,
    )


__all__ = ["assess_risk"]
