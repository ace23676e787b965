"""Rubric-based credibility scoring for submissions.

Six factors, each evaluated independently:

| Factor             | Max | Rule                                              |
|--------------------|-----|---------------------------------------------------|
| URL Pattern Match  | 20  | URL matches the declared platform's pattern       |
| Verified Author    | 15  | author.verified                                   |
| Author Profile URL | 10  | non-empty author.profile_url                      |
| Content Quality    | 20  | 50 < len < 2000; partial 5 if short, 10 if long   |
| Metadata Richness  | 20  | 5 per title/author/publish date/site name         |
| Engagement Present | 15  | any of likes/shares/comments > 0                  |

A factor whose evaluation raises is recorded with status "error" and zero
points; the remaining factors are still scored.
"""

from typing import Callable, List, Optional

from loguru import logger

from content_sentinel.config.engine_config import RubricConfig
from content_sentinel.schemas import (
    ClassificationResult,
    FactorStatus,
    PageMetadata,
    RiskAssessment,
    Submission,
    VerificationFactor,
    VerificationLevel,
    VerificationScore,
)
from content_sentinel.sifters.verification.platform_validator import PlatformValidator
from content_sentinel.sifters.verification.risk_assessor import assess_risk

URL_FACTOR = "URL Pattern Match"
VERIFIED_FACTOR = "Verified Author"
PROFILE_FACTOR = "Author Profile URL"
CONTENT_FACTOR = "Content Quality"
METADATA_FACTOR = "Metadata Richness"
ENGAGEMENT_FACTOR = "Engagement Present"


class VerificationScorer:
    """
    Score a submission's provenance signals against the rubric.

    Usage:
        scorer = VerificationScorer()
        score, risk = scorer.score(submission, consensus, metadata)
        print(score.total, score.level, risk.risk_level)

    Attributes:
        rubric: Point weights and level thresholds
        validator: Platform URL validator
    """

    def __init__(
        self,
        rubric: Optional[RubricConfig] = None,
        validator: Optional[PlatformValidator] = None,
    ):
        self.rubric = rubric or RubricConfig()
        self.validator = validator or PlatformValidator()
        self.logger = logger.bind(component="VerificationScorer")

    def score(
        self,
        submission: Submission,
        consensus: ClassificationResult,
        metadata: Optional[PageMetadata] = None,
    ) -> tuple[VerificationScore, RiskAssessment]:
        """
        Compute the verification score and risk level.

        Args:
            submission: Submission with provenance signals
            consensus: Classification whose toxicity feeds the risk table
            metadata: Page metadata from the collaborator (None when unavailable)

        Returns:
            (VerificationScore, RiskAssessment)
        """
        verification = self.verification_score(submission, metadata)
        risk = assess_risk(consensus.toxicity.score, verification.total, self.rubric)

        self.logger.info(
            "Submission scored",
            total=verification.total,
            level=verification.level.value,
            risk=risk.risk_level.value,
            rule=risk.rule,
        )
        return verification, risk

    def verification_score(
        self, submission: Submission, metadata: Optional[PageMetadata] = None
    ) -> VerificationScore:
        """Evaluate every factor and aggregate into a bounded score."""
        rubric = self.rubric
        evaluations: List[tuple[str, int, Callable[[], VerificationFactor]]] = [
            (URL_FACTOR, rubric.url_pattern_points, lambda: self._url_factor(submission)),
            (VERIFIED_FACTOR, rubric.verified_author_points, lambda: self._verified_factor(submission)),
            (PROFILE_FACTOR, rubric.profile_url_points, lambda: self._profile_factor(submission)),
            (CONTENT_FACTOR, rubric.content_quality_points, lambda: self._content_factor(submission)),
            (METADATA_FACTOR, rubric.metadata_points, lambda: self._metadata_factor(metadata)),
            (ENGAGEMENT_FACTOR, rubric.engagement_points, lambda: self._engagement_factor(submission)),
        ]

        factors: List[VerificationFactor] = []
        for name, max_points, evaluate in evaluations:
            try:
                factors.append(evaluate())
            except Exception as e:
                self.logger.warning(f"Factor evaluation failed: {name}", error=str(e))
                factors.append(
                    VerificationFactor(
                        name=name,
                        points_awarded=0,
                        max_points=max_points,
                        status=FactorStatus.ERROR,
                        reason=f"Evaluation failed: {e}",
                    )
                )

        total = min(100, sum(f.points_awarded for f in factors))
        return VerificationScore(total=total, level=self.level_for(total), factors=factors)

    def level_for(self, total: int) -> VerificationLevel:
        """Map a total onto a verification level (first threshold met wins)."""
        for level, threshold in self.rubric.level_thresholds:
            if total >= threshold:
                return VerificationLevel(level)
        return VerificationLevel.VERY_LOW

    # ── Factors ──────────────────────────────────────────────────────

    def _url_factor(self, submission: Submission) -> VerificationFactor:
        points = self.rubric.url_pattern_points
        check = self.validator.validate(submission.original_url, submission.platform)
        return VerificationFactor(
            name=URL_FACTOR,
            points_awarded=points if check.valid else 0,
            max_points=points,
            status=FactorStatus.PASS if check.valid else FactorStatus.FAIL,
            reason=check.reason,
        )

    def _verified_factor(self, submission: Submission) -> VerificationFactor:
        points = self.rubric.verified_author_points
        verified = submission.author.verified
        return VerificationFactor(
            name=VERIFIED_FACTOR,
            points_awarded=points if verified else 0,
            max_points=points,
            status=FactorStatus.PASS if verified else FactorStatus.FAIL,
            reason=None if verified else "Author not verified",
        )

    def _profile_factor(self, submission: Submission) -> VerificationFactor:
        points = self.rubric.profile_url_points
        present = bool((submission.author.profile_url or "").strip())
        return VerificationFactor(
            name=PROFILE_FACTOR,
            points_awarded=points if present else 0,
            max_points=points,
            status=FactorStatus.PASS if present else FactorStatus.FAIL,
            reason=None if present else "No profile URL provided",
        )

    def _content_factor(self, submission: Submission) -> VerificationFactor:
        rubric = self.rubric
        length = len(submission.content)
        if rubric.content_min_length < length < rubric.content_max_length:
            awarded, status, reason = rubric.content_quality_points, FactorStatus.PASS, None
        elif length <= rubric.content_min_length:
            awarded, status, reason = rubric.content_short_points, FactorStatus.PARTIAL, "Content too short"
        else:
            awarded, status, reason = rubric.content_long_points, FactorStatus.PARTIAL, "Content very long"
        return VerificationFactor(
            name=CONTENT_FACTOR,
            points_awarded=awarded,
            max_points=rubric.content_quality_points,
            status=status,
            reason=reason,
        )

    def _metadata_factor(self, metadata: Optional[PageMetadata]) -> VerificationFactor:
        rubric = self.rubric
        max_points = rubric.metadata_points
        if metadata is None:
            return VerificationFactor(
                name=METADATA_FACTOR, points_awarded=0, max_points=max_points,
                status=FactorStatus.FAIL, reason="No metadata available",
            )
        if not metadata.accessible:
            return VerificationFactor(
                name=METADATA_FACTOR, points_awarded=0, max_points=max_points,
                status=FactorStatus.FAIL,
                reason=f"URL not accessible: {metadata.error}" if metadata.error else "URL not accessible",
            )

        present = [
            field
            for field in ("title", "author", "publish_date", "site_name")
            if (getattr(metadata, field) or "").strip()
        ]
        awarded = len(present) * rubric.metadata_field_points
        if awarded > rubric.metadata_pass_threshold:
            status = FactorStatus.PASS
        elif awarded > 0:
            status = FactorStatus.PARTIAL
        else:
            status = FactorStatus.FAIL
        return VerificationFactor(
            name=METADATA_FACTOR,
            points_awarded=awarded,
            max_points=max_points,
            status=status,
            reason=f"Fields present: {', '.join(present)}" if present else "No metadata fields present",
        )

    def _engagement_factor(self, submission: Submission) -> VerificationFactor:
        points = self.rubric.engagement_points
        engaged = submission.engagement.has_engagement
        return VerificationFactor(
            name=ENGAGEMENT_FACTOR,
            points_awarded=points if engaged else 0,
            max_points=points,
            status=FactorStatus.PASS if engaged else FactorStatus.FAIL,
            reason=None if engaged else "No engagement data",
        )


__all__ = [
    "CONTENT_FACTOR",
    "ENGAGEMENT_FACTOR",
    "METADATA_FACTOR",
    "PROFILE_FACTOR",
    "URL_FACTOR",
    "VERIFIED_FACTOR",
    "VerificationScorer",
]
