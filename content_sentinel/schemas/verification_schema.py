"""Verification domain schemas for submission credibility scoring.

Defines the submission provenance inputs (Submission, Author, Engagement),
the opaque page metadata supplied by the metadata collaborator, and the
scoring outputs (VerificationFactor, VerificationScore, RiskAssessment).

Invariants enforced here rather than in the scorer:
- 0 <= points_awarded <= max_points for every factor
- total == min(100, sum(points_awarded)) for every score
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from content_sentinel.config.verification_rubric import MAX_TOTAL_SCORE


class FactorStatus(str, Enum):
    """Outcome of a single rubric factor."""

    PASS = "pass"
    PARTIAL = "partial"
    FAIL = "fail"
    ERROR = "error"


class VerificationLevel(str, Enum):
    """Credibility level derived from the verification total."""

    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    """Five-valued severity derived from toxicity and verification total."""

    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Platform(str, Enum):
    """Platforms a submission can be declared to come from."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    REDDIT = "reddit"
    OTHER = "other"


class Author(BaseModel):
    """Author of the original post as declared by the submitter."""

    username: str = ""
    profile_url: Optional[str] = None
    verified: bool = False


class Engagement(BaseModel):
    """Engagement counters reported for the original post."""

    likes: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)
    comments: int = Field(0, ge=0)

    @property
    def has_engagement(self) -> bool:
        return self.likes > 0 or self.shares > 0 or self.comments > 0


class Submission(BaseModel):
    """A social-media post submitted for analysis, with its provenance signals."""

    content: str
    platform: Platform = Platform.OTHER
    original_url: Optional[str] = None
    author: Author = Field(default_factory=Author)
    engagement: Engagement = Field(default_factory=Engagement)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "content": "Breaking: miracle cure found, doctors hate it!",
                    "platform": "twitter",
                    "original_url": "https://twitter.com/someone/status/123456",
                    "author": {
                        "username": "someone",
                        "profile_url": "https://twitter.com/someone",
                        "verified": False,
                    },
                    "engagement": {"likes": 12, "shares": 3, "comments": 0},
                }
            ]
        }
    }


class PageMetadata(BaseModel):
    """Metadata extracted from the submission URL by the metadata collaborator.

    Inaccessibility is a value, not an exception: accessible=False with an
    error message describes a page that could not be fetched.
    """

    accessible: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    site_name: Optional[str] = None
    image: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def inaccessible(cls, error: str) -> "PageMetadata":
        return cls(accessible=False, error=error)


class VerificationFactor(BaseModel):
    """One weighted rubric criterion."""

    name: str
    points_awarded: int = Field(..., ge=0)
    max_points: int = Field(..., ge=0)
    status: FactorStatus
    reason: Optional[str] = None

    @model_validator(mode="after")
    def _points_within_max(self) -> "VerificationFactor":
        if self.points_awarded > self.max_points:
            raise ValueError(
                f"points_awarded={self.points_awarded} exceeds max_points={self.max_points}"
            )
        return self


class VerificationScore(BaseModel):
    """Bounded credibility score with its per-factor breakdown."""

    total: int = Field(..., ge=0, le=MAX_TOTAL_SCORE)
    level: VerificationLevel
    factors: list[VerificationFactor] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def compute_total(cls, data: dict) -> dict:
        """Derive total from the factors and cap it at 100."""
        if isinstance(data, dict) and data.get("factors") is not None:
            data = dict(data)
            points = 0
            for factor in data["factors"]:
                if isinstance(factor, VerificationFactor):
                    points += factor.points_awarded
                else:
                    points += int(factor.get("points_awarded", 0))
            data["total"] = min(MAX_TOTAL_SCORE, points)
        return data


class RiskAssessment(BaseModel):
    """Risk level and the inputs it was derived from."""

    risk_level: RiskLevel
    toxicity_percent: float = Field(0.0, ge=0.0, le=100.0)
    verification_total: int = Field(0, ge=0, le=MAX_TOTAL_SCORE)
    rule: int = Field(5, ge=1, le=5, description="Decision-table row that matched")


class VerificationRecord(BaseModel):
    """End-to-end verification output for one submission."""

    score: VerificationScore
    risk: RiskAssessment
    metadata: Optional[PageMetadata] = None
    verified_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = [
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
