"""Verification rubric configuration for submission credibility scoring.

Fixed rubric (factor, max points):
1. URL pattern match: 20
2. Verified author: 15
3. Author profile URL present: 10
4. Content length quality: 20 (partial 5 when short, 10 when very long)
5. Metadata richness: 20 (5 per title/author/publish date/site name)
6. Engagement present: 15

Total is capped at 100. Levels and the risk decision table are evaluated
top-to-bottom, first match wins.
"""

from typing import Dict, Tuple

# Factor weights
URL_PATTERN_POINTS: int = 20
VERIFIED_AUTHOR_POINTS: int = 15
PROFILE_URL_POINTS: int = 10
CONTENT_QUALITY_POINTS: int = 20
CONTENT_SHORT_POINTS: int = 5
CONTENT_LONG_POINTS: int = 10
METADATA_FIELD_POINTS: int = 5
ENGAGEMENT_POINTS: int = 15

# Content length window (exclusive on both ends for full points)
CONTENT_MIN_LENGTH: int = 50
CONTENT_MAX_LENGTH: int = 2000

# Metadata richness above this many points counts as a full pass
METADATA_PASS_THRESHOLD: int = 10

MAX_TOTAL_SCORE: int = 100

# Verification level thresholds, highest first
LEVEL_THRESHOLDS: Tuple[Tuple[str, int], ...] = (
    ("high", 80),
    ("medium", 60),
    ("low", 40),
)

# Submission URL patterns per declared platform
PLATFORM_URL_PATTERNS: Dict[str, str] = {
    "twitter": r"^https?://(www\.)?(twitter\.com|x\.com)/\w+/status/\d+",
    "instagram": r"^https?://(www\.)?instagram\.com/p/[\w-]+",
    "facebook": r"^https?://(www\.)?facebook\.com/\w+/posts/\d+",
    "youtube": r"^https?://(www\.)?youtube\.com/watch\?v=[\w-]+",
    "tiktok": r"^https?://(www\.)?tiktok\.com/@[\w.]+/video/\d+",
    "reddit": r"^https?://(www\.)?reddit\.com/r/\w+/comments/\w+",
}

SUPPORTED_PLATFORMS: Tuple[str, ...] = tuple(PLATFORM_URL_PATTERNS) + ("other",)

# Risk decision table thresholds (toxicity as a percentage, verification total)
CRITICAL_TOXICITY: float = 70.0
HIGH_TOXICITY: float = 50.0
MEDIUM_TOXICITY: float = 30.0
LOW_TOXICITY: float = 10.0
LOW_VERIFICATION: int = 40
MEDIUM_VERIFICATION: int = 60
