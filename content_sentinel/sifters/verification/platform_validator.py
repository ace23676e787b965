"""Check that a submission URL matches the platform it claims to come from."""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

from content_sentinel.config.verification_rubric import PLATFORM_URL_PATTERNS
from content_sentinel.schemas import Platform


@dataclass(frozen=True)
class UrlValidation:
    """Outcome of a platform URL check."""

    valid: bool
    reason: str


class PlatformValidator:
    """
    Match URLs against per-platform patterns.

    Platforms without a pattern (e.g. "other") accept any non-empty URL.
    """

    def __init__(self, patterns: Optional[Dict[str, str]] = None):
        self.patterns = {
            name: re.compile(pattern, re.IGNORECASE)
            for name, pattern in (patterns or PLATFORM_URL_PATTERNS).items()
        }

    def validate(self, url: Optional[str], platform: Union[Platform, str]) -> UrlValidation:
        if not url or not url.strip():
            return UrlValidation(False, "No URL provided")

        name = platform.value if isinstance(platform, Platform) else str(platform).lower()
        pattern = self.patterns.get(name)
        if pattern is None:
            return UrlValidation(True, "Platform pattern not defined, assuming valid")

        if pattern.match(url.strip()):
            return UrlValidation(True, "URL matches platform pattern")
        return UrlValidation(False, f"URL doesn't match {name} pattern")


__all__ = ["PlatformValidator", "UrlValidation"]
