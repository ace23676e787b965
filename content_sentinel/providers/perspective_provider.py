"""Google Perspective API toxicity classifier."""

from typing import Any, Optional

import httpx

from content_sentinel.config.settings import settings
from content_sentinel.exceptions import ProviderCallError
from content_sentinel.providers.base import ProviderAdapter
from content_sentinel.schemas import (
    Category,
    ClassificationResult,
    Sentiment,
    SentimentLabel,
    Toxicity,
    ToxicityContribution,
)

ANALYZE_URL = "https://commentanalyzer.googleapis.com/v1alpha1/comments:analyze"
REQUESTED_ATTRIBUTES = (
    "TOXICITY",
    "SEVERE_TOXICITY",
    "IDENTITY_ATTACK",
    "INSULT",
    "PROFANITY",
    "THREAT",
)
ATTRIBUTE_THRESHOLD = 0.7
NEGATIVE_TOXICITY = 0.5


class PerspectiveProvider(ProviderAdapter):
    """
    Classify text from Perspective attribute scores.

    Category rules, first match wins: THREAT > 0.7 -> violence,
    INSULT > 0.7 -> cyberbullying, TOXICITY > 0.7 -> harassment, else other.
    """

    name = "perspective"
    category_map = {
        "THREAT": Category.VIOLENCE,
        "INSULT": Category.CYBERBULLYING,
        "TOXICITY": Category.HARASSMENT,
        "IDENTITY_ATTACK": Category.HATE_SPEECH,
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        url: str = ANALYZE_URL,
    ):
        super().__init__(api_key if api_key is not None else settings.perspective_api_key)
        self.url = url
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(limits=httpx.Limits(max_connections=20))
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def classify(self, text: str, timeout: float) -> ClassificationResult:
        key = self._require_key()
        payload = {
            "requestedAttributes": {name: {} for name in REQUESTED_ATTRIBUTES},
            "languages": ["en", "hi"],
            "doNotStore": True,
            "comment": {"text": text},
        }

        try:
            client = await self._get_client()
            response = await client.post(
                self.url,
                params={"key": key},
                json=payload,
                timeout=httpx.Timeout(timeout),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise self._http_failure(e) from e

        try:
            return self._to_result(data)
        except (ValueError, TypeError, AttributeError) as e:
            self._logger.warning("provider_bad_payload", provider=self.name, reason=str(e))
            raise ProviderCallError(self.name, f"invalid response: {e}") from e

    @staticmethod
    def _attribute(scores: dict[str, Any], name: str) -> float:
        return float(((scores.get(name) or {}).get("summaryScore") or {}).get("value") or 0.0)

    def _to_result(self, data: dict[str, Any]) -> ClassificationResult:
        scores = data.get("attributeScores")
        if not isinstance(scores, dict):
            raise ValueError("attributeScores missing")

        toxicity = self._attribute(scores, "TOXICITY")
        threat = self._attribute(scores, "THREAT")
        insult = self._attribute(scores, "INSULT")

        category = Category.OTHER
        for attribute, value in (("THREAT", threat), ("INSULT", insult), ("TOXICITY", toxicity)):
            if value > ATTRIBUTE_THRESHOLD:
                category = self.map_category(attribute)
                break

        contributions = [
            ToxicityContribution(name=name.lower(), score=self._attribute(scores, name))
            for name in REQUESTED_ATTRIBUTES
            if name in scores
        ]

        return ClassificationResult(
            category=category,
            confidence=max(toxicity, threat, insult),
            sentiment=Sentiment(
                score=None,
                label=SentimentLabel.NEGATIVE if toxicity > NEGATIVE_TOXICITY else SentimentLabel.NEUTRAL,
            ),
            toxicity=Toxicity(score=toxicity, contributions=contributions),
            source=self.name,
            explanation=f"Google Perspective: {toxicity * 100:.1f}% toxic",
        )


__all__ = ["PerspectiveProvider"]
