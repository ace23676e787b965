"""Hugging Face Inference API classifier (three models called concurrently)."""

import asyncio
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

INFERENCE_URL = "https://api-inference.huggingface.co/models"
TOXICITY_MODEL = "unitary/toxic-bert"
SENTIMENT_MODEL = "cardiffnlp/twitter-roberta-base-sentiment-latest"
CLASSIFICATION_MODEL = "martin-ha/toxic-comment-model"


def _top_label(payload: Any) -> Optional[dict]:
    """Highest-scoring {label, score} entry of an inference response."""
    scores = _label_scores(payload)
    if not scores:
        return None
    return max(scores, key=lambda item: item.get("score", 0.0))


def _label_scores(payload: Any) -> list[dict]:
    # Text-classification responses come back as [[{label, score}, ...]]
    if isinstance(payload, list) and payload and isinstance(payload[0], list):
        payload = payload[0]
    if not isinstance(payload, list):
        raise ValueError(f"unexpected inference payload: {type(payload).__name__}")
    return [item for item in payload if isinstance(item, dict) and "label" in item]


class HuggingFaceProvider(ProviderAdapter):
    """
    Classify text with three hosted Hugging Face models.

    - toxic-bert: toxicity probability (TOXIC label)
    - twitter-roberta: sentiment label; its probability becomes a signed score
    - toxic-comment-model: category label, mapped through category_map
    """

    name = "huggingface"
    category_map = {
        "TOXIC": Category.HARASSMENT,
        "SEVERE_TOXIC": Category.VIOLENCE,
        "OBSCENE": Category.HARASSMENT,
        "THREAT": Category.VIOLENCE,
        "INSULT": Category.CYBERBULLYING,
        "IDENTITY_HATE": Category.HATE_SPEECH,
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = INFERENCE_URL,
    ):
        super().__init__(api_key if api_key is not None else settings.huggingface_api_key)
        self.base_url = base_url.rstrip("/")
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

    async def _infer(self, model: str, text: str, timeout: float) -> Any:
        client = await self._get_client()
        response = await client.post(
            f"{self.base_url}/{model}",
            json={"inputs": text},
            headers={"Authorization": f"Bearer {self._require_key()}"},
            timeout=httpx.Timeout(timeout),
        )
        response.raise_for_status()
        return response.json()

    async def classify(self, text: str, timeout: float) -> ClassificationResult:
        self._require_key()
        tasks = [
            asyncio.create_task(self._infer(model, text, timeout))
            for model in (TOXICITY_MODEL, SENTIMENT_MODEL, CLASSIFICATION_MODEL)
        ]
        try:
            toxicity_raw, sentiment_raw, classification_raw = await asyncio.gather(*tasks)
        except httpx.HTTPError as e:
            raise self._http_failure(e) from e
        except ValueError as e:
            # Non-JSON body
            self._logger.warning("provider_bad_payload", provider=self.name, reason=str(e))
            raise ProviderCallError(self.name, f"invalid response: {e}") from e
        finally:
            # One model failing, or the caller cancelling, stops the others
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        try:
            return self._to_result(toxicity_raw, sentiment_raw, classification_raw)
        except (ValueError, TypeError) as e:
            self._logger.warning("provider_bad_payload", provider=self.name, reason=str(e))
            raise ProviderCallError(self.name, f"invalid response: {e}") from e

    def _to_result(
        self, toxicity_raw: Any, sentiment_raw: Any, classification_raw: Any
    ) -> ClassificationResult:
        toxic = next(
            (
                item.get("score", 0.0)
                for item in _label_scores(toxicity_raw)
                if str(item["label"]).upper() == "TOXIC"
            ),
            0.0,
        )

        top_sentiment = _top_label(sentiment_raw)
        label = SentimentLabel.from_label(top_sentiment["label"] if top_sentiment else None)
        probability = float(top_sentiment.get("score", 0.0)) if top_sentiment else 0.0
        signed = {
            SentimentLabel.POSITIVE: probability,
            SentimentLabel.NEGATIVE: -probability,
        }.get(label, 0.0)

        top_class = _top_label(classification_raw)
        class_label = top_class["label"] if top_class else None
        class_score = float(top_class.get("score", 0.0)) if top_class else 0.0

        return ClassificationResult(
            category=self.map_category(class_label),
            confidence=class_score,
            sentiment=Sentiment(score=signed, label=label),
            toxicity=Toxicity(
                score=float(toxic),
                contributions=[ToxicityContribution(name="toxic-bert", score=float(toxic))],
            ),
            source=self.name,
            explanation=f"HuggingFace analysis: {class_label} ({class_score * 100:.1f}%)",
        )


__all__ = ["HuggingFaceProvider"]
