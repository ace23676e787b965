"""Gemini-backed classifier using a JSON-reply moderation prompt."""

import json
import re
from typing import Any, Optional

import google.generativeai as genai

from content_sentinel.config.settings import settings
from content_sentinel.exceptions import ProviderCallError
from content_sentinel.providers.base import ProviderAdapter
from content_sentinel.schemas import (
    Category,
    ClassificationResult,
    Sentiment,
    SentimentLabel,
    Toxicity,
)

MODERATION_PROMPT = """You are an expert content moderator specializing in English and Hindi content analysis. Analyze the given text for harmful content.

Respond with ONLY a JSON object in this exact format:
{{
  "category": "violence|hate_speech|harassment|cyberbullying|sexual_harassment|fake_news|scam|misinformation|other",
  "toxicity_score": 0.0-1.0,
  "confidence": 0.0-1.0,
  "sentiment": "positive|negative|neutral",
  "language": "english|hindi|mixed",
  "explanation": "brief explanation of why this content is harmful or not"
}}

Categories:
- violence: threats, death wishes, physical harm (Hindi: mardunga, maar dunga, khatam kar dunga)
- hate_speech: discrimination based on race, religion, caste (Hindi: nafrat, ghrina, jaati)
- harassment: bullying, intimidation, stalking (Hindi: pareshan karna, tang karna)
- cyberbullying: online bullying, personal attacks (Hindi: bewakoof, pagal, nikamma)
- sexual_harassment: unwanted sexual content, objectification
- fake_news: false information, conspiracy theories (Hindi: jhooth, fake news)
- scam: fraudulent schemes, phishing attempts (Hindi: dhokha, thagana)
- misinformation: incorrect health/medical information
- other: benign content or unclear harmful intent

Pay special attention to Hindi words and mixed Hindi-English content.

Analyze this text: "{text}"
"""

_CODE_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(response_text: str) -> dict[str, Any]:
    """
    Pull the JSON object out of an LLM reply.

    Handles raw JSON, markdown code blocks and surrounding prose.

    Raises:
        ValueError: If no JSON object can be parsed
    """
    text = (response_text or "").strip()

    block = _CODE_BLOCK.search(text)
    if block:
        text = block.group(1).strip()

    match = _JSON_OBJECT.search(text)
    if not match:
        raise ValueError("no JSON object in response")

    parsed = json.loads(match.group(0))
    if not isinstance(parsed, dict):
        raise ValueError("response JSON is not an object")
    return parsed


class GeminiProvider(ProviderAdapter):
    """
    Classify text with Google Gemini.

    The model is asked for a single JSON object; its category label is
    validated against the fixed Category set (unknown labels -> OTHER).
    Gemini reports sentiment as a label only, so the result's sentiment
    score is None and consensus falls back to the local score.
    """

    name = "gemini"
    category_map = {category.value.upper(): category for category in Category}

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        super().__init__(api_key if api_key is not None else settings.gemini_api_key)
        self.model_name = model_name or settings.gemini_model
        self._model = None

    def _get_model(self):
        """Configure the SDK lazily and cache the model handle."""
        if self._model is None:
            genai.configure(api_key=self._require_key())
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def classify(self, text: str, timeout: float) -> ClassificationResult:
        model = self._get_model()
        prompt = MODERATION_PROMPT.format(text=text.replace('"', '\\"'))

        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(temperature=0.0),
                request_options={"timeout": timeout},
            )
            reply = response.text
        except Exception as e:
            self._logger.warning("provider_call_failed", provider=self.name, reason=str(e))
            raise ProviderCallError(self.name, f"Gemini request failed: {e}") from e

        try:
            analysis = extract_json_object(reply)
            return self._to_result(analysis)
        except (ValueError, TypeError) as e:
            self._logger.warning("provider_bad_payload", provider=self.name, reason=str(e))
            raise ProviderCallError(self.name, f"invalid JSON response: {e}") from e

    def _to_result(self, analysis: dict[str, Any]) -> ClassificationResult:
        category = self.map_category(analysis.get("category"))
        return ClassificationResult(
            category=category,
            confidence=float(analysis.get("confidence") or 0.0),
            sentiment=Sentiment(
                score=None,
                label=SentimentLabel.from_label(analysis.get("sentiment")),
            ),
            toxicity=Toxicity(score=float(analysis.get("toxicity_score") or 0.0)),
            source=self.name,
            explanation=analysis.get("explanation"),
            language=analysis.get("language"),
        )


__all__ = ["GeminiProvider", "MODERATION_PROMPT", "extract_json_object"]
