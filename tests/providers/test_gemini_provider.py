"""Tests for GeminiProvider with a mocked model handle."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_sentinel.exceptions import ProviderCallError
from content_sentinel.providers import GeminiProvider
from content_sentinel.providers.gemini_provider import extract_json_object
from content_sentinel.schemas import Category, SentimentLabel

REPLY = """```json
{
  "category": "cyberbullying",
  "toxicity_score": 0.82,
  "confidence": 0.9,
  "sentiment": "negative",
  "language": "english",
  "explanation": "Personal insults and a death wish"
}
```"""


# ── Fixtures ──────────────────────────────────────────────────────────────


def provider_replying(reply=None, error=None) -> GeminiProvider:
    provider = GeminiProvider(api_key="test-key", model_name="gemini-test")
    model = MagicMock()
    if error is not None:
        model.generate_content_async = AsyncMock(side_effect=error)
    else:
        model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text=reply))
    provider._model = model
    return provider


# ── JSON Extraction ───────────────────────────────────────────────────────


class TestExtractJsonObject:
    def test_code_block(self) -> None:
        assert extract_json_object(REPLY)["category"] == "cyberbullying"

    def test_surrounding_prose(self) -> None:
        reply = 'Here is my analysis: {"category": "scam"} Hope that helps.'
        assert extract_json_object(reply) == {"category": "scam"}

    @pytest.mark.parametrize("reply", ["", "no json here", None])
    def test_missing_object(self, reply) -> None:
        with pytest.raises(ValueError):
            extract_json_object(reply)

    def test_malformed_json(self) -> None:
        with pytest.raises(ValueError):
            extract_json_object("{category: scam,}")


# ── Classification ────────────────────────────────────────────────────────


class TestClassify:
    @pytest.mark.asyncio
    async def test_maps_reply(self) -> None:
        provider = provider_replying(REPLY)

        result = await provider.classify("some text", timeout=5.0)

        assert result.category == Category.CYBERBULLYING
        assert result.confidence == pytest.approx(0.9)
        assert result.toxicity.score == pytest.approx(0.82)
        assert result.sentiment.label == SentimentLabel.NEGATIVE
        assert result.sentiment.score is None
        assert result.source == "gemini"
        assert result.language == "english"

    @pytest.mark.asyncio
    async def test_timeout_forwarded_to_sdk(self) -> None:
        provider = provider_replying(REPLY)

        await provider.classify("some text", timeout=3.5)

        kwargs = provider._model.generate_content_async.call_args.kwargs
        assert kwargs["request_options"] == {"timeout": 3.5}

    @pytest.mark.asyncio
    async def test_unknown_category_is_other(self) -> None:
        provider = provider_replying('{"category": "spam", "confidence": 0.4}')
        result = await provider.classify("text", timeout=5.0)
        assert result.category == Category.OTHER

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self) -> None:
        provider = provider_replying(error=RuntimeError("quota exceeded"))

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.provider == "gemini"
        assert "quota exceeded" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_unparseable_reply(self) -> None:
        provider = provider_replying("I cannot help with that.")

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.reason.startswith("invalid JSON response")

    @pytest.mark.asyncio
    async def test_missing_key(self) -> None:
        provider = GeminiProvider(api_key="")

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.reason == "API key not configured"
        assert provider.configured is False
