"""Tests for HuggingFaceProvider against a mocked Inference API."""

import asyncio

import httpx
import pytest

from content_sentinel.exceptions import ProviderCallError
from content_sentinel.providers import HuggingFaceProvider
from content_sentinel.providers.huggingface_provider import (
    CLASSIFICATION_MODEL,
    SENTIMENT_MODEL,
    TOXICITY_MODEL,
)
from content_sentinel.schemas import Category, SentimentLabel

BASE_URL = "https://hf.test/models"

RESPONSES = {
    TOXICITY_MODEL: [[{"label": "toxic", "score": 0.91}, {"label": "insult", "score": 0.7}]],
    SENTIMENT_MODEL: [[
        {"label": "negative", "score": 0.85},
        {"label": "neutral", "score": 0.1},
        {"label": "positive", "score": 0.05},
    ]],
    CLASSIFICATION_MODEL: [[{"label": "insult", "score": 0.66}, {"label": "toxic", "score": 0.2}]],
}


def make_provider(handler, api_key: str = "hf-test") -> HuggingFaceProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HuggingFaceProvider(api_key=api_key, client=client, base_url=BASE_URL)


def inference_handler(request: httpx.Request) -> httpx.Response:
    model = request.url.path.removeprefix("/models/")
    return httpx.Response(200, json=RESPONSES[model])


# ── Success ───────────────────────────────────────────────────────────────


class TestClassify:
    @pytest.mark.asyncio
    async def test_combines_three_models(self) -> None:
        provider = make_provider(inference_handler)

        result = await provider.classify("you are an idiot", timeout=5.0)

        assert result.category == Category.CYBERBULLYING
        assert result.confidence == pytest.approx(0.66)
        assert result.toxicity.score == pytest.approx(0.91)
        assert [c.name for c in result.toxicity.contributions] == ["toxic-bert"]
        assert result.sentiment.label == SentimentLabel.NEGATIVE
        assert result.sentiment.score == pytest.approx(-0.85)
        assert result.source == "huggingface"
        assert result.explanation == "HuggingFace analysis: insult (66.0%)"
        await provider.close()

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["Authorization"])
            return inference_handler(request)

        provider = make_provider(handler)
        await provider.classify("text", timeout=5.0)

        assert seen == ["Bearer hf-test"] * 3
        await provider.close()

    @pytest.mark.parametrize(
        "label,category",
        [
            ("threat", Category.VIOLENCE),
            ("identity_hate", Category.HATE_SPEECH),
            ("obscene", Category.HARASSMENT),
            ("non-toxic", Category.OTHER),
        ],
    )
    def test_category_map(self, label, category) -> None:
        assert HuggingFaceProvider(api_key="k").map_category(label) == category


# ── Failures ──────────────────────────────────────────────────────────────


class TestFailures:
    @pytest.mark.asyncio
    async def test_http_error(self) -> None:
        provider = make_provider(lambda request: httpx.Response(503, json={"error": "loading"}))

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.reason == "HTTP error 503"
        await provider.close()

    @pytest.mark.asyncio
    async def test_transport_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider = make_provider(handler)

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.reason == "timeout"
        await provider.close()

    @pytest.mark.asyncio
    async def test_unexpected_payload(self) -> None:
        provider = make_provider(lambda request: httpx.Response(200, json={"error": "?"}))

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.reason.startswith("invalid response")
        await provider.close()

    @pytest.mark.asyncio
    async def test_failed_model_cancels_siblings(self) -> None:
        cancelled = []

        async def handler(request: httpx.Request) -> httpx.Response:
            model = request.url.path.removeprefix("/models/")
            if model == TOXICITY_MODEL:
                return httpx.Response(500, json={"error": "boom"})
            try:
                await asyncio.sleep(5.0)
            except asyncio.CancelledError:
                cancelled.append(model)
                raise
            return httpx.Response(200, json=RESPONSES[model])

        provider = make_provider(handler)

        with pytest.raises(ProviderCallError) as exc_info:
            await asyncio.wait_for(provider.classify("text", timeout=10.0), timeout=2.0)

        assert exc_info.value.reason == "HTTP error 500"
        assert sorted(cancelled) == sorted([SENTIMENT_MODEL, CLASSIFICATION_MODEL])
        await provider.close()

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        provider = make_provider(lambda request: httpx.Response(200, text="<html>busy</html>"))

        with pytest.raises(ProviderCallError) as exc_info:
            await provider.classify("text", timeout=5.0)

        assert exc_info.value.reason.startswith("invalid response")
        await provider.close()

    @pytest.mark.asyncio
    async def test_missing_key_makes_no_request(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return inference_handler(request)

        provider = make_provider(handler, api_key="")

        with pytest.raises(ProviderCallError, match="API key not configured"):
            await provider.classify("text", timeout=5.0)
        assert calls == []
        await provider.close()
