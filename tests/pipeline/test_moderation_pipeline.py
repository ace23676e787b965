"""Tests for ModerationPipeline end-to-end verification.

Tests cover:
- classify() and score() entry points
- verify_submission() with metadata success, timeout, rejection, cancellation
- Fetch cleanup when classification raises
- reload() of rubric and mode, status()
"""

import asyncio
from typing import Optional

import pytest

from content_sentinel.config.engine_config import AnalysisMode, EngineConfig, RubricConfig
from content_sentinel.crawlers import MetadataFetcher
from content_sentinel.exceptions import (
    AllProvidersFailedError,
    InvalidInputError,
    MetadataFetchError,
    ProviderCallError,
)
from content_sentinel.pipeline import ModerationPipeline
from content_sentinel.providers import ProviderAdapter, ProviderRegistry
from content_sentinel.schemas import (
    Author,
    ClassificationResult,
    Engagement,
    PageMetadata,
    Platform,
    RiskLevel,
    Submission,
    VerificationLevel,
)

TWEET_URL = "https://twitter.com/someone/status/1234567890"
RICH_METADATA = PageMetadata(
    accessible=True, title="Post", author="someone", publish_date="2024-01-01", site_name="X"
)


class FakeFetcher:
    """Metadata collaborator returning a fixed value after an optional delay."""

    def __init__(self, metadata: Optional[PageMetadata] = None, error=None, delay: float = 0.0):
        self.metadata = metadata or RICH_METADATA
        self.error = error
        self.delay = delay
        self.urls = []
        self.was_cancelled = False
        self.closed = False

    async def fetch(self, url: str) -> PageMetadata:
        self.urls.append(url)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.was_cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.metadata

    async def close(self) -> None:
        self.closed = True


class FailingProvider(ProviderAdapter):
    name = "gemini"

    def __init__(self, delay: float = 0.0):
        super().__init__(api_key="test-key")
        self.delay = delay
        self.closed = False

    async def classify(self, text: str, timeout: float) -> ClassificationResult:
        await asyncio.sleep(self.delay)
        raise ProviderCallError(self.name, "HTTP error 500")

    async def close(self) -> None:
        self.closed = True


def make_pipeline(fetcher=None, config: Optional[EngineConfig] = None, registry=None):
    return ModerationPipeline(
        config or EngineConfig(),
        registry=registry or ProviderRegistry(),
        fetcher=fetcher or FakeFetcher(),
    )


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def submission() -> Submission:
    return Submission(
        content="A perfectly ordinary post about the weather in the city today.",
        platform=Platform.TWITTER,
        original_url=TWEET_URL,
        author=Author(username="someone", profile_url="https://twitter.com/someone", verified=True),
        engagement=Engagement(likes=3),
    )


# ── Entry Points ──────────────────────────────────────────────────────────


class TestEntryPoints:
    @pytest.mark.asyncio
    async def test_classify(self) -> None:
        pipeline = make_pipeline()
        result = await pipeline.classify("You are stupid and ugly, go kill yourself!")
        assert result.source == "local"
        assert result.toxicity.score > 0.4

    @pytest.mark.asyncio
    async def test_classify_rejects_blank(self) -> None:
        with pytest.raises(InvalidInputError):
            await make_pipeline().classify("")

    def test_score_without_metadata(self, submission) -> None:
        pipeline = make_pipeline()
        consensus = ClassificationResult(source="local")

        score, risk = pipeline.score(submission, consensus)

        assert score.total == 80
        assert score.level == VerificationLevel.HIGH
        assert risk.risk_level == RiskLevel.VERY_LOW


# ── verify_submission ─────────────────────────────────────────────────────


class TestVerifySubmission:
    @pytest.mark.asyncio
    async def test_end_to_end(self, submission) -> None:
        fetcher = FakeFetcher()
        pipeline = make_pipeline(fetcher)

        consensus, record = await pipeline.verify_submission(submission)

        assert fetcher.urls == [TWEET_URL]
        assert consensus.category.value == "other"
        assert record.score.total == 100
        assert record.metadata == RICH_METADATA
        assert record.risk.risk_level == RiskLevel.VERY_LOW

    @pytest.mark.asyncio
    async def test_no_url_skips_fetch(self) -> None:
        fetcher = FakeFetcher()
        pipeline = make_pipeline(fetcher)

        _, record = await pipeline.verify_submission(Submission(content="x" * 30))

        assert fetcher.urls == []
        assert record.metadata is None
        assert record.score.total == 5
        assert record.score.level == VerificationLevel.VERY_LOW

    @pytest.mark.asyncio
    async def test_metadata_timeout_degrades(self, submission) -> None:
        fetcher = FakeFetcher(delay=5.0)
        pipeline = make_pipeline(fetcher, EngineConfig(metadata_timeout=0.05))

        _, record = await pipeline.verify_submission(submission)

        assert record.metadata.accessible is False
        assert record.metadata.error == "timeout after 0.05s"
        assert fetcher.was_cancelled is True
        assert record.score.total == 80

    @pytest.mark.asyncio
    async def test_rejected_url_degrades(self, submission) -> None:
        fetcher = FakeFetcher(error=MetadataFetchError(TWEET_URL, "URL must be absolute http(s)"))
        pipeline = make_pipeline(fetcher)

        _, record = await pipeline.verify_submission(submission)

        assert record.metadata.error == "URL must be absolute http(s)"
        metadata_factor = next(f for f in record.score.factors if f.name == "Metadata Richness")
        assert metadata_factor.points_awarded == 0

    @pytest.mark.asyncio
    async def test_unparseable_url_degrades(self) -> None:
        fetcher = MetadataFetcher()
        pipeline = make_pipeline(fetcher)
        submission = Submission(content="x" * 60, original_url="http://[::1/post")

        _, record = await pipeline.verify_submission(submission)

        assert record.metadata.accessible is False
        assert record.metadata.error == "malformed URL"
        assert record.score.total == 40
        await pipeline.close()

    @pytest.mark.asyncio
    async def test_cancel_signal_stops_fetch(self, submission) -> None:
        fetcher = FakeFetcher(delay=5.0)
        pipeline = make_pipeline(fetcher)
        cancel = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, cancel.set)

        _, record = await pipeline.verify_submission(submission, cancel_event=cancel)

        assert record.metadata.error == "cancelled"
        assert fetcher.was_cancelled is True

    @pytest.mark.asyncio
    async def test_classification_failure_cancels_fetch(self, submission) -> None:
        fetcher = FakeFetcher(delay=5.0)
        pipeline = make_pipeline(
            fetcher,
            EngineConfig(mode=AnalysisMode.COMBINED, providers=("gemini",)),
            ProviderRegistry([FailingProvider(delay=0.05)]),
        )

        with pytest.raises(AllProvidersFailedError):
            await pipeline.verify_submission(submission)

        assert fetcher.was_cancelled is True

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self) -> None:
        fetcher = FakeFetcher(delay=5.0)
        pipeline = make_pipeline(fetcher)

        with pytest.raises(InvalidInputError):
            await pipeline.verify_submission(Submission(content=" ", original_url=TWEET_URL))


# ── Reload and Status ─────────────────────────────────────────────────────


class TestReloadAndStatus:
    def test_reload_swaps_rubric(self, submission) -> None:
        pipeline = make_pipeline()
        consensus = ClassificationResult(source="local")

        pipeline.reload(EngineConfig(rubric=RubricConfig(verified_author_points=0)))
        score, _ = pipeline.score(submission, consensus)

        assert score.total == 65

    def test_reload_swaps_risk_thresholds(self, submission) -> None:
        pipeline = make_pipeline()
        consensus = ClassificationResult(source="local")

        pipeline.reload(EngineConfig(rubric=RubricConfig(medium_verification=90)))
        score, risk = pipeline.score(submission, consensus)

        assert score.total == 80
        assert risk.risk_level == RiskLevel.LOW

    def test_status(self) -> None:
        pipeline = make_pipeline(config=EngineConfig(metadata_timeout=4.0))

        status = pipeline.status()

        assert status["mode"] == "local_only"
        assert status["metadata_timeout"] == 4.0
        assert status["level_thresholds"] == {"high": 80, "medium": 60, "low": 40}

    @pytest.mark.asyncio
    async def test_context_manager_closes_fetcher(self) -> None:
        fetcher = FakeFetcher()
        async with make_pipeline(fetcher) as pipeline:
            assert pipeline.config.mode == AnalysisMode.LOCAL_ONLY
        assert fetcher.closed is True

    @pytest.mark.asyncio
    async def test_close_releases_reloaded_providers(self) -> None:
        old = FailingProvider()
        new = FailingProvider()
        fetcher = FakeFetcher()
        pipeline = make_pipeline(fetcher, registry=ProviderRegistry([old]))

        pipeline.reload(EngineConfig(providers=("gemini",)), ProviderRegistry([new]))
        await pipeline.close()

        assert old.closed is True
        assert new.closed is True
        assert fetcher.closed is True
