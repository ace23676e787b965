"""Engine entry points: classification, verification scoring, end-to-end checks.

Usage:
    from content_sentinel.pipeline import ModerationPipeline

    async with ModerationPipeline() as pipeline:
        consensus = await pipeline.classify("some post text")
        score, risk = pipeline.score(submission, consensus, metadata)

        # Or classify + fetch metadata + score in one call:
        consensus, record = await pipeline.verify_submission(submission)
"""

import asyncio
from typing import Optional, Union

from content_sentinel.config.engine_config import AnalysisMode, EngineConfig
from content_sentinel.config.settings import settings
from content_sentinel.crawlers.metadata_fetcher import MetadataFetcher
from content_sentinel.exceptions import MetadataFetchError
from content_sentinel.providers.registry import ProviderRegistry
from content_sentinel.schemas import (
    ClassificationResult,
    ConsensusResult,
    PageMetadata,
    RiskAssessment,
    Submission,
    VerificationRecord,
    VerificationScore,
)
from content_sentinel.sifters.consensus import ConsensusAnalyzer
from content_sentinel.sifters.verification import VerificationScorer
from content_sentinel.utils.logging import get_structured_logger


class ModerationPipeline:
    """Wires the consensus analyzer, verification scorer and metadata fetcher.

    Configuration is one immutable EngineConfig. reload() swaps it (and the
    rubric-bound scorer) without disturbing requests already in flight.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[ProviderRegistry] = None,
        fetcher: Optional[MetadataFetcher] = None,
    ) -> None:
        """Initialize ModerationPipeline.

        Args:
            config: Engine snapshot. Built from environment settings if None.
            registry: Provider adapters. Built from settings if None.
            fetcher: Metadata collaborator. Default httpx fetcher if None.
        """
        config = config or settings.to_engine_config()
        self._analyzer = ConsensusAnalyzer(config, registry)
        self._scorer = VerificationScorer(config.rubric)
        self._fetcher = fetcher or MetadataFetcher(timeout=config.metadata_timeout)
        self._logger = get_structured_logger("ModerationPipeline")

    @property
    def config(self) -> EngineConfig:
        return self._analyzer.config

    @property
    def analyzer(self) -> ConsensusAnalyzer:
        return self._analyzer

    async def classify(
        self,
        text: str,
        mode: Union[AnalysisMode, str, None] = None,
        provider: Optional[str] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ConsensusResult:
        """Classify text. See ConsensusAnalyzer.analyze."""
        return await self._analyzer.analyze(
            text, mode=mode, provider=provider, cancel_event=cancel_event
        )

    def score(
        self,
        submission: Submission,
        consensus: ClassificationResult,
        metadata: Optional[PageMetadata] = None,
    ) -> tuple[VerificationScore, RiskAssessment]:
        """Score a submission's provenance and derive its risk level."""
        return self._scorer.score(submission, consensus, metadata)

    async def verify_submission(
        self,
        submission: Submission,
        mode: Union[AnalysisMode, str, None] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> tuple[ConsensusResult, VerificationRecord]:
        """Classify the content, fetch URL metadata and score the submission.

        Classification and the metadata fetch run concurrently. Metadata
        failures (timeout, cancellation, bad URL, network errors) degrade to
        PageMetadata(accessible=False) and only cost the metadata factor.

        Args:
            submission: Submission to verify.
            mode: Consensus mode override.
            cancel_event: Cancels outstanding provider calls and the fetch.

        Returns:
            (ConsensusResult, VerificationRecord)

        Raises:
            InvalidInputError: Submission content is empty.
            AllProvidersFailedError: Combined mode and no provider answered.
        """
        timeout = self.config.metadata_timeout
        fetch_task: Optional[asyncio.Task] = None
        if submission.original_url:
            fetch_task = asyncio.create_task(
                self._fetch_metadata(submission.original_url, timeout, cancel_event)
            )

        try:
            consensus = await self.classify(
                submission.content, mode=mode, cancel_event=cancel_event
            )
        except BaseException:
            if fetch_task is not None:
                fetch_task.cancel()
                await asyncio.gather(fetch_task, return_exceptions=True)
            raise

        metadata = await fetch_task if fetch_task is not None else None
        score, risk = self.score(submission, consensus, metadata)

        self._logger.info(
            "submission_verified",
            category=consensus.category.value,
            verification_total=score.total,
            risk_level=risk.risk_level.value,
            metadata_accessible=metadata.accessible if metadata else None,
        )
        return consensus, VerificationRecord(score=score, risk=risk, metadata=metadata)

    async def _fetch_metadata(
        self,
        url: str,
        timeout: float,
        cancel_event: Optional[asyncio.Event],
    ) -> PageMetadata:
        """Fetch metadata under a timeout; every failure becomes an inaccessible value."""
        fetch = asyncio.ensure_future(asyncio.wait_for(self._fetcher.fetch(url), timeout=timeout))
        waiter = asyncio.ensure_future(cancel_event.wait()) if cancel_event else None

        try:
            if waiter is not None:
                await asyncio.wait({fetch, waiter}, return_when=asyncio.FIRST_COMPLETED)
                if not fetch.done():
                    fetch.cancel()
                    await asyncio.gather(fetch, return_exceptions=True)
                    self._logger.info("metadata_fetch_cancelled", url=url)
                    return PageMetadata.inaccessible("cancelled")
            return await fetch
        except asyncio.TimeoutError:
            self._logger.warning("metadata_fetch_timeout", url=url, timeout=timeout)
            return PageMetadata.inaccessible(f"timeout after {timeout:g}s")
        except MetadataFetchError as e:
            self._logger.warning("metadata_fetch_rejected", url=url, reason=e.reason)
            return PageMetadata.inaccessible(e.reason)
        finally:
            if waiter is not None:
                waiter.cancel()
            if not fetch.done():
                fetch.cancel()

    def reload(self, config: EngineConfig, registry: Optional[ProviderRegistry] = None) -> None:
        """Swap in a new configuration snapshot.

        Raises:
            ConfigurationError: Config names providers that cannot be built.
        """
        self._analyzer.reload(config, registry)
        self._scorer = VerificationScorer(config.rubric)

    def status(self) -> dict:
        """Active mode, provider availability and rubric of this engine."""
        status = self._analyzer.status()
        status["metadata_timeout"] = self.config.metadata_timeout
        status["level_thresholds"] = dict(self.config.rubric.level_thresholds)
        return status

    async def close(self) -> None:
        """Release HTTP clients held by providers and the fetcher."""
        await self._analyzer.close()
        await self._fetcher.close()

    async def __aenter__(self) -> "ModerationPipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


__all__ = ["ModerationPipeline"]
