"""Consensus analyzer: local classification reconciled with external providers.

Modes:
- local_only: lexical classifier only, providers never called
- single_provider: one adapter call; failures fall back to the local result
- combined: every configured adapter called concurrently, each under its own
  timeout, the whole request under an overall deadline and an optional
  cancel signal

Provider failures are values (ProviderError), never retried. The only
exception combined mode raises is AllProvidersFailedError, and only when
providers were configured, none answered and the request was not cancelled.
"""

import asyncio
import re
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from content_sentinel.config.engine_config import AnalysisMode, EngineConfig
from content_sentinel.config.settings import settings
from content_sentinel.exceptions import (
    AllProvidersFailedError,
    ConfigurationError,
    InvalidInputError,
    ProviderCallError,
)
from content_sentinel.providers.base import ProviderAdapter
from content_sentinel.providers.registry import PROVIDER_FACTORIES, ProviderRegistry
from content_sentinel.schemas import (
    ClassificationResult,
    ConsensusResult,
    ProviderError,
    ProviderOutcome,
)
from content_sentinel.sifters.consensus.combiner import (
    FALLBACK_SOURCE,
    combine,
    combine_hybrid,
    from_local,
)
from content_sentinel.sifters.lexical import LexicalClassifier
from content_sentinel.utils.logging import get_correlation_id, get_structured_logger

_DEVANAGARI = re.compile("[\u0900-\u097F]")
_LATIN = re.compile(r"[a-zA-Z]")
SELECTIVE_LENGTH = 50


def needs_external_opinion(text: str) -> bool:
    """
    Whether a text is worth an external opinion.

    True for mixed Devanagari/Latin script, texts longer than 50 characters,
    questions, and hedged texts containing "maybe".
    """
    mixed = bool(_DEVANAGARI.search(text)) and bool(_LATIN.search(text))
    return mixed or len(text) > SELECTIVE_LENGTH or "?" in text or "maybe" in text


@dataclass(frozen=True)
class EngineSnapshot:
    """Configuration, provider registry and classifier used by one request."""

    config: EngineConfig
    registry: ProviderRegistry
    classifier: LexicalClassifier


class ConsensusAnalyzer:
    """
    Reconcile the local lexical result with external provider opinions.

    Usage:
        analyzer = ConsensusAnalyzer(EngineConfig(mode=AnalysisMode.COMBINED,
                                                  providers=("gemini", "perspective")))
        result = await analyzer.analyze("some text")
        if result.needs_review:
            ...

    The active EngineSnapshot is replaced wholesale by reload(); each
    analyze() call captures the snapshot once at entry. A replaced snapshot
    is retired and its adapters are closed once no request still uses it.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[ProviderRegistry] = None,
    ):
        self._snapshot = self._build_snapshot(config or settings.to_engine_config(), registry)
        self._retired: list[EngineSnapshot] = []
        # Requests running per snapshot, keyed by id(snapshot)
        self._in_flight: Counter = Counter()
        self._logger = get_structured_logger("ConsensusAnalyzer")

    @property
    def snapshot(self) -> EngineSnapshot:
        return self._snapshot

    @property
    def config(self) -> EngineConfig:
        return self._snapshot.config

    @staticmethod
    def _build_snapshot(
        config: EngineConfig, registry: Optional[ProviderRegistry]
    ) -> EngineSnapshot:
        if registry is None:
            names = list(dict.fromkeys(config.providers))
            if config.single_provider in PROVIDER_FACTORIES:
                names.append(config.single_provider)
            unknown = [n for n in config.providers if n not in PROVIDER_FACTORIES]
            if unknown:
                raise ConfigurationError(f"Unknown provider(s): {', '.join(unknown)}")
            registry = ProviderRegistry.from_settings(list(dict.fromkeys(names)))
        else:
            missing = [n for n in config.providers if n not in registry]
            if missing:
                raise ConfigurationError(
                    f"Provider(s) not in registry: {', '.join(missing)}"
                )

        classifier = LexicalClassifier(
            min_confidence=config.min_confidence,
            min_category_score=config.min_category_score,
            keyword_limit=config.keyword_limit,
        )
        return EngineSnapshot(config=config, registry=registry, classifier=classifier)

    def reload(
        self, config: EngineConfig, registry: Optional[ProviderRegistry] = None
    ) -> EngineSnapshot:
        """
        Swap in a new configuration snapshot.

        In-flight requests keep the snapshot they captured. The previous
        registry's adapters are closed after the last of those requests
        finishes, or by close().

        Raises:
            ConfigurationError: If the config names providers that cannot be built
        """
        snapshot = self._build_snapshot(config, registry)
        previous = self._snapshot
        self._snapshot = snapshot
        if previous.registry is not snapshot.registry:
            self._retired.append(previous)
        self._logger.info(
            "engine_reloaded",
            mode=config.mode.value,
            providers=list(config.providers),
        )
        return snapshot

    async def _release_retired(self) -> None:
        """Close adapters of retired snapshots that no request still uses."""
        idle = [s for s in self._retired if not self._in_flight[id(s)]]
        if not idle:
            return
        self._retired = [s for s in self._retired if self._in_flight[id(s)]]

        # Adapters shared with a live snapshot stay open
        keep = {
            id(adapter)
            for snap in (self._snapshot, *self._retired)
            for adapter in snap.registry.adapters()
        }
        closed = []
        for snap in idle:
            for adapter in snap.registry.adapters():
                if id(adapter) in keep:
                    continue
                keep.add(id(adapter))
                await adapter.close()
                closed.append(adapter.name)
        self._logger.debug("retired_registry_closed", snapshots=len(idle), adapters=closed)

    async def close(self) -> None:
        """Close the adapters of the active snapshot and of every retired one."""
        seen = set()
        for snap in (self._snapshot, *self._retired):
            for adapter in snap.registry.adapters():
                if id(adapter) in seen:
                    continue
                seen.add(id(adapter))
                await adapter.close()
        self._retired = []

    def status(self) -> dict:
        """Mode, priority and provider availability of the active snapshot."""
        snap = self._snapshot
        return {
            "mode": snap.config.mode.value,
            "single_provider": snap.config.single_provider,
            "priority": list(snap.config.priority),
            "providers": list(snap.config.providers),
            "available_providers": {
                name: snap.registry.get(name).configured for name in snap.registry.names()
            },
            "selective_external": snap.config.selective_external,
            "provider_timeout": snap.config.provider_timeout,
            "analysis_deadline": snap.config.analysis_deadline,
        }

    @staticmethod
    def _resolve_mode(mode: Union[AnalysisMode, str, None], config: EngineConfig) -> AnalysisMode:
        if mode is None:
            return config.mode
        try:
            return AnalysisMode(mode)
        except ValueError:
            raise InvalidInputError(f"Unknown analysis mode: {mode}") from None

    async def analyze(
        self,
        text: str,
        mode: Union[AnalysisMode, str, None] = None,
        provider: Optional[str] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ConsensusResult:
        """
        Classify text and reconcile local and external opinions.

        Args:
            text: Raw submission text
            mode: Override of the snapshot's default mode
            provider: Override of the single_provider name
            cancel_event: Setting this event stops waiting for providers

        Returns:
            ConsensusResult

        Raises:
            InvalidInputError: Empty or non-text input, or unknown mode
            AllProvidersFailedError: Combined mode, every provider failed
        """
        snap = self._snapshot
        self._in_flight[id(snap)] += 1
        try:
            return await self._analyze(snap, text, mode, provider, cancel_event)
        finally:
            self._in_flight[id(snap)] -= 1
            if self._in_flight[id(snap)] <= 0:
                del self._in_flight[id(snap)]
            if self._retired:
                await self._release_retired()

    async def _analyze(
        self,
        snap: EngineSnapshot,
        text: str,
        mode: Union[AnalysisMode, str, None],
        provider: Optional[str],
        cancel_event: Optional[asyncio.Event],
    ) -> ConsensusResult:
        config = snap.config
        local = snap.classifier.classify(text)
        resolved = self._resolve_mode(mode, config)
        log = self._logger.bind(request_id=get_correlation_id(), mode=resolved.value)

        if resolved is AnalysisMode.LOCAL_ONLY:
            return from_local(local, resolved)

        if config.selective_external and not needs_external_opinion(text):
            log.debug("external_skipped", reason="text does not need an external opinion")
            return from_local(local, resolved)

        if resolved is AnalysisMode.SINGLE_PROVIDER:
            return await self._single(snap, text, local, provider or config.single_provider,
                                      cancel_event, log)
        return await self._combined(snap, text, local, cancel_event, log)

    async def _single(
        self,
        snap: EngineSnapshot,
        text: str,
        local: ClassificationResult,
        name: str,
        cancel_event: Optional[asyncio.Event],
        log,
    ) -> ConsensusResult:
        adapter = snap.registry.get(name)
        if adapter is None:
            error = ProviderError(provider=name, reason="provider not configured")
            log.warning("provider_failed", provider=name, reason=error.reason)
            return from_local(local, AnalysisMode.SINGLE_PROVIDER, source=FALLBACK_SOURCE,
                              errors=[error])

        outcomes, cancelled = await self._collect([adapter], text, snap.config, cancel_event, log)
        outcome = outcomes[0]
        if isinstance(outcome, ClassificationResult):
            return combine_hybrid(local, outcome, snap.config, AnalysisMode.SINGLE_PROVIDER)

        log.info("falling_back_to_local", provider=name, reason=outcome.reason)
        return from_local(local, AnalysisMode.SINGLE_PROVIDER, source=FALLBACK_SOURCE,
                          errors=[outcome], cancelled=cancelled)

    async def _combined(
        self,
        snap: EngineSnapshot,
        text: str,
        local: ClassificationResult,
        cancel_event: Optional[asyncio.Event],
        log,
    ) -> ConsensusResult:
        adapters = [snap.registry.get(name) for name in snap.config.providers]
        adapters = [a for a in adapters if a is not None]
        if not adapters:
            log.debug("no_providers_configured")
            return from_local(local, AnalysisMode.COMBINED)

        outcomes, cancelled = await self._collect(adapters, text, snap.config, cancel_event, log)
        results = [o for o in outcomes if isinstance(o, ClassificationResult)]
        errors = [o for o in outcomes if isinstance(o, ProviderError)]

        if not results and not cancelled:
            log.error("all_providers_failed", errors=[e.model_dump() for e in errors])
            raise AllProvidersFailedError(errors)

        consensus = combine(local, results, snap.config, AnalysisMode.COMBINED, errors, cancelled)
        log.info(
            "consensus_complete",
            category=consensus.category.value,
            responded=len(results),
            failed=len(errors),
            agreement=consensus.agreement,
            cancelled=cancelled,
        )
        return consensus

    async def _call(self, adapter: ProviderAdapter, text: str, timeout: float, log) -> ProviderOutcome:
        """Run one adapter under its own timeout; failures become ProviderError values."""
        try:
            result = await asyncio.wait_for(adapter.classify(text, timeout), timeout=timeout)
        except asyncio.TimeoutError:
            reason = f"timeout after {timeout:g}s"
        except ProviderCallError as e:
            reason = e.reason
        except Exception as e:
            reason = f"unexpected error: {e}"
        else:
            if result.source != adapter.name:
                result = result.model_copy(update={"source": adapter.name})
            log.debug("provider_responded", provider=adapter.name,
                      category=result.category.value)
            return result

        log.warning("provider_failed", provider=adapter.name, reason=reason)
        return ProviderError(provider=adapter.name, reason=reason)

    async def _collect(
        self,
        adapters: Sequence[ProviderAdapter],
        text: str,
        config: EngineConfig,
        cancel_event: Optional[asyncio.Event],
        log,
    ) -> tuple[list[ProviderOutcome], bool]:
        """
        Fan out to adapters and wait for all of them, the deadline, or cancellation.

        Returns:
            (outcomes in adapter order, whether the cancel signal fired)
        """
        if cancel_event is not None and cancel_event.is_set():
            log.info("request_cancelled", stage="before_fanout")
            return [ProviderError(provider=a.name, reason="cancelled") for a in adapters], True

        loop = asyncio.get_running_loop()
        tasks = [
            asyncio.create_task(self._call(adapter, text, config.provider_timeout, log))
            for adapter in adapters
        ]
        cancel_waiter = (
            asyncio.create_task(cancel_event.wait()) if cancel_event is not None else None
        )
        deadline = loop.time() + config.analysis_deadline
        pending = set(tasks)
        cancelled = False

        try:
            while pending:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                waiting = pending | {cancel_waiter} if cancel_waiter else pending
                done, _ = await asyncio.wait(
                    waiting, timeout=remaining, return_when=asyncio.FIRST_COMPLETED
                )
                pending -= done
                if cancel_waiter is not None and cancel_waiter in done:
                    cancelled = True
                    break
                if not done:
                    break
        finally:
            # Also runs when analyze() itself is cancelled
            for task in pending:
                task.cancel()
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        unsettled_reason = "cancelled" if cancelled else "deadline exceeded"
        outcomes: list[ProviderOutcome] = []
        for adapter, task in zip(adapters, tasks):
            if task.cancelled():
                log.warning("provider_failed", provider=adapter.name, reason=unsettled_reason)
                outcomes.append(ProviderError(provider=adapter.name, reason=unsettled_reason))
            else:
                outcomes.append(task.result())
        if cancelled:
            log.info("request_cancelled", stage="fanout", settled=len(tasks) - len(pending))
        return outcomes, cancelled


__all__ = ["ConsensusAnalyzer", "EngineSnapshot", "needs_external_opinion"]
