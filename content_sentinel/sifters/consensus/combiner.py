"""Reconciliation rules for local and external classification opinions.

Two rules, chosen by how many external sources responded:

- hybrid (exactly one): external category, weighted confidence, max toxicity,
  agreement boost, disagreement flagged for review
- majority (two or more): vote over every responding source including the
  local classifier, ties broken by the configured priority order; confidence
  and toxicity are means

Pure functions of their inputs and the EngineConfig snapshot.
"""

from collections import Counter
from statistics import fmean
from typing import Sequence

from content_sentinel.config.engine_config import AnalysisMode, EngineConfig
from content_sentinel.schemas import (
    Category,
    ClassificationResult,
    ConsensusResult,
    ProviderError,
    Sentiment,
    SentimentLabel,
    Toxicity,
)

HYBRID_SOURCE = "hybrid"
COMBINED_SOURCE = "combined"
FALLBACK_SOURCE = "local_fallback"


def _explanations(results: Sequence[ClassificationResult]) -> dict[str, str]:
    return {
        r.source: r.explanation
        or f"{r.source}: {r.category.value} ({r.confidence * 100:.1f}%)"
        for r in results
    }


def from_local(
    local: ClassificationResult,
    mode: AnalysisMode,
    source: str = "local",
    errors: Sequence[ProviderError] = (),
    cancelled: bool = False,
) -> ConsensusResult:
    """Wrap the local result as a consensus with no external opinion."""
    data = local.model_dump(exclude={"source"})
    return ConsensusResult(
        **data,
        source=source,
        mode=mode,
        agreement=True,
        needs_review=False,
        local_category=local.category,
        contributing_sources={"local"},
        provider_errors=list(errors),
        cancelled=cancelled,
        explanations=_explanations([local]),
    )


def combine_hybrid(
    local: ClassificationResult,
    external: ClassificationResult,
    config: EngineConfig,
    mode: AnalysisMode,
    errors: Sequence[ProviderError] = (),
    cancelled: bool = False,
) -> ConsensusResult:
    """
    Combine the local result with exactly one external result.

    Args:
        local: Lexical classifier result
        external: The single responding provider's result
        config: Engine snapshot (weights, boost factor, boost ceiling)
        mode: Mode the request ran in
        errors: Failures of other providers, if any
        cancelled: Whether the request was cut short

    Returns:
        ConsensusResult tagged source="hybrid"
    """
    weight = config.external_weight
    confidence = weight * external.confidence + (1.0 - weight) * local.confidence

    if external.toxicity.score >= local.toxicity.score:
        toxicity = Toxicity(
            score=external.toxicity.score,
            contributions=external.toxicity.contributions or local.toxicity.contributions,
        )
    else:
        toxicity = local.toxicity

    score = external.sentiment.score
    if score is None:
        score = local.sentiment.score
    sentiment = Sentiment(score=score, label=external.sentiment.label)

    agreement = local.category == external.category
    boosted = False
    disagreement_reason = None
    if agreement and confidence < config.boost_ceiling:
        confidence = min(1.0, confidence * config.confidence_boost)
        boosted = True
    elif not agreement:
        disagreement_reason = (
            f"Local detected {local.category.value}, "
            f"{external.source} detected {external.category.value}"
        )

    return ConsensusResult(
        category=external.category,
        confidence=confidence,
        sentiment=sentiment,
        toxicity=toxicity,
        keywords=list(local.keywords),
        source=HYBRID_SOURCE,
        explanation=external.explanation,
        language=external.language,
        text_metadata=local.text_metadata,
        mode=mode,
        agreement=agreement,
        agreement_boosted=boosted,
        needs_review=not agreement,
        local_category=local.category,
        external_category=external.category,
        disagreement_reason=disagreement_reason,
        contributing_sources={"local", external.source},
        provider_errors=list(errors),
        cancelled=cancelled,
        explanations=_explanations([local, external]),
    )


def _vote(labels: Sequence[tuple[str, object]], config: EngineConfig):
    """
    Majority label; ties go to the label whose best-ranked supporter ranks highest.

    Args:
        labels: (source, label) pairs
        config: Engine snapshot providing the priority order
    """
    counts = Counter(label for _, label in labels)
    best_rank: dict[object, int] = {}
    for source, label in labels:
        rank = config.rank(source)
        if label not in best_rank or rank < best_rank[label]:
            best_rank[label] = rank
    return min(counts, key=lambda label: (-counts[label], best_rank[label]))


def combine_majority(
    local: ClassificationResult,
    externals: Sequence[ClassificationResult],
    config: EngineConfig,
    mode: AnalysisMode,
    errors: Sequence[ProviderError] = (),
    cancelled: bool = False,
) -> ConsensusResult:
    """
    Combine the local result with two or more external results.

    Returns:
        ConsensusResult tagged source="combined"; agreement is judged against
        the local category
    """
    results = [local, *externals]

    category: Category = _vote([(r.source, r.category) for r in results], config)
    label: SentimentLabel = _vote([(r.source, r.sentiment.label) for r in results], config)

    voter_scores = [
        r.sentiment.score
        for r in results
        if r.sentiment.label == label and r.sentiment.score is not None
    ]
    sentiment_score = fmean(voter_scores) if voter_scores else local.sentiment.score

    agreement = category == local.category
    external_categories = [r.category for r in externals]
    external_category = _vote([(r.source, r.category) for r in externals], config)

    return ConsensusResult(
        category=category,
        confidence=fmean(r.confidence for r in results),
        sentiment=Sentiment(score=sentiment_score, label=label),
        toxicity=Toxicity(
            score=fmean(r.toxicity.score for r in results),
            contributions=list(local.toxicity.contributions),
        ),
        keywords=list(local.keywords),
        source=COMBINED_SOURCE,
        explanation=f"Combined analysis from {len(results)} sources",
        language=next((r.language for r in externals if r.language), None),
        text_metadata=local.text_metadata,
        mode=mode,
        agreement=agreement,
        needs_review=not agreement,
        local_category=local.category,
        external_category=external_category,
        disagreement_reason=None
        if agreement
        else (
            f"Local detected {local.category.value}, majority detected {category.value} "
            f"(external votes: {', '.join(c.value for c in external_categories)})"
        ),
        contributing_sources={r.source for r in results},
        provider_errors=list(errors),
        cancelled=cancelled,
        explanations=_explanations(results),
    )


def combine(
    local: ClassificationResult,
    externals: Sequence[ClassificationResult],
    config: EngineConfig,
    mode: AnalysisMode,
    errors: Sequence[ProviderError] = (),
    cancelled: bool = False,
) -> ConsensusResult:
    """Dispatch to the rule matching the number of external results."""
    if not externals:
        source = FALLBACK_SOURCE if errors else "local"
        return from_local(local, mode, source=source, errors=errors, cancelled=cancelled)
    if len(externals) == 1:
        return combine_hybrid(local, externals[0], config, mode, errors, cancelled)
    return combine_majority(local, externals, config, mode, errors, cancelled)


__all__ = [
    "COMBINED_SOURCE",
    "FALLBACK_SOURCE",
    "HYBRID_SOURCE",
    "combine",
    "combine_hybrid",
    "combine_majority",
    "from_local",
]
