"""Tests for classification schema value objects."""

import pytest
from pydantic import ValidationError

from content_sentinel.config.engine_config import AnalysisMode
from content_sentinel.schemas import (
    Category,
    ClassificationResult,
    ConsensusResult,
    Sentiment,
    SentimentLabel,
    Toxicity,
    ToxicityContribution,
)


class TestClamping:
    def test_confidence_clamped(self) -> None:
        assert ClassificationResult(source="x", confidence=1.7).confidence == 1.0
        assert ClassificationResult(source="x", confidence=-0.3).confidence == 0.0

    def test_sentiment_clamped(self) -> None:
        assert Sentiment(score=-4.0).score == -1.0
        assert Sentiment(score=None).score is None

    def test_toxicity_clamped(self) -> None:
        toxicity = Toxicity(score=2.0, contributions=[ToxicityContribution(name="a", score=1.5)])
        assert toxicity.score == 1.0
        assert toxicity.contributions[0].score == 1.0

    def test_source_required(self) -> None:
        with pytest.raises(ValidationError):
            ClassificationResult()


class TestLabels:
    @pytest.mark.parametrize(
        "label,category",
        [
            ("violence", Category.VIOLENCE),
            (" Hate_Speech ", Category.HATE_SPEECH),
            ("spam", Category.OTHER),
            (None, Category.OTHER),
            ("", Category.OTHER),
        ],
    )
    def test_category_from_label(self, label, category) -> None:
        assert Category.from_label(label) == category

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("POSITIVE", SentimentLabel.POSITIVE),
            ("Negative", SentimentLabel.NEGATIVE),
            ("mixed", SentimentLabel.NEUTRAL),
            (None, SentimentLabel.NEUTRAL),
        ],
    )
    def test_sentiment_from_label(self, label, expected) -> None:
        assert SentimentLabel.from_label(label) == expected


class TestConsensusInvariant:
    def test_disagreement_with_external_requires_review(self) -> None:
        with pytest.raises(ValidationError):
            ConsensusResult(
                source="hybrid",
                agreement=False,
                needs_review=False,
                contributing_sources={"local", "gemini"},
            )

    def test_review_without_external_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConsensusResult(
                source="local",
                agreement=False,
                needs_review=True,
                contributing_sources={"local"},
            )

    def test_valid_disagreement(self) -> None:
        result = ConsensusResult(
            source="hybrid",
            mode=AnalysisMode.SINGLE_PROVIDER,
            agreement=False,
            needs_review=True,
            contributing_sources={"local", "gemini"},
        )
        assert result.external_sources == ["gemini"]

    def test_json_round_trip_keeps_invariant(self) -> None:
        result = ConsensusResult(
            source="combined",
            agreement=False,
            needs_review=True,
            contributing_sources={"local", "gemini", "perspective"},
        )
        restored = ConsensusResult.model_validate_json(result.model_dump_json())
        assert restored.contributing_sources == result.contributing_sources
        assert restored.needs_review is True
