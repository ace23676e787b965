"""Tests for LexicalClassifier.

Tests cover:
- Input validation (empty, whitespace, non-text)
- End-to-end scenarios (abusive text, benign text)
- Determinism and value bounds
- Insufficient-evidence policy (low score, low confidence)
- Declared-order tie-break
- Toxicity contributions and caps
- Sentiment phrases and labels
- Keywords and batch classification
"""

import pytest

from content_sentinel.exceptions import InvalidInputError
from content_sentinel.schemas import Category, SentimentLabel
from content_sentinel.sifters.lexical import LexicalClassifier

ABUSIVE = "You are stupid and ugly, go kill yourself!"
BENIGN = "This game is okay, nothing special."


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def classifier() -> LexicalClassifier:
    return LexicalClassifier()


# ── Input Validation ──────────────────────────────────────────────────────


class TestInputValidation:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_text_rejected(self, classifier: LexicalClassifier, text: str) -> None:
        with pytest.raises(InvalidInputError):
            classifier.classify(text)

    @pytest.mark.parametrize("text", [None, 42, ["list"]])
    def test_non_text_rejected(self, classifier: LexicalClassifier, text) -> None:
        with pytest.raises(InvalidInputError):
            classifier.classify(text)

    def test_invalid_input_is_value_error(self, classifier: LexicalClassifier) -> None:
        with pytest.raises(ValueError):
            classifier.classify("")


# ── Scenarios ─────────────────────────────────────────────────────────────


class TestScenarios:
    def test_abusive_text(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify(ABUSIVE)

        assert result.category == Category.CYBERBULLYING
        assert result.category != Category.OTHER
        assert result.sentiment.label == SentimentLabel.NEGATIVE
        assert result.sentiment.score == pytest.approx(-0.8)
        assert result.toxicity.score > 0.4
        assert result.toxicity.score == pytest.approx(0.84)
        assert result.source == "local"

    def test_abusive_text_contributions(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify(ABUSIVE)
        contributions = {c.name: c.score for c in result.toxicity.contributions}

        assert list(contributions) == ["negative_sentiment", "violence", "insult", "appearance"]
        # Recorded as |sentiment|, weighted only in the aggregate
        assert contributions["negative_sentiment"] == pytest.approx(0.8)
        assert contributions["violence"] == pytest.approx(0.2)

    def test_benign_text(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify(BENIGN)

        assert result.sentiment.label == SentimentLabel.NEUTRAL
        assert result.category == Category.OTHER
        assert result.toxicity.score == pytest.approx(0.0)
        assert result.toxicity.contributions == []

    def test_text_metadata(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify(ABUSIVE)
        assert result.text_metadata.text_length == len(ABUSIVE)
        assert result.text_metadata.word_count == 8

    def test_explanation(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify(ABUSIVE)
        assert result.explanation.startswith("Local NLP: cyberbullying (")


# ── Determinism and Bounds ────────────────────────────────────────────────


class TestDeterminism:
    @pytest.mark.parametrize("text", [ABUSIVE, BENIGN, "Bahut accha! mind-blowing show"])
    def test_same_input_same_output(self, classifier: LexicalClassifier, text: str) -> None:
        first = classifier.classify(text).model_dump(exclude={"text_metadata"})
        second = classifier.classify(text).model_dump(exclude={"text_metadata"})
        assert first == second

    def test_independent_instances_agree(self) -> None:
        a = LexicalClassifier().classify(ABUSIVE)
        b = LexicalClassifier().classify(ABUSIVE)
        assert a.category == b.category
        assert a.confidence == b.confidence

    @pytest.mark.parametrize(
        "text",
        [
            ABUSIVE,
            BENIGN,
            "kill kill kill kill kill kill murder die death",
            "amazing awesome fantastic wonderful brilliant outstanding superb",
            "Free money! Click here, urgent lottery winner, act now",
        ],
    )
    def test_values_within_bounds(self, classifier: LexicalClassifier, text: str) -> None:
        result = classifier.classify(text)
        assert 0.0 <= result.confidence <= 1.0
        assert -1.0 <= result.sentiment.score <= 1.0
        assert 0.0 <= result.toxicity.score <= 1.0
        assert all(0.0 <= c.score <= 1.0 for c in result.toxicity.contributions)
        assert isinstance(result.category, Category)


# ── Insufficient-Evidence Policy ──────────────────────────────────────────


class TestInsufficientEvidence:
    def test_no_matches_gives_other_with_zero_confidence(
        self, classifier: LexicalClassifier
    ) -> None:
        result = classifier.classify("hello there friend")
        assert result.category == Category.OTHER
        assert result.confidence == 0.0

    def test_stem_only_match_below_minimum_score(self, classifier: LexicalClassifier) -> None:
        # "intimidating" only matches "intimidate" by stem: score 1 < 2
        scores = classifier.score_categories("intimidating", ["intimid"])
        assert scores.max_score == 1
        assert scores.category == Category.OTHER
        # Confidence is kept, not reset
        assert scores.confidence == pytest.approx(1.0)

    def test_low_confidence_forces_other(self) -> None:
        classifier = LexicalClassifier(
            category_keywords={
                "violence": ["alpha"],
                "scam": ["beta"],
                "fake_news": ["gamma"],
                "hate_speech": ["delta"],
            }
        )
        result = classifier.classify("alpha beta gamma delta")
        assert result.category == Category.OTHER
        assert result.confidence == pytest.approx(0.25)

    def test_thresholds_configurable(self) -> None:
        classifier = LexicalClassifier(min_category_score=1)
        scores = classifier.score_categories("intimidating", ["intimid"])
        assert scores.category == Category.HARASSMENT


class TestTieBreak:
    def test_first_declared_category_wins(self) -> None:
        classifier = LexicalClassifier(
            category_keywords={"scam": ["alpha"], "violence": ["alpha"]}
        )
        scores = classifier.score_categories("alpha", ["alpha"])
        assert scores.scores == {"scam": 3, "violence": 3}
        assert scores.category == Category.SCAM
        assert scores.confidence == pytest.approx(0.5)

    def test_declared_order_reversed(self) -> None:
        classifier = LexicalClassifier(
            category_keywords={"violence": ["alpha"], "scam": ["alpha"]}
        )
        assert classifier.score_categories("alpha", ["alpha"]).category == Category.VIOLENCE


# ── Toxicity ──────────────────────────────────────────────────────────────


class TestToxicity:
    def test_aggregate_and_contribution_capped(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify("kill kill kill kill kill kill")
        violence = next(c for c in result.toxicity.contributions if c.name == "violence")
        assert violence.score == 1.0
        assert result.toxicity.score == 1.0

    def test_mild_negativity_not_counted(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify("that movie was a bit sad")
        assert result.sentiment.score == pytest.approx(-0.2)
        assert all(c.name != "negative_sentiment" for c in result.toxicity.contributions)

    def test_profanity_group(self, classifier: LexicalClassifier) -> None:
        result = classifier.classify("what the hell")
        assert "profanity" in [c.name for c in result.toxicity.contributions]


# ── Sentiment ─────────────────────────────────────────────────────────────


class TestSentiment:
    def test_phrase_valence(self, classifier: LexicalClassifier) -> None:
        sentiment = classifier.analyze_sentiment("The show was mind-blowing")
        assert sentiment.score == pytest.approx(0.4)
        assert sentiment.label == SentimentLabel.POSITIVE

    def test_negative_phrase(self, classifier: LexicalClassifier) -> None:
        sentiment = classifier.analyze_sentiment("I can't stand this")
        assert sentiment.score == pytest.approx(-0.3)
        assert sentiment.label == SentimentLabel.NEGATIVE

    def test_score_clamped(self, classifier: LexicalClassifier) -> None:
        sentiment = classifier.analyze_sentiment("amazing awesome fantastic wonderful")
        assert sentiment.score == 1.0

    def test_hinglish_words(self, classifier: LexicalClassifier) -> None:
        sentiment = classifier.analyze_sentiment("ekdum bakwas aur ghatiya")
        assert sentiment.score == pytest.approx(-0.6)


# ── Keywords and Batch ────────────────────────────────────────────────────


class TestKeywords:
    def test_frequency_order(self, classifier: LexicalClassifier) -> None:
        assert classifier.extract_keywords(["wild", "attack", "attack", "run"]) == [
            "attack",
            "wild",
            "run",
        ]

    def test_limit(self) -> None:
        classifier = LexicalClassifier(keyword_limit=1)
        result = classifier.classify("attacks attack wild")
        assert result.keywords == ["attack"]


class TestClassifyMany:
    def test_invalid_entries_do_not_abort(self, classifier: LexicalClassifier) -> None:
        results = classifier.classify_many([ABUSIVE, "", None, BENIGN])

        assert results[0].category == Category.CYBERBULLYING
        assert isinstance(results[1], InvalidInputError)
        assert isinstance(results[2], InvalidInputError)
        assert results[3].category == Category.OTHER
