"""Deterministic lexical harm classifier.

Pipeline per text:
1. Preprocess into a stem multiset (TextPreprocessor)
2. Sentiment: sum of lexicon valences / 10, clamped to [-1, 1]
3. Category scoring: +2 per phrase found as a substring of the raw text,
   +1 per phrase stem present in the stem multiset; argmax with declared-order
   tie-break; confidence = max / total
4. Insufficient evidence: confidence < 0.30 OR max score < 2 -> "other"
   (confidence is kept, not reset)
5. Toxicity: |sentiment| * 0.3 when sentiment < -0.3, plus 0.2 per
   harm-pattern match, capped at 1.0
6. Keywords: top-N stems by frequency

No I/O and no shared mutable state: identical input gives identical output.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from content_sentinel.config.lexicons import (
    CATEGORY_KEYWORDS,
    HARM_PATTERNS,
    NEGATIVE_SENTIMENT_THRESHOLD,
    NEGATIVE_SENTIMENT_WEIGHT,
    PATTERN_MATCH_WEIGHT,
    SENTIMENT_DIVISOR,
    SENTIMENT_LABEL_THRESHOLD,
    SENTIMENT_LEXICON,
    SENTIMENT_PHRASES,
)
from content_sentinel.exceptions import InvalidInputError
from content_sentinel.schemas import (
    Category,
    ClassificationResult,
    Sentiment,
    SentimentLabel,
    TextMetadata,
    Toxicity,
    ToxicityContribution,
)
from content_sentinel.sifters.lexical.text_preprocessor import TextPreprocessor

LOCAL_SOURCE = "local"


@dataclass
class CategoryScores:
    """Result of category scoring.

    Attributes:
        category: Predicted category after the insufficient-evidence policy
        confidence: max_score / total (0.0 when nothing matched)
        max_score: Highest raw category score
        scores: Raw score per category, in declared order
    """

    category: Category
    confidence: float
    max_score: int
    scores: Dict[str, int] = field(default_factory=dict)


class LexicalClassifier:
    """
    Local keyword/lexicon classifier for short social-media texts.

    Usage:
        classifier = LexicalClassifier()
        result = classifier.classify("You are stupid and ugly, go kill yourself!")
        result.category      # Category.CYBERBULLYING
        result.toxicity.score  # 0.84

    Attributes:
        min_confidence: Confidence below which the category falls to "other"
        min_category_score: Raw score below which the category falls to "other"
        keyword_limit: Number of keywords returned
    """

    MIN_CONFIDENCE = 0.30
    MIN_CATEGORY_SCORE = 2
    KEYWORD_LIMIT = 10

    def __init__(
        self,
        preprocessor: Optional[TextPreprocessor] = None,
        category_keywords: Optional[Dict[str, List[str]]] = None,
        min_confidence: float = MIN_CONFIDENCE,
        min_category_score: int = MIN_CATEGORY_SCORE,
        keyword_limit: int = KEYWORD_LIMIT,
    ):
        """
        Initialize classifier and pre-compute keyword stems and patterns.

        Args:
            preprocessor: Custom TextPreprocessor (default bilingual one if None)
            category_keywords: Custom rulesets; dict order is the tie-break order
            min_confidence: Insufficient-evidence confidence threshold (default 0.30)
            min_category_score: Insufficient-evidence score threshold (default 2)
            keyword_limit: Keywords returned per text (default 10)
        """
        self.preprocessor = preprocessor or TextPreprocessor()
        self.category_keywords = category_keywords or CATEGORY_KEYWORDS
        self.min_confidence = min_confidence
        self.min_category_score = min_category_score
        self.keyword_limit = keyword_limit

        # (phrase, stems) per category, computed once
        self._rules: List[Tuple[Category, List[Tuple[str, List[str]]]]] = [
            (
                Category(name),
                [
                    (phrase.lower(), self.preprocessor.preprocess(phrase))
                    for phrase in phrases
                ],
            )
            for name, phrases in self.category_keywords.items()
        ]
        self._harm_patterns = [
            (name, re.compile(pattern, re.IGNORECASE)) for name, pattern in HARM_PATTERNS
        ]
        self._sentiment_phrases = [
            (re.compile(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)"), valence)
            for phrase, valence in SENTIMENT_PHRASES.items()
        ]
        self._logger = logger.bind(component="LexicalClassifier")

    def classify(self, text: str) -> ClassificationResult:
        """
        Classify a single text.

        Args:
            text: Raw submission text

        Returns:
            ClassificationResult tagged source="local"

        Raises:
            InvalidInputError: If text is not a string or is blank
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Text must be a non-empty string")

        stems = self.preprocessor.preprocess(text)
        sentiment = self.analyze_sentiment(text)
        categories = self.score_categories(text, stems)
        toxicity = self.calculate_toxicity(text, sentiment)
        keywords = self.extract_keywords(stems)

        result = ClassificationResult(
            category=categories.category,
            confidence=categories.confidence,
            sentiment=sentiment,
            toxicity=toxicity,
            keywords=keywords,
            source=LOCAL_SOURCE,
            explanation=(
                f"Local NLP: {categories.category.value} "
                f"({categories.confidence * 100:.1f}%)"
            ),
            text_metadata=TextMetadata(
                text_length=len(text),
                word_count=len(text.split()),
            ),
        )

        self._logger.debug(
            "Lexical classification complete",
            category=result.category.value,
            confidence=round(result.confidence, 3),
            toxicity=round(result.toxicity.score, 3),
            max_score=categories.max_score,
        )
        return result

    def classify_many(
        self, texts: Sequence[str]
    ) -> List[Union[ClassificationResult, InvalidInputError]]:
        """
        Classify a batch; invalid entries yield their error instead of aborting.

        Args:
            texts: Texts to classify

        Returns:
            One ClassificationResult or InvalidInputError per input, in order
        """
        results: List[Union[ClassificationResult, InvalidInputError]] = []
        for text in texts:
            try:
                results.append(self.classify(text))
            except InvalidInputError as e:
                results.append(e)
        return results

    def analyze_sentiment(self, text: str) -> Sentiment:
        """
        Lexicon sentiment.

        Sums word valences and multi-word phrase valences, divides by 10,
        clamps to [-1, 1]. Label threshold is +/-0.1.
        """
        lowered = text.lower()
        raw = sum(SENTIMENT_LEXICON.get(word, 0) for word in self.preprocessor.words(text))
        for pattern, valence in self._sentiment_phrases:
            raw += valence * len(pattern.findall(lowered))

        score = max(-1.0, min(1.0, raw / SENTIMENT_DIVISOR))
        if score > SENTIMENT_LABEL_THRESHOLD:
            label = SentimentLabel.POSITIVE
        elif score < -SENTIMENT_LABEL_THRESHOLD:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL
        return Sentiment(score=score, label=label)

    def score_categories(self, text: str, stems: Sequence[str]) -> CategoryScores:
        """
        Score every category ruleset against the text.

        Args:
            text: Raw text (substring matches)
            stems: Preprocessed stem multiset (stemmed matches)

        Returns:
            CategoryScores after the insufficient-evidence policy
        """
        lowered = text.lower()
        stem_set = set(stems)
        scores: Dict[str, int] = {}
        best = Category.OTHER
        max_score = 0

        for category, phrases in self._rules:
            score = 0
            for phrase, phrase_stems in phrases:
                if phrase in lowered:
                    score += 2
                score += sum(1 for stem in phrase_stems if stem in stem_set)
            scores[category.value] = score
            # Strict comparison keeps the earliest declared category on ties
            if score > max_score:
                max_score = score
                best = category

        total = sum(scores.values())
        confidence = max_score / total if total > 0 else 0.0

        if confidence < self.min_confidence or max_score < self.min_category_score:
            best = Category.OTHER

        return CategoryScores(
            category=best,
            confidence=min(confidence, 1.0),
            max_score=max_score,
            scores=scores,
        )

    def calculate_toxicity(self, text: str, sentiment: Sentiment) -> Toxicity:
        """
        Toxicity from strongly negative sentiment plus harm-pattern matches.

        Args:
            text: Raw text
            sentiment: Sentiment computed for the same text

        Returns:
            Toxicity with one contribution per fired source, aggregate capped at 1.0
        """
        total = 0.0
        contributions: List[ToxicityContribution] = []

        score = sentiment.score or 0.0
        if score < NEGATIVE_SENTIMENT_THRESHOLD:
            total += abs(score) * NEGATIVE_SENTIMENT_WEIGHT
            contributions.append(
                ToxicityContribution(name="negative_sentiment", score=abs(score))
            )

        for name, pattern in self._harm_patterns:
            matches = pattern.findall(text)
            if matches:
                pattern_score = len(matches) * PATTERN_MATCH_WEIGHT
                total += pattern_score
                contributions.append(
                    ToxicityContribution(name=name, score=min(pattern_score, 1.0))
                )

        return Toxicity(score=min(total, 1.0), contributions=contributions)

    def extract_keywords(self, stems: Sequence[str], limit: Optional[int] = None) -> List[str]:
        """Top stems by frequency; ties keep first-seen order."""
        limit = self.keyword_limit if limit is None else limit
        if limit <= 0:
            return []
        return [stem for stem, _ in Counter(stems).most_common(limit)]


__all__ = ["CategoryScores", "LexicalClassifier", "LOCAL_SOURCE"]
