"""Local lexical classification: preprocessing, sentiment, categories, toxicity."""

from content_sentinel.sifters.lexical.lexical_classifier import (
    LOCAL_SOURCE,
    CategoryScores,
    LexicalClassifier,
)
from content_sentinel.sifters.lexical.text_preprocessor import TextPreprocessor

__all__ = ["CategoryScores", "LexicalClassifier", "LOCAL_SOURCE", "TextPreprocessor"]
