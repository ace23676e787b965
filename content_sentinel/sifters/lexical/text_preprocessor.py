"""Text preprocessing for the lexical classifier.

Lower-cases, tokenizes on word boundaries, drops short / non-alphabetic /
stop-word tokens and stems the remainder with the Porter stemmer, repeated
until the stem stops changing. The output is a list (multiset) of stems;
order follows the input text. Preprocessing is idempotent: feeding back
stems that still pass the filters yields the same stems.
"""

import re
from typing import Iterable, List, Optional

from nltk.stem.porter import PorterStemmer

from content_sentinel.config.lexicons import STOPWORDS

_TOKEN_SPLIT = re.compile(r"[^a-z0-9_]+")
_ALPHA = re.compile(r"^[a-z]+$")
_WORD = re.compile(r"[a-z]+")

# Porter reaches its fixed point within a few passes
MAX_STEM_PASSES = 8


class TextPreprocessor:
    """
    Tokenize, filter and stem free text.

    Usage:
        preprocessor = TextPreprocessor()
        stems = preprocessor.preprocess("Attacks are running wild")
        # ["attack", "run", "wild"]

    Attributes:
        stopwords: Tokens discarded before stemming
        min_token_length: Tokens of this length or shorter are discarded
    """

    def __init__(
        self,
        stopwords: Optional[Iterable[str]] = None,
        min_token_length: int = 2,
    ):
        """
        Initialize preprocessor.

        Args:
            stopwords: Custom stop-word set (uses bilingual defaults if None)
            min_token_length: Maximum discarded token length (default 2)
        """
        self.stopwords = frozenset(stopwords) if stopwords is not None else STOPWORDS
        self.min_token_length = min_token_length
        self.stemmer = PorterStemmer()

    def tokenize(self, text: str) -> List[str]:
        """Lower-case and split text on non-word characters."""
        if not text:
            return []
        return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]

    def words(self, text: str) -> List[str]:
        """Lower-cased alphabetic runs, unfiltered (used for sentiment lookup)."""
        if not text:
            return []
        return _WORD.findall(text.lower())

    def keep(self, token: str) -> bool:
        """Whether a token survives filtering."""
        return (
            len(token) > self.min_token_length
            and bool(_ALPHA.match(token))
            and token not in self.stopwords
        )

    def stem(self, token: str) -> str:
        """Stem to a fixed point, so re-stemming a stem returns it unchanged."""
        current = token
        for _ in range(MAX_STEM_PASSES):
            stemmed = self.stemmer.stem(current)
            if stemmed == current:
                break
            current = stemmed
        return current

    def preprocess(self, text: str) -> List[str]:
        """
        Produce the stem multiset for a text.

        Args:
            text: Raw input text

        Returns:
            Stems of all surviving tokens, in text order
        """
        if not isinstance(text, str) or not text:
            return []
        return [self.stem(token) for token in self.tokenize(text) if self.keep(token)]


__all__ = ["TextPreprocessor"]
