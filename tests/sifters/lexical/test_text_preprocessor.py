"""Tests for TextPreprocessor tokenization, filtering and stemming."""

import pytest

from content_sentinel.sifters.lexical import TextPreprocessor


@pytest.fixture
def preprocessor() -> TextPreprocessor:
    return TextPreprocessor()


class TestPreprocess:
    def test_stems_in_text_order(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.preprocess("Attacks are running wild") == ["attack", "run", "wild"]

    def test_short_tokens_dropped(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.preprocess("go ok hi") == []

    def test_non_alphabetic_tokens_dropped(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.preprocess("abc123 4567 wild") == ["wild"]

    def test_english_and_hindi_stopwords_dropped(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.preprocess("this hai kaise") == []

    def test_multiset_keeps_duplicates(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.preprocess("attack attacks attacked") == ["attack"] * 3

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_empty_or_non_text_yields_nothing(self, preprocessor: TextPreprocessor, value) -> None:
        assert preprocessor.preprocess(value) == []

    def test_preprocess_idempotent(self, preprocessor: TextPreprocessor) -> None:
        stems = preprocessor.preprocess("Agreed generalization attacks running happiness")
        assert preprocessor.preprocess(" ".join(stems)) == stems

    @pytest.mark.parametrize("word", ["agreed", "generalization", "happiness", "conditional"])
    def test_stem_is_fixed_point(self, preprocessor: TextPreprocessor, word: str) -> None:
        stem = preprocessor.stem(word)
        assert preprocessor.stem(stem) == stem


class TestHelpers:
    def test_tokenize_lowercases_and_splits(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.tokenize("Hello, WORLD!") == ["hello", "world"]

    def test_words_are_unfiltered(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.words("You are so ugly") == ["you", "are", "so", "ugly"]

    def test_custom_stopwords(self) -> None:
        custom = TextPreprocessor(stopwords={"wild"})
        assert custom.preprocess("Attacks are running wild") == ["attack", "are", "run"]

    def test_keep_rules(self, preprocessor: TextPreprocessor) -> None:
        assert preprocessor.keep("ugly")
        assert not preprocessor.keep("go")
        assert not preprocessor.keep("the")
        assert not preprocessor.keep("abc1")
