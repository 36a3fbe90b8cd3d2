"""Tests for word pools, hints and guess matching."""

from __future__ import annotations

from drawguess.game.wordbank import DEFAULT_WORDS, WordBank, distinct_words, mask_word, normalize_guess


class TestDistinctWords:
    """Tests for custom word list cleanup."""

    def test_trims_and_drops_blanks(self) -> None:
        """Whitespace is trimmed and blank entries are dropped."""
        assert distinct_words(["  cat ", "", "   ", "dog"]) == ["cat", "dog"]

    def test_case_insensitive_duplicates(self) -> None:
        """The first spelling of a duplicate wins."""
        assert distinct_words(["Cat", "cat", "CAT", "dog"]) == ["Cat", "dog"]

    def test_collapses_inner_whitespace(self) -> None:
        """Multi-word phrases keep single spaces."""
        assert distinct_words(["ice    cream"]) == ["ice cream"]

    def test_ignores_non_strings(self) -> None:
        """Numbers and other junk from clients are skipped."""
        assert distinct_words(["cat", 3, None, ["dog"]]) == ["cat"]


class TestMaskWord:
    """Tests for the masked hint."""

    def test_single_word(self) -> None:
        """Each letter becomes a placeholder."""
        assert mask_word("apple") == "_ _ _ _ _"

    def test_spaces_preserved(self) -> None:
        """The gap between words stays visible."""
        assert mask_word("ice cream") == "_ _ _   _ _ _ _ _"

    def test_length_disclosed(self) -> None:
        """The number of placeholders matches the word length."""
        assert mask_word("banana").count("_") == len("banana")


class TestGuessMatching:
    """Tests for guess normalization and comparison."""

    def test_normalize(self) -> None:
        """Guesses are trimmed and lowercased."""
        assert normalize_guess("  ApPle \n") == "apple"

    def test_trimmed_case_insensitive_match(self) -> None:
        """' Apple ' matches 'apple'."""
        assert WordBank.check_guess("apple", " Apple ")

    def test_partial_match_rejected(self) -> None:
        """Only exact matches count."""
        assert not WordBank.check_guess("apple", "appl")
        assert not WordBank.check_guess("apple", "apples")

    def test_empty_word_never_matches(self) -> None:
        """Nothing matches before a word is chosen."""
        assert not WordBank.check_guess("", "")


class TestWordBank:
    """Tests for pool resolution and candidate sampling."""

    def test_default_pool(self) -> None:
        """The built-in list is the default pool."""
        bank = WordBank()
        assert bank.default_words == list(DEFAULT_WORDS)
        assert bank.resolve_pool(None) == list(DEFAULT_WORDS)

    def test_custom_pool_accepted(self) -> None:
        """A custom list with enough distinct words replaces the default."""
        bank = WordBank(min_custom_words=3)
        assert bank.resolve_pool(["cat", "dog", "fish"]) == ["cat", "dog", "fish"]

    def test_small_custom_pool_rejected(self) -> None:
        """Too few distinct words fall back to the default pool."""
        bank = WordBank(min_custom_words=3)
        assert bank.resolve_pool(["cat", "CAT", "dog", " "]) == list(DEFAULT_WORDS)

    def test_non_list_custom_pool_ignored(self) -> None:
        """A string or mapping is not a word list."""
        bank = WordBank()
        assert bank.resolve_pool("cat,dog,fish") == list(DEFAULT_WORDS)
        assert bank.resolve_pool({"words": ["cat"]}) == list(DEFAULT_WORDS)

    def test_word_options_without_repetition(self) -> None:
        """Three distinct candidates are sampled from the pool."""
        options = WordBank.get_word_options(DEFAULT_WORDS, 3)

        assert len(options) == 3
        assert len(set(options)) == 3
        assert set(options) <= set(DEFAULT_WORDS)

    def test_word_options_small_pool(self) -> None:
        """A pool smaller than the count offers every distinct word."""
        options = WordBank.get_word_options(["cat", "Cat", "dog"], 3)
        assert sorted(options) == ["cat", "dog"]

    def test_word_options_empty_pool(self) -> None:
        """An empty pool offers nothing."""
        assert WordBank.get_word_options([], 3) == []
