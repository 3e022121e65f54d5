"""Unit tests for the word store."""

import numpy as np
import pytest

from wordle_solver.errors import ConfigurationError
from wordle_solver.words import Words


class TestWords:
    """Tests for Words construction and lookups."""

    def test_secrets_come_first(self, words_a):
        assert words_a.secret_count == 5
        assert len(words_a) == words_a.total_count == 10
        assert list(words_a.secrets) == ["augur", "briar", "friar", "lunar", "sugar"]
        assert words_a[5] == "fubar"
        assert words_a.index_of("goier") == 9

    def test_normalizes_and_deduplicates(self):
        words = Words([" Sugar", "lunar", "sugar"], ["LUNAR", "fubar", "fubar"])
        assert list(words) == ["sugar", "lunar", "fubar"]
        assert words.secret_count == 2
        assert "SUGAR" in words

    def test_indices(self, words_a):
        np.testing.assert_array_equal(words_a.secret_indices(), np.arange(5))
        np.testing.assert_array_equal(words_a.guess_indices(), np.arange(10))
        assert words_a.is_secret(4)
        assert not words_a.is_secret(5)
        assert words_a.indices_to_words([3, 5]) == ["lunar", "fubar"]

    def test_codes_readonly(self, words_a):
        assert words_a.codes.shape == (10, 5)
        with pytest.raises(ValueError):
            words_a.codes[0, 0] = 1

    def test_scores_to_string(self, words_a):
        assert words_a.scores_to_string([(5, 1.4), (9, 1.8)]) == "1.400 'fubar', 1.800 'goier'"

    def test_empty_secrets(self):
        with pytest.raises(ConfigurationError):
            Words([], ["sugar"])

    def test_length_mismatch(self):
        with pytest.raises(ConfigurationError):
            Words(["sugar", "sugars"])

    def test_non_letters(self):
        with pytest.raises(ConfigurationError):
            Words(["sug4r"])

    def test_unknown_word(self, words_a):
        with pytest.raises(ConfigurationError):
            words_a.index_of("crane")
