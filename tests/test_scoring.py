"""Unit tests for the scoring engine."""

import pytest

from wordle_solver.errors import ConfigurationError, EmptyCandidatesError
from wordle_solver.scoring import (
    allowed_guesses, fewest_remaining_solutions, score_guess,
    variance_of_remaining, worst_case_remaining,
)


class TestFewestRemainingSolutions:
    """Tests for ranking guesses by expected remaining candidates."""

    def test_first_turn_ranking(self, cache_a):
        scores = fewest_remaining_solutions(cache_a, cache_a.all_secrets())
        assert [g for g, _ in scores] == list(range(10))
        expected = [6 / 5] * 5 + [7 / 5] * 3 + [9 / 5] * 2
        assert [s for _, s in scores] == pytest.approx(expected)

    def test_serial_matches_parallel(self, cache_a):
        for candidates in ([0, 1, 2, 3, 4], [0, 1, 2], [1, 2]):
            assert (fewest_remaining_solutions(cache_a, candidates, parallel=False)
                    == fewest_remaining_solutions(cache_a, candidates))

    def test_agrees_with_score_guess(self, cache_a):
        candidates = [0, 1, 3, 4]
        for g, score in fewest_remaining_solutions(cache_a, candidates):
            assert score == pytest.approx(score_guess(cache_a, g, candidates))

    def test_guessed_words_excluded(self, cache_a):
        scores = fewest_remaining_solutions(cache_a, [3, 4], guessed=[5])
        assert 5 not in [g for g, _ in scores]
        assert len(scores) == 9

    def test_ties_break_by_index(self, cache_b):
        scores = fewest_remaining_solutions(cache_b, cache_b.all_secrets())
        assert scores == [(g, pytest.approx(16 / 5)) for g in range(5)]

    def test_empty_candidates(self, cache_a):
        with pytest.raises(EmptyCandidatesError):
            fewest_remaining_solutions(cache_a, [])

    def test_right_size_wrong_set(self, cache_a):
        """Five indices that are not the five secrets are not a first turn."""
        with pytest.raises(ConfigurationError):
            fewest_remaining_solutions(cache_a, [0, 1, 2, 3, 7])


class TestScoreGuess:
    """Tests for single guess scores."""

    def test_single_candidate_guessed(self, cache_a):
        assert score_guess(cache_a, 3, [3]) == 0

    def test_single_candidate_other_guess(self, cache_a):
        assert score_guess(cache_a, 5, [3]) == 1

    def test_pair_left_together(self, cache_a):
        """fubar cannot separate lunar and sugar."""
        assert score_guess(cache_a, 5, [3, 4]) == 2

    def test_empty_candidates(self, cache_a):
        with pytest.raises(EmptyCandidatesError):
            score_guess(cache_a, 0, [])

    def test_foreign_candidates(self, cache_a):
        """Guess-only and unknown indices are rejected, not scored."""
        with pytest.raises(ConfigurationError):
            score_guess(cache_a, 0, [7])
        with pytest.raises(ConfigurationError):
            score_guess(cache_a, 0, [7000000])

    def test_unknown_guess(self, cache_a):
        with pytest.raises(ConfigurationError):
            score_guess(cache_a, 10, [0, 1])


class TestAlternativeScores:
    """Tests for the worst-case and variance rankings."""

    def test_allowed_guesses(self, cache_a):
        assert list(allowed_guesses(cache_a)) == list(range(10))
        assert list(allowed_guesses(cache_a, [0, 5])) == [1, 2, 3, 4, 6, 7, 8, 9]

    def test_worst_case(self, cache_b):
        """Every guess leaves four secrets in one bucket."""
        assert worst_case_remaining(cache_b, cache_b.all_secrets()) == [(g, 4) for g in range(5)]

    def test_variance_ranks_every_guess(self, cache_a):
        scores = variance_of_remaining(cache_a, cache_a.all_secrets())
        assert len(scores) == 10
        values = [v for _, v in scores]
        assert values == sorted(values)
