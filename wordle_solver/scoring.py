"""
Scoring Engine
==============

Scores a guess by the number of candidates expected to remain after it:

    score(g) = sum over s in C of |solutions(g, hint(g, s)) & C| / |C|

which equals sum(size^2) / |C| over the hint buckets of C. Guessing the
secret itself leaves nothing, so that bucket counts 0 instead of 1. Lower is
better; equal scores are ranked by word index.
"""

import numpy as np
from numba import jit, prange
from typing import List, Sequence, Tuple

from .cache import Cache
from .errors import EmptyCandidatesError


# ============================================================================
# NUMBA-ACCELERATED SCORING
# ============================================================================

@jit(nopython=True, nogil=True, cache=True)
def remaining_sum(hint_row: np.ndarray, candidates: np.ndarray, guess: int,
                  n_patterns: int) -> int:
    """
    Total remaining candidates over all secrets in `candidates`.

    Args:
        hint_row: hints of one guess against every secret
        candidates: candidate secret indices
        guess: index of the guess (an exact match contributes 0)
        n_patterns: number of distinct hints

    Returns:
        sum(size^2) over hint buckets, minus the exact match
    """
    sizes = np.zeros(n_patterns, dtype=np.int64)
    exact = 0
    for c in candidates:
        sizes[hint_row[c]] += 1
        if c == guess:
            exact = 1

    total = 0
    for h in range(n_patterns):
        total += sizes[h] * sizes[h]
    return total - exact


@jit(nopython=True, parallel=True, cache=True)
def remaining_sums(hint_matrix: np.ndarray, guesses: np.ndarray,
                   candidates: np.ndarray, n_patterns: int) -> np.ndarray:
    """remaining_sum for many guesses in parallel."""
    result = np.zeros(len(guesses), dtype=np.int64)
    for i in prange(len(guesses)):
        g = guesses[i]
        result[i] = remaining_sum(hint_matrix[g], candidates, g, n_patterns)
    return result


@jit(nopython=True, nogil=True, cache=True)
def remaining_sums_serial(hint_matrix: np.ndarray, guesses: np.ndarray,
                          candidates: np.ndarray, n_patterns: int) -> np.ndarray:
    """remaining_sum for many guesses, safe to call from worker threads."""
    result = np.zeros(len(guesses), dtype=np.int64)
    for i in range(len(guesses)):
        g = guesses[i]
        result[i] = remaining_sum(hint_matrix[g], candidates, g, n_patterns)
    return result


@jit(nopython=True, parallel=True, cache=True)
def first_turn_sums(solution_counts: np.ndarray, guesses: np.ndarray) -> np.ndarray:
    """
    remaining_sum against all secrets, read straight from the precomputed
    bucket sizes (no intersection needed).
    """
    n_secrets = solution_counts.shape[1]
    result = np.zeros(len(guesses), dtype=np.int64)
    for i in prange(len(guesses)):
        g = guesses[i]
        total = 0
        for s in range(n_secrets):
            if s != g:
                total += solution_counts[g, s]
        result[i] = total
    return result


@jit(nopython=True, nogil=True, cache=True)
def first_turn_sums_serial(solution_counts: np.ndarray, guesses: np.ndarray) -> np.ndarray:
    """first_turn_sums, safe to call from worker threads."""
    n_secrets = solution_counts.shape[1]
    result = np.zeros(len(guesses), dtype=np.int64)
    for i in range(len(guesses)):
        g = guesses[i]
        total = 0
        for s in range(n_secrets):
            if s != g:
                total += solution_counts[g, s]
        result[i] = total
    return result


@jit(nopython=True, parallel=True, cache=True)
def bucket_size_matrix(hint_matrix: np.ndarray, guesses: np.ndarray,
                       candidates: np.ndarray, n_patterns: int) -> np.ndarray:
    """Candidates per hint bucket, shape (n_guesses, n_patterns)."""
    sizes = np.zeros((len(guesses), n_patterns), dtype=np.int64)
    for i in prange(len(guesses)):
        row = hint_matrix[guesses[i]]
        for c in candidates:
            sizes[i, row[c]] += 1
    return sizes


# ============================================================================
# RANKING
# ============================================================================

def allowed_guesses(cache: Cache, guessed: Sequence[int] = ()) -> np.ndarray:
    """Guess indices not played yet."""
    all_guesses = cache.words.guess_indices()
    if len(guessed) == 0:
        return all_guesses
    return np.setdiff1d(all_guesses, np.asarray(guessed, dtype=np.int32)).astype(np.int32)


def _check_candidates(cache: Cache, candidates) -> np.ndarray:
    candidates = cache.candidates(candidates)
    if len(candidates) == 0:
        raise EmptyCandidatesError("No candidates to score")
    return candidates


def _rank(guesses: np.ndarray, keys: np.ndarray, values) -> List[Tuple[int, float]]:
    """Sort by key ascending, ties by guess index."""
    order = np.lexsort((guesses, keys))
    return [(int(guesses[i]), values[i]) for i in order]


def score_guess(cache: Cache, guess: int, candidates) -> float:
    """Expected number of candidates left after guessing `guess`."""
    candidates = _check_candidates(cache, candidates)
    guess = cache.check_guess(guess)
    total = remaining_sum(cache.hints[guess], candidates, guess, cache.n_patterns)
    return total / len(candidates)


def fewest_remaining_solutions(cache: Cache, candidates, guessed: Sequence[int] = (),
                               parallel: bool = True) -> List[Tuple[int, float]]:
    """
    Rank every allowed guess by expected remaining candidates.

    Args:
        cache: Precomputed hints
        candidates: Secrets still consistent with the feedback
        guessed: Guesses already played (excluded)
        parallel: Use the prange kernels; pass False from worker threads

    Returns:
        List of (guess_idx, score), best (lowest) first
    """
    candidates = _check_candidates(cache, candidates)
    guesses = allowed_guesses(cache, guessed)
    n = len(candidates)

    if n == cache.n_secrets:
        # First turn: every secret is a candidate, bucket sizes are known
        kernel = first_turn_sums if parallel else first_turn_sums_serial
        sums = kernel(cache.solution_counts, guesses)
    else:
        kernel = remaining_sums if parallel else remaining_sums_serial
        sums = kernel(cache.hints, guesses, candidates, cache.n_patterns)

    return _rank(guesses, sums, [float(total) / n for total in sums])


def worst_case_remaining(cache: Cache, candidates,
                         guessed: Sequence[int] = ()) -> List[Tuple[int, int]]:
    """Rank guesses by their largest bucket (an exact match is not counted)."""
    candidates = _check_candidates(cache, candidates)
    guesses = allowed_guesses(cache, guessed)
    sizes = bucket_size_matrix(cache.hints, guesses, candidates, cache.n_patterns)
    worst = sizes[:, :cache.correct_hint].max(axis=1)
    return _rank(guesses, worst, [int(w) for w in worst])


def variance_of_remaining(cache: Cache, candidates,
                          guessed: Sequence[int] = ()) -> List[Tuple[int, float]]:
    """
    Rank guesses by the variance of their bucket sizes around the mean
    |C| / n_patterns. Previously used; less stable than
    fewest_remaining_solutions.
    """
    candidates = _check_candidates(cache, candidates)
    guesses = allowed_guesses(cache, guessed)
    sizes = bucket_size_matrix(cache.hints, guesses, candidates, cache.n_patterns)
    average = len(candidates) / cache.n_patterns
    variance = ((sizes - average) ** 2).sum(axis=1) / cache.n_patterns
    return _rank(guesses, variance, [float(v) for v in variance])
