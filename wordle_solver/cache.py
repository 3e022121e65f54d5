"""
Relational Cache
================

Precomputes, once per vocabulary, everything the guess selection needs:

1. hints[g, s]: the hint for guess g against secret s
2. buckets per guess: the secrets of each row grouped by hint
   (order[g] holds the secrets sorted by hint, offsets[g, h] where the
   bucket of hint h starts), i.e. solutions by hint by guess
3. solution_counts[g, s]: size of the bucket secret s falls into for
   guess g, the denormalized solutions by secret by guess

Each pass is data-parallel over guesses; every worker owns its row. All
arrays are read-only once built and safe to share between threads.
"""

import numpy as np
from numba import jit, prange
from typing import List, Optional, Tuple
import time

from .config import SolverConfig
from .errors import ConfigurationError
from .hints import compute_hint, n_patterns as count_patterns
from .words import Words


# ============================================================================
# NUMBA-ACCELERATED PRECOMPUTATION
# ============================================================================

@jit(nopython=True, parallel=True, cache=True)
def fill_hint_matrix(guess_codes: np.ndarray, secret_codes: np.ndarray,
                     n_letters: int, result: np.ndarray):
    """
    Compute hints for all guess/secret pairs in parallel.

    Args:
        guess_codes: shape (n_guesses, length) array of letter codes
        secret_codes: shape (n_secrets, length) array of letter codes
        n_letters: alphabet size
        result: shape (n_guesses, n_secrets) output array
    """
    n_guesses = guess_codes.shape[0]
    n_secrets = secret_codes.shape[0]

    for g in prange(n_guesses):
        for s in range(n_secrets):
            result[g, s] = compute_hint(guess_codes[g], secret_codes[s], n_letters)


@jit(nopython=True, parallel=True, cache=True)
def partition_secrets(hint_matrix: np.ndarray, n_patterns: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Group each guess's secrets by hint (counting sort per row).

    Returns:
        order: shape (n_guesses, n_secrets), secrets sorted by hint, ascending
               within a bucket
        offsets: shape (n_guesses, n_patterns + 1), bucket h of guess g is
                 order[g, offsets[g, h]:offsets[g, h + 1]]
    """
    n_guesses, n_secrets = hint_matrix.shape
    order = np.empty((n_guesses, n_secrets), dtype=np.int32)
    offsets = np.zeros((n_guesses, n_patterns + 1), dtype=np.int32)

    for g in prange(n_guesses):
        row = hint_matrix[g]
        for s in range(n_secrets):
            offsets[g, row[s] + 1] += 1
        for h in range(n_patterns):
            offsets[g, h + 1] += offsets[g, h]

        fill = offsets[g, :n_patterns].copy()
        for s in range(n_secrets):
            h = row[s]
            order[g, fill[h]] = s
            fill[h] += 1

    return order, offsets


@jit(nopython=True, parallel=True, cache=True)
def solution_counts_by_secret(hint_matrix: np.ndarray, offsets: np.ndarray) -> np.ndarray:
    """Size of the bucket each secret falls into, per guess."""
    n_guesses, n_secrets = hint_matrix.shape
    result = np.zeros((n_guesses, n_secrets), dtype=np.int32)

    for g in prange(n_guesses):
        for s in range(n_secrets):
            h = hint_matrix[g, s]
            result[g, s] = offsets[g, h + 1] - offsets[g, h]

    return result


# ============================================================================
# CACHE
# ============================================================================

class Cache:
    """
    Hints and hint buckets for every guess of a vocabulary.

    Args:
        words: The vocabulary
        config: Solver settings, kept alongside the cache for its consumers
    """

    def __init__(self, words: Words, config: Optional[SolverConfig] = None):
        self.words = words
        self.config = config or SolverConfig()
        self.n_guesses = len(words)
        self.n_secrets = words.secret_count
        self.n_patterns = count_patterns(words.word_length)
        self.correct_hint = self.n_patterns - 1

        verbose = self.config.verbose
        dtype = np.uint8 if self.n_patterns <= 256 else np.uint16

        if verbose:
            print(f"Computing hint matrix ({self.n_guesses} x {self.n_secrets})...")
        t0 = time.time()
        hints = np.zeros((self.n_guesses, self.n_secrets), dtype=dtype)
        fill_hint_matrix(words.codes, words.codes[:self.n_secrets], len(words.alphabet), hints)
        if verbose:
            elapsed = time.time() - t0
            pairs = self.n_guesses * self.n_secrets
            print(f"Done in {elapsed:.1f}s ({pairs / max(elapsed, 1e-9) / 1e6:.1f}M pairs/sec)")

        t0 = time.time()
        order, offsets = partition_secrets(hints, self.n_patterns)
        solution_counts = solution_counts_by_secret(hints, offsets)
        if verbose:
            print(f"Partitioned secrets by hint in {time.time() - t0:.1f}s")

        for arr in (hints, order, offsets, solution_counts):
            arr.flags.writeable = False
        self.hints = hints
        self.order = order
        self.offsets = offsets
        self.solution_counts = solution_counts

    def hint(self, g: int, s: int) -> int:
        """Hint for guess index g against secret index s."""
        return int(self.hints[g, s])

    def solutions_by(self, g: int, hint: int) -> np.ndarray:
        """Secrets that would answer guess g with the given hint."""
        return self.order[g, self.offsets[g, hint]:self.offsets[g, hint + 1]]

    def solutions(self, g: int, s: int) -> np.ndarray:
        """Secrets indistinguishable from secret s after guessing g."""
        return self.solutions_by(g, int(self.hints[g, s]))

    def solutions_by_hint_for(self, g: int) -> List[Tuple[int, np.ndarray]]:
        """Non-empty (hint, secrets) buckets of guess g."""
        offsets = self.offsets[g]
        return [(h, self.order[g, offsets[h]:offsets[h + 1]])
                for h in range(self.n_patterns) if offsets[h + 1] > offsets[h]]

    def bucket_sizes(self, g: int) -> np.ndarray:
        """Number of secrets per hint for guess g."""
        return np.diff(self.offsets[g])

    def all_secrets(self) -> np.ndarray:
        return self.words.secret_indices()

    def candidates(self, candidates) -> np.ndarray:
        """Normalized candidate set; indices must be secrets of this cache."""
        return as_candidates(candidates, self.n_secrets)

    def check_guess(self, g) -> int:
        """Guess index as int; anything outside the vocabulary is rejected."""
        g = int(g)
        if not 0 <= g < self.n_guesses:
            raise ConfigurationError(f"Guess index {g} not in [0, {self.n_guesses})")
        return g

    def __repr__(self) -> str:
        return f"Cache({self.n_guesses} guesses x {self.n_secrets} secrets)"


def build_cache(words: Words, config: Optional[SolverConfig] = None) -> Cache:
    """Build the cache for a vocabulary (expensive, run once)."""
    return Cache(words, config)


def as_candidates(candidates, n_secrets: Optional[int] = None) -> np.ndarray:
    """
    Sorted unique int32 array of secret indices.

    Args:
        candidates: Secret indices in any order, duplicates allowed
        n_secrets: When given, every index must lie in [0, n_secrets)

    Raises:
        ConfigurationError: an index is not a secret index
    """
    arr = np.unique(np.asarray(candidates, dtype=np.int64))
    if n_secrets is not None and len(arr) > 0 and (arr[0] < 0 or arr[-1] >= n_secrets):
        bad = arr[(arr < 0) | (arr >= n_secrets)]
        raise ConfigurationError(
            f"Candidates {bad.tolist()} are not secret indices [0, {n_secrets})")
    return arr.astype(np.int32)
