"""
Turn-Count Minimizer
====================

Approximates the shortest game from a candidate set and guess history.

For a guess g, every candidate s ends the game after some number of turns;
the turn sum of g adds these up, so turn_sum / |C| is the expected number of
turns. It is computed per hint bucket of g:

- bucket {g}: solved this turn                 -> turn
- one other secret: solved next turn           -> turn + 1
- two secrets: pick one, 50/50 to be right     -> turn + (turn + 1)
  (2*turn + 1 if g is one of them)
- three or more: recurse with g appended to the history

Only the `picks` guesses with the fewest expected remaining candidates are
expanded at each level. This is a heuristic pruning: the result is the best
line among those guesses, not a proven optimum.

A history that already used max_attempts guesses is a failed line of play;
its sum is FAILED_TURN_SUM and every guess leading into it fails too.
"""

from concurrent.futures import Executor, ThreadPoolExecutor
import sys
import time

import numpy as np
from typing import Callable, List, Optional, Sequence, Tuple

from .cache import Cache
from .errors import ConfigurationError, EmptyCandidatesError
from .scoring import fewest_remaining_solutions


# ============================================================================
# CONSTANTS
# ============================================================================

NO_GUESS = -1
FAILED_TURN_SUM = sys.maxsize


# ============================================================================
# TURN SUMS
# ============================================================================

def partition(cache: Cache, guess: int, candidates: np.ndarray) -> List[np.ndarray]:
    """Split candidates into hint buckets of `guess`, each sorted ascending."""
    row = cache.hints[guess][candidates]
    order = np.argsort(row, kind="stable")
    ranked = row[order]
    bounds = np.flatnonzero(np.diff(ranked)) + 1
    return np.split(candidates[order], bounds)


def trivial_turn_sums(candidates: np.ndarray, guessed: Sequence[int]) -> List[Tuple[int, int]]:
    """Exact turn sums for one or two candidates."""
    this_turn = len(guessed) + 1
    if len(candidates) == 1:
        # Only one candidate - guess it
        return [(int(candidates[0]), this_turn)]

    # Either guess is right half of the time: this turn or the next
    total = this_turn + (this_turn + 1)
    return [(int(candidates[0]), total), (int(candidates[1]), total)]


def turn_sums(cache: Cache, candidates, guessed: Sequence[int] = (),
              picks: Optional[int] = None,
              executor: Optional[Executor] = None) -> List[Tuple[int, int]]:
    """
    Turn sum of each of the best `picks` guesses, lowest first.

    Args:
        cache: Precomputed hints
        candidates: Secrets still consistent with the feedback
        guessed: Guesses played so far
        picks: Guesses expanded per level (defaults to config.picks)
        executor: Pool for the top-level fan-out; a thread pool sized by
            config.workers is created when omitted

    Returns:
        List of (guess_idx, turn_sum); [(NO_GUESS, FAILED_TURN_SUM)] if the
        attempt budget is used up
    """
    candidates = cache.candidates(candidates)
    if len(candidates) == 0:
        raise EmptyCandidatesError("No candidates to minimize over")
    if picks is None:
        picks = cache.config.picks
    if picks < 1:
        raise ConfigurationError(f"picks must be at least 1, got {picks}")
    guessed = [int(g) for g in guessed]

    if len(candidates) <= 2 or len(guessed) >= cache.config.max_attempts:
        return _turn_sums(cache, candidates, guessed, picks, map, False)

    if executor is not None:
        return _turn_sums(cache, candidates, guessed, picks, executor.map, True)
    with ThreadPoolExecutor(max_workers=cache.config.workers) as pool:
        return _turn_sums(cache, candidates, guessed, picks, pool.map, True)


minimize_turns = turn_sums


def expected_turns(turn_sum: int, candidates) -> float:
    """Expected number of turns to finish, from a turn sum."""
    if turn_sum >= FAILED_TURN_SUM:
        return float("inf")
    return turn_sum / len(candidates)


def _turn_sums(cache: Cache, candidates: np.ndarray, guessed: List[int], picks: int,
               map_fn: Callable, top_level: bool) -> List[Tuple[int, int]]:
    if len(candidates) <= 2:
        return trivial_turn_sums(candidates, guessed)
    if len(guessed) >= cache.config.max_attempts:
        return [(NO_GUESS, FAILED_TURN_SUM)]

    # Only the best `picks` guesses by expected remaining candidates
    best = fewest_remaining_solutions(cache, candidates, guessed, parallel=top_level)[:picks]
    if not best:
        return [(NO_GUESS, FAILED_TURN_SUM)]

    verbose = top_level and cache.config.verbose
    t0 = time.time()

    def evaluate(guess: int) -> Tuple[int, int]:
        return guess, _guess_turn_sum(cache, candidates, guessed + [guess], picks)

    scores = list(map_fn(evaluate, [g for g, _ in best]))

    if verbose:
        for i, ((guess, score), (_, total)) in enumerate(zip(best, scores)):
            print(f"  {i + 1}/{len(best)} ({len(guessed) + 1}.) guess {cache.words[guess]} "
                  f"reduces {len(candidates)} solutions to {score:.3f}, turn sum {total}")
        print(f"  Turn sums took {time.time() - t0:.2f}s")

    scores.sort(key=lambda pair: (pair[1], pair[0]))
    return scores


def _guess_turn_sum(cache: Cache, candidates: np.ndarray, guessed: List[int],
                    picks: int) -> int:
    """Turn sum of the last guess in `guessed`; runs serially in one worker."""
    guess = guessed[-1]
    turn = len(guessed)
    total = 0

    for bucket in partition(cache, guess, candidates):
        n = len(bucket)
        if n == 1:
            cost = turn if bucket[0] == guess else turn + 1
        elif n == 2:
            if guess in bucket:
                cost = 2 * turn + 1
            else:
                cost = 2 * (turn + 1) + 1
        else:
            cost = _turn_sums(cache, bucket, guessed, picks, map, False)[0][1]

        if cost >= FAILED_TURN_SUM:
            return FAILED_TURN_SUM
        total += cost

    return total
