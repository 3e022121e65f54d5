"""
Solver configuration.
"""

from typing import NamedTuple, Optional


# ============================================================================
# DEFAULTS
# ============================================================================

MAX_ATTEMPTS = 6
AUTOPLAY_MAX_ATTEMPTS = 10
PICKS = 20  # Top-K guesses explored per level of the turn search


class SolverConfig(NamedTuple):
    """
    Tunable values, built once and handed to the cache.

    Attributes:
        max_attempts: Guess budget of a real game; the turn search treats
            a longer history as a failed line of play
        autoplay_max_attempts: Hard stop for simulated games
        picks: Number of best-scoring guesses the turn search expands
        workers: Thread count for the turn search fan-out (None = default)
        verbose: Print progress and timings
    """
    max_attempts: int = MAX_ATTEMPTS
    autoplay_max_attempts: int = AUTOPLAY_MAX_ATTEMPTS
    picks: int = PICKS
    workers: Optional[int] = None
    verbose: bool = False
