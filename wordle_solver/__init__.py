"""
Wordle Solver - Turn-Count Minimizing Implementation
=====================================================

Hints for every guess/secret pair are precomputed once per vocabulary;
guesses are then picked by a chain of heuristics ending in a search for
the shortest expected game.
"""

__version__ = "3.0.0"

from .config import SolverConfig
from .errors import ConfigurationError, EmptyCandidatesError, InvalidHintError
from .hints import decode, encode, hint, hint_to_string, parse_hint
from .words import Words
from .cache import Cache, build_cache
from .scoring import fewest_remaining_solutions, score_guess
from .turns import FAILED_TURN_SUM, NO_GUESS, minimize_turns, turn_sums
from .strategies import ChainedStrategies, FixedGuessList, best_guess, default_strategy
from .session import Session, autoplay, benchmark, load_words, narrow, print_results
