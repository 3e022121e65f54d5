"""
Strategy Composition
====================

A strategy looks at a session (candidates + guess history) and either
proposes a guess index or abstains with None. ChainedStrategies asks each
one in order and falls back to the first remaining candidate:

1. two or fewer candidates left: guess one of them
2. a few letters of the candidates were never guessed: cover most of them
3. first turn: fewest expected remaining candidates
4. otherwise: shortest expected game (turn-count search)
"""

from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .cache import Cache
from .config import SolverConfig
from .scoring import fewest_remaining_solutions
from .turns import NO_GUESS, expected_turns, turn_sums
from .words import Words


Strategy = Callable[["Session"], Optional[int]]


# ============================================================================
# HEURISTICS
# ============================================================================

def pick_first_solution(session) -> int:
    """Fallback: the lowest-index candidate."""
    return int(session.candidates[0])


def first_of_two_or_fewer_remaining_solutions(session) -> Optional[int]:
    if len(session.candidates) <= 2:
        return int(session.candidates[0])
    return None


def word_with_most_new_chars_from_remaining_solutions(session) -> Optional[int]:
    """
    When only a handful of the candidates' letters were never guessed,
    play the allowed word containing most of them.
    """
    wanted = session.wanted_chars()
    if not 1 <= len(wanted) <= session.words.word_length:
        return None

    scores = words_with_most_wanted_chars(wanted, session.words, session.allowed())
    if not scores:
        return None
    if session.config.verbose:
        top = ", ".join(f"{count} '{session.words[idx]}'" for idx, count in scores[:5])
        print(f"Words with most of wanted chars {sorted(wanted)} are: {top}")
    return scores[0][0]


def word_that_results_in_fewest_remaining_solutions(session) -> Optional[int]:
    # Only for the first guess, the turn search is too slow with all secrets
    if session.guessed:
        return None
    scores = fewest_remaining_solutions(session.cache, session.candidates, session.guessed)
    if not scores:
        return None
    if session.config.verbose:
        print(f"Best (fewest remaining solutions): {session.words.scores_to_string(scores, 5)}")
    return scores[0][0]


class WordThatResultsInShortestGame:
    """Guess with the lowest turn sum among the `picks` best-scoring guesses."""

    def __init__(self, picks: Optional[int] = None):
        self.picks = picks

    def __call__(self, session) -> Optional[int]:
        scores = turn_sums(session.cache, session.candidates, session.guessed, self.picks)
        guess, total = scores[0]
        if guess == NO_GUESS:
            return None
        if session.config.verbose:
            top = ", ".join(f"{expected_turns(t, session.candidates):.3f} '{session.words[g]}'"
                            for g, t in scores[:5])
            print(f"Best (shortest expected game): {top}")
        return guess


class FixedGuessList:
    """Play a predetermined sequence of guesses, then abstain."""

    def __init__(self, words: Words, guesses: Sequence[str]):
        self.guesses = [words.index_of(g) for g in guesses]

    def __call__(self, session) -> Optional[int]:
        turn = len(session.guessed)
        if turn < len(self.guesses):
            return self.guesses[turn]
        return None


def words_with_most_wanted_chars(wanted: Set[str], words: Words,
                                 guesses: Sequence[int]) -> List[Tuple[int, int]]:
    """(guess_idx, unique wanted letters), most first, ties by index."""
    scores = [(int(g), len(set(words[g]) & wanted)) for g in guesses]
    scores.sort(key=lambda pair: (-pair[1], pair[0]))
    return scores


# ============================================================================
# CHARACTER FREQUENCY HEURISTICS
# ============================================================================
#
# Cheaper alternatives to the hint based scores, picking a candidate whose
# letters are common among the candidates. Only the open positions count:
# a position where every candidate has the same letter tells nothing.
# None of these are part of the default chain.

def high_variety_words(words: Sequence[str], positions: Sequence[int]) -> List[int]:
    """Indices into `words` of the words with no repeated letter in `positions`."""
    return [i for i, word in enumerate(words)
            if len({word[p] for p in positions}) == len(positions)]


def global_character_counts(words: Sequence[str], positions: Sequence[int]) -> Counter:
    """Occurrences of each letter over `positions` of all words."""
    return Counter(word[p] for word in words for p in positions)


def character_counts_per_position(words: Sequence[str],
                                  positions: Sequence[int]) -> Dict[int, Counter]:
    """Occurrences of each letter, separately for every position."""
    return {p: Counter(word[p] for word in words) for p in positions}


def _highest(indices: Sequence[int], scores: Sequence[int]) -> Optional[int]:
    """Index with the highest score, ties by lowest index."""
    if len(indices) == 0:
        return None
    best = max(range(len(indices)), key=lambda i: (scores[i], -indices[i]))
    return int(indices[best])


def _global_score(words: Sequence[str], positions: Sequence[int]) -> List[int]:
    freq = global_character_counts(words, positions)
    return [sum(freq[c] for c in {word[p] for p in positions}) for word in words]


def _per_position_score(words: Sequence[str], positions: Sequence[int]) -> List[int]:
    counts = character_counts_per_position(words, positions)
    return [sum(counts[p][word[p]] for p in positions) for word in words]


def _matching_score(words: Sequence[str], positions: Sequence[int]) -> List[int]:
    """Number of other words sharing a letter with each word in some open position."""
    open_chars = [[word[p] for p in positions] for word in words]
    scores = [0] * len(words)
    for i in range(len(words)):
        for j in range(i + 1, len(words)):
            if any(a == b for a, b in zip(open_chars[i], open_chars[j])):
                scores[i] += 1
                scores[j] += 1
    return scores


def _pick_by(session, score: Callable, high_variety: bool) -> Optional[int]:
    positions = session.open_positions()
    indices = [int(c) for c in session.candidates]
    words = [session.words[c] for c in indices]
    if high_variety:
        keep = high_variety_words(words, positions)
        if not keep:
            return None
        indices = [indices[i] for i in keep]
        words = [words[i] for i in keep]
    return _highest(indices, score(words, positions))


def most_frequent_global_character(session) -> Optional[int]:
    """Candidate whose distinct open letters are most frequent overall."""
    return _pick_by(session, _global_score, False)


def most_frequent_global_character_high_variety_word(session) -> Optional[int]:
    return _pick_by(session, _global_score, True)


def most_frequent_character_per_pos(session) -> Optional[int]:
    """Candidate whose open letters are most frequent at their own position."""
    return _pick_by(session, _per_position_score, False)


def most_frequent_character_per_pos_high_variety_word(session) -> Optional[int]:
    return _pick_by(session, _per_position_score, True)


def matching_most_other_words_in_at_least_one_open_position(session) -> Optional[int]:
    return _pick_by(session, _matching_score, False)


def matching_most_other_words_in_at_least_one_open_position_high_variety_word(
        session) -> Optional[int]:
    return _pick_by(session, _matching_score, True)


def most_frequent_characters_of_remaining_words(session) -> Optional[int]:
    """
    Among allowed words with five distinct letters, none of them guessed
    yet, the word whose letters are most frequent in that same group.
    """
    guessed = session.guessed_chars()
    length = session.words.word_length
    indices = [int(g) for g in session.allowed()
               if len(set(session.words[g])) == length
               and not set(session.words[g]) & guessed]
    words = [session.words[g] for g in indices]
    return _highest(indices, _global_score(words, list(range(length))))


# ============================================================================
# COMPOSITION
# ============================================================================

class ChainedStrategies:
    """
    Ask strategies in priority order; the first concrete pick wins.

    Args:
        strategies: Callables returning a guess index or None
        fallback: Callable that always returns a guess index
    """

    def __init__(self, strategies: Sequence[Strategy],
                 fallback: Callable[["Session"], int] = pick_first_solution):
        self.strategies = list(strategies)
        self.fallback = fallback

    def __call__(self, session) -> int:
        for strategy in self.strategies:
            guess = strategy(session)
            if guess is not None:
                return guess
        if session.config.verbose:
            print("Using fallback")
        return self.fallback(session)


def default_strategy(config: Optional[SolverConfig] = None) -> ChainedStrategies:
    """The standard chain of heuristics."""
    picks = config.picks if config is not None else None
    return ChainedStrategies(
        [
            first_of_two_or_fewer_remaining_solutions,
            word_with_most_new_chars_from_remaining_solutions,
            word_that_results_in_fewest_remaining_solutions,
            WordThatResultsInShortestGame(picks),
        ],
        pick_first_solution,
    )


def best_guess(cache: Cache, candidates, guessed: Sequence[int] = (),
               strategy: Optional[Callable] = None) -> str:
    """
    Pick the next guess for a game state.

    Args:
        cache: Precomputed hints
        candidates: Secrets still consistent with the feedback
        guessed: Guesses played so far
        strategy: Guess picker (default: default_strategy)

    Returns:
        The guess word
    """
    from .session import Session

    session = Session(cache, candidates, guessed)
    strategy = strategy or default_strategy(cache.config)
    return cache.words[strategy(session)]
