"""
Game Session
============

Candidate set + guess history of one game, and the helpers that play games
against a known secret: autoplay for a single word, benchmark over many.
"""

import os
import time
from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence, Set

import numpy as np

from .cache import Cache
from .config import SolverConfig
from .errors import ConfigurationError, EmptyCandidatesError, InvalidHintError
from .hints import hint_to_string, parse_hint
from .scoring import allowed_guesses
from .strategies import default_strategy


# ============================================================================
# NARROWING
# ============================================================================

def narrow(candidates, guess: int, hint: int, cache: Cache) -> np.ndarray:
    """
    Keep the candidates that would have answered `guess` with `hint`.

    Args:
        candidates: Secrets still consistent with earlier feedback
        guess: Index of the guess played
        hint: Hint value received
        cache: Precomputed hints

    Returns:
        Sorted int32 array of remaining candidates
    """
    guess = cache.check_guess(guess)
    if not 0 <= hint < cache.n_patterns:
        raise InvalidHintError(f"Hint {hint} out of range")
    remaining = np.intersect1d(cache.candidates(candidates), cache.solutions_by(guess, hint),
                               assume_unique=True)
    if len(remaining) == 0:
        raise EmptyCandidatesError(
            f"No candidate is consistent with '{cache.words[guess]}' "
            f"{hint_to_string(hint, cache.words.word_length)}")
    return remaining.astype(np.int32)


# ============================================================================
# SESSION
# ============================================================================

class Session:
    """
    State of one game.

    Args:
        cache: Precomputed hints
        candidates: Starting candidates (default: all secrets)
        guessed: Guesses already played
    """

    def __init__(self, cache: Cache, candidates=None, guessed: Sequence[int] = ()):
        self.cache = cache
        self.words = cache.words
        self.config: SolverConfig = cache.config
        self.reset()
        if candidates is not None:
            candidates = cache.candidates(candidates)
            if len(candidates) == 0:
                raise EmptyCandidatesError("Session needs at least one candidate")
            self.candidates = candidates
        self.guessed = [cache.check_guess(g) for g in guessed]

    def reset(self):
        self.candidates = self.cache.all_secrets()
        self.guessed: List[int] = []

    def allowed(self) -> np.ndarray:
        """Guess indices not played yet."""
        return allowed_guesses(self.cache, self.guessed)

    def update(self, guess, hint):
        """
        Apply the feedback for a guess.

        Args:
            guess: Guess index or word
            hint: Hint value, or feedback text accepted by parse_hint
        """
        if isinstance(guess, str):
            guess = self.words.index_of(guess)
        if isinstance(hint, str):
            hint = parse_hint(hint, self.words.word_length)
        self.candidates = narrow(self.candidates, guess, hint, self.cache)
        self.guessed.append(int(guess))

    def guessed_chars(self) -> Set[str]:
        return set("".join(self.words[g] for g in self.guessed))

    def chars_in_possible_solutions(self) -> Set[str]:
        return set("".join(self.words[c] for c in self.candidates))

    def wanted_chars(self) -> Set[str]:
        """Letters of the candidates that no guess has tried yet."""
        return self.chars_in_possible_solutions() - self.guessed_chars()

    def open_positions(self) -> List[int]:
        """Positions where the candidates still disagree on the letter."""
        candidates = [self.words[c] for c in self.candidates]
        return [i for i in range(self.words.word_length)
                if len({word[i] for word in candidates}) > 1]

    def is_first_turn(self) -> bool:
        return not self.guessed

    def is_solved(self) -> bool:
        return len(self.candidates) == 1

    def solution(self) -> Optional[str]:
        if self.is_solved():
            return self.words[self.candidates[0]]
        return None

    def suggest(self, strategy: Optional[Callable] = None) -> str:
        """Next guess word according to `strategy`."""
        strategy = strategy or default_strategy(self.config)
        return self.words[strategy(self)]

    def __repr__(self) -> str:
        return f"Session({len(self.candidates)} candidates, guessed={self.words.indices_to_words(self.guessed)})"


# ============================================================================
# PLAYING
# ============================================================================

def autoplay(cache: Cache, secret: str, strategy: Optional[Callable] = None,
             verbose: Optional[bool] = None) -> List[str]:
    """
    Play a game against a known secret.

    Args:
        cache: Precomputed hints
        secret: The hidden word
        strategy: Guess picker (default: default_strategy)
        verbose: Print each turn (default: config.verbose)

    Returns:
        Guesses played; the last one is the secret unless the game hit
        config.autoplay_max_attempts
    """
    words = cache.words
    secret_idx = words.index_of(secret)
    if not words.is_secret(secret_idx):
        raise ConfigurationError(f"'{secret}' is not a possible secret")

    if verbose is None:
        verbose = cache.config.verbose
    strategy = strategy or default_strategy(cache.config)
    session = Session(cache)

    while len(session.guessed) < cache.config.autoplay_max_attempts:
        n_candidates = len(session.candidates)
        guess = int(strategy(session))
        hint = cache.hint(guess, secret_idx)

        if verbose:
            print(f"{n_candidates:4} solutions left, {len(session.guessed) + 1}. guess "
                  f"'{words[guess]}', hint {hint_to_string(hint, words.word_length)}")

        if guess == secret_idx:
            session.guessed.append(guess)
            break
        session.update(guess, hint)

    return words.indices_to_words(session.guessed)


def benchmark(cache: Cache, secrets: Optional[Sequence[str]] = None,
              strategy: Optional[Callable] = None, verbose: bool = True) -> Dict:
    """
    Autoplay every secret and collect statistics.

    A game that reaches config.autoplay_max_attempts without finding the
    secret is unsolved and counts as one attempt more than it played.
    Any game longer than config.max_attempts is a failure.

    Args:
        cache: Precomputed hints
        secrets: Words to play (default: all secrets)
        strategy: Guess picker (default: default_strategy)
        verbose: Print progress

    Returns:
        Dict with results
    """
    if secrets is None:
        secrets = cache.words.secrets
    strategy = strategy or default_strategy(cache.config)
    max_attempts = cache.config.max_attempts

    attempts = []
    dist = Counter()
    failures = []
    unsolved = []

    start = time.time()
    for i, word in enumerate(secrets):
        if verbose and i % 500 == 0:
            elapsed = time.time() - start
            rate = i / elapsed if elapsed > 0 else 0
            avg = sum(attempts) / len(attempts) if attempts else 0
            print(f"[{i}/{len(secrets)}] {rate:.1f} w/s, avg={avg:.4f}")

        played = autoplay(cache, word, strategy, verbose=False)
        n = len(played)
        if played[-1] != word.strip().lower():
            unsolved.append(word)
            n += 1
        attempts.append(n)
        dist[n] += 1
        if n > max_attempts:
            failures.append(word)

    elapsed = time.time() - start

    return {
        'total': len(secrets),
        'average': sum(attempts) / len(attempts) if attempts else 0.0,
        'total_guesses': sum(attempts),
        'distribution': dict(sorted(dist.items())),
        'max_attempts': max_attempts,
        'failures': len(failures),
        'failed_words': failures[:20],
        'unsolved': len(unsolved),
        'unsolved_words': unsolved[:20],
        'time': elapsed,
        'rate': len(secrets) / elapsed if elapsed > 0 else 0.0,
    }


def print_results(results: Dict):
    """Print autoplay statistics, one line per attempt count."""
    total = max(results['total'], 1)
    limit = results['max_attempts']
    print(f"\nAverage attempts = {results['average']:.3f} "
          f"({results['total_guesses']} guesses for {results['total']} words); "
          f"{results['failures']} ({100 * results['failures'] / total:.3f}%) "
          f"failed games (> {limit} attempts)")
    for n, count in results['distribution'].items():
        marker = " (failed)" if n > limit else ""
        bar = "#" * round(40 * count / total)
        print(f"  {n:2d}: {count:5d} {bar}{marker}")
    if results['failed_words']:
        print(f"Failed: {', '.join(results['failed_words'])}")
    if results['unsolved']:
        print(f"Never solved: {', '.join(results['unsolved_words'])}")
    print(f"{results['time']:.1f}s, {results['rate']:.1f} games/s")


def load_words(filepath: str) -> List[str]:
    """
    Read a word list: whitespace separated words, lines starting with '#'
    are comments.
    """
    words = []
    with open(filepath, encoding="utf-8") as f:
        for line in f:
            if line.lstrip().startswith("#"):
                continue
            words.extend(w.lower() for w in line.split())
    return words


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    import random
    import sys

    from .cache import build_cache
    from .words import Words

    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    answers_file = sys.argv[1] if len(sys.argv) > 1 else os.path.join(base_dir, "words", "answers.txt")
    guesses_file = sys.argv[2] if len(sys.argv) > 2 else os.path.join(base_dir, "words", "allowed_guesses.txt")

    print("Loading word lists...")
    answers = load_words(answers_file)
    guesses = load_words(guesses_file) if os.path.exists(guesses_file) else []
    print(f"  Secrets: {len(answers)} words")
    print(f"  Guesses: {len(guesses)} words")

    cache = build_cache(Words(answers, guesses), SolverConfig(verbose=True))

    print("\n--- Quick tests ---")
    for word in answers[:3]:
        played = autoplay(cache, word, verbose=True)
        print(f"  -> Solved in {len(played)} guesses: {played}\n")

    print("\n--- Sample benchmark (100 words) ---")
    random.seed(42)
    sample = random.sample(answers, min(100, len(answers)))
    print_results(benchmark(cache, sample, verbose=True))
