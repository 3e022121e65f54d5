"""
Word Store
==========

Immutable ordered vocabulary. Possible secrets come first, so a secret's
index is also its index as a guess:

    [0, secret_count)  -> possible secrets (also allowed as guesses)
    [0, total_count)   -> allowed guesses
"""

import numpy as np
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import ConfigurationError
from .hints import words_to_codes


class Words:
    """
    Ordered word list with stable integer indices.

    Args:
        secrets: Words that can be the hidden word
        guesses: Additional words allowed as guesses (may repeat secrets)
    """

    def __init__(self, secrets: Iterable[str], guesses: Optional[Iterable[str]] = None):
        secrets = _unique([w.strip().lower() for w in secrets])
        if not secrets:
            raise ConfigurationError("No secret words given")
        known = set(secrets)
        extra = _unique([w.strip().lower() for w in (guesses or [])
                         if w.strip().lower() not in known])

        self._words = tuple(secrets + extra)
        self.secret_count = len(secrets)
        self.word_length = len(self._words[0])

        for word in self._words:
            if len(word) != self.word_length:
                raise ConfigurationError(
                    f"Word '{word}' has {len(word)} letters, expected {self.word_length}")
            if not word.isalpha():
                raise ConfigurationError(f"Word '{word}' contains non-letters")

        self._index: Dict[str, int] = {w: i for i, w in enumerate(self._words)}
        self.alphabet: Dict[str, int] = {
            c: i for i, c in enumerate(sorted(set("".join(self._words))))}

        # Letter codes for numba
        self.codes = words_to_codes(self._words, self.alphabet)
        self.codes.flags.writeable = False

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, idx: int) -> str:
        return self._words[idx]

    def __iter__(self):
        return iter(self._words)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._index

    @property
    def total_count(self) -> int:
        return len(self._words)

    @property
    def secrets(self) -> Sequence[str]:
        return self._words[:self.secret_count]

    @property
    def guesses(self) -> Sequence[str]:
        return self._words

    def secret_indices(self) -> np.ndarray:
        return np.arange(self.secret_count, dtype=np.int32)

    def guess_indices(self) -> np.ndarray:
        return np.arange(len(self._words), dtype=np.int32)

    def is_secret(self, idx: int) -> bool:
        return 0 <= idx < self.secret_count

    def index_of(self, word: str) -> int:
        """Index of a word; unknown words are a configuration error."""
        try:
            return self._index[word.strip().lower()]
        except KeyError:
            raise ConfigurationError(f"Unknown word '{word}'") from None

    def indices_to_words(self, indices: Iterable[int]) -> List[str]:
        return [self._words[i] for i in indices]

    def scores_to_string(self, scores, count: int = 5) -> str:
        """Format the first `count` (index, score) pairs, e.g. "1.400 'fubar'"."""
        return ", ".join(f"{score:.3f} '{self._words[idx]}'" for idx, score in scores[:count])

    def __repr__(self) -> str:
        return f"Words({self.secret_count} secrets, {len(self._words)} guesses)"


def _unique(words: List[str]) -> List[str]:
    """Drop duplicates, keeping first occurrences in order."""
    seen = set()
    result = []
    for w in words:
        if w and w not in seen:
            seen.add(w)
            result.append(w)
    return result
