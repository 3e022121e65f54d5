"""
Hint Codec
==========

Every guess scored against a secret yields one of 3 states per position:

- CORRECT (🟩, 2): the secret has this letter at exactly this position
- PRESENT (🟨, 1): the secret has this letter, but at another position
- ABSENT  (⬛, 0): no unmatched copy of this letter is left in the secret

With 5 positions there are 3^5 = 243 hints. A hint is stored as the integer
sum(state[i] * 3^(4 - i)), so the first position is the most significant
digit and the all-correct hint is 242.

Repeated letters are credited only while the secret still has unmatched
copies. Guessing "geese" for "eject" matches the middle 'e' exactly, which
leaves "ge_se" against "ej_ct": the first open 'e' is PRESENT, the last one
ABSENT because the secret has no 'e' left.
"""

import numpy as np
from numba import jit
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import ConfigurationError, InvalidHintError


# ============================================================================
# CONSTANTS
# ============================================================================

ABSENT = 0
PRESENT = 1
CORRECT = 2
WORD_LENGTH = 5
N_PATTERNS = 243  # 3^5 possible hints
CORRECT_PATTERN = 242  # 2*81 + 2*27 + 2*9 + 2*3 + 2 = 242 (all green)

SQUARES = "⬛🟨🟩"
VARIATION_SELECTOR = "\ufe0f"


def n_patterns(length: int = WORD_LENGTH) -> int:
    """Number of distinct hints for words of the given length."""
    return 3 ** length


def all_correct(length: int = WORD_LENGTH) -> int:
    """Hint value of an exact match."""
    return n_patterns(length) - 1


def weights(length: int = WORD_LENGTH) -> List[int]:
    """Position weights, most significant first (81, 27, 9, 3, 1)."""
    return [3 ** (length - 1 - i) for i in range(length)]


# ============================================================================
# NUMBA-ACCELERATED HINT COMPUTATION
# ============================================================================

@jit(nopython=True, nogil=True, cache=True)
def compute_hint(guess: np.ndarray, secret: np.ndarray, n_letters: int) -> int:
    """
    Compute the hint for a guess against a secret.

    Args:
        guess: shape (length,) array of letter codes
        secret: shape (length,) array of letter codes
        n_letters: size of the alphabet the codes are drawn from

    Returns:
        Integer hint (0 to 3^length - 1)
    """
    length = guess.shape[0]
    states = np.zeros(length, dtype=np.int32)
    open_counts = np.zeros(n_letters, dtype=np.int32)

    # First pass: exact matches, counting the secret's unmatched letters
    for i in range(length):
        if guess[i] == secret[i]:
            states[i] = CORRECT
        else:
            open_counts[secret[i]] += 1

    # Second pass: left to right, each open letter consumes one unmatched copy
    for i in range(length):
        if states[i] == ABSENT:
            c = guess[i]
            if open_counts[c] > 0:
                states[i] = PRESENT
                open_counts[c] -= 1

    value = 0
    for i in range(length):
        value = value * 3 + states[i]
    return value


def words_to_codes(words: Sequence[str], alphabet: Dict[str, int]) -> np.ndarray:
    """Convert words to a letter code array."""
    length = len(words[0]) if words else 0
    arr = np.zeros((len(words), length), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = alphabet[c]
    return arr


def hint(guess: str, secret: str) -> int:
    """
    Hint the puzzle shows for `guess` when the hidden word is `secret`.

    >>> hint("guest", "truss")  # ⬛🟨⬛🟩🟨
    34
    """
    guess, secret = guess.lower(), secret.lower()
    if len(guess) != len(secret):
        raise ConfigurationError(
            f"Cannot compare '{guess}' and '{secret}' of different lengths")
    alphabet = {c: i for i, c in enumerate(sorted(set(guess) | set(secret)))}
    codes = words_to_codes([guess, secret], alphabet)
    return int(compute_hint(codes[0], codes[1], len(alphabet)))


# ============================================================================
# ENCODING / DECODING
# ============================================================================

def encode(states: Iterable[int]) -> int:
    """Combine per-position states into a hint value."""
    value = 0
    for state in states:
        if state not in (ABSENT, PRESENT, CORRECT):
            raise InvalidHintError(f"Illegal hint state {state}")
        value = value * 3 + state
    return value


def decode(value: int, length: int = WORD_LENGTH) -> Tuple[int, ...]:
    """Split a hint value into its per-position states."""
    value = int(value)
    if not 0 <= value < n_patterns(length):
        raise InvalidHintError(f"Illegal hint value {value}")
    states = []
    for weight in weights(length):
        states.append(value // weight)
        value %= weight
    return tuple(states)


def hint_to_string(value: int, length: int = WORD_LENGTH) -> str:
    """Render a hint as coloured squares, e.g. '⬛🟨⬛🟩🟨'."""
    return "".join(SQUARES[state] for state in decode(value, length))


def parse_hint(text: str, length: Optional[int] = WORD_LENGTH) -> int:
    """
    Parse hint feedback into a hint value.

    Accepts either coloured squares ('⬛🟨⬛🟩🟨') or letters, where an
    upper-case letter marks a correct position, a lower-case letter a letter
    at another position and any other character an absent letter
    ('.u.Ts' for guess "guest").
    """
    text = text.strip().replace(VARIATION_SELECTOR, "")
    if length is not None and len(text) != length:
        raise InvalidHintError(
            f"Feedback '{text}' must have exactly {length} characters")

    if any(c in SQUARES for c in text):
        states = []
        for c in text:
            if c not in SQUARES:
                raise InvalidHintError(f"Illegal hint '{c}' in '{text}'")
            states.append(SQUARES.index(c))
        return encode(states)

    states = []
    for c in text:
        if c.isalpha() and c.isupper():
            states.append(CORRECT)
        elif c.isalpha() and c.islower():
            states.append(PRESENT)
        else:
            states.append(ABSENT)
    return encode(states)
