"""Shared vocabularies for the solver tests."""

import pytest

from wordle_solver.cache import build_cache
from wordle_solver.config import SolverConfig
from wordle_solver.words import Words


SECRETS_A = ["augur", "briar", "friar", "lunar", "sugar"]
GUESSES_A = ["fubar", "rural", "urial", "aurar", "goier"]
SECRETS_B = ["batch", "hatch", "latch", "match", "patch"]


@pytest.fixture(scope="session")
def words_a():
    return Words(SECRETS_A, GUESSES_A)


@pytest.fixture(scope="session")
def cache_a(words_a):
    return build_cache(words_a, SolverConfig(picks=10))


@pytest.fixture(scope="session")
def cache_b():
    return build_cache(Words(SECRETS_B), SolverConfig(picks=5))


@pytest.fixture(scope="session")
def cache_b_clamp():
    return build_cache(Words(SECRETS_B, ["clamp"]), SolverConfig(picks=6))
