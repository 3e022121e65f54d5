"""Unit tests for strategy composition."""

from wordle_solver.session import Session
from wordle_solver.session import autoplay
from wordle_solver.strategies import (
    ChainedStrategies, FixedGuessList, WordThatResultsInShortestGame, best_guess,
    character_counts_per_position, default_strategy,
    first_of_two_or_fewer_remaining_solutions, global_character_counts, high_variety_words,
    matching_most_other_words_in_at_least_one_open_position,
    matching_most_other_words_in_at_least_one_open_position_high_variety_word,
    most_frequent_character_per_pos, most_frequent_character_per_pos_high_variety_word,
    most_frequent_characters_of_remaining_words, most_frequent_global_character,
    most_frequent_global_character_high_variety_word, pick_first_solution,
    word_that_results_in_fewest_remaining_solutions,
    word_with_most_new_chars_from_remaining_solutions, words_with_most_wanted_chars,
)


class TestHeuristics:
    """Tests for the individual heuristics."""

    def test_first_of_two_or_fewer(self, cache_a):
        assert first_of_two_or_fewer_remaining_solutions(Session(cache_a, [3, 4])) == 3
        assert first_of_two_or_fewer_remaining_solutions(Session(cache_a, [2])) == 2
        assert first_of_two_or_fewer_remaining_solutions(Session(cache_a)) is None

    def test_most_new_chars_abstains_with_many_wanted(self, cache_a):
        assert word_with_most_new_chars_from_remaining_solutions(Session(cache_a)) is None

    def test_most_new_chars_picks_covering_word(self, cache_b_clamp):
        """After 'batch' only l, m and p are unknown; 'clamp' has all three."""
        session = Session(cache_b_clamp)
        session.update("batch", ".ATCH")
        assert session.wanted_chars() == {"l", "m", "p"}
        assert word_with_most_new_chars_from_remaining_solutions(session) == 5

    def test_most_new_chars_ties_by_index(self, cache_b):
        session = Session(cache_b)
        session.update("batch", ".ATCH")
        assert word_with_most_new_chars_from_remaining_solutions(session) == 2

    def test_words_with_most_wanted_chars(self, words_a):
        scores = words_with_most_wanted_chars({"g", "o"}, words_a, range(10))
        assert scores[0] == (9, 2)
        assert scores[1] == (0, 1)

    def test_fewest_remaining_first_turn_only(self, cache_a):
        assert word_that_results_in_fewest_remaining_solutions(Session(cache_a)) == 0
        session = Session(cache_a, [0, 1, 2], guessed=[9])
        assert word_that_results_in_fewest_remaining_solutions(session) is None

    def test_shortest_game(self, cache_a):
        assert WordThatResultsInShortestGame(10)(Session(cache_a)) == 0

    def test_shortest_game_abstains_when_out_of_attempts(self, cache_b):
        session = Session(cache_b, [1, 2, 3], guessed=[0] * 6)
        assert WordThatResultsInShortestGame()(session) is None

    def test_fixed_guess_list(self, cache_a, words_a):
        strategy = FixedGuessList(words_a, ["fubar", "rural"])
        session = Session(cache_a)
        assert strategy(session) == 5
        session.update("fubar", ".U.AR")
        assert strategy(session) == 6
        session.update("rural", 142)
        assert strategy(session) is None


class TestCharacterFrequency:
    """Tests for the letter frequency heuristics.

    The five secrets all end in r, so positions 0-3 are open. augur repeats
    its u there and is the only word dropped as low variety.
    """

    def test_counts(self, words_a):
        secrets = list(words_a.secrets)
        freq = global_character_counts(secrets, [0, 1, 2, 3])
        assert freq["a"] == 5
        assert freq["u"] == 4
        per_pos = character_counts_per_position(secrets, [1, 3])
        assert per_pos[1]["u"] == 3
        assert per_pos[3]["a"] == 4
        assert high_variety_words(secrets, [0, 1, 2, 3]) == [1, 2, 3, 4]

    def test_global_character(self, cache_a):
        assert most_frequent_global_character(Session(cache_a)) == 4

    def test_global_character_high_variety(self, cache_a):
        assert most_frequent_global_character_high_variety_word(Session(cache_a)) == 1

    def test_character_per_pos(self, cache_a):
        assert most_frequent_character_per_pos(Session(cache_a)) == 4

    def test_character_per_pos_high_variety(self, cache_a):
        assert most_frequent_character_per_pos_high_variety_word(Session(cache_a)) == 1

    def test_matching_most_other_words(self, cache_a):
        """lunar and sugar share an open letter with all four other secrets."""
        assert matching_most_other_words_in_at_least_one_open_position(Session(cache_a)) == 3
        assert matching_most_other_words_in_at_least_one_open_position_high_variety_word(
            Session(cache_a)) == 1

    def test_characters_of_remaining_words(self, cache_a):
        """urial scores highest among the words with five distinct letters."""
        assert most_frequent_characters_of_remaining_words(Session(cache_a)) == 7

    def test_characters_of_remaining_words_abstains(self, cache_b):
        """Every word left shares letters with batch."""
        session = Session(cache_b)
        session.update("batch", ".ATCH")
        assert most_frequent_characters_of_remaining_words(session) is None

    def test_single_candidate(self, cache_a):
        """A lone candidate has no open positions, so every word qualifies."""
        assert most_frequent_global_character_high_variety_word(Session(cache_a, [0])) == 0

    def test_autoplay_with_frequency_chain(self, cache_a):
        strategy = ChainedStrategies([first_of_two_or_fewer_remaining_solutions,
                                      most_frequent_global_character])
        assert autoplay(cache_a, "sugar", strategy) == ["sugar"]
        assert autoplay(cache_a, "augur", strategy) == ["sugar", "augur"]


class TestChainedStrategies:
    """Tests for chaining heuristics."""

    def test_first_concrete_pick_wins(self, cache_a):
        chain = ChainedStrategies([lambda s: None, lambda s: 7, lambda s: 8])
        assert chain(Session(cache_a)) == 7

    def test_fallback(self, cache_a):
        chain = ChainedStrategies([lambda s: None], pick_first_solution)
        assert chain(Session(cache_a, [2, 4])) == 2

    def test_default_strategy_opening(self, cache_a):
        assert default_strategy(cache_a.config)(Session(cache_a)) == 0


class TestBestGuess:
    """Tests for the best_guess entry point."""

    def test_first_turn(self, cache_a):
        assert best_guess(cache_a, cache_a.all_secrets()) == "augur"

    def test_two_left(self, cache_a):
        assert best_guess(cache_a, [3, 4], guessed=[5]) == "lunar"

    def test_covers_unknown_letters(self, cache_b_clamp):
        assert best_guess(cache_b_clamp, [1, 2, 3, 4], guessed=[0]) == "clamp"

    def test_custom_strategy(self, cache_a):
        assert best_guess(cache_a, cache_a.all_secrets(), strategy=lambda s: 9) == "goier"
