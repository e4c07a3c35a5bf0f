import random
import threading
from unittest import mock

import pytest

from holdem_odds.config import PARALLEL_CHUNK_TRIALS
from holdem_odds.engine.simulation import (
    Outcome, SimulationResult, calculate, play_trial, simulate,
)
from holdem_odds.helpers.cards import make_deck, parse_cards
from holdem_odds.helpers.errors import (
    InvalidCardError, InvalidInputError, SimulationCancelledError,
)


class _NoShuffle:
    def shuffle(self, x):
        pass


class _DealFirst:
    """Moves the given cards to the front of the deck, in order."""
    def __init__(self, cards):
        self.cards = parse_cards(cards)

    def shuffle(self, x):
        rest = [c for c in x if c not in self.cards]
        x[:] = self.cards + rest


class _CancelAfter:
    def __init__(self, n):
        self.calls = 0
        self.n = n

    def is_set(self):
        self.calls += 1
        return self.calls > self.n


def test_percentages_sum_to_100():
    res = calculate(["As", "Kd"], [], 1, simulations=1000, seed=1)
    assert abs((res.win + res.tie + res.lose) - 100.0) < 1e-9
    assert res.simulations == 1000
    assert set(res.as_dict()) == {"win", "tie", "lose", "simulations"}

def test_pocket_aces_heads_up_preflop():
    res = calculate(["As", "Ad"], [], 1, simulations=20000, seed=3)
    assert 80.0 < res.win < 90.0

def test_more_opponents_lower_win_rate():
    heads_up = calculate(["As", "Ad"], [], 1, simulations=3000, seed=5)
    full_ring = calculate(["As", "Ad"], [], 8, simulations=3000, seed=5)
    assert full_ring.win < heads_up.win

def test_royal_flush_on_river_always_wins():
    res = calculate(["As", "Ks"], ["Qs", "Js", "Ts", "2d", "3c"], 3, simulations=500, seed=4)
    assert res.win == 100.0
    assert res.tie == 0.0
    assert res.lose == 0.0

def test_same_seed_same_result():
    a = calculate(["Ah", "Kh"], ["Qh", "Jh", "2d"], 3, simulations=2000, seed=42)
    b = calculate(["Ah", "Kh"], ["Qh", "Jh", "2d"], 3, simulations=2000, seed=42)
    assert a == b

def test_injected_rng_matches_seed():
    a = calculate(["As", "Ah"], ["Ac", "2d", "3s"], 2, simulations=500, seed=9)
    b = simulate(parse_cards(["As", "Ah"]), parse_cards(["Ac", "2d", "3s"]), 2, 500, rng=random.Random(9))
    assert a == b

@pytest.mark.parametrize("hand, board, opponents, trials", [
    (["As", "Ad", "Kc"], [], 1, 100),
    (["As"], [], 1, 100),
    (["As", "Ad"], ["2c", "3c", "4c", "5c", "6c", "7c"], 1, 100),
    (["As", "Ad"], [], 9, 100),
    (["As", "Ad"], [], 0, 100),
    (["As", "Ad"], [], 1, 0),
    (["As", "Ad"], ["As", "2c", "3d"], 1, 100),
])
def test_invalid_input_rejected_before_sampling(hand, board, opponents, trials):
    rng = mock.Mock()
    with pytest.raises(InvalidInputError):
        calculate(hand, board, opponents, trials, rng=rng)
    assert rng.method_calls == []

def test_invalid_card_rejected():
    with pytest.raises(InvalidCardError):
        calculate(["Zs", "Ad"], [], 1)

def test_error_messages_name_the_problem():
    with pytest.raises(InvalidInputError, match="hole cards count"):
        calculate(["As"], [], 1)
    with pytest.raises(InvalidInputError, match="community card count"):
        calculate(["As", "Ad"], ["2c", "3c", "4c", "5c", "6c", "7c"], 1)
    with pytest.raises(InvalidInputError, match="opponent count"):
        calculate(["As", "Ad"], [], 9)
    with pytest.raises(InvalidInputError, match="duplicate card"):
        calculate(["As", "Ad"], ["Ad"], 1)

def test_opponents_dealt_before_board():
    # unshuffled deck: opponent gets 2s 3s, board is topped up with 4s 5s
    hole = parse_cards(["6s", "7s"])
    community = parse_cards(["Kd", "Qh", "8c"])
    deck = make_deck(exclude=hole + community)
    assert play_trial(hole, community, deck, 1, _NoShuffle()) == Outcome.WIN

def test_first_opponent_beats_weak_hand():
    community = parse_cards(["Kd", "Qh", "8c", "6d", "2h"])
    # first opponent pairs the deuce
    weak = parse_cards(["4c", "9d"])
    deck = make_deck(exclude=weak + community)
    assert play_trial(weak, community, deck, 2, _NoShuffle()) == Outcome.LOSS

    strong = parse_cards(["Ac", "Ad"])
    deck = make_deck(exclude=strong + community)
    assert play_trial(strong, community, deck, 2, _NoShuffle()) == Outcome.WIN

def test_tie_counts_when_board_plays():
    # 2c 3c vs 2s 3s: identical ranks, board straight A-K, no flush
    community = parse_cards(["As", "Kd", "Qh", "Jc", "Td"])
    hole = parse_cards(["2c", "3c"])
    deck = make_deck(exclude=hole + community)
    assert play_trial(hole, community, deck, 1, _NoShuffle()) == Outcome.TIE

def test_board_straight_ties_against_paired_opponent():
    # opponent pairs the nine: one distinct rank fewer, same straight
    community = parse_cards(["5s", "6h", "7d", "8c", "9s"])
    hole = parse_cards(["2c", "3d"])
    deck = make_deck(exclude=hole + community)
    assert play_trial(hole, community, deck, 1, _DealFirst(["9d", "3h"])) == Outcome.TIE

def test_result_rounding():
    res = SimulationResult.from_counts(wins=1, ties=1, trials=3)
    assert res.win == 33.33
    assert res.tie == 33.33
    assert res.lose == 33.34

def test_cancel_before_start():
    ev = threading.Event()
    ev.set()
    with pytest.raises(SimulationCancelledError) as info:
        calculate(["As", "Ad"], [], 1, simulations=100, seed=1, cancel=ev)
    assert info.value.completed == 0

def test_cancel_between_trials():
    with pytest.raises(SimulationCancelledError) as info:
        calculate(["As", "Ad"], [], 1, simulations=100, seed=1, cancel=_CancelAfter(10))
    assert info.value.completed == 10
    assert info.value.requested == 100

def test_cancel_mid_run_with_workers():
    with pytest.raises(SimulationCancelledError) as info:
        calculate(["As", "Ad"], [], 1, simulations=5000, seed=1, workers=2, cancel=_CancelAfter(1))
    assert info.value.completed == PARALLEL_CHUNK_TRIALS
    assert info.value.completed < info.value.requested

def test_parallel_workers_are_reproducible():
    a = calculate(["As", "Kd"], ["Ah", "7c", "2d"], 2, simulations=400, seed=11, workers=2)
    b = calculate(["As", "Kd"], ["Ah", "7c", "2d"], 2, simulations=400, seed=11, workers=2)
    assert a == b
    assert a.simulations == 400
    assert abs((a.win + a.tie + a.lose) - 100.0) < 1e-9
