from __future__ import annotations

import logging
import random
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..config import (
    DECIMALS,
    DEFAULT_SIMULATIONS,
    HOLE_CARDS,
    MAX_COMMUNITY,
    MAX_OPPONENTS,
    MIN_OPPONENTS,
    PARALLEL_CHUNK_TRIALS,
)
from ..helpers.cards import cards_str, make_deck, parse_cards
from ..helpers.errors import InvalidInputError, SimulationCancelledError
from ..helpers.evaluator import Comparison, compare, evaluate

logger = logging.getLogger(__name__)


class Outcome(IntEnum):
    LOSS = 0
    TIE = 1
    WIN = 2


@dataclass(frozen=True)
class SimulationResult:
    """
    Percentages are rounded with Python's round() to DECIMALS places.
    lose is derived from the rounded win and tie so the three add up to 100.
    """
    win: float
    tie: float
    lose: float
    simulations: int
    wins: int = 0
    ties: int = 0

    @classmethod
    def from_counts(cls, wins: int, ties: int, trials: int) -> "SimulationResult":
        win = round(100.0 * wins / trials, DECIMALS)
        tie = round(100.0 * ties / trials, DECIMALS)
        lose = round(100.0 - win - tie, DECIMALS)
        return cls(win=win, tie=tie, lose=lose, simulations=trials, wins=wins, ties=ties)

    def as_dict(self) -> Dict[str, float]:
        return {
            "win": self.win,
            "tie": self.tie,
            "lose": self.lose,
            "simulations": self.simulations,
        }


def _is_int(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _validate(
    hole: List[int],
    community: List[int],
    opponent_count: int,
    trials: int,
) -> None:
    if len(hole) != HOLE_CARDS:
        raise InvalidInputError(f"Invalid hole cards count: expected {HOLE_CARDS}, got {len(hole)}")
    if not (0 <= len(community) <= MAX_COMMUNITY):
        raise InvalidInputError(f"Invalid community card count: expected 0..{MAX_COMMUNITY}, got {len(community)}")
    if not _is_int(opponent_count) or not (MIN_OPPONENTS <= opponent_count <= MAX_OPPONENTS):
        raise InvalidInputError(
            f"Invalid opponent count: expected {MIN_OPPONENTS}..{MAX_OPPONENTS}, got {opponent_count!r}"
        )
    if not _is_int(trials) or trials <= 0:
        raise InvalidInputError(f"Invalid simulation count: expected a positive integer, got {trials!r}")
    known = hole + community
    if len(set(known)) != len(known):
        raise InvalidInputError(f"Invalid input, duplicate card among {cards_str(known)}")


def play_trial(
    hole: Sequence[int],
    community: Sequence[int],
    deck: Sequence[int],
    opponent_count: int,
    rng: random.Random,
) -> Outcome:
    """
    One random completion of the unseen cards.
    Opponents take two cards each from the front of the shuffled deck,
    then the board is filled from the cards that follow.
    """
    shuffled = list(deck)
    rng.shuffle(shuffled)

    idx = 2 * opponent_count
    board = list(community) + shuffled[idx: idx + MAX_COMMUNITY - len(community)]
    mine = evaluate(list(hole) + board)

    tie_seen = False
    for j in range(opponent_count):
        theirs = evaluate(shuffled[2 * j: 2 * j + 2] + board)
        res = compare(mine, theirs)
        if res == Comparison.LESS:
            return Outcome.LOSS
        if res == Comparison.EQUAL:
            tie_seen = True
    return Outcome.TIE if tie_seen else Outcome.WIN


def _run_trials(
    hole: Sequence[int],
    community: Sequence[int],
    deck: Sequence[int],
    opponent_count: int,
    trials: int,
    rng: random.Random,
    cancel=None,
) -> Tuple[int, int]:
    wins = ties = 0
    for i in range(trials):
        if cancel is not None and cancel.is_set():
            logger.info("Simulation cancelled after %d/%d trials", i, trials)
            raise SimulationCancelledError(i, trials)
        outcome = play_trial(hole, community, deck, opponent_count, rng)
        if outcome == Outcome.WIN:
            wins += 1
        elif outcome == Outcome.TIE:
            ties += 1
    return wins, ties


def _run_chunk(
    hole: Tuple[int, ...],
    community: Tuple[int, ...],
    deck: Tuple[int, ...],
    opponent_count: int,
    trials: int,
    seed: int,
) -> Tuple[int, int]:
    return _run_trials(hole, community, deck, opponent_count, trials, random.Random(seed))


def _split(trials: int, size: int) -> List[int]:
    full, rest = divmod(trials, size)
    return [size] * full + ([rest] if rest else [])


def _run_parallel(
    hole: List[int],
    community: List[int],
    deck: List[int],
    opponent_count: int,
    trials: int,
    rng: random.Random,
    workers: int,
    cancel=None,
) -> Tuple[int, int]:
    # fixed-size chunks; queued ones are dropped on cancel
    chunks = _split(trials, PARALLEL_CHUNK_TRIALS)
    seeds = [rng.randrange(2 ** 63) for _ in chunks]
    logger.debug("Dispatching %d trials as %d chunks over %d workers", trials, len(chunks), workers)

    if cancel is not None and cancel.is_set():
        logger.info("Simulation cancelled after 0/%d trials", trials)
        raise SimulationCancelledError(0, trials)

    wins = ties = done = 0
    pool = ProcessPoolExecutor(max_workers=min(workers, len(chunks)))
    try:
        futures = {
            pool.submit(_run_chunk, tuple(hole), tuple(community), tuple(deck), opponent_count, n, seed): n
            for n, seed in zip(chunks, seeds)
        }
        for fut in as_completed(futures):
            w, t = fut.result()
            wins += w
            ties += t
            done += futures[fut]
            if done < trials and cancel is not None and cancel.is_set():
                logger.info("Simulation cancelled after %d/%d trials", done, trials)
                pool.shutdown(wait=False, cancel_futures=True)
                raise SimulationCancelledError(done, trials)
    finally:
        pool.shutdown(wait=True)
    return wins, ties


def simulate(
    hole_cards: Iterable[Union[str, int]],
    known_community: Iterable[Union[str, int]] = (),
    opponent_count: int = 1,
    trials: int = DEFAULT_SIMULATIONS,
    *,
    rng: Optional[random.Random] = None,
    cancel=None,
    workers: int = 1,
) -> SimulationResult:
    """
    Monte Carlo win/tie/lose estimate for one player against opponent_count
    random hands.

    rng: anything with random.Random's shuffle/randrange; a fresh unseeded
         random.Random is used when omitted.
    cancel: optional object with is_set() (e.g. threading.Event), checked
            between trials.
    workers: >1 spreads trials over a process pool, one seeded RNG per chunk.
    """
    hole = parse_cards(hole_cards)
    community = parse_cards(known_community)
    _validate(hole, community, opponent_count, trials)
    if not _is_int(workers) or workers <= 0:
        raise InvalidInputError(f"Invalid worker count: {workers!r}")

    rng = rng if rng is not None else random.Random()
    deck = make_deck(exclude=hole + community)
    logger.debug(
        "Simulating hand=[%s] board=[%s] opponents=%d trials=%d",
        cards_str(hole), cards_str(community), opponent_count, trials,
    )

    if workers > 1 and trials > 1:
        wins, ties = _run_parallel(hole, community, deck, opponent_count, trials, rng, workers, cancel)
    else:
        wins, ties = _run_trials(hole, community, deck, opponent_count, trials, rng, cancel)

    result = SimulationResult.from_counts(wins, ties, trials)
    logger.debug("Finished: wins=%d ties=%d trials=%d -> %s", wins, ties, trials, result.as_dict())
    return result


def calculate(
    my_cards: Iterable[str],
    community_cards: Iterable[str],
    opponent_count: int,
    simulations: int = DEFAULT_SIMULATIONS,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    workers: int = 1,
    cancel=None,
) -> SimulationResult:
    if rng is None:
        rng = random.Random(seed)
    return simulate(
        parse_cards(my_cards),
        parse_cards(community_cards),
        opponent_count,
        simulations,
        rng=rng,
        cancel=cancel,
        workers=workers,
    )
