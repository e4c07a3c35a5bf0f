from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from .cards import parse_cards, rank_of, suit_of
from .errors import InvalidHandSizeError, InvalidInputError

HAND_SIZE = 7

_WHEEL = frozenset({12, 0, 1, 2, 3})        # A-2-3-4-5
_BROADWAY = frozenset({8, 9, 10, 11, 12})   # T-J-Q-K-A


class HandCategory(IntEnum):
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


class Comparison(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class HandEvaluation:
    """
    Ordering between evaluations goes through compare(): keys are matched
    position by position and stop at the shorter one.
    """
    category: HandCategory
    key: Tuple[int, ...]

    @property
    def name(self) -> str:
        return self.category.name.lower()


def _rank_counts(cards: Sequence[int]) -> Dict[int, int]:
    d: Dict[int, int] = {}
    for c in cards:
        r = rank_of(c)
        d[r] = d.get(r, 0) + 1
    return d


def _suit_counts(cards: Sequence[int]) -> Dict[int, int]:
    d: Dict[int, int] = {}
    for c in cards:
        s = suit_of(c)
        d[s] = d.get(s, 0) + 1
    return d


def is_straight(ranks: Iterable[int]) -> bool:
    uniq = sorted(set(ranks))
    if _WHEEL.issubset(uniq):
        return True
    run = 1
    for i in range(1, len(uniq)):
        if uniq[i] == uniq[i - 1] + 1:
            run += 1
            if run >= 5:
                return True
        else:
            run = 1
    return False


def tie_break_key(counts: Dict[int, int]) -> Tuple[int, ...]:
    """
    Distinct ranks ordered by (multiplicity desc, rank desc).
    Every distinct rank is kept, so with more than five of them the
    trailing low cards still take part in the comparison.
    """
    groups = sorted(counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    return tuple(r for r, _ in groups)


def evaluate(cards: Iterable[int]) -> HandEvaluation:
    cards = list(cards)
    if len(cards) != HAND_SIZE:
        raise InvalidHandSizeError(f"evaluate expects exactly {HAND_SIZE} cards, got {len(cards)}")
    if len(set(cards)) != HAND_SIZE:
        raise InvalidHandSizeError(f"evaluate expects {HAND_SIZE} distinct cards")

    counts = _rank_counts(cards)
    count_pattern = sorted(counts.values(), reverse=True)
    key = tie_break_key(counts)

    flush = any(n >= 5 for n in _suit_counts(cards).values())
    straight = is_straight(counts.keys())

    if flush and straight:
        if _BROADWAY.issubset(counts):
            return HandEvaluation(HandCategory.ROYAL_FLUSH, key)
        return HandEvaluation(HandCategory.STRAIGHT_FLUSH, key)
    if count_pattern[0] == 4:
        return HandEvaluation(HandCategory.FOUR_OF_A_KIND, key)
    if count_pattern[:2] == [3, 2]:
        return HandEvaluation(HandCategory.FULL_HOUSE, key)
    if flush:
        return HandEvaluation(HandCategory.FLUSH, key)
    if straight:
        return HandEvaluation(HandCategory.STRAIGHT, key)
    if count_pattern[0] == 3:
        return HandEvaluation(HandCategory.THREE_OF_A_KIND, key)
    if count_pattern[0] == 2 and count_pattern[1] == 2:
        return HandEvaluation(HandCategory.TWO_PAIR, key)
    if count_pattern[0] == 2:
        return HandEvaluation(HandCategory.ONE_PAIR, key)
    return HandEvaluation(HandCategory.HIGH_CARD, key)


def compare(a: HandEvaluation, b: HandEvaluation) -> Comparison:
    if a.category != b.category:
        return Comparison.GREATER if a.category > b.category else Comparison.LESS
    for x, y in zip(a.key, b.key):
        if x != y:
            return Comparison.GREATER if x > y else Comparison.LESS
    return Comparison.EQUAL


# ------------------------------------------------------------
# String-level helpers for explicit showdowns
# ------------------------------------------------------------

def evaluate_hand(
    hand: Iterable[Union[str, int]],
    board: Iterable[Union[str, int]],
) -> HandEvaluation:
    h = parse_cards(hand)
    b = parse_cards(board)
    if len(h) != 2:
        raise InvalidInputError("Hold'em hand must be exactly 2 cards")
    if len(b) != 5:
        raise InvalidInputError("Board must be exactly 5 cards at showdown")
    cards = h + b
    if len(set(cards)) != len(cards):
        raise InvalidInputError("Duplicate cards detected")
    return evaluate(cards)


def compare_hands(hand1, hand2, board) -> Comparison:
    b = parse_cards(board)
    h1, h2 = parse_cards(hand1), parse_cards(hand2)
    if set(h1) & set(h2):
        raise InvalidInputError("Duplicate cards detected")
    return compare(evaluate_hand(h1, b), evaluate_hand(h2, b))


def winners(hands, board) -> List[int]:
    b = parse_cards(board)
    seen: set = set()
    evals: List[HandEvaluation] = []
    for h in hands:
        cs = parse_cards(h)
        if seen & set(cs):
            raise InvalidInputError("Duplicate cards detected")
        seen.update(cs)
        evals.append(evaluate_hand(cs, b))
    if not evals:
        return []
    best = evals[0]
    for e in evals[1:]:
        if compare(e, best) == Comparison.GREATER:
            best = e
    return [i for i, e in enumerate(evals) if compare(e, best) == Comparison.EQUAL]
