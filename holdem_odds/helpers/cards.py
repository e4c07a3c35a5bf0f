from __future__ import annotations
from typing import Iterable, List, Union

from .errors import InvalidCardError

# ------------------------------------------------------------
# Card encoding: 0..51 (suit-major, rank-minor)
# rank 2..A => 0..12, suit s/h/d/c => 0..3
# ------------------------------------------------------------

RANKS = "23456789TJQKA"
SUITS = "shdc"
RANK_TO_I = {r: i for i, r in enumerate(RANKS)}
SUIT_TO_I = {s: i for i, s in enumerate(SUITS)}

DECK_SIZE = len(RANKS) * len(SUITS)


def encode(rank_char: str, suit_char: str) -> int:
    r = RANK_TO_I.get(rank_char)
    s = SUIT_TO_I.get(suit_char)
    if r is None:
        raise InvalidCardError(f"Bad rank character: {rank_char!r}")
    if s is None:
        raise InvalidCardError(f"Bad suit character: {suit_char!r}")
    return s * len(RANKS) + r


def rank_of(card: int) -> int:
    return card % len(RANKS)


def suit_of(card: int) -> int:
    return card // len(RANKS)


def parse_card(s: str) -> int:
    if not isinstance(s, str) or len(s) != 2:
        raise InvalidCardError(f"Bad card string: {s!r}")
    return encode(s[0], s[1])


def parse_cards(cards: Iterable[Union[str, int]]) -> List[int]:
    out: List[int] = []
    for x in cards:
        if isinstance(x, int) and not isinstance(x, bool):
            if not (0 <= x < DECK_SIZE):
                raise InvalidCardError(f"Card id out of range: {x}")
            out.append(x)
        else:
            out.append(parse_card(x))
    return out


def card_str(card: int) -> str:
    if not (0 <= card < DECK_SIZE):
        raise InvalidCardError(f"Card id out of range: {card}")
    return f"{RANKS[rank_of(card)]}{SUITS[suit_of(card)]}"


def cards_str(cards: Iterable[int]) -> str:
    return " ".join(card_str(c) for c in cards)


def make_deck(exclude: Iterable[int] = ()) -> List[int]:
    dead = set(exclude)
    return [c for c in range(DECK_SIZE) if c not in dead]
