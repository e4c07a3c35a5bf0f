# cards
from .cards import (
    encode,
    rank_of,
    suit_of,
    parse_card,
    parse_cards,
    card_str,
    cards_str,
    make_deck,
)

# evaluation
from .evaluator import (
    HandCategory,
    HandEvaluation,
    Comparison,
    evaluate,
    compare,
    evaluate_hand,
    compare_hands,
    winners,
)

# errors
from .errors import (
    OddsError,
    InvalidCardError,
    InvalidInputError,
    InvalidHandSizeError,
    SimulationCancelledError,
)

__all__ = [
    # cards
    "encode", "rank_of", "suit_of", "parse_card", "parse_cards",
    "card_str", "cards_str", "make_deck",

    # evaluation
    "HandCategory", "HandEvaluation", "Comparison",
    "evaluate", "compare", "evaluate_hand", "compare_hands", "winners",

    # errors
    "OddsError", "InvalidCardError", "InvalidInputError",
    "InvalidHandSizeError", "SimulationCancelledError",
]
