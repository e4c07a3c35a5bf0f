from __future__ import annotations


class OddsError(Exception):
    """Base class for every error raised by holdem_odds."""


class InvalidCardError(OddsError, ValueError):
    pass


class InvalidInputError(OddsError, ValueError):
    pass


class InvalidHandSizeError(OddsError, RuntimeError):
    """
    The evaluator got something other than 7 cards.
    Means the dealing logic is broken, not that the caller passed bad input.
    """


class SimulationCancelledError(OddsError):
    def __init__(self, completed: int, requested: int):
        super().__init__(f"Simulation cancelled after {completed}/{requested} trials")
        self.completed = completed
        self.requested = requested
