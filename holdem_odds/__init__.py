from .config import SimulationConfig, DEFAULT_SIMULATIONS
from .engine import SimulationResult, simulate, calculate
from .helpers import (
    HandCategory,
    HandEvaluation,
    Comparison,
    evaluate,
    compare,
    OddsError,
    InvalidCardError,
    InvalidInputError,
    InvalidHandSizeError,
    SimulationCancelledError,
)

__version__ = "0.1.0"

__all__ = [
    "SimulationConfig", "DEFAULT_SIMULATIONS",
    "SimulationResult", "simulate", "calculate",
    "HandCategory", "HandEvaluation", "Comparison", "evaluate", "compare",
    "OddsError", "InvalidCardError", "InvalidInputError",
    "InvalidHandSizeError", "SimulationCancelledError",
]
