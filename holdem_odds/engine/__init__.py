from .simulation import (
    Outcome,
    SimulationResult,
    play_trial,
    simulate,
    calculate,
)

__all__ = [
    "Outcome",
    "SimulationResult",
    "play_trial",
    "simulate",
    "calculate",
]
