from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .helpers.errors import InvalidInputError

DEFAULT_SIMULATIONS = 5000
HOLE_CARDS = 2
MAX_COMMUNITY = 5
MIN_OPPONENTS = 1
MAX_OPPONENTS = 8
DECIMALS = 2
PARALLEL_CHUNK_TRIALS = 250

ENV_SIMULATIONS = "HOLDEM_ODDS_SIMULATIONS"
ENV_SEED = "HOLDEM_ODDS_SEED"
ENV_WORKERS = "HOLDEM_ODDS_WORKERS"


def _env_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class SimulationConfig:
    """
    Run settings shared by the scripts.
    seed=None means a fresh, unseeded random source per run.
    """
    simulations: int = DEFAULT_SIMULATIONS
    seed: Optional[int] = None
    workers: int = 1

    def validate(self) -> "SimulationConfig":
        if not isinstance(self.simulations, int) or self.simulations <= 0:
            raise InvalidInputError(f"simulation count must be positive, got {self.simulations!r}")
        if not isinstance(self.workers, int) or self.workers <= 0:
            raise InvalidInputError(f"worker count must be positive, got {self.workers!r}")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SimulationConfig":
        env = os.environ if environ is None else environ
        sims = _env_int(env, ENV_SIMULATIONS)
        workers = _env_int(env, ENV_WORKERS)
        return cls(
            simulations=DEFAULT_SIMULATIONS if sims is None else sims,
            seed=_env_int(env, ENV_SEED),
            workers=1 if workers is None else workers,
        ).validate()
