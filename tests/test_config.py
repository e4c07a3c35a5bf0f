import pytest

from holdem_odds.config import DEFAULT_SIMULATIONS, SimulationConfig
from holdem_odds.helpers.errors import InvalidInputError


def test_defaults():
    cfg = SimulationConfig.from_env({})
    assert cfg.simulations == DEFAULT_SIMULATIONS
    assert cfg.seed is None
    assert cfg.workers == 1

def test_env_overrides():
    cfg = SimulationConfig.from_env({
        "HOLDEM_ODDS_SIMULATIONS": "20000",
        "HOLDEM_ODDS_SEED": "7",
        "HOLDEM_ODDS_WORKERS": "4",
    })
    assert (cfg.simulations, cfg.seed, cfg.workers) == (20000, 7, 4)

def test_bad_env_values():
    with pytest.raises(InvalidInputError):
        SimulationConfig.from_env({"HOLDEM_ODDS_SIMULATIONS": "lots"})
    with pytest.raises(InvalidInputError):
        SimulationConfig.from_env({"HOLDEM_ODDS_WORKERS": "0"})

def test_validate_rejects_nonpositive_simulations():
    with pytest.raises(InvalidInputError):
        SimulationConfig(simulations=0).validate()
