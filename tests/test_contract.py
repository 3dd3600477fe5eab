import math

import pytest

from mcvol.config import CalibrationConfig, SimulationConfig
from mcvol.contract import CALL, PUT, OptionContract, PremiumResult, parse_option_type, validate_contract


@pytest.mark.parametrize("raw, expected", [
    ("call", CALL), ("CALL", CALL), ("c", CALL), (" Put ", PUT), ("p", PUT),
])
def test_parse_option_type(raw, expected):
    assert parse_option_type(raw) == expected


def test_parse_option_type_rejects_unknown():
    with pytest.raises(ValueError, match="option_type"):
        parse_option_type("straddle")


def test_premium_result_get():
    res = PremiumResult(call=3.5, put=1.25)
    assert res.get("call") == 3.5
    assert res.get("p") == 1.25


def test_contract_is_immutable():
    contract = OptionContract(1.0, 100.0, 100.0, 0.05, 0.2)
    with pytest.raises(AttributeError):
        contract.volatility = 0.3
    assert contract._replace(volatility=0.3).volatility == 0.3
    assert contract.volatility == 0.2


@pytest.mark.parametrize("kwargs", [
    dict(time_to_maturity=0.0),
    dict(time_to_maturity=-1.0),
    dict(spot=0.0),
    dict(strike=-5.0),
    dict(risk_free_rate=math.nan),
    dict(volatility=-0.1),
    dict(volatility=math.inf),
])
def test_validate_contract_rejects(kwargs):
    contract = OptionContract(1.0, 100.0, 100.0, 0.05, 0.2)._replace(**kwargs)
    with pytest.raises(ValueError):
        validate_contract(contract)


def test_validate_contract_accepts_negative_rate_and_zero_vol():
    contract = OptionContract(1.0, 100.0, 100.0, -0.01, 0.0)
    assert validate_contract(contract) is contract


def test_config_defaults():
    sim = SimulationConfig()
    calib = CalibrationConfig()
    assert (sim.simulations_num, sim.time_nums, sim.seed) == (10000, 100, None)
    assert (calib.low_volatility, calib.high_volatility, calib.tolerance) == (0.03, 6.0, 1e-5)


@pytest.mark.parametrize("kwargs", [
    dict(simulations_num=0), dict(time_nums=0), dict(block_size=0),
])
def test_simulation_config_rejects(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


@pytest.mark.parametrize("kwargs", [
    dict(low_volatility=-0.1),
    dict(low_volatility=2.0, high_volatility=1.0),
    dict(tolerance=0.0),
    dict(evaluations_per_step=0),
])
def test_calibration_config_rejects(kwargs):
    with pytest.raises(ValueError):
        CalibrationConfig(**kwargs)
