# contract.py
# Contract parameters, premium pairs and input checks

import math
from typing import NamedTuple


CALL = "call"
PUT = "put"

_OPTION_TYPES = {"call": CALL, "c": CALL, "put": PUT, "p": PUT}


class OptionContract(NamedTuple):
    time_to_maturity: float  # years
    spot: float
    strike: float
    risk_free_rate: float  # continuous, annualized
    volatility: float = 0.0  # annualized


class PremiumResult(NamedTuple):
    call: float
    put: float

    def get(self, option_type):
        """Premium for 'call' or 'put'."""
        if parse_option_type(option_type) == CALL:
            return self.call
        return self.put


def parse_option_type(option_type):
    """
    Normalizes an option type to 'call' or 'put'.
    Accepts the single-letter forms 'c' / 'p' as well.
    """
    key = str(option_type).lower().strip()
    if key not in _OPTION_TYPES:
        raise ValueError(f"option_type must be 'call' or 'put', got {option_type!r}")
    return _OPTION_TYPES[key]


def validate_contract(contract: OptionContract, require_volatility=True) -> OptionContract:
    """Raise ValueError if any contract field is outside its domain."""
    if not math.isfinite(contract.time_to_maturity) or contract.time_to_maturity <= 0:
        raise ValueError("time_to_maturity must be > 0")
    if not math.isfinite(contract.spot) or contract.spot <= 0:
        raise ValueError("spot must be > 0")
    if not math.isfinite(contract.strike) or contract.strike <= 0:
        raise ValueError("strike must be > 0")
    if not math.isfinite(contract.risk_free_rate):
        raise ValueError("risk_free_rate must be finite")
    if require_volatility and (not math.isfinite(contract.volatility) or contract.volatility < 0):
        raise ValueError("volatility must be >= 0")
    return contract
