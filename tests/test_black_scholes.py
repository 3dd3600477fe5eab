import math

import pytest

from mcvol.black_scholes import black_scholes_price
from mcvol.contract import OptionContract


def test_textbook_values():
    contract = OptionContract(1.0, 100.0, 100.0, 0.05, 0.2)
    assert black_scholes_price(contract, "call") == pytest.approx(10.4506, abs=1e-4)
    assert black_scholes_price(contract, "put") == pytest.approx(5.5735, abs=1e-4)


def test_put_call_parity():
    contract = OptionContract(0.75, 80.0, 90.0, 0.02, 0.35)
    call = black_scholes_price(contract, "c")
    put = black_scholes_price(contract, "p")
    assert call - put == pytest.approx(80.0 - 90.0 * math.exp(-0.02 * 0.75), abs=1e-10)


def test_zero_volatility_is_discounted_intrinsic():
    contract = OptionContract(1.0, 100.0, 90.0, 0.05, 0.0)
    assert black_scholes_price(contract, "call") == pytest.approx(100.0 - 90.0 * math.exp(-0.05))
    assert black_scholes_price(contract, "put") == 0.0


def test_rejects_unknown_type():
    with pytest.raises(ValueError):
        black_scholes_price(OptionContract(1.0, 100.0, 100.0, 0.05, 0.2), "digital")
