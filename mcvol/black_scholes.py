# black_scholes.py
# Closed-form European price, used as a reference for the simulator

import numpy as np
from scipy.stats import norm

from mcvol.contract import CALL, OptionContract, parse_option_type, validate_contract


def black_scholes_price(contract: OptionContract, option_type="call"):
    """
    Black–Scholes price of a European option (discounted, no dividends).
    With zero volatility the price is the discounted intrinsic value of
    the forward.
    """
    validate_contract(contract)
    option_type = parse_option_type(option_type)

    S, K, r = contract.spot, contract.strike, contract.risk_free_rate
    T, sigma = contract.time_to_maturity, contract.volatility
    discount = np.exp(-r * T)

    if sigma == 0:
        if option_type == CALL:
            return float(max(S - K * discount, 0.0))
        return float(max(K * discount - S, 0.0))

    d1 = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))
    d2 = d1 - sigma * np.sqrt(T)

    if option_type == CALL:
        return float(S * norm.cdf(d1) - K * discount * norm.cdf(d2))
    return float(K * discount * norm.cdf(-d2) - S * norm.cdf(-d1))
