# monte_carlo.py
# Monte Carlo premium estimation under Geometric Brownian Motion

import logging
import math
from typing import Protocol

import numpy as np

from mcvol.config import SimulationConfig
from mcvol.contract import OptionContract, PremiumResult, validate_contract


logger = logging.getLogger(__name__)

_TINY = np.finfo(float).tiny


class NormalSource(Protocol):
    """Anything that draws normal samples; numpy's Generator qualifies."""

    def normal(self, loc=0.0, scale=1.0, size=None): ...


def make_source(seed=None):
    """Random source for one estimator run (seed=None -> OS entropy)."""
    return np.random.default_rng(seed)


def spawn_sources(seed, n):
    """
    n independent substreams derived from one seed.
    Each block of paths owns one, so blocks never share a generator.
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]


# Path simulator

class PathSimulator:
    """
    Advances spot prices one step of length dt with the exact lognormal
    transition:

        ln S(t+dt) ~ N(ln S(t) + (r - sigma^2 / 2) dt, sigma sqrt(dt))

    The step count does not bias the terminal distribution. The estimator
    keeps its paths as log-prices so long, volatile paths never reach 0.
    """

    def __init__(self, risk_free_rate, volatility, dt, source: NormalSource):
        if dt <= 0:
            raise ValueError("dt must be > 0")
        if volatility < 0:
            raise ValueError("volatility must be >= 0")

        self.drift = (risk_free_rate - 0.5 * volatility**2) * dt
        self.scale = volatility * math.sqrt(dt)
        self.source = source

    def advance_log(self, log_spots):
        """Moves every log-price in place and returns the same array."""
        log_spots += self.drift

        # sigma = 0 is a Dirac step, no draw
        if self.scale > 0:
            log_spots[:] = self.source.normal(log_spots, self.scale)
        return log_spots

    def advance(self, spots):
        """
        Moves every spot in place and returns the same array.
        Prices that underflow are held at the smallest positive float.
        """
        log_spots = self.advance_log(np.log(spots))
        np.exp(log_spots, out=spots)
        np.maximum(spots, _TINY, out=spots)
        return spots


# Premium estimator

def estimate_premium(contract: OptionContract, simulations_num=None, time_nums=None,
                     *, source=None, config=None) -> PremiumResult:
    """
    Call / put premium as the best average payoff over the exercise grid
    {0, dt, 2dt, ..., T}.

    For each step every path is advanced, payoffs max(0, S - K) and
    max(0, K - S) are averaged across paths, and the largest average seen
    so far is kept. Payoffs are not discounted.

    simulations_num and time_nums default to config, i.e. 10000 paths and
    100 steps with SimulationConfig().
    If source is None, generators are seeded from config.seed.
    """
    config = config or SimulationConfig()
    simulations_num = config.simulations_num if simulations_num is None else simulations_num
    time_nums = config.time_nums if time_nums is None else time_nums

    validate_contract(contract)
    if simulations_num <= 0:
        raise ValueError("simulations_num must be > 0")
    if time_nums <= 0:
        raise ValueError("time_nums must be > 0")

    dt = contract.time_to_maturity / time_nums
    blocks = _split_paths(simulations_num, config.block_size)

    if source is not None:
        sources = [source] * len(blocks)
    elif len(blocks) == 1:
        sources = [make_source(config.seed)]
    else:
        sources = spawn_sources(config.seed, len(blocks))

    simulators = [
        PathSimulator(contract.risk_free_rate, contract.volatility, dt, src)
        for src in sources
    ]
    states = [np.full(size, math.log(contract.spot)) for size in blocks]

    # Exercising at time 0 pays nothing on average
    best_call = 0.0
    best_put = 0.0
    strike = contract.strike

    for _ in range(time_nums):
        call_sum = 0.0
        put_sum = 0.0

        for simulator, log_spots in zip(simulators, states):
            spots = np.exp(simulator.advance_log(log_spots))
            call_sum += float(np.maximum(spots - strike, 0.0).sum())
            put_sum += float(np.maximum(strike - spots, 0.0).sum())

        best_call = max(best_call, call_sum / simulations_num)
        best_put = max(best_put, put_sum / simulations_num)

    logger.debug(
        "estimate_premium sigma=%.6f paths=%d steps=%d -> call=%.6f put=%.6f",
        contract.volatility, simulations_num, time_nums, best_call, best_put,
    )
    return PremiumResult(call=best_call, put=best_put)


def _split_paths(simulations_num, block_size):
    if block_size is None or block_size >= simulations_num:
        return [simulations_num]

    full, rest = divmod(simulations_num, block_size)
    blocks = [block_size] * full
    if rest:
        blocks.append(rest)
    return blocks
