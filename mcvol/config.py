# config.py
# Tuning constants for the estimator and the calibrator

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SimulationConfig:
    """
    Monte Carlo settings.

    - simulations_num: number of independent paths (variance vs. cost)
    - time_nums: number of equally spaced steps up to maturity
    - seed: None draws fresh OS entropy on every run
    - block_size: paths per independent substream (None = a single block)
    """

    simulations_num: int = 10000
    time_nums: int = 100
    seed: Optional[int] = None
    block_size: Optional[int] = None

    def __post_init__(self):
        if self.simulations_num <= 0:
            raise ValueError("simulations_num must be > 0")
        if self.time_nums <= 0:
            raise ValueError("time_nums must be > 0")
        if self.block_size is not None and self.block_size <= 0:
            raise ValueError("block_size must be > 0")


@dataclass(frozen=True)
class CalibrationConfig:
    """
    Bisection settings.

    The default bounds span 3% to 600% annualized volatility, the range
    seen on listed options.
    """

    low_volatility: float = 0.03
    high_volatility: float = 6.0
    tolerance: float = 1e-5
    evaluations_per_step: int = 1

    def __post_init__(self):
        if self.low_volatility < 0:
            raise ValueError("low_volatility must be >= 0")
        if self.low_volatility > self.high_volatility:
            raise ValueError("low_volatility must be <= high_volatility")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be > 0")
        if self.evaluations_per_step <= 0:
            raise ValueError("evaluations_per_step must be > 0")
