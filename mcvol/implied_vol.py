# ====================================================
# implied_vol.py
# Solve implied volatility against the Monte Carlo estimator
# ====================================================

import logging
import math
from dataclasses import dataclass, replace
from typing import NamedTuple, Tuple

import numpy as np

from mcvol.config import CalibrationConfig, SimulationConfig
from mcvol.contract import OptionContract, parse_option_type, validate_contract
from mcvol.monte_carlo import estimate_premium


logger = logging.getLogger(__name__)


@dataclass
class CalibrationInterval:
    low_volatility: float
    high_volatility: float

    @property
    def width(self):
        return self.high_volatility - self.low_volatility

    @property
    def mid(self):
        return 0.5 * (self.low_volatility + self.high_volatility)


class CalibrationResult(NamedTuple):
    volatility: float
    low_volatility: float
    high_volatility: float
    iterations: int
    reason: str  # "converged" or "exact"
    trace: Tuple[Tuple[float, float], ...]


def calibrate_volatility(time_to_maturity, spot, strike, risk_free_rate, option_type,
                         observed_premium, tolerance=None, *, calibration=None,
                         simulation=None) -> CalibrationResult:
    """
    Bisection on volatility until the simulated premium matches
    observed_premium.

    Assumes the premium is non-decreasing in volatility. That holds for the
    noise-free model but each evaluation here is a Monte Carlo sample, so
    noise can break it locally and the search may settle on a slightly
    wrong root. Setting simulation.seed reuses the same draws for every
    trial; calibration.evaluations_per_step averages several runs.

    A target outside the premiums reachable on the search interval is not
    an error: the result simply ends up at one of the bounds.
    """
    calibration = calibration or CalibrationConfig()
    simulation = simulation or SimulationConfig()
    if tolerance is not None:
        calibration = replace(calibration, tolerance=tolerance)

    option_type = parse_option_type(option_type)
    base = validate_contract(
        OptionContract(time_to_maturity, spot, strike, risk_free_rate),
        require_volatility=False,
    )
    if not math.isfinite(observed_premium) or observed_premium < 0:
        raise ValueError("observed_premium must be >= 0")

    interval = CalibrationInterval(calibration.low_volatility, calibration.high_volatility)
    trace = [(interval.low_volatility, interval.high_volatility)]
    seeds = _evaluation_seeds(simulation.seed, calibration.evaluations_per_step)
    iterations = 0

    while interval.width > calibration.tolerance:
        mid = interval.mid
        trial = base._replace(volatility=mid)
        estimate = float(np.mean([
            estimate_premium(trial, config=replace(simulation, seed=seed)).get(option_type)
            for seed in seeds
        ]))
        iterations += 1

        logger.debug(
            "iteration %d: sigma=%.8f estimate=%.6f target=%.6f",
            iterations, mid, estimate, observed_premium,
        )

        if estimate > observed_premium:
            interval.high_volatility = mid
        elif estimate < observed_premium:
            interval.low_volatility = mid
        else:
            # Rare with Monte Carlo noise
            logger.info("implied volatility %.6f (exact match after %d iterations)", mid, iterations)
            return CalibrationResult(mid, interval.low_volatility, interval.high_volatility,
                                     iterations, "exact", tuple(trace))

        trace.append((interval.low_volatility, interval.high_volatility))

    volatility = interval.low_volatility
    logger.info("implied volatility %.6f after %d iterations", volatility, iterations)

    result = CalibrationResult(volatility, interval.low_volatility, interval.high_volatility,
                               iterations, "converged", tuple(trace))

    if on_search_bound(result, calibration):
        logger.warning(
            "implied volatility %.6f is on the search bound [%.4f, %.4f]; "
            "target premium %.6f may be out of range",
            volatility, calibration.low_volatility, calibration.high_volatility, observed_premium,
        )
    return result


def implied_volatility(time_to_maturity, spot, strike, risk_free_rate, option_type,
                       observed_premium, tolerance=None, *, calibration=None, simulation=None):
    """
    Volatility whose simulated premium is within tolerance of observed_premium.
    Returns the lower end of the final bisection interval.
    tolerance defaults to calibration.tolerance, 1e-5 with CalibrationConfig();
    path and step counts come from simulation (10000 and 100 by default).
    """
    result = calibrate_volatility(
        time_to_maturity, spot, strike, risk_free_rate, option_type, observed_premium,
        tolerance, calibration=calibration, simulation=simulation,
    )
    return result.volatility


def on_search_bound(result: CalibrationResult, calibration=None):
    """
    True when bisection never moved one end of the interval, i.e. the target
    premium is probably outside what the search range can reach.
    An exact match is never on the bound.
    """
    calibration = calibration or CalibrationConfig()
    if result.reason == "exact":
        return False
    return (result.volatility <= calibration.low_volatility
            or result.high_volatility >= calibration.high_volatility)


def _evaluation_seeds(seed, count):
    if seed is None:
        return [None] * count
    if count == 1:
        return [seed]

    children = np.random.SeedSequence(seed).spawn(count)
    return [int(child.generate_state(1)[0]) for child in children]
