from mcvol.config import CalibrationConfig, SimulationConfig
from mcvol.contract import CALL, PUT, OptionContract, PremiumResult
from mcvol.implied_vol import calibrate_volatility, implied_volatility
from mcvol.monte_carlo import PathSimulator, estimate_premium

__all__ = [
    "CALL",
    "PUT",
    "CalibrationConfig",
    "OptionContract",
    "PathSimulator",
    "PremiumResult",
    "SimulationConfig",
    "calibrate_volatility",
    "estimate_premium",
    "implied_volatility",
]
