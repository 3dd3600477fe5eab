# convergence.py
# Spread of repeated estimates as the number of paths grows

import numpy as np
import pandas as pd

from mcvol.config import SimulationConfig
from mcvol.monte_carlo import estimate_premium, spawn_sources


def convergence_table(contract, simulations_grid=(100, 1000, 10000), repeats=20,
                      time_nums=100, seed=None) -> pd.DataFrame:
    """
    Runs estimate_premium `repeats` times for each path count and reports
    the mean and sample standard deviation of the call and put premiums.
    """
    if repeats < 2:
        raise ValueError("repeats must be >= 2")

    rows = []
    for i, n in enumerate(simulations_grid):
        config = SimulationConfig(simulations_num=n, time_nums=time_nums)
        sources = spawn_sources(None if seed is None else [seed, i], repeats)
        results = [estimate_premium(contract, source=src, config=config) for src in sources]

        calls = np.array([res.call for res in results])
        puts = np.array([res.put for res in results])
        rows.append({
            "simulations": n,
            "mean_call": calls.mean(),
            "std_call": calls.std(ddof=1),
            "mean_put": puts.mean(),
            "std_put": puts.std(ddof=1),
        })

    return pd.DataFrame(rows, columns=["simulations", "mean_call", "std_call", "mean_put", "std_put"])
