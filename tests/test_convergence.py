from mcvol.contract import OptionContract
from mcvol.convergence import convergence_table

import pytest


def test_spread_shrinks_with_more_paths():
    contract = OptionContract(1.0, 100.0, 100.0, 0.05, 0.2)
    table = convergence_table(contract, simulations_grid=(100, 10000), repeats=20, time_nums=10, seed=5)

    assert list(table.columns) == ["simulations", "mean_call", "std_call", "mean_put", "std_put"]
    assert list(table["simulations"]) == [100, 10000]

    small, large = table.iloc[0], table.iloc[1]
    assert small["std_call"] > 3 * large["std_call"]
    assert small["std_put"] > 3 * large["std_put"]


def test_seeded_table_is_reproducible():
    contract = OptionContract(0.5, 100.0, 110.0, 0.01, 0.3)
    a = convergence_table(contract, simulations_grid=(200,), repeats=5, time_nums=5, seed=1)
    b = convergence_table(contract, simulations_grid=(200,), repeats=5, time_nums=5, seed=1)
    assert a.equals(b)


def test_needs_at_least_two_repeats():
    contract = OptionContract(0.5, 100.0, 110.0, 0.01, 0.3)
    with pytest.raises(ValueError):
        convergence_table(contract, repeats=1)
