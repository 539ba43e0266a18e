"""Core components for the MCUniform framework.

Re-exports the sweep machinery:

- ``SweepRunner``, ``simulate_cell``, ``analytic_grid``, ``check_grid``,
  ``DEFAULT_SWEEP_CONFIGS``: grid iteration over sample sizes and bins.
- ``PowerRow``, ``empirical_power``, ``rows_to_frame``, ``pivot_power``,
  ``build_power_result``, ``build_sweep_result``: power aggregation and
  result formatting.
"""

from .results import (
    TEST_CHI_SQUARE,
    TEST_CHI_SQUARE_ANALYTIC,
    TEST_RANGE,
    PowerRow,
    build_power_result,
    build_sweep_result,
    empirical_power,
    pivot_power,
    rows_to_frame,
)
from .sweep import DEFAULT_SWEEP_CONFIGS, SweepRunner, analytic_grid, check_grid, simulate_cell

__all__ = [
    # Sweeps
    "SweepRunner",
    "simulate_cell",
    "analytic_grid",
    "check_grid",
    "DEFAULT_SWEEP_CONFIGS",
    # Results
    "PowerRow",
    "empirical_power",
    "rows_to_frame",
    "pivot_power",
    "build_power_result",
    "build_sweep_result",
    "TEST_CHI_SQUARE",
    "TEST_RANGE",
    "TEST_CHI_SQUARE_ANALYTIC",
]
