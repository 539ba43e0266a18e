"""
Results processing for MCUniform.

Turns p-value vectors into empirical power, collects immutable power rows
and assembles the result dictionaries handed to callers and renderers.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

TEST_CHI_SQUARE = "chi_square"
TEST_RANGE = "range"
TEST_CHI_SQUARE_ANALYTIC = "chi_square_analytic"

POWER_TABLE_COLUMNS = ["sample_size", "bins", "test", "power"]


@dataclass(frozen=True)
class PowerRow:
    """One power estimate for one test at one grid cell."""

    sample_size: int
    bins: int
    test: str
    power: float


def empirical_power(pvalues: np.ndarray, alpha: float) -> float:
    """Fraction of p-values at or below *alpha*."""
    pvalues = np.asarray(pvalues, dtype=np.float64)
    if pvalues.size == 0:
        raise ValueError("cannot estimate power from an empty p-value vector")
    return float(np.mean(pvalues <= alpha))


def rows_to_frame(rows: Iterable[PowerRow]) -> pd.DataFrame:
    """Build the power table (one row per test per grid cell)."""
    frame = pd.DataFrame([asdict(row) for row in rows], columns=POWER_TABLE_COLUMNS)
    return frame.astype({"sample_size": "int64", "bins": "int64", "test": "object", "power": "float64"})


def pivot_power(power_table: pd.DataFrame, test: str, index: str = "bins", columns: str = "sample_size") -> pd.DataFrame:
    """Reshape one test's rows into a ``bins x sample_size`` grid of power."""
    subset = power_table[power_table["test"] == test]
    return subset.pivot_table(index=index, columns=columns, values="power", aggfunc="mean")


def build_power_result(
    sample_size: int,
    bins: int,
    alpha: float,
    percent_error: float,
    n_simulations: int,
    seed: Optional[int],
    rows: List[PowerRow],
    analytic_power: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Build the result dictionary for a single grid cell.

    Args:
        sample_size: Trials per replicate
        bins: Number of categories
        alpha: Significance level
        percent_error: Perturbation of the alternative
        n_simulations: Replicates per batch
        seed: Base seed
        rows: Power rows produced for the cell
        analytic_power: Closed-form chi-square power, when available

    Returns:
        Complete result dictionary
    """
    powers = {row.test: row.power for row in rows}
    if analytic_power is not None:
        powers[TEST_CHI_SQUARE_ANALYTIC] = analytic_power
    return {
        "model": {
            "analysis": "power",
            "sample_size": sample_size,
            "bins": bins,
            "alpha": alpha,
            "percent_error": percent_error,
            "n_simulations": n_simulations,
            "seed": seed,
        },
        "results": {
            "individual_powers": powers,
            "power_table": rows_to_frame(rows),
        },
    }


def build_sweep_result(
    sample_sizes: List[int],
    bins: List[int],
    alpha: float,
    percent_error: float,
    n_simulations: Optional[int],
    seed: Optional[int],
    parallel: bool,
    rows: List[PowerRow],
    analysis: str = "sweep",
) -> Dict[str, Any]:
    """
    Build the result dictionary for a grid sweep.

    Args:
        sample_sizes: Sample-size grid
        bins: Bin-count grid
        alpha: Significance level
        percent_error: Perturbation of the alternative
        n_simulations: Replicates per cell (``None`` for the analytic sweep)
        seed: Base seed
        parallel: Whether parallel processing was used
        rows: Power rows produced by the sweep
        analysis: ``"sweep"`` or ``"analytic_sweep"``

    Returns:
        Complete result dictionary
    """
    power_table = rows_to_frame(rows)
    return {
        "model": {
            "analysis": analysis,
            "sample_sizes": list(sample_sizes),
            "bins": list(bins),
            "alpha": alpha,
            "percent_error": percent_error,
            "n_simulations": n_simulations,
            "seed": seed,
            "parallel": parallel,
        },
        "results": {
            "power_table": power_table,
            "tests": sorted(power_table["test"].unique().tolist()),
            "n_cells": len(sample_sizes) * len(bins),
        },
    }
