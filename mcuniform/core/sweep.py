"""
Power sweeps for MCUniform.

A sweep walks the Cartesian product of a sample-size grid and a bin-count
grid. Every simulated cell draws one ``SampleBatch`` from its own random
stream, runs both testers on it and yields one ``PowerRow`` per test. The
analytic sweep skips simulation and evaluates the closed-form chi-square
power directly.
"""

import warnings
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import InvalidParameter, NumericIntegrationError
from ..progress import SimulationCancelled
from ..stats.analytic import analytic_chi_square_power
from ..stats.chi_square import chi_square_pvalues
from ..stats.range_test import range_pvalues
from ..stats.sampler import cell_generator, generate
from ..utils.validators import (
    _validate_alpha,
    _validate_grid,
    _validate_outer_axis,
    _validate_percent_error,
    _validate_reps,
)
from .results import TEST_CHI_SQUARE, TEST_CHI_SQUARE_ANALYTIC, TEST_RANGE, PowerRow, empirical_power

# Reference sweep configurations. "small" and "large" are simulated at two
# scales; "analytic" uses the closed form over a much finer grid since it
# needs no replication.
DEFAULT_SWEEP_CONFIGS = {
    "small": {
        "sample_sizes": list(range(1000, 10001, 1000)),
        "bins": list(range(2, 21, 2)),
        "n_simulations": 1000,
    },
    "large": {
        "sample_sizes": list(range(10000, 100001, 10000)),
        "bins": list(range(10, 101, 10)),
        "n_simulations": 500,
    },
    "analytic": {
        "sample_sizes": list(range(1000, 100001, 1000)),
        "bins": list(range(2, 101)),
    },
}


def check_grid(sample_sizes, bins, outer: str = "sample_size") -> Tuple[List[int], List[int], List[str]]:
    """Validate both sweep axes and the loop order.

    Returns:
        ``(sample_sizes, bins, warnings)`` with the grids as lists of ints.

    Raises:
        InvalidParameter: If a grid is empty, holds a non-integer or a value
            below its minimum (1 trial, 2 bins), or *outer* is unknown.
    """
    sizes, size_result = _validate_grid(sample_sizes, "sample_sizes", min_val=1)
    size_result.raise_if_invalid()
    bin_values, bins_result = _validate_grid(bins, "bins", min_val=2)
    bins_result.raise_if_invalid()
    _validate_outer_axis(outer).raise_if_invalid()
    return sizes, bin_values, size_result.warnings + bins_result.warnings


def _grid_cells(sample_sizes: Sequence[int], bins: Sequence[int], outer: str) -> List[Tuple[int, int]]:
    """Explicit nested iteration over the two grids, *outer* first."""
    if outer == "bins":
        return [(n, k) for k in bins for n in sample_sizes]
    return [(n, k) for n in sample_sizes for k in bins]


def simulate_cell(
    sample_size: int,
    bins: int,
    n_simulations: int,
    alpha: float,
    percent_error: float,
    seed: Optional[int],
) -> List[PowerRow]:
    """Empirical power of both tests at one ``(sample_size, bins)`` cell.

    Module-level so it can be shipped to ``joblib`` workers; the cell's
    random stream is derived from ``(seed, sample_size, bins)`` inside the
    worker.
    """
    _validate_alpha(alpha).raise_if_invalid()
    batch = generate(
        sample_size,
        bins,
        percent_error=percent_error,
        reps=n_simulations,
        seed=cell_generator(seed, sample_size, bins),
    )
    return [
        PowerRow(sample_size, bins, TEST_CHI_SQUARE, empirical_power(chi_square_pvalues(batch), alpha)),
        PowerRow(sample_size, bins, TEST_RANGE, empirical_power(range_pvalues(batch), alpha)),
    ]


class SweepRunner:
    """Executes simulated power sweeps over a parameter grid.

    Cells are independent: each owns its generator, so sequential and
    parallel runs give identical rows. The first error raised in any cell
    propagates; no cell is skipped.
    """

    def __init__(
        self,
        n_simulations: int,
        alpha: float = 0.01,
        percent_error: float = 0.1,
        seed: Optional[int] = None,
    ):
        """Initialise the sweep runner.

        Args:
            n_simulations: Replicates per grid cell.
            alpha: Significance level for both tests.
            percent_error: Perturbation of the alternative.
            seed: Base random seed; each cell derives its own stream from
                it. ``None`` draws fresh entropy per cell.

        Raises:
            InvalidParameter: If *n_simulations*, *alpha* or *percent_error*
                is outside its domain.
        """
        n_simulations, reps_result = _validate_reps(n_simulations)
        reps_result.raise_if_invalid()
        _validate_alpha(alpha).raise_if_invalid()
        _validate_percent_error(percent_error).raise_if_invalid()

        self.n_simulations = n_simulations
        self.alpha = float(alpha)
        self.percent_error = float(percent_error)
        self.seed = seed

    def run_cell(self, sample_size: int, bins: int) -> List[PowerRow]:
        """Simulate one grid cell and return one row per test."""
        return simulate_cell(sample_size, bins, self.n_simulations, self.alpha, self.percent_error, self.seed)

    def run_grid(
        self,
        sample_sizes: Sequence[int],
        bins: Sequence[int],
        outer: str = "sample_size",
        parallel: bool = False,
        n_cores: int = 1,
        progress=None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> List[PowerRow]:
        """Simulate every cell of ``sample_sizes x bins``.

        Args:
            sample_sizes: Sample-size grid.
            bins: Bin-count grid.
            outer: Which grid drives the outer loop (``"sample_size"`` or
                ``"bins"``); only affects row order.
            parallel: Distribute cells over ``joblib`` workers.
            n_cores: Number of workers when *parallel* is set.
            progress: Optional ``SweepProgress``, told about every finished cell.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            List of ``PowerRow`` in grid order.

        Raises:
            SimulationCancelled: If *cancel_check* requests an abort.
            InvalidParameter: If a cell's parameters are invalid.
            NumericIntegrationError: If a range p-value cannot be computed.
        """
        sample_sizes, bins, _ = check_grid(sample_sizes, bins, outer)
        cells = _grid_cells(sample_sizes, bins, outer)

        if parallel and n_cores > 1 and len(cells) > 1:
            from joblib import Parallel, delayed

            try:
                cell_results = Parallel(
                    n_jobs=n_cores,
                    backend="loky",
                    verbose=0,
                    return_as="generator",
                )(
                    delayed(simulate_cell)(n, k, self.n_simulations, self.alpha, self.percent_error, self.seed)
                    for n, k in cells
                )
                rows: List[PowerRow] = []
                for cell_rows in cell_results:
                    if cancel_check is not None and cancel_check():
                        raise SimulationCancelled("Sweep cancelled by user")
                    rows.extend(cell_rows)
                    if progress is not None:
                        progress.cell_done(cell_rows[0].sample_size, cell_rows[0].bins)
                return rows
            except (SimulationCancelled, InvalidParameter, NumericIntegrationError):
                raise
            except Exception as e:
                warnings.warn(f"Parallel execution failed ({e}). Falling back to sequential.", RuntimeWarning, stacklevel=2)
                if progress is not None:
                    progress.start()

        rows = []
        for sample_size, n_bins in cells:
            if cancel_check is not None and cancel_check():
                raise SimulationCancelled("Sweep cancelled by user")
            rows.extend(self.run_cell(sample_size, n_bins))
            if progress is not None:
                progress.cell_done(sample_size, n_bins)
        return rows


def analytic_grid(
    sample_sizes: Sequence[int],
    bins: Sequence[int],
    alpha: float = 0.01,
    percent_error: float = 0.1,
    outer: str = "sample_size",
) -> List[PowerRow]:
    """Closed-form chi-square power over ``sample_sizes x bins``."""
    sample_sizes, bins, _ = check_grid(sample_sizes, bins, outer)
    return [
        PowerRow(n, k, TEST_CHI_SQUARE_ANALYTIC, analytic_chi_square_power(n, k, alpha, percent_error))
        for n, k in _grid_cells(sample_sizes, bins, outer)
    ]
