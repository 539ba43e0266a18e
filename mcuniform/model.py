"""
MCUniform - Monte Carlo power of uniformity tests.

This module provides the main MCUniform class for estimating the power of
the chi-square and range tests against a near-uniform multinomial
alternative.
"""

import warnings
from typing import Any, Dict, Optional, Sequence

from .core import (
    DEFAULT_SWEEP_CONFIGS,
    SweepRunner,
    analytic_grid,
    build_power_result,
    build_sweep_result,
    check_grid,
)
from .errors import InvalidParameter
from .stats.analytic import analytic_chi_square_power
from .utils.formatters import _format_results
from .utils.validators import (
    _validate_alpha,
    _validate_bins,
    _validate_parallel_settings,
    _validate_percent_error,
    _validate_reps,
    _validate_sample_size,
)
from .utils.visualization import _create_power_heatmap

# Bin count above which simulated sweeps warn about range-test cost
_LARGE_BINS_WARNING = 5000


class MCUniform:
    """Monte Carlo power analysis for multinomial uniformity tests.

    Simulates multinomial counts with two categories perturbed by
    ``±percent_error/2`` and estimates how often the Pearson chi-square
    test and the range test reject uniformity at level ``alpha``. The
    chi-square power can also be computed in closed form.

    Configuration methods (``set_*``) validate their input immediately and
    return ``self`` for method chaining.

    Attributes:
        seed: Base random seed (default: 2137). ``None`` for fresh entropy.
        alpha: Significance level (default: 0.01).
        n_simulations: Replicates per grid cell (default: 10,000).
        percent_error: Perturbation of the alternative (default: 0.1).
        parallel: Whether sweeps run cells on ``joblib`` workers
            (default: ``False``).
        n_cores: Number of workers for parallel sweeps.

    Example:
        >>> model = MCUniform()
        >>> model.find_power(sample_size=1000, bins=10)
        >>> model.set_simulations(1000).sweep([1000, 5000, 10000], [2, 5, 10])
    """

    def __init__(self):
        """Initialize the model with default configuration."""
        import multiprocessing as mp

        self.seed: Optional[int] = 2137
        self.alpha = 0.01
        self.n_simulations = 10_000
        self.percent_error = 0.1

        self.parallel = False
        self.n_cores = max(1, (mp.cpu_count() or 1) // 2)

    # =========================================================================
    # Configuration methods
    # =========================================================================

    def set_parallel(self, enable: bool = True, n_cores: Optional[int] = None):
        """Enable or disable parallel processing of sweep cells.

        Requires ``joblib``. Falls back to sequential processing with a
        warning if ``joblib`` is unavailable.

        Args:
            enable: ``True`` to distribute cells over workers.
            n_cores: Number of CPU cores to use. Defaults to
                ``cpu_count // 2``.

        Returns:
            self: For method chaining.
        """
        if enable is False:
            self.parallel, self.n_cores = False, 1
            return self

        try:
            import joblib  # noqa: F401
        except ImportError:
            print("Warning: joblib not available. Install with: pip install joblib")
            print("Warning: Continuing with sequential processing.")
            self.parallel = False
            return self

        settings, result = _validate_parallel_settings(enable, n_cores)
        result.raise_if_invalid()
        self.parallel, self.n_cores = settings
        return self

    def set_seed(self, seed: Optional[int] = None):
        """Set the base random seed.

        Args:
            seed: Non-negative integer, or ``None`` for fresh entropy on
                every run.

        Returns:
            self: For method chaining.

        Raises:
            TypeError: If *seed* is not an integer or ``None``.
            InvalidParameter: If *seed* is negative.
        """
        if seed is not None:
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise TypeError("seed must be an integer or None")
            if seed < 0:
                raise InvalidParameter("seed must be non-negative")

        self.seed = seed
        if seed is not None:
            print(f"Seed set to: {seed}")
        else:
            print("Random seeding enabled")
        return self

    def set_alpha(self, alpha: float):
        """Set the significance level.

        Args:
            alpha: Type-I error rate in ``(0, 1)``. Default is 0.01.

        Returns:
            self: For method chaining.
        """
        _validate_alpha(alpha).raise_if_invalid()
        self.alpha = float(alpha)
        return self

    def set_simulations(self, n_simulations: int):
        """Set the number of replicates drawn per grid cell.

        Returns:
            self: For method chaining.
        """
        reps, result = _validate_reps(n_simulations)
        result.raise_if_invalid()
        for warning in result.warnings:
            print(f"Warning: {warning}")
        self.n_simulations = reps
        return self

    def set_percent_error(self, percent_error: float):
        """Set the relative perturbation of the two distinguished categories.

        Args:
            percent_error: Value in ``[0, 2)``; ``0`` simulates the null.

        Returns:
            self: For method chaining.
        """
        _validate_percent_error(percent_error).raise_if_invalid()
        self.percent_error = float(percent_error)
        return self

    # =========================================================================
    # Analyses
    # =========================================================================

    def find_power(
        self,
        sample_size: int,
        bins: int,
        print_results: bool = True,
        return_results: bool = False,
    ):
        """
        Estimate the power of both tests at one ``(sample_size, bins)`` cell.

        Args:
            sample_size: Trials per replicate
            bins: Number of categories
            print_results: Whether to print results
            return_results: Return results dict

        Returns:
            dict or None: If *return_results* is ``True``, a dictionary with
            keys ``"model"`` (configuration) and ``"results"``
            (``individual_powers`` and a one-cell ``power_table``).
        """
        _validate_sample_size(sample_size).raise_if_invalid()
        _validate_bins(bins).raise_if_invalid()
        self._warn_large_bins([bins])

        runner = self._make_runner()
        rows = runner.run_cell(sample_size, bins)
        analytic = analytic_chi_square_power(sample_size, bins, self.alpha, self.percent_error)

        result = build_power_result(
            sample_size=sample_size,
            bins=bins,
            alpha=self.alpha,
            percent_error=self.percent_error,
            n_simulations=self.n_simulations,
            seed=self.seed,
            rows=rows,
            analytic_power=analytic,
        )

        if print_results:
            print(f"\n{'=' * 80}")
            print("MONTE CARLO POWER ANALYSIS RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("power", result))

        return result if return_results else None

    def sweep(
        self,
        sample_sizes: Sequence[int],
        bins: Sequence[int],
        outer: str = "sample_size",
        print_results: bool = True,
        return_results: bool = True,
        progress_callback=None,
        cancel_check=None,
    ):
        """
        Simulate both tests over every cell of ``sample_sizes x bins``.

        Args:
            sample_sizes: Sample-size grid
            bins: Bin-count grid
            outer: Grid driving the outer loop (``"sample_size"`` or ``"bins"``)
            print_results: Whether to print the pivoted power grids
            return_results: Return results dict
            progress_callback: Progress reporting control:
                - ``None`` (default): auto-use ``PrintReporter`` when
                  *print_results* is ``True``.
                - ``False``: explicitly disable progress.
                - callable ``(current, total)``: custom callback.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            dict or None: Result dictionary whose ``results["power_table"]``
            is a ``pandas.DataFrame`` with columns
            ``sample_size, bins, test, power``.
        """
        sample_sizes, bins = self._validate_grids(sample_sizes, bins, outer)
        self._warn_large_bins(bins)

        from .progress import PrintReporter, SweepProgress

        if progress_callback is None:
            effective_cb = PrintReporter() if print_results else None
        elif progress_callback is False:
            effective_cb = None
        else:
            effective_cb = progress_callback

        reporter = None
        if effective_cb is not None:
            reporter = SweepProgress.for_grid(sample_sizes, bins, effective_cb)
            reporter.start()

        runner = self._make_runner()
        completed = False
        try:
            rows = runner.run_grid(
                sample_sizes,
                bins,
                outer=outer,
                parallel=self.parallel,
                n_cores=self.n_cores,
                progress=reporter,
                cancel_check=cancel_check,
            )
            completed = True
        finally:
            if reporter is not None:
                reporter.close(completed=completed)

        result = build_sweep_result(
            sample_sizes=sample_sizes,
            bins=bins,
            alpha=self.alpha,
            percent_error=self.percent_error,
            n_simulations=self.n_simulations,
            seed=self.seed,
            parallel=self.parallel,
            rows=rows,
        )

        if print_results:
            print(f"\n{'=' * 80}")
            print("POWER SWEEP RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("sweep", result))

        return result if return_results else None

    def analytic_sweep(
        self,
        sample_sizes: Sequence[int],
        bins: Sequence[int],
        outer: str = "sample_size",
        print_results: bool = False,
        return_results: bool = True,
    ):
        """
        Closed-form chi-square power over every cell of ``sample_sizes x bins``.

        No simulation is involved, so fine grids are cheap.

        Returns:
            dict or None: Result dictionary with a ``power_table`` whose
            ``test`` column is ``"chi_square_analytic"``.
        """
        sample_sizes, bins = self._validate_grids(sample_sizes, bins, outer)
        rows = analytic_grid(sample_sizes, bins, self.alpha, self.percent_error, outer=outer)

        result = build_sweep_result(
            sample_sizes=sample_sizes,
            bins=bins,
            alpha=self.alpha,
            percent_error=self.percent_error,
            n_simulations=None,
            seed=None,
            parallel=False,
            rows=rows,
            analysis="analytic_sweep",
        )

        if print_results:
            print(f"\n{'=' * 80}")
            print("ANALYTIC CHI-SQUARE POWER")
            print(f"{'=' * 80}")
            print(_format_results("sweep", result))

        return result if return_results else None

    def run_reference_sweep(self, name: str, configs: Optional[Dict[str, Dict[str, Any]]] = None, **kwargs):
        """Run one of the named reference sweeps.

        Args:
            name: Key of the configuration (``"small"``, ``"large"`` or
                ``"analytic"`` for the defaults).
            configs: Alternative configuration dict with the same layout as
                ``DEFAULT_SWEEP_CONFIGS``.
            **kwargs: Forwarded to ``sweep`` / ``analytic_sweep``.

        Returns:
            Result dictionary of the sweep.
        """
        configs = configs if configs is not None else DEFAULT_SWEEP_CONFIGS
        if name not in configs:
            raise InvalidParameter(f"Unknown sweep {name!r}. Choose from: {', '.join(sorted(configs))}")
        config = configs[name]

        if "n_simulations" not in config:
            return self.analytic_sweep(config["sample_sizes"], config["bins"], **kwargs)

        previous = self.n_simulations
        self.n_simulations = config["n_simulations"]
        try:
            return self.sweep(config["sample_sizes"], config["bins"], **kwargs)
        finally:
            self.n_simulations = previous

    def plot(self, result: Dict[str, Any], **kwargs):
        """Render a result's power table as a faceted heat map.

        Keyword arguments are passed to the renderer (axes, colormap,
        ``output_path``, ``show``).
        """
        return _create_power_heatmap(result["results"]["power_table"], **kwargs)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _make_runner(self) -> SweepRunner:
        return SweepRunner(
            n_simulations=self.n_simulations,
            alpha=self.alpha,
            percent_error=self.percent_error,
            seed=self.seed,
        )

    def _validate_grids(self, sample_sizes, bins, outer):
        sample_sizes, bins, grid_warnings = check_grid(sample_sizes, bins, outer)
        for warning in grid_warnings:
            print(f"Warning: {warning}")
        return sample_sizes, bins

    def _warn_large_bins(self, bins):
        if max(bins) > _LARGE_BINS_WARNING:
            warnings.warn(
                f"Range-test p-values for {max(bins)} bins need one numerical integration per "
                f"distinct range; expect slow sweeps.",
                UserWarning,
                stacklevel=3,
            )

    def __repr__(self):
        return (
            f"MCUniform(alpha={self.alpha}, n_simulations={self.n_simulations}, "
            f"percent_error={self.percent_error}, seed={self.seed})"
        )
