"""MCUniform - Monte Carlo power of multinomial uniformity tests.

Estimates how often the Pearson chi-square test and the range test detect a
near-uniform multinomial alternative (two categories perturbed by
``±percent_error/2``), by simulation and, for chi-square, in closed form.

Example:
    >>> from mcuniform import MCUniform
    >>>
    >>> model = MCUniform()
    >>> model.find_power(sample_size=1000, bins=10)
    >>>
    >>> result = model.sweep([1000, 5000, 10000], [2, 5, 10])
    >>> model.plot(result)
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .errors import InvalidParameter, NumericIntegrationError
from .model import MCUniform
from .progress import PrintReporter, SimulationCancelled, SweepProgress, TqdmReporter
from .stats.analytic import analytic_chi_square_power
from .stats.chi_square import chi_square_pvalues
from .stats.range_distribution import multinomial_range_cdf, normal_range_cdf
from .stats.range_test import range_pvalues
from .stats.sampler import SampleBatch, generate, probability_vector

try:
    __version__ = _get_version("MCUniform")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "MCUniform",
    "InvalidParameter",
    "NumericIntegrationError",
    "SimulationCancelled",
    "SweepProgress",
    "PrintReporter",
    "TqdmReporter",
    "SampleBatch",
    "generate",
    "probability_vector",
    "chi_square_pvalues",
    "range_pvalues",
    "normal_range_cdf",
    "multinomial_range_cdf",
    "analytic_chi_square_power",
]
