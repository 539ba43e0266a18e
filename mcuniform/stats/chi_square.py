"""
Pearson chi-square goodness-of-fit tester.

The expected count in every category is ``sample_size / bins``: the test is
always run against the *uniform* null, not against the probabilities the
sampler actually used. That is how an analyst who does not know the true
perturbation would apply the test, and it is what makes the rejection rate
a power estimate. Do not replace the expectation with the generating
probabilities.
"""

import numpy as np

from ..errors import InvalidParameter
from .distributions import chi2_sf
from .sampler import SampleBatch


def chi_square_statistics(counts: np.ndarray) -> np.ndarray:
    """Pearson ``X²`` against the uniform null for each row of *counts*.

    Args:
        counts: Integer array of shape ``(reps, bins)``.

    Returns:
        1-D float array of length ``reps``.
    """
    counts = np.asarray(counts)
    if counts.ndim != 2:
        raise InvalidParameter(f"counts must be a 2-D array, got shape {counts.shape}")
    bins = counts.shape[1]
    if bins < 2:
        raise InvalidParameter(f"chi-square test needs at least 2 bins, got {bins}")

    totals = counts.sum(axis=1, keepdims=True)
    expected = totals / bins
    if np.any(expected <= 0):
        raise InvalidParameter("every replicate must contain at least one observation")
    return np.sum((counts - expected) ** 2 / expected, axis=1)


def chi_square_pvalues(batch: SampleBatch) -> np.ndarray:
    """Upper-tail chi-square p-values (``df = bins - 1``), one per replicate."""
    if batch.bins < 2:
        raise InvalidParameter(f"chi-square test needs at least 2 bins, got {batch.bins}")
    statistics = chi_square_statistics(batch.counts)
    return np.clip(chi2_sf(statistics, batch.bins - 1), 0.0, 1.0)
