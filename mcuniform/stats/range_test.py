"""
Range tester.

Uses ``max(counts) - min(counts)`` as a one-sided test statistic against
uniformity: a large range gives a small p-value. P-values come from the
normal-theory approximation in ``range_distribution``.
"""

import numpy as np

from ..errors import InvalidParameter
from .range_distribution import multinomial_range_cdf
from .sampler import SampleBatch


def count_ranges(counts: np.ndarray) -> np.ndarray:
    """Range of category counts for each row of *counts*."""
    counts = np.asarray(counts)
    if counts.ndim != 2:
        raise InvalidParameter(f"counts must be a 2-D array, got shape {counts.shape}")
    return counts.max(axis=1) - counts.min(axis=1)


def range_pvalues(batch: SampleBatch) -> np.ndarray:
    """Upper-tail range-test p-values, one per replicate.

    Ranges are integers, so the approximate CDF is evaluated once per
    distinct range in the batch and broadcast back to the replicates.

    Raises:
        InvalidParameter: If a replicate does not have ``batch.bins`` entries
            or does not sum to ``batch.sample_size``.
        NumericIntegrationError: If the range CDF cannot be integrated.
    """
    counts = np.asarray(batch.counts)
    if counts.ndim != 2 or counts.shape[1] != batch.bins:
        raise InvalidParameter(f"replicates must have {batch.bins} categories, got shape {counts.shape}")
    totals = counts.sum(axis=1)
    if np.any(totals != batch.sample_size):
        raise InvalidParameter(f"every replicate must sum to sample_size={batch.sample_size}")

    ranges = count_ranges(counts)
    unique_ranges, inverse = np.unique(ranges, return_inverse=True)
    unique_pvalues = np.array(
        [1.0 - multinomial_range_cdf(int(w), batch.sample_size, batch.bins) for w in unique_ranges],
        dtype=np.float64,
    )
    return np.clip(unique_pvalues[inverse.reshape(-1)], 0.0, 1.0)
