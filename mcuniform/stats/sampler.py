"""
Multinomial sample generation for MCUniform.

Draws batches of count vectors under the near-uniform alternative in which
every category has probability ``1/bins`` except two: category 0 is pulled
down and category 1 pushed up by ``percent_error/2`` (relative).
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..utils.validators import _validate_bins, _validate_percent_error, _validate_reps, _validate_sample_size

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


@dataclass(frozen=True)
class SampleBatch:
    """A batch of replicates sharing ``(sample_size, bins, percent_error)``.

    Attributes:
        counts: Integer array of shape ``(reps, bins)``; each row sums to
            ``sample_size``.
        sample_size: Number of multinomial trials per replicate.
        bins: Number of categories.
        percent_error: Perturbation used to build the generating
            probabilities.
    """

    counts: np.ndarray
    sample_size: int
    bins: int
    percent_error: float

    @property
    def reps(self) -> int:
        return int(self.counts.shape[0])


def probability_vector(bins: int, percent_error: float = 0.1) -> np.ndarray:
    """Build the generating probabilities for the two-perturbed-categories family.

    Args:
        bins: Number of categories (>= 2).
        percent_error: Relative perturbation in ``[0, 2)``.

    Returns:
        Read-only array of length *bins* summing to 1.

    Raises:
        InvalidParameter: If *bins* or *percent_error* is invalid.
    """
    _validate_bins(bins).raise_if_invalid()
    _validate_percent_error(percent_error).raise_if_invalid()

    probs = np.full(bins, 1.0 / bins)
    probs[0] = (1.0 - percent_error / 2.0) / bins
    probs[1] = (1.0 + percent_error / 2.0) / bins
    probs.setflags(write=False)
    return probs


def generate(
    sample_size: int,
    bins: int,
    percent_error: float = 0.1,
    reps: int = 100_000,
    seed: SeedLike = None,
) -> SampleBatch:
    """Draw *reps* independent multinomial count vectors.

    Args:
        sample_size: Trials per replicate (>= 1).
        bins: Number of categories (>= 2).
        percent_error: Relative perturbation of the two distinguished
            categories, in ``[0, 2)``. ``0`` samples from the uniform null.
        reps: Number of replicates (>= 1).
        seed: ``None`` for fresh entropy, an int or ``SeedSequence`` for a
            reproducible stream, or a ``Generator`` which is used as-is.

    Returns:
        ``SampleBatch`` with ``counts`` of shape ``(reps, bins)``.

    Raises:
        InvalidParameter: If any parameter is outside its domain.
    """
    _validate_sample_size(sample_size).raise_if_invalid()
    _, reps_result = _validate_reps(reps)
    reps_result.raise_if_invalid()

    probs = probability_vector(bins, percent_error)
    rng = np.random.default_rng(seed)
    counts = rng.multinomial(int(sample_size), probs, size=int(reps))

    return SampleBatch(
        counts=counts,
        sample_size=int(sample_size),
        bins=int(bins),
        percent_error=float(percent_error),
    )


def cell_generator(seed: Optional[int], sample_size: int, bins: int) -> np.random.Generator:
    """Return the random stream owned by one ``(sample_size, bins)`` grid cell.

    The stream depends only on the base seed and the cell coordinates, so a
    cell draws the same batch whatever the grid order or worker it runs on.
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(np.random.SeedSequence([int(seed), int(sample_size), int(bins)]))
