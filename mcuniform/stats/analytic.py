"""
Closed-form power of the chi-square uniformity test.

Under the alternative with two categories perturbed by ``±percent_error/2``
(relative), the Pearson statistic is approximately noncentral chi-square
with ``df = bins - 1`` and noncentrality

    λ = n · Σ (p0_i - p1_i)² / p0_i = n · percent_error² / (2 · bins),

which is ``n · 0.005 / bins`` at the default ``percent_error = 0.1``. The
formula holds only for this two-perturbed-categories family.
"""

from ..utils.validators import _validate_alpha, _validate_bins, _validate_percent_error, _validate_sample_size
from .distributions import chi2_ppf, ncx2_sf


def noncentrality(sample_size: int, bins: int, percent_error: float = 0.1) -> float:
    """Noncentrality parameter ``λ = n · w²`` for the two-category alternative."""
    effect_size_sq = percent_error**2 / (2.0 * bins)
    return sample_size * effect_size_sq


def analytic_chi_square_power(sample_size: int, bins: int, alpha: float = 0.01, percent_error: float = 0.1) -> float:
    """Power of the level-*alpha* chi-square test via the noncentral chi-square.

    Args:
        sample_size: Number of trials (>= 1).
        bins: Number of categories (>= 2).
        alpha: Significance level in ``(0, 1)``.
        percent_error: Perturbation of the alternative, in ``[0, 2)``.

    Returns:
        ``P(X² >= c)`` where ``c`` is the central chi-square
        ``(1 - alpha)`` quantile, a value in ``[0, 1]``.

    Raises:
        InvalidParameter: If any argument is outside its domain.
    """
    _validate_sample_size(sample_size).raise_if_invalid()
    _validate_bins(bins).raise_if_invalid()
    _validate_alpha(alpha).raise_if_invalid()
    _validate_percent_error(percent_error).raise_if_invalid()

    df = bins - 1
    critical = chi2_ppf(1.0 - alpha, df)
    lam = noncentrality(sample_size, bins, percent_error)
    if lam == 0.0:
        return float(alpha)
    return min(max(ncx2_sf(critical, df, lam), 0.0), 1.0)
