"""Distribution of the range statistic.

Two functions:

- ``normal_range_cdf(w, k)`` -- CDF of the range (max - min) of ``k``
  i.i.d. standard normals,

      F(w) = ∫ k φ(x) (Φ(x + w) - Φ(x))^(k - 1) dx,

  evaluated by adaptive quadrature.
- ``multinomial_range_cdf(w, n, k)`` -- a normal-theory surrogate for the CDF
  of the range of ``k`` multinomial counts out of ``n`` trials under the
  uniform null. It is an approximation, not an exact distribution.

Numerics:
  The ``(k - 1)``-th power underflows long before ``k`` reaches the tens of
  thousands, so the integrand is built in log space from ``log_ndtr`` with
  the interval mass taken on whichever side of zero keeps both endpoints in
  the lower tail. The real line is truncated to ``[-L, L]`` with
  ``k * Φ(-L)`` below the tolerance, and the integrand's mode (located on a
  grid) is passed to ``quad`` as a break point so narrow peaks for large
  ``k`` are not stepped over. The subdivision budget is finite; running out
  of it raises ``NumericIntegrationError``.
"""

from functools import lru_cache

import numpy as np
from scipy.integrate import quad

from ..errors import InvalidParameter, NumericIntegrationError
from .distributions import norm_isf, norm_logcdf, norm_logpdf

DEFAULT_TOLERANCE = 1e-9
"""Absolute error target for ``normal_range_cdf``."""

MAX_SUBDIVISIONS = 200
"""Subinterval budget handed to ``quad``."""

GUARANTEED_ACCURACY = 1e-6
"""Largest quadrature error estimate accepted from a non-clean ``quad`` exit."""

_MODE_GRID_POINTS = 2001


def _check_positive_integer(value, name: str):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise InvalidParameter(f"{name} must be a positive integer, got {value!r}")


def _log_interval_mass(x, w: float):
    """``log(Φ(x + w) - Φ(x))`` for ``w > 0``, vectorised over *x*."""
    x = np.asarray(x, dtype=np.float64)
    # Reflect intervals centred above zero: Φ(x+w) - Φ(x) = Φ(-x) - Φ(-x-w)
    reflect = x + 0.5 * w > 0
    upper = np.where(reflect, -x, x + w)
    lower = np.where(reflect, -x - w, x)
    log_hi = norm_logcdf(upper)
    log_lo = norm_logcdf(lower)
    return log_hi + np.log1p(-np.exp(log_lo - log_hi))


def _log_integrand(x, w: float, k: int):
    return np.log(k) + norm_logpdf(x) + (k - 1) * _log_interval_mass(x, w)


@lru_cache(maxsize=4096)
def _normal_range_cdf(w: float, k: int, tol: float, limit: int) -> float:
    half_width = max(8.0, norm_isf(tol / (4.0 * k)))
    grid = np.linspace(-half_width, half_width, _MODE_GRID_POINTS)
    log_values = _log_integrand(grid, w, k)
    peak = float(np.max(log_values))

    # Whole integrand below tolerance: the range almost surely exceeds w
    if not np.isfinite(peak) or peak + np.log(2.0 * half_width) < np.log(tol):
        return 0.0

    mode = float(grid[int(np.argmax(log_values))])

    def integrand(x):
        return float(np.exp(_log_integrand(x, w, k)))

    points = [mode] if -half_width < mode < half_width else None
    result = quad(
        integrand,
        -half_width,
        half_width,
        points=points,
        epsabs=tol,
        epsrel=1e-10,
        limit=limit,
        full_output=1,
    )
    value, abserr, info = result[:3]
    if len(result) > 3:
        # Roundoff warnings are tolerated while the error estimate stays within
        # the guaranteed accuracy; an exhausted budget never is.
        if info["last"] >= limit or abserr > GUARANTEED_ACCURACY:
            raise NumericIntegrationError(f"Range CDF integration failed for w={w}, k={k}: {result[3]}")

    if not np.isfinite(value):
        raise NumericIntegrationError(f"Range CDF integration returned a non-finite value for w={w}, k={k}")
    return float(min(max(value, 0.0), 1.0))


def normal_range_cdf(w: float, k: int, tol: float = DEFAULT_TOLERANCE, limit: int = MAX_SUBDIVISIONS) -> float:
    """CDF of the range of *k* i.i.d. standard normal variables at *w*.

    Args:
        w: Evaluation point. ``w <= 0`` gives 0 and ``w = +inf`` gives 1.
        k: Number of normal variables (>= 1).
        tol: Absolute error target for the quadrature.
        limit: Maximum number of quadrature subintervals.

    Returns:
        Probability in ``[0, 1]``.

    Raises:
        InvalidParameter: If *k* < 1 or *w* is NaN.
        NumericIntegrationError: If the quadrature does not converge within
            *limit* subintervals.
    """
    _check_positive_integer(k, "k")
    # One break point splits the domain, so quad needs room for three pieces
    if isinstance(limit, bool) or not isinstance(limit, (int, np.integer)) or limit < 3:
        raise InvalidParameter(f"limit must be an integer >= 3, got {limit!r}")
    if not tol > 0:
        raise InvalidParameter(f"tol must be positive, got {tol!r}")
    w = float(w)
    if np.isnan(w):
        raise InvalidParameter("w must not be NaN")

    if w <= 0.0:
        return 0.0
    if np.isinf(w) or k == 1:
        return 1.0
    return _normal_range_cdf(w, int(k), float(tol), int(limit))


def multinomial_range_cdf(w: float, n: int, k: int) -> float:
    """Approximate CDF of the range of *k* multinomial counts out of *n* trials.

    The counts under the uniform null are treated as ``k`` independent
    normals with standard deviation ``sqrt(n/k)``: the observed range is
    shifted by a continuity correction of ``1/(2n)`` and rescaled by
    ``sqrt(k/n)`` before being passed to ``normal_range_cdf``. This is a
    normal-theory approximation, not the exact discrete distribution.

    Args:
        w: Observed range ``max(counts) - min(counts)``.
        n: Number of trials (>= 1).
        k: Number of categories (>= 1).

    Returns:
        Approximate ``P(range <= w)`` in ``[0, 1]``.
    """
    _check_positive_integer(n, "n")
    _check_positive_integer(k, "k")
    cutoff = (float(w) - 1.0 / (2.0 * n)) * np.sqrt(k / n)
    return normal_range_cdf(cutoff, k)
