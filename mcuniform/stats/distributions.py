"""Statistical distribution functions for MCUniform.

Thin wrappers over ``scipy.stats`` / ``scipy.special`` so the testers and
the analytic power formula share one place where distribution calls are
made (scalar in, float out; arrays in, arrays out).

Usage:
    from mcuniform.stats.distributions import chi2_sf, ncx2_sf
"""

import numpy as np
from scipy.special import log_ndtr
from scipy.stats import chi2 as _chi2_dist
from scipy.stats import ncx2 as _ncx2_dist
from scipy.stats import norm as _norm_dist


def norm_logcdf(x):
    """Log of the standard normal CDF, accurate far into the lower tail."""
    return log_ndtr(x)


def norm_logpdf(x):
    """Log of the standard normal density."""
    return -0.5 * np.square(x) - 0.5 * np.log(2.0 * np.pi)


def norm_isf(q):
    """Standard normal inverse survival function."""
    return float(_norm_dist.isf(q))


def chi2_sf(x, df):
    """Chi-squared upper tail. Vectorised over *x*."""
    return _chi2_dist.sf(x, df)


def chi2_ppf(p, df):
    """Chi-squared quantile function."""
    return float(_chi2_dist.ppf(p, df))


def ncx2_sf(x, df, nc):
    """Noncentral chi-squared upper tail."""
    return float(_ncx2_dist.sf(x, df, nc))
