"""
Exception types for MCUniform.

All errors are raised at the point of detection and are never retried or
converted into default values by the library.
"""


class InvalidParameter(ValueError):
    """Raised when a bin count, sample size, percent error, alpha, replicate
    count or parameter grid is outside its valid domain."""

    pass


class NumericIntegrationError(ArithmeticError):
    """Raised when the range-distribution quadrature fails to converge or
    exceeds its subdivision budget."""

    pass
