"""
Validation utilities for MCUniform.

Every checked parameter has a domain in ``_DOMAINS``. Validators return a
``_ValidationResult``; callers decide whether to raise (``InvalidParameter``)
and what to do with the warnings.
"""

from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidParameter

__all__ = []


@dataclass
class _ValidationResult:
    """Errors and warnings collected while checking one input.

    Attributes:
        is_valid: ``True`` when ``errors`` is empty.
        errors: Messages that make the input unusable.
        warnings: Messages worth showing that do not block the run.
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str], warnings: Optional[List[str]] = None) -> "_ValidationResult":
        return cls(not errors, list(errors), list(warnings or []))

    def raise_if_invalid(self):
        """Raise ``InvalidParameter`` listing every error."""
        if not self.is_valid:
            raise InvalidParameter("Invalid parameter:\n" + "\n".join(f"  - {err}" for err in self.errors))


class _Domain(NamedTuple):
    integer: bool
    low: Optional[float] = None
    high: Optional[float] = None
    low_open: bool = False
    high_open: bool = False

    def describe(self) -> str:
        parts = []
        if self.low is not None:
            parts.append(f"{'>' if self.low_open else '>='} {self.low}")
        if self.high is not None:
            parts.append(f"{'<' if self.high_open else '<='} {self.high}")
        return " and ".join(parts)

    def contains(self, value) -> bool:
        if self.low is not None and (value <= self.low if self.low_open else value < self.low):
            return False
        if self.high is not None and (value >= self.high if self.high_open else value > self.high):
            return False
        return True


_DOMAINS = {
    "alpha": _Domain(integer=False, low=0, high=1, low_open=True, high_open=True),
    "bins": _Domain(integer=True, low=2),
    "sample_size": _Domain(integer=True, low=1),
    # At 2 the down-weighted category would get probability 0
    "percent_error": _Domain(integer=False, low=0, high=2, high_open=True),
    "reps": _Domain(integer=True, low=1),
}

_LOW_REPS = 1000


def _domain_error(value: Any, name: str, domain: _Domain) -> Optional[str]:
    """Return a message if *value* is outside *domain*, else ``None``."""
    kind = Integral if domain.integer else Real
    # bool is an Integral; never accept it as a count or a rate
    if isinstance(value, bool) or not isinstance(value, kind):
        return f"{name} must be {'an integer' if domain.integer else 'a number'}, got {type(value).__name__}"
    if not domain.integer and np.isnan(value):
        return f"{name} must not be NaN"
    if not domain.contains(value):
        return f"{name} must be {domain.describe()}, got {value}"
    return None


def _validate_numeric_parameter(value: Any, name: str) -> _ValidationResult:
    """Check *value* against the registered domain of *name*."""
    error = _domain_error(value, name, _DOMAINS[name])
    return _ValidationResult.from_errors([error] if error else [])


def _validate_alpha(alpha: Any) -> _ValidationResult:
    return _validate_numeric_parameter(alpha, "alpha")


def _validate_bins(bins: Any) -> _ValidationResult:
    return _validate_numeric_parameter(bins, "bins")


def _validate_sample_size(sample_size: Any) -> _ValidationResult:
    return _validate_numeric_parameter(sample_size, "sample_size")


def _validate_percent_error(percent_error: Any) -> _ValidationResult:
    return _validate_numeric_parameter(percent_error, "percent_error")


def _validate_reps(reps: Any) -> Tuple[int, _ValidationResult]:
    """Validate a replicate count; warns below 1000 replicates.

    Returns:
        ``(reps, result)`` with ``reps`` as a plain ``int`` (0 when invalid).
    """
    result = _validate_numeric_parameter(reps, "reps")
    if not result.is_valid:
        return 0, result
    if reps < _LOW_REPS:
        result.warnings.append(
            f"Low replicate count ({reps}). Consider using at least {_LOW_REPS} for reliable power estimates."
        )
    return int(reps), result


def _validate_grid(grid: Any, name: str, min_val: int) -> Tuple[List[int], _ValidationResult]:
    """Validate a sweep axis: a non-empty sequence of integers ``>= min_val``.

    Order is kept as given. Duplicates are allowed but produce a warning
    since the duplicated cells are simulated again.
    """
    if isinstance(grid, (str, bytes)) or not isinstance(grid, (Sequence, range, np.ndarray)):
        return [], _ValidationResult.from_errors([f"{name} must be a sequence of integers, got {type(grid).__name__}"])

    values = list(grid)
    if not values:
        return [], _ValidationResult.from_errors([f"{name} must not be empty"])

    entry = _Domain(integer=True, low=min_val)
    errors = [err for err in (_domain_error(v, f"{name} entries", entry) for v in values) if err]
    if errors:
        return [], _ValidationResult.from_errors(errors)

    values = [int(v) for v in values]
    warnings = []
    if len(set(values)) != len(values):
        warnings.append(f"{name} contains duplicate values; duplicate cells will be simulated twice.")
    return values, _ValidationResult.from_errors([], warnings)


def _validate_parallel_settings(enable: Any, n_cores: Optional[int]) -> Tuple[Tuple[bool, int], _ValidationResult]:
    """Validate ``set_parallel`` arguments.

    ``n_cores=None`` picks half the machine's cores; larger requests are
    capped at the core count.

    Returns:
        ``((enable, n_cores), result)``
    """
    import multiprocessing as mp

    if not isinstance(enable, bool):
        return (False, 1), _ValidationResult.from_errors([f"enable must be True or False, got {enable!r}"])

    available = mp.cpu_count() or 1
    if n_cores is None:
        return (enable, max(1, available // 2)), _ValidationResult(True)

    error = _domain_error(n_cores, "n_cores", _Domain(integer=True, low=1))
    if error:
        return (False, 1), _ValidationResult.from_errors([error])
    return (enable, min(int(n_cores), available)), _ValidationResult(True)


def _validate_outer_axis(outer: Any) -> _ValidationResult:
    """Only ``"sample_size"`` or ``"bins"`` may drive the outer loop."""
    if outer in ("sample_size", "bins"):
        return _ValidationResult(True)
    return _ValidationResult.from_errors([f"outer must be 'sample_size' or 'bins', got {outer!r}"])
