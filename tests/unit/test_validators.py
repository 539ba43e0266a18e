"""
Tests for validation utilities.
"""

import numpy as np
import pytest

from mcuniform.errors import InvalidParameter
from mcuniform.utils.validators import (
    _validate_alpha,
    _validate_bins,
    _validate_grid,
    _validate_outer_axis,
    _validate_parallel_settings,
    _validate_percent_error,
    _validate_reps,
    _validate_sample_size,
    _ValidationResult,
)


class TestValidationResult:
    """Test _ValidationResult."""

    def test_valid_does_not_raise(self):
        _ValidationResult(True, [], []).raise_if_invalid()

    def test_invalid_raises_with_all_errors(self):
        result = _ValidationResult(False, ["first problem", "second problem"], [])
        with pytest.raises(InvalidParameter) as exc_info:
            result.raise_if_invalid()
        assert "first problem" in str(exc_info.value)
        assert "second problem" in str(exc_info.value)

    def test_invalid_parameter_is_value_error(self):
        assert issubclass(InvalidParameter, ValueError)


class TestScalarValidators:
    """Test the scalar parameter validators."""

    @pytest.mark.parametrize("alpha", [0.001, 0.01, 0.5, 0.999])
    def test_alpha_valid(self, alpha):
        assert _validate_alpha(alpha).is_valid

    @pytest.mark.parametrize("alpha", [0, 0.0, 1, 1.5, -0.1, float("nan"), "0.05", None, True])
    def test_alpha_invalid(self, alpha):
        assert not _validate_alpha(alpha).is_valid

    @pytest.mark.parametrize("bins", [2, 3, 100, np.int64(20)])
    def test_bins_valid(self, bins):
        assert _validate_bins(bins).is_valid

    @pytest.mark.parametrize("bins", [1, 0, -2, 2.0, "10", True])
    def test_bins_invalid(self, bins):
        result = _validate_bins(bins)
        assert not result.is_valid
        assert "bins" in result.errors[0]

    @pytest.mark.parametrize("sample_size", [1, 1000, np.int32(5)])
    def test_sample_size_valid(self, sample_size):
        assert _validate_sample_size(sample_size).is_valid

    @pytest.mark.parametrize("sample_size", [0, -10, 100.0])
    def test_sample_size_invalid(self, sample_size):
        assert not _validate_sample_size(sample_size).is_valid

    @pytest.mark.parametrize("percent_error", [0, 0.0, 0.1, 1.99])
    def test_percent_error_valid(self, percent_error):
        assert _validate_percent_error(percent_error).is_valid

    @pytest.mark.parametrize("percent_error", [2, 2.0, -0.01, float("nan")])
    def test_percent_error_invalid(self, percent_error):
        assert not _validate_percent_error(percent_error).is_valid


class TestValidateReps:
    """Test _validate_reps."""

    def test_valid(self):
        reps, result = _validate_reps(5000)
        assert reps == 5000
        assert result.is_valid
        assert result.warnings == []

    def test_low_count_warns(self):
        reps, result = _validate_reps(200)
        assert reps == 200
        assert result.is_valid
        assert "Low replicate count" in result.warnings[0]

    @pytest.mark.parametrize("reps", [0, -5, 10.5])
    def test_invalid(self, reps):
        value, result = _validate_reps(reps)
        assert value == 0
        assert not result.is_valid


class TestValidateGrid:
    """Test _validate_grid."""

    def test_list(self):
        values, result = _validate_grid([1000, 2000], "sample_sizes", min_val=1)
        assert values == [1000, 2000]
        assert result.is_valid

    def test_range_and_array(self):
        values, _ = _validate_grid(range(2, 8, 2), "bins", min_val=2)
        assert values == [2, 4, 6]
        values, _ = _validate_grid(np.array([3, 5]), "bins", min_val=2)
        assert values == [3, 5]
        assert all(type(v) is int for v in values)

    def test_order_preserved(self):
        values, _ = _validate_grid([30, 10, 20], "bins", min_val=2)
        assert values == [30, 10, 20]

    def test_duplicates_warn(self):
        values, result = _validate_grid([5, 5], "bins", min_val=2)
        assert result.is_valid
        assert values == [5, 5]
        assert "duplicate" in result.warnings[0]

    @pytest.mark.parametrize("grid", [[], "1000", 1000, None, [1000, 2.5], [1000, True]])
    def test_invalid(self, grid):
        values, result = _validate_grid(grid, "sample_sizes", min_val=1)
        assert values == []
        assert not result.is_valid

    def test_below_minimum(self):
        _, result = _validate_grid([2, 1], "bins", min_val=2)
        assert not result.is_valid
        assert "bins entries must be >= 2" in result.errors[0]


class TestOtherValidators:
    """Test outer-axis and parallel validators."""

    @pytest.mark.parametrize("outer", ["sample_size", "bins"])
    def test_outer_valid(self, outer):
        assert _validate_outer_axis(outer).is_valid

    @pytest.mark.parametrize("outer", ["rows", None, "sample_sizes"])
    def test_outer_invalid(self, outer):
        assert not _validate_outer_axis(outer).is_valid

    def test_parallel_settings(self):
        (enable, n_cores), result = _validate_parallel_settings(True, 1)
        assert result.is_valid
        assert enable is True
        assert n_cores == 1

    def test_parallel_auto_cores(self):
        (_, n_cores), result = _validate_parallel_settings(True, None)
        assert result.is_valid
        assert n_cores >= 1

    @pytest.mark.parametrize("enable,n_cores", [("yes", None), (True, 0), (True, -2), (True, 2.0)])
    def test_parallel_invalid(self, enable, n_cores):
        _, result = _validate_parallel_settings(enable, n_cores)
        assert not result.is_valid
