"""
Tests for result formatting utilities.
"""

import pytest

from mcuniform.core.results import PowerRow, build_power_result, build_sweep_result
from mcuniform.utils.formatters import _format_results


@pytest.fixture
def power_result():
    rows = [PowerRow(1000, 10, "chi_square", 0.0176), PowerRow(1000, 10, "range", 0.0123)]
    return build_power_result(1000, 10, 0.01, 0.1, 2000, 2137, rows, analytic_power=0.0143)


@pytest.fixture
def sweep_result():
    rows = [
        PowerRow(n, k, test, power)
        for n, k, power in [(1000, 2, 0.11), (1000, 4, 0.05), (2000, 2, 0.31), (2000, 4, 0.16)]
        for test in ("chi_square", "range")
    ]
    return build_sweep_result([1000, 2000], [2, 4], 0.01, 0.1, 500, 2137, False, rows)


class TestFormatPower:
    """Test the single-cell report."""

    def test_header(self, power_result):
        text = _format_results("power", power_result)
        assert "Sample size: 1000, bins: 10" in text
        assert "Replicates: 2000" in text

    def test_every_test_listed(self, power_result):
        text = _format_results("power", power_result)
        assert "Chi-square (simulated)" in text
        assert "Range (simulated)" in text
        assert "Chi-square (analytic)" in text

    def test_percent_values(self, power_result):
        text = _format_results("power", power_result)
        assert "1.8%" in text
        assert "1.2%" in text
        assert "1.4%" in text


class TestFormatSweep:
    """Test the grid report."""

    def test_grid_dimensions(self, sweep_result):
        text = _format_results("sweep", sweep_result)
        assert "2 sample sizes x 2 bin counts" in text
        assert "Replicates per cell: 500" in text

    def test_one_grid_per_test(self, sweep_result):
        text = _format_results("sweep", sweep_result)
        assert text.count("power (rows: bins, columns: sample size)") == 2
        assert "0.310" in text

    def test_analytic_sweep_has_no_replicates_line(self):
        rows = [PowerRow(1000, 2, "chi_square_analytic", 0.2)]
        result = build_sweep_result([1000], [2], 0.01, 0.1, None, None, False, rows, analysis="analytic_sweep")
        text = _format_results("sweep", result)
        assert "Replicates" not in text
        assert "Chi-square (analytic)" in text


class TestUnknownAnalysis:
    def test_raises(self, power_result):
        with pytest.raises(ValueError, match="Unknown analysis"):
            _format_results("bogus", power_result)
