"""
Text formatting of MCUniform results.
"""

from typing import Any, Dict

from ..core.results import pivot_power

__all__ = []

_TEST_LABELS = {
    "chi_square": "Chi-square (simulated)",
    "range": "Range (simulated)",
    "chi_square_analytic": "Chi-square (analytic)",
}


def _format_power_result(result: Dict[str, Any]) -> str:
    model = result["model"]
    lines = [
        f"Sample size: {model['sample_size']}, bins: {model['bins']}, "
        f"alpha: {model['alpha']}, percent error: {model['percent_error']}",
        f"Replicates: {model['n_simulations']}",
        "",
        f"{'Test':<26}{'Power':>10}",
        "-" * 36,
    ]
    for test, power in result["results"]["individual_powers"].items():
        lines.append(f"{_TEST_LABELS.get(test, test):<26}{power * 100:>9.1f}%")
    return "\n".join(lines)


def _format_sweep_result(result: Dict[str, Any]) -> str:
    model = result["model"]
    table = result["results"]["power_table"]
    lines = [
        f"Grid: {len(model['sample_sizes'])} sample sizes x {len(model['bins'])} bin counts, "
        f"alpha: {model['alpha']}, percent error: {model['percent_error']}",
    ]
    if model.get("n_simulations") is not None:
        lines.append(f"Replicates per cell: {model['n_simulations']}")

    for test in result["results"]["tests"]:
        grid = pivot_power(table, test)
        lines.append("")
        lines.append(f"{_TEST_LABELS.get(test, test)}: power (rows: bins, columns: sample size)")
        lines.append(grid.to_string(float_format=lambda v: f"{v:.3f}"))
    return "\n".join(lines)


def _format_results(analysis: str, result: Dict[str, Any]) -> str:
    """Render a result dictionary as a plain-text report.

    Args:
        analysis: ``"power"`` for a single cell, ``"sweep"`` for a grid.
        result: Dictionary from ``build_power_result`` / ``build_sweep_result``.
    """
    if analysis == "power":
        return _format_power_result(result)
    if analysis == "sweep":
        return _format_sweep_result(result)
    raise ValueError(f"Unknown analysis type: {analysis!r}")
