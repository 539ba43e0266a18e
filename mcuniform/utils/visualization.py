"""
Visualization utilities for MCUniform.

Renders a power table as a faceted tile plot: one panel per test, grid
parameters on the axes, power as colour. All styling is passed in as
arguments; nothing here touches global matplotlib state.
"""

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..core.results import pivot_power

__all__ = []


def _create_power_heatmap(
    power_table: pd.DataFrame,
    x: str = "sample_size",
    y: str = "bins",
    tests: Optional[Sequence[str]] = None,
    title: str = "Power",
    cmap: str = "viridis",
    output_path: Optional[str] = None,
    show: bool = True,
):
    """Draw one heat map of power per test.

    Args:
        power_table: Rows ``(sample_size, bins, test, power)``.
        x: Column plotted on the horizontal axis.
        y: Column plotted on the vertical axis.
        tests: Tests to draw, in panel order. Defaults to every test in the
            table.
        title: Figure title.
        cmap: Matplotlib colormap name.
        output_path: If given, the figure is saved there.
        show: Call ``plt.show()`` after drawing.

    Returns:
        The matplotlib ``Figure``.

    Raises:
        ImportError: If ``matplotlib`` is not installed.
        ValueError: If the table is empty or *x*/*y* are not grid columns.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib required for plotting: pip install matplotlib") from None

    if power_table.empty:
        raise ValueError("power table is empty")
    if {x, y} != {"sample_size", "bins"}:
        raise ValueError(f"x and y must be 'sample_size' and 'bins', got {x!r} and {y!r}")

    if tests is None:
        tests = sorted(power_table["test"].unique())

    fig, axes = plt.subplots(1, len(tests), figsize=(6 * len(tests), 5), squeeze=False)
    image = None
    for ax, test in zip(axes[0], tests):
        grid = pivot_power(power_table, test, index=y, columns=x)
        image = ax.imshow(
            grid.to_numpy(),
            origin="lower",
            aspect="auto",
            cmap=cmap,
            vmin=0.0,
            vmax=1.0,
            interpolation="nearest",
        )
        ax.set_title(test, fontsize=12, fontweight="bold")
        ax.set_xlabel(x.replace("_", " ").title(), fontsize=11)
        ax.set_ylabel(y.replace("_", " ").title(), fontsize=11)

        x_ticks = np.linspace(0, len(grid.columns) - 1, min(len(grid.columns), 8)).astype(int)
        y_ticks = np.linspace(0, len(grid.index) - 1, min(len(grid.index), 8)).astype(int)
        ax.set_xticks(x_ticks)
        ax.set_xticklabels([str(grid.columns[i]) for i in x_ticks], rotation=45)
        ax.set_yticks(y_ticks)
        ax.set_yticklabels([str(grid.index[i]) for i in y_ticks])

    fig.colorbar(image, ax=axes[0].tolist(), label="Power")
    fig.suptitle(title, fontsize=14, fontweight="bold")

    if output_path is not None:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    if show:
        plt.show()
    return fig
