"""
Progress reporting for MCUniform sweeps.

A sweep reports progress in finished grid cells through a plain
``callback(done, total)``; ``SweepProgress`` does the counting and
throttling, and the reporters below are ready-made callbacks for consoles
and notebooks.
"""

import sys
from typing import Callable, Optional, Sequence, Tuple


class SimulationCancelled(Exception):
    """Raised when a sweep is cancelled by the user."""


class SweepProgress:
    """Counts finished ``(sample_size, bins)`` cells of one sweep.

    The callback is invoked on ``start()``, then whenever at least
    *update_every* cells have finished since the last update, and once more
    when the last cell finishes.

    Args:
        total: Number of cells in the sweep.
        callback: Called as ``callback(done, total)``.
        update_every: Minimum number of finished cells between two updates.
            Defaults to ``max(1, total // 100)``.
    """

    def __init__(self, total: int, callback: Callable[[int, int], None], update_every: Optional[int] = None):
        self.total = total
        self.update_every = update_every if update_every is not None else max(1, total // 100)
        self.done = 0
        self.last_cell: Optional[Tuple[int, int]] = None
        self._callback = callback
        self._reported = 0

    @classmethod
    def for_grid(cls, sample_sizes: Sequence[int], bins: Sequence[int], callback, update_every=None):
        """Build a tracker sized for ``sample_sizes x bins``."""
        return cls(len(sample_sizes) * len(bins), callback, update_every)

    def _report(self):
        self._reported = self.done
        self._callback(self.done, self.total)

    def start(self):
        """Reset the counter and send the ``0/total`` update."""
        self.done = 0
        self.last_cell = None
        self._report()

    def cell_done(self, sample_size: int, bins: int):
        """Record one finished cell."""
        self.done += 1
        self.last_cell = (sample_size, bins)
        if self.done >= self.total or self.done - self._reported >= self.update_every:
            self._report()

    def close(self, completed: bool = True):
        """End the display.

        A completed sweep gets its final ``total/total`` update unless it was
        already sent. An aborted sweep keeps its count; the callback's own
        ``close()`` is called, if it has one, so it can release its display.
        """
        if completed:
            if self._reported < self.total:
                self.done = self.total
                self._report()
            return
        finish = getattr(self._callback, "close", None)
        if finish is not None:
            finish()


class PrintReporter:
    """Writes ``\\rCells  9/20 [ 45%]`` to stderr, ending with a newline."""

    def __init__(self):
        self._line_open = False

    def __call__(self, done: int, total: int):
        if total <= 0:
            return
        width = len(str(total))
        sys.stderr.write(f"\rCells {done:>{width}}/{total} [{100 * done // total:3d}%]")
        self._line_open = True
        if done >= total:
            self.close()
        sys.stderr.flush()

    def close(self):
        """Terminate a partly drawn progress line."""
        if self._line_open:
            sys.stderr.write("\n")
            sys.stderr.flush()
            self._line_open = False


class TqdmReporter:
    """tqdm progress bar as a sweep callback; tqdm is imported on first use.

    Usage::

        from mcuniform.progress import TqdmReporter
        model.sweep([1000, 2000], [5, 10], progress_callback=TqdmReporter(desc="grid"))
    """

    def __init__(self, **tqdm_kwargs):
        self._tqdm_kwargs = tqdm_kwargs
        self._bar = None

    def __call__(self, done: int, total: int):
        if self._bar is None:
            from tqdm import tqdm

            self._bar = tqdm(total=total, unit="cell", **self._tqdm_kwargs)

        self._bar.update(max(0, done - self._bar.n))
        if done >= total:
            self.close()

    def close(self):
        """Close the bar, if one is open."""
        if self._bar is not None:
            self._bar.close()
            self._bar = None
