"""
Shared pytest fixtures for MCUniform tests.
"""

import contextlib
import io

import numpy as np
import pytest

from tests.config import SEED


@pytest.fixture
def suppress_output():
    """Silence the status lines printed by ``MCUniform``."""
    with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
        yield


@pytest.fixture
def quiet_model(suppress_output):
    """MCUniform model with a fixed seed and a small replicate count."""
    from mcuniform import MCUniform

    model = MCUniform()
    model.set_seed(SEED)
    model.set_simulations(200)
    model.set_parallel(False)
    return model


@pytest.fixture
def small_batch():
    """Reproducible batch: 200 replicates of 500 trials over 5 bins."""
    from mcuniform import generate

    return generate(500, 5, percent_error=0.1, reps=200, seed=SEED)


@pytest.fixture
def fixed_counts():
    """Hand-written count matrix (3 replicates, 4 bins, 40 trials each)."""
    return np.array(
        [
            [10, 10, 10, 10],
            [20, 0, 10, 10],
            [13, 7, 12, 8],
        ]
    )


@pytest.fixture(autouse=True)
def _clear_range_cache():
    """Keep quadrature results from leaking between tests that patch ``quad``."""
    from mcuniform.stats.range_distribution import _normal_range_cdf

    _normal_range_cdf.cache_clear()
    yield
    _normal_range_cdf.cache_clear()
