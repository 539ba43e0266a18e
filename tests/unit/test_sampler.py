"""
Tests for the multinomial sampler.
"""

import numpy as np
import pytest

from mcuniform.errors import InvalidParameter
from mcuniform.stats.sampler import SampleBatch, cell_generator, generate, probability_vector
from tests.config import SEED


class TestProbabilityVector:
    """Test probability_vector construction."""

    def test_two_bins_boundary(self):
        probs = probability_vector(2, 0.1)
        np.testing.assert_allclose(probs, [0.475, 0.525])

    def test_sums_to_one(self):
        for bins in [2, 3, 10, 137]:
            assert probability_vector(bins, 0.1).sum() == pytest.approx(1.0)

    def test_only_first_two_categories_perturbed(self):
        probs = probability_vector(10, 0.1)
        assert probs[0] == pytest.approx(0.095)
        assert probs[1] == pytest.approx(0.105)
        np.testing.assert_allclose(probs[2:], 0.1)

    def test_zero_error_is_uniform(self):
        np.testing.assert_allclose(probability_vector(7, 0.0), 1 / 7)

    def test_read_only(self):
        probs = probability_vector(5)
        with pytest.raises(ValueError):
            probs[0] = 0.5

    @pytest.mark.parametrize("percent_error", [2.0, 2.5, -0.1])
    def test_invalid_percent_error(self, percent_error):
        with pytest.raises(InvalidParameter, match="percent_error"):
            probability_vector(5, percent_error)

    def test_near_upper_bound_still_positive(self):
        probs = probability_vector(4, 1.99)
        assert np.all(probs > 0)


class TestGenerate:
    """Test generate() output invariants."""

    @pytest.mark.parametrize("sample_size,bins", [(1, 2), (37, 3), (1000, 10), (5000, 64)])
    def test_shape_and_sums(self, sample_size, bins):
        batch = generate(sample_size, bins, reps=300, seed=SEED)
        assert isinstance(batch, SampleBatch)
        assert batch.counts.shape == (300, bins)
        assert batch.reps == 300
        assert np.issubdtype(batch.counts.dtype, np.integer)
        assert np.all(batch.counts >= 0)
        assert np.all(batch.counts.sum(axis=1) == sample_size)

    def test_metadata(self):
        batch = generate(100, 4, percent_error=0.3, reps=10, seed=SEED)
        assert batch.sample_size == 100
        assert batch.bins == 4
        assert batch.percent_error == pytest.approx(0.3)

    def test_same_seed_identical(self):
        a = generate(1000, 10, reps=500, seed=SEED)
        b = generate(1000, 10, reps=500, seed=SEED)
        np.testing.assert_array_equal(a.counts, b.counts)

    def test_different_seed_differs(self):
        a = generate(1000, 10, reps=500, seed=1)
        b = generate(1000, 10, reps=500, seed=2)
        assert not np.array_equal(a.counts, b.counts)

    def test_generator_used_as_is(self):
        rng_a = np.random.default_rng(SEED)
        rng_b = np.random.default_rng(SEED)
        first = generate(200, 3, reps=20, seed=rng_a)
        second = generate(200, 3, reps=20, seed=rng_a)
        assert not np.array_equal(first.counts, second.counts)
        np.testing.assert_array_equal(first.counts, generate(200, 3, reps=20, seed=rng_b).counts)

    def test_perturbation_shifts_means(self):
        batch = generate(10000, 4, percent_error=0.4, reps=2000, seed=SEED)
        means = batch.counts.mean(axis=0)
        # Expected: 2500 * (0.8, 1.2, 1, 1)
        assert means[0] == pytest.approx(2000, rel=0.01)
        assert means[1] == pytest.approx(3000, rel=0.01)

    @pytest.mark.parametrize(
        "kwargs,match",
        [
            ({"sample_size": 100, "bins": 1}, "bins"),
            ({"sample_size": 0, "bins": 5}, "sample_size"),
            ({"sample_size": 100, "bins": 5, "percent_error": 2.0}, "percent_error"),
            ({"sample_size": 100, "bins": 5, "reps": 0}, "reps"),
            ({"sample_size": 100, "bins": 2.5}, "bins"),
            ({"sample_size": 10.0, "bins": 5}, "sample_size"),
        ],
    )
    def test_invalid_parameters(self, kwargs, match):
        with pytest.raises(InvalidParameter, match=match):
            generate(**kwargs)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            generate(100, 1)


class TestCellGenerator:
    """Test per-cell random streams."""

    def test_same_cell_same_stream(self):
        a = cell_generator(SEED, 1000, 10).integers(0, 1_000_000, 5)
        b = cell_generator(SEED, 1000, 10).integers(0, 1_000_000, 5)
        np.testing.assert_array_equal(a, b)

    def test_different_cells_differ(self):
        a = cell_generator(SEED, 1000, 10).integers(0, 1_000_000, 5)
        b = cell_generator(SEED, 1000, 11).integers(0, 1_000_000, 5)
        c = cell_generator(SEED, 1001, 10).integers(0, 1_000_000, 5)
        assert not np.array_equal(a, b)
        assert not np.array_equal(a, c)

    def test_no_seed_gives_generator(self):
        assert isinstance(cell_generator(None, 10, 2), np.random.Generator)
