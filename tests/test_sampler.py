"""
Test suite for sampling inversion vectors from a distribution model.

Validates:
- Reproducibility under a fixed seed or generator state
- Every sample stays inside its position's domain and decodes to a permutation
- Sampling frequencies follow the row weights
- Degenerate rows are reported without touching the output
- Kind and length checks on the output population
"""

import logging

import pytest
import numpy as np

# Import the components to test
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from permu_eda.errors import DegenerateDistributionError, LengthMismatchError, PopulationKindError
from permu_eda.distribution.model import DistributionModel, learn
from permu_eda.distribution.sampler import sample, sample_population
from permu_eda.representations.inversion import to_inversions, to_permutations
from permu_eda.representations.population import INVERSION, Population


def _softened_model(size: int = 20, length: int = 7, seed: int = 0) -> DistributionModel:
    model = learn(to_inversions(Population.random(size, length, seed)))
    model.soften()
    return model


class TestSampleDeterminism:
    """Test that sampling is driven only by the random source."""

    def test_same_seed_same_population(self):
        """Equal seeds give equal populations."""
        model = _softened_model()
        assert sample_population(model, 50, 7) == sample_population(model, 50, 7)

    def test_seed_and_generator_agree(self):
        """An integer seed behaves like a fresh generator with that seed."""
        model = _softened_model()
        from_seed = sample_population(model, 30, 99)
        from_generator = sample_population(model, 30, np.random.default_rng(99))
        assert from_seed == from_generator

    def test_shared_generator_advances(self):
        """A shared generator yields different draws on consecutive calls."""
        model = _softened_model(length=10)
        generator = np.random.default_rng(3)
        first = sample_population(model, 40, generator)
        second = sample_population(model, 40, generator)
        assert first != second

    def test_random_source_required(self):
        """Sampling without a random source is rejected."""
        model = _softened_model()
        with pytest.raises(TypeError):
            sample_population(model, 5, None)


class TestSampleValidity:
    """Test that samples are well-formed."""

    def test_samples_within_domain(self):
        """Component i of every sample lies in [0, n - 1 - i]."""
        model = _softened_model(length=12)
        samples = sample_population(model, 500, 1).as_array().astype(np.int64)
        upper = 12 - 1 - np.arange(11)
        assert (samples >= 0).all()
        assert (samples <= upper).all()

    def test_samples_decode_to_permutations(self):
        """Decoded samples are valid permutations."""
        model = _softened_model(length=15)
        permutations = to_permutations(sample_population(model, 200, 4))
        permutations.validate()
        assert permutations.length == 15

    def test_out_of_domain_cells_never_drawn(self):
        """Weight stored in unused cells has no effect."""
        # Row 1 of an n = 3 model only admits 0 and 1; cell [1, 2] is unused
        counts = np.array([[1, 1, 1], [1, 1, 1000]])
        model = DistributionModel(counts, is_softened=True)
        samples = sample_population(model, 4000, 5).as_array()

        assert set(samples[:, 1].tolist()) <= {0, 1}
        share = float((samples[:, 1] == 1).mean())
        assert abs(share - 0.5) < 0.05, f"Expected ~0.5, got {share}"

    def test_unsoftened_model_only_draws_observed_values(self, caplog):
        """Without softening, unobserved values are never drawn and a warning is logged."""
        model = learn(to_inversions(Population.identity(5, 5)))

        with caplog.at_level(logging.WARNING, logger='permu_eda'):
            samples = sample_population(model, 100, 2)

        assert samples == Population.zeros(100, 4, INVERSION)
        assert "unsoftened" in caplog.text

    def test_frequencies_follow_weights(self):
        """Values are drawn in proportion to their counts."""
        model = DistributionModel(np.array([[1, 3]]), is_softened=True)
        samples = sample_population(model, 20000, 11).as_array()
        share = float((samples[:, 0] == 1).mean())
        assert abs(share - 0.75) < 0.02, f"Expected ~0.75, got {share}"

    def test_softened_model_reaches_every_value(self):
        """After softening, values never observed can still be drawn."""
        model = learn(to_inversions(Population.identity(5, 3)))
        model.soften()
        samples = sample_population(model, 2000, 8).as_array()
        assert set(samples[:, 0].tolist()) == {0, 1, 2}
        assert set(samples[:, 1].tolist()) == {0, 1}


class TestSampleEdgeCases:
    """Test degenerate sizes and invalid arguments."""

    def test_single_element_permutations(self):
        """n = 1 samples empty vectors that decode to [0]."""
        model = learn(Population.zeros(3, 0, INVERSION))
        model.soften()
        samples = sample_population(model, 4, 0)
        assert samples.length == 0
        assert to_permutations(samples).tolist() == [[0]] * 4

    def test_zero_sample_size(self):
        """Sampling zero individuals gives an empty population."""
        samples = sample_population(_softened_model(), 0, 1)
        assert samples.size == 0
        assert samples.length == 6

    def test_degenerate_row_leaves_output_untouched(self):
        """A zero-weight row fails before any write."""
        model = learn(Population.zeros(0, 3, INVERSION))
        out = Population.from_individuals([[3, 2, 1], [1, 1, 0]], INVERSION)
        before = out.copy()

        with pytest.raises(DegenerateDistributionError):
            sample(model, out, 0)

        assert out == before

    def test_output_length_mismatch(self):
        """Output individuals must have one component per model row."""
        model = _softened_model(length=4)
        with pytest.raises(LengthMismatchError):
            sample(model, Population.zeros(2, 2, INVERSION), 0)

    def test_output_kind_mismatch(self):
        """Samples can only be written to an inversion population."""
        model = _softened_model(length=4)
        with pytest.raises(PopulationKindError):
            sample(model, Population.identity(2, 3), 0)

    def test_sample_overwrites_in_place(self):
        """sample() fills the caller's population."""
        model = DistributionModel(np.array([[0, 5, 0], [4, 0, 0]]), is_softened=True)
        out = Population.zeros(3, 2, INVERSION)
        sample(model, out, 0)
        assert out.tolist() == [[1, 0]] * 3
