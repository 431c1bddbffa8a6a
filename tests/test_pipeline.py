"""
Test suite for the learn/sample pipeline step.

Validates:
- One EDAStep pass returns valid permutations of the input length
- Reproducibility under a fixed seed
- Sample size and softening options
- Step creation from configuration
"""

import json
import os
import subprocess

import pytest
import numpy as np

# Import the components to test
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from permu_eda.errors import PopulationKindError
from permu_eda.pipeline import EDAStep, create_step_from_config
from permu_eda.representations.population import INVERSION, Population


class TestEDAStep:
    """Test a single learn/sample pass."""

    def test_run_returns_valid_permutations(self):
        """Sampled individuals are permutations of the input length."""
        step = EDAStep()
        sampled = step.run(Population.random(10, 8, 0), 1)

        sampled.validate()
        assert sampled.size == 10
        assert sampled.length == 8

    def test_run_is_reproducible(self):
        """Equal seeds give equal populations."""
        initial = Population.random(10, 6, 0)
        assert EDAStep().run(initial, 5) == EDAStep().run(initial, 5)

    def test_last_model_is_softened(self):
        """The step keeps the softened model it sampled from."""
        step = EDAStep()
        assert step.last_model is None

        step.run(Population.identity(5, 5), np.random.default_rng(0))

        assert step.last_model.is_softened
        assert step.last_model.row_totals().tolist() == [10, 9, 8, 7]

    def test_unsoftened_step_reproduces_identity(self):
        """Without softening, an identity population can only produce identities."""
        step = EDAStep(soften=False)
        sampled = step.run(Population.identity(6, 5), 3)
        assert sampled == Population.identity(6, 5)
        assert not step.last_model.is_softened

    def test_sample_size(self):
        """The number of sampled permutations can differ from the input size."""
        sampled = EDAStep(sample_size=25).run(Population.random(5, 4, 0), 0)
        assert sampled.size == 25

    def test_negative_sample_size_rejected(self):
        """Sample sizes must be non-negative."""
        with pytest.raises(ValueError):
            EDAStep(sample_size=-1)

    def test_requires_permutations(self):
        """Inversion populations cannot be fed directly."""
        with pytest.raises(PopulationKindError):
            EDAStep().run(Population.zeros(3, 4, INVERSION), 0)

    def test_single_element_permutations(self):
        """Length-1 permutations pass through unchanged."""
        sampled = EDAStep().run(Population.identity(4, 1), 0)
        assert sampled.tolist() == [[0]] * 4


class TestCreateStepFromConfig:
    """Test step creation from configuration."""

    def test_defaults(self):
        """Missing sections fall back to softened, same-size sampling."""
        step = create_step_from_config({})
        assert step.sample_size is None
        assert step.soften is True

    def test_sampling_section(self):
        """Sampling options are read from the 'sampling' section."""
        step = create_step_from_config({'sampling': {'sample_size': 7, 'soften': False}})
        assert step.sample_size == 7
        assert step.soften is False


class TestRunToRunReproducibility:
    """Test that a fixed seed replays the same population in a fresh interpreter."""

    SCRIPT = (
        "import json\n"
        "from permu_eda import EDAStep, Population\n"
        "sampled = EDAStep().run(Population.identity(5, 5), 42)\n"
        "print(json.dumps(sampled.tolist()))\n"
    )

    def test_identity_scenario_matches_fresh_process(self):
        """n = 5, m = 5 identity population sampled with seed 42 is identical across processes."""
        repo_root = Path(__file__).resolve().parent.parent
        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(
            [str(repo_root)] + ([env['PYTHONPATH']] if env.get('PYTHONPATH') else [])
        )

        result = subprocess.run(
            [sys.executable, "-c", self.SCRIPT],
            cwd=str(repo_root),
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )
        from_fresh_process = json.loads(result.stdout)

        step = EDAStep()
        in_process = step.run(Population.identity(5, 5), 42)

        assert in_process.tolist() == from_fresh_process
        in_process.validate()
        assert step.last_model.row_totals().tolist() == [10, 9, 8, 7]
