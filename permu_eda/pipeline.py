"""
One learn/sample pass over a permutation population.

EDAStep chains the core operations:
permutations -> encode -> learn -> soften -> sample -> decode -> permutations.
It keeps no state between calls apart from the last learned model, which is
exposed for inspection; driving repeated generations is up to the caller.
"""

import logging
from typing import Any, Dict, Optional

from .distribution.model import DistributionModel
from .distribution.sampler import sample_population
from .representations.inversion import to_inversions, to_permutations
from .representations.population import Population
from .utils.rng import RandomSource, as_generator

logger = logging.getLogger(__name__)


class EDAStep:
    """
    Learn an inversion-vector distribution from permutations and sample new ones.

    Attributes:
        sample_size: Number of permutations to sample (None: same as input)
        soften: Whether to apply add-one smoothing before sampling
        last_model: Model used by the most recent run, or None
    """

    def __init__(self, sample_size: Optional[int] = None, soften: bool = True):
        if sample_size is not None and sample_size < 0:
            raise ValueError(f"Sample size must be non-negative, got {sample_size}")
        self.sample_size = sample_size
        self.soften = soften
        self.last_model: Optional[DistributionModel] = None

    def run(self, permutations: Population, rng: RandomSource) -> Population:
        """
        Sample a new permutation population from the distribution of `permutations`.

        Args:
            permutations: Permutation population of length n >= 1
            rng: numpy Generator or integer seed

        Returns:
            New permutation Population of `sample_size` individuals

        Raises:
            PopulationKindError: If `permutations` is not a permutation population
            InvalidPermutationError: If an individual is not a permutation
        """
        generator = as_generator(rng)

        inversions = to_inversions(permutations)
        model = DistributionModel.learn(inversions)
        if self.soften:
            model.soften()

        size = permutations.size if self.sample_size is None else self.sample_size
        sampled = to_permutations(sample_population(model, size, generator))
        self.last_model = model

        logger.info(
            f"Sampled {size} permutations of length {permutations.length} "
            f"from a model learned on {permutations.size} individuals"
        )
        return sampled


def create_step_from_config(config: Dict[str, Any]) -> EDAStep:
    """
    Create an EDAStep instance from configuration dictionary.

    Args:
        config: Configuration dictionary with 'sampling' section

    Returns:
        Configured EDAStep
    """
    sampling_config = config.get('sampling', {}) or {}

    return EDAStep(
        sample_size=sampling_config.get('sample_size'),
        soften=sampling_config.get('soften', True)
    )
