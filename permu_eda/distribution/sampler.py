"""
Sampling of inversion vectors from a DistributionModel.

Every position of every output individual is drawn independently, with
probability proportional to the in-domain weights of that position's row.
Because values are only ever drawn from a row's own domain, every sampled
vector decodes to a valid permutation.

The random source is always supplied by the caller, so a fixed seed replays
the same population and independent generators can be used concurrently.
"""

import logging

import numpy as np

from ..errors import DegenerateDistributionError, LengthMismatchError, PopulationKindError
from ..representations.population import INVERSION, Population
from ..utils.rng import RandomSource, as_generator
from .model import DistributionModel

logger = logging.getLogger(__name__)


def sample(model: DistributionModel, out: Population, rng: RandomSource) -> None:
    """
    Overwrite `out` with inversion vectors drawn from `model`.

    Draws are made position by position, each position for all individuals
    at once, so the output only depends on the model and the generator state.

    Args:
        model: Distribution to sample from, normally softened beforehand
        out: Inversion population whose length equals the model's row count
        rng: numpy Generator or integer seed

    Raises:
        PopulationKindError: If `out` is not an inversion population
        LengthMismatchError: If `out` has the wrong individual length
        DegenerateDistributionError: If some row has zero total weight
    """
    generator = as_generator(rng)

    if out.kind != INVERSION:
        raise PopulationKindError(f"Samples are written to an inversion population, got {out.kind}")
    if out.length != model.n_positions:
        raise LengthMismatchError(
            f"Output individuals have length {out.length}, "
            f"model has {model.n_positions} positions"
        )

    totals = model.row_totals()
    empty_rows = np.flatnonzero(totals == 0)
    if empty_rows.size:
        raise DegenerateDistributionError(
            f"Distribution rows {empty_rows.tolist()} have zero total weight; "
            f"the model was not softened or is corrupt"
        )

    if not model.is_softened:
        logger.warning(
            "Sampling from an unsoftened distribution: values never observed cannot be drawn"
        )

    samples = np.empty((out.size, model.n_positions), dtype=np.int64)
    for position in range(model.n_positions):
        weights = model.row(position).astype(np.float64)
        samples[:, position] = generator.choice(
            model.domain_size(position),
            size=out.size,
            p=weights / totals[position]
        )

    out.replace_all(samples)
    logger.debug(f"Sampled {out.size} inversion vectors over {model.n_positions} positions")


def sample_population(model: DistributionModel, size: int, rng: RandomSource) -> Population:
    """
    Allocate an inversion population of `size` individuals and fill it from `model`.

    Args:
        model: Distribution to sample from
        size: Number of individuals to draw
        rng: numpy Generator or integer seed

    Returns:
        New inversion Population
    """
    out = Population.zeros(size, model.n_positions, INVERSION)
    sample(model, out, rng)
    return out
