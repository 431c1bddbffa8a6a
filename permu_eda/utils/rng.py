"""Explicit random sources for the sampling and population helpers."""

from typing import Union

import numpy as np

RandomSource = Union[np.random.Generator, int, np.integer]


def as_generator(rng: RandomSource) -> np.random.Generator:
    """
    Resolve a caller-supplied random source into a numpy Generator.

    Generators are used as-is so that callers can share state across calls;
    integer seeds build a fresh PCG64 generator.

    Args:
        rng: numpy Generator or integer seed

    Returns:
        numpy Generator

    Raises:
        TypeError: If no usable random source is given
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(int(rng))
    raise TypeError(
        f"An explicit numpy Generator or integer seed is required, got {type(rng).__name__}"
    )
