"""
Single-permutation constructors.

Permutations are one-dimensional numpy arrays using the narrowest unsigned
dtype that fits their length (see validation.element_dtype).
"""

from typing import Any, Sequence

import numpy as np

from ..utils.rng import RandomSource, as_generator
from .validation import element_dtype, is_permutation, validate_permutation

__all__ = [
    'identity',
    'from_sequence',
    'zeros',
    'random_permutation',
    'invert',
    'is_permutation',
]


def identity(length: int) -> np.ndarray:
    """Identity permutation (0, 1, ..., length - 1)."""
    if length < 0:
        raise ValueError(f"Permutation length must be non-negative, got {length}")
    return np.arange(length, dtype=element_dtype(length))


def from_sequence(values: Sequence[Any]) -> np.ndarray:
    """
    Build a permutation from an explicit sequence.

    Args:
        values: Sequence holding every value of [0, n) exactly once

    Returns:
        Permutation array in the narrowest dtype for n

    Raises:
        InvalidPermutationError: If values is not a bijection on [0, n)
    """
    array = validate_permutation(values)
    return array.astype(element_dtype(array.shape[0]))


def zeros(length: int) -> np.ndarray:
    """
    Zero-filled scratch buffer of permutation width.

    Only a valid permutation when length <= 1; meant to be overwritten by a
    decode.
    """
    if length < 0:
        raise ValueError(f"Permutation length must be non-negative, got {length}")
    return np.zeros(length, dtype=element_dtype(length))


def random_permutation(length: int, rng: RandomSource) -> np.ndarray:
    """
    Draw a uniformly random permutation.

    Args:
        length: Permutation length
        rng: numpy Generator or integer seed

    Returns:
        Random permutation array
    """
    generator = as_generator(rng)
    return generator.permutation(identity(length))


def invert(permutation: Sequence[Any]) -> np.ndarray:
    """
    Inverse permutation: result[permutation[i]] = i.

    Raises:
        InvalidPermutationError: If the input is not a permutation
    """
    array = validate_permutation(permutation)
    inverse = np.empty_like(array)
    inverse[array] = np.arange(array.shape[0])
    return inverse.astype(element_dtype(array.shape[0]))
