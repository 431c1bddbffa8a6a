"""
Permutation <-> insertion vector conversion (repeated insertion model).

A permutation of n elements is built by starting from [0] and inserting the
elements 1, ..., n - 1 in order; component e - 1 of the insertion vector is
the index at which element e is inserted, so it lies in [0, e].

Example:
    >>> rim_decode([0, 2, 2]).tolist()
    [1, 0, 3, 2]
    >>> rim_encode([1, 0, 3, 2]).tolist()
    [0, 2, 2]
"""

import logging
from typing import Any, List, Sequence

import numpy as np

from ..errors import LengthMismatchError, PopulationKindError
from .population import INSERTION, PERMUTATION, Population
from .validation import (
    element_dtype,
    insertion_upper_bounds,
    validate_bounded_rows,
    validate_insertion_vector,
    validate_permutation,
    validate_permutation_rows,
)

logger = logging.getLogger(__name__)


def _encode_row(values: List[int]) -> List[int]:
    remaining = list(values)
    insertion = [0] * (len(values) - 1)
    # Undo the insertions from the last element back to 1
    for element in range(len(values) - 1, 0, -1):
        index = remaining.index(element)
        insertion[element - 1] = index
        del remaining[index]
    return insertion


def _decode_row(values: List[int]) -> List[int]:
    permutation = [0]
    for element, index in enumerate(values, start=1):
        permutation.insert(index, element)
    return permutation


def rim_encode(permutation: Sequence[Any]) -> np.ndarray:
    """
    Insertion vector of a permutation.

    Raises:
        InvalidPermutationError: If the input is not a bijection on [0, n)
        LengthMismatchError: If the permutation is empty
    """
    values = validate_permutation(permutation)
    n = values.shape[0]
    if n == 0:
        raise LengthMismatchError("Cannot encode an empty permutation")
    return np.array(_encode_row(values.tolist()), dtype=element_dtype(n))


def rim_decode(insertion_vector: Sequence[Any]) -> np.ndarray:
    """
    Permutation built by the insertions described by an insertion vector.

    Raises:
        InvalidInversionVectorError: If component e - 1 is outside [0, e]
    """
    values = validate_insertion_vector(insertion_vector)
    n = values.shape[0] + 1
    return np.array(_decode_row(values.tolist()), dtype=element_dtype(n))


def rim_encode_population(permutations: Population, out: Population) -> None:
    """
    Fill `out` with the insertion vectors of `permutations`.

    Raises:
        PopulationKindError: If either population has the wrong kind
        LengthMismatchError: If sizes or lengths are incompatible
        InvalidPermutationError: If an individual is not a permutation
    """
    if permutations.kind != PERMUTATION or out.kind != INSERTION:
        raise PopulationKindError(
            f"Expected permutation -> insertion populations, got {permutations.kind} -> {out.kind}"
        )
    if permutations.size != out.size or permutations.length != out.length + 1:
        raise LengthMismatchError(
            f"Cannot encode a {permutations.size}x{permutations.length} permutation population "
            f"into a {out.size}x{out.length} insertion population"
        )

    matrix = permutations.as_array().astype(np.int64)
    validate_permutation_rows(matrix)
    rows = [_encode_row(row) for row in matrix.tolist()]
    out.replace_all(np.array(rows, dtype=np.int64).reshape(out.size, out.length))
    logger.debug(f"RIM-encoded {permutations.size} permutations of length {permutations.length}")


def rim_decode_population(insertions: Population, out: Population) -> None:
    """
    Fill `out` with the permutations described by `insertions`.

    Raises:
        PopulationKindError: If either population has the wrong kind
        LengthMismatchError: If sizes or lengths are incompatible
        InvalidInversionVectorError: If an individual is out of domain
    """
    if insertions.kind != INSERTION or out.kind != PERMUTATION:
        raise PopulationKindError(
            f"Expected insertion -> permutation populations, got {insertions.kind} -> {out.kind}"
        )
    if insertions.size != out.size or insertions.length + 1 != out.length:
        raise LengthMismatchError(
            f"Cannot decode a {insertions.size}x{insertions.length} insertion population "
            f"into a {out.size}x{out.length} permutation population"
        )

    matrix = insertions.as_array().astype(np.int64)
    validate_bounded_rows(matrix, insertion_upper_bounds(matrix.shape[1]), 'insertion vector')
    rows = [_decode_row(row) for row in matrix.tolist()]
    out.replace_all(np.array(rows, dtype=np.int64).reshape(out.size, out.length))
    logger.debug(f"RIM-decoded {insertions.size} insertion vectors of length {insertions.length}")
