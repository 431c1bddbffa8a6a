"""
Permutation <-> inversion vector conversion.

Convention (fixed across encode, decode, learn and sample): component i of
the inversion vector of a permutation p counts the elements after position i
that are smaller than p[i]. For a permutation of n elements the vector has
n - 1 components and component i lies in [0, n - 1 - i]; the last component
of the full Lehmer code is always 0 and is not stored.

Example:
    >>> encode([0, 3, 2, 1]).tolist()
    [0, 2, 1]
    >>> decode([0, 2, 1]).tolist()
    [0, 3, 2, 1]
"""

import logging
from typing import Any, Sequence

import numpy as np

from ..errors import LengthMismatchError, PopulationKindError
from .population import INVERSION, PERMUTATION, Population
from .validation import (
    element_dtype,
    inversion_upper_bounds,
    validate_bounded_rows,
    validate_inversion_vector,
    validate_permutation,
    validate_permutation_rows,
)

logger = logging.getLogger(__name__)


def encode(permutation: Sequence[Any]) -> np.ndarray:
    """
    Inversion vector of a permutation.

    Args:
        permutation: Permutation of [0, n), n >= 1

    Returns:
        Inversion vector of length n - 1

    Raises:
        InvalidPermutationError: If the input is not a bijection on [0, n)
        LengthMismatchError: If the permutation is empty
    """
    values = validate_permutation(permutation)
    n = values.shape[0]
    if n == 0:
        raise LengthMismatchError("Cannot encode an empty permutation")

    inversion = np.zeros(n - 1, dtype=element_dtype(n))
    for i in range(n - 1):
        inversion[i] = np.count_nonzero(values[i + 1:] < values[i])
    return inversion


def decode(inversion_vector: Sequence[Any]) -> np.ndarray:
    """
    Permutation encoded by an inversion vector.

    Position i receives the v_i-th smallest value not used by positions
    before it.

    Args:
        inversion_vector: Vector of length n - 1 with component i in [0, n - 1 - i]

    Returns:
        Permutation of [0, n)

    Raises:
        InvalidInversionVectorError: If a component is outside its domain
    """
    values = validate_inversion_vector(inversion_vector)
    n = values.shape[0] + 1

    unused = list(range(n))
    permutation = np.empty(n, dtype=element_dtype(n))
    for i, value in enumerate(values):
        permutation[i] = unused.pop(int(value))
    permutation[n - 1] = unused[0]
    return permutation


def lehmer_encode_rows(permutations: np.ndarray) -> np.ndarray:
    """
    Vectorized encode of a validated int64 (m, n) permutation matrix.

    Returns:
        int64 (m, n - 1) inversion matrix
    """
    codes = permutations.copy()
    for i in range(codes.shape[1]):
        right = codes[:, i + 1:]
        right -= right > codes[:, i:i + 1]
    return codes[:, :-1]


def lehmer_decode_rows(inversions: np.ndarray) -> np.ndarray:
    """
    Vectorized decode of a validated int64 (m, n - 1) inversion matrix.

    Returns:
        int64 (m, n) permutation matrix
    """
    m = inversions.shape[0]
    codes = np.concatenate([inversions, np.zeros((m, 1), dtype=np.int64)], axis=1)
    for i in reversed(range(codes.shape[1])):
        right = codes[:, i + 1:]
        right += right >= codes[:, i:i + 1]
    return codes


def _check_pair(source: Population, source_kind: str, out: Population, out_kind: str) -> None:
    if source.kind != source_kind:
        raise PopulationKindError(f"Expected a {source_kind} population, got {source.kind}")
    if out.kind != out_kind:
        raise PopulationKindError(f"Expected a {out_kind} output population, got {out.kind}")
    if source.size != out.size:
        raise LengthMismatchError(
            f"Population sizes differ: {source.size} {source_kind}s vs {out.size} {out_kind}s"
        )
    if source.permutation_length != out.permutation_length:
        raise LengthMismatchError(
            f"Individual lengths are incompatible: {source_kind} length {source.length}, "
            f"{out_kind} length {out.length}"
        )


def encode_population(permutations: Population, out: Population) -> None:
    """
    Fill `out` with the inversion vectors of `permutations`, position by position.

    Args:
        permutations: Permutation population of length n >= 1
        out: Inversion population of the same size and length n - 1

    Raises:
        PopulationKindError: If either population has the wrong kind
        LengthMismatchError: If sizes or lengths are incompatible
        InvalidPermutationError: If an individual is not a permutation
    """
    _check_pair(permutations, PERMUTATION, out, INVERSION)
    if permutations.length == 0:
        raise LengthMismatchError("Cannot encode empty permutations")

    matrix = permutations.as_array().astype(np.int64)
    validate_permutation_rows(matrix)
    out.replace_all(lehmer_encode_rows(matrix))
    logger.debug(f"Encoded {permutations.size} permutations of length {permutations.length}")


def decode_population(inversions: Population, out: Population) -> None:
    """
    Fill `out` with the permutations encoded by `inversions`, position by position.

    Args:
        inversions: Inversion population of length n - 1
        out: Permutation population (possibly zero-filled scratch) of length n

    Raises:
        PopulationKindError: If either population has the wrong kind
        LengthMismatchError: If sizes or lengths are incompatible
        InvalidInversionVectorError: If an individual is out of domain
    """
    _check_pair(inversions, INVERSION, out, PERMUTATION)

    matrix = inversions.as_array().astype(np.int64)
    validate_bounded_rows(matrix, inversion_upper_bounds(matrix.shape[1]), "inversion vector")
    out.replace_all(lehmer_decode_rows(matrix))
    logger.debug(f"Decoded {inversions.size} inversion vectors of length {inversions.length}")


def to_inversions(permutations: Population) -> Population:
    """Allocate and return the inversion population of `permutations`."""
    out = Population.zeros(permutations.size, max(permutations.length - 1, 0), INVERSION)
    encode_population(permutations, out)
    return out


def to_permutations(inversions: Population) -> Population:
    """Allocate and return the permutation population encoded by `inversions`."""
    out = Population.zeros(inversions.size, inversions.length + 1, PERMUTATION)
    decode_population(inversions, out)
    return out
