"""
Shape and value checks shared by the representation codecs and populations.

All checks work on int64 copies of the caller's data so that no check can
write into caller-supplied storage. Row-batch variants validate a whole
population matrix at once and report the first offending individual.
"""

from typing import Any, Sequence, Type

import numpy as np

from ..errors import (
    InvalidInversionVectorError,
    InvalidPermutationError,
    LengthMismatchError,
    PermutationError,
)


def element_dtype(permutation_length: int) -> np.dtype:
    """
    Smallest unsigned integer dtype able to hold every value of a
    permutation of the given length and of its encodings.

    Args:
        permutation_length: Length n of the permutations involved

    Returns:
        One of uint8, uint16, uint32 or uint64
    """
    return np.min_scalar_type(max(permutation_length - 1, 0))


def as_index_array(values: Sequence[Any], error_cls: Type[PermutationError]) -> np.ndarray:
    """
    Convert a one-dimensional integer sequence to an int64 array.

    Args:
        values: Sequence of integers
        error_cls: Error raised when the values are not integers

    Returns:
        New int64 array

    Raises:
        LengthMismatchError: If the values are not one-dimensional
    """
    array = np.asarray(values)
    if array.ndim != 1:
        raise LengthMismatchError(f"Expected a one-dimensional sequence, got shape {array.shape}")
    if array.size == 0:
        return np.zeros(0, dtype=np.int64)
    if not np.issubdtype(array.dtype, np.integer):
        raise error_cls(f"Expected integer values, got dtype {array.dtype}")
    return array.astype(np.int64)


def as_index_matrix(rows: Any, error_cls: Type[PermutationError]) -> np.ndarray:
    """Two-dimensional counterpart of as_index_array."""
    matrix = np.asarray(rows)
    if matrix.ndim != 2:
        raise LengthMismatchError(f"Expected a two-dimensional array, got shape {matrix.shape}")
    if matrix.size == 0:
        return np.zeros(matrix.shape, dtype=np.int64)
    if not np.issubdtype(matrix.dtype, np.integer):
        raise error_cls(f"Expected integer values, got dtype {matrix.dtype}")
    return matrix.astype(np.int64)


def _permutation_rows_mask(matrix: np.ndarray) -> np.ndarray:
    # A row is a bijection on [0, n) exactly when its sorted values are 0..n-1
    n = matrix.shape[1]
    return (np.sort(matrix, axis=1) == np.arange(n)).all(axis=1)


def is_permutation(values: Sequence[Any]) -> bool:
    """Return True if values is a bijection on [0, len(values))."""
    try:
        array = as_index_array(values, InvalidPermutationError)
    except PermutationError:
        return False
    return bool(_permutation_rows_mask(array[np.newaxis, :])[0])


def validate_permutation(values: Sequence[Any]) -> np.ndarray:
    """
    Check that values form a permutation of [0, n).

    Args:
        values: Candidate permutation

    Returns:
        int64 copy of the permutation

    Raises:
        InvalidPermutationError: On duplicate, out-of-range or non-integer values
        LengthMismatchError: If values is not one-dimensional
    """
    array = as_index_array(values, InvalidPermutationError)
    if not _permutation_rows_mask(array[np.newaxis, :])[0]:
        raise InvalidPermutationError(
            f"Not a permutation of [0, {array.shape[0]}): {array.tolist()}"
        )
    return array


def validate_permutation_rows(matrix: np.ndarray) -> None:
    """
    Check every row of an int64 matrix is a permutation.

    Raises:
        InvalidPermutationError: Naming the first offending row
    """
    valid = _permutation_rows_mask(matrix)
    if not valid.all():
        row = int(np.flatnonzero(~valid)[0])
        raise InvalidPermutationError(
            f"Individual {row} is not a permutation of [0, {matrix.shape[1]}): "
            f"{matrix[row].tolist()}"
        )


def inversion_upper_bounds(length: int) -> np.ndarray:
    """
    Inclusive upper bound of every component of an inversion vector.

    Component i of a length-L vector (encoding a permutation of n = L + 1
    elements) lies in [0, n - 1 - i] = [0, L - i].
    """
    return np.arange(length, 0, -1, dtype=np.int64)


def insertion_upper_bounds(length: int) -> np.ndarray:
    """
    Inclusive upper bound of every component of an insertion vector.

    Component j inserts element j + 1 into a partial permutation holding
    j + 1 elements, so it lies in [0, j + 1].
    """
    return np.arange(1, length + 1, dtype=np.int64)


def validate_bounded_rows(matrix: np.ndarray, upper: np.ndarray, what: str) -> None:
    """
    Check 0 <= matrix[:, i] <= upper[i] for every row.

    Args:
        matrix: int64 matrix of encoded individuals
        upper: Inclusive per-position upper bounds
        what: Name of the encoding, used in error messages

    Raises:
        InvalidInversionVectorError: Naming the first offending row and position
    """
    outside = (matrix < 0) | (matrix > upper)
    if outside.any():
        row, position = (int(i) for i in np.argwhere(outside)[0])
        raise InvalidInversionVectorError(
            f"Individual {row} is not a valid {what}: component {position} = "
            f"{matrix[row, position]} outside [0, {upper[position]}]"
        )


def validate_inversion_vector(values: Sequence[Any]) -> np.ndarray:
    """
    Check per-position domain bounds of an inversion vector.

    Args:
        values: Candidate inversion vector of length n - 1

    Returns:
        int64 copy of the vector

    Raises:
        InvalidInversionVectorError: If a component exceeds its bound or is negative
    """
    array = as_index_array(values, InvalidInversionVectorError)
    upper = inversion_upper_bounds(array.shape[0])
    outside = (array < 0) | (array > upper)
    if outside.any():
        position = int(np.flatnonzero(outside)[0])
        raise InvalidInversionVectorError(
            f"Inversion component {position} = {array[position]} outside [0, {upper[position]}]"
        )
    return array


def validate_insertion_vector(values: Sequence[Any]) -> np.ndarray:
    """Insertion-vector counterpart of validate_inversion_vector."""
    array = as_index_array(values, InvalidInversionVectorError)
    upper = insertion_upper_bounds(array.shape[0])
    outside = (array < 0) | (array > upper)
    if outside.any():
        position = int(np.flatnonzero(outside)[0])
        raise InvalidInversionVectorError(
            f"Insertion component {position} = {array[position]} outside [0, {upper[position]}]"
        )
    return array
