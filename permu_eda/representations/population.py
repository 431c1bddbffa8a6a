"""
Fixed-size, fixed-length populations of permutations or their encodings.

A Population owns one contiguous (size, length) numpy array. Individuals are
validated for their kind whenever they enter the store, so every population
is well-formed at all times; the only exception is a zero-filled permutation
population, which is scratch storage waiting to be overwritten by a decode.
"""

from typing import Any, Iterator, List, Sequence

import numpy as np
import pandas as pd

from ..errors import (
    InvalidInversionVectorError,
    InvalidPermutationError,
    LengthMismatchError,
    PopulationKindError,
)
from ..utils.rng import RandomSource, as_generator
from .validation import (
    as_index_array,
    as_index_matrix,
    element_dtype,
    insertion_upper_bounds,
    inversion_upper_bounds,
    validate_bounded_rows,
    validate_permutation_rows,
)

PERMUTATION = 'permutation'
INVERSION = 'inversion'
INSERTION = 'insertion'

KINDS = (PERMUTATION, INVERSION, INSERTION)


def validate_rows(matrix: np.ndarray, kind: str) -> None:
    """
    Check every row of an int64 matrix is a well-formed individual of kind.

    Raises:
        InvalidPermutationError: For a malformed permutation row
        InvalidInversionVectorError: For an out-of-domain encoded row
    """
    if kind == PERMUTATION:
        validate_permutation_rows(matrix)
    elif kind == INVERSION:
        validate_bounded_rows(matrix, inversion_upper_bounds(matrix.shape[1]), 'inversion vector')
    elif kind == INSERTION:
        validate_bounded_rows(matrix, insertion_upper_bounds(matrix.shape[1]), 'insertion vector')
    else:
        raise PopulationKindError(f"Unknown population kind '{kind}', expected one of {KINDS}")


class Population:
    """
    Homogeneous collection of individuals stored as a (size, length) matrix.

    The element dtype is the narrowest unsigned integer able to hold the
    values of the underlying permutations, i.e. it depends on the permutation
    length n (= length for permutations, length + 1 for encodings).
    """

    def __init__(self, data: Any, kind: str = PERMUTATION):
        """
        Wrap a matrix of individuals after validating every row.

        Args:
            data: Two-dimensional integer array of shape (size, length)
            kind: One of 'permutation', 'inversion', 'insertion'

        Raises:
            PopulationKindError: If kind is unknown
            LengthMismatchError: If data is not two-dimensional
            InvalidPermutationError: If a permutation row is malformed or not integer
            InvalidInversionVectorError: If an encoded row is out of domain or not integer
        """
        _check_kind(kind)
        error_cls = InvalidPermutationError if kind == PERMUTATION else InvalidInversionVectorError
        matrix = as_index_matrix(data, error_cls)
        validate_rows(matrix, kind)
        self._store(matrix, kind)

    @classmethod
    def _trusted(cls, data: np.ndarray, kind: str) -> 'Population':
        # Rows already known to be well-formed, or permutation scratch
        population = cls.__new__(cls)
        population._store(data, kind)
        return population

    def _store(self, data: np.ndarray, kind: str) -> None:
        self.kind = kind
        self._data = np.array(data, dtype=element_dtype(self._permutation_length(data.shape[1])), order="C")

    def _permutation_length(self, length: int) -> int:
        return length if self.kind == PERMUTATION else length + 1

    @classmethod
    def identity(cls, size: int, length: int) -> 'Population':
        """
        Population of `size` identity permutations of `length` elements.

        Example:
            >>> Population.identity(2, 3).tolist()
            [[0, 1, 2], [0, 1, 2]]
        """
        _check_shape(size, length)
        data = np.tile(np.arange(length), (size, 1))
        return cls._trusted(data, PERMUTATION)

    @classmethod
    def zeros(cls, size: int, length: int, kind: str = INVERSION) -> 'Population':
        """
        Zero-filled population.

        For encodings this is a ready-to-use population (the all-zero vector
        encodes the identity). For permutations it is scratch storage only,
        valid as a permutation population just when length <= 1.
        """
        _check_shape(size, length)
        _check_kind(kind)
        return cls._trusted(np.zeros((size, length), dtype=np.int64), kind)

    @classmethod
    def from_individuals(cls, individuals: Sequence[Sequence[Any]], kind: str = PERMUTATION) -> 'Population':
        """
        Build a population from explicit individuals.

        Args:
            individuals: Sequence of equally long integer sequences
            kind: Kind of the individuals

        Returns:
            New Population holding copies of the individuals

        Raises:
            LengthMismatchError: If individuals differ in length
            InvalidPermutationError: If a permutation individual is malformed
            InvalidInversionVectorError: If an encoded individual is out of domain
        """
        individuals = list(individuals)
        if not individuals:
            raise LengthMismatchError("Cannot infer individual length from an empty list")

        error_cls = InvalidPermutationError if kind == PERMUTATION else InvalidInversionVectorError
        rows = [as_index_array(individual, error_cls) for individual in individuals]

        length = rows[0].shape[0]
        for index, row in enumerate(rows):
            if row.shape[0] != length:
                raise LengthMismatchError(
                    f"Individual {index} has length {row.shape[0]}, expected {length}"
                )

        matrix = np.stack(rows)
        validate_rows(matrix, kind)
        return cls._trusted(matrix, kind)

    @classmethod
    def random(cls, size: int, length: int, rng: RandomSource) -> 'Population':
        """
        Population of uniformly random permutations.

        Args:
            size: Number of individuals
            length: Permutation length
            rng: numpy Generator or integer seed

        Returns:
            New permutation Population
        """
        _check_shape(size, length)
        generator = as_generator(rng)
        data = generator.permuted(np.tile(np.arange(length), (size, 1)), axis=1)
        return cls._trusted(data, PERMUTATION)

    @property
    def size(self) -> int:
        """Number of individuals."""
        return self._data.shape[0]

    @property
    def length(self) -> int:
        """Length of every individual."""
        return self._data.shape[1]

    @property
    def permutation_length(self) -> int:
        """Length n of the permutations this population holds or encodes."""
        return self._permutation_length(self.length)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __len__(self) -> int:
        return self.size

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise TypeError(f"Population indices must be integers, got {type(index).__name__}")
        if not 0 <= index < self.size:
            raise IndexError(f"Individual index {index} out of range for population of size {self.size}")
        return int(index)

    def __getitem__(self, index: int) -> np.ndarray:
        """Copy of the individual at index."""
        return self._data[self._check_index(index)].copy()

    def __setitem__(self, index: int, individual: Sequence[Any]) -> None:
        """
        Replace the individual at index after validating it.

        Raises:
            IndexError: If index is out of range
            LengthMismatchError: If the individual has the wrong length
            InvalidPermutationError: If a permutation individual is malformed
            InvalidInversionVectorError: If an encoded individual is out of domain
        """
        position = self._check_index(index)
        error_cls = InvalidPermutationError if self.kind == PERMUTATION else InvalidInversionVectorError
        row = as_index_array(individual, error_cls)
        if row.shape[0] != self.length:
            raise LengthMismatchError(f"Individual has length {row.shape[0]}, expected {self.length}")
        validate_rows(row[np.newaxis, :], self.kind)
        self._data[position] = row

    def __iter__(self) -> Iterator[np.ndarray]:
        for row in self._data:
            yield row.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Population):
            return NotImplemented
        return self.kind == other.kind and np.array_equal(self._data, other._data)

    __hash__ = None

    def copy(self) -> 'Population':
        """Independent copy of this population."""
        return Population._trusted(self._data, self.kind)

    def as_array(self) -> np.ndarray:
        """Copy of the backing (size, length) matrix."""
        return self._data.copy()

    def tolist(self) -> List[List[int]]:
        return self._data.tolist()

    def replace_all(self, rows: Any) -> None:
        """
        Overwrite every individual at once.

        The whole matrix is validated before the write, so a failure leaves
        the population untouched.

        Raises:
            LengthMismatchError: If rows does not have this population's shape
            InvalidPermutationError: If a permutation row is malformed
            InvalidInversionVectorError: If an encoded row is out of domain
        """
        error_cls = InvalidPermutationError if self.kind == PERMUTATION else InvalidInversionVectorError
        matrix = as_index_matrix(rows, error_cls)
        if matrix.shape != self._data.shape:
            raise LengthMismatchError(
                f"Expected rows of shape {self._data.shape}, got {matrix.shape}"
            )
        validate_rows(matrix, self.kind)
        self._data[...] = matrix

    def validate(self) -> None:
        """Raise if any individual is malformed for this population's kind."""
        validate_rows(self._data.astype(np.int64), self.kind)

    def to_frame(self) -> pd.DataFrame:
        """Diagnostic table: one row per individual, one column per position."""
        frame = pd.DataFrame(
            self._data,
            columns=[f'pos_{i}' for i in range(self.length)],
        )
        frame.index.name = 'individual'
        return frame

    def __str__(self) -> str:
        rows = ',\n'.join(str(row) for row in self._data.tolist())
        return f"[{rows}]\n{self.kind.capitalize()} population. Shape: {self.size},{self.length}"

    def __repr__(self) -> str:
        return f"Population(kind={self.kind!r}, size={self.size}, length={self.length}, dtype={self.dtype})"


def _check_shape(size: int, length: int) -> None:
    if size < 0 or length < 0:
        raise ValueError(f"Population size and length must be non-negative, got ({size}, {length})")


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise PopulationKindError(f"Unknown population kind '{kind}', expected one of {KINDS}")
