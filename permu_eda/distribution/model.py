"""
Position-wise histogram model over inversion vectors.

The model for permutations of n elements is a single rectangular
(n - 1, n) count matrix. Row i only uses its first domain_size(i) = n - i
cells, the values an inversion component at position i can take; the
remaining cells are structurally unused and never read.

Lifecycle: a model is created by `learn`, optionally smoothed once by
`soften` (in place, irreversible) and then consumed read-only by the
sampler.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd

from ..errors import LengthMismatchError, PopulationKindError
from ..representations.population import INVERSION, Population

logger = logging.getLogger(__name__)


class DistributionModel:
    """
    Histogram of inversion-vector values, one row per position.

    Attributes:
        population_size: Number of individuals the counts were learned from
        is_softened: Whether add-one smoothing has been applied
    """

    def __init__(
        self,
        counts: np.ndarray,
        population_size: Optional[int] = None,
        is_softened: bool = False
    ):
        """
        Initialize a model from a count matrix.

        Args:
            counts: Array of shape (n - 1, n) with non-negative counts
            population_size: Population size the counts stem from (default:
                the in-domain sum of the first row, or 0 for empty models)
            is_softened: Whether the counts already include smoothing

        Raises:
            LengthMismatchError: If counts does not have shape (n - 1, n)
            ValueError: If a count is negative
        """
        counts = np.asarray(counts)
        if counts.ndim != 2 or counts.shape[1] != counts.shape[0] + 1:
            raise LengthMismatchError(
                f"Distribution counts must have shape (n - 1, n), got {counts.shape}"
            )
        if counts.size and counts.min() < 0:
            raise ValueError("Distribution counts must be non-negative")

        self._counts = np.array(counts, dtype=np.int64)
        self.is_softened = is_softened

        if population_size is None:
            population_size = int(self._counts[0].sum()) if self.n_positions else 0
        self.population_size = population_size

    @classmethod
    def learn(cls, population: Population) -> 'DistributionModel':
        """
        Tally, for every position, how many individuals hold each value.

        Args:
            population: Inversion population of size m and length n - 1

        Returns:
            Unsoftened model whose rows each sum to m

        Raises:
            PopulationKindError: If the population does not hold inversion vectors
        """
        if population.kind != INVERSION:
            raise PopulationKindError(
                f"A distribution can only be learned from an inversion population, got {population.kind}"
            )

        data = population.as_array().astype(np.int64)
        n_positions = population.length
        width = n_positions + 1

        counts = np.zeros((n_positions, width), dtype=np.int64)
        for position in range(n_positions):
            counts[position] = np.bincount(data[:, position], minlength=width)

        logger.debug(
            f"Learned distribution over {n_positions} positions from {population.size} individuals"
        )
        return cls(counts, population_size=population.size)

    @property
    def n_positions(self) -> int:
        """Number of rows, i.e. inversion-vector length n - 1."""
        return self._counts.shape[0]

    @property
    def permutation_length(self) -> int:
        """Length n of the permutations the model describes."""
        return self._counts.shape[1]

    @property
    def counts(self) -> np.ndarray:
        """Copy of the full rectangular count matrix."""
        return self._counts.copy()

    def domain_size(self, position: int) -> int:
        """
        Number of values an inversion component at `position` can take.

        Raises:
            IndexError: If position is not a row of the model
        """
        if not 0 <= position < self.n_positions:
            raise IndexError(f"Position {position} out of range for {self.n_positions} positions")
        return self.permutation_length - position

    def domain_mask(self) -> np.ndarray:
        """Boolean (n - 1, n) matrix marking the in-domain cells."""
        columns = np.arange(self.permutation_length)
        sizes = self.permutation_length - np.arange(self.n_positions)
        return columns[np.newaxis, :] < sizes[:, np.newaxis]

    def row(self, position: int) -> np.ndarray:
        """Copy of the in-domain counts of one position."""
        return self._counts[position, :self.domain_size(position)].copy()

    def row_totals(self) -> np.ndarray:
        """In-domain sum of every row."""
        return np.where(self.domain_mask(), self._counts, 0).sum(axis=1)

    def probabilities(self) -> np.ndarray:
        """
        Row-normalised in-domain weights.

        Returns:
            Float (n - 1, n) matrix; out-of-domain cells and rows with zero
            total weight are NaN
        """
        mask = self.domain_mask()
        totals = self.row_totals().astype(np.float64)[:, np.newaxis]
        probabilities = np.full(self._counts.shape, np.nan)
        np.divide(self._counts, totals, out=probabilities, where=mask & (totals > 0))
        return probabilities

    def soften(self) -> None:
        """
        Add one to every in-domain cell, in place.

        Guarantees strictly positive sampling weight for every value of every
        position. The original counts are not kept. A model is softened at
        most once; later calls only log a warning.
        """
        if self.is_softened:
            logger.warning("Distribution model is already softened, leaving counts unchanged")
            return

        self._counts += self.domain_mask()
        self.is_softened = True
        logger.debug(f"Softened distribution over {self.n_positions} positions")

    def softened(self) -> 'DistributionModel':
        """Smoothed copy of this model; the model itself is left intact."""
        model = self.copy()
        model.soften()
        return model

    def copy(self) -> 'DistributionModel':
        return DistributionModel(
            self._counts.copy(),
            population_size=self.population_size,
            is_softened=self.is_softened
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistributionModel):
            return NotImplemented
        mask = self.domain_mask()
        return (
            self._counts.shape == other._counts.shape
            and self.is_softened == other.is_softened
            and np.array_equal(self._counts[mask], other._counts[mask])
        )

    __hash__ = None

    def to_frame(self) -> pd.DataFrame:
        """Diagnostic table of counts; out-of-domain cells are NaN."""
        values = np.where(self.domain_mask(), self._counts, np.nan)
        frame = pd.DataFrame(values, columns=list(range(self.permutation_length)))
        frame.index.name = 'position'
        frame.columns.name = 'value'
        return frame

    def __str__(self) -> str:
        rows = ',\n'.join(str(self.row(position).tolist()) for position in range(self.n_positions))
        state = 'softened' if self.is_softened else 'raw'
        return (
            f"[{rows}]\n"
            f"Inversion distribution ({state}). Shape: {self.n_positions},{self.permutation_length}"
        )

    def __repr__(self) -> str:
        return (
            f"DistributionModel(n_positions={self.n_positions}, "
            f"population_size={self.population_size}, is_softened={self.is_softened})"
        )


def learn(population: Population) -> DistributionModel:
    """Learn a DistributionModel from an inversion population."""
    return DistributionModel.learn(population)


def soften(model: DistributionModel) -> None:
    """Apply add-one smoothing to `model` in place."""
    model.soften()
