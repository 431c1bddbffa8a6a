"""
Permutation-based benchmark problems.

This module implements in-memory objective functions that a search loop can
use to score decoded populations:
- QAP (Quadratic Assignment Problem): sum_ij distance[i][j] * flow[p_i][p_j]
- PFSP (Permutation Flowshop Scheduling Problem): total flow time
- LOP (Linear Ordering Problem): sum_{i<j} matrix[p_i][p_j]

Instances are built from matrices; reading benchmark instance files is left
to the caller.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import numpy as np

from .errors import LengthMismatchError, PopulationKindError
from .representations.population import PERMUTATION, Population

logger = logging.getLogger(__name__)


def _as_matrix(values: Any, name: str) -> np.ndarray:
    matrix = np.asarray(values, dtype=np.int64)
    if matrix.ndim != 2:
        raise LengthMismatchError(f"{name} must be a two-dimensional matrix, got shape {matrix.shape}")
    return matrix


def _as_square_matrix(values: Any, name: str) -> np.ndarray:
    matrix = _as_matrix(values, name)
    if matrix.shape[0] != matrix.shape[1]:
        raise LengthMismatchError(f"{name} must be square, got shape {matrix.shape}")
    return matrix


class Problem(ABC):
    """
    Abstract base class for permutation problems.

    Subclasses expose the instance size and score a validated int64
    (m, size) matrix of permutations.
    """

    name = 'problem'

    @property
    @abstractmethod
    def size(self) -> int:
        """Permutation length every solution must have."""

    @abstractmethod
    def _evaluate_rows(self, solutions: np.ndarray) -> np.ndarray:
        """Fitness of every row of an int64 permutation matrix."""

    def evaluate(self, population: Population) -> np.ndarray:
        """
        Score every individual of a permutation population.

        Args:
            population: Permutation population of length `size`

        Returns:
            int64 array with one fitness value per individual

        Raises:
            PopulationKindError: If the population does not hold permutations
            LengthMismatchError: If the population length differs from the instance size
        """
        if population.kind != PERMUTATION:
            raise PopulationKindError(f"{self.name.upper()} evaluates permutations, got {population.kind}")
        if population.length != self.size:
            raise LengthMismatchError(
                f"{self.name.upper()} instance has size {self.size}, "
                f"solutions have length {population.length}"
            )

        population.validate()
        fitness = self._evaluate_rows(population.as_array().astype(np.int64))
        logger.debug(f"Evaluated {population.size} solutions on {self.name.upper()} of size {self.size}")
        return fitness


class QAP(Problem):
    """Quadratic Assignment Problem: facilities p_i placed at locations i."""

    name = 'qap'

    def __init__(self, distance: Any, flow: Any):
        self.distance = _as_square_matrix(distance, 'QAP distance matrix')
        self.flow = _as_square_matrix(flow, 'QAP flow matrix')
        if self.distance.shape != self.flow.shape:
            raise LengthMismatchError(
                f"QAP distance {self.distance.shape} and flow {self.flow.shape} shapes differ"
            )

    @property
    def size(self) -> int:
        return self.distance.shape[0]

    def _evaluate_rows(self, solutions: np.ndarray) -> np.ndarray:
        # flow[p_i][p_j] for every solution, shape (m, n, n)
        permuted_flow = self.flow[solutions[:, :, np.newaxis], solutions[:, np.newaxis, :]]
        return (self.distance[np.newaxis, :, :] * permuted_flow).sum(axis=(1, 2))


class PFSP(Problem):
    """
    Permutation Flowshop Scheduling Problem, total flow time criterion.

    processing_times[machine][job] is the time `job` spends on `machine`;
    every job visits the machines in order, and a solution fixes the job order.
    """

    name = 'pfsp'

    def __init__(self, processing_times: Any):
        self.processing_times = _as_matrix(processing_times, 'PFSP processing times')

    @property
    def size(self) -> int:
        return self.processing_times.shape[1]

    @property
    def n_machines(self) -> int:
        return self.processing_times.shape[0]

    def _evaluate_rows(self, solutions: np.ndarray) -> np.ndarray:
        m = solutions.shape[0]
        completion = np.zeros((m, self.n_machines), dtype=np.int64)
        total_flow_time = np.zeros(m, dtype=np.int64)

        for position in range(solutions.shape[1]):
            times = self.processing_times[:, solutions[:, position]].T
            completion[:, 0] += times[:, 0]
            for machine in range(1, self.n_machines):
                completion[:, machine] = (
                    np.maximum(completion[:, machine], completion[:, machine - 1]) + times[:, machine]
                )
            total_flow_time += completion[:, -1]

        return total_flow_time


class LOP(Problem):
    """Linear Ordering Problem: sum of matrix entries above the permuted diagonal."""

    name = 'lop'

    def __init__(self, matrix: Any):
        self.matrix = _as_square_matrix(matrix, 'LOP matrix')

    @property
    def size(self) -> int:
        return self.matrix.shape[0]

    def _evaluate_rows(self, solutions: np.ndarray) -> np.ndarray:
        permuted = self.matrix[solutions[:, :, np.newaxis], solutions[:, np.newaxis, :]]
        return np.triu(permuted, k=1).sum(axis=(1, 2))


PROBLEM_TYPES = {
    'qap': QAP,
    'pfsp': PFSP,
    'lop': LOP,
}


def create_problem_from_config(config: Dict[str, Any]) -> Optional[Problem]:
    """
    Create a Problem instance from configuration dictionary.

    Args:
        config: Configuration dictionary with an optional 'problem' section:
            type: One of 'qap', 'pfsp', 'lop'
            distance, flow: QAP matrices
            processing_times: PFSP machines x jobs matrix
            matrix: LOP matrix

    Returns:
        Problem instance, or None when no problem is configured

    Raises:
        ValueError: If the problem type is unknown or its matrices are missing
    """
    problem_config = config.get('problem') or {}
    problem_type = problem_config.get('type')
    if not problem_type:
        return None

    problem_type = str(problem_type).lower()
    if problem_type not in PROBLEM_TYPES:
        raise ValueError(f"Unknown problem type '{problem_type}', expected one of {sorted(PROBLEM_TYPES)}")

    try:
        if problem_type == 'qap':
            problem = QAP(problem_config['distance'], problem_config['flow'])
        elif problem_type == 'pfsp':
            problem = PFSP(problem_config['processing_times'])
        else:
            problem = LOP(problem_config['matrix'])
    except KeyError as e:
        raise ValueError(f"Missing matrix {e} for {problem_type.upper()} problem") from e

    logger.info(f"Created {problem_type.upper()} problem of size {problem.size}")
    return problem
