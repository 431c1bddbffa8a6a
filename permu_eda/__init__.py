"""
permu-eda: combinatorial core for permutation-based estimation-of-distribution algorithms

This package converts permutations to inversion vectors, learns a
position-wise histogram model from a population of them, softens it, and
samples new inversion vectors that always decode to valid permutations.

Main Components:
- representations: permutations, the Population store, inversion and insertion codecs
- distribution: histogram model (learn, soften) and the sampler
- problems: QAP, PFSP and LOP objective functions
- pipeline: one learn/sample pass over a permutation population
- utils: logging, configuration, random sources, diagnostic plots

Usage:
    from permu_eda import Population, to_inversions, learn, sample_population
"""

__version__ = "0.1.0"

from .errors import (
    PermutationError,
    LengthMismatchError,
    InvalidPermutationError,
    InvalidInversionVectorError,
    PopulationKindError,
    DegenerateDistributionError,
)
from .representations import (
    Population,
    PERMUTATION,
    INVERSION,
    INSERTION,
    encode,
    decode,
    encode_population,
    decode_population,
    to_inversions,
    to_permutations,
    rim_encode,
    rim_decode,
)
from .distribution import DistributionModel, learn, soften, sample, sample_population
from .pipeline import EDAStep

__all__ = [
    # Errors
    'PermutationError',
    'LengthMismatchError',
    'InvalidPermutationError',
    'InvalidInversionVectorError',
    'PopulationKindError',
    'DegenerateDistributionError',

    # Representations
    'Population',
    'PERMUTATION',
    'INVERSION',
    'INSERTION',
    'encode',
    'decode',
    'encode_population',
    'decode_population',
    'to_inversions',
    'to_permutations',
    'rim_encode',
    'rim_decode',

    # Distribution
    'DistributionModel',
    'learn',
    'soften',
    'sample',
    'sample_population',

    # Pipeline
    'EDAStep',
]
