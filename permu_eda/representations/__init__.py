"""
Representations Module for permu-eda.

This module holds the permutation representations and their codecs:
permutation constructors, the fixed-size Population store, the inversion
vector codec used by the distribution model, and the repeated-insertion
(RIM) codec.
"""

from .validation import element_dtype, is_permutation, validate_permutation, validate_inversion_vector
from .permutation import identity, from_sequence, zeros, random_permutation, invert
from .population import Population, PERMUTATION, INVERSION, INSERTION, KINDS
from .inversion import encode, decode, encode_population, decode_population, to_inversions, to_permutations
from .rim import rim_encode, rim_decode, rim_encode_population, rim_decode_population

__all__ = [
    # Validation
    'element_dtype',
    'is_permutation',
    'validate_permutation',
    'validate_inversion_vector',

    # Permutations
    'identity',
    'from_sequence',
    'zeros',
    'random_permutation',
    'invert',

    # Population
    'Population',
    'PERMUTATION',
    'INVERSION',
    'INSERTION',
    'KINDS',

    # Inversion codec
    'encode',
    'decode',
    'encode_population',
    'decode_population',
    'to_inversions',
    'to_permutations',

    # Insertion codec
    'rim_encode',
    'rim_decode',
    'rim_encode_population',
    'rim_decode_population',
]
