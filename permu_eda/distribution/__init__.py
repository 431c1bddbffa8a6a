"""
Distribution Module for permu-eda.

This module implements the probabilistic model of the EDA core: learning a
position-wise histogram from inversion vectors, add-one softening, and
sampling new inversion vectors from the softened model.
"""

from .model import DistributionModel, learn, soften
from .sampler import sample, sample_population

__all__ = [
    'DistributionModel',
    'learn',
    'soften',
    'sample',
    'sample_population',
]
