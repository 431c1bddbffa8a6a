"""
Utilities module for permu-eda.

This module provides logging setup, YAML configuration loading, explicit
random sources, and diagnostic plots.
"""

from .config import load_config, validate_config
from .logging import setup_logging, get_logger
from .rng import as_generator, RandomSource

__all__ = [
    # Configuration
    'load_config',
    'validate_config',

    # Logging
    'setup_logging',
    'get_logger',

    # Random sources
    'as_generator',
    'RandomSource',
]
