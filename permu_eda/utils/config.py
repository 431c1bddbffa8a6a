"""
YAML configuration loading and validation for permu-eda.

Configuration sections:
- sampling: seed, sample_size, soften
- population: size, length, initial ('random' or 'identity')
- problem: type and matrices (see permu_eda.problems)
- logging: level, log_dir, log_to_file
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to a YAML file, or a configuration name looked up
            as <name>.yaml or <name>_config.yaml in the bundled permu_eda/config
            directory, then in ./config

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If no configuration file matches
    """
    config_file = Path(config_path)

    if not config_file.exists():
        possible_paths = [
            CONFIG_DIR / f"{config_path}_config.yaml",
            CONFIG_DIR / f"{config_path}.yaml",
            Path("config") / f"{config_path}_config.yaml",
            Path("config") / f"{config_path}.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                config_file = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}. "
                f"Tried: {[str(p) for p in possible_paths]}"
            )

    logger.info(f"Loading configuration from: {config_file}")

    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}

    # Handle YAML defaults directive if present
    if 'defaults' in config:
        default_config_path = config_file.parent / "default_config.yaml"
        if not default_config_path.exists():
            default_config_path = CONFIG_DIR / "default_config.yaml"
        if default_config_path.exists() and default_config_path.resolve() != config_file.resolve():
            with open(default_config_path, 'r') as f:
                default_config = yaml.safe_load(f) or {}
            config = _deep_merge(default_config, config)
        del config['defaults']

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with override values

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate sampling and population configuration parameters.

    Args:
        config: Configuration dictionary

    Returns:
        True if configuration is valid, False otherwise
    """
    sampling = config.get('sampling', {}) or {}
    population = config.get('population', {}) or {}

    seed = sampling.get('seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        logger.warning(f"Sampling seed must be a non-negative integer, got {seed!r}")
        return False

    sample_size = sampling.get('sample_size')
    if sample_size is not None and (isinstance(sample_size, bool) or not isinstance(sample_size, int) or sample_size < 0):
        logger.warning(f"Sample size must be a non-negative integer, got {sample_size!r}")
        return False

    if not isinstance(sampling.get('soften', True), bool):
        logger.warning("Sampling 'soften' flag must be a boolean")
        return False

    if not sampling.get('soften', True):
        logger.warning("Softening disabled: unobserved values will never be sampled")

    size = population.get('size', 1)
    length = population.get('length', 1)
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        logger.warning(f"Population size must be a positive integer, got {size!r}")
        return False
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        logger.warning(f"Permutation length must be a positive integer, got {length!r}")
        return False

    initial = population.get('initial', 'random')
    if initial not in ('random', 'identity'):
        logger.warning(f"Initial population must be 'random' or 'identity', got {initial!r}")
        return False

    return True
