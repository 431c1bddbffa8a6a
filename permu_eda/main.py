#!/usr/bin/env python3
"""
permu-eda command-line entry point.

Builds an initial permutation population, runs one learn/sample step and
prints the populations, the learned model and, when a problem is configured,
the fitness of the sampled permutations.

Usage:
    python -m permu_eda.main --config default
    python -m permu_eda.main --size 20 --length 8 --seed 7 --initial identity
    python -m permu_eda.main --config-path my_run.yaml --plot results/model.png
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from .errors import PermutationError
from .pipeline import EDAStep, create_step_from_config
from .problems import create_problem_from_config
from .representations.population import Population
from .utils.config import load_config, validate_config
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="permu-eda: learn an inversion-vector distribution and sample permutations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default configuration
  python -m permu_eda.main --config default

  # Identity population of 5 permutations of length 5, fixed seed
  python -m permu_eda.main --size 5 --length 5 --initial identity --seed 42
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default="default",
        help="Configuration name (without .yaml extension) (default: default)"
    )

    parser.add_argument(
        "--config-path",
        type=str,
        default=None,
        help="Full path to configuration file (overrides --config)"
    )

    parser.add_argument("--size", "-m", type=int, default=None, help="Population size (overrides config)")
    parser.add_argument("--length", "-n", type=int, default=None, help="Permutation length (overrides config)")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed (overrides config)")

    parser.add_argument(
        "--initial",
        type=str,
        default=None,
        choices=["random", "identity"],
        help="Initial population (overrides config)"
    )

    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Write a heatmap of the learned distribution to this path"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: logging.level from config, else INFO)"
    )

    return parser.parse_args(argv)


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Copy command-line overrides into the configuration."""
    population = config.setdefault('population', {})
    sampling = config.setdefault('sampling', {})

    if args.size is not None:
        population['size'] = args.size
    if args.length is not None:
        population['length'] = args.length
    if args.initial is not None:
        population['initial'] = args.initial
    if args.seed is not None:
        sampling['seed'] = args.seed

    return config


def build_initial_population(config: Dict[str, Any], seed: int) -> Population:
    """Initial permutation population described by the 'population' section."""
    population_config = config.get('population', {})
    size = population_config.get('size', 10)
    length = population_config.get('length', 10)

    if population_config.get('initial', 'random') == 'identity':
        return Population.identity(size, length)
    return Population.random(size, length, seed)


def run(args: argparse.Namespace) -> int:
    """
    Main execution function.

    Returns:
        Process exit code
    """
    setup_logging(log_level=args.log_level or "INFO")

    try:
        config = load_config(args.config_path or args.config)
    except FileNotFoundError as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    logging_config = config.get('logging') or {}
    setup_logging(
        log_dir=logging_config.get('log_dir', 'results/logs'),
        log_level=args.log_level or logging_config.get('level', 'INFO'),
        log_to_file=bool(logging_config.get('log_to_file', False))
    )

    config = apply_overrides(config, args)
    if not validate_config(config):
        logger.error("Invalid configuration, aborting")
        return 1

    # Separate streams for the initial population and the sampler
    seed = config["sampling"].get("seed")
    if seed is None:
        seed = 0
    step: EDAStep = create_step_from_config(config)

    try:
        problem = create_problem_from_config(config)
        initial = build_initial_population(config, seed)
        sampled = step.run(initial, seed + 1)
    except ValueError as e:
        logger.error(f"Sampling failed: {e}")
        return 1

    print("Initial population:")
    print(initial)
    print("\nLearned distribution:")
    print(step.last_model)
    print("\nSampled population:")
    print(sampled)

    if problem is not None:
        try:
            fitness = problem.evaluate(sampled)
        except PermutationError as e:
            logger.error(f"Evaluation failed: {e}")
            return 1
        print(f"\n{problem.name.upper()} fitness: {fitness.tolist()}")

    if args.plot:
        from .utils.visualization import plot_distribution_model
        plot_distribution_model(step.last_model, args.plot)
        logger.info(f"Distribution heatmap written to {args.plot}")

    return 0


def main(argv: Optional[list] = None) -> int:
    return run(parse_arguments(argv))


if __name__ == "__main__":
    sys.exit(main())
