#!/usr/bin/env python3
"""
PhenoSim: genetic algorithm simulation engine

Main entry point for running configured simulations.

Usage:
    phenosim --config integer_target
    phenosim --config sphere --generations 500 --seed 7
    python -m phenosim.main --config-path my_problem.yaml --dry-run
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .evolutionary.runner import EvolutionRun, final_fitness_values, run_from_config
from .utils.config import load_config
from .utils.logging import setup_logging
from .utils.visualization import plot_fitness_distribution, plot_fitness_vs_generation

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="PhenoSim: genetic algorithm simulation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the integer target demo (minimize |value|)
  phenosim --config integer_target

  # Run the sphere benchmark for up to 500 generations
  phenosim --config sphere --generations 500

  # Validate a configuration without running it
  phenosim --config-path my_problem.yaml --dry-run
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default="default",
        help="Bundled or ./config/ configuration name (without .yaml extension). "
             "Options: default, integer_target, sphere (default: default)"
    )

    parser.add_argument(
        "--config-path",
        type=str,
        default=None,
        help="Full path to configuration file (overrides --config)"
    )

    parser.add_argument(
        "--generations", "-g",
        type=int,
        default=None,
        help="Maximum number of generations (overrides config file setting)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides config file setting)"
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default="results",
        help="Output directory for results (default: results)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--no-visualization",
        action="store_true",
        help="Disable visualization generation"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load and validate the configuration without running the simulation"
    )

    return parser.parse_args(argv)


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Apply command-line overrides to the loaded configuration."""
    simulation_config = dict(config.get('simulation') or {})
    if args.generations is not None:
        simulation_config['max_iterations'] = args.generations
        logger.info(f"Overriding max_iterations: {args.generations}")
    if args.seed is not None:
        simulation_config['seed'] = args.seed
        logger.info(f"Overriding seed: {args.seed}")
    config['simulation'] = simulation_config
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Build the population, selector and simulator without running anything.

    Raises:
        ValueError: If any configured value is invalid
    """
    from .evolutionary.simulator import create_simulator_from_config
    from .problems import create_population

    seed = (config.get('simulation') or {}).get('seed')
    population = create_population(config, seed=seed)
    create_simulator_from_config(config, population)


def setup_output_directories(output_dir: str) -> Dict[str, Path]:
    """
    Create output directory structure for results.

    Args:
        output_dir: Base output directory path

    Returns:
        Dictionary of directory paths
    """
    base_path = Path(output_dir)

    directories = {
        "base": base_path,
        "metrics": base_path / "metrics",
        "visualizations": base_path / "visualizations",
        "logs": base_path / "logs"
    }

    for dir_path in directories.values():
        dir_path.mkdir(parents=True, exist_ok=True)

    logger.info(f"Output directories created at: {base_path.absolute()}")

    return directories


def generate_visualizations(run: EvolutionRun, output_dir: Path):
    """
    Generate all visualization plots from a finished run.

    Args:
        run: EvolutionRun with results
        output_dir: Output directory for visualizations
    """
    try:
        plot_fitness_vs_generation(
            run.generation_metrics,
            output_dir / "fitness_vs_generation.png"
        )
        plot_fitness_distribution(
            final_fitness_values(run),
            output_dir / "fitness_distribution.png"
        )
        logger.info(f"Visualizations saved to: {output_dir}")

    except (OSError, ValueError) as e:
        logger.warning(f"Failed to generate some visualizations: {e}")


def prepare_config(args: argparse.Namespace) -> Optional[Dict[str, Any]]:
    """
    Load, override and validate the configuration named by the arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration dictionary, or None if it could not be loaded or is invalid
    """
    try:
        config = load_config(args.config_path or args.config)
        config = apply_overrides(config, args)
        validate_config(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return None

    logger.info(f"Configuration loaded: {args.config_path or args.config}")
    return config


def run_phenosim(args: argparse.Namespace, config: Dict[str, Any]) -> EvolutionRun:
    """
    Main execution function for PhenoSim.

    Args:
        args: Parsed command-line arguments
        config: Validated configuration dictionary

    Returns:
        EvolutionRun with results
    """
    directories = setup_output_directories(args.output_dir)

    run = run_from_config(config, output_dir=directories["base"])

    output_config = config.get('output') or {}
    if not args.no_visualization and output_config.get('visualization', True):
        logger.info("Generating visualizations...")
        generate_visualizations(run, directories["visualizations"])

    summary = run.to_summary()
    logger.info("\n" + "=" * 80)
    logger.info("SIMULATION SUMMARY")
    logger.info("=" * 80)
    logger.info(f"Result: {summary['result']}")
    logger.info(f"Generations: {summary['generations']} / {summary['max_iterations']}")
    if summary['error']:
        logger.info(f"Error: {summary['error']}")
    else:
        logger.info(f"Best Fitness: {summary['best_fitness']}")
        logger.info(f"Best Phenotype: {summary['best_phenotype']}")
    logger.info(f"Elapsed: {summary['elapsed_seconds']:.3f}s")
    logger.info(f"All results saved to: {directories['base'].absolute()}")
    logger.info("=" * 80)

    return run


def main(argv: Optional[list] = None):
    """
    Main entry point.
    """
    args = parse_arguments(argv)

    setup_logging(log_dir=Path(args.output_dir) / "logs", log_level=args.log_level,
                  log_to_file=not args.dry_run)

    logger.info("=" * 80)
    logger.info("PhenoSim: genetic algorithm simulation engine")
    logger.info("=" * 80)

    config = prepare_config(args)
    if config is None:
        sys.exit(1)

    if args.dry_run:
        logger.info("DRY RUN MODE: Configuration validated successfully")
        sys.exit(0)

    run = run_phenosim(args, config)

    # Exit with appropriate code
    sys.exit(0 if run.error is None else 1)


if __name__ == "__main__":
    main()
