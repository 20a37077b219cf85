"""
Population statistics for PhenoSim.

This module summarizes the fitness distribution of a population for logging
and reporting:
- best / worst fitness under the active FitnessType
- mean, standard deviation and median of the orderable fitness values
- number of NaN fitness values (excluded from every aggregate)
"""

import logging
from typing import Any, Dict, List, Sequence, Union

import numpy as np

from .phenotype import FitnessType, Phenotype

logger = logging.getLogger(__name__)


def fitness_values(population: Sequence[Phenotype]) -> np.ndarray:
    """Fitness of every individual as a float64 array (NaN preserved)."""
    return np.asarray([p.fitness() for p in population], dtype=np.float64)


def compute_population_statistics(
    population: Sequence[Phenotype],
    fitness_type: FitnessType = FitnessType.MAXIMIZE
) -> Dict[str, Any]:
    """
    Compute fitness statistics for a population.

    Args:
        population: Phenotypes to summarize
        fitness_type: Decides which extreme is reported as best

    Returns:
        Dictionary with size, best_fitness, worst_fitness, mean_fitness,
        std_fitness, median_fitness and nan_count. Aggregates are 0.0 when
        no orderable fitness value exists.
    """
    values = fitness_values(population)
    nan_mask = np.isnan(values)
    valid = values[~nan_mask]

    stats: Dict[str, Any] = {
        'size': int(len(values)),
        'best_fitness': 0.0,
        'worst_fitness': 0.0,
        'mean_fitness': 0.0,
        'std_fitness': 0.0,
        'median_fitness': 0.0,
        'nan_count': int(nan_mask.sum()),
    }

    if len(valid) == 0:
        if len(values) > 0:
            logger.warning("No orderable fitness values in population")
        return stats

    if fitness_type is FitnessType.MAXIMIZE:
        best, worst = np.max(valid), np.min(valid)
    else:
        best, worst = np.min(valid), np.max(valid)

    stats.update({
        'best_fitness': float(best),
        'worst_fitness': float(worst),
        'mean_fitness': float(np.mean(valid)),
        'std_fitness': float(np.std(valid)),
        'median_fitness': float(np.median(valid)),
    })
    return stats


def compute_improvement(
    best_history: Union[Sequence[float], np.ndarray],
    fitness_type: FitnessType = FitnessType.MAXIMIZE
) -> float:
    """
    Signed improvement between the first and last best fitness.

    Positive means the population got better under `fitness_type`.

    Args:
        best_history: Best fitness per generation, oldest first

    Returns:
        Improvement, or 0.0 with fewer than two finite values
    """
    history = np.asarray(best_history, dtype=np.float64)
    history = history[np.isfinite(history)]
    if len(history) < 2:
        return 0.0

    change = float(history[-1] - history[0])
    if fitness_type is FitnessType.MINIMIZE:
        change = -change
    return change


def format_statistics(stats: Dict[str, Any]) -> str:
    """One-line summary used in log messages."""
    return (f"Best={stats.get('best_fitness', 0.0):.4f} | "
            f"Mean={stats.get('mean_fitness', 0.0):.4f} | "
            f"Std={stats.get('std_fitness', 0.0):.4f} | "
            f"Size={stats.get('size', 0)}")


def fitness_list(population: Sequence[Phenotype]) -> List[float]:
    """Plain list of fitness values, for JSON output and plotting."""
    return [float(v) for v in fitness_values(population)]
