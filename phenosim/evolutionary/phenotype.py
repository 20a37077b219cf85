"""
Phenotype contract and fitness ordering for PhenoSim.

This module defines:
- Phenotype: the capability set every candidate solution must provide
- FitnessType: whether the simulation maximizes or minimizes fitness
- Fitness ordering helpers shared by selectors, the simulator and statistics

Fitness values that cannot be ordered (NaN) compare as equal to everything,
so an ill-behaved fitness function never makes a sort fail.
"""

import functools
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Sequence


class FitnessType(Enum):
    """Which end of the fitness ordering counts as best."""
    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"

    @classmethod
    def from_value(cls, value: Any) -> 'FitnessType':
        """
        Parse a fitness type from a configuration value.

        Args:
            value: A FitnessType, or a string such as 'maximize' / 'Minimize'

        Returns:
            Matching FitnessType

        Raises:
            ValueError: If the value does not name a fitness type
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid fitness type: {value!r}. Expected one of "
            f"{[m.value for m in cls]}"
        )


class Phenotype(ABC):
    """
    Abstract base class for candidate solutions.

    The engine only relies on these three operations and duplicates
    phenotypes freely, so implementations should behave as values:
    `crossover` and `mutate` return new objects and never modify
    their inputs.

    Example:
        >>> class Number(Phenotype):
        ...     def __init__(self, x):
        ...         self.x = x
        ...     def fitness(self):
        ...         return -abs(self.x)
        ...     def crossover(self, other):
        ...         return Number((self.x + other.x) // 2)
        ...     def mutate(self):
        ...         return Number(self.x - 1 if self.x > 0 else self.x + 1)
    """

    @abstractmethod
    def fitness(self) -> float:
        """Return the deterministic quality score of this phenotype."""

    @abstractmethod
    def crossover(self, other: 'Phenotype') -> 'Phenotype':
        """Combine this phenotype with `other` into a single child."""

    @abstractmethod
    def mutate(self) -> 'Phenotype':
        """Return a perturbed variant of this phenotype."""


def compare_fitness(a: float, b: float) -> int:
    """
    Three-way comparison of two fitness values.

    Returns -1, 0 or 1. Any comparison involving NaN yields 0.
    """
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _compare_phenotypes(x: Phenotype, y: Phenotype) -> int:
    return compare_fitness(x.fitness(), y.fitness())


def sort_by_fitness(population: Sequence[Phenotype]) -> List[Phenotype]:
    """
    Return a new list of the population sorted by ascending fitness.

    The sort is stable: ties, including NaN-involved comparisons, keep
    their original relative order.

    Args:
        population: Phenotypes to sort (left untouched)

    Returns:
        Sorted copy of the population
    """
    return sorted(population, key=functools.cmp_to_key(_compare_phenotypes))


def best_of(population: Sequence[Phenotype], fitness_type: FitnessType) -> Phenotype:
    """
    Return the best phenotype of a population.

    Args:
        population: Non-empty sequence of phenotypes
        fitness_type: Whether higher or lower fitness is better

    Returns:
        The last element of the ascending sort for MAXIMIZE, the first
        for MINIMIZE

    Raises:
        ValueError: If the population is empty
    """
    if not population:
        raise ValueError("Cannot pick the best phenotype of an empty population")
    ranked = sort_by_fitness(population)
    if fitness_type is FitnessType.MAXIMIZE:
        return ranked[-1]
    return ranked[0]
