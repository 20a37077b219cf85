"""
Selection mechanisms for the PhenoSim genetic algorithm.

This module implements:
- Selector: the strategy interface producing parent pairs from a population
- RankSelector: always pairs the global best and second-best individuals
- TournamentSelector: runs independent random tournaments, keeps each winner pair
- StochasticSelector: pairs individuals drawn uniformly at random

Selectors only hold read-only parameters, so one instance can be shared by
several simulators. Parameters are validated on every call because they are
checked against the population they are applied to.
"""

import random
from abc import ABC, abstractmethod
from logging import getLogger
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .phenotype import FitnessType, Phenotype, sort_by_fitness
from ..utils.config import get_section

logger = getLogger(__name__)

ParentPair = Tuple[Phenotype, Phenotype]


class SelectionError(ValueError):
    """Raised when a selector's parameters do not fit the population."""


class Selector(ABC):
    """
    Abstract base class for parent selection strategies.

    A selector returns one parent pair per child the simulator should
    produce, i.e. `count // 2` pairs.
    """

    def __init__(self, count: int):
        """
        Args:
            count: Number of parents to select. Must be larger than zero, a
                multiple of two and less than half the population size.
        """
        self.count = count

    @abstractmethod
    def select(
        self,
        population: Sequence[Phenotype],
        fitness_type: FitnessType,
        rng: Optional[random.Random] = None
    ) -> List[ParentPair]:
        """
        Select parent pairs from a population.

        Args:
            population: Current population (left untouched)
            fitness_type: Whether higher or lower fitness is better
            rng: Optional random number generator for reproducibility

        Returns:
            List of `count // 2` parent pairs

        Raises:
            SelectionError: If the selector parameters are invalid for this population
        """

    def _validate_count(self, population: Sequence[Phenotype]) -> None:
        if self.count <= 0 or self.count % 2 != 0 or self.count * 2 >= len(population):
            raise SelectionError(
                f"Invalid parameter `count`: {self.count}. Should be larger than zero, a "
                f"multiple of two and less than half the population size "
                f"({len(population)})."
            )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(count={self.count})"


def _top_two(ranked: List[Phenotype], fitness_type: FitnessType) -> ParentPair:
    """Best and second best of an ascending-sorted list."""
    if fitness_type is FitnessType.MAXIMIZE:
        return ranked[-1], ranked[-2]
    return ranked[0], ranked[1]


class RankSelector(Selector):
    """
    Selects the two best-ranked phenotypes for every parent pair.

    Individuals are not removed between rounds, so every pair returned by one
    call is the same (best, second best) couple. This keeps selection pressure
    maximal at the cost of diversity.
    """

    def select(
        self,
        population: Sequence[Phenotype],
        fitness_type: FitnessType,
        rng: Optional[random.Random] = None
    ) -> List[ParentPair]:
        self._validate_count(population)

        ranked = sort_by_fitness(population)
        pair = _top_two(ranked, fitness_type)
        parents = [pair for _ in range(self.count // 2)]

        logger.debug(f"Rank selection: {len(parents)} pairs, "
                     f"best fitness={pair[0].fitness():.4f}")
        return parents


class TournamentSelector(Selector):
    """
    Runs several tournaments and selects the best two phenotypes of each.

    Each of the `count // 2` tournaments draws `participants` individuals
    uniformly at random with replacement.
    """

    def __init__(self, count: int, participants: int):
        """
        Args:
            count: Number of parents to select. Must be larger than zero, a
                multiple of two and less than half the population size.
            participants: Tournament size. Must be larger than zero and less
                than the population size.
        """
        super().__init__(count)
        self.participants = participants

    def select(
        self,
        population: Sequence[Phenotype],
        fitness_type: FitnessType,
        rng: Optional[random.Random] = None
    ) -> List[ParentPair]:
        if rng is None:
            rng = random

        self._validate_count(population)
        if self.participants <= 0 or self.participants >= len(population):
            raise SelectionError(
                f"Invalid parameter `participants`: {self.participants}. Should be larger "
                f"than zero and less than the population size ({len(population)})."
            )

        parents = []
        for _ in range(self.count // 2):
            tournament = [
                population[rng.randrange(len(population))]
                for _ in range(self.participants)
            ]
            # A single-participant tournament pairs the winner with itself
            ranked = sort_by_fitness(tournament)
            if len(ranked) == 1:
                parents.append((ranked[0], ranked[0]))
            else:
                parents.append(_top_two(ranked, fitness_type))

        logger.debug(f"Tournament selection: {len(parents)} tournaments of "
                     f"{self.participants} participants")
        return parents

    def __repr__(self) -> str:
        return f"TournamentSelector(count={self.count}, participants={self.participants})"


class StochasticSelector(Selector):
    """
    Selects parents uniformly at random, ignoring fitness.

    Useful as a baseline: all selection pressure then comes from the
    replacement policy alone.
    """

    def select(
        self,
        population: Sequence[Phenotype],
        fitness_type: FitnessType,
        rng: Optional[random.Random] = None
    ) -> List[ParentPair]:
        if rng is None:
            rng = random

        self._validate_count(population)

        parents = []
        for _ in range(self.count // 2):
            first = population[rng.randrange(len(population))]
            second = population[rng.randrange(len(population))]
            parents.append((first, second))

        logger.debug(f"Stochastic selection: {len(parents)} pairs")
        return parents


SELECTORS = {
    'rank': RankSelector,
    'tournament': TournamentSelector,
    'stochastic': StochasticSelector,
}


def create_selector_from_config(config: Dict[str, Any]) -> Selector:
    """
    Create a selector from a configuration dictionary.

    Args:
        config: Either the full configuration or its 'selection' subsection,
            e.g. {'type': 'tournament', 'count': 20, 'participants': 5}

    Returns:
        Configured selector instance

    Raises:
        ValueError: If the selector type is unknown
    """
    selection_config = get_section(config, 'selection')
    selector_type = str(selection_config.get('type', 'rank')).strip().lower()
    count = int(selection_config.get('count', 4))

    if selector_type not in SELECTORS:
        raise ValueError(
            f"Unknown selector type '{selector_type}'. "
            f"Available: {sorted(SELECTORS)}"
        )

    if selector_type == 'tournament':
        participants = int(selection_config.get('participants', 3))
        selector = TournamentSelector(count, participants)
    else:
        selector = SELECTORS[selector_type](count)

    logger.debug(f"Created selector {selector!r}")
    return selector
