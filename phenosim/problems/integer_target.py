"""
Integer Target Problem

A minimal phenotype used to demonstrate and test the simulator: an integer
that should reach a target value.

Problem Logic:
- Fitness: absolute distance to the target (minimize)
- Crossover: the smaller of the two parent values
- Mutation: one unit step towards the target

Because mutation always moves towards the target, any selector drives the
population to the target within a bounded number of generations.
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from ..evolutionary.phenotype import Phenotype


@dataclass(frozen=True)
class IntegerTarget(Phenotype):
    """An integer candidate whose fitness is its distance to `target`."""
    value: int
    target: int = 0

    def fitness(self) -> float:
        return float(abs(self.value - self.target))

    def crossover(self, other: 'IntegerTarget') -> 'IntegerTarget':
        return IntegerTarget(min(self.value, other.value), self.target)

    def mutate(self) -> 'IntegerTarget':
        if self.value < self.target:
            return IntegerTarget(self.value + 1, self.target)
        if self.value > self.target:
            return IntegerTarget(self.value - 1, self.target)
        return self


def create_integer_population(
    size: int,
    low: int = -50,
    high: int = 50,
    target: int = 0,
    rng: Optional[random.Random] = None
) -> List[IntegerTarget]:
    """
    Create a population of random integers in [low, high].

    Args:
        size: Number of individuals
        low: Smallest initial value
        high: Largest initial value
        target: Value the population should converge to
        rng: Optional random number generator for reproducibility

    Returns:
        List of IntegerTarget phenotypes
    """
    if rng is None:
        rng = random
    return [IntegerTarget(rng.randint(low, high), target) for _ in range(size)]
