"""
Population replacement policy for PhenoSim.

Before children join the population, the same number of individuals is
removed. Removals are spread across the population with a fixed stride
from a random start (in the spirit of stochastic universal sampling), so a
contiguous run of individuals is unlikely to be wiped out at once.
"""

import random
from logging import getLogger
from typing import List, Optional

from .phenotype import Phenotype

logger = getLogger(__name__)


def stochastic_cull(
    population: List[Phenotype],
    count: int,
    rng: Optional[random.Random] = None
) -> List[Phenotype]:
    """
    Remove `count` individuals from the population in place.

    With n individuals the stride is `n // count`. Starting at a uniformly
    random index, the individual at the current index is removed and the
    index advances by `stride - 1` (modulo the shrinking population size).
    When `count` does not divide n the spacing drifts; this is accepted.

    Args:
        population: Population list, modified in place
        count: Number of individuals to remove
        rng: Optional random number generator for reproducibility

    Returns:
        The removed individuals, in removal order

    Raises:
        ValueError: If count is negative or not smaller than the population size
    """
    if rng is None:
        rng = random

    if count == 0:
        return []
    if count < 0 or count >= len(population):
        raise ValueError(
            f"Cannot cull {count} individuals from a population of {len(population)}"
        )

    ratio = len(population) // count
    index = rng.randrange(len(population))
    removed = []
    for _ in range(count):
        removed.append(population.pop(index))
        index = (index + ratio - 1) % len(population)

    logger.debug(f"Culled {count} individuals (stride={ratio}), "
                 f"{len(population)} remain")
    return removed
