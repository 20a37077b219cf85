"""
Built-in demonstration problems for PhenoSim.

Each problem provides a Phenotype implementation and a population factory.
`create_population` builds an initial population from the 'problem' section
of a configuration dictionary.
"""

import random
from typing import Any, Dict, List, Optional

from ..evolutionary.phenotype import Phenotype
from ..utils.config import get_section
from .integer_target import IntegerTarget, create_integer_population
from .real_vector import OBJECTIVES, RealVector, create_real_vector_population

PROBLEMS = ['integer_target', 'sphere', 'rastrigin']


def create_population(
    config: Dict[str, Any],
    seed: Optional[int] = None
) -> List[Phenotype]:
    """
    Create an initial population from configuration.

    Args:
        config: Either the full configuration or its 'problem' subsection,
            e.g. {'name': 'sphere', 'population_size': 100, 'dimensions': 5}
        seed: Optional seed for reproducible initialization

    Returns:
        List of phenotypes

    Raises:
        ValueError: If the problem name is unknown or the size is not positive
    """
    problem_config = get_section(config, 'problem')
    name = str(problem_config.get('name', 'integer_target')).strip().lower()
    size = int(problem_config.get('population_size', 100))

    if size <= 0:
        raise ValueError(f"population_size must be positive, got {size}")

    if name == 'integer_target':
        return create_integer_population(
            size,
            low=int(problem_config.get('low', -50)),
            high=int(problem_config.get('high', 50)),
            target=int(problem_config.get('target', 0)),
            rng=random.Random(seed),
        )
    if name in OBJECTIVES:
        return create_real_vector_population(
            size,
            dimensions=int(problem_config.get('dimensions', 5)),
            bound=float(problem_config.get('bound', 5.12)),
            objective=name,
            sigma=float(problem_config.get('sigma', 0.1)),
            seed=seed,
        )

    raise ValueError(f"Unknown problem '{name}'. Available: {PROBLEMS}")


__all__ = [
    'PROBLEMS',
    'IntegerTarget',
    'RealVector',
    'create_population',
    'create_integer_population',
    'create_real_vector_population',
]
