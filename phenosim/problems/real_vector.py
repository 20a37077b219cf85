"""
Real Vector Problem

Continuous benchmark functions over real-valued vectors.

Problem Logic:
- Genes: numpy float64 vector of fixed dimension
- Fitness: benchmark objective value (minimize; optimum 0 at the origin)
- Crossover: uniform crossover, each gene taken from either parent
- Mutation: Gaussian noise with standard deviation `sigma` on every gene

Objectives:
- sphere:    sum(x_i^2)
- rastrigin: 10 n + sum(x_i^2 - 10 cos(2 pi x_i))
"""

from typing import Callable, Dict, List, Optional

import numpy as np

from ..evolutionary.phenotype import Phenotype


def sphere(genes: np.ndarray) -> float:
    return float(np.sum(genes ** 2))


def rastrigin(genes: np.ndarray) -> float:
    return float(10.0 * len(genes) + np.sum(genes ** 2 - 10.0 * np.cos(2.0 * np.pi * genes)))


OBJECTIVES: Dict[str, Callable[[np.ndarray], float]] = {
    'sphere': sphere,
    'rastrigin': rastrigin,
}


class RealVector(Phenotype):
    """
    Real-valued candidate solution evaluated by a benchmark objective.

    Attributes:
        genes: Read-only float64 vector
        objective: Name of the objective in OBJECTIVES
        sigma: Mutation standard deviation
        rng: numpy Generator shared with the children of this vector
    """

    def __init__(
        self,
        genes,
        objective: str = 'sphere',
        sigma: float = 0.1,
        rng: Optional[np.random.Generator] = None
    ):
        if objective not in OBJECTIVES:
            raise ValueError(f"Unknown objective '{objective}'. Available: {sorted(OBJECTIVES)}")
        if sigma < 0:
            raise ValueError(f"Mutation sigma must be non-negative, got {sigma}")

        self.genes = np.array(genes, dtype=np.float64)
        self.genes.setflags(write=False)
        self.objective = objective
        self.sigma = sigma
        self.rng = rng if rng is not None else np.random.default_rng()
        self._fitness: Optional[float] = None

    def fitness(self) -> float:
        if self._fitness is None:
            self._fitness = OBJECTIVES[self.objective](self.genes)
        return self._fitness

    def crossover(self, other: 'RealVector') -> 'RealVector':
        mask = self.rng.random(len(self.genes)) < 0.5
        genes = np.where(mask, self.genes, other.genes)
        return RealVector(genes, self.objective, self.sigma, self.rng)

    def mutate(self) -> 'RealVector':
        noise = self.rng.normal(0.0, self.sigma, size=len(self.genes))
        return RealVector(self.genes + noise, self.objective, self.sigma, self.rng)

    def __repr__(self) -> str:
        return f"RealVector({np.array2string(self.genes, precision=4)}, fitness={self.fitness():.6f})"


def create_real_vector_population(
    size: int,
    dimensions: int = 5,
    bound: float = 5.12,
    objective: str = 'sphere',
    sigma: float = 0.1,
    seed: Optional[int] = None
) -> List[RealVector]:
    """
    Create a population of vectors drawn uniformly from [-bound, bound]^dimensions.

    Args:
        size: Number of individuals
        dimensions: Vector length
        bound: Half-width of the initialization box
        objective: Objective name ('sphere' or 'rastrigin')
        sigma: Mutation standard deviation
        seed: Seed for the numpy generator shared by the population

    Returns:
        List of RealVector phenotypes
    """
    rng = np.random.default_rng(seed)
    samples = rng.uniform(-bound, bound, size=(size, dimensions))
    return [RealVector(row, objective, sigma, rng) for row in samples]
