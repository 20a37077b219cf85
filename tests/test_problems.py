"""
Test suite for the built-in demonstration problems.

Tests cover:
- IntegerTarget fitness, crossover and mutation
- RealVector objectives, operators and validation
- Population creation from configuration
"""

import random

import numpy as np
import pytest

from phenosim.problems import (
    IntegerTarget,
    RealVector,
    create_integer_population,
    create_population,
    create_real_vector_population,
)
from phenosim.problems.real_vector import rastrigin, sphere


class TestIntegerTarget:
    """Test the integer target phenotype."""

    def test_fitness_is_distance(self):
        assert IntegerTarget(-7).fitness() == 7.0
        assert IntegerTarget(3, target=5).fitness() == 2.0

    def test_crossover_takes_minimum(self):
        child = IntegerTarget(4).crossover(IntegerTarget(-2))
        assert child.value == -2

    def test_mutate_steps_towards_target(self):
        assert IntegerTarget(5).mutate().value == 4
        assert IntegerTarget(-5).mutate().value == -4
        assert IntegerTarget(0).mutate().value == 0

    def test_operators_do_not_modify_parents(self):
        parent = IntegerTarget(9)
        parent.mutate()
        parent.crossover(IntegerTarget(1))
        assert parent.value == 9

    def test_population_bounds(self):
        population = create_integer_population(50, low=-3, high=3, rng=random.Random(0))
        assert len(population) == 50
        assert all(-3 <= p.value <= 3 for p in population)


class TestRealVector:
    """Test the real-valued benchmark phenotype."""

    def test_objectives_at_origin(self):
        zeros = np.zeros(4)
        assert sphere(zeros) == 0.0
        assert rastrigin(zeros) == pytest.approx(0.0)

    def test_sphere_value(self):
        assert RealVector([1.0, 2.0]).fitness() == pytest.approx(5.0)

    def test_genes_are_read_only(self):
        vector = RealVector([1.0, 2.0])
        with pytest.raises(ValueError):
            vector.genes[0] = 3.0

    def test_crossover_takes_genes_from_parents(self):
        rng = np.random.default_rng(0)
        a = RealVector(np.zeros(10), rng=rng)
        b = RealVector(np.ones(10), rng=rng)
        child = a.crossover(b)
        assert set(child.genes.tolist()) <= {0.0, 1.0}

    def test_mutate_returns_new_vector(self):
        vector = RealVector([1.0, 1.0], sigma=0.5, rng=np.random.default_rng(1))
        mutant = vector.mutate()
        assert mutant is not vector
        assert vector.genes.tolist() == [1.0, 1.0]

    def test_zero_sigma_keeps_genes(self):
        vector = RealVector([1.0, -1.0], sigma=0.0, rng=np.random.default_rng(1))
        assert vector.mutate().genes.tolist() == [1.0, -1.0]

    def test_invalid_objective(self):
        with pytest.raises(ValueError):
            RealVector([0.0], objective='ackley')

    def test_invalid_sigma(self):
        with pytest.raises(ValueError):
            RealVector([0.0], sigma=-1.0)

    def test_population_within_bounds(self):
        population = create_real_vector_population(20, dimensions=3, bound=2.0, seed=4)
        assert len(population) == 20
        for vector in population:
            assert vector.genes.shape == (3,)
            assert np.all(np.abs(vector.genes) <= 2.0)


class TestCreatePopulation:
    """Test population creation from configuration."""

    def test_integer_target_from_full_config(self):
        config = {'problem': {'name': 'integer_target', 'population_size': 30,
                              'low': 0, 'high': 10}}
        population = create_population(config, seed=1)
        assert len(population) == 30
        assert all(isinstance(p, IntegerTarget) for p in population)

    def test_rastrigin_from_subsection(self):
        population = create_population({'name': 'rastrigin', 'population_size': 5,
                                         'dimensions': 2}, seed=1)
        assert len(population) == 5
        assert population[0].objective == 'rastrigin'

    def test_seed_reproducible(self):
        config = {'problem': {'name': 'integer_target', 'population_size': 10}}
        assert create_population(config, seed=3) == create_population(config, seed=3)

    def test_full_config_without_problem_uses_defaults(self):
        """Test top-level keys of a full config are not read as problem settings."""
        config = {'simulation': {}, 'name': 'sphere', 'population_size': 3}
        population = create_population(config, seed=0)
        assert len(population) == 100
        assert isinstance(population[0], IntegerTarget)

    def test_unknown_problem(self):
        with pytest.raises(ValueError, match="Unknown problem"):
            create_population({'problem': {'name': 'knapsack'}})

    def test_non_positive_size(self):
        with pytest.raises(ValueError):
            create_population({'problem': {'population_size': 0}})
