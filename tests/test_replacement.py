"""
Test suite for the stochastic culling replacement policy.
"""

import random

import pytest

from phenosim.evolutionary.replacement import stochastic_cull
from phenosim.problems import IntegerTarget


def make_population(size=100):
    return [IntegerTarget(i) for i in range(size)]


class TestStochasticCull:
    """Test removal of individuals before children are added."""

    def test_removes_exact_count(self):
        population = make_population()
        removed = stochastic_cull(population, 10, rng=random.Random(0))
        assert len(population) == 90
        assert len(removed) == 10

    def test_removed_individuals_were_members(self):
        population = make_population()
        original = set(population)
        removed = stochastic_cull(population, 25, rng=random.Random(1))

        assert set(removed) <= original
        assert not set(removed) & set(population)

    def test_removals_are_evenly_spaced(self):
        """Test a dividing count removes one full residue class."""
        population = make_population()
        removed = stochastic_cull(population, 10, rng=random.Random(2))

        values = sorted(p.value for p in removed)
        assert len(set(values)) == 10
        assert len({v % 10 for v in values}) == 1

    def test_zero_count_is_noop(self):
        population = make_population(10)
        assert stochastic_cull(population, 0) == []
        assert len(population) == 10

    @pytest.mark.parametrize("count", [-1, 10, 11])
    def test_invalid_count(self, count):
        population = make_population(10)
        with pytest.raises(ValueError):
            stochastic_cull(population, count)
        assert len(population) == 10

    def test_reproducible_with_seed(self):
        a, b = make_population(), make_population()
        stochastic_cull(a, 7, rng=random.Random(5))
        stochastic_cull(b, 7, rng=random.Random(5))
        assert a == b
