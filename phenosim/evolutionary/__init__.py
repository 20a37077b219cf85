"""
Evolutionary Algorithm Module for PhenoSim.

This module implements the genetic algorithm core: the phenotype contract,
selection strategies, the replacement policy, termination criteria and the
sequential simulator, plus population statistics and the run driver.
"""

from .phenotype import Phenotype, FitnessType, compare_fitness, sort_by_fitness, best_of
from .selection import (
    Selector,
    SelectionError,
    RankSelector,
    TournamentSelector,
    StochasticSelector,
    create_selector_from_config,
)
from .stopping import IterationLimit, EarlyStopper
from .replacement import stochastic_cull
from .simulator import (
    Simulation,
    Simulator,
    SimulatorBuilder,
    SimulatorConfig,
    SimulationError,
    StepResult,
    RunResult,
    create_simulator_from_config,
)
from .statistics import compute_population_statistics, compute_improvement
from .runner import EvolutionRun, run_simulation, run_from_config, run_evolution

__all__ = [
    # Phenotype
    'Phenotype',
    'FitnessType',
    'compare_fitness',
    'sort_by_fitness',
    'best_of',

    # Selection
    'Selector',
    'SelectionError',
    'RankSelector',
    'TournamentSelector',
    'StochasticSelector',
    'create_selector_from_config',

    # Termination and replacement
    'IterationLimit',
    'EarlyStopper',
    'stochastic_cull',

    # Simulator
    'Simulation',
    'Simulator',
    'SimulatorBuilder',
    'SimulatorConfig',
    'SimulationError',
    'StepResult',
    'RunResult',
    'create_simulator_from_config',

    # Statistics and runs
    'compute_population_statistics',
    'compute_improvement',
    'EvolutionRun',
    'run_simulation',
    'run_from_config',
    'run_evolution',
]
