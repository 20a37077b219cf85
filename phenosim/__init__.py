"""
PhenoSim: a generic genetic algorithm simulation engine

Given a population of candidate solutions ("phenotypes") that can be scored,
recombined and mutated, PhenoSim repeatedly applies selection, crossover,
mutation and replacement until an iteration limit or a fitness plateau ends
the simulation.

Main Components:
- evolutionary: Phenotype contract, selectors, replacement, stopping criteria, simulator
- problems: Built-in demonstration phenotypes (integer target, sphere, rastrigin)
- utils: Configuration, logging, reporting and visualization utilities

Usage:
    from phenosim.evolutionary import Simulator, TournamentSelector, FitnessType
    from phenosim.main import main

Version: 0.1.0
"""

__version__ = "0.1.0"

# Package structure
__all__ = [
    "evolutionary",
    "problems",
    "utils",
]
