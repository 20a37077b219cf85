"""
Utilities module for PhenoSim.

This module provides configuration loading, logging, reporting and
visualization helpers that support the simulation engine.
"""

from .config import load_config, deep_merge
from .logging import setup_logging, EvolutionLogger, GenerationLog, get_logger
from .reporting import history_to_frame, save_generation_history, save_run_summary, load_run_summary
from .visualization import plot_fitness_vs_generation, plot_fitness_distribution

__all__ = [
    # Configuration
    'load_config',
    'deep_merge',

    # Logging
    'setup_logging',
    'EvolutionLogger',
    'GenerationLog',
    'get_logger',

    # Reporting
    'history_to_frame',
    'save_generation_history',
    'save_run_summary',
    'load_run_summary',

    # Visualization
    'plot_fitness_vs_generation',
    'plot_fitness_distribution',
]
