"""
Run driver for PhenoSim simulations.

Wraps the step loop of a Simulator with per-generation statistics,
structured logging and result export, and builds complete runs from a
configuration dictionary or YAML file.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .phenotype import Phenotype
from .simulator import (
    RunResult,
    SimulationError,
    Simulator,
    StepResult,
    create_simulator_from_config,
)
from .statistics import compute_improvement, compute_population_statistics, fitness_list, format_statistics
from ..utils.config import load_config
from ..utils.logging import EvolutionLogger, GenerationLog
from ..utils.reporting import save_generation_history, save_run_summary

logger = logging.getLogger(__name__)


@dataclass
class EvolutionRun:
    """
    Record of one simulation run.

    Attributes:
        simulator: The simulator that was driven
        result: Terminal outcome, None while the run is in progress
        generation_metrics: Population statistics per generation (0 = initial)
        best: Best phenotype at the end of the run (None on failure)
        error: Recorded simulator error, if any
        started_at: ISO timestamp of the start of the run
    """
    simulator: Simulator
    result: Optional[RunResult] = None
    generation_metrics: List[Dict[str, Any]] = field(default_factory=list)
    best: Optional[Phenotype] = None
    error: Optional[str] = None
    started_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def record_generation_state(self) -> Dict[str, Any]:
        """Append statistics of the simulator's current population."""
        stats = compute_population_statistics(self.simulator.population,
                                              self.simulator.fitness_type)
        stats['generation'] = self.simulator.iterations()
        self.generation_metrics.append(stats)
        return stats

    @property
    def best_fitness_history(self) -> List[float]:
        return [m['best_fitness'] for m in self.generation_metrics]

    def to_summary(self) -> Dict[str, Any]:
        """JSON-serializable summary of the run."""
        simulator = self.simulator
        return {
            'started_at': self.started_at,
            'finished_at': datetime.now().isoformat(),
            'result': self.result.value if self.result else None,
            'error': self.error,
            'generations': simulator.iterations(),
            'max_iterations': simulator.iter_limit.maximum,
            'fitness_type': simulator.fitness_type.value,
            'selector': repr(simulator.selector),
            'early_stop': list(simulator.config.early_stop) if simulator.config.early_stop else None,
            'early_stopped': bool(simulator.early_stopper and simulator.early_stopper.reached()),
            'elapsed_seconds': simulator.elapsed_time(),
            'best_fitness': self.best.fitness() if self.best is not None else None,
            'best_phenotype': repr(self.best) if self.best is not None else None,
            'improvement': compute_improvement(self.best_fitness_history, simulator.fitness_type),
            'final_statistics': self.generation_metrics[-1] if self.generation_metrics else {},
        }


def run_simulation(
    simulator: Simulator,
    evolution_logger: Optional[EvolutionLogger] = None,
    log_interval: int = 10
) -> EvolutionRun:
    """
    Drive a simulator to completion, recording every generation.

    Args:
        simulator: Simulator to run
        evolution_logger: Optional structured logger for generation records
        log_interval: Emit a metrics summary every this many generations

    Returns:
        EvolutionRun with the outcome and per-generation statistics
    """
    run = EvolutionRun(simulator=simulator)

    if simulator.population:
        run.record_generation_state()

    while True:
        step_result = simulator.step()

        if step_result is StepResult.SUCCESS:
            stats = run.record_generation_state()
            generation = stats['generation']
            if evolution_logger is not None:
                evolution_logger.log_generation(GenerationLog(
                    generation=generation,
                    step_result=step_result.value,
                    population_size=stats['size'],
                    best_fitness=stats['best_fitness'],
                    mean_fitness=stats['mean_fitness'],
                    std_fitness=stats['std_fitness'],
                    step_seconds=simulator.last_step_duration,
                    early_stop_streak=(simulator.early_stopper.streak
                                       if simulator.early_stopper else None),
                ))
                if log_interval > 0 and generation % log_interval == 0:
                    evolution_logger.log_metrics(generation, stats)
            continue

        if step_result is StepResult.DONE:
            run.result = RunResult.DONE
        else:
            run.result = RunResult.FAILURE
        break

    run.error = simulator.error
    try:
        run.best = simulator.get()
    except SimulationError as e:
        logger.error(f"Simulation failed: {e}")
        if evolution_logger is not None:
            evolution_logger.log_error(str(e), context="simulation")

    if run.generation_metrics:
        logger.info(f"Run finished ({run.result.value}) after {simulator.iterations()} "
                    f"generations: {format_statistics(run.generation_metrics[-1])}")
    return run


def run_from_config(
    config: Dict[str, Any],
    output_dir: Optional[Union[str, Path]] = None
) -> EvolutionRun:
    """
    Build the population and simulator described by `config` and run them.

    Args:
        config: Configuration dictionary (simulation, selection, problem, ...)
        output_dir: Optional directory for logs, history and summary files

    Returns:
        EvolutionRun with the outcome
    """
    from ..problems import create_population

    simulation_config = config.get('simulation', {}) or {}
    seed = simulation_config.get('seed')

    population = create_population(config, seed=seed)
    simulator = create_simulator_from_config(config, population)

    evolution_logger = None
    if output_dir is not None:
        evolution_logger = EvolutionLogger(log_dir=Path(output_dir) / 'logs')

    log_interval = int((config.get('logging') or {}).get('metrics_interval', 10))
    run = run_simulation(simulator, evolution_logger=evolution_logger, log_interval=log_interval)

    if output_dir is not None:
        metrics_dir = Path(output_dir) / 'metrics'
        save_run_summary(run.to_summary(), metrics_dir / 'evolution_summary.json')
        save_generation_history(run.generation_metrics, metrics_dir / 'generation_history.csv')

    return run


def run_evolution(config_path: str, output_dir: Optional[str] = None) -> EvolutionRun:
    """
    Convenience function to run a complete simulation from a config file.

    Args:
        config_path: Path or name of a YAML configuration file
        output_dir: Optional directory for result files

    Returns:
        EvolutionRun with the outcome
    """
    return run_from_config(load_config(config_path), output_dir=output_dir)


def final_fitness_values(run: EvolutionRun) -> List[float]:
    """Fitness of every individual of the final population."""
    return fitness_list(run.simulator.population)
