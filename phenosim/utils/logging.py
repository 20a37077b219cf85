"""
Logging utilities for the PhenoSim framework.

This module provides the logging infrastructure including:
- Standard logging setup with file and console handlers
- Custom EvolutionLogger class for tracking simulation progress
- Structured JSON-lines logging for generations and metrics
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

LOGGER_NAME = 'phenosim'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass
class GenerationLog:
    """Data class for logging generation-level information."""
    generation: int
    step_result: str
    population_size: int
    best_fitness: float
    mean_fitness: float
    std_fitness: float
    step_seconds: Optional[float] = None
    early_stop_streak: Optional[int] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class EvolutionLogger:
    """
    Structured logger for tracking simulation progress.

    Records one JSON line per generation in `generations.jsonl` and one per
    metrics snapshot in `metrics.jsonl`, and keeps the best fitness of every
    generation in memory for the run summary.
    """

    def __init__(self, log_dir: Union[str, Path], log_level: int = logging.INFO):
        """
        Initialize the evolution logger.

        Args:
            log_dir: Directory to store log files
            log_level: Logging level (default: INFO)
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger(f'{LOGGER_NAME}.evolution')
        self.logger.setLevel(log_level)

        self.generation_log_file = self.log_dir / 'generations.jsonl'
        self.metrics_log_file = self.log_dir / 'metrics.jsonl'

        self.total_generations = 0
        self.generation_metrics: List[Dict[str, Any]] = []
        self.best_fitness_per_generation: List[float] = []

        self.logger.debug(f"EvolutionLogger initialized at {self.log_dir}")

    def log_generation(self, generation_log: GenerationLog):
        """
        Log a completed generation.

        Args:
            generation_log: GenerationLog dataclass instance
        """
        with open(self.generation_log_file, 'a') as f:
            f.write(json.dumps(generation_log.to_dict()) + '\n')

        self.total_generations = max(self.total_generations, generation_log.generation)
        self.best_fitness_per_generation.append(generation_log.best_fitness)

        self.logger.debug(
            f"Gen {generation_log.generation}: {generation_log.step_result} | "
            f"Best={generation_log.best_fitness:.4f} | "
            f"Mean={generation_log.mean_fitness:.4f} | "
            f"Size={generation_log.population_size}"
        )

    def log_metrics(self, generation: int, metrics: Dict[str, Any]):
        """
        Log a metrics snapshot.

        Args:
            generation: Generation number
            metrics: Dictionary of metrics (best_fitness, mean_fitness, ...)
        """
        metrics_entry = {
            'generation': generation,
            'timestamp': datetime.now().isoformat(),
            **metrics
        }

        with open(self.metrics_log_file, 'a') as f:
            f.write(json.dumps(metrics_entry) + '\n')

        self.generation_metrics.append(metrics_entry)

        self.logger.info(
            f"Generation {generation} Summary: "
            f"Best Fitness={metrics.get('best_fitness', 0):.4f} | "
            f"Mean Fitness={metrics.get('mean_fitness', 0):.4f} | "
            f"Std={metrics.get('std_fitness', 0):.4f}"
        )

    def log_error(self, error: Union[Exception, str], context: str = ""):
        """
        Log an error with context.

        Args:
            error: Exception instance or message
            context: Additional context about where the error occurred
        """
        self.logger.error(f"Error in {context}: {error}",
                          exc_info=isinstance(error, Exception))

    def get_generation_summary(self, generation: int) -> Optional[Dict[str, Any]]:
        """
        Retrieve the logged record of a specific generation.

        Args:
            generation: Generation number to retrieve

        Returns:
            Dictionary with the generation record or None if not found
        """
        if not self.generation_log_file.exists():
            return None

        with open(self.generation_log_file, 'r') as f:
            for line in f:
                event = json.loads(line.strip())
                if event.get('generation') == generation:
                    return event
        return None

    def get_evolution_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the whole run.

        Returns:
            Dictionary with overall statistics
        """
        history = self.best_fitness_per_generation
        return {
            'total_generations': self.total_generations,
            'initial_best_fitness': history[0] if history else None,
            'final_best_fitness': history[-1] if history else None,
            'fitness_change': history[-1] - history[0] if len(history) > 1 else 0.0,
        }


def setup_logging(
    log_dir: Union[str, Path] = "results/logs",
    log_level: Union[str, int] = "INFO",
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up standard logging configuration for the PhenoSim framework.

    Args:
        log_dir: Directory to store log files
        log_level: Logging level as string ('DEBUG', 'INFO', ...) or int
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured logger instance
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    if isinstance(log_level, int):
        log_level_int = log_level
    else:
        log_level_int = level_map.get(str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level_int)

    # Clear existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level_int)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / 'phenosim.log', mode='a')
        file_handler.setLevel(log_level_int)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Error log file (separate file for errors only)
        error_handler = logging.FileHandler(log_path / 'errors.log', mode='a')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    logger.info(f"Logging initialized at level {logging.getLevelName(log_level_int)}"
                + (f" to {log_dir}" if log_to_file else ""))

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance by name.

    Args:
        name: Logger name (default: 'phenosim')

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
