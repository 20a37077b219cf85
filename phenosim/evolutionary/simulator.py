"""
PhenoSim: sequential genetic algorithm simulator.

One generation runs the pipeline

    select -> crossover -> mutate -> cull -> append children -> update stoppers

and a simulation is a sequence of generations until the iteration limit or
the early stopper ends it, or until an error leaves it failed.

Simulators are created through `SimulatorBuilder` (fluent) which assembles a
validated `SimulatorConfig`, or from a YAML-derived configuration dictionary
with `create_simulator_from_config`.

Example:
    >>> simulator = (Simulator.builder()
    ...              .set_population(population)
    ...              .set_selector(TournamentSelector(count=20, participants=5))
    ...              .set_fitness_type(FitnessType.MINIMIZE)
    ...              .set_early_stop(delta=1e-6, window=10)
    ...              .set_max_iters(500)
    ...              .build())
    >>> simulator.run()
    >>> best = simulator.get()
"""

import copy
import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .phenotype import FitnessType, Phenotype, best_of
from .replacement import stochastic_cull
from .selection import RankSelector, SelectionError, Selector, create_selector_from_config
from .stopping import EarlyStopper, IterationLimit, validate_early_stop

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 100
DEFAULT_SELECTION_COUNT = 4


class StepResult(Enum):
    """Outcome of a single `step()` call."""
    SUCCESS = "success"
    DONE = "done"
    FAILURE = "failure"


class RunResult(Enum):
    """Terminal outcome of `run()`."""
    DONE = "done"
    FAILURE = "failure"


class SimulationError(RuntimeError):
    """Raised when querying the result of a failed simulation."""


class Simulation(ABC):
    """Interface shared by genetic algorithm simulations."""

    @abstractmethod
    def step(self) -> StepResult:
        """Run a single generation."""

    @abstractmethod
    def run(self) -> RunResult:
        """Run generations until the simulation is done or has failed."""

    @abstractmethod
    def get(self) -> Phenotype:
        """Return the best phenotype found so far."""

    @property
    @abstractmethod
    def population(self) -> List[Phenotype]:
        """Read-only snapshot of the current population."""

    @abstractmethod
    def iterations(self) -> int:
        """Number of generations completed."""

    @abstractmethod
    def elapsed_time(self) -> float:
        """Accumulated generation time in seconds."""


@dataclass
class SimulatorConfig:
    """
    Validated parameters of a Simulator.

    Attributes:
        population: Initial population (may be empty; `step()` then fails)
        max_iterations: Maximum number of generations
        fitness_type: Whether fitness is maximized or minimized
        early_stop: Optional (delta, window) plateau detection parameters
        selector: Parent selection strategy, shareable between simulators
        seed: Seed for the simulator's random number generator
    """
    population: List[Phenotype] = field(default_factory=list)
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    fitness_type: FitnessType = FitnessType.MAXIMIZE
    early_stop: Optional[Tuple[float, int]] = None
    selector: Selector = field(default_factory=lambda: RankSelector(DEFAULT_SELECTION_COUNT))
    seed: Optional[int] = None

    def __post_init__(self):
        self.population = list(self.population)
        self.fitness_type = FitnessType.from_value(self.fitness_type)

        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError(f"max_iterations must be an integer, got {self.max_iterations!r}")
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")

        if self.early_stop is not None:
            self.early_stop = validate_early_stop(*self.early_stop)

        if not isinstance(self.selector, Selector):
            raise ValueError(f"selector must be a Selector instance, got {type(self.selector).__name__}")


class Simulator(Simulation):
    """
    Sequential genetic algorithm simulator; everything runs on the caller's thread.

    A simulator is mutated in place by successive `step()` calls. It ends up
    either done (limit or plateau reached) or failed (empty population or
    invalid selector parameters). A failed simulator stays failed; build a
    new one to retry.
    """

    def __init__(self, config: SimulatorConfig):
        self.config = config
        self._population: List[Phenotype] = list(config.population)
        self.fitness_type = config.fitness_type
        self.selector = config.selector
        self.iter_limit = IterationLimit(config.max_iterations)
        self.early_stopper: Optional[EarlyStopper] = None
        if config.early_stop is not None:
            self.early_stopper = EarlyStopper(*config.early_stop)
        self.rng = random.Random(config.seed)

        self.duration = 0.0
        self.last_step_duration: Optional[float] = None
        self.error: Optional[str] = None
        self._done = False

    @staticmethod
    def builder() -> 'SimulatorBuilder':
        """Create a builder with default settings."""
        return SimulatorBuilder()

    @property
    def state(self) -> str:
        """'failed', 'done' or 'running'."""
        if self.error is not None:
            return "failed"
        if self._done:
            return "done"
        return "running"

    def _should_stop(self) -> bool:
        if self.early_stopper is not None and self.early_stopper.reached():
            return True
        return self.iter_limit.reached()

    def step(self) -> StepResult:
        """
        Run one generation.

        Returns:
            SUCCESS after a completed generation, DONE once a stopping
            criterion holds (nothing is changed then), FAILURE if the
            simulation cannot continue (see `error`)
        """
        if self.error is not None:
            return StepResult.FAILURE

        if not self._population:
            self.error = ("Tried to run a simulator without a population, "
                          "or the population was empty.")
            logger.error(self.error)
            return StepResult.FAILURE

        if self._should_stop():
            self._done = True
            return StepResult.DONE

        time_start = time.perf_counter()

        # Selection
        try:
            parents = self.selector.select(self._population, self.fitness_type, rng=self.rng)
        except SelectionError as e:
            self.error = str(e)
            logger.error(f"Selection failed at generation {self.iterations()}: {e}")
            return StepResult.FAILURE

        # One child per parent pair: recombine, then mutate the result
        children = [first.crossover(second).mutate() for first, second in parents]

        # Make room for the children, then add them
        stochastic_cull(self._population, len(children), rng=self.rng)
        self._population.extend(children)

        if self.early_stopper is not None:
            self.early_stopper.update(best_of(self._population, self.fitness_type).fitness())

        self.iter_limit.inc()

        step_duration = time.perf_counter() - time_start
        self.last_step_duration = step_duration
        self.duration += step_duration

        logger.debug(f"Generation {self.iterations()} complete: "
                     f"{len(children)} children, {step_duration * 1000:.2f} ms")
        return StepResult.SUCCESS

    def run(self) -> RunResult:
        """
        Step until the simulation is done or has failed.

        There is no rollback: after a failure the population stays as it was
        when the failure happened.
        """
        while True:
            result = self.step()
            if result is StepResult.DONE:
                logger.info(f"Simulation done after {self.iterations()} generations")
                return RunResult.DONE
            if result is StepResult.FAILURE:
                logger.warning(f"Simulation failed after {self.iterations()} generations: "
                               f"{self.error}")
                return RunResult.FAILURE

    def get(self) -> Phenotype:
        """
        Return a copy of the best phenotype in the current population.

        Raises:
            SimulationError: If the simulation has failed
        """
        if self.error is not None:
            raise SimulationError(self.error)
        if not self._population:
            raise SimulationError("The population is empty; there is no best phenotype.")
        return copy.deepcopy(best_of(self._population, self.fitness_type))

    @property
    def population(self) -> List[Phenotype]:
        """Snapshot of the current population; changing it does not affect the simulator."""
        return list(self._population)

    def iterations(self) -> int:
        return self.iter_limit.get()

    def elapsed_time(self) -> float:
        return self.duration


class SimulatorBuilder:
    """
    Fluent builder for `Simulator`.

    Every setter returns the builder itself for chaining. Values are only
    validated when `build()` assembles the `SimulatorConfig`.
    """

    def __init__(self):
        self._population: List[Phenotype] = []
        self._max_iterations = DEFAULT_MAX_ITERATIONS
        self._fitness_type = FitnessType.MAXIMIZE
        self._early_stop: Optional[Tuple[float, int]] = None
        self._selector: Selector = RankSelector(DEFAULT_SELECTION_COUNT)
        self._seed: Optional[int] = None

    def set_population(self, population: Sequence[Phenotype]) -> 'SimulatorBuilder':
        """Set the initial population (the sequence is copied)."""
        self._population = list(population)
        return self

    def set_max_iters(self, max_iterations: int) -> 'SimulatorBuilder':
        """The simulator stops after this number of generations."""
        self._max_iterations = max_iterations
        return self

    def set_fitness_type(self, fitness_type: Any) -> 'SimulatorBuilder':
        """Set whether fitness is maximized or minimized."""
        self._fitness_type = fitness_type
        return self

    def set_early_stop(self, delta: float, window: int) -> 'SimulatorBuilder':
        """
        Enable early stopping: if for `window` generations the change in the
        best fitness stays below `delta`, the simulator stops.
        """
        self._early_stop = (delta, window)
        return self

    def set_selector(self, selector: Selector) -> 'SimulatorBuilder':
        self._selector = selector
        return self

    def set_seed(self, seed: Optional[int]) -> 'SimulatorBuilder':
        self._seed = seed
        return self

    def build_config(self) -> SimulatorConfig:
        """Assemble and validate the configuration without building."""
        return SimulatorConfig(
            population=self._population,
            max_iterations=self._max_iterations,
            fitness_type=self._fitness_type,
            early_stop=self._early_stop,
            selector=self._selector,
            seed=self._seed,
        )

    def build(self) -> Simulator:
        """
        Build the simulator.

        Raises:
            ValueError: If any configured value is invalid
        """
        return Simulator(self.build_config())


def create_simulator_from_config(
    config: Dict[str, Any],
    population: Sequence[Phenotype]
) -> Simulator:
    """
    Create a Simulator from a configuration dictionary.

    Args:
        config: Configuration with 'simulation' and 'selection' sections
        population: Initial population

    Returns:
        Configured Simulator instance
    """
    simulation_config = config.get('simulation', {}) or {}

    builder = (Simulator.builder()
               .set_population(population)
               .set_max_iters(simulation_config.get('max_iterations', DEFAULT_MAX_ITERATIONS))
               .set_fitness_type(simulation_config.get('fitness_type', 'maximize'))
               .set_selector(create_selector_from_config(config))
               .set_seed(simulation_config.get('seed')))

    early_stop = simulation_config.get('early_stop')
    if early_stop:
        builder.set_early_stop(
            early_stop.get('delta', 0.0),
            early_stop.get('window', 1),
        )

    simulator = builder.build()
    logger.info(f"Simulator created: {len(population)} individuals, "
                f"max_iterations={simulator.iter_limit.maximum}, "
                f"fitness_type={simulator.fitness_type.value}, "
                f"selector={simulator.selector!r}, "
                f"early_stop={simulator.config.early_stop}")
    return simulator
