"""
Termination criteria for PhenoSim simulations.

- IterationLimit: a generation counter with a ceiling
- EarlyStopper: plateau detection on the best fitness per generation
"""

import logging
import math
import numbers
from collections import deque
from typing import Any, Deque, List, Tuple

logger = logging.getLogger(__name__)


class IterationLimit:
    """Monotonic generation counter that reports when its maximum is reached."""

    def __init__(self, maximum: int):
        if maximum < 0:
            raise ValueError(f"Iteration limit must be non-negative, got {maximum}")
        self.maximum = maximum
        self.current = 0

    def inc(self) -> None:
        self.current += 1

    def reset(self) -> None:
        self.current = 0

    def get(self) -> int:
        return self.current

    def reached(self) -> bool:
        return self.current >= self.maximum

    def __repr__(self) -> str:
        return f"IterationLimit({self.current}/{self.maximum})"


def validate_early_stop(delta: Any, window: Any) -> Tuple[float, int]:
    """
    Check early stopping parameters.

    Args:
        delta: Change threshold, a finite non-negative number
        window: Plateau length in generations, a positive integer

    Returns:
        (delta, window) as (float, int)

    Raises:
        ValueError: If either value is invalid
    """
    if isinstance(delta, bool) or not isinstance(delta, numbers.Real):
        raise ValueError(f"Early stopping delta must be a number, got {delta!r}")
    if not math.isfinite(delta) or delta < 0:
        raise ValueError(f"Early stopping delta must be finite and non-negative, got {delta}")
    if isinstance(window, bool) or not isinstance(window, numbers.Integral):
        raise ValueError(f"Early stopping window must be an integer, got {window!r}")
    if window <= 0:
        raise ValueError(f"Early stopping window must be positive, got {window}")
    return float(delta), int(window)


class EarlyStopper:
    """
    Stops a simulation once the best fitness has plateaued.

    Every generation the simulator feeds the best fitness of its population
    to `update`. Once `window` values have been recorded, the stopper is
    reached when the newest value differs from the value `window - 1`
    updates earlier (the oldest in the window) by less than `delta`.

    Only the end points of the window are compared, so oscillation within
    `delta` counts as convergence while a steady drift across the window
    does not.

    Attributes:
        delta: Smallest change in best fitness over the window that counts as progress
        window: Number of generations the plateau must span
        history: Best fitness of the last `window` generations
        streak: Consecutive updates whose step-to-step change stayed below
            `delta` (reporting only)
    """

    def __init__(self, delta: float, window: int):
        """
        Args:
            delta: Finite non-negative change threshold
            window: Positive plateau length (in generations)

        Raises:
            ValueError: If delta or window is invalid
        """
        self.delta, self.window = validate_early_stop(delta, window)
        self.history: Deque[float] = deque(maxlen=self.window)
        self.streak = 0

    def update(self, fitness: float) -> None:
        """Record the best fitness of the generation that just finished."""
        if self.history and abs(fitness - self.history[-1]) < self.delta:
            self.streak += 1
        else:
            self.streak = 1
        self.history.append(fitness)

        if self.reached():
            logger.debug(f"Fitness plateau reached: change of "
                         f"{abs(self.history[-1] - self.history[0]):.6g} over "
                         f"{self.window} generations (delta={self.delta})")

    def reached(self) -> bool:
        return (len(self.history) == self.window
                and abs(self.history[-1] - self.history[0]) < self.delta)

    def reset(self) -> None:
        self.history.clear()
        self.streak = 0

    def get_history(self) -> List[float]:
        """Best fitness values of the last `window` generations, oldest first."""
        return list(self.history)

    def __repr__(self) -> str:
        return (f"EarlyStopper(delta={self.delta}, window={self.window}, "
                f"streak={self.streak})")
