"""
Visualization utilities for PhenoSim.

These helpers are intentionally lightweight and tolerant to partially
available inputs so a run can always emit plots without crashing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np

from .reporting import history_to_frame


def _prepare_output_path(output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _save_figure(fig: plt.Figure, output_path: Union[str, Path]) -> Path:
    path = _prepare_output_path(output_path)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path


def _empty_plot(ax: plt.Axes, message: str) -> None:
    ax.text(0.5, 0.5, message, ha="center", va="center")
    ax.set_axis_off()


def plot_fitness_vs_generation(
    generation_metrics: Sequence[Dict[str, Any]],
    output_path: Union[str, Path],
) -> Path:
    """Plot best and mean fitness by generation, with a +/- one std band."""
    frame = history_to_frame(generation_metrics)
    fig, ax = plt.subplots(figsize=(10, 5))

    if frame.empty:
        _empty_plot(ax, "No generation metrics")
        return _save_figure(fig, output_path)

    generations = frame.index.to_numpy()
    best = frame["best_fitness"].astype(float).to_numpy()
    mean = frame["mean_fitness"].astype(float).to_numpy()
    std = frame["std_fitness"].astype(float).fillna(0.0).to_numpy()

    ax.plot(generations, best, label="Best Fitness", linewidth=2)
    ax.plot(generations, mean, label="Mean Fitness", linewidth=1.5)
    ax.fill_between(generations, mean - std, mean + std, alpha=0.2, label="Mean +/- Std")
    ax.set_title("Fitness vs Generation")
    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.legend()
    ax.grid(alpha=0.2)
    return _save_figure(fig, output_path)


def plot_fitness_distribution(
    fitness_values: Sequence[float],
    output_path: Union[str, Path],
    bins: int = 30,
) -> Path:
    """Histogram of the (finite) fitness values of a population."""
    values = np.asarray(list(fitness_values or []), dtype=np.float64)
    values = values[np.isfinite(values)]
    fig, ax = plt.subplots(figsize=(8, 5))

    if values.size == 0:
        _empty_plot(ax, "No finite fitness values")
        return _save_figure(fig, output_path)

    ax.hist(values, bins=bins, color="tab:blue", alpha=0.8)
    ax.axvline(float(np.mean(values)), color="tab:red", linestyle="--", label="Mean")
    ax.set_title("Final Population Fitness")
    ax.set_xlabel("Fitness")
    ax.set_ylabel("Count")
    ax.legend()
    ax.grid(alpha=0.2)
    return _save_figure(fig, output_path)
