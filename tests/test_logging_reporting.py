"""
Test suite for logging, reporting and visualization utilities.

Tests cover:
- EvolutionLogger JSON-lines output and summaries
- setup_logging handler configuration
- Generation history frames, CSV and JSON export
- Plot generation with full and empty inputs
"""

import json
import logging

import pandas as pd

from phenosim.utils.logging import EvolutionLogger, GenerationLog, LOGGER_NAME, setup_logging
from phenosim.utils.reporting import (
    HISTORY_COLUMNS,
    best_fitness_series,
    history_to_frame,
    load_run_summary,
    save_generation_history,
    save_run_summary,
)
from phenosim.utils.visualization import plot_fitness_distribution, plot_fitness_vs_generation


def make_records(n=5):
    return [
        {
            'generation': g,
            'size': 10,
            'best_fitness': float(10 - g),
            'worst_fitness': 20.0,
            'mean_fitness': float(15 - g),
            'std_fitness': 1.0,
            'median_fitness': 15.0,
            'nan_count': 0,
        }
        for g in range(n)
    ]


def make_generation_log(generation, best):
    return GenerationLog(
        generation=generation,
        step_result="success",
        population_size=10,
        best_fitness=best,
        mean_fitness=best + 1.0,
        std_fitness=0.5,
        step_seconds=0.001,
        early_stop_streak=1,
    )


class TestEvolutionLogger:
    """Test structured generation logging."""

    def test_generation_lines_written(self, tmp_path):
        evolution_logger = EvolutionLogger(tmp_path / "logs")
        evolution_logger.log_generation(make_generation_log(1, 5.0))
        evolution_logger.log_generation(make_generation_log(2, 3.0))

        lines = (tmp_path / "logs" / "generations.jsonl").read_text().splitlines()
        assert len(lines) == 2
        record = json.loads(lines[1])
        assert record['generation'] == 2
        assert record['best_fitness'] == 3.0
        assert 'timestamp' in record

    def test_get_generation_summary(self, tmp_path):
        evolution_logger = EvolutionLogger(tmp_path)
        assert evolution_logger.get_generation_summary(1) is None

        evolution_logger.log_generation(make_generation_log(1, 5.0))
        assert evolution_logger.get_generation_summary(1)['mean_fitness'] == 6.0
        assert evolution_logger.get_generation_summary(9) is None

    def test_evolution_summary(self, tmp_path):
        evolution_logger = EvolutionLogger(tmp_path)
        for generation, best in [(1, 8.0), (2, 5.0), (3, 2.0)]:
            evolution_logger.log_generation(make_generation_log(generation, best))

        summary = evolution_logger.get_evolution_summary()
        assert summary['total_generations'] == 3
        assert summary['initial_best_fitness'] == 8.0
        assert summary['final_best_fitness'] == 2.0
        assert summary['fitness_change'] == -6.0

    def test_metrics_lines_written(self, tmp_path):
        evolution_logger = EvolutionLogger(tmp_path)
        evolution_logger.log_metrics(10, {'best_fitness': 1.0, 'mean_fitness': 2.0})

        record = json.loads((tmp_path / "metrics.jsonl").read_text().strip())
        assert record['generation'] == 10
        assert record['best_fitness'] == 1.0


class TestSetupLogging:
    """Test standard logging configuration."""

    def test_file_handlers(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, log_level="DEBUG", log_to_console=False)
        try:
            assert logger.name == LOGGER_NAME
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            assert (tmp_path / "phenosim.log").exists()
            assert (tmp_path / "errors.log").exists()
        finally:
            setup_logging(log_to_file=False, log_to_console=False)

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(log_to_file=False)
        logger = setup_logging(log_to_file=False, log_level=logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING


class TestReporting:
    """Test generation history and summary export."""

    def test_history_to_frame(self):
        frame = history_to_frame(make_records())
        assert frame.index.name == 'generation'
        assert list(frame.index) == [0, 1, 2, 3, 4]
        assert frame.loc[4, 'best_fitness'] == 6.0

    def test_history_adds_missing_columns(self):
        frame = history_to_frame([{'generation': 0, 'best_fitness': 1.0}])
        for column in HISTORY_COLUMNS[1:]:
            assert column in frame.columns
        assert pd.isna(frame.loc[0, 'mean_fitness'])

    def test_empty_history(self):
        frame = history_to_frame([])
        assert frame.empty
        assert 'best_fitness' in frame.columns

    def test_duplicate_generations_keep_last(self):
        records = make_records(2) + [{'generation': 1, 'best_fitness': -1.0}]
        frame = history_to_frame(records)
        assert len(frame) == 2
        assert frame.loc[1, 'best_fitness'] == -1.0

    def test_save_generation_history(self, tmp_path):
        path = save_generation_history(make_records(), tmp_path / "metrics" / "history.csv")
        loaded = pd.read_csv(path, index_col='generation')
        assert len(loaded) == 5
        assert loaded['best_fitness'].iloc[0] == 10.0

    def test_summary_roundtrip(self, tmp_path):
        summary = {'result': 'done', 'generations': 12, 'best_fitness': 0.0}
        path = save_run_summary(summary, tmp_path / "summary.json")
        assert load_run_summary(path) == summary

    def test_best_fitness_series(self):
        assert best_fitness_series(make_records(3)) == [10.0, 9.0, 8.0]


class TestVisualization:
    """Test plot generation."""

    def test_fitness_vs_generation(self, tmp_path):
        path = plot_fitness_vs_generation(make_records(), tmp_path / "plots" / "fitness.png")
        assert path.exists()

    def test_fitness_vs_generation_empty(self, tmp_path):
        path = plot_fitness_vs_generation([], tmp_path / "empty.png")
        assert path.exists()

    def test_fitness_distribution(self, tmp_path):
        path = plot_fitness_distribution([1.0, 2.0, 2.5, float('nan')], tmp_path / "hist.png")
        assert path.exists()

    def test_fitness_distribution_empty(self, tmp_path):
        path = plot_fitness_distribution([], tmp_path / "hist_empty.png")
        assert path.exists()
