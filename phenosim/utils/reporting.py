"""
Reporting utilities for PhenoSim.

Turns per-generation records into a pandas DataFrame and writes run
summaries (JSON) and generation histories (CSV).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    'generation',
    'best_fitness',
    'worst_fitness',
    'mean_fitness',
    'std_fitness',
    'median_fitness',
    'nan_count',
    'size',
]


def history_to_frame(records: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """
    Convert per-generation metric records into a DataFrame.

    Args:
        records: Dictionaries with at least a 'generation' key

    Returns:
        pd.DataFrame indexed by generation, sorted ascending. Missing
        standard columns are added as NaN; an empty input yields an empty
        frame with the standard columns.
    """
    if not records:
        return pd.DataFrame(columns=HISTORY_COLUMNS).set_index('generation')

    df = pd.DataFrame(list(records))
    if 'generation' not in df.columns:
        df['generation'] = range(len(df))

    for column in HISTORY_COLUMNS:
        if column not in df.columns:
            df[column] = float('nan')

    df = df.drop_duplicates(subset='generation', keep='last')
    return df.set_index('generation').sort_index()


def save_generation_history(
    records: Sequence[Dict[str, Any]],
    output_path: Union[str, Path]
) -> Path:
    """Write the generation history to CSV and return the path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    history_to_frame(records).to_csv(path)
    logger.info(f"Generation history saved to: {path}")
    return path


def save_run_summary(summary: Dict[str, Any], output_path: Union[str, Path]) -> Path:
    """
    Save a run summary as JSON.

    Args:
        summary: JSON-serializable summary (see EvolutionRun.to_summary)
        output_path: Destination file

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(summary, f, indent=2, default=str)
    logger.info(f"Run summary saved to: {path}")
    return path


def load_run_summary(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a summary written by `save_run_summary`."""
    with open(path, 'r') as f:
        return json.load(f)


def best_fitness_series(records: Sequence[Dict[str, Any]]) -> List[float]:
    """Best fitness per generation, ordered by generation."""
    frame = history_to_frame(records)
    return [float(v) for v in frame['best_fitness'].tolist()]
