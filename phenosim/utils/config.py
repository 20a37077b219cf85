"""
Configuration loading for PhenoSim.

Configurations are YAML files. A file may contain a top-level `defaults`
key, in which case it is merged on top of `default_config.yaml` from the
configurations shipped in `phenosim/config/`.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default_config.yaml"

CONFIG_SECTIONS = ('simulation', 'selection', 'problem', 'logging', 'output')


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to a YAML file, or the name of a file in phenosim/config/ or ./config/
            (with or without the .yaml extension)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If no matching configuration file exists
    """
    config_file = Path(config_path)

    if not config_file.exists():
        # Try default config locations
        possible_paths = [
            CONFIG_DIR / f"{config_path}.yaml",
            CONFIG_DIR / f"{config_path}_config.yaml",
            Path("config") / f"{config_path}.yaml",
            Path("config") / f"{config_path}_config.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                config_file = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}. "
                f"Tried: {[str(p) for p in possible_paths]}"
            )

    logger.info(f"Loading configuration from: {config_file}")

    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}

    # Handle YAML defaults directive if present
    if 'defaults' in config:
        if DEFAULT_CONFIG_PATH.exists() and config_file.resolve() != DEFAULT_CONFIG_PATH.resolve():
            with open(DEFAULT_CONFIG_PATH, 'r') as f:
                default_config = yaml.safe_load(f) or {}
            config = deep_merge(default_config, config)
        config.pop('defaults', None)

    return config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with override values

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """
    Return one section of a configuration.

    Factories accept either a full configuration or just their own section.
    A dictionary holding any top-level section key is treated as a full
    configuration, so a missing section yields an empty dict instead of the
    top-level keys.

    Args:
        config: Full configuration or the section itself
        name: Section name, one of CONFIG_SECTIONS

    Returns:
        Section dictionary (possibly empty)
    """
    if name in config:
        return config[name] or {}
    if any(section in config for section in CONFIG_SECTIONS):
        return {}
    return config
