#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the lessonmark CLI.

A configuration file holds ``ParserOptions`` values, for example::

    # .lessonmark.toml
    static_host = "https://static.example.org"
    resource_web_root = "/article/intro"
    locale = "en"

The same keys may live in a ``[tool.lessonmark]`` table of ``pyproject.toml``.
Keys may be written with hyphens or underscores.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from lessonmark.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES
from lessonmark.exceptions import ConfigurationError
from lessonmark.options import ParserOptions

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.lessonmark]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    data = _load_toml_config(pyproject_path)
    section = data.get("tool", {}).get("lessonmark")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.lessonmark] section in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    Each directory is checked for ``.lessonmark.toml``, ``.lessonmark.yaml``,
    ``.lessonmark.yml`` and ``.lessonmark.json`` in that order, then for a
    ``pyproject.toml`` with a ``[tool.lessonmark]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Locate the configuration file for this run.

    Search order:

    1. The file named by the ``LESSONMARK_CONFIG`` environment variable
    2. ``start_dir`` (default: cwd) and its parents, see ``find_config_in_parents``
    3. The user's home directory

    Returns
    -------
    Path or None
        Path to the configuration file, or None if there is none

    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        logger.debug(f"Using config file from {CONFIG_ENV_VAR}: {env_path}")
        return Path(env_path)

    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration values

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable or in an unsupported format

    Examples
    --------
    >>> config = load_config_file(".lessonmark.toml")
    >>> config.get("locale")
    'en'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    ext = config_path.suffix.lower()

    try:
        if config_path.name.lower() == PYPROJECT_FILENAME:
            return _load_pyproject_section(config_path)
        if ext == ".toml":
            return _load_toml_config(config_path)
        if ext in (".yaml", ".yml"):
            return _load_yaml_config(config_path)
        if ext == ".json":
            return _load_json_config(config_path)
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def options_from_config(config: Mapping[str, Any], base: Optional[ParserOptions] = None) -> ParserOptions:
    """Build parser options from configuration values.

    Parameters
    ----------
    config : Mapping
        Values loaded from a configuration file; hyphenated keys are accepted
    base : ParserOptions, optional
        Options to update, defaults to ``ParserOptions()``

    Returns
    -------
    ParserOptions
        ``base`` with the configured values applied

    Raises
    ------
    ConfigurationError
        If a key is not a parser option or a value is invalid

    """
    normalized = {str(key).replace("-", "_"): value for key, value in config.items()}

    unknown = sorted(set(normalized) - ParserOptions.field_names())
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration key(s): {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=normalized[unknown[0]],
        )

    return (base or ParserOptions()).create_updated(**normalized)
