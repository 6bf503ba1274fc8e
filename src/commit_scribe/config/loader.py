"""Configuration discovery and loading.

Configuration is read from the first of these found while walking up from
the starting directory:

1. ``.commit-scribe.toml`` (settings at the top level)
2. ``pyproject.toml`` (settings under ``[tool.commit-scribe]``)

When neither exists the defaults are used.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from commit_scribe.config.models import CommitScribeConfig
from commit_scribe.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".commit-scribe.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"
TOOL_NAME = "commit-scribe"


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Raises:
        ConfigNotFoundError: If the file does not exist or cannot be read
        ConfigValidationError: If the file is not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Configuration file not found: {path}") from e
    except OSError as e:
        raise ConfigNotFoundError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def find_config_file(start: Path | None = None) -> Path | None:
    """Find the nearest configuration file, or None.

    A pyproject.toml only counts when it has a ``[tool.commit-scribe]``
    table; the search continues upward otherwise.
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        dedicated = directory / CONFIG_FILE_NAME
        if dedicated.is_file():
            return dedicated

        pyproject = directory / PYPROJECT_FILE_NAME
        if pyproject.is_file() and extract_tool_config(load_toml(pyproject)):
            return pyproject

    return None


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Get the ``[tool.commit-scribe]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def parse_config(data: dict[str, Any], source: str = "<config>") -> CommitScribeConfig:
    """Validate raw configuration data.

    Raises:
        ConfigValidationError: If any value is invalid
    """
    try:
        return CommitScribeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {source}:\n{e}") from e


def load_config(path: Path | None = None) -> CommitScribeConfig:
    """Load configuration.

    Args:
        path: A configuration file, or a directory to search from (defaults
            to the current directory)

    Returns:
        Validated configuration; defaults when no file is found
    """
    if path is not None and path.is_file():
        config_path: Path | None = path
    else:
        config_path = find_config_file(path)

    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return CommitScribeConfig()

    logger.debug("Loading configuration from %s", config_path)
    data = load_toml(config_path)
    if config_path.name == PYPROJECT_FILE_NAME:
        data = extract_tool_config(data)
    return parse_config(data, str(config_path))
