"""Read import maps from JSON or YAML sources for the CLI.

The library itself never touches files; only the command-line entry
point uses this module.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ImportMapLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def parse_import_map(text: str, source: str = "<stdin>", yaml_format: bool = False) -> Any:
    """Parse import map text without validating it.

    Args:
        text: JSON (or YAML) document
        source: Name used in error messages
        yaml_format: Parse as YAML instead of JSON

    Returns:
        The parsed value, whatever its shape

    Raises:
        ImportMapLoadError: Text is not well-formed JSON/YAML
    """
    try:
        if yaml_format:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ImportMapLoadError(f"Failed to parse import map from {source}: {e}") from e


def load_import_map(path: Path) -> Any:
    """Load an import map file. YAML is used for .yaml/.yml files, JSON otherwise.

    Raises:
        ImportMapLoadError: File missing, unreadable or not parseable
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ImportMapLoadError(f"Cannot read import map file {path}: {e}") from e

    logger.debug(f"[importmap:load] read {len(text)} characters from {path}")
    return parse_import_map(text, source=str(path), yaml_format=path.suffix.lower() in YAML_SUFFIXES)
