"""
Configuration loader — reads propfile.yml into a DescriptorSet.

A descriptor file names the project, the optional top-level group
order and every property to document.  YAML is parsed with
``yaml.safe_load`` and validated against the Pydantic models.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from propfile.core.models.document import DescriptorSet

logger = logging.getLogger(__name__)

# Default descriptor filename
DESCRIPTOR_FILE = "propfile.yml"


class ConfigError(Exception):
    """Raised when a descriptor file is invalid or missing."""


def find_descriptor_file(start_dir: Path | None = None) -> Path | None:
    """Search for propfile.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to propfile.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / DESCRIPTOR_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _read_yaml(path: Path) -> object:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_descriptors(path: Path | None = None) -> DescriptorSet:
    """Load and validate a descriptor file.

    Args:
        path: Explicit path to propfile.yml. If None, searches upward.

    Returns:
        Validated DescriptorSet.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_descriptor_file()

    if path is None:
        raise ConfigError(f"No {DESCRIPTOR_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Descriptor file not found: {path}")

    logger.debug("Loading descriptors from %s", path)
    data = _read_yaml(path)

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Everything may sit under a "propfile" key or be flat
    if isinstance(data.get("propfile"), dict):
        data = data["propfile"]

    try:
        descriptors = DescriptorSet.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid descriptor file {path}: {e}") from e

    logger.info(
        "Loaded %d properties for project '%s'",
        len(descriptors.properties), descriptors.project,
    )
    return descriptors


def load_template(path: Path) -> str:
    """Read a replacement document template.

    Raises:
        ConfigError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read template {path}: {e}") from e
