"""
Configuration loader — reads .yarnrc.yml into a YarnrcConfig.

A project without a .yarnrc.yml simply has no yarn settings; that is
not an error. A file that exists but is not a YAML mapping is.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from pmprofiler.core.models.project import YarnrcConfig

logger = logging.getLogger(__name__)

YARNRC_FILE = ".yarnrc.yml"


class ConfigError(Exception):
    """Raised when .yarnrc.yml exists but cannot be read."""


def load_yarnrc(project_root: Path) -> YarnrcConfig:
    """Load ``.yarnrc.yml`` from the project root.

    Args:
        project_root: Directory containing the yarn project.

    Returns:
        YarnrcConfig, empty if the file is absent or empty.

    Raises:
        ConfigError: If the file is unreadable or not a YAML mapping.
    """
    path = project_root / YARNRC_FILE
    if not path.is_file():
        return YarnrcConfig()

    logger.debug("Loading yarn config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return YarnrcConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    return YarnrcConfig(values=data)
