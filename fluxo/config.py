"""fluxo Configuration — project-level .fluxorc.yml support.

Loads configuration from .fluxorc.yml (or .fluxorc.yaml, .fluxorc.json)
in the project root or any parent directory.

Example .fluxorc.yml:
    max_reduction_steps: 2048   # 0 disables the bound
    log_level: DEBUG
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class FluxoConfig:
    """Kernel configuration."""
    # Upper bound on full reduction passes; <= 0 means unbounded
    max_reduction_steps: int = 512
    # Level applied to the "fluxo" logger by configure_logging()
    log_level: str = "WARNING"


# ---------------------------------------------------------------------------
# Config file names (in priority order)
# ---------------------------------------------------------------------------

_CONFIG_FILES = [
    ".fluxorc.yml",
    ".fluxorc.yaml",
    ".fluxorc.json",
    "fluxo.config.yml",
    "fluxo.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> FluxoConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, or it cannot be parsed, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return FluxoConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError:
        return FluxoConfig()

    if path.endswith(".json"):
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            return FluxoConfig()
    else:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError:
            return FluxoConfig()

    if not isinstance(data, dict):
        return FluxoConfig()
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> FluxoConfig:
    """Convert a parsed dict to FluxoConfig."""
    config = FluxoConfig()

    if "max_reduction_steps" in data:
        try:
            config.max_reduction_steps = int(data["max_reduction_steps"])
        except (TypeError, ValueError):
            logger.warning("ignoring max_reduction_steps=%r, not an integer",
                           data["max_reduction_steps"])
    if "log_level" in data:
        level = str(data["log_level"]).upper()
        # getLevelName maps known names to ints and anything else to a string
        if isinstance(logging.getLevelName(level), int):
            config.log_level = level
        else:
            logger.warning("ignoring unknown log_level %r", data["log_level"])

    return config


# ---------------------------------------------------------------------------
# Process-wide active configuration
# ---------------------------------------------------------------------------

_active: Optional[FluxoConfig] = None


def get_config() -> FluxoConfig:
    """Return the active configuration, loading it on first use."""
    global _active
    if _active is None:
        _active = load_config()
    return _active


def set_config(config: Optional[FluxoConfig]) -> None:
    """Replace the active configuration; None forces a reload on next use."""
    global _active
    _active = config


def configure_logging(config: Optional[FluxoConfig] = None) -> None:
    """Apply the configured level to the package logger."""
    config = config or get_config()
    logging.getLogger("fluxo").setLevel(config.log_level)
