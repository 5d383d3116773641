# SPDX-License-Identifier: MIT
"""
Scanner configuration loader for Enveil.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from enveil.core.exceptions import EnveilConfigError
from enveil.core.walker import DEFAULT_QUARANTINE_DIR

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [".enveil.yml", ".enveil.yaml"]


def load_scanner_config(config_path: Optional[str] = None, repo_root: str = ".") -> Dict[str, Any]:
    """
    Load scanner configuration following the search order.

    Args:
        config_path: Explicit config path from --config CLI flag
        repo_root: Scanned root, searched for .enveil.yml/.enveil.yaml

    Returns:
        Dictionary containing scanner configuration

    Raises:
        EnveilConfigError: If config file is malformed or explicitly provided config is missing
    """
    repo_path = Path(repo_root).resolve()

    # 1. If CLI --config provided → load it
    if config_path:
        config_abs_path = Path(config_path).resolve()
        if not config_abs_path.exists():
            raise EnveilConfigError(
                f"Specified config file not found: {config_abs_path}",
                config_path=str(config_abs_path)
            )
        return _load_config_file(config_abs_path)

    # 2. Look for .enveil.yml or .enveil.yaml at the scanned root
    if repo_path.is_dir():
        for config_name in CONFIG_FILE_NAMES:
            config_file = repo_path / config_name
            if config_file.exists():
                return _load_config_file(config_file)

    # 3. Use built-in defaults
    logger.debug("Using default scanner config")
    return get_default_scanner_config()


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        config = _load_yaml_config(config_path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise EnveilConfigError(
            f"Failed to parse config file: {e}",
            config_path=str(config_path)
        ) from e
    logger.info("Loaded config: %s", config_path)
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load and validate YAML config file."""
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    config = _apply_scanner_defaults(config)
    _validate_scanner_config(config)
    return config


def _apply_scanner_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply default values to scanner configuration."""
    defaults = get_default_scanner_config()
    for key, value in defaults.items():
        config.setdefault(key, value)
    return config


def _validate_scanner_config(config: Dict[str, Any]) -> None:
    if not isinstance(config["quarantine_dir"], str) or not config["quarantine_dir"]:
        raise ValueError("quarantine_dir must be a non-empty string")

    for section in ("exclude_dirs", "disabled_rules"):
        value = config[section]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{section} must be a list of strings")


def get_default_scanner_config() -> Dict[str, Any]:
    """
    Get the default scanner configuration.

    Returns:
        Dictionary with default scanner settings
    """
    return {
        "quarantine_dir": DEFAULT_QUARANTINE_DIR,
        "exclude_dirs": [],
        "disabled_rules": [],
    }


def create_default_config_template() -> str:
    """
    Create a minimal .enveil.yml template with commented examples.

    Returns:
        YAML string with default configuration template
    """
    return """# Enveil Configuration

# Where `enveil protect` puts moved and encrypted files
quarantine_dir: enveil_secure

# Extra directory names to skip (.git, node_modules, target, dist, build,
# vendor and hidden directories are always skipped)
exclude_dirs: []
  # - "fixtures"

# Detector rules to disable by label
disabled_rules: []
  # - "HEX_SECRET"
  # - "JWT_TOKEN"
"""
