"""YAML configuration loader.

Looks for, in order: an explicit path, ./lms-discovery.yaml, then
~/.config/lms-discovery/config.yaml. With no file, defaults apply.
"""

from pathlib import Path
from typing import Optional, Union

import yaml

from .schema import DiscoveryConfig

LOCAL_CONFIG_NAME = "lms-discovery.yaml"


def get_config_path(config_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Get the path of the configuration file to load, or None if there is none."""
    if config_path:
        return Path(config_path)

    local_config = Path.cwd() / LOCAL_CONFIG_NAME
    user_config = Path.home() / ".config" / "lms-discovery" / "config.yaml"

    for candidate in (local_config, user_config):
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: Optional[Union[str, Path]] = None) -> DiscoveryConfig:
    """Load discovery configuration.

    Args:
        config_path: Explicit YAML file. Default: search the standard locations.

    Returns:
        DiscoveryConfig with file values over defaults.

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist.
        ValueError: If the YAML is malformed or not a mapping.
    """
    path = get_config_path(config_path)
    if path is None:
        return DiscoveryConfig()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config {path}: {e}") from e

    if data is None:
        return DiscoveryConfig()

    return parse_config_data(data, source=str(path))


def parse_config_data(data: dict, source: str = "<inline>") -> DiscoveryConfig:
    """Build a DiscoveryConfig from an already loaded mapping.

    Unknown keys are ignored.

    Raises:
        ValueError: If data is not a mapping.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__} in {source}")

    return DiscoveryConfig(**{
        k: v for k, v in data.items()
        if k in DiscoveryConfig.__dataclass_fields__
    })
