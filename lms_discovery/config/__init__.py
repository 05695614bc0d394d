"""Config module - discovery settings."""

from .schema import (
    DiscoveryConfig,
    ConfigIssue,
    ValidationResult,
)
from .parser import get_config_path, load_config, parse_config_data
from .validator import validate_config

__all__ = [
    "DiscoveryConfig",
    "ConfigIssue",
    "ValidationResult",
    "get_config_path",
    "load_config",
    "parse_config_data",
    "validate_config",
]
