"""Configuration data models for discovery runs."""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from ..discovery.session import DEFAULT_BROADCAST_ADDRESS, WILDCARD_ADDRESS
from ..protocol import DEFAULT_DISCOVERY_PORT

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class DiscoveryConfig:
    """Settings for a discovery run."""
    port: int = DEFAULT_DISCOVERY_PORT
    timeout: float = 5.0
    deadline: Optional[float] = None
    broadcast_address: str = DEFAULT_BROADCAST_ADDRESS
    bind_address: str = WILDCARD_ADDRESS
    log_level: str = "INFO"

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()

    def merged(self, **overrides: Any) -> "DiscoveryConfig":
        """Copy with the given non-None values replaced."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return DiscoveryConfig(**values)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class ConfigIssue:
    """A problem found in one configuration value."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Problems found while validating a DiscoveryConfig.

    Errors make the configuration unusable; warnings are only logged.
    """
    errors: list[ConfigIssue] = field(default_factory=list)
    warnings: list[ConfigIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors
