"""Validation of discovery configuration values."""

import ipaddress

from .schema import (
    DiscoveryConfig,
    ConfigIssue,
    ValidationResult,
    VALID_LOG_LEVELS,
)


def validate_config(config: DiscoveryConfig) -> ValidationResult:
    """Validate a DiscoveryConfig.

    Args:
        config: Configuration to check.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ConfigIssue] = []
    warnings: list[ConfigIssue] = []

    if isinstance(config.port, bool) or not isinstance(config.port, int) \
            or not 1 <= config.port <= 65535:
        errors.append(ConfigIssue(
            path="port",
            message=f"Port must be an integer in 1..65535, got {config.port!r}.",
        ))

    if not _is_positive_number(config.timeout):
        errors.append(ConfigIssue(
            path="timeout",
            message=f"Timeout must be a positive number of seconds, got {config.timeout!r}.",
        ))

    if config.deadline is not None:
        if not _is_positive_number(config.deadline):
            errors.append(ConfigIssue(
                path="deadline",
                message=f"Deadline must be a positive number of seconds, got {config.deadline!r}.",
            ))
        elif _is_positive_number(config.timeout) and config.deadline < config.timeout:
            warnings.append(ConfigIssue(
                path="deadline",
                message="Deadline is shorter than the receive timeout; it is only checked between datagrams.",
            ))

    try:
        if not isinstance(config.broadcast_address, str):
            raise ValueError()
        ipaddress.IPv4Address(config.broadcast_address)
    except ValueError:
        errors.append(ConfigIssue(
            path="broadcast_address",
            message=f"Invalid IPv4 broadcast address '{config.broadcast_address}'.",
        ))

    if config.log_level not in VALID_LOG_LEVELS:
        errors.append(ConfigIssue(
            path="log_level",
            message=f"Invalid log level '{config.log_level}'. Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}",
        ))

    return ValidationResult(
        errors=errors,
        warnings=warnings,
    )


def _is_positive_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
