"""Runner module - discovery orchestration."""

from .executor import DiscoveryExecutor, ExecutionResult

__all__ = [
    "DiscoveryExecutor",
    "ExecutionResult",
]
