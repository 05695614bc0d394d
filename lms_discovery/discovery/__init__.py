"""Discovery module - UDP broadcast discovery of media servers."""

from .models import ServerRecord
from .registry import ResultRegistry
from .cancellation import CancellationToken
from .session import (
    DEFAULT_BROADCAST_ADDRESS,
    DiscoverySession,
    SessionState,
    discover,
)

__all__ = [
    "ServerRecord",
    "ResultRegistry",
    "CancellationToken",
    "DEFAULT_BROADCAST_ADDRESS",
    "DiscoverySession",
    "SessionState",
    "discover",
]
