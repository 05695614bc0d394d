"""Discover Lyrion/Logitech Media Server instances on the local network."""

from .discovery import (
    CancellationToken,
    DiscoverySession,
    ResultRegistry,
    ServerRecord,
    SessionState,
    discover,
)
from .protocol import DEFAULT_DISCOVERY_PORT, REQUIRED_KEYS
from .transport import Transport, UdpTransport

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "DiscoverySession",
    "ResultRegistry",
    "ServerRecord",
    "SessionState",
    "discover",
    "DEFAULT_DISCOVERY_PORT",
    "REQUIRED_KEYS",
    "Transport",
    "UdpTransport",
]
