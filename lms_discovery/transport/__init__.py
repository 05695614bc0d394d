"""Transport module - datagram endpoints."""

from .base import Address, Transport
from .udp import RECEIVE_BUFFER_SIZE, UdpTransport

__all__ = [
    "Address",
    "Transport",
    "RECEIVE_BUFFER_SIZE",
    "UdpTransport",
]
