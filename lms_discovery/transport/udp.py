"""UDP socket transport for broadcast discovery."""

import logging
import socket
from typing import Optional

from ..errors import ReceiveTimeout
from .base import Address

logger = logging.getLogger(__name__)

# Largest datagram read in one receive
RECEIVE_BUFFER_SIZE = 4096


class UdpTransport:
    """Transport backed by an IPv4 UDP socket.

    The socket is created on construction and released by close(), which
    may be called any number of times.
    """

    def __init__(self, sock: Optional[socket.socket] = None):
        """Initialize UDP transport.

        Args:
            sock: Pre-built socket to use. Default: a new AF_INET datagram socket.
        """
        self._sock: Optional[socket.socket] = sock or self._create_socket()

    def _create_socket(self) -> socket.socket:
        """Create the UDP socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return sock

    @property
    def closed(self) -> bool:
        """Whether the socket has been released."""
        return self._sock is None

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError("Transport is closed")
        return self._sock

    def bind(self, address: str, port: int) -> None:
        """Bind for receiving. An empty address means all interfaces."""
        self._socket().bind((address, port))
        logger.debug("Bound UDP socket to %s:%d", address or "*", port)

    def set_broadcast_enabled(self, enabled: bool) -> None:
        self._socket().setsockopt(
            socket.SOL_SOCKET, socket.SO_BROADCAST, 1 if enabled else 0
        )

    def set_receive_wait_bound(self, seconds: Optional[float]) -> None:
        """Set how long receive() blocks.

        Args:
            seconds: Wait in seconds. None or 0 blocks indefinitely.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds is not None and seconds < 0:
            raise ValueError(f"Receive wait bound must not be negative, got {seconds}")
        if seconds == 0:
            seconds = None
        self._socket().settimeout(seconds)

    def send(self, data: bytes, length: int, destination: Address) -> int:
        """Send the first length bytes of data to destination.

        Returns:
            Number of bytes sent.
        """
        return self._socket().sendto(data[:length], destination)

    def receive(self) -> tuple[bytes, Address]:
        """Receive one datagram.

        Returns:
            (payload, (sender_host, sender_port)).

        Raises:
            ReceiveTimeout: If the wait bound elapsed first.
        """
        try:
            data, addr = self._socket().recvfrom(RECEIVE_BUFFER_SIZE)
        except socket.timeout:
            raise ReceiveTimeout("No datagram within the receive wait bound") from None
        return data, (addr[0], addr[1])

    def close(self) -> None:
        """Close the UDP socket."""
        if self._sock:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
