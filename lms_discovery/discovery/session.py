"""Discovery session - one broadcast probe, one listening window.

Lifecycle:
    IDLE -> BOUND -> BROADCASTING -> LISTENING -> TIMED_OUT | CANCELLED -> CLOSED

The transport is closed on every exit path, including errors raised by
bind or send. Datagrams that are malformed, incomplete, or echoes of the
probe are dropped and listening continues.
"""

import logging
from enum import Enum
from typing import Optional

from ..errors import DiscoveryCancelled, ReceiveTimeout
from ..protocol import DEFAULT_DISCOVERY_PORT, build_probe, classify, map_record
from ..transport.base import Address, Transport
from .cancellation import CancellationToken
from .models import ServerRecord
from .registry import ResultRegistry

logger = logging.getLogger(__name__)

# Bind on all interfaces
WILDCARD_ADDRESS = ""

DEFAULT_BROADCAST_ADDRESS = "255.255.255.255"


class SessionState(str, Enum):
    """States of a discovery session."""
    IDLE = "idle"
    BOUND = "bound"
    BROADCASTING = "broadcasting"
    LISTENING = "listening"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    CLOSED = "closed"


class DiscoverySession:
    """Runs one discovery conversation over an exclusively owned transport.

    The session sends a single probe and then receives until the transport's
    wait bound elapses or the cancellation token fires. The token is polled
    before each receive and after each handled datagram; a receive already
    blocking is not interrupted by it.
    """

    def __init__(
        self,
        transport: Transport,
        request_timeout: Optional[float],
        cancellation: Optional[CancellationToken] = None,
        port: int = DEFAULT_DISCOVERY_PORT,
        broadcast_address: str = DEFAULT_BROADCAST_ADDRESS,
        bind_address: str = WILDCARD_ADDRESS,
    ):
        """Initialize discovery session.

        Args:
            transport: Transport to bind, broadcast and listen on. The session
                closes it when run() returns.
            request_timeout: Receive wait bound in seconds. None or 0 = no bound.
            cancellation: Cancellation token. Default: one that never fires.
            port: Discovery port to bind and broadcast to. Default: 3483.
            broadcast_address: Destination of the probe.
            bind_address: Local address to bind. Default: all interfaces.
        """
        self.transport = transport
        self.request_timeout = request_timeout
        self.cancellation = cancellation or CancellationToken()
        self.port = port
        self.broadcast_address = broadcast_address
        self.bind_address = bind_address
        self.registry = ResultRegistry()
        self.state = SessionState.IDLE
        self.outcome: Optional[SessionState] = None

    def run(self) -> set[ServerRecord]:
        """Run the session to completion.

        Returns:
            Servers discovered, possibly empty.

        Raises:
            RuntimeError: If the session has already run.
            OSError: If the transport fails to bind or send.
        """
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"Session cannot run from state {self.state.value}")

        try:
            self._bind()
            self._broadcast()
            self.outcome = self._listen()
            self._set_state(self.outcome)
        finally:
            self.transport.close()
            self._set_state(SessionState.CLOSED)

        logger.info(
            "Discovery %s with %d server(s)",
            self.outcome.value if self.outcome else "failed",
            len(self.registry),
        )
        return self.registry.records()

    def _set_state(self, state: SessionState) -> None:
        logger.debug("Session %s -> %s", self.state.value, state.value)
        self.state = state

    def _bind(self) -> None:
        self.transport.bind(self.bind_address, self.port)
        self.transport.set_broadcast_enabled(True)
        self.transport.set_receive_wait_bound(self.request_timeout)
        self._set_state(SessionState.BOUND)

    def _broadcast(self) -> None:
        self._set_state(SessionState.BROADCASTING)
        probe = build_probe()
        self.transport.send(probe, len(probe), (self.broadcast_address, self.port))
        logger.info("Sent discovery probe to %s:%d", self.broadcast_address, self.port)

    def _listen(self) -> SessionState:
        self._set_state(SessionState.LISTENING)

        while True:
            if self.cancellation.is_cancelled:
                return SessionState.CANCELLED

            try:
                data, sender = self.transport.receive()
            except ReceiveTimeout:
                return SessionState.TIMED_OUT
            except DiscoveryCancelled:
                return SessionState.CANCELLED

            self._handle_datagram(data, sender)

            if self.cancellation.is_cancelled:
                return SessionState.CANCELLED

    def _handle_datagram(self, data: bytes, sender: Address) -> None:
        fields = classify(data)
        if fields is None:
            return

        host = sender[0]
        try:
            record = map_record(fields, host)
        except ValueError as e:
            logger.warning("Dropping response from unusable sender %r: %s", host, e)
            return

        if self.registry.add(record):
            logger.info("Discovered: %s", record)


def discover(
    cancellation: Optional[CancellationToken],
    request_timeout: Optional[float],
    transport: Transport,
    port: int = DEFAULT_DISCOVERY_PORT,
) -> set[ServerRecord]:
    """Broadcast a discovery probe and collect the servers that answer.

    Never raises for receive timeouts or cancellation; the transport is
    always closed before returning.

    Args:
        cancellation: Token polled between datagrams. None = never cancelled.
        request_timeout: Receive wait bound in seconds. None or 0 = no bound.
        transport: Transport owned by this call.
        port: Discovery port. Default: 3483.

    Returns:
        Set of discovered ServerRecords, possibly empty.
    """
    session = DiscoverySession(
        transport,
        request_timeout,
        cancellation=cancellation,
        port=port,
    )
    return session.run()
