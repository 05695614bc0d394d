"""Transport contract consumed by the discovery session."""

from typing import Optional, Protocol

Address = tuple[str, int]


class Transport(Protocol):
    """A datagram endpoint owned by one discovery session.

    ``receive`` blocks up to the configured wait bound. It raises
    ReceiveTimeout when the bound elapses and DiscoveryCancelled if the
    implementation supports interrupting a blocked receive.
    """

    def bind(self, address: str, port: int) -> None: ...

    def set_broadcast_enabled(self, enabled: bool) -> None: ...

    def set_receive_wait_bound(self, seconds: Optional[float]) -> None: ...

    def send(self, data: bytes, length: int, destination: Address) -> int: ...

    def receive(self) -> tuple[bytes, Address]: ...

    def close(self) -> None: ...
