"""Shared fixtures for unit tests."""

from typing import Callable, Optional, Union

import pytest

from lms_discovery.errors import ReceiveTimeout

MEDIA_SERVER_RESPONSE = (
    b"ENAME\x0cMEDIA-SERVER"
    b"VERS\x059.0.2"
    b"UUID\x24b34f68fa-e9ae-4238-b2ce-18bb48fa26a6"
    b"JSON\x049000"
    b"CLIP\x049090"
)

LIVING_ROOM_RESPONSE = (
    b"ENAME\x12LIVING-ROOM-SERVER"
    b"VERS\x059.0.2"
    b"UUID\x24a12c34ef-b567-8901-d234-56ef78901234"
    b"JSON\x049000"
    b"CLIP\x049090"
)

REORDERED_RESPONSE = (
    b"EJSON\x049000"
    b"CLIP\x049090"
    b"NAME\x0cMEDIA-SERVER"
    b"UUID\x24b34f68fa-e9ae-4238-b2ce-18bb48fa26a6"
    b"VERS\x059.0.2"
)

MISSING_KEYS_RESPONSE = b"EJSON\x049000CLIP\x049090"

EMPTY_JSON_RESPONSE = (
    b"EJSON\x00"
    b"CLIP\x049090"
    b"NAME\x0cMEDIA-SERVER"
    b"UUID\x24b34f68fa-e9ae-4238-b2ce-18bb48fa26a6"
    b"VERS\x059.0.2"
)

PROBE = b"eIPAD\x00NAME\x00VERS\x00UUID\x00JSON\x00CLIP\x00"

Event = Union[tuple[str, bytes], BaseException, Callable[[], tuple[str, bytes]]]


class ScriptedTransport:
    """In-memory transport replaying a fixed list of receive events.

    Each event is (host, payload), an exception to raise, or a callable
    returning (host, payload). Once the script runs out, receive raises
    ReceiveTimeout.
    """

    def __init__(self, events: Optional[list[Event]] = None):
        self.events = list(events or [])
        self.bound: Optional[tuple[str, int]] = None
        self.broadcast_enabled = False
        self.wait_bound: Optional[float] = None
        self.sent: list[tuple[bytes, tuple[str, int]]] = []
        self.receive_calls = 0
        self.close_count = 0

    def bind(self, address, port):
        self.bound = (address, port)

    def set_broadcast_enabled(self, enabled):
        self.broadcast_enabled = enabled

    def set_receive_wait_bound(self, seconds):
        self.wait_bound = seconds

    def send(self, data, length, destination):
        self.sent.append((data[:length], destination))
        return length

    def receive(self):
        self.receive_calls += 1
        if not self.events:
            raise ReceiveTimeout("scripted timeout")
        event = self.events.pop(0)
        if isinstance(event, BaseException):
            raise event
        if callable(event):
            event = event()
        host, payload = event
        return payload, (host, 3483)

    def close(self):
        self.close_count += 1


@pytest.fixture
def make_transport():
    """Factory for ScriptedTransport instances."""
    return ScriptedTransport
