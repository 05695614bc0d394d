"""Exception types raised while discovering media servers."""


class DiscoveryError(Exception):
    """Base class for discovery errors."""


class ProtocolFormatError(DiscoveryError, ValueError):
    """A datagram does not follow the discovery response layout."""


class IncompleteRecord(DiscoveryError):
    """A decoded response lacks one or more required keys."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Response missing required keys: {', '.join(missing)}")


class FieldTypeError(DiscoveryError, ValueError):
    """A field is present but its value cannot be parsed as its type."""

    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"{key}={value!r} is not a valid {expected}")


class ReceiveTimeout(DiscoveryError, TimeoutError):
    """The transport's receive wait bound elapsed without a datagram."""


class DiscoveryCancelled(DiscoveryError):
    """The caller's cancellation signal fired."""
