"""Wire constants and encoders for the server discovery protocol.

Requests start with a lowercase ``e`` handshake byte, responses with an
uppercase ``E``. A response carries key/length/value groups: a 4-byte ASCII
key, one unsigned length byte, then that many bytes of UTF-8 value.
"""

from typing import Iterable, Mapping

# Default UDP discovery port
DEFAULT_DISCOVERY_PORT = 3483

HANDSHAKE_REQUEST = b"e"
HANDSHAKE_RESPONSE = b"E"

PROBE_PREFIX = "eIPAD\0"

KEY_WIDTH = 4
LENGTH_WIDTH = 1
MAX_VALUE_LENGTH = 255

NAME = "NAME"
VERS = "VERS"
UUID = "UUID"
JSON = "JSON"
CLIP = "CLIP"

# Keys a response must carry to describe a server; also the keys requested
# by the probe.
REQUIRED_KEYS = (NAME, VERS, UUID, JSON, CLIP)

FieldMap = dict[str, str]


def build_probe(keys: Iterable[str] = REQUIRED_KEYS) -> bytes:
    """Build the broadcast probe requesting the given keys.

    Args:
        keys: Keys to request. Default: REQUIRED_KEYS.

    Returns:
        UTF-8 probe payload, e.g. ``b"eIPAD\\0NAME\\0VERS\\0UUID\\0JSON\\0CLIP\\0"``.
    """
    return (PROBE_PREFIX + "".join(f"{key}\0" for key in keys)).encode("utf-8")


def encode_fields(fields: Mapping[str, str]) -> bytes:
    """Encode a field mapping as a discovery response datagram.

    Args:
        fields: Mapping of 4-character ASCII keys to text values.

    Returns:
        Response bytes starting with the ``E`` handshake byte.

    Raises:
        ValueError: If a key is not 4 ASCII bytes or a value exceeds 255 bytes.
    """
    out = bytearray(HANDSHAKE_RESPONSE)

    for key, value in fields.items():
        try:
            raw_key = key.encode("ascii")
        except UnicodeEncodeError:
            raise ValueError(f"Key must be ASCII, got {key!r}") from None
        if len(raw_key) != KEY_WIDTH:
            raise ValueError(f"Key must be {KEY_WIDTH} bytes, got {key!r}")

        raw_value = value.encode("utf-8")
        if len(raw_value) > MAX_VALUE_LENGTH:
            raise ValueError(
                f"Value for {key} is {len(raw_value)} bytes; max is {MAX_VALUE_LENGTH}"
            )

        out += raw_key
        out.append(len(raw_value))
        out += raw_value

    return bytes(out)
