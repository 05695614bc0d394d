"""Decoder for discovery response datagrams."""

from ..errors import ProtocolFormatError
from .fields import (
    HANDSHAKE_RESPONSE,
    KEY_WIDTH,
    LENGTH_WIDTH,
    FieldMap,
)


def decode_fields(data: bytes) -> FieldMap:
    """Decode a response datagram into a key -> value mapping.

    The buffer is scanned once, front to back. A repeated key keeps the
    value of its last occurrence. No check is made on which keys are present.

    Args:
        data: Raw datagram payload.

    Returns:
        Decoded FieldMap.

    Raises:
        ProtocolFormatError: If the handshake byte is wrong or a group is
            truncated or not decodable.
    """
    view = memoryview(data)

    if len(view) == 0 or view[0] != HANDSHAKE_RESPONSE[0]:
        raise ProtocolFormatError(
            "Expected response to start with 'E' handshake byte"
        )

    fields: FieldMap = {}
    pos = 1
    end = len(view)

    while pos < end:
        if end - pos < KEY_WIDTH + LENGTH_WIDTH:
            raise ProtocolFormatError(
                f"Truncated key/length group at offset {pos}"
            )

        raw_key = bytes(view[pos:pos + KEY_WIDTH])
        length = view[pos + KEY_WIDTH]
        pos += KEY_WIDTH + LENGTH_WIDTH

        if end - pos < length:
            raise ProtocolFormatError(
                f"Value for {raw_key!r} declares {length} bytes, "
                f"only {end - pos} remain"
            )

        raw_value = bytes(view[pos:pos + length])
        pos += length

        try:
            key = raw_key.decode("ascii")
            value = raw_value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolFormatError(f"Undecodable group {raw_key!r}: {e}") from e

        fields[key] = value

    return fields
