"""Decide whether a datagram describes a complete server response."""

import logging
from typing import Optional

from ..errors import IncompleteRecord, ProtocolFormatError
from .decoder import decode_fields
from .fields import REQUIRED_KEYS, FieldMap

logger = logging.getLogger(__name__)


def missing_keys(fields: FieldMap) -> list[str]:
    """Required keys absent from a decoded mapping, in protocol order."""
    return [key for key in REQUIRED_KEYS if key not in fields]


def require_complete(fields: FieldMap) -> FieldMap:
    """Return fields unchanged if every required key is present.

    An empty value still counts as present.

    Raises:
        IncompleteRecord: If any required key is absent.
    """
    missing = missing_keys(fields)
    if missing:
        raise IncompleteRecord(missing)
    return fields


def classify(data: bytes) -> Optional[FieldMap]:
    """Decode and check a datagram.

    Never raises: malformed or incomplete datagrams, the session's own probe
    echoed back, and blank payloads all classify as "not a server".

    Args:
        data: Raw datagram payload.

    Returns:
        The decoded FieldMap if it describes a server, otherwise None.
    """
    if not data.decode("utf-8", errors="replace").strip():
        logger.debug("Dropping blank datagram")
        return None

    try:
        return require_complete(decode_fields(data))
    except ProtocolFormatError as e:
        logger.debug("Dropping malformed datagram: %s", e)
    except IncompleteRecord as e:
        logger.debug("Dropping incomplete datagram: %s", e)
    return None
