"""Map decoded response fields onto a typed ServerRecord.

A value that is present but unparsable for its type is treated as absent;
the record itself is still accepted. Each such field is logged as a warning.
"""

import ipaddress
import logging
import re
import uuid
from typing import Callable, Optional, TypeVar

from ..discovery.models import ServerRecord
from ..errors import FieldTypeError
from .fields import CLIP, JSON, NAME, UUID, VERS, FieldMap

logger = logging.getLogger(__name__)

T = TypeVar("T")

_VERSION_RE = re.compile(r"\d+(\.\d+){1,3}", re.ASCII)
_PORT_RE = re.compile(r"\d+", re.ASCII)

MAX_PORT = 65535


def parse_version(value: str) -> tuple[int, ...]:
    """Parse a dotted version such as '9.0.2' into (9, 0, 2).

    Two to four numeric components are accepted.

    Raises:
        FieldTypeError: If the value is not a dotted numeric version.
    """
    if not _VERSION_RE.fullmatch(value):
        raise FieldTypeError(VERS, value, "dotted version")
    return tuple(int(part) for part in value.split("."))


def parse_uuid(value: str) -> uuid.UUID:
    """Parse a 128-bit identifier.

    Raises:
        FieldTypeError: If the value is not a UUID.
    """
    try:
        return uuid.UUID(value)
    except ValueError:
        raise FieldTypeError(UUID, value, "UUID") from None


def parse_port(key: str, value: str) -> int:
    """Parse a decimal TCP port number.

    Raises:
        FieldTypeError: If the value is not a port in 0..65535.
    """
    if not _PORT_RE.fullmatch(value):
        raise FieldTypeError(key, value, "port number")
    port = int(value)
    if port > MAX_PORT:
        raise FieldTypeError(key, value, "port number")
    return port


def _optional(
    fields: FieldMap,
    key: str,
    parse: Callable[[str], T],
    source: str,
) -> Optional[T]:
    value = fields.get(key)
    if not value:
        return None
    try:
        return parse(value)
    except FieldTypeError as e:
        logger.warning("Ignoring field from %s: %s", source, e)
        return None


def map_record(fields: FieldMap, source_address: str) -> ServerRecord:
    """Build a ServerRecord from an accepted FieldMap.

    Args:
        fields: Decoded fields carrying every required key.
        source_address: IP address of the datagram's sender.

    Returns:
        The mapped ServerRecord. Empty or unparsable values map to None.

    Raises:
        ValueError: If source_address is not an IP address.
    """
    return ServerRecord(
        name=fields.get(NAME) or None,
        version=_optional(fields, VERS, parse_version, source_address),
        uuid=_optional(fields, UUID, parse_uuid, source_address),
        json_port=_optional(fields, JSON, lambda v: parse_port(JSON, v), source_address),
        clip_port=_optional(fields, CLIP, lambda v: parse_port(CLIP, v), source_address),
        source_address=ipaddress.ip_address(source_address),
    )
