"""Protocol module - discovery wire format."""

from .classifier import classify, missing_keys, require_complete
from .decoder import decode_fields
from .fields import (
    DEFAULT_DISCOVERY_PORT,
    REQUIRED_KEYS,
    FieldMap,
    build_probe,
    encode_fields,
)
from .mapper import map_record, parse_port, parse_uuid, parse_version

__all__ = [
    "classify",
    "missing_keys",
    "require_complete",
    "decode_fields",
    "DEFAULT_DISCOVERY_PORT",
    "REQUIRED_KEYS",
    "FieldMap",
    "build_probe",
    "encode_fields",
    "map_record",
    "parse_port",
    "parse_uuid",
    "parse_version",
]
