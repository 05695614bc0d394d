"""Data model for discovered media servers."""

import uuid
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Optional, Union

IPAddress = Union[IPv4Address, IPv6Address]


@dataclass(frozen=True)
class ServerRecord:
    """A media server that answered the discovery probe.

    Two records are equal when all six attributes are equal, so the same
    server answering twice from the same address is one record.
    """
    name: Optional[str]
    version: Optional[tuple[int, ...]]
    uuid: Optional[uuid.UUID]
    json_port: Optional[int]
    clip_port: Optional[int]
    source_address: IPAddress

    @property
    def version_string(self) -> Optional[str]:
        """Dotted version, e.g. '9.0.2'."""
        if self.version is None:
            return None
        return ".".join(str(part) for part in self.version)

    @property
    def base_url(self) -> Optional[str]:
        """HTTP base URL of the server's JSON port, if it announced one."""
        if self.json_port is None:
            return None
        host = self.source_address
        if isinstance(host, IPv6Address):
            return f"http://[{host}]:{self.json_port}"
        return f"http://{host}:{self.json_port}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation."""
        return {
            "name": self.name,
            "version": self.version_string,
            "uuid": str(self.uuid) if self.uuid else None,
            "json_port": self.json_port,
            "clip_port": self.clip_port,
            "address": str(self.source_address),
        }

    def __str__(self) -> str:
        name = self.name or "<unnamed>"
        version_str = f" {self.version_string}" if self.version else ""
        port_str = f":{self.json_port}" if self.json_port is not None else ""
        return f"{name}{version_str} at {self.source_address}{port_str}"
