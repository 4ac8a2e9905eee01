"""Container data models.

A ContainerHandle is the caller-owned reference to a provisioned container.
It is built from the runtime's inspect payload and stays valid as a value
after the container itself has been removed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RuntimeConnection:
    """Resolved connection to the Docker daemon."""

    scheme: str
    host: str  # Address where published container ports are reachable
    endpoint: str
    tls_cert_path: Optional[str] = None


@dataclass(frozen=True)
class PortBinding:
    """One host binding of a container port."""

    internal_port: int
    protocol: str
    host_port: str  # Raw value as reported by the runtime
    host_ip: str = ""


@dataclass
class ContainerHandle:
    """Represents a started container.

    ``ports`` maps ``"<port>/<protocol>"`` keys to the host bindings the
    runtime published for that port.
    """

    id: str
    name: str
    host: str
    ports: Dict[str, List[PortBinding]] = field(default_factory=dict)

    @classmethod
    def from_attrs(cls, attrs: Dict[str, Any], host: str) -> "ContainerHandle":
        """Build a handle from a docker inspect payload."""
        network = attrs.get("NetworkSettings") or {}
        ports: Dict[str, List[PortBinding]] = {}
        for key, bindings in (network.get("Ports") or {}).items():
            port, _, protocol = key.partition("/")
            protocol = protocol or "tcp"
            ports[key] = [
                PortBinding(
                    internal_port=int(port),
                    protocol=protocol,
                    host_port=str(b.get("HostPort", "")),
                    host_ip=b.get("HostIp", ""),
                )
                for b in (bindings or [])
            ]
        return cls(
            id=attrs["Id"],
            name=(attrs.get("Name") or "").lstrip("/"),
            host=host,
            ports=ports,
        )


class ReadinessStatus(str, Enum):
    """Outcome of a readiness watch."""

    FOUND = "found"
    TIMED_OUT = "timed_out"
    SCAN_ERROR = "scan_error"


@dataclass(frozen=True)
class ReadinessOutcome:
    """Result of racing a log match against a timeout."""

    status: ReadinessStatus
    detail: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status is ReadinessStatus.FOUND
