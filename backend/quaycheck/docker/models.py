"""
Docker data models
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def _text(data: dict[str, Any], key: str, default: str = "") -> str:
    """String field of an Engine API object; null means the default"""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _names(value: Any) -> list[str]:
    names = value or []
    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise TypeError("Names must be a list of strings")
    return names


class ContainerState(str, Enum):
    """Container lifecycle state as reported by the Engine API"""

    CREATED = "created"
    RUNNING = "running"
    PAUSED = "paused"
    RESTARTING = "restarting"
    REMOVING = "removing"
    EXITED = "exited"
    DEAD = "dead"


@dataclass(frozen=True)
class PortMapping:
    """
    One published or exposed container port

    Attributes:
        private_port: Container-internal port
        public_port: Host-visible port (0 means exposed-only)
        protocol: "tcp" or "udp"
        host_ip: Bind address on the host ("" means all interfaces)
    """

    private_port: int
    public_port: int = 0
    protocol: str = "tcp"
    host_ip: str = ""

    @property
    def published(self) -> bool:
        """True if the port is bound on the host"""
        return self.public_port != 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PortMapping":
        """Build from an entry of the Engine API ``Ports`` array"""
        return cls(
            private_port=int(data.get("PrivatePort") or 0),
            public_port=int(data.get("PublicPort") or 0),
            protocol=_text(data, "Type") or "tcp",
            host_ip=_text(data, "IP"),
        )


@dataclass(frozen=True)
class Container:
    """
    Snapshot of one runtime-managed container

    Attributes:
        id: Full container id
        names: Names as reported by Docker (usually "/"-prefixed)
        image: Image reference
        state: ContainerState, or the raw string for states this version does not know
        ports: Port mappings in the order Docker reported them
    """

    id: str
    names: list[str] = field(default_factory=list)
    image: str = ""
    state: ContainerState | str = ContainerState.CREATED
    ports: list[PortMapping] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.state == ContainerState.RUNNING

    @property
    def display_name(self) -> str:
        if self.names:
            return self.names[0].lstrip("/")
        return self.id[:12]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Container":
        """Build from one element of ``GET /containers/json``"""
        raw_state = _text(data, "State").lower()
        try:
            state: ContainerState | str = ContainerState(raw_state)
        except ValueError:
            state = raw_state

        return cls(
            id=_text(data, "Id"),
            names=_names(data.get("Names")),
            image=_text(data, "Image"),
            state=state,
            ports=[PortMapping.from_api(p) for p in data.get("Ports") or []],
        )

    def __repr__(self) -> str:
        state = self.state.value if isinstance(self.state, ContainerState) else self.state
        return f"Container(name='{self.display_name}', state='{state}', ports={len(self.ports)})"


@dataclass(frozen=True)
class DockerVersion:
    """Subset of ``GET /version`` used for health reporting"""

    version: str
    api_version: str
    min_api_version: str | None = None
    os: str | None = None
    arch: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "DockerVersion":
        return cls(
            version=data.get("Version", "unknown"),
            api_version=data.get("ApiVersion", "unknown"),
            min_api_version=data.get("MinAPIVersion"),
            os=data.get("Os"),
            arch=data.get("Arch"),
        )
