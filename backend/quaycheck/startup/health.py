"""
Startup health registry

Records what each startup phase found so the /health endpoints can report it
without touching Docker again.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

COMPONENTS = ("configuration", "services", "docker", "static")


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class ComponentHealth:
    """What one startup phase reported"""

    status: HealthStatus = HealthStatus.UNKNOWN
    detail: str = ""
    checked_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "detail": self.detail,
            "checked_at": self.checked_at.isoformat() if self.checked_at else None,
        }


@dataclass
class SystemHealth:
    """
    Process-wide startup health

    Attributes:
        overall: Worst status across components, set once startup finishes
        ready: True between the end of startup and the start of shutdown
        components: One entry per startup phase
        errors: "component: detail" for each unhealthy component
        warnings: "component: detail" for each degraded component
    """

    overall: HealthStatus = HealthStatus.UNKNOWN
    ready: bool = False
    started_at: datetime | None = None
    components: dict[str, ComponentHealth] = field(
        default_factory=lambda: {name: ComponentHealth() for name in COMPONENTS}
    )
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def record(self, component: str, status: HealthStatus, detail: str = "") -> None:
        """Store a phase result; unhealthy and degraded results are also listed"""
        self.components[component] = ComponentHealth(status, detail, datetime.now(UTC))
        if status == HealthStatus.UNHEALTHY:
            self.errors.append(f"{component}: {detail}")
        elif status == HealthStatus.DEGRADED:
            self.warnings.append(f"{component}: {detail}")

    def mark_ready(self) -> None:
        """Derive the overall status and open for traffic"""
        if self.errors:
            self.overall = HealthStatus.UNHEALTHY
        elif self.warnings:
            self.overall = HealthStatus.DEGRADED
        else:
            self.overall = HealthStatus.HEALTHY
        self.ready = True
        self.started_at = datetime.now(UTC)

    @property
    def serving(self) -> bool:
        return self.ready and self.overall != HealthStatus.UNHEALTHY

    def to_dict(self) -> dict:
        return {
            "overall": self.overall.value,
            "ready": self.ready,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "components": {name: c.to_dict() for name, c in self.components.items()},
            "errors": self.errors,
            "warnings": self.warnings,
        }


_health_state = SystemHealth()


def get_health_state() -> SystemHealth:
    return _health_state


def reset_health_state() -> None:
    """Forget all recorded results (tests start each app from scratch)"""
    global _health_state
    _health_state = SystemHealth()
