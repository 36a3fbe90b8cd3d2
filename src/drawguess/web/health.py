"""Liveness endpoint with room and connection counts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, ClassVar

from litestar import Controller, get

from drawguess import __version__
from drawguess.realtime.gateway import ConnectionGateway  # noqa: TC001


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"


@dataclass
class HealthResponse:
    """Health check response."""

    status: HealthStatus
    rooms: int = 0
    connections: int = 0
    version: str = __version__
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "version": self.version,
            "timestamp": self.timestamp,
            "rooms": self.rooms,
            "connections": self.connections,
        }


class HealthController(Controller):
    """Health check controller for load balancer and orchestrator probes."""

    path = ""
    tags: ClassVar[list[str]] = ["Health"]

    @get("/health")
    async def health(self, gateway: ConnectionGateway) -> dict[str, Any]:
        """Liveness probe endpoint.

        Returns:
            Health status with the number of live rooms and connections.
        """
        return HealthResponse(
            status=HealthStatus.HEALTHY,
            rooms=gateway.registry.room_count,
            connections=gateway.connection_count,
        ).to_dict()
