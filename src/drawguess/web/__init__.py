"""HTTP controllers."""

from __future__ import annotations

from drawguess.web.health import HealthController
from drawguess.web.rooms import RoomController

__all__ = ["HealthController", "RoomController"]
