"""Services owning process-wide game state."""

from __future__ import annotations

from drawguess.services.registry import RoomRegistry

__all__ = ["RoomRegistry"]
