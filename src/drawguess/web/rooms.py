"""Read-only HTTP lookup of live rooms."""

from __future__ import annotations

from typing import Any, ClassVar

import structlog
from litestar import Controller, get

from drawguess.services.registry import RoomRegistry  # noqa: TC001

logger = structlog.get_logger(__name__)


class RoomController(Controller):
    """Lets a client check a room code before opening a WebSocket."""

    path = "/rooms"
    tags: ClassVar[list[str]] = ["Rooms"]

    @get("/{code:str}")
    async def get_room(self, code: str, registry: RoomRegistry) -> dict[str, Any]:
        """Get a snapshot of a room.

        Args:
            code: Room code (case-insensitive).
            registry: The room registry.

        Returns:
            Roster and current turn info; never the secret word.

        Raises:
            RoomNotFoundError: If no live room has that code (404).
        """
        session = registry.get(code)
        logger.debug("Room looked up", room_code=session.code)
        return session.snapshot().to_dict()
