"""Registry of active game sessions."""

from __future__ import annotations

import asyncio
import random
import string
from typing import TYPE_CHECKING

import structlog

from drawguess.core.config import GameConfig
from drawguess.game.exceptions import RoomNotFoundError
from drawguess.game.models import GameSettings, ParticipantInfo
from drawguess.game.session import Session
from drawguess.game.wordbank import WordBank

if TYPE_CHECKING:
    from drawguess.game.models import Player, RoomSnapshot, Spectator
    from drawguess.game.session import Broadcaster

logger = structlog.get_logger(__name__)

HOST_LEFT_MESSAGE = "Host disconnected. Game over."


class RoomRegistry:
    """Owns every active Session and the room codes they live under.

    Provides:
    - Room creation with unique code generation
    - Lookup by code
    - Membership changes that may tear a room down (host leaves, room empties)
    - Host kicks, including forcing the kicked connection closed
    """

    def __init__(
        self,
        broadcaster: Broadcaster,
        config: GameConfig | None = None,
        word_bank: WordBank | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            broadcaster: Delivers session notifications to connections.
            config: Process configuration. Uses defaults if None.
            word_bank: Word bank for room pools. Uses the built-in list if None.
        """
        self._broadcaster = broadcaster
        self._config = config or GameConfig()
        self._word_bank = word_bank or WordBank(min_custom_words=self._config.min_custom_words)
        self._sessions: dict[str, Session] = {}
        self._lock = asyncio.Lock()

    @property
    def config(self) -> GameConfig:
        """Process configuration shared by all rooms."""
        return self._config

    @property
    def room_count(self) -> int:
        """Number of live rooms."""
        return len(self._sessions)

    # Room Management

    async def create_room(
        self,
        host: ParticipantInfo,
        settings: object = None,
        *,
        as_spectator: bool = False,
    ) -> Session:
        """Create a room in the lobby with the caller as host.

        Args:
            host: The creator's identity.
            settings: Raw client settings; sanitized, never rejected.
            as_spectator: Register the host as spectator instead of player.

        Returns:
            The new session.
        """
        room_settings = settings if isinstance(settings, GameSettings) else GameSettings.from_payload(
            settings,
            self._config,
            self._word_bank,
        )
        async with self._lock:
            code = self._generate_room_code(self._config.room_code_length)
            session = Session(
                code,
                host,
                room_settings,
                self._broadcaster,
                config=self._config,
                host_is_spectator=as_spectator,
            )
            self._sessions[code] = session

        logger.info(
            "Room created",
            room_code=code,
            host_id=host.connection_id,
            max_players=room_settings.max_players,
            draw_seconds=room_settings.draw_seconds,
            total_rounds=room_settings.total_rounds,
            custom_words=room_settings.custom_words,
        )
        return session

    def get(self, code: str) -> Session:
        """Get a session by room code.

        Args:
            code: Room code (case-insensitive).

        Returns:
            The session.

        Raises:
            RoomNotFoundError: If no live room has that code.
        """
        session = self.find(code)
        if session is None:
            raise RoomNotFoundError(code)
        return session

    def find(self, code: str) -> Session | None:
        """Get a session by room code, or None."""
        if not isinstance(code, str):
            return None
        session = self._sessions.get(code.strip().upper())
        if session is None or session.closed:
            return None
        return session

    async def join_room(self, code: str, info: ParticipantInfo, *, as_spectator: bool = False) -> RoomSnapshot:
        """Join an existing room.

        Returns:
            Snapshot of the room so late joiners can render the running game.

        Raises:
            RoomNotFoundError: If the room does not exist.
            RoomFullError: If the room has no free player slot.
            GameAlreadyStartedError: If a player joins after the lobby.
        """
        return await self.get(code).join(info, as_spectator=as_spectator)

    async def remove_participant(self, code: str, connection_id: str) -> list[str]:
        """Remove a participant who left or disconnected.

        A departing host tears the whole room down after notifying the other
        occupants. A room left empty is destroyed.

        Args:
            code: Room code.
            connection_id: The departing connection.

        Returns:
            Connection ids orphaned by a teardown (empty otherwise).
        """
        session = self.find(code)
        if session is None:
            return []

        if session.is_host(connection_id):
            orphans = await session.close(HOST_LEFT_MESSAGE)
            await self.destroy(session.code)
            return orphans

        await session.remove_participant(connection_id)
        if session.is_empty:
            await self.destroy(session.code)
        return []

    async def kick(
        self,
        code: str,
        requester_id: str,
        target_id: str,
        *,
        is_spectator: bool = False,
    ) -> Player | Spectator:
        """Kick a participant (host only) and force their connection closed.

        Raises:
            RoomNotFoundError: If the room does not exist.
            UnauthorizedError: If the requester is not the host.
            ParticipantNotFoundError: If the target is not in the room.
        """
        return await self.get(code).kick(requester_id, target_id, is_spectator=is_spectator)

    async def destroy(self, code: str) -> bool:
        """Tear a room down and forget its code.

        Returns:
            True if a room was removed.
        """
        async with self._lock:
            session = self._sessions.pop(code, None)
        if session is None:
            return False
        if not session.closed:
            await session.close("Room closed")
        logger.info("Room destroyed", room_code=code, remaining_rooms=len(self._sessions))
        return True

    async def shutdown(self) -> None:
        """Close every room, cancelling their countdowns."""
        for code in list(self._sessions):
            await self.destroy(code)

    def _generate_room_code(self, length: int) -> str:
        """Generate a room code not used by any live room.

        Args:
            length: Code length.

        Returns:
            Unique alphanumeric code.
        """
        while True:
            code = "".join(random.choices(string.ascii_uppercase + string.digits, k=length))
            if code not in self._sessions:
                return code
