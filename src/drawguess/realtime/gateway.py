"""WebSocket gateway between client connections and game sessions."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

from drawguess.game.exceptions import GameError, RoomNotFoundError
from drawguess.game.models import ParticipantInfo
from drawguess.game.types import Audience, NotificationType
from drawguess.realtime.messages import (
    ClientMessageType,
    InvalidMessageError,
    UnknownMessageTypeError,
    get_flag,
    get_str,
    parse_message,
    room_code_of,
)
from drawguess.services.registry import RoomRegistry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from litestar import Router, WebSocket

    from drawguess.core.config import GameConfig
    from drawguess.game.models import Notification
    from drawguess.game.session import Session
    from drawguess.game.wordbank import WordBank

    MessageHandler = Callable[["GameConnection", dict[str, Any]], Awaitable[None]]

logger = structlog.get_logger(__name__)

KICKED_CLOSE_CODE = 4000


@dataclass
class GameConnection:
    """A live WebSocket and the room it is bound to."""

    socket: WebSocket
    connection_id: str
    room_code: str | None = None
    is_spectator: bool = False
    username: str = ""
    connected_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class ConnectionGateway:
    """Routes client messages to sessions and fans session notifications out.

    Each connection is bound to at most one room at a time. Inbound messages
    are translated into Session operations through the room registry; every
    GameError raised by an operation is answered with an error reply to the
    sender only, so one client's bad input never affects the room.

    The gateway is also the sessions' Broadcaster: notifications are delivered
    to a single connection, a whole room, or a room minus one connection.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        word_bank: WordBank | None = None,
    ) -> None:
        """Initialize the gateway and its room registry.

        Args:
            config: Process configuration.
            word_bank: Word bank used for room pools.
        """
        self._connections: dict[str, GameConnection] = {}
        self.registry = RoomRegistry(self, config, word_bank)
        self._handlers: dict[str, MessageHandler] = {
            ClientMessageType.CREATE_ROOM: self._handle_create_room,
            ClientMessageType.JOIN_ROOM: self._handle_join_room,
            ClientMessageType.LEAVE_ROOM: self._handle_leave_room,
            ClientMessageType.START_GAME: self._handle_start_game,
            ClientMessageType.TOGGLE_PAUSE: self._handle_toggle_pause,
            ClientMessageType.CHOOSE_WORD: self._handle_choose_word,
            ClientMessageType.SUBMIT_GUESS: self._handle_submit_guess,
            ClientMessageType.KICK_PLAYER: self._handle_kick_player,
            ClientMessageType.CANVAS_UPDATE: self._handle_canvas_update,
            ClientMessageType.SEND_REACTION: self._handle_send_reaction,
        }

    @property
    def connection_count(self) -> int:
        """Number of open connections."""
        return len(self._connections)

    def get_connection(self, connection_id: str) -> GameConnection | None:
        """Get a live connection by id."""
        return self._connections.get(connection_id)

    # Connection lifecycle

    async def handle_connection(self, socket: WebSocket) -> None:
        """Serve one WebSocket until it disconnects.

        Args:
            socket: The WebSocket connection.
        """
        await socket.accept()
        conn = GameConnection(socket=socket, connection_id=uuid4().hex)
        self._connections[conn.connection_id] = conn

        logger.debug("WebSocket connection accepted", connection_id=conn.connection_id)
        await self._send(conn, {"type": NotificationType.CONNECTED.value, "connection_id": conn.connection_id})

        try:
            await self._receive_loop(conn)
        except Exception:
            logger.exception("WebSocket error", connection_id=conn.connection_id)
        finally:
            await self._handle_disconnect(conn)

    async def _receive_loop(self, conn: GameConnection) -> None:
        async for raw in conn.socket.iter_data():
            msg_type = None
            try:
                msg_type, data = parse_message(raw)
                await self.dispatch(conn, msg_type, data)
            except GameError as e:
                logger.debug(
                    "Rejected client message",
                    connection_id=conn.connection_id,
                    message_type=msg_type,
                    code=e.code,
                )
                await self._send_error(conn, e.code, e.message)
            except Exception:
                logger.exception(
                    "Error handling message",
                    connection_id=conn.connection_id,
                    message_type=msg_type,
                    room_code=conn.room_code,
                )
                await self._send_error(conn, "internal_error", "Internal server error")

    async def dispatch(self, conn: GameConnection, msg_type: str, data: dict[str, Any]) -> None:
        """Route a decoded message to its handler.

        Raises:
            UnknownMessageTypeError: If no handler exists for the type.
            GameError: Whatever the session operation raises.
        """
        handler = self._handlers.get(msg_type)
        if handler is None:
            raise UnknownMessageTypeError(msg_type)
        await handler(conn, data)

    async def _handle_disconnect(self, conn: GameConnection) -> None:
        self._connections.pop(conn.connection_id, None)
        await self._leave(conn)
        logger.info("WebSocket disconnected", connection_id=conn.connection_id)

    async def _leave(self, conn: GameConnection) -> None:
        code, conn.room_code = conn.room_code, None
        if code is None:
            return
        orphans = await self.registry.remove_participant(code, conn.connection_id)
        for orphan_id in orphans:
            orphan = self._connections.get(orphan_id)
            if orphan is not None and orphan.room_code == code:
                orphan.room_code = None

    # Message handlers

    async def _handle_create_room(self, conn: GameConnection, data: dict[str, Any]) -> None:
        await self._leave(conn)
        info = ParticipantInfo.from_payload(conn.connection_id, data, fallback_name="Host")
        as_spectator = get_flag(data, "is_spectator", "isSpectator")
        session = await self.registry.create_room(info, data.get("settings"), as_spectator=as_spectator)
        self._bind(conn, session.code, info, as_spectator=as_spectator)
        await session.announce_created()

    async def _handle_join_room(self, conn: GameConnection, data: dict[str, Any]) -> None:
        code = room_code_of(data)
        if not code:
            raise InvalidMessageError("Room code required")
        if conn.room_code == code:
            await self.registry.get(code).publish_roster()
            return
        session = self.registry.get(code)
        as_spectator = get_flag(data, "is_spectator", "isSpectator")
        # A rejected join must not cost the connection its current room.
        session.check_admission(conn.connection_id, as_spectator=as_spectator)
        await self._leave(conn)

        info = ParticipantInfo.from_payload(conn.connection_id, data)
        # Bound first so the joiner receives the roster broadcast of its own join.
        self._bind(conn, session.code, info, as_spectator=as_spectator)
        try:
            await session.join(info, as_spectator=as_spectator)
        except GameError:
            conn.room_code = None
            raise

    async def _handle_leave_room(self, conn: GameConnection, data: dict[str, Any]) -> None:
        self._session_for(conn, data)
        await self._leave(conn)

    async def _handle_start_game(self, conn: GameConnection, data: dict[str, Any]) -> None:
        await self._session_for(conn, data).start_game(conn.connection_id)

    async def _handle_toggle_pause(self, conn: GameConnection, data: dict[str, Any]) -> None:
        await self._session_for(conn, data).toggle_pause(conn.connection_id)

    async def _handle_choose_word(self, conn: GameConnection, data: dict[str, Any]) -> None:
        await self._session_for(conn, data).choose_word(conn.connection_id, get_str(data, "word"))

    async def _handle_submit_guess(self, conn: GameConnection, data: dict[str, Any]) -> None:
        await self._session_for(conn, data).submit_guess(conn.connection_id, get_str(data, "text", "guess"))

    async def _handle_kick_player(self, conn: GameConnection, data: dict[str, Any]) -> None:
        session = self._session_for(conn, data)
        target_id = get_str(data, "target_id", "player_id", "targetId")
        if not target_id:
            raise InvalidMessageError("Kick target required")
        await self.registry.kick(
            session.code,
            conn.connection_id,
            target_id,
            is_spectator=get_flag(data, "is_spectator", "isSpectator"),
        )

    async def _handle_canvas_update(self, conn: GameConnection, data: dict[str, Any]) -> None:
        image = data["image"] if "image" in data else data.get("imageData")
        await self._session_for(conn, data).relay_canvas(conn.connection_id, image)

    async def _handle_send_reaction(self, conn: GameConnection, data: dict[str, Any]) -> None:
        await self._session_for(conn, data).send_reaction(conn.connection_id, get_str(data, "reaction", "kind"))

    def _session_for(self, conn: GameConnection, data: dict[str, Any]) -> Session:
        """Resolve the session a room-scoped message targets.

        A connection can only act on the room it is bound to.

        Raises:
            RoomNotFoundError: If the connection is unbound or names another room.
        """
        requested = room_code_of(data)
        if conn.room_code is None or (requested and requested != conn.room_code):
            raise RoomNotFoundError(requested or "")
        return self.registry.get(conn.room_code)

    def _bind(self, conn: GameConnection, code: str, info: ParticipantInfo, *, as_spectator: bool) -> None:
        conn.room_code = code
        conn.is_spectator = as_spectator
        conn.username = info.username

    # Broadcaster

    async def deliver(self, room_code: str, notification: Notification) -> None:
        """Send a session notification to its audience.

        Args:
            room_code: Room the notification originates from.
            notification: The notification to send.
        """
        message = notification.to_message()
        if notification.audience == Audience.CONNECTION:
            conn = self._connections.get(notification.target or "")
            if conn is not None:
                await self._send(conn, message)
            return

        recipients = [
            conn
            for conn in self._connections.values()
            if conn.room_code == room_code
            and not (notification.audience == Audience.ROOM_EXCEPT and conn.connection_id == notification.target)
        ]
        if recipients:
            await asyncio.gather(*(self._send(conn, message) for conn in recipients), return_exceptions=True)

    async def disconnect(self, connection_id: str, reason: str) -> None:
        """Unbind a connection and close its socket.

        Args:
            connection_id: The connection to close.
            reason: Close reason sent to the client.
        """
        conn = self._connections.get(connection_id)
        if conn is None:
            return
        conn.room_code = None
        try:
            await conn.socket.close(code=KICKED_CLOSE_CODE, reason=reason)
        except Exception:
            logger.exception("Failed to close connection", connection_id=connection_id)
        logger.info("Connection closed by server", connection_id=connection_id, reason=reason)

    async def _send(self, conn: GameConnection, data: dict[str, Any]) -> None:
        try:
            await conn.socket.send_json(data)
        except Exception:
            logger.exception(
                "Failed to send message",
                connection_id=conn.connection_id,
                room_code=conn.room_code,
            )

    async def _send_error(self, conn: GameConnection, code: str, message: str) -> None:
        await self._send(
            conn,
            {
                "type": NotificationType.ERROR.value,
                "code": code,
                "message": message,
            },
        )


def create_gateway_router(path: str, gateway: ConnectionGateway) -> tuple[Router, ConnectionGateway]:
    """Create a router serving the game WebSocket endpoint.

    Args:
        path: Base path for the WebSocket route.
        gateway: The gateway instance.

    Returns:
        A tuple of (Litestar Router, ConnectionGateway instance).
    """
    from litestar import Router, websocket

    @websocket(path="/")
    async def game_websocket(socket: WebSocket) -> None:
        """WebSocket endpoint for draw-and-guess clients.

        Args:
            socket: The WebSocket connection.
        """
        await gateway.handle_connection(socket)

    return Router(path=path, route_handlers=[game_websocket]), gateway
