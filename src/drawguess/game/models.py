"""Game session data models.

This module defines the records a draw-and-guess session is built from:
participants, per-room settings, chat lines, outbound notifications and the
snapshots sent to clients.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from drawguess.core.config import GameConfig
from drawguess.game.types import Audience, ChatMessageType, NotificationType, SessionState
from drawguess.game.wordbank import WordBank

if TYPE_CHECKING:
    from collections.abc import Mapping

HOST_AVATAR = "👑"
DEFAULT_AVATAR = "🙂"


@dataclass
class ParticipantInfo:
    """Identity a connection supplies when creating or joining a room."""

    connection_id: str
    username: str = "Guest"
    avatar: str = DEFAULT_AVATAR

    @classmethod
    def from_payload(
        cls,
        connection_id: str,
        data: Mapping[str, Any],
        *,
        fallback_name: str = "Guest",
    ) -> ParticipantInfo:
        """Build participant info from an inbound message.

        Args:
            connection_id: The sending connection.
            data: Message payload with optional username and avatar.
            fallback_name: Name used when the username is blank.

        Returns:
            Participant info with trimmed, non-empty fields.
        """
        username = data.get("username")
        avatar = data.get("avatar")
        return cls(
            connection_id=connection_id,
            username=username.strip()[:32] if isinstance(username, str) and username.strip() else fallback_name,
            avatar=avatar if isinstance(avatar, str) and avatar else DEFAULT_AVATAR,
        )


@dataclass
class Player:
    """An active participant who draws and guesses.

    Attributes:
        connection_id: Connection the player is bound to.
        username: Display name shown to other players.
        avatar: Avatar shown next to the name.
        score: Total score; never decreases.
        has_guessed_this_turn: Whether the player guessed the current word.
        joined_at: When the player joined the room.
    """

    connection_id: str
    username: str
    avatar: str = DEFAULT_AVATAR
    score: int = 0
    has_guessed_this_turn: bool = False
    joined_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def award_points(self, points: int) -> None:
        """Add points to the player's total score.

        Args:
            points: Points to add; negative values are ignored.
        """
        if points > 0:
            self.score += points

    def reset_turn_state(self) -> None:
        """Clear per-turn guess state."""
        self.has_guessed_this_turn = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.connection_id,
            "username": self.username,
            "avatar": self.avatar,
            "score": self.score,
            "has_guessed": self.has_guessed_this_turn,
        }


@dataclass
class Spectator:
    """A non-scoring observer who cannot draw or guess."""

    connection_id: str
    username: str
    avatar: str = DEFAULT_AVATAR
    joined_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.connection_id,
            "username": self.username,
            "avatar": self.avatar,
        }


def _bounded_int(value: object, default: int, minimum: int, maximum: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not minimum <= value <= maximum:
        return default
    return value


@dataclass
class GameSettings:
    """Per-room settings, always valid once constructed through from_payload.

    Attributes:
        max_players: Maximum number of active players.
        draw_seconds: Length of the drawing countdown.
        total_rounds: Full drawer rotations before the game ends.
        word_pool: Words candidates are sampled from.
        custom_words: Whether word_pool came from the host.
    """

    max_players: int = 8
    draw_seconds: int = 80
    total_rounds: int = 3
    word_pool: list[str] = field(default_factory=list)
    custom_words: bool = False

    @classmethod
    def from_payload(
        cls,
        raw: object,
        config: GameConfig | None = None,
        word_bank: WordBank | None = None,
    ) -> GameSettings:
        """Sanitize client supplied settings.

        Missing or invalid fields fall back to defaults, so room creation never
        fails because of bad settings. Accepts both snake_case and the browser
        client's camelCase keys.

        Args:
            raw: Settings object from the create_room message.
            config: Process configuration with defaults and bounds.
            word_bank: Word bank resolving the room's pool.

        Returns:
            Valid settings for a new session.
        """
        config = config or GameConfig()
        word_bank = word_bank or WordBank(min_custom_words=config.min_custom_words)
        data: Mapping[str, Any] = raw if isinstance(raw, dict) else {}

        def pick(*keys: str) -> object:
            for key in keys:
                if key in data:
                    return data[key]
            return None

        custom = pick("words", "word_pool", "custom_words")
        pool = word_bank.resolve_pool(custom)
        return cls(
            max_players=_bounded_int(
                pick("max_players", "maxPlayers"),
                config.default_max_players,
                config.min_players,
                config.max_players_limit,
            ),
            draw_seconds=_bounded_int(
                pick("draw_seconds", "drawTime", "drawSeconds"),
                config.default_draw_seconds,
                config.min_draw_seconds,
                config.max_draw_seconds,
            ),
            total_rounds=_bounded_int(
                pick("total_rounds", "rounds", "totalRounds"),
                config.default_total_rounds,
                1,
                config.max_total_rounds,
            ),
            word_pool=pool,
            custom_words=pool != word_bank.default_words,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (the word pool itself stays private)."""
        return {
            "max_players": self.max_players,
            "draw_seconds": self.draw_seconds,
            "total_rounds": self.total_rounds,
            "custom_words": self.custom_words,
        }


@dataclass
class ChatMessage:
    """Chat line shown in the room's chat box."""

    content: str
    message_type: ChatMessageType = ChatMessageType.GUESS
    sender_id: str | None = None
    sender_name: str = "System"
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        """Create a system message.

        Args:
            content: Message text.

        Returns:
            System chat message.
        """
        return cls(content=content, message_type=ChatMessageType.SYSTEM)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "message_type": self.message_type.value,
            "sender_id": self.sender_id,
            "username": self.sender_name,
            "message": self.content,
            "is_system": self.message_type == ChatMessageType.SYSTEM,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Notification:
    """A state-change event produced by a session for delivery to clients.

    Attributes:
        type: Notification type sent as the message "type" field.
        payload: Remaining message fields.
        audience: Who receives it.
        target: Connection id for CONNECTION / ROOM_EXCEPT audiences.
    """

    type: NotificationType
    payload: dict[str, Any] = field(default_factory=dict)
    audience: Audience = Audience.ROOM
    target: str | None = None

    @classmethod
    def room(cls, type_: NotificationType, **payload: Any) -> Notification:
        """Notification for every connection in the room."""
        return cls(type=type_, payload=payload)

    @classmethod
    def to(cls, connection_id: str, type_: NotificationType, **payload: Any) -> Notification:
        """Notification for a single connection."""
        return cls(type=type_, payload=payload, audience=Audience.CONNECTION, target=connection_id)

    @classmethod
    def others(cls, connection_id: str, type_: NotificationType, **payload: Any) -> Notification:
        """Notification for everyone in the room except one connection."""
        return cls(type=type_, payload=payload, audience=Audience.ROOM_EXCEPT, target=connection_id)

    def to_message(self) -> dict[str, Any]:
        """Build the JSON message sent over the wire."""
        return {"type": self.type.value, **self.payload}


@dataclass(frozen=True)
class LeaderboardEntry:
    """Final standing of one player."""

    rank: int
    connection_id: str
    username: str
    avatar: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rank": self.rank,
            "id": self.connection_id,
            "username": self.username,
            "avatar": self.avatar,
            "score": self.score,
        }


@dataclass
class RoomSnapshot:
    """Full roster plus current turn info, sent to joiners.

    Lets a late joiner render the current state of a running game.
    """

    code: str
    state: SessionState
    host_id: str
    players: list[dict[str, Any]]
    spectators: list[dict[str, Any]]
    drawer_id: str | None
    current_round: int
    total_rounds: int
    remaining_seconds: int
    paused: bool
    hint: str | None
    word_length: int
    settings: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "state": self.state.value,
            "host_id": self.host_id,
            "players": self.players,
            "spectators": self.spectators,
            "drawer_id": self.drawer_id,
            "current_round": self.current_round,
            "total_rounds": self.total_rounds,
            "remaining_seconds": self.remaining_seconds,
            "paused": self.paused,
            "hint": self.hint,
            "word_length": self.word_length,
            "settings": self.settings,
        }
