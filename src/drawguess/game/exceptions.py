"""Exception classes for game module."""

from __future__ import annotations


class GameError(Exception):
    """Base exception for all game-related errors.

    Attributes:
        code: Stable machine-readable error code sent to clients.
    """

    code = "game_error"

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human readable description.
        """
        super().__init__(message)
        self.message = message


class RoomNotFoundError(GameError):
    """Raised when no session exists for a room code."""

    code = "room_not_found"

    def __init__(self, room_code: str) -> None:
        """Initialize the exception.

        Args:
            room_code: The code that was looked up.
        """
        super().__init__(f"Room not found: {room_code}")
        self.room_code = room_code


class RoomFullError(GameError):
    """Raised when a player tries to join a room at capacity."""

    code = "room_full"

    def __init__(self, max_players: int) -> None:
        super().__init__(f"Room is full ({max_players} players)")
        self.max_players = max_players


class GameAlreadyStartedError(GameError):
    """Raised when a player tries to join after the lobby closed."""

    code = "game_already_started"

    def __init__(self) -> None:
        super().__init__("Game already started")


class InsufficientPlayersError(GameError):
    """Raised when the host starts a game without enough players."""

    code = "insufficient_players"

    def __init__(self, required: int, available: int) -> None:
        """Initialize the exception.

        Args:
            required: Minimum number of players.
            available: Number of players present.
        """
        super().__init__(f"Need at least {required} players to start (have {available})")
        self.required = required
        self.available = available


class UnauthorizedError(GameError):
    """Raised when a non-host attempts a host-only action."""

    code = "unauthorized"


class InvalidTurnActionError(GameError):
    """Raised for actions that are not valid for the current turn."""

    code = "invalid_turn_action"


class ParticipantNotFoundError(GameError):
    """Raised when a connection id is not in the room."""

    code = "participant_not_found"

    def __init__(self, connection_id: str) -> None:
        super().__init__(f"Participant not found: {connection_id}")
        self.connection_id = connection_id
