"""WebSocket message types and inbound payload parsing."""

from __future__ import annotations

import json
from typing import Any

from drawguess.game.exceptions import GameError


class ClientMessageType:
    """Message types a client may send."""

    CREATE_ROOM = "create_room"
    JOIN_ROOM = "join_room"
    LEAVE_ROOM = "leave_room"
    START_GAME = "start_game"
    TOGGLE_PAUSE = "toggle_pause"
    CHOOSE_WORD = "choose_word"
    SUBMIT_GUESS = "submit_guess"
    KICK_PLAYER = "kick_player"
    CANVAS_UPDATE = "canvas_update"
    SEND_REACTION = "send_reaction"


class InvalidMessageError(GameError):
    """Raised when an inbound frame is not a usable message."""

    code = "invalid_message"


class UnknownMessageTypeError(GameError):
    """Raised for a message type the gateway does not handle."""

    code = "unknown_type"

    def __init__(self, message_type: str) -> None:
        super().__init__(f"Unknown message type: {message_type}")
        self.message_type = message_type


def parse_message(raw: str | bytes | dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Decode an inbound frame into its type and payload.

    Args:
        raw: Text or binary frame, or an already decoded object.

    Returns:
        Tuple of (message type, full message dict).

    Raises:
        InvalidMessageError: If the frame is not a JSON object with a string type.
    """
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidMessageError("Invalid JSON message") from e
    else:
        data = raw

    if not isinstance(data, dict):
        raise InvalidMessageError("Message must be a JSON object")

    msg_type = data.get("type")
    if not isinstance(msg_type, str) or not msg_type:
        raise InvalidMessageError("Message type required")
    return msg_type, data


def get_str(data: dict[str, Any], *keys: str, default: str = "") -> str:
    """Return the first string value found under any of ``keys``."""
    for key in keys:
        value = data.get(key)
        if isinstance(value, str):
            return value
    return default


def get_flag(data: dict[str, Any], *keys: str) -> bool:
    """Return True if any of ``keys`` holds a truthy boolean."""
    return any(data.get(key) is True for key in keys)


def room_code_of(data: dict[str, Any]) -> str:
    """Room code from a payload, normalized to upper case."""
    return get_str(data, "code", "room_code", "roomCode").strip().upper()
