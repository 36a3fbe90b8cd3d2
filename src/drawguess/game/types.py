"""Type definitions for draw-and-guess game sessions."""

from __future__ import annotations

from enum import StrEnum


class SessionState(StrEnum):
    """State of a game session.

    The game progresses through these states in order:
    LOBBY -> AWAITING_WORD -> DRAWING -> TURN_ENDING -> (repeat or ENDED)
    """

    LOBBY = "lobby"  # Waiting for players to join and host to start
    AWAITING_WORD = "awaiting_word"  # Drawer is choosing a word
    DRAWING = "drawing"  # Countdown running, players guessing
    TURN_ENDING = "turn_ending"  # Word revealed, next turn pending
    ENDED = "ended"  # All rounds complete, final scores


class Audience(StrEnum):
    """Who receives a notification."""

    ROOM = "room"  # Every connection bound to the room
    ROOM_EXCEPT = "room_except"  # Every connection except the target
    CONNECTION = "connection"  # Only the target connection


class ChatMessageType(StrEnum):
    """Type of chat message."""

    GUESS = "guess"  # Wrong guess, shown verbatim
    SYSTEM = "system"  # System notification


class NotificationType(StrEnum):
    """Server -> client notification types."""

    CONNECTED = "connected"
    ROOM_CREATED = "room_created"
    JOIN_SUCCESS = "join_success"
    YOU_ARE_SPECTATOR = "you_are_spectator"
    ROSTER = "roster"
    TURN_STARTED = "turn_started"
    WORD_OPTIONS = "word_options"
    WORD_HINT = "word_hint"
    YOUR_WORD = "your_word"
    TIMER_UPDATE = "timer_update"
    CORRECT_GUESS = "correct_guess"
    TURN_ENDED = "turn_ended"
    CHAT_MESSAGE = "chat_message"
    PAUSE_CHANGED = "pause_changed"
    CANVAS_UPDATE = "canvas_update"
    REACTION = "reaction"
    GAME_OVER = "game_over"
    KICKED = "kicked"
    ROOM_CLOSED = "room_closed"
    ERROR = "error"
