"""Draw-and-guess game rules, state machine and turn timing."""

from __future__ import annotations

__all__ = [
    "Broadcaster",
    "ChatMessage",
    "GameSettings",
    "LeaderboardEntry",
    "Notification",
    "ParticipantInfo",
    "Player",
    "RoomSnapshot",
    "Session",
    "SessionState",
    "Spectator",
    "TurnScheduler",
    "WordBank",
]

from drawguess.game.models import (
    ChatMessage,
    GameSettings,
    LeaderboardEntry,
    Notification,
    ParticipantInfo,
    Player,
    RoomSnapshot,
    Spectator,
)
from drawguess.game.scheduler import TurnScheduler
from drawguess.game.session import Broadcaster, Session
from drawguess.game.types import SessionState
from drawguess.game.wordbank import WordBank
