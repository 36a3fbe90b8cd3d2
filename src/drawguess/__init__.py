"""drawguess: a real-time multiplayer draw-and-guess game server on Litestar.

One player draws a secret word while the others race to guess it; points are
weighted by speed and drawing duty rotates through every player for a fixed
number of rounds.

Key Components:
    - Game: Session state machine, TurnScheduler, scoring, word bank
    - Services: RoomRegistry (room codes and session lifecycle)
    - Realtime: ConnectionGateway (WebSocket routing and broadcasting)
    - Web: health and room lookup endpoints
    - Plugin: DrawGuessPlugin for Litestar integration

Quick Start:
    >>> from litestar import Litestar
    >>> from drawguess import DrawGuessPlugin, DrawGuessConfig
    >>>
    >>> app = Litestar(plugins=[DrawGuessPlugin(DrawGuessConfig())])
"""

from __future__ import annotations

__version__ = "0.1.0"

from drawguess.core.config import GameConfig
from drawguess.game.exceptions import GameError
from drawguess.game.session import Session
from drawguess.plugin import DrawGuessConfig, DrawGuessPlugin
from drawguess.realtime.gateway import ConnectionGateway
from drawguess.services.registry import RoomRegistry

__all__ = [
    "ConnectionGateway",
    "DrawGuessConfig",
    "DrawGuessPlugin",
    "GameConfig",
    "GameError",
    "RoomRegistry",
    "Session",
    "__version__",
]
