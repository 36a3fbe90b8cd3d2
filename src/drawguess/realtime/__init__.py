"""WebSocket support for live games."""

from __future__ import annotations

from drawguess.realtime.gateway import ConnectionGateway, GameConnection, create_gateway_router
from drawguess.realtime.messages import ClientMessageType

__all__ = [
    "ClientMessageType",
    "ConnectionGateway",
    "GameConnection",
    "create_gateway_router",
]
