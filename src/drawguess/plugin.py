"""Litestar plugin wiring the draw-and-guess game server into an application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog
from litestar import Router
from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from drawguess.core.config import GameConfig
from drawguess.game.wordbank import WordBank
from drawguess.realtime.gateway import ConnectionGateway, create_gateway_router
from drawguess.services.registry import RoomRegistry

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

logger = structlog.get_logger(__name__)


@dataclass
class DrawGuessConfig:
    """Configuration for the DrawGuess plugin.

    Attributes:
        game: Process-wide game tunables. Read from the environment if None.
        words: Default word pool. The built-in list is used if None.
        enable_api: Whether to mount the HTTP room lookup routes.
        enable_websocket: Whether to mount the game WebSocket endpoint.
        api_path: Base path for HTTP routes.
        ws_path: Path of the game WebSocket endpoint.

    Example:
        >>> config = DrawGuessConfig(game=GameConfig(reveal_seconds=3), ws_path="/play")
    """

    game: GameConfig | None = None
    words: list[str] | None = field(default=None)
    enable_api: bool = True
    enable_websocket: bool = True
    api_path: str = "/api"
    ws_path: str = "/ws"


class DrawGuessPlugin(InitPluginProtocol):
    """Litestar plugin for the draw-and-guess game server.

    Creates the connection gateway (and with it the room registry), registers
    both for dependency injection, mounts the WebSocket and HTTP routes and
    closes every room on shutdown.

    Example:
        >>> from litestar import Litestar
        >>> from drawguess import DrawGuessPlugin, DrawGuessConfig
        >>>
        >>> app = Litestar(plugins=[DrawGuessPlugin(DrawGuessConfig())])

        Accessing the registry in a route handler:

        >>> @get("/rooms/count")
        ... async def room_count(registry: RoomRegistry) -> dict:
        ...     return {"rooms": registry.room_count}
    """

    def __init__(self, config: DrawGuessConfig | None = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Plugin configuration. If None, defaults are used.
        """
        self._config = config or DrawGuessConfig()
        self._gateway: ConnectionGateway | None = None

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Initialize the plugin during application startup.

        Args:
            app_config: The Litestar application configuration object.

        Returns:
            The modified application configuration.
        """
        game_config = self._config.game or GameConfig.from_env()
        word_bank = WordBank(self._config.words, min_custom_words=game_config.min_custom_words)
        self._gateway = ConnectionGateway(game_config, word_bank)

        def provide_gateway() -> ConnectionGateway:
            """Dependency provider for ConnectionGateway."""
            if self._gateway is None:
                msg = "Gateway not initialized"
                raise RuntimeError(msg)
            return self._gateway

        def provide_registry() -> RoomRegistry:
            """Dependency provider for RoomRegistry."""
            if self._gateway is None:
                msg = "Room registry not initialized"
                raise RuntimeError(msg)
            return self._gateway.registry

        app_config.dependencies["gateway"] = Provide(provide_gateway, sync_to_thread=False)
        app_config.dependencies["registry"] = Provide(provide_registry, sync_to_thread=False)
        app_config.signature_namespace.update({"ConnectionGateway": ConnectionGateway, "RoomRegistry": RoomRegistry})

        from drawguess.web.health import HealthController

        app_config.route_handlers.append(HealthController)

        if self._config.enable_api:
            from drawguess.web.rooms import RoomController

            app_config.route_handlers.append(Router(path=self._config.api_path, route_handlers=[RoomController]))

        if self._config.enable_websocket:
            ws_router, _ = create_gateway_router(self._config.ws_path, self._gateway)
            app_config.route_handlers.append(ws_router)

        app_config.on_shutdown.append(self._shutdown)

        logger.debug(
            "DrawGuess plugin initialized",
            api_path=self._config.api_path if self._config.enable_api else None,
            ws_path=self._config.ws_path if self._config.enable_websocket else None,
        )
        return app_config

    async def _shutdown(self) -> None:
        if self._gateway is not None:
            await self._gateway.registry.shutdown()

    @property
    def gateway(self) -> ConnectionGateway:
        """Get the initialized connection gateway.

        Raises:
            RuntimeError: If on_app_init has not been called yet.
        """
        if self._gateway is None:
            msg = "Plugin not initialized. Call on_app_init first."
            raise RuntimeError(msg)
        return self._gateway

    @property
    def registry(self) -> RoomRegistry:
        """Get the room registry owned by the gateway.

        Raises:
            RuntimeError: If on_app_init has not been called yet.
        """
        return self.gateway.registry
