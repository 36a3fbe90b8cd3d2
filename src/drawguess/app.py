"""Main Litestar application for the draw-and-guess game server.

This module provides the application factory and the configured app instance
used by uvicorn.
"""

from __future__ import annotations

from litestar import Litestar
from litestar.openapi import OpenAPIConfig

from drawguess import __version__
from drawguess.core.config import GameConfig
from drawguess.core.error_handling import get_exception_handlers
from drawguess.core.logging import CorrelationIdMiddleware, RequestLoggingMiddleware, configure_logging
from drawguess.plugin import DrawGuessConfig, DrawGuessPlugin


def create_app(
    *,
    config: GameConfig | None = None,
    enable_api: bool = True,
    enable_websocket: bool = True,
    debug: bool | None = None,
    json_logs: bool | None = None,
) -> Litestar:
    """Create and configure the Litestar application.

    Args:
        config: Game configuration. Read from the environment if None.
        enable_api: Whether to mount the HTTP room lookup routes.
        enable_websocket: Whether to mount the game WebSocket endpoint.
        debug: Debug mode. Falls back to ``config.debug``.
        json_logs: Output logs as JSON. Falls back to ``config.json_logs``.

    Returns:
        Configured Litestar application instance.
    """
    config = config or GameConfig.from_env()
    debug = config.debug if debug is None else debug
    configure_logging(
        debug=debug,
        json_logs=config.json_logs if json_logs is None else json_logs,
    )

    return Litestar(
        plugins=[
            DrawGuessPlugin(
                DrawGuessConfig(
                    game=config,
                    enable_api=enable_api,
                    enable_websocket=enable_websocket,
                    api_path="/api",
                    ws_path="/ws",
                )
            )
        ],
        debug=debug,
        middleware=[CorrelationIdMiddleware, RequestLoggingMiddleware],
        exception_handlers=get_exception_handlers(),
        openapi_config=OpenAPIConfig(
            title="drawguess API",
            version=__version__,
            description="Real-time multiplayer draw-and-guess game server",
            path="/schema",
            use_handler_docstrings=True,
        ),
    )


# Default application instance for uvicorn
# Use DRAWGUESS_DEBUG=true for dev mode
app = create_app()
