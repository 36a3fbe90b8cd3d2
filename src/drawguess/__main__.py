"""Run the game server with uvicorn: ``python -m drawguess``."""

from __future__ import annotations

import os

import uvicorn


def main() -> None:
    """Start uvicorn serving ``drawguess.app:app``."""
    uvicorn.run(
        "drawguess.app:app",
        host=os.environ.get("DRAWGUESS_HOST", "127.0.0.1"),
        port=int(os.environ.get("DRAWGUESS_PORT", "8000")),
        log_level="info",
    )


if __name__ == "__main__":
    main()
