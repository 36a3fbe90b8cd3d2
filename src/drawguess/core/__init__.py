"""Configuration, logging and error handling shared by the whole server."""

from __future__ import annotations

from drawguess.core.config import GameConfig

__all__ = ["GameConfig"]
