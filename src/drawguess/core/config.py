"""Process-wide game configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class GameConfig:
    """Tunables shared by every room in the process.

    Attributes:
        word_choice_seconds: Grace window for the drawer to pick a word.
        reveal_seconds: Delay between revealing the word and the next turn.
        tick_interval: Wall-clock seconds per countdown tick.
        room_code_length: Length of generated room codes.
        min_custom_words: Distinct entries a custom word list needs to be used.
        word_option_count: Candidate words offered to each drawer.
        drawer_bonus: Points the drawer earns per correct guess.
        min_players: Players required to start (and keep) a game.
        max_players_limit: Upper bound for a room's max_players setting.
        default_max_players: max_players used when the client sends none.
        default_draw_seconds: Drawing countdown used when the client sends none.
        min_draw_seconds: Lower bound for draw_seconds.
        max_draw_seconds: Upper bound for draw_seconds.
        default_total_rounds: Rounds used when the client sends none.
        max_total_rounds: Upper bound for total_rounds.
        debug: Enable debug logging.
        json_logs: Render logs as JSON.
    """

    word_choice_seconds: int = 15
    reveal_seconds: int = 5
    tick_interval: float = 1.0
    room_code_length: int = 5
    min_custom_words: int = 3
    word_option_count: int = 3
    drawer_bonus: int = 50
    min_players: int = 2
    max_players_limit: int = 12
    default_max_players: int = 8
    default_draw_seconds: int = 80
    min_draw_seconds: int = 10
    max_draw_seconds: int = 300
    default_total_rounds: int = 3
    max_total_rounds: int = 10
    debug: bool = False
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> GameConfig:
        """Create a configuration from environment variables.

        Environment variables:
            DRAWGUESS_WORD_CHOICE_SECONDS: Word selection grace window.
            DRAWGUESS_REVEAL_SECONDS: Reveal delay between turns.
            DRAWGUESS_TICK_INTERVAL: Seconds per countdown tick.
            DRAWGUESS_ROOM_CODE_LENGTH: Generated room code length.
            DRAWGUESS_MIN_CUSTOM_WORDS: Minimum size of a custom word list.
            DRAWGUESS_DRAWER_BONUS: Drawer points per correct guess.
            DRAWGUESS_DEFAULT_DRAW_SECONDS: Drawing countdown for rooms that send none.
            DRAWGUESS_DEFAULT_TOTAL_ROUNDS: Rounds for rooms that send none.
            DRAWGUESS_DEBUG: Set to "true" for debug logging.
            DRAWGUESS_JSON_LOGS: Set to "true" for JSON log output.

        Returns:
            GameConfig configured from environment.
        """
        defaults = cls()
        return cls(
            word_choice_seconds=_env_int("DRAWGUESS_WORD_CHOICE_SECONDS", defaults.word_choice_seconds),
            reveal_seconds=_env_int("DRAWGUESS_REVEAL_SECONDS", defaults.reveal_seconds),
            tick_interval=_env_float("DRAWGUESS_TICK_INTERVAL", defaults.tick_interval),
            room_code_length=_env_int("DRAWGUESS_ROOM_CODE_LENGTH", defaults.room_code_length),
            min_custom_words=_env_int("DRAWGUESS_MIN_CUSTOM_WORDS", defaults.min_custom_words),
            drawer_bonus=_env_int("DRAWGUESS_DRAWER_BONUS", defaults.drawer_bonus),
            default_draw_seconds=_env_int("DRAWGUESS_DEFAULT_DRAW_SECONDS", defaults.default_draw_seconds),
            default_total_rounds=_env_int("DRAWGUESS_DEFAULT_TOTAL_ROUNDS", defaults.default_total_rounds),
            debug=_env_bool("DRAWGUESS_DEBUG"),
            json_logs=_env_bool("DRAWGUESS_JSON_LOGS"),
        )
