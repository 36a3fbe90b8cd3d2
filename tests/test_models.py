"""Tests for game data models and settings sanitization."""

from __future__ import annotations

from drawguess.core.config import GameConfig
from drawguess.game.models import (
    DEFAULT_AVATAR,
    ChatMessage,
    GameSettings,
    LeaderboardEntry,
    Notification,
    ParticipantInfo,
    Player,
)
from drawguess.game.types import Audience, ChatMessageType, NotificationType
from drawguess.game.wordbank import DEFAULT_WORDS


class TestGameSettings:
    """Tests for GameSettings.from_payload."""

    def test_defaults_for_missing_settings(self) -> None:
        """No settings at all yields the configured defaults."""
        settings = GameSettings.from_payload(None)

        assert settings.max_players == 8
        assert settings.draw_seconds == 80
        assert settings.total_rounds == 3
        assert settings.word_pool == list(DEFAULT_WORDS)
        assert settings.custom_words is False

    def test_valid_values_kept(self) -> None:
        """In-range values are used as given."""
        settings = GameSettings.from_payload({"max_players": 4, "draw_seconds": 45, "total_rounds": 5})

        assert (settings.max_players, settings.draw_seconds, settings.total_rounds) == (4, 45, 5)

    def test_browser_client_keys(self) -> None:
        """The camelCase keys sent by the browser client are understood."""
        settings = GameSettings.from_payload(
            {"maxPlayers": "6", "drawTime": "60", "rounds": "2", "words": ["cat", "dog", "fish"]},
        )

        assert settings.max_players == 6
        assert settings.draw_seconds == 60
        assert settings.total_rounds == 2
        assert settings.word_pool == ["cat", "dog", "fish"]
        assert settings.custom_words is True

    def test_invalid_values_fall_back(self) -> None:
        """Non-integers and out-of-range numbers never fail creation."""
        settings = GameSettings.from_payload(
            {"max_players": 500, "draw_seconds": "soon", "total_rounds": 0},
        )

        assert settings.max_players == 8
        assert settings.draw_seconds == 80
        assert settings.total_rounds == 3

    def test_booleans_are_not_numbers(self) -> None:
        """True is not accepted as 1."""
        settings = GameSettings.from_payload({"total_rounds": True})
        assert settings.total_rounds == 3

    def test_small_custom_list_uses_default_pool(self) -> None:
        """A custom list below the threshold is replaced by the default pool."""
        settings = GameSettings.from_payload({"words": ["cat", "Cat ", "dog"]})

        assert settings.word_pool == list(DEFAULT_WORDS)
        assert settings.custom_words is False

    def test_bounds_follow_config(self) -> None:
        """Limits come from the process configuration."""
        config = GameConfig(max_players_limit=4, default_max_players=3)

        assert GameSettings.from_payload({"max_players": 6}, config).max_players == 3
        assert GameSettings.from_payload({"max_players": 4}, config).max_players == 4

    def test_to_dict_hides_pool(self) -> None:
        """Clients never receive the word pool."""
        data = GameSettings.from_payload({"words": ["cat", "dog", "fish"]}).to_dict()

        assert "word_pool" not in data
        assert data["custom_words"] is True


class TestParticipants:
    """Tests for participant records."""

    def test_info_from_payload(self) -> None:
        """Usernames are trimmed and avatars passed through."""
        info = ParticipantInfo.from_payload("c1", {"username": "  Ada  ", "avatar": "🐱"})

        assert info.connection_id == "c1"
        assert info.username == "Ada"
        assert info.avatar == "🐱"

    def test_info_fallbacks(self) -> None:
        """Blank or missing fields get defaults."""
        info = ParticipantInfo.from_payload("c1", {"username": "   ", "avatar": 7}, fallback_name="Host")

        assert info.username == "Host"
        assert info.avatar == DEFAULT_AVATAR

    def test_score_never_decreases(self) -> None:
        """Negative awards are ignored."""
        player = Player("c1", "Ada")
        player.award_points(150)
        player.award_points(-100)

        assert player.score == 150

    def test_reset_turn_state(self) -> None:
        """The guessed flag is cleared between turns."""
        player = Player("c1", "Ada", has_guessed_this_turn=True)
        player.reset_turn_state()

        assert player.has_guessed_this_turn is False
        assert player.to_dict()["has_guessed"] is False


class TestNotifications:
    """Tests for notification construction."""

    def test_room_notification(self) -> None:
        """Room notifications reach everyone."""
        notification = Notification.room(NotificationType.TIMER_UPDATE, remaining_seconds=42)

        assert notification.audience == Audience.ROOM
        assert notification.to_message() == {"type": "timer_update", "remaining_seconds": 42}

    def test_single_connection(self) -> None:
        """Private notifications carry their target."""
        notification = Notification.to("c1", NotificationType.YOUR_WORD, word="apple")

        assert notification.audience == Audience.CONNECTION
        assert notification.target == "c1"

    def test_everyone_but_one(self) -> None:
        """Relay notifications exclude the sender."""
        notification = Notification.others("c1", NotificationType.CANVAS_UPDATE, image="data:...")

        assert notification.audience == Audience.ROOM_EXCEPT
        assert notification.target == "c1"
        assert notification.to_message()["image"] == "data:..."

    def test_system_chat_message(self) -> None:
        """System chat lines are flagged for clients."""
        data = ChatMessage.system("Ada guessed the word!").to_dict()

        assert data["message_type"] == ChatMessageType.SYSTEM.value
        assert data["is_system"] is True
        assert data["message"] == "Ada guessed the word!"

    def test_leaderboard_entry(self) -> None:
        """Leaderboard entries serialize rank and score."""
        entry = LeaderboardEntry(rank=1, connection_id="c1", username="Ada", avatar="🐱", score=450)

        assert entry.to_dict() == {"rank": 1, "id": "c1", "username": "Ada", "avatar": "🐱", "score": 450}
