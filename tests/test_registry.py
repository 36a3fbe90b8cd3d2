"""Tests for the room registry."""

from __future__ import annotations

import random
import string

import pytest

from drawguess.core.config import GameConfig
from drawguess.game.exceptions import (
    ParticipantNotFoundError,
    RoomNotFoundError,
    UnauthorizedError,
)
from drawguess.game.models import GameSettings, ParticipantInfo
from drawguess.game.types import NotificationType, SessionState
from drawguess.services.registry import HOST_LEFT_MESSAGE, RoomRegistry

WORDS = ["apple", "banana", "cherry"]


@pytest.fixture
async def registry(broadcaster, config: GameConfig):
    """Registry whose rooms are all torn down after the test."""
    registry = RoomRegistry(broadcaster, config)
    yield registry
    await registry.shutdown()


async def create(registry: RoomRegistry, host: str = "host", **settings) -> str:
    session = await registry.create_room(ParticipantInfo(host, host.title()), settings or None)
    return session.code


class TestCreateRoom:
    """Tests for room creation."""

    async def test_code_format(self, registry: RoomRegistry) -> None:
        """Codes are five uppercase letters or digits."""
        code = await create(registry)

        assert len(code) == 5
        assert all(c in string.ascii_uppercase + string.digits for c in code)
        assert registry.room_count == 1

    async def test_codes_are_unique(self, registry: RoomRegistry, monkeypatch: pytest.MonkeyPatch) -> None:
        """A code already in use is never handed out again."""
        draws = iter([list("AAAAA"), list("AAAAA"), list("BBBBB")])
        monkeypatch.setattr(random, "choices", lambda population, k: next(draws))

        first = await create(registry, "h1")
        second = await create(registry, "h2")

        assert first == "AAAAA"
        assert second == "BBBBB"

    async def test_settings_are_sanitized(self, registry: RoomRegistry) -> None:
        """Bad settings fall back to defaults instead of failing."""
        session = await registry.create_room(
            ParticipantInfo("host", "Host"),
            {"max_players": 99, "draw_seconds": "x", "rounds": 2},
        )

        assert session.settings.max_players == 8
        assert session.settings.draw_seconds == 80
        assert session.settings.total_rounds == 2

    async def test_prebuilt_settings_used_as_is(self, registry: RoomRegistry) -> None:
        """Already valid settings are not re-sanitized."""
        settings = GameSettings(max_players=3, word_pool=list(WORDS))

        session = await registry.create_room(ParticipantInfo("host", "Host"), settings)

        assert session.settings is settings

    async def test_host_as_spectator(self, registry: RoomRegistry) -> None:
        """The creator can watch instead of play."""
        session = await registry.create_room(ParticipantInfo("host", "Host"), as_spectator=True)

        assert session.players == []
        assert session.find_spectator("host") is not None


class TestLookup:
    """Tests for finding rooms."""

    async def test_get_is_case_insensitive(self, registry: RoomRegistry) -> None:
        """Codes typed in lowercase still resolve."""
        code = await create(registry)

        assert registry.get(f" {code.lower()} ").code == code

    async def test_unknown_code(self, registry: RoomRegistry) -> None:
        """Missing rooms raise RoomNotFoundError."""
        with pytest.raises(RoomNotFoundError):
            registry.get("ZZZZZ")
        assert registry.find("ZZZZZ") is None

    async def test_join_unknown_room(self, registry: RoomRegistry) -> None:
        """Joining a missing room fails the same way."""
        with pytest.raises(RoomNotFoundError):
            await registry.join_room("ZZZZZ", ParticipantInfo("p1", "Ada"))

    async def test_join_room(self, registry: RoomRegistry) -> None:
        """Joining returns the room snapshot."""
        code = await create(registry)

        snapshot = await registry.join_room(code, ParticipantInfo("p1", "Ada"))

        assert [p["id"] for p in snapshot.players] == ["host", "p1"]


class TestRemoval:
    """Tests for departures that may tear rooms down."""

    async def test_host_leaving_destroys_room(self, registry: RoomRegistry, broadcaster) -> None:
        """The other occupants are notified and the code stops resolving."""
        code = await create(registry)
        await registry.join_room(code, ParticipantInfo("p1", "Ada"))
        await registry.join_room(code, ParticipantInfo("s1", "Watcher"), as_spectator=True)

        orphans = await registry.remove_participant(code, "host")

        assert orphans == ["p1", "s1"]
        assert registry.room_count == 0
        closed = broadcaster.of_type(NotificationType.ROOM_CLOSED)
        assert closed[0].payload["message"] == HOST_LEFT_MESSAGE
        with pytest.raises(RoomNotFoundError):
            await registry.join_room(code, ParticipantInfo("p2", "Late"))

    async def test_host_leaving_mid_game(self, registry: RoomRegistry) -> None:
        """A running game is torn down as well."""
        code = await create(registry)
        await registry.join_room(code, ParticipantInfo("p1", "Ada"))
        session = registry.get(code)
        await session.start_game("host")

        await registry.remove_participant(code, "host")

        assert session.closed
        assert registry.find(code) is None

    async def test_player_leaving_keeps_room(self, registry: RoomRegistry) -> None:
        """Non-host departures only update the roster."""
        code = await create(registry)
        await registry.join_room(code, ParticipantInfo("p1", "Ada"))

        assert await registry.remove_participant(code, "p1") == []

        session = registry.get(code)
        assert [p.connection_id for p in session.players] == ["host"]

    async def test_empty_room_is_destroyed(self, registry: RoomRegistry) -> None:
        """A spectator host leaving empties and removes the room."""
        session = await registry.create_room(ParticipantInfo("host", "Host"), as_spectator=True)

        await registry.remove_participant(session.code, "host")

        assert registry.room_count == 0

    async def test_remove_from_missing_room(self, registry: RoomRegistry) -> None:
        """Removing from a room that is already gone is harmless."""
        assert await registry.remove_participant("ZZZZZ", "p1") == []

    async def test_destroy_twice(self, registry: RoomRegistry) -> None:
        """Destroy reports whether it removed anything."""
        code = await create(registry)

        assert await registry.destroy(code) is True
        assert await registry.destroy(code) is False

    async def test_shutdown_closes_everything(self, registry: RoomRegistry) -> None:
        """Every room is closed on shutdown."""
        sessions = [
            await registry.create_room(ParticipantInfo("h1", "One")),
            await registry.create_room(ParticipantInfo("h2", "Two")),
        ]

        await registry.shutdown()

        assert registry.room_count == 0
        assert all(s.closed for s in sessions)


class TestKick:
    """Tests for host kicks through the registry."""

    async def test_kick_disconnects_target(self, registry: RoomRegistry, broadcaster) -> None:
        """The kicked connection is removed and forced closed."""
        code = await create(registry)
        await registry.join_room(code, ParticipantInfo("p1", "Ada"))

        removed = await registry.kick(code, "host", "p1")

        assert removed.connection_id == "p1"
        assert broadcaster.disconnected == [("p1", "Kicked by host")]
        assert registry.get(code).find_player("p1") is None

    async def test_failed_kick_disconnects_nobody(self, registry: RoomRegistry, broadcaster) -> None:
        """Rejected kicks leave every connection open."""
        code = await create(registry)
        await registry.join_room(code, ParticipantInfo("p1", "Ada"))

        with pytest.raises(UnauthorizedError):
            await registry.kick(code, "p1", "host")
        with pytest.raises(ParticipantNotFoundError):
            await registry.kick(code, "host", "nobody")

        assert broadcaster.disconnected == []

    async def test_kick_in_missing_room(self, registry: RoomRegistry) -> None:
        """Kicks need a live room."""
        with pytest.raises(RoomNotFoundError):
            await registry.kick("ZZZZZ", "host", "p1")

    async def test_kick_ends_game_when_too_few_remain(self, registry: RoomRegistry) -> None:
        """Kicking down to one player finishes the game."""
        code = await create(registry)
        await registry.join_room(code, ParticipantInfo("p1", "Ada"))
        session = registry.get(code)
        await session.start_game("host")

        await registry.kick(code, "host", "p1")

        assert session.state == SessionState.ENDED
