"""Pytest configuration and fixtures for drawguess tests."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from drawguess.core.config import GameConfig
from drawguess.game.models import GameSettings, ParticipantInfo
from drawguess.game.session import Session

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from drawguess.game.models import Notification
    from drawguess.game.types import NotificationType

WORDS = ["apple", "banana", "cherry"]


class RecordingBroadcaster:
    """Broadcaster double that records everything a session emits."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, Notification]] = []
        self.disconnected: list[tuple[str, str]] = []

    async def deliver(self, room_code: str, notification: Notification) -> None:
        self.sent.append((room_code, notification))

    async def disconnect(self, connection_id: str, reason: str) -> None:
        self.disconnected.append((connection_id, reason))

    @property
    def notifications(self) -> list[Notification]:
        return [n for _, n in self.sent]

    def types(self) -> list[str]:
        return [n.type.value for n in self.notifications]

    def of_type(self, type_: NotificationType) -> list[Notification]:
        return [n for n in self.notifications if n.type == type_]

    def clear(self) -> None:
        self.sent.clear()
        self.disconnected.clear()


class FakeSocket:
    """Minimal stand-in for a Litestar WebSocket."""

    def __init__(self, frames: list[Any] | None = None) -> None:
        self.frames = list(frames or [])
        self.sent: list[dict[str, Any]] = []
        self.accepted = False
        self.closed: tuple[int, str | None] | None = None

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data: dict[str, Any]) -> None:
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.closed = (code, reason)

    async def iter_data(self) -> AsyncIterator[Any]:
        for frame in self.frames:
            yield frame

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]

    def of_type(self, type_: str) -> list[dict[str, Any]]:
        return [m for m in self.sent if m["type"] == type_]


async def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll until ``predicate`` holds or fail after ``timeout`` seconds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            pytest.fail("condition not reached in time")
        await asyncio.sleep(0.005)


@pytest.fixture
def wait_until() -> Callable[..., Awaitable[None]]:
    """Expose the polling helper to tests."""
    return wait_for


@pytest.fixture
def make_socket() -> Callable[..., FakeSocket]:
    """Factory for fake WebSockets."""
    return FakeSocket


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    """Create a fresh recording broadcaster."""
    return RecordingBroadcaster()


@pytest.fixture
def config() -> GameConfig:
    """Configuration whose countdowns never fire during a test.

    Timer callbacks are driven by hand through the session's entry points.
    """
    return GameConfig(tick_interval=60.0)


@pytest.fixture
def fast_config() -> GameConfig:
    """Configuration with millisecond ticks for timer-driven tests."""
    return GameConfig(tick_interval=0.005, word_choice_seconds=2, reveal_seconds=1)


@pytest.fixture
def settings() -> GameSettings:
    """Room settings with a three word pool, so every word is always offered."""
    return GameSettings(max_players=8, draw_seconds=80, total_rounds=3, word_pool=list(WORDS))


@pytest.fixture
async def make_session(
    broadcaster: RecordingBroadcaster,
    config: GameConfig,
    settings: GameSettings,
) -> AsyncIterator[Callable[..., Awaitable[Session]]]:
    """Factory for sessions hosted by "host" with extra players "p1", "p2"...

    Every session created is closed at teardown so no countdown outlives the test.
    """
    sessions: list[Session] = []

    async def factory(
        players: int = 1,
        *,
        room_settings: GameSettings | None = None,
        game_config: GameConfig | None = None,
        host_is_spectator: bool = False,
    ) -> Session:
        session = Session(
            "ABCDE",
            ParticipantInfo("host", "Host"),
            room_settings or settings,
            broadcaster,
            config=game_config or config,
            host_is_spectator=host_is_spectator,
        )
        sessions.append(session)
        for number in range(1, players + 1):
            await session.join(ParticipantInfo(f"p{number}", f"Player {number}"))
        broadcaster.clear()
        return session

    yield factory

    for session in sessions:
        await session.close("test finished")
