"""Cancellable per-room countdown."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    TickCallback = Callable[[int], Awaitable[None]]
    ExpireCallback = Callable[[], Awaitable[None]]

logger = structlog.get_logger(__name__)


class TurnScheduler:
    """One countdown per session, backed by a single asyncio task.

    ``start`` always cancels the previous countdown first, so at most one is
    live. Every start or cancel bumps a generation counter; a countdown whose
    generation is stale stops before invoking any further callback, which
    keeps ``on_expire`` from firing after a superseding transition even when
    the cancel happens from inside one of the countdown's own callbacks.

    While paused, ticks keep elapsing but do not decrement the remaining time,
    so resuming continues from the stored value.
    """

    def __init__(self, *, tick_interval: float = 1.0, name: str = "") -> None:
        """Initialize the scheduler.

        Args:
            tick_interval: Wall-clock seconds per tick.
            name: Label used in log events (usually the room code).
        """
        self._tick_interval = tick_interval
        self._name = name
        self._task: asyncio.Task[None] | None = None
        self._generation = 0
        self._remaining = 0
        self._paused = False

    @property
    def remaining(self) -> int:
        """Seconds left on the active countdown (0 when idle)."""
        return self._remaining if self.active else 0

    @property
    def active(self) -> bool:
        """Whether a countdown is currently running."""
        return self._task is not None and not self._task.done()

    @property
    def paused(self) -> bool:
        """Whether ticks are currently frozen."""
        return self._paused

    def pause(self) -> None:
        """Freeze the countdown at its current value."""
        self._paused = True

    def resume(self) -> None:
        """Continue the countdown from the stored remaining time."""
        self._paused = False

    def start(
        self,
        duration: int,
        on_expire: ExpireCallback,
        on_tick: TickCallback | None = None,
    ) -> None:
        """Start a countdown, replacing any previous one.

        Args:
            duration: Seconds to count down from.
            on_expire: Awaited once when the countdown reaches zero.
            on_tick: Awaited with the new remaining value after each decrement.
        """
        self.cancel()
        generation = self._generation
        self._remaining = max(0, duration)
        self._task = asyncio.create_task(
            self._run(generation, on_expire, on_tick),
            name=f"turn-scheduler-{self._name}-{generation}",
        )

    def cancel(self) -> bool:
        """Cancel the active countdown.

        Returns:
            True if a live countdown was stopped.
        """
        self._generation += 1
        task, self._task = self._task, None
        if task is None or task.done():
            return False
        if task is not asyncio.current_task():
            task.cancel()
        return True

    async def _run(
        self,
        generation: int,
        on_expire: ExpireCallback,
        on_tick: TickCallback | None,
    ) -> None:
        try:
            while self._remaining > 0:
                await asyncio.sleep(self._tick_interval)
                if generation != self._generation:
                    return
                if self._paused:
                    continue
                self._remaining -= 1
                if on_tick is not None:
                    await on_tick(self._remaining)
                    if generation != self._generation:
                        return
            self._generation += 1
            self._task = None
            await on_expire()
        except asyncio.CancelledError:
            logger.debug("Countdown cancelled", room_code=self._name)
            raise
        except Exception:
            logger.exception("Countdown callback failed", room_code=self._name)
