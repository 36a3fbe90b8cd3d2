"""Room state machine for draw-and-guess games.

A ``Session`` owns one room's full game state. Every mutating entry point,
whether it comes from a client action or from the room's countdown, runs
under the session's ``asyncio.Lock`` so turn transitions are applied one at a
time and notifications for a room are delivered in the order they happen.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

import structlog

from drawguess.core.config import GameConfig
from drawguess.game.exceptions import (
    GameAlreadyStartedError,
    InsufficientPlayersError,
    InvalidTurnActionError,
    ParticipantNotFoundError,
    RoomFullError,
    RoomNotFoundError,
    UnauthorizedError,
)
from drawguess.game.models import (
    DEFAULT_AVATAR,
    HOST_AVATAR,
    ChatMessage,
    GameSettings,
    LeaderboardEntry,
    Notification,
    ParticipantInfo,
    Player,
    RoomSnapshot,
    Spectator,
)
from drawguess.game.scheduler import TurnScheduler
from drawguess.game.scoring import drawer_points, guesser_points
from drawguess.game.types import NotificationType, SessionState
from drawguess.game.wordbank import WordBank, mask_word, normalize_guess

logger = structlog.get_logger(__name__)

REACTIONS = frozenset({"like", "dislike"})
KICK_REASON = "Kicked by host"
IN_GAME_STATES = frozenset({SessionState.AWAITING_WORD, SessionState.DRAWING, SessionState.TURN_ENDING})


class Broadcaster(Protocol):
    """Delivers session notifications to connections."""

    async def deliver(self, room_code: str, notification: Notification) -> None:
        """Send a notification to its audience within a room."""
        ...

    async def disconnect(self, connection_id: str, reason: str) -> None:
        """Force a connection closed."""
        ...


class Session:
    """One room's game state and the operations clients can invoke on it.

    Attributes:
        code: Room code the session is registered under.
        host_connection_id: Connection with host privileges.
        settings: Sanitized room settings.
        players: Active players in join order (defines turn rotation).
        spectators: Observers keyed by connection id.
        state: Current state of the game.
        current_round: Round counter, incremented whenever rotation wraps.
        drawer_index: Rotation position in ``players``, -1 before the first turn.
        current_word: Secret word of the active turn, empty otherwise.
        word_options: Candidates offered to the drawer this turn.
        remaining_seconds: Seconds left on the drawing countdown.
        paused: Whether the host paused the game.
    """

    def __init__(
        self,
        code: str,
        host: ParticipantInfo,
        settings: GameSettings,
        broadcaster: Broadcaster,
        *,
        config: GameConfig | None = None,
        host_is_spectator: bool = False,
    ) -> None:
        """Create a session in the lobby with the host as first participant.

        Args:
            code: Unique room code.
            host: The creator's identity.
            settings: Sanitized settings.
            broadcaster: Delivers notifications to connections.
            config: Process configuration (timings, bonus, minimum players).
            host_is_spectator: Register the host as spectator instead of player.
        """
        self.code = code
        self.host_connection_id = host.connection_id
        self.settings = settings
        self.config = config or GameConfig()
        self.players: list[Player] = []
        self.spectators: dict[str, Spectator] = {}
        self.state = SessionState.LOBBY
        self.current_round = 0
        self.drawer_index = -1
        self.current_word = ""
        self.word_options: list[str] = []
        self.remaining_seconds = 0
        self.paused = False
        self._broadcaster = broadcaster
        self._scheduler = TurnScheduler(tick_interval=self.config.tick_interval, name=code)
        self._lock = asyncio.Lock()
        self._turn = 0
        self._drawer_id: str | None = None
        self._hold_round = False
        self._closed = False

        avatar = HOST_AVATAR if host.avatar in ("", DEFAULT_AVATAR) else host.avatar
        if host_is_spectator:
            self.spectators[host.connection_id] = Spectator(host.connection_id, host.username, avatar)
        else:
            self.players.append(Player(host.connection_id, host.username, avatar))

    # Lookups

    @property
    def turn_number(self) -> int:
        """Sequence number of the current turn (0 before the first turn)."""
        return self._turn

    @property
    def closed(self) -> bool:
        """Whether the session has been torn down."""
        return self._closed

    @property
    def drawer(self) -> Player | None:
        """The player drawing this turn, None once they leave or the game ends."""
        return self.find_player(self._drawer_id) if self._drawer_id else None

    @property
    def is_empty(self) -> bool:
        """Whether nobody is left in the room."""
        return not self.players and not self.spectators

    def is_host(self, connection_id: str) -> bool:
        """Check whether a connection is the room host."""
        return connection_id == self.host_connection_id

    def find_player(self, connection_id: str) -> Player | None:
        """Get a player by connection id."""
        return next((p for p in self.players if p.connection_id == connection_id), None)

    def find_spectator(self, connection_id: str) -> Spectator | None:
        """Get a spectator by connection id."""
        return self.spectators.get(connection_id)

    def has_participant(self, connection_id: str) -> bool:
        """Check whether a connection is in either roster."""
        return self.find_player(connection_id) is not None or connection_id in self.spectators

    def connection_ids(self) -> list[str]:
        """All participant connection ids, players first."""
        return [p.connection_id for p in self.players] + list(self.spectators)

    def leaderboard(self) -> list[LeaderboardEntry]:
        """Players by score descending; ties keep join order."""
        ranked = sorted(self.players, key=lambda p: -p.score)
        return [
            LeaderboardEntry(
                rank=position,
                connection_id=p.connection_id,
                username=p.username,
                avatar=p.avatar,
                score=p.score,
            )
            for position, p in enumerate(ranked, start=1)
        ]

    def snapshot(self) -> RoomSnapshot:
        """Full roster plus current turn info."""
        drawer = self.drawer
        return RoomSnapshot(
            code=self.code,
            state=self.state,
            host_id=self.host_connection_id,
            players=[p.to_dict() for p in self.players],
            spectators=[s.to_dict() for s in self.spectators.values()],
            drawer_id=drawer.connection_id if drawer and self.state in IN_GAME_STATES else None,
            current_round=self.current_round,
            total_rounds=self.settings.total_rounds,
            remaining_seconds=self.remaining_seconds,
            paused=self.paused,
            hint=mask_word(self.current_word) if self.current_word else None,
            word_length=len(self.current_word),
            settings=self.settings.to_dict(),
        )

    def check_admission(self, connection_id: str, *, as_spectator: bool = False) -> None:
        """Raise the error a join by this connection would fail with.

        Lets a caller validate a join before giving up its current room.
        Participants already in the room always pass.

        Raises:
            RoomNotFoundError: If the session was torn down.
            RoomFullError: If the room has max_players players.
            GameAlreadyStartedError: If a player joins after the lobby.
        """
        if self._closed:
            raise RoomNotFoundError(self.code)
        if as_spectator or self.has_participant(connection_id):
            return
        if len(self.players) >= self.settings.max_players:
            raise RoomFullError(self.settings.max_players)
        if self.state != SessionState.LOBBY:
            raise GameAlreadyStartedError

    # Client operations

    async def join(self, info: ParticipantInfo, *, as_spectator: bool = False) -> RoomSnapshot:
        """Add a participant to the room.

        Spectators may join in any state; players only while in the lobby and
        below ``max_players``.

        Args:
            info: The joiner's identity.
            as_spectator: Join as a non-scoring observer.

        Returns:
            Snapshot of the room after the join.

        Raises:
            RoomNotFoundError: If the session was torn down.
            RoomFullError: If the room has max_players players.
            GameAlreadyStartedError: If a player joins after the lobby.
        """
        async with self._lock:
            self.check_admission(info.connection_id, as_spectator=as_spectator)
            if self.has_participant(info.connection_id):
                return self.snapshot()

            if as_spectator:
                self.spectators[info.connection_id] = Spectator(info.connection_id, info.username, info.avatar)
            else:
                self.players.append(Player(info.connection_id, info.username, info.avatar))

            logger.info(
                "Participant joined room",
                room_code=self.code,
                connection_id=info.connection_id,
                username=info.username,
                is_spectator=as_spectator,
            )

            snapshot = self.snapshot()
            await self._emit(
                Notification.to(info.connection_id, NotificationType.JOIN_SUCCESS, room=snapshot.to_dict()),
            )
            if as_spectator:
                await self._emit(Notification.to(info.connection_id, NotificationType.YOU_ARE_SPECTATOR))
            await self._chat(ChatMessage.system(f"{info.username} joined the room"))
            await self._emit_roster()
            return snapshot

    async def announce_created(self) -> None:
        """Tell the creator the room exists and publish the first roster."""
        async with self._lock:
            await self._emit(
                Notification.to(
                    self.host_connection_id,
                    NotificationType.ROOM_CREATED,
                    code=self.code,
                    room=self.snapshot().to_dict(),
                ),
            )
            if self.host_connection_id in self.spectators:
                await self._emit(Notification.to(self.host_connection_id, NotificationType.YOU_ARE_SPECTATOR))
            await self._emit_roster()

    async def publish_roster(self) -> None:
        """Broadcast the current roster to the room."""
        async with self._lock:
            await self._emit_roster()

    async def start_game(self, requester_id: str) -> None:
        """Start the game (host only) and advance to the first turn.

        Raises:
            UnauthorizedError: If the requester is not the host.
            GameAlreadyStartedError: If the game left the lobby already.
            InsufficientPlayersError: If fewer than two players are present.
        """
        async with self._lock:
            self._require_host(requester_id, "start the game")
            if self.state != SessionState.LOBBY:
                raise GameAlreadyStartedError
            if len(self.players) < self.config.min_players:
                raise InsufficientPlayersError(self.config.min_players, len(self.players))

            logger.info(
                "Game started",
                room_code=self.code,
                players=len(self.players),
                total_rounds=self.settings.total_rounds,
            )
            await self._advance_turn()

    async def choose_word(self, connection_id: str, word: str) -> bool:
        """Select the word for the current turn (drawer only).

        A second call after a word is set is a no-op.

        Args:
            connection_id: The caller.
            word: One of the offered candidates.

        Returns:
            True if the word was set by this call.

        Raises:
            InvalidTurnActionError: If the caller is not the drawer, no word
                selection is pending, or the word was not offered.
        """
        async with self._lock:
            return await self._choose_word(connection_id, word)

    async def submit_guess(self, connection_id: str, text: str) -> int:
        """Evaluate a guess.

        Correct guesses are scored and announced; wrong ones are broadcast
        verbatim as chat to the whole room, drawer included.

        Args:
            connection_id: The guessing player.
            text: Raw guess text.

        Returns:
            Points awarded (0 for a wrong or empty guess).

        Raises:
            ParticipantNotFoundError: If the caller is not in the room.
            InvalidTurnActionError: If the guess is not allowed right now.
        """
        async with self._lock:
            if not isinstance(text, str) or not text.strip():
                return 0

            player = self.find_player(connection_id)
            if player is None:
                if connection_id in self.spectators:
                    raise InvalidTurnActionError("Spectators cannot guess")
                raise ParticipantNotFoundError(connection_id)
            if self.state != SessionState.DRAWING or not self.current_word:
                raise InvalidTurnActionError("Guesses are only accepted while a word is being drawn")
            if self.paused:
                raise InvalidTurnActionError("The game is paused")
            drawer = self.drawer
            if drawer is player:
                raise InvalidTurnActionError("The drawer cannot guess")
            if player.has_guessed_this_turn:
                raise InvalidTurnActionError("You already guessed the word")

            if not WordBank.check_guess(self.current_word, text):
                await self._chat(
                    ChatMessage(content=text, sender_id=player.connection_id, sender_name=player.username),
                )
                return 0

            points = guesser_points(self.remaining_seconds, self.settings.draw_seconds)
            player.has_guessed_this_turn = True
            player.award_points(points)
            if drawer is not None:
                drawer.award_points(drawer_points(self.config.drawer_bonus))

            logger.info(
                "Correct guess",
                room_code=self.code,
                connection_id=connection_id,
                points=points,
                remaining_seconds=self.remaining_seconds,
            )

            await self._emit(
                Notification.room(
                    NotificationType.CORRECT_GUESS,
                    player_id=player.connection_id,
                    username=player.username,
                    points=points,
                ),
            )
            await self._chat(ChatMessage.system(f"{player.username} guessed the word!"))
            await self._emit_roster()
            await self._end_turn_if_all_guessed()
            return points

    async def toggle_pause(self, requester_id: str) -> bool:
        """Pause or resume the countdown (host only).

        Returns:
            The new paused state.

        Raises:
            UnauthorizedError: If the requester is not the host.
            InvalidTurnActionError: If no game is running.
        """
        async with self._lock:
            self._require_host(requester_id, "pause the game")
            if self.state not in IN_GAME_STATES:
                raise InvalidTurnActionError("The game is not running")

            self.paused = not self.paused
            if self.paused:
                self._scheduler.pause()
            else:
                self._scheduler.resume()

            logger.info("Pause toggled", room_code=self.code, paused=self.paused)
            await self._emit(
                Notification.room(
                    NotificationType.PAUSE_CHANGED,
                    paused=self.paused,
                    remaining_seconds=self.remaining_seconds,
                ),
            )
            await self._chat(ChatMessage.system("Game paused by the host" if self.paused else "Game resumed"))
            return self.paused

    async def kick(self, requester_id: str, target_id: str, *, is_spectator: bool = False) -> Player | Spectator:
        """Remove a participant on the host's request and force their connection closed.

        Args:
            requester_id: Connection asking for the kick.
            target_id: Connection to remove.
            is_spectator: Look the target up among spectators.

        Returns:
            The removed participant.

        Raises:
            UnauthorizedError: If the requester is not the host or targets the host.
            ParticipantNotFoundError: If the target is not in the given roster.
        """
        async with self._lock:
            self._require_host(requester_id, "kick participants")
            if self.is_host(target_id):
                raise UnauthorizedError("The host cannot be kicked")
            target = self.find_spectator(target_id) if is_spectator else self.find_player(target_id)
            if target is None:
                raise ParticipantNotFoundError(target_id)

            await self._emit(
                Notification.to(target_id, NotificationType.KICKED, message="You have been kicked by the host."),
            )
            # Closed before the removal broadcasts so the target only sees the kick.
            await self._broadcaster.disconnect(target_id, KICK_REASON)
            await self._remove(target_id, verb="was kicked")
            logger.info("Participant kicked", room_code=self.code, target_id=target_id, username=target.username)
            return target

    async def remove_participant(self, connection_id: str) -> Player | Spectator | None:
        """Remove a departed participant.

        Removing the current drawer force-ends the active turn.

        Returns:
            The removed participant, or None if the connection was not in the room.
        """
        async with self._lock:
            return await self._remove(connection_id, verb="left")

    async def relay_canvas(self, connection_id: str, image: Any) -> None:
        """Forward the drawer's canvas image to every other occupant verbatim.

        Raises:
            InvalidTurnActionError: If the sender is not drawing right now.
        """
        async with self._lock:
            drawer = self.drawer
            if self.state != SessionState.DRAWING or drawer is None or drawer.connection_id != connection_id:
                raise InvalidTurnActionError("Only the drawer can update the canvas")
            await self._emit(Notification.others(connection_id, NotificationType.CANVAS_UPDATE, image=image))

    async def send_reaction(self, connection_id: str, kind: str) -> None:
        """Relay a like/dislike reaction to the room.

        Raises:
            ParticipantNotFoundError: If the sender is not in the room.
            InvalidTurnActionError: If the reaction kind is unknown.
        """
        async with self._lock:
            sender = self.find_player(connection_id) or self.find_spectator(connection_id)
            if sender is None:
                raise ParticipantNotFoundError(connection_id)
            if kind not in REACTIONS:
                raise InvalidTurnActionError(f"Unknown reaction: {kind}")
            await self._emit(
                Notification.room(NotificationType.REACTION, reaction=kind, username=sender.username),
            )

    async def close(self, reason: str) -> list[str]:
        """Tear the session down, notifying every remaining occupant.

        Args:
            reason: Message shown to the occupants.

        Returns:
            Connection ids that were still in the room.
        """
        async with self._lock:
            if self._closed:
                return []
            self._closed = True
            self._scheduler.cancel()
            occupants = [cid for cid in self.connection_ids() if cid != self.host_connection_id]
            await self._emit(
                Notification.others(self.host_connection_id, NotificationType.ROOM_CLOSED, message=reason),
            )
            logger.info("Session closed", room_code=self.code, reason=reason, occupants=len(occupants))
            return occupants

    # Countdown entry points

    async def on_countdown_tick(self, turn: int, remaining: int) -> None:
        """Publish a drawing countdown tick."""
        async with self._lock:
            if self._closed or turn != self._turn or self.state != SessionState.DRAWING:
                return
            self.remaining_seconds = remaining
            await self._emit(Notification.room(NotificationType.TIMER_UPDATE, remaining_seconds=remaining))

    async def on_turn_expired(self, turn: int) -> None:
        """End the turn when the drawing countdown reaches zero."""
        async with self._lock:
            if self._closed or turn != self._turn or self.state != SessionState.DRAWING:
                return
            await self._end_turn()

    async def on_word_choice_expired(self, turn: int) -> None:
        """Auto-select the first candidate when the drawer did not choose."""
        async with self._lock:
            if self._closed or turn != self._turn or self.state != SessionState.AWAITING_WORD or self.current_word:
                return
            drawer = self.drawer
            if drawer is None or not self.word_options:
                await self._end_turn()
                return
            logger.info("Word choice timed out, auto-selecting", room_code=self.code, turn=turn)
            await self._choose_word(drawer.connection_id, self.word_options[0])

    async def on_reveal_finished(self, turn: int) -> None:
        """Advance to the next turn after the reveal delay."""
        async with self._lock:
            if self._closed or turn != self._turn or self.state != SessionState.TURN_ENDING:
                return
            await self._advance_turn()

    # Internal transitions (caller holds the lock)

    def _require_host(self, connection_id: str, action: str) -> None:
        if not self.is_host(connection_id):
            raise UnauthorizedError(f"Only the host can {action}")

    async def _advance_turn(self) -> None:
        self._scheduler.cancel()
        if len(self.players) < self.config.min_players:
            await self._finish_game()
            return

        self.drawer_index = (self.drawer_index + 1) % len(self.players)
        if self.drawer_index == 0:
            if self._hold_round:
                self._hold_round = False
            else:
                self.current_round += 1
        if self.current_round > self.settings.total_rounds:
            await self._finish_game()
            return

        self._turn += 1
        turn = self._turn
        for player in self.players:
            player.reset_turn_state()
        self.current_word = ""
        self.remaining_seconds = 0
        self.state = SessionState.AWAITING_WORD
        self.word_options = WordBank.get_word_options(self.settings.word_pool, self.config.word_option_count)
        drawer = self.players[self.drawer_index]
        self._drawer_id = drawer.connection_id

        logger.info(
            "Turn started",
            room_code=self.code,
            round=self.current_round,
            turn=turn,
            drawer_id=drawer.connection_id,
        )

        await self._chat(ChatMessage.system(f"Round {self.current_round}: {drawer.username} is drawing!"))
        await self._emit(Notification.room(NotificationType.CANVAS_UPDATE, image=None))
        await self._emit(
            Notification.room(
                NotificationType.TURN_STARTED,
                drawer_id=drawer.connection_id,
                drawer_name=drawer.username,
                round=self.current_round,
                total_rounds=self.settings.total_rounds,
                turn=turn,
            ),
        )
        await self._emit_roster()
        await self._emit(
            Notification.to(
                drawer.connection_id,
                NotificationType.WORD_OPTIONS,
                options=list(self.word_options),
                seconds=self.config.word_choice_seconds,
            ),
        )
        self._scheduler.start(
            self.config.word_choice_seconds,
            on_expire=lambda: self.on_word_choice_expired(turn),
        )

    async def _choose_word(self, connection_id: str, word: str) -> bool:
        if self.current_word:
            return False
        drawer = self.drawer
        if self.state != SessionState.AWAITING_WORD or drawer is None:
            raise InvalidTurnActionError("No word selection is pending")
        if drawer.connection_id != connection_id:
            raise InvalidTurnActionError("Only the drawer can choose the word")
        chosen = next(
            (w for w in self.word_options if isinstance(word, str) and normalize_guess(w) == normalize_guess(word)),
            None,
        )
        if chosen is None:
            raise InvalidTurnActionError("Choose one of the offered words")

        turn = self._turn
        self.current_word = chosen
        self.state = SessionState.DRAWING
        self.remaining_seconds = self.settings.draw_seconds

        logger.info("Word chosen", room_code=self.code, turn=turn, word_length=len(chosen))
        logger.debug("Secret word", room_code=self.code, word=chosen)

        await self._emit(
            Notification.room(NotificationType.WORD_HINT, hint=mask_word(chosen), length=len(chosen)),
        )
        await self._emit(Notification.to(drawer.connection_id, NotificationType.YOUR_WORD, word=chosen))
        await self._emit(
            Notification.room(NotificationType.TIMER_UPDATE, remaining_seconds=self.remaining_seconds),
        )
        self._scheduler.start(
            self.settings.draw_seconds,
            on_expire=lambda: self.on_turn_expired(turn),
            on_tick=lambda remaining: self.on_countdown_tick(turn, remaining),
        )
        return True

    async def _end_turn(self) -> bool:
        if self.state not in (SessionState.AWAITING_WORD, SessionState.DRAWING):
            return False
        self._scheduler.cancel()
        turn = self._turn
        word = self.current_word
        self.state = SessionState.TURN_ENDING
        self.remaining_seconds = 0

        logger.info("Turn ended", room_code=self.code, turn=turn, word_chosen=bool(word))

        if word:
            await self._chat(ChatMessage.system(f"The word was: {word}"))
        else:
            await self._chat(ChatMessage.system("Turn skipped"))
        await self._emit(
            Notification.room(
                NotificationType.TURN_ENDED,
                word=word,
                length=len(word),
                scores={p.connection_id: p.score for p in self.players},
            ),
        )
        await self._emit_roster()
        self._scheduler.start(
            self.config.reveal_seconds,
            on_expire=lambda: self.on_reveal_finished(turn),
        )
        return True

    async def _end_turn_if_all_guessed(self) -> None:
        if self.state != SessionState.DRAWING:
            return
        guessers = [p for p in self.players if p.connection_id != self._drawer_id]
        if guessers and all(p.has_guessed_this_turn for p in guessers):
            await self._end_turn()

    async def _finish_game(self) -> None:
        self._scheduler.cancel()
        self._scheduler.resume()
        self.state = SessionState.ENDED
        self._drawer_id = None
        self.current_word = ""
        self.word_options = []
        self.remaining_seconds = 0
        self.paused = False
        leaderboard = self.leaderboard()
        winner = leaderboard[0] if leaderboard else None

        logger.info(
            "Game over",
            room_code=self.code,
            rounds=self.settings.total_rounds,
            winner=winner.username if winner else None,
        )

        await self._emit(
            Notification.room(
                NotificationType.GAME_OVER,
                leaderboard=[entry.to_dict() for entry in leaderboard],
                winner=winner.to_dict() if winner else None,
            ),
        )
        await self._chat(ChatMessage.system(f"Game over! {winner.username} wins!" if winner else "Game over!"))

    async def _remove(self, connection_id: str, *, verb: str) -> Player | Spectator | None:
        spectator = self.spectators.pop(connection_id, None)
        if spectator is not None:
            await self._chat(ChatMessage.system(f"{spectator.username} {verb}"))
            await self._emit_roster()
            return spectator

        index = next((i for i, p in enumerate(self.players) if p.connection_id == connection_id), None)
        if index is None:
            return None

        player = self.players.pop(index)
        in_game = self.state in IN_GAME_STATES
        was_drawer = in_game and index == self.drawer_index
        if in_game:
            if index < self.drawer_index:
                self.drawer_index -= 1
            elif was_drawer:
                # The successor moves into this slot; the next advance lands on it.
                self.drawer_index = index - 1
                self._drawer_id = None
                if index == 0:
                    self._hold_round = True
        elif self.drawer_index >= len(self.players):
            self.drawer_index = len(self.players) - 1

        logger.info(
            "Player removed",
            room_code=self.code,
            connection_id=connection_id,
            was_drawer=was_drawer,
            remaining_players=len(self.players),
        )

        await self._chat(ChatMessage.system(f"{player.username} {verb}"))
        await self._emit_roster()

        if in_game and len(self.players) < self.config.min_players:
            await self._finish_game()
        elif was_drawer:
            await self._end_turn()
        else:
            await self._end_turn_if_all_guessed()
        return player

    async def _emit_roster(self) -> None:
        drawer = self.drawer
        await self._emit(
            Notification.room(
                NotificationType.ROSTER,
                players=[p.to_dict() for p in self.players],
                spectators=[s.to_dict() for s in self.spectators.values()],
                drawer_id=drawer.connection_id if drawer and self.state in IN_GAME_STATES else None,
                host_id=self.host_connection_id,
            ),
        )

    async def _chat(self, message: ChatMessage) -> None:
        await self._emit(Notification.room(NotificationType.CHAT_MESSAGE, **message.to_dict()))

    async def _emit(self, notification: Notification) -> None:
        await self._broadcaster.deliver(self.code, notification)
