"""Interactive game session: owns the live board and drives AI players."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from functools import partial

import numpy as np

from .board import Scores, count_pieces, validate_board
from .config import Config
from .constants import BLACK, COLOR_NAMES, EMPTY, WHITE, tuple2move
from .evaluation import Evaluator
from .rules.base import InitializeBoard
from .rules.engine import ClassicRules, RulesEngine
from .rules.initialization import ClassicInitialization
from .search import SearchEngine
from .turn import TurnState, advance, winner

logger = logging.getLogger(__name__)


class PlayerType(Enum):
    """Who controls a colour: a human, or the search at one of three depths."""

    HUMAN = "human"
    AI_DEPTH_4 = "ai4"
    AI_DEPTH_5 = "ai5"
    AI_DEPTH_6 = "ai6"

    @property
    def depth(self) -> int | None:
        """Search depth in plies, None for a human."""
        if self is PlayerType.HUMAN:
            return None
        return int(self.value[2:])

    @property
    def is_ai(self) -> bool:
        """True for the search-driven types."""
        return self is not PlayerType.HUMAN

    @classmethod
    def parse(cls, name: str) -> PlayerType:
        """Look up a player type by its name, e.g. ``"human"`` or ``"ai5"``."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown player type {name!r}, expected one of: {choices}") from None


class GameEvent(Enum):
    """Notifications sent to session listeners."""

    BOARD_CHANGED = "board_changed"
    TURN_CHANGED = "turn_changed"
    AI_THINKING_CHANGED = "ai_thinking_changed"
    GAME_OVER = "game_over"
    RESET = "reset"


Listener = Callable[[GameEvent, "GameSession"], None]
Dispatcher = Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class _SearchJob:
    board: np.ndarray
    player: int
    depth: int
    generation: int


class GameSession:
    """A single game of Reversi between any mix of human and AI players.

    The session owns the only live board. Every change goes through the same move
    path, under one re-entrant lock, whether the move came from a human through
    :meth:`drop_piece` or from a finished search.

    Searches run on ``executor`` against a copy of the board. With no executor they
    run synchronously in the calling thread. When a search finishes its move is merged
    directly, or handed to ``dispatcher`` so that a UI event loop can merge it on its
    own thread (e.g. ``loop.call_soon_threadsafe``).

    Rejected moves (illegal, occupied, off the board, game over, AI thinking) leave the
    session untouched and make :meth:`drop_piece` return False.
    """

    def __init__(
        self,
        black: PlayerType | str = PlayerType.HUMAN,
        white: PlayerType | str = PlayerType.HUMAN,
        *,
        config: Config | None = None,
        rules: RulesEngine | None = None,
        search: SearchEngine | None = None,
        initialization_rule: type[InitializeBoard] = ClassicInitialization,
        executor: Executor | None = None,
        threaded: bool = False,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self.config = config or Config()
        self.rules = rules or ClassicRules()
        if search is None:
            search = SearchEngine(
                evaluator=Evaluator(self.config.eval, self.rules),
                rules=self.rules,
                rng=np.random.default_rng(self.config.search.seed),
            )
        self.search = search
        self.initialization_rule = initialization_rule

        self._owns_executor = executor is None and threaded
        if self._owns_executor:
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="reversi-ai")
        self._executor = executor
        self._dispatcher = dispatcher

        self._lock = threading.RLock()
        self._idle = threading.Condition(self._lock)
        self._listeners: list[Listener] = []
        self._player_types = {BLACK: PlayerType.HUMAN, WHITE: PlayerType.HUMAN}
        self.set_player_type(BLACK, black)
        self.set_player_type(WHITE, white)

        self._generation = 0
        self._ai_thinking = False
        self._error: BaseException | None = None
        self._new_game()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def board(self) -> np.ndarray:
        """A copy of the current board."""
        with self._lock:
            return self._board.copy()

    @property
    def current_player(self) -> int:
        """Colour to move. Unchanged once the game is over."""
        return self._current

    @property
    def state(self) -> TurnState:
        """Current state of the turn state machine."""
        if self._game_over:
            return TurnState.GAME_OVER
        return TurnState.to_move(self._current)

    @property
    def scores(self) -> Scores:
        """Empty, black and white cell counts."""
        return self._scores

    @property
    def game_over(self) -> bool:
        """True once neither side can move."""
        return self._game_over

    @property
    def winner(self) -> int | None:
        """BLACK or WHITE once the game is over, EMPTY for a draw, None while playing."""
        if not self._game_over:
            return None
        return winner(self._scores)

    @property
    def ai_thinking(self) -> bool:
        """True while a search for the side to move is in flight."""
        return self._ai_thinking

    def is_legal_move(self, row: int, col: int, player: int | None = None) -> bool:
        """Check a move for `player` (default: the side to move) on the live board."""
        with self._lock:
            if player is None:
                player = self._current
            return self.rules.is_legal_move(self._board, row, col, player)

    def legal_moves(self) -> list[tuple[int, int]]:
        """Legal moves for the side to move; empty once the game is over."""
        with self._lock:
            if self._game_over:
                return []
            return self.rules.enumerate_legal_moves(self._board, self._current)

    def player_type(self, color: int) -> PlayerType:
        """Controller of `color`."""
        return self._player_types[_check_color(color)]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_player_type(self, color: int, player_type: PlayerType | str) -> None:
        """Change who controls `color`. Takes effect at the next turn transition."""
        if isinstance(player_type, str):
            player_type = PlayerType.parse(player_type)
        with self._lock:
            self._player_types[_check_color(color)] = player_type

    @property
    def black_player_type(self) -> PlayerType:
        """Controller of BLACK; assignable."""
        return self.player_type(BLACK)

    @black_player_type.setter
    def black_player_type(self, player_type: PlayerType | str) -> None:
        self.set_player_type(BLACK, player_type)

    @property
    def white_player_type(self) -> PlayerType:
        """Controller of WHITE; assignable."""
        return self.player_type(WHITE)

    @white_player_type.setter
    def white_player_type(self, player_type: PlayerType | str) -> None:
        self.set_player_type(WHITE, player_type)

    def drop_piece(self, row: int, col: int) -> bool:
        """Play a move for the side to move. Returns False if the move was rejected."""
        with self._lock:
            if self._ai_thinking:
                logger.debug("Rejecting %s while the AI is thinking", (row, col))
                return False
            if not self._apply(row, col):
                return False
        self.start_ai_move_if_needed()
        return True

    def reset(self) -> None:
        """Start a new game. Results of searches started before the reset are dropped."""
        self._new_game()
        self.start_ai_move_if_needed()

    def start_ai_move_if_needed(self) -> None:
        """If the side to move is an AI, search for its move and play it."""
        if self._executor is None:
            self._run_searches_inline()
            return

        with self._lock:
            job = self._begin_search()
            if job is None:
                return
            try:
                future = self._executor.submit(
                    self.search.choose_move, job.board, job.player, job.depth
                )
            except Exception:
                # e.g. the executor was shut down by close()
                self._set_ai_thinking(False)
                raise
            future.add_done_callback(partial(self._on_search_done, job))

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no search is in flight. Returns False on timeout.

        Re-raises the exception of a search that failed in the background. Must not be
        called from the thread a ``dispatcher`` merges results on.
        """
        with self._idle:
            idle = self._idle.wait_for(lambda: not self._ai_thinking, timeout)
            error, self._error = self._error, None
        if error is not None:
            raise error
        return idle

    def close(self) -> None:
        """Shut down the executor if the session created it."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> GameSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Register `listener(event, session)` for state-change notifications."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a listener added with :meth:`add_listener`."""
        with self._lock:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, event.value)

    # ------------------------------------------------------------------
    # Internals. Everything below expects the lock to be held unless noted.
    # ------------------------------------------------------------------

    def _new_game(self) -> None:
        with self._lock:
            self._generation += 1
            self._board = validate_board(self.initialization_rule.init_board())
            self._current = BLACK
            self._game_over = False
            self._scores = count_pieces(self._board)
            if self._ai_thinking:
                self._set_ai_thinking(False)
            logger.info(
                "New game: %s vs %s", self.black_player_type.value, self.white_player_type.value
            )
            self._emit(GameEvent.RESET)
            # Treat WHITE as the last mover so BLACK opens whenever it can.
            self._transition(WHITE)

    def _apply(self, row: int, col: int) -> bool:
        if self._game_over:
            return False
        mover = self._current
        record = self.rules.play(self._board, row, col, mover)
        if record is None:
            logger.debug("Illegal move %s for %s", (row, col), COLOR_NAMES[mover])
            return False
        logger.debug(
            "%s plays %s, flipping %d",
            COLOR_NAMES[mover],
            tuple2move[(row, col)],
            len(record.flipped),
        )
        self._scores = count_pieces(self._board)
        self._emit(GameEvent.BOARD_CHANGED)
        self._transition(mover)
        return True

    def _transition(self, mover: int) -> None:
        state = advance(self.rules, self._board, mover)
        if state is TurnState.GAME_OVER:
            self._game_over = True
            result = winner(self._scores)
            logger.info(
                "Game over: black %d, white %d, %s",
                self._scores.black,
                self._scores.white,
                "draw" if result == EMPTY else f"{COLOR_NAMES[result]} wins",
            )
            self._emit(GameEvent.GAME_OVER)
            return
        if state.player != self._current:
            self._current = state.player
            self._emit(GameEvent.TURN_CHANGED)

    def _set_ai_thinking(self, value: bool) -> None:
        self._ai_thinking = value
        if not value:
            self._idle.notify_all()
        self._emit(GameEvent.AI_THINKING_CHANGED)

    def _begin_search(self) -> _SearchJob | None:
        with self._lock:
            if self._ai_thinking or self._game_over:
                return None
            depth = self._player_types[self._current].depth
            if depth is None:
                return None
            job = _SearchJob(self._board.copy(), self._current, depth, self._generation)
            self._set_ai_thinking(True)
            return job

    def _finish_search(self, job: _SearchJob, move: tuple[int, int] | None) -> None:
        with self._lock:
            if job.generation != self._generation:
                logger.debug("Discarding search result from a previous game")
                return
            if move is None:
                logger.warning("Search found no move for %s", COLOR_NAMES[job.player])
            else:
                self._apply(*move)
            self._set_ai_thinking(False)

    def _run_searches_inline(self) -> None:
        # AI-vs-AI play loops here rather than recursing once per move.
        while True:
            job = self._begin_search()
            if job is None:
                return
            try:
                move = self.search.choose_move(job.board, job.player, job.depth)
            except Exception:
                with self._lock:
                    self._set_ai_thinking(False)
                raise
            self._finish_search(job, move)

    def _on_search_done(self, job: _SearchJob, future: Future) -> None:
        # Runs on the executor's thread.
        try:
            move = future.result()
        except Exception as exc:
            logger.exception("Search for %s failed", COLOR_NAMES[job.player])
            with self._lock:
                if job.generation == self._generation:
                    self._error = exc
                    self._set_ai_thinking(False)
            return
        merge = partial(self._merge_search_result, job, move)
        if self._dispatcher is None:
            merge()
        else:
            self._dispatcher(merge)

    def _merge_search_result(self, job: _SearchJob, move: tuple[int, int] | None) -> None:
        # Held across both steps so wait() never sees the gap between two AI turns.
        with self._lock:
            self._finish_search(job, move)
            self.start_ai_move_if_needed()


def _check_color(color: int) -> int:
    if color not in (BLACK, WHITE):
        raise ValueError(f"Player colour must be BLACK or WHITE, got {color!r}")
    return color
