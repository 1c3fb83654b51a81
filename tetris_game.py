"""
Tetris game state machine.

``TetrisGame`` owns the board, the current and next pieces and the session
counters (score, level, lines). Everything that changes them goes through
``dispatch``: gravity ticks from the drop scheduler and player input alike.
Dispatch is serialized, so a lock and its line clear always finish before
the next action starts, even if a listener or the host fires another action
while one is running.

States::

    IDLE --start/reset--> PLAYING <--toggle_pause--> PAUSED
                             |
                             +--spawn blocked--> GAME_OVER --reset--> PLAYING

Illegal moves are not errors: the action just does nothing.
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Dict, List, Optional, Tuple

from tetris_board import Board, fits, ghost_y, new_board
from tetris_lock import lock_piece
from tetris_piece import Piece, rotate
from tetris_rng import PieceGenerator, RandomSource
from tetris_scheduler import DropScheduler

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Action(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    TOGGLE_PAUSE = "toggle_pause"


Grid = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class PieceView:
    kind: str
    shape: Grid
    x: int
    y: int

    @staticmethod
    def of(piece: Piece) -> "PieceView":
        return PieceView(piece.kind.name, tuple(tuple(r) for r in piece.shape), piece.x, piece.y)


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of everything a renderer needs for one frame."""
    board: Grid
    current_piece: Optional[PieceView]
    next_piece: Optional[PieceView]
    ghost_y: Optional[int]
    score: int
    level: int
    lines: int
    paused: bool
    game_over: bool
    speed_factor: float
    interval: float
    state: State


class TetrisGame:
    def __init__(self, speed_factor: float = 1.0, seed: Optional[int] = None,
                 rng: Optional[RandomSource] = None, generator: Optional[PieceGenerator] = None):
        self.generator = generator if generator is not None else PieceGenerator(seed, rng)
        self.scheduler = DropScheduler(1, speed_factor)
        self.board: Board = new_board()
        self.current: Optional[Piece] = None
        self.next: Optional[Piece] = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.state = State.IDLE

        self._queue: Deque[Action] = deque()
        self._busy = False
        self._events: List[Tuple[str, int]] = []
        self._listeners: Dict[str, List[Callable[[int], None]]] = {"level_up": [], "game_over": []}
        self._handlers: Dict[Action, Callable[[], None]] = {
            Action.MOVE_LEFT: lambda: self._shift(-1),
            Action.MOVE_RIGHT: lambda: self._shift(1),
            Action.SOFT_DROP: self._move_down,
            Action.ROTATE: self._rotate,
            Action.HARD_DROP: self._hard_drop,
            Action.TOGGLE_PAUSE: self._toggle_pause,
        }

    # ---------- lifecycle ----------
    def start(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Fresh board and counters, new pieces, and straight into PLAYING."""
        self._queue.clear()
        self.board = new_board()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.scheduler.level = 1
        self.current = self.generator.next()
        self.next = self.generator.next()
        self.state = State.PLAYING
        self.scheduler.arm()
        logger.info("New game (speed x%.1f, interval %.0f ms)", self.speed_factor, self.interval)

    def stop(self) -> None:
        """Cancel gravity and go idle; board and counters stay as they were.

        A finished game stays GAME_OVER so its snapshot does not change.
        """
        self.scheduler.cancel()
        self._queue.clear()
        if self.state is not State.GAME_OVER:
            self.state = State.IDLE
        logger.info("Stopped at score %d", self.score)

    # ---------- speed ----------
    @property
    def speed_factor(self) -> float:
        return self.scheduler.speed_factor

    def set_speed_factor(self, value: float) -> None:
        self.scheduler.set_speed_factor(value)

    @property
    def interval(self) -> float:
        return self.scheduler.interval

    # ---------- notifications ----------
    def on_level_up(self, callback: Callable[[int], None]) -> None:
        self._listeners["level_up"].append(callback)

    def on_game_over(self, callback: Callable[[int], None]) -> None:
        self._listeners["game_over"].append(callback)

    def _flush_events(self) -> None:
        events, self._events = self._events, []
        for name, value in events:
            for cb in self._listeners[name]:
                try:
                    cb(value)
                except Exception:
                    logger.exception("%s listener failed", name)

    # ---------- dispatch ----------
    def dispatch(self, action: Action) -> None:
        """Queue ``action`` and run the queue unless an action is already running."""
        if not isinstance(action, Action):
            raise ValueError(f"not an Action: {action!r}")
        self._queue.append(action)
        if self._busy:
            return
        self._busy = True
        try:
            while self._queue:
                self._run(self._queue.popleft())
        except Exception:
            self._queue.clear()
            raise
        finally:
            self._busy = False
        self._flush_events()

    def _run(self, action: Action) -> None:
        if action is Action.TOGGLE_PAUSE:
            if self.state in (State.PLAYING, State.PAUSED):
                self._toggle_pause()
            return
        if self.state is State.PLAYING:
            self._handlers[action]()

    def update(self, dt_ms: float) -> None:
        """Feed elapsed time to the scheduler and drop once per due tick."""
        if self.state is not State.PLAYING:
            return
        self.scheduler.advance(dt_ms)
        while self.scheduler.pop_tick():
            self.dispatch(Action.SOFT_DROP)

    def move_left(self) -> None: self.dispatch(Action.MOVE_LEFT)
    def move_right(self) -> None: self.dispatch(Action.MOVE_RIGHT)
    def move_down(self) -> None: self.dispatch(Action.SOFT_DROP)
    def rotate(self) -> None: self.dispatch(Action.ROTATE)
    def hard_drop(self) -> None: self.dispatch(Action.HARD_DROP)
    def toggle_pause(self) -> None: self.dispatch(Action.TOGGLE_PAUSE)

    # ---------- handlers ----------
    def _shift(self, dx: int) -> None:
        t = self.current.moved(dx=dx)
        if fits(self.board, t): self.current = t

    def _rotate(self) -> None:
        t = rotate(self.current)
        if fits(self.board, t): self.current = t

    def _move_down(self) -> None:
        t = self.current.moved(dy=1)
        if fits(self.board, t):
            self.current = t
        else:
            self._lock()

    def _hard_drop(self) -> None:
        self.current.y = ghost_y(self.board, self.current)
        self._move_down()

    def _toggle_pause(self) -> None:
        if self.state is State.PLAYING:
            self.state = State.PAUSED
            self.scheduler.cancel()
        else:
            self.state = State.PLAYING
            self.scheduler.arm()

    def _lock(self) -> None:
        r = lock_piece(self.board, self.current, self.level, self.lines)
        self.score += r.points
        self.lines = r.lines
        self.level = r.level
        if r.leveled_up:
            self.scheduler.level = r.level
            logger.info("Level up: %d (interval %.0f ms)", r.level, self.interval)
            self._events.append(("level_up", r.level))

        self.current = self.next
        self.next = self.generator.next()
        if not fits(self.board, self.current):
            self.state = State.GAME_OVER
            self.scheduler.cancel()
            self._queue.clear()
            logger.info("Game over: score %d, level %d, lines %d", self.score, self.level, self.lines)
            self._events.append(("game_over", self.score))

    # ---------- snapshot ----------
    def snapshot(self) -> Snapshot:
        show = self.current is not None and self.state is not State.GAME_OVER
        return Snapshot(
            board=tuple(tuple(row) for row in self.board),
            current_piece=PieceView.of(self.current) if show else None,
            next_piece=PieceView.of(self.next) if self.next is not None else None,
            ghost_y=ghost_y(self.board, self.current) if show else None,
            score=self.score,
            level=self.level,
            lines=self.lines,
            paused=self.state is State.PAUSED,
            game_over=self.state is State.GAME_OVER,
            speed_factor=self.speed_factor,
            interval=self.interval,
            state=self.state,
        )
