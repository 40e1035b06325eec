from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Callable, List, Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .validator import can_place


LOG = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class GamePhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        # The I piece is four cells long in either orientation
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")


@dataclass(frozen=True, eq=False)
class GameState:
    grid: GameGrid
    active: Optional[Piece] = None
    next_piece: Optional[Piece] = None
    score: int = 0
    level: int = 1
    lines: int = 0
    phase: GamePhase = GamePhase.IDLE


@dataclass(frozen=True)
class LockResult:
    lines_cleared: int
    points: int
    game_over: bool


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view handed to renderers and agents."""

    grid: np.ndarray
    active: Optional[Piece]
    next_piece: Optional[Piece]
    score: int
    level: int
    lines: int
    phase: GamePhase
    drop_interval_ms: int

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.OVER

    def display_grid(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the grid; negative marks the active piece
        state = self.grid.copy()
        if self.active is not None:
            h, w = state.shape
            for x, y in self.active.cells():
                if 0 <= y < h and 0 <= x < w:
                    state[y, x] = -int(self.active.kind)
        return state


class FallingBlockGame:
    """Falling-block engine.

    Commands are synchronous and either apply completely or leave the state
    untouched: each accepted command builds a new ``GameState`` and swaps it
    in with a single assignment. Commands issued in the wrong phase are
    no-ops. The driver owns the gravity timer and calls ``tick()`` every
    ``drop_interval_ms``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.state = GameState(grid=GameGrid.empty(self.config.width, self.config.height))
        self._game_over_listeners: List[Callable[[int], None]] = []

    def seed(self, seed: Optional[int]) -> None:
        self.rng = random.Random(seed)

    def add_game_over_listener(self, callback: Callable[[int], None]) -> None:
        """Register ``callback(final_score)``, called once whenever a game ends."""
        self._game_over_listeners.append(callback)

    # ---------- State accessors ----------
    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def lines(self) -> int:
        return self.state.lines

    @property
    def grid(self) -> GameGrid:
        return self.state.grid

    @property
    def game_over(self) -> bool:
        return self.state.phase is GamePhase.OVER

    @property
    def drop_interval_ms(self) -> int:
        return self.rules.drop_interval_ms(self.state.level)

    def _running(self) -> bool:
        return self.state.phase is GamePhase.RUNNING

    # ---------- Commands ----------
    def start(self) -> None:
        active = self._random_piece()
        next_piece = self._random_piece()
        self.state = GameState(
            grid=GameGrid.empty(self.config.width, self.config.height),
            active=active,
            next_piece=next_piece,
            score=0,
            level=1,
            lines=0,
            phase=GamePhase.RUNNING,
        )
        LOG.info("game started: active=%s next=%s", active.kind.name, next_piece.kind.name)

    def tick(self) -> Optional[LockResult]:
        """Apply one step of gravity; locks the piece when it cannot fall."""
        if not self._running():
            return None
        if self.move(0, 1):
            return None
        return self._lock_active()

    def move(self, dx: int, dy: int) -> bool:
        if not self._running() or (dx == 0 and dy == 0):
            return False
        return self._try_commit(self.state.active.moved(dx, dy))

    def rotate(self) -> bool:
        if not self._running():
            return False
        return self._try_commit(self.state.active.rotated())

    def hard_drop(self) -> bool:
        if not self._running():
            return False
        grid = self.state.grid
        piece = self.state.active
        dropped = piece
        while can_place(grid, dropped.shape, dropped.x, dropped.y + 1):
            dropped = dropped.moved(0, 1)
        if dropped is piece:
            return False
        self.state = replace(self.state, active=dropped)
        return True

    def pause(self) -> None:
        if self._running():
            self.state = replace(self.state, phase=GamePhase.PAUSED)
            LOG.debug("paused at score %d", self.state.score)

    def resume(self) -> None:
        if self.state.phase is GamePhase.PAUSED:
            self.state = replace(self.state, phase=GamePhase.RUNNING)
            LOG.debug("resumed")

    def toggle_pause(self) -> None:
        if self.state.phase is GamePhase.PAUSED:
            self.resume()
        else:
            self.pause()

    def dispatch(self, action: Action) -> bool:
        """Apply an abstract input action. Returns whether the piece changed."""
        action = Action(action)
        if action == Action.LEFT:
            return self.move(-1, 0)
        if action == Action.RIGHT:
            return self.move(1, 0)
        if action == Action.ROTATE_CW:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.move(0, 1)
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return False

    def snapshot(self) -> GameSnapshot:
        state = self.state
        return GameSnapshot(
            grid=state.grid.cells,
            active=state.active,
            next_piece=state.next_piece,
            score=state.score,
            level=state.level,
            lines=state.lines,
            phase=state.phase,
            drop_interval_ms=self.rules.drop_interval_ms(state.level),
        )

    # ---------- Internals ----------
    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece.spawn(TetrominoType(kind), self.config.width)

    def _try_commit(self, candidate: Piece) -> bool:
        if not can_place(self.state.grid, candidate.shape, candidate.x, candidate.y):
            return False
        self.state = replace(self.state, active=candidate)
        return True

    def _lock_active(self) -> LockResult:
        state = self.state
        cleared = state.grid.lock(state.active).clear_completed_rows()
        lines = state.lines + cleared.cleared
        points = self.rules.score_for_lock(cleared.cleared, state.level)
        level = self.rules.level_for_lines(lines)
        assert level >= state.level, "level must never decrease within a game"

        active = state.next_piece
        phase = GamePhase.RUNNING
        if not can_place(cleared.grid, active.shape, active.x, active.y):
            phase = GamePhase.OVER

        self.state = GameState(
            grid=cleared.grid,
            active=active,
            next_piece=self._random_piece(),
            score=state.score + points,
            level=level,
            lines=lines,
            phase=phase,
        )
        LOG.debug(
            "locked %s at (%d, %d): cleared=%d points=%d",
            state.active.kind.name, state.active.x, state.active.y, cleared.cleared, points,
        )

        if phase is GamePhase.OVER:
            LOG.info("game over: score=%d lines=%d level=%d", self.state.score, lines, level)
            for callback in list(self._game_over_listeners):
                callback(self.state.score)
        return LockResult(lines_cleared=cleared.cleared, points=points, game_over=phase is GamePhase.OVER)
