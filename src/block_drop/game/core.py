from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .grid import ACTIVE, GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .scheduler import DropScheduler


logger = logging.getLogger(__name__)


class GameState(IntEnum):
    UNINITIALIZED = 0
    TITLE = 1
    RUNNING = 2
    PAUSED = 3


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    MOVE_DOWN = 2
    ROTATE_LEFT = 3
    ROTATE_RIGHT = 4
    QUICK_DROP = 5
    PAUSE = 6
    RESUME = 7
    NONE = 8


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    top_visible_row: int = 2
    spawn_x: int = 4
    spawn_y: int = 0
    random_seed: Optional[int] = None
    max_start_level: int = 9

    @property
    def viewable_rows(self) -> int:
        return self.height - self.top_visible_row


SchedulerFactory = Callable[["TetrisGame"], DropScheduler]


class TetrisGame:
    """One game session: grid, falling piece, counters and the drop scheduler.

    Every operation that reads and then changes the grid or the piece holds
    `self.lock`, so a key press and a scheduler tick never interleave. The
    lock is re-entrant because `quick_drop` calls `try_move_down`, which
    may call `try_add_new_piece`, which may call `end_game`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        scheduler_factory: Optional[SchedulerFactory] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.active_piece = Piece()
        self.completed_rows = np.zeros(self.config.height, dtype=np.bool_)
        self.state = GameState.UNINITIALIZED
        self.score = 0
        self.level = 0
        self.line_count = 0
        self.next_piece_type: Optional[TetrominoType] = None
        self.tick_speed = self.rules.base_speed_ms
        self.hi_score = 0
        self.drop_scheduler: Optional[DropScheduler] = None
        self._scheduler_factory = scheduler_factory or DropScheduler
        self.lock = threading.RLock()

    # session transitions

    def show_title(self) -> None:
        with self.lock:
            self.state = GameState.TITLE

    def start_new_game(self, level: int) -> None:
        if level < 0:
            raise ValueError(f"starting level must be non-negative, got {level}")
        with self.lock:
            self._stop_scheduler()
            self.score = 0
            self.line_count = 0
            self.level = level
            self.next_piece_type = self._random_piece_type()
            self.tick_speed = self.rules.initial_tick_speed(level)
            self.grid.clear_board()
            self.completed_rows.fill(False)
            logger.info("new game at level %d (tick %d ms)", level, self.tick_speed)
            if not self.try_add_new_piece():
                return
            self.state = GameState.RUNNING
            self._start_scheduler()

    def end_game(self) -> None:
        with self.lock:
            self.hi_score = max(self.hi_score, self.score)
            self.next_piece_type = None
            self.state = GameState.TITLE
            self._stop_scheduler()
            logger.info(
                "game over: score=%d level=%d lines=%d hi=%d",
                self.score, self.level, self.line_count, self.hi_score,
            )

    def pause_game(self) -> bool:
        with self.lock:
            if self.state != GameState.RUNNING:
                return False
            self.state = GameState.PAUSED
            self._stop_scheduler()
            logger.info("paused")
            return True

    def resume_game(self) -> bool:
        with self.lock:
            if self.state != GameState.PAUSED:
                return False
            self.state = GameState.RUNNING
            self._start_scheduler()
            logger.info("resumed")
            return True

    def _start_scheduler(self) -> None:
        self.drop_scheduler = self._scheduler_factory(self)
        self.drop_scheduler.start()

    def _stop_scheduler(self) -> None:
        if self.drop_scheduler is not None:
            self.drop_scheduler.request_stop()
            self.drop_scheduler = None

    # piece lifecycle

    def _random_piece_type(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def try_add_new_piece(self) -> bool:
        with self.lock:
            piece_type = self.next_piece_type
            if piece_type is None:
                piece_type = self._random_piece_type()
            self.next_piece_type = self._random_piece_type()
            piece = self.active_piece
            piece.set_as_new_piece(piece_type, self.config.spawn_x, self.config.spawn_y)
            if self.grid.can_add_new_piece(piece):
                self.grid.add_new_piece(piece)
                return True
            # no room to spawn
            self.end_game()
            return False

    def tick(self) -> bool:
        with self.lock:
            # a tick can land just after a pause or game over
            if self.state != GameState.RUNNING:
                return False
            return self.try_move_down()

    def try_move_down(self) -> bool:
        with self.lock:
            piece = self.active_piece
            if self.grid.can_move_down(piece):
                self.grid.move_down(piece)
                return True
            self.grid.lock_piece(piece)
            cleared = self.clear_completed_rows(piece)
            self.update_row_state(cleared)
            self.try_add_new_piece()
            return False

    def try_move_left(self) -> bool:
        with self.lock:
            if self.grid.can_move_left(self.active_piece):
                self.grid.move_left(self.active_piece)
                return True
            return False

    def try_move_right(self) -> bool:
        with self.lock:
            if self.grid.can_move_right(self.active_piece):
                self.grid.move_right(self.active_piece)
                return True
            return False

    def try_rotate_left(self) -> bool:
        with self.lock:
            if self.grid.can_rotate_left(self.active_piece):
                self.grid.rotate_left(self.active_piece)
                return True
            return False

    def try_rotate_right(self) -> bool:
        with self.lock:
            if self.grid.can_rotate_right(self.active_piece):
                self.grid.rotate_right(self.active_piece)
                return True
            return False

    def quick_drop(self) -> int:
        """Drop the piece until it locks; one point per row descended.

        Returns the number of rows dropped. The scheduler skips its next
        tick so the freshly spawned piece gets a full period.
        """
        with self.lock:
            dropped = 0
            while self.try_move_down():
                dropped += 1
                self.score += 1
            if self.drop_scheduler is not None:
                self.drop_scheduler.request_skip_next_tick()
            return dropped

    # rows and scoring

    def clear_completed_rows(self, piece: Piece) -> int:
        grid = self.grid
        for _, row_y in piece.cells():
            if grid.check_row_completed(row_y):
                self.completed_rows[row_y] = True

        cleared = 0
        for y in range(grid.height - 1, -1, -1):
            # shift before counting this row so it moves with its pre-clear content
            if cleared > 0:
                grid.drop_row(y, cleared)
            if self.completed_rows[y]:
                cleared += 1
                self.completed_rows[y] = False

        for y in range(cleared):
            grid.clear_row(y)
        return cleared

    def update_row_state(self, cleared: int) -> None:
        if cleared <= 0:
            return
        self.line_count += cleared
        self.score += self.rules.score_for_rows(cleared, self.level)
        logger.debug("cleared %d rows, %d total", cleared, self.line_count)

        level = self.rules.level_for_lines(self.line_count)
        if level > self.level:
            self.level = level
            # one speed step per level-up event, even if several levels were crossed
            self.tick_speed = self.rules.speed_up(self.tick_speed)
            logger.debug("level %d, tick %d ms", self.level, self.tick_speed)

    # read-only view

    def active_cells(self) -> List[Tuple[int, int]]:
        return self.active_piece.cells()

    def get_state(self) -> np.ndarray:
        # falling piece shown as the negative of its type, locked blocks as positive types
        with self.lock:
            state = self.grid.clone_state()
            if self.state in (GameState.RUNNING, GameState.PAUSED):
                state[state == ACTIVE] = -int(self.active_piece.piece_type)
        return state
