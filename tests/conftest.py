from __future__ import annotations

from typing import Callable, List

import pytest

from block_drop.game import ACTIVE, EMPTY, GameConfig, TetrisGame, TetrominoType


class RecordingScheduler:
    """Stands in for DropScheduler: records calls, never runs a thread."""

    instances: List["RecordingScheduler"] = []

    def __init__(self, game: TetrisGame) -> None:
        self.game = game
        self.started = False
        self.stopped = False
        self.skip_requests = 0
        RecordingScheduler.instances.append(self)

    def start(self) -> None:
        self.started = True

    def request_stop(self) -> None:
        self.stopped = True

    def request_skip_next_tick(self) -> None:
        self.skip_requests += 1


@pytest.fixture(autouse=True)
def _reset_recorded_schedulers():
    RecordingScheduler.instances.clear()
    yield
    RecordingScheduler.instances.clear()


@pytest.fixture
def game() -> TetrisGame:
    return TetrisGame(GameConfig(random_seed=1234), scheduler_factory=RecordingScheduler)


@pytest.fixture
def running_game(game: TetrisGame) -> TetrisGame:
    game.start_new_game(0)
    return game


@pytest.fixture
def force_piece() -> Callable[..., None]:
    """Replace the falling piece with a chosen type at a chosen origin."""

    def _force(game: TetrisGame, kind: TetrominoType, x: int = 4, y: int = 0) -> None:
        state = game.grid.grid
        state[state == ACTIVE] = EMPTY
        game.active_piece.set_as_new_piece(kind, x, y)
        assert game.grid.can_add_new_piece(game.active_piece)
        game.grid.add_new_piece(game.active_piece)

    return _force


@pytest.fixture
def fill_row() -> Callable[..., None]:
    """Fill a row with locked blocks, leaving the given columns empty."""

    def _fill(game: TetrisGame, row_y: int, holes=(), value: int = int(TetrominoType.T)) -> None:
        for x in range(game.grid.width):
            game.grid.grid[row_y, x] = EMPTY if x in holes else value

    return _fill
