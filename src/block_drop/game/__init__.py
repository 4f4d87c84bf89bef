"""Game module for Block Drop.

Exports the falling-block engine and supporting classes:
- GameGrid: Grid of settled blocks, piece movement checks and row clearing
- Piece: The falling tetromino with pivot and toggle rotation
- TetrominoType / RotationType: Piece kinds and their rotation classes
- ScoringRules: Row bonus table, level unit and drop speed curve
- TetrisGame: Game controller (score, level, next piece, locking)
- DropScheduler: Background thread that drops the piece on a timer
- GameSession: Title/running/paused state machine and app lifecycle
- HiScoreStore: Best-effort high score persistence
"""

from .grid import GameGrid, EMPTY, ACTIVE
from .pieces import Piece, TetrominoType, RotationType, PIVOT_INDEX
from .rules import ScoringRules
from .scheduler import DropScheduler
from .core import TetrisGame, GameConfig, GameState, Action
from .session import GameSession
from .hiscore import HiScoreStore

__all__ = [
    "GameGrid",
    "EMPTY",
    "ACTIVE",
    "Piece",
    "TetrominoType",
    "RotationType",
    "PIVOT_INDEX",
    "ScoringRules",
    "DropScheduler",
    "TetrisGame",
    "GameConfig",
    "GameState",
    "Action",
    "GameSession",
    "HiScoreStore",
]
