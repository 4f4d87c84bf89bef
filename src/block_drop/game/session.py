from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .core import Action, GameState, TetrisGame
from .hiscore import HiScoreStore


logger = logging.getLogger(__name__)


class GameSession:
    """Application-level state machine around a `TetrisGame`.

    Routes abstract actions to the game according to the current state and
    handles the outer lifecycle: start (or return from suspend), suspend
    and shutdown, loading and saving the high score at the edges.
    """

    def __init__(self, game: Optional[TetrisGame] = None, store: Optional[HiScoreStore] = None) -> None:
        self.game = game or TetrisGame()
        self.store = store or HiScoreStore()

        game = self.game
        self._routes: Dict[GameState, Dict[Action, Callable[[], object]]] = {
            GameState.RUNNING: {
                Action.MOVE_DOWN: game.try_move_down,
                Action.MOVE_LEFT: game.try_move_left,
                Action.MOVE_RIGHT: game.try_move_right,
                Action.ROTATE_LEFT: game.try_rotate_left,
                Action.ROTATE_RIGHT: game.try_rotate_right,
                Action.QUICK_DROP: game.quick_drop,
                Action.PAUSE: game.pause_game,
            },
            GameState.PAUSED: {
                Action.RESUME: game.resume_game,
            },
        }

    @property
    def state(self) -> GameState:
        return self.game.state

    def start_app(self) -> None:
        if self.game.state == GameState.UNINITIALIZED:
            self.game.hi_score = self.store.read()
            self.game.show_title()
            logger.info("initialized, hi score %d", self.game.hi_score)
        elif self.game.state == GameState.RUNNING:
            # suspended without pause_app; let the player resume explicitly
            self.game.pause_game()

    def pause_app(self) -> None:
        if self.game.state == GameState.RUNNING:
            self.game.pause_game()

    def destroy_app(self) -> None:
        self.game.pause_game()
        if self.game.state != GameState.UNINITIALIZED:
            self.store.write(self.game.hi_score)

    def handle_action(self, action: Action) -> bool:
        """Apply `action` if the current state accepts it.

        Returns False when the action is ignored in this state or the move
        itself was rejected.
        """
        with self.game.lock:
            handler = self._routes.get(self.game.state, {}).get(action)
            if handler is None:
                return False
            result = handler()
        if action == Action.QUICK_DROP:
            return True
        return bool(result)

    def select_level(self, level: int) -> bool:
        if self.game.state != GameState.TITLE:
            return False
        if not 0 <= level <= self.game.config.max_start_level:
            return False
        self.game.start_new_game(level)
        return True
