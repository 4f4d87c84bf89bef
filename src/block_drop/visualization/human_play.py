from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from block_drop.game import Action, GameConfig, GameSession, GameState, HiScoreStore, TetrisGame
from block_drop.game.hiscore import DEFAULT_HISCORE_PATH
from .renderer import Renderer


# rotate right has no default key
KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.MOVE_DOWN,
    pygame.K_UP: Action.ROTATE_LEFT,
    pygame.K_SPACE: Action.QUICK_DROP,
}

KEY_TO_LEVEL: Dict[int, int] = {getattr(pygame, f"K_{n}"): n for n in range(10)}


def action_for_key(key: int, state: GameState) -> Action:
    if key == pygame.K_p:
        return Action.RESUME if state == GameState.PAUSED else Action.PAUSE
    return KEY_TO_ACTION.get(key, Action.NONE)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Drop")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence")
    p.add_argument("--hiscore-file", type=str, default=DEFAULT_HISCORE_PATH)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(session: GameSession, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = session.game
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Block Drop")

        session.start_app()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.WINDOWFOCUSLOST:
                    session.pause_app()
                elif event.type == pygame.WINDOWFOCUSGAINED:
                    session.start_app()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif game.state == GameState.TITLE and event.key in KEY_TO_LEVEL:
                        session.select_level(KEY_TO_LEVEL[event.key])
                    else:
                        session.handle_action(action_for_key(event.key, game.state))

            # the drop scheduler moves the piece on its own thread; just poll
            renderer.draw(screen, game)
            clock.tick(60)
    finally:
        session.destroy_app()
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    game = TetrisGame(GameConfig(random_seed=args.seed))
    session = GameSession(game, HiScoreStore(args.hiscore_file))
    run(session, cell_size=args.cell_size)
    print(f"Hi score: {game.hi_score}")


if __name__ == "__main__":  # pragma: no cover
    main()
