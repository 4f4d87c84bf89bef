from __future__ import annotations

from typing import List, Tuple

import numpy as np
import pygame

from block_drop.game import GameState, TetrisGame, TetrominoType
from block_drop.game.pieces import PIECE_OFFSETS


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (240, 160, 0),  # L
        7: (0, 0, 240),    # J
    }
    # falling piece is stored negated
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font = None

    def window_size(self, game: TetrisGame) -> Tuple[int, int]:
        board_w = game.config.width * self.cell_size
        board_h = game.config.viewable_rows * self.cell_size
        panel_w = self.panel_cells * self.cell_size
        return self.margin * 3 + board_w + panel_w, self.margin * 2 + board_h

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _text_lines(self, game: TetrisGame) -> List[str]:
        if game.state == GameState.TITLE:
            return ["block drop", f"hi score {game.hi_score}", "select level 0-9"]
        lines = [
            f"score {game.score}",
            f"level {game.level}",
            f"lines {game.line_count}",
            f"hi {game.hi_score}",
        ]
        if game.state == GameState.PAUSED:
            lines.append("paused - P to resume")
        return lines

    def _draw_next_piece(self, screen: pygame.Surface, game: TetrisGame, x0: int, y0: int) -> None:
        if game.next_piece_type is None:
            return
        kind = TetrominoType(game.next_piece_type)
        color = _color_for_value(int(kind))
        # offsets run from -1 to 2 horizontally
        for dx, dy in PIECE_OFFSETS[kind]:
            rect = pygame.Rect(
                x0 + (dx + 1) * self.cell_size,
                y0 + dy * self.cell_size,
                self.cell_size - 1,
                self.cell_size - 1,
            )
            pygame.draw.rect(screen, color, rect)

    def draw(self, screen: pygame.Surface, game: TetrisGame) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))

        # rows above top_visible_row are the hidden spawn buffer
        visible = game.get_state()[game.config.top_visible_row :]
        screen.blit(self._grid_surface(visible), (self.margin, self.margin))

        x_panel = self.margin * 2 + game.config.width * self.cell_size
        y_text = self.margin
        if game.state in (GameState.RUNNING, GameState.PAUSED):
            self._draw_next_piece(screen, game, x_panel, y_text)
            y_text += self.cell_size * 3
        for line in self._text_lines(game):
            img = self._font.render(line, True, (230, 230, 230))
            screen.blit(img, (x_panel, y_text))
            y_text += 26
        pygame.display.flip()
