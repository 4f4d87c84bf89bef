from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import Piece, RotationType, rotated_blocks


Coordinate = Tuple[int, int]

EMPTY = 0
ACTIVE = -1


class GameGrid:
    """Settled blocks plus the cells of the falling piece.

    Cells hold EMPTY, ACTIVE (the falling piece) or the `TetrominoType`
    value of a locked block. The array is indexed ``[y, x]`` with row 0 at
    the top. Every method that moves a piece also updates the piece, so the
    two never disagree.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def clear_board(self) -> None:
        self.grid.fill(EMPTY)

    def clear_row(self, row_y: int) -> None:
        self.grid[row_y, :] = EMPTY

    def get_block_type(self, x: int, y: int) -> int:
        return int(self.grid[y, x])

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _open_for_piece(self, cells: Iterable[Coordinate]) -> bool:
        # a block may move into a cell still held by another block of the same piece
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] not in (EMPTY, ACTIVE):
                return False
        return True

    def _mark(self, piece: Piece, value: int) -> None:
        xs, ys = piece.blocks[:, 0], piece.blocks[:, 1]
        self.grid[ys, xs] = value

    # spawning and locking

    def can_add_new_piece(self, piece: Piece) -> bool:
        return self._open_for_piece(piece.cells())

    def add_new_piece(self, piece: Piece) -> None:
        self._mark(piece, ACTIVE)

    def lock_piece(self, piece: Piece) -> None:
        self._mark(piece, int(piece.piece_type))

    # translation

    def can_translate_piece(self, piece: Piece, dx: int, dy: int) -> bool:
        return self._open_for_piece((x + dx, y + dy) for x, y in piece.cells())

    def can_move_down(self, piece: Piece) -> bool:
        return self.can_translate_piece(piece, 0, 1)

    def can_move_left(self, piece: Piece) -> bool:
        return self.can_translate_piece(piece, -1, 0)

    def can_move_right(self, piece: Piece) -> bool:
        return self.can_translate_piece(piece, 1, 0)

    def translate_piece(self, piece: Piece, dx: int, dy: int) -> None:
        self._mark(piece, EMPTY)
        piece.translate(dx, dy)
        self._mark(piece, ACTIVE)

    def move_down(self, piece: Piece) -> None:
        self.translate_piece(piece, 0, 1)

    def move_left(self, piece: Piece) -> None:
        self.translate_piece(piece, -1, 0)

    def move_right(self, piece: Piece) -> None:
        self.translate_piece(piece, 1, 0)

    # rotation

    def can_rotate_piece(self, piece: Piece, rotate_left: bool) -> bool:
        if piece.rotation_type == RotationType.NONE:
            return False
        pivot_x, pivot_y = piece.pivot()
        target = rotated_blocks(piece.blocks, pivot_x, pivot_y, piece.effective_direction(rotate_left))
        return self._open_for_piece((int(x), int(y)) for x, y in target)

    def can_rotate_left(self, piece: Piece) -> bool:
        return self.can_rotate_piece(piece, True)

    def can_rotate_right(self, piece: Piece) -> bool:
        return self.can_rotate_piece(piece, False)

    def rotate_piece(self, piece: Piece, rotate_left: bool) -> None:
        pivot_x, pivot_y = piece.pivot()
        self._mark(piece, EMPTY)
        piece.rotate(pivot_x, pivot_y, rotate_left)
        self._mark(piece, ACTIVE)

    def rotate_left(self, piece: Piece) -> None:
        self.rotate_piece(piece, True)

    def rotate_right(self, piece: Piece) -> None:
        self.rotate_piece(piece, False)

    # rows

    def check_row_completed(self, row_y: int) -> bool:
        return bool(np.all(self.grid[row_y, :] != EMPTY))

    def drop_row(self, row_y: int, num_rows: int) -> None:
        """Copy row `row_y` into row `row_y + num_rows`.

        The source row is left stale; callers work from the bottom up so a
        higher row overwrites it afterwards.
        """
        self.grid[row_y + num_rows, :] = self.grid[row_y, :]

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
