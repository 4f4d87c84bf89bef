from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    L = 6
    J = 7


class RotationType(IntEnum):
    NONE = 0  # O
    TOGGLE = 1  # I, S, Z: two orientations
    FREE = 2  # T, L, J: four orientations


FOUR_BLOCKS = 4

# Block index of the rotation centre; also the spawn origin.
PIVOT_INDEX = 1


Offsets = Tuple[Tuple[int, int], ...]

PIECE_OFFSETS: Dict[TetrominoType, Offsets] = {
    TetrominoType.I: ((-1, 0), (0, 0), (1, 0), (2, 0)),
    TetrominoType.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    TetrominoType.T: ((-1, 0), (0, 0), (1, 0), (0, 1)),
    TetrominoType.S: ((1, 0), (0, 0), (0, 1), (-1, 1)),
    TetrominoType.Z: ((-1, 0), (0, 0), (0, 1), (1, 1)),
    TetrominoType.L: ((-1, 0), (0, 0), (1, 0), (-1, 1)),
    TetrominoType.J: ((-1, 0), (0, 0), (1, 0), (1, 1)),
}

ROTATION_TYPES: Dict[TetrominoType, RotationType] = {
    TetrominoType.I: RotationType.TOGGLE,
    TetrominoType.O: RotationType.NONE,
    TetrominoType.T: RotationType.FREE,
    TetrominoType.S: RotationType.TOGGLE,
    TetrominoType.Z: RotationType.TOGGLE,
    TetrominoType.L: RotationType.FREE,
    TetrominoType.J: RotationType.FREE,
}


def rotated_blocks(blocks: np.ndarray, pivot_x: int, pivot_y: int, rotate_left: bool) -> np.ndarray:
    """Rotate (4, 2) block coordinates 90 degrees around a pivot.

    Left is counter-clockwise, right is clockwise (y grows downward).
    """
    dx = blocks[:, 1] - pivot_y
    dy = blocks[:, 0] - pivot_x
    if rotate_left:
        dx = -dx
    else:
        dy = -dy
    return np.stack((pivot_x + dx, pivot_y + dy), axis=1)


class Piece:
    """The falling tetromino.

    A single instance is reset with `set_as_new_piece` on every spawn. The
    piece knows nothing about the grid; `GameGrid` validates every move
    before asking the piece to change its coordinates.
    """

    def __init__(self) -> None:
        self.blocks = np.zeros((FOUR_BLOCKS, 2), dtype=np.int64)  # rows of (x, y)
        self.piece_type = TetrominoType.I
        self.rotation_type = RotationType.TOGGLE
        self.rotation_toggle = True

    def set_as_new_piece(self, piece_type: int, x: int, y: int) -> None:
        kind = TetrominoType(piece_type)
        self.piece_type = kind
        self.rotation_type = ROTATION_TYPES[kind]
        if self.rotation_type == RotationType.TOGGLE:
            self.rotation_toggle = True
        self.blocks = np.array(PIECE_OFFSETS[kind], dtype=np.int64) + (x, y)

    def get_block(self, index: int) -> Tuple[int, int]:
        x, y = self.blocks[index]
        return int(x), int(y)

    def cells(self) -> List[Tuple[int, int]]:
        return [(int(x), int(y)) for x, y in self.blocks]

    def pivot(self) -> Tuple[int, int]:
        return self.get_block(PIVOT_INDEX)

    def effective_direction(self, rotate_left: bool) -> bool:
        """Direction a rotation request will actually turn, without changing state."""
        if self.rotation_type == RotationType.TOGGLE:
            return self.rotation_toggle
        return rotate_left

    def translate(self, dx: int, dy: int) -> None:
        self.blocks = self.blocks + (dx, dy)

    def rotate(self, pivot_x: int, pivot_y: int, rotate_left: bool) -> None:
        if self.rotation_type == RotationType.NONE:
            raise ValueError(f"{self.piece_type.name} piece cannot rotate")
        if self.rotation_type == RotationType.TOGGLE:
            # requested direction is ignored; flip after use so the grid's check matches
            rotate_left = self.rotation_toggle
            self.rotation_toggle = not self.rotation_toggle
        self.blocks = rotated_blocks(self.blocks, pivot_x, pivot_y, rotate_left)
