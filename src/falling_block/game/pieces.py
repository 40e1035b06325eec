from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7

    @property
    def shape(self) -> Shape:
        return BASE_SHAPES[self]


Shape = np.ndarray


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.bool_)
    if arr.ndim != 2 or not arr.any():
        raise ValueError(f"piece shape must be a non-empty 2D matrix, got {rows!r}")
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}

assert set(BASE_SHAPES) == set(TetrominoType), "shape catalog must cover every piece type"


def shape_of(kind: TetrominoType | int) -> Shape:
    """Canonical spawn shape for a piece type."""
    return BASE_SHAPES[TetrominoType(kind)]


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate 90 degrees clockwise: transpose, then reverse each row.

    No offset correction is attempted; callers validate the result at the
    piece's current anchor.
    """
    rotated = np.ascontiguousarray(np.asarray(shape, dtype=np.bool_).T[:, ::-1])
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Piece":
        shape = shape_of(kind)
        h, w = shape.shape
        return cls(kind=TetrominoType(kind), shape=shape, x=board_width // 2 - w // 2, y=0)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_shape(self, shape: Shape) -> "Piece":
        return replace(self, shape=shape)

    def rotated(self) -> "Piece":
        return self.with_shape(rotate_clockwise(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) of every filled cell."""
        ys, xs = np.nonzero(self.shape)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]
