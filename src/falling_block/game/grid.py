from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .pieces import Piece, TetrominoType


Coordinate = Tuple[int, int]

EMPTY = 0
_MAX_TAG = max(int(k) for k in TetrominoType)


@dataclass(frozen=True, eq=False)
class ClearResult:
    grid: "GameGrid"
    cleared: int


class GameGrid:
    """Immutable W x H grid of locked cells, row 0 at the top.

    Cells hold 0 for empty or the ``TetrominoType`` value of the piece that
    locked there. Every transform returns a new grid; the backing array is
    read-only so no caller can observe a half-updated board.
    """

    def __init__(self, cells: np.ndarray) -> None:
        arr = np.array(cells, dtype=np.int8)
        if arr.ndim != 2 or arr.shape[0] <= 0 or arr.shape[1] <= 0:
            raise ValueError(f"grid must be a non-empty 2D array, got shape {arr.shape}")
        assert ((arr >= EMPTY) & (arr <= _MAX_TAG)).all(), "grid holds an unknown piece tag"
        arr.setflags(write=False)
        self._cells = arr

    @classmethod
    def empty(cls, width: int = 10, height: int = 20) -> "GameGrid":
        return cls(np.zeros((int(height), int(width)), dtype=np.int8))

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        assert self.is_inside(x, y), f"({x}, {y}) is outside the grid"
        return self._cells[y, x] != EMPTY

    def with_cells(self, cells: Iterable[Coordinate], value: int) -> "GameGrid":
        """Copy of the grid with ``cells`` set to ``value``; rows < 0 are skipped."""
        grid = self._cells.copy()
        for x, y in cells:
            if y < 0:
                continue
            assert 0 <= x < self.width and y < self.height, f"({x}, {y}) is outside the grid"
            grid[y, x] = value
        return GameGrid(grid)

    def lock(self, piece: Piece) -> "GameGrid":
        return self.with_cells(piece.cells(), int(piece.kind))

    def clear_completed_rows(self) -> ClearResult:
        full = np.all(self._cells != EMPTY, axis=1)
        cleared = int(full.sum())
        if cleared == 0:
            return ClearResult(grid=self, cleared=0)
        # Remove full rows at once and pad with empty rows at the top
        kept = self._cells[~full]
        new_rows = np.zeros((cleared, self.width), dtype=np.int8)
        result = GameGrid(np.vstack((new_rows, kept)))
        assert result._cells.shape == self._cells.shape
        return ClearResult(grid=result, cleared=cleared)

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self._cells))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self._cells != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self._cells[:, x]:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GameGrid(width={self.width}, height={self.height}, filled={self.filled_cells()})"
