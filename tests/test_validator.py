from __future__ import annotations

import numpy as np

from falling_block.game import GameGrid, TetrominoType, can_place, rotate_clockwise, shape_of
from conftest import grid_with


def test_walls_and_floor() -> None:
    grid = GameGrid.empty()
    i_shape = shape_of(TetrominoType.I)
    assert can_place(grid, i_shape, 0, 0)
    assert not can_place(grid, i_shape, -1, 0)
    assert can_place(grid, i_shape, 6, 0)
    assert not can_place(grid, i_shape, 7, 0)
    assert can_place(grid, i_shape, 3, 19)
    assert not can_place(grid, i_shape, 3, 20)


def test_rows_above_the_top_are_allowed() -> None:
    grid = GameGrid.empty()
    vertical_i = rotate_clockwise(shape_of(TetrominoType.I))
    assert can_place(grid, vertical_i, 0, -3)
    # Even entirely above the board, as long as columns are in range
    assert can_place(grid, vertical_i, 0, -10)
    assert not can_place(grid, vertical_i, -1, -10)


def test_occupied_cells_block_placement() -> None:
    grid = grid_with([(5, 1)])
    t_shape = shape_of(TetrominoType.T)
    assert not can_place(grid, t_shape, 4, 0)
    assert can_place(grid, t_shape, 4, -1)  # stem sits above the board, base row is clear
    assert can_place(grid, t_shape, 6, 0)


def test_matches_cellwise_definition() -> None:
    grid = grid_with([(0, 19), (4, 10), (9, 0), (7, 15)])
    cells = grid.cells
    for kind in TetrominoType:
        shape = shape_of(kind)
        for _ in range(4):
            for x in range(-4, 12):
                for y in range(-4, 22):
                    expected = True
                    for dy, dx in zip(*np.nonzero(shape)):
                        bx, by = x + int(dx), y + int(dy)
                        if bx < 0 or bx >= 10 or by >= 20 or (by >= 0 and cells[by, bx] != 0):
                            expected = False
                    assert can_place(grid, shape, x, y) == expected
            shape = rotate_clockwise(shape)
