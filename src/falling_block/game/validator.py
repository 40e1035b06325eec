from __future__ import annotations

import numpy as np

from .grid import GameGrid
from .pieces import Shape


def can_place(grid: GameGrid, shape: Shape, x: int, y: int) -> bool:
    """Whether ``shape`` anchored at (x, y) fits on ``grid``.

    Columns must stay in [0, width) and rows below ``height``. Rows above the
    top edge (negative) are always allowed so pieces may spawn partially
    hidden. Every movement, rotation and spawn check goes through here.
    """
    ys, xs = np.nonzero(shape)
    for dy, dx in zip(ys, xs):
        bx = x + int(dx)
        by = y + int(dy)
        if bx < 0 or bx >= grid.width or by >= grid.height:
            return False
        if by >= 0 and grid.is_occupied(bx, by):
            return False
    return True
