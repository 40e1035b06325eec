from __future__ import annotations

from typing import Dict, Tuple

from falling_block.game import TetrominoType

RGB = Tuple[int, int, int]

EMPTY_COLOR: RGB = (20, 20, 26)

PIECE_COLORS: Dict[TetrominoType, RGB] = {
    TetrominoType.I: (34, 211, 238),   # cyan
    TetrominoType.O: (250, 204, 21),   # yellow
    TetrominoType.T: (192, 132, 252),  # purple
    TetrominoType.S: (74, 222, 128),   # green
    TetrominoType.Z: (248, 113, 113),  # red
    TetrominoType.J: (96, 165, 250),   # blue
    TetrominoType.L: (251, 146, 60),   # orange
}


def color_for_value(v: int) -> RGB:
    """Color of a grid cell; negative values (the falling piece) use the same hue."""
    if v == 0:
        return EMPTY_COLOR
    return PIECE_COLORS[TetrominoType(abs(v))]
