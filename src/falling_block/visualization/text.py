from __future__ import annotations

from typing import List

import numpy as np

from falling_block.game import FallingBlockGame, GameSnapshot, TetrominoType


def format_grid(grid: np.ndarray) -> str:
    """One line per row: locked cells by piece letter, the falling piece as '█'."""
    lines: List[str] = []
    for row in grid:
        chars = []
        for cell in row:
            v = int(cell)
            if v == 0:
                chars.append("·")
            elif v < 0:
                chars.append("█")
            else:
                chars.append(TetrominoType(v).name)
        lines.append("".join(chars))
    return "\n".join(lines)


def format_shape(shape: np.ndarray) -> str:
    return "\n".join("".join("█" if cell else "·" for cell in row) for row in shape)


def format_snapshot(snap: GameSnapshot) -> str:
    header = f"score {snap.score}  level {snap.level}  lines {snap.lines}  [{snap.phase.value}]"
    parts = [header, format_grid(snap.display_grid())]
    if snap.next_piece is not None:
        parts.append(f"next: {snap.next_piece.kind.name}")
        parts.append(format_shape(snap.next_piece.shape))
    return "\n".join(parts)


def run_text_demo(seed: int = 0) -> None:  # pragma: no cover
    game = FallingBlockGame()
    game.seed(seed)
    game.start()
    print("=== Falling Block Demo ===")
    print(format_snapshot(game.snapshot()))
    while not game.game_over:
        game.hard_drop()
        game.tick()
    print("\nFinal board:")
    print(format_snapshot(game.snapshot()))


if __name__ == "__main__":  # pragma: no cover
    run_text_demo()
