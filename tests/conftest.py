from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, List, Sequence, Tuple

import numpy as np
import pytest

from falling_block.game import FallingBlockGame, GameGrid, TetrominoType


class ScriptedRng:
    """Stands in for random.Random; hands out piece types in a fixed cycle."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self._kinds: List[TetrominoType] = list(kinds)
        self._i = 0

    def choice(self, seq: Sequence[TetrominoType]) -> TetrominoType:
        kind = self._kinds[self._i % len(self._kinds)]
        self._i += 1
        assert kind in seq
        return kind


def grid_with(cells: Iterable[Tuple[int, int]], value: int = int(TetrominoType.Z),
              width: int = 10, height: int = 20) -> GameGrid:
    arr = np.zeros((height, width), dtype=np.int8)
    for x, y in cells:
        arr[y, x] = value
    return GameGrid(arr)


def full_rows_except(rows: Iterable[int], gaps: Iterable[int], width: int = 10) -> List[Tuple[int, int]]:
    skip = set(gaps)
    return [(x, y) for y in rows for x in range(width) if x not in skip]


@pytest.fixture
def started_game() -> Callable[..., FallingBlockGame]:
    def _make(*kinds: TetrominoType, grid: GameGrid | None = None) -> FallingBlockGame:
        game = FallingBlockGame(rng=ScriptedRng(kinds or (TetrominoType.T,)))
        game.start()
        if grid is not None:
            game.state = replace(game.state, grid=grid)
        return game
    return _make
