from __future__ import annotations

import logging

from rich.logging import RichHandler

from falling_block.game import TetrominoType
from falling_block.session import PlayerSession
from falling_block.utils.logging import setup_logger
from falling_block.visualization.palette import PIECE_COLORS, color_for_value
from falling_block.visualization.text import format_grid, format_snapshot
from conftest import grid_with


def test_session_tracks_high_score() -> None:
    session = PlayerSession(username="ada")
    assert session.submit_score(120)
    assert not session.submit_score(80)
    assert session.submit_score(300)
    assert session.high_score == 300
    assert session.games_played == 3


def test_session_as_game_over_listener(started_game) -> None:
    session = PlayerSession(username="ada", high_score=5)
    grid = grid_with([(x, y) for y in (0, 1) for x in range(9)])
    game = started_game(TetrominoType.T, TetrominoType.I, grid=grid)
    game.add_game_over_listener(session.submit_score)
    game.tick()
    assert game.game_over
    assert session.high_score == 10


def test_format_grid_marks_locked_and_falling_cells() -> None:
    board = grid_with([(0, 19), (1, 19)], value=int(TetrominoType.L)).clone_state()
    board[0, 4] = -int(TetrominoType.T)
    text = format_grid(board).splitlines()
    assert len(text) == 20
    assert text[0] == "····█·····"
    assert text[19] == "LL········"


def test_format_snapshot_includes_header_and_preview(started_game) -> None:
    game = started_game(TetrominoType.T, TetrominoType.O)
    text = format_snapshot(game.snapshot())
    assert text.startswith("score 0  level 1  lines 0  [running]")
    assert "next: O" in text
    assert text.endswith("██\n██")


def test_palette_covers_every_piece() -> None:
    assert set(PIECE_COLORS) == set(TetrominoType)
    assert color_for_value(-int(TetrominoType.I)) == color_for_value(int(TetrominoType.I))


def test_setup_logger_handlers() -> None:
    log = setup_logger(name="falling_block.test", use_rich=True, level="debug")
    assert log.level == logging.DEBUG
    assert isinstance(log.handlers[0], RichHandler)
    assert not log.propagate

    plain = setup_logger(name="falling_block.test", use_rich=False, level="warning")
    assert len(plain.handlers) == 1
    assert type(plain.handlers[0]) is logging.StreamHandler
    assert plain.level == logging.WARNING
