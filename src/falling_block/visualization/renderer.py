from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from falling_block.game import GamePhase, GameSnapshot
from .palette import color_for_value


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, side_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.side_cells = side_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        board_w = width * self.cell_size
        board_h = height * self.cell_size
        side_w = self.side_cells * self.cell_size
        return board_w + side_w + self.margin * 3, board_h + self.margin * 2

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        return self._font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_side_panel(self, screen: pygame.Surface, snap: GameSnapshot, high_score: int) -> None:
        font = self._font_obj()
        h, w = snap.grid.shape
        left = self.margin * 2 + w * self.cell_size
        top = self.margin
        lines = [
            f"Score: {snap.score}",
            f"Level: {snap.level}",
            f"Lines: {snap.lines}",
            f"High:  {high_score}",
            "Next:",
        ]
        for text in lines:
            screen.blit(font.render(text, True, (230, 230, 230)), (left, top))
            top += 28
        if snap.next_piece is not None:
            value = int(snap.next_piece.kind)
            preview = self.cell_size * 2 // 3
            for dy, row in enumerate(snap.next_piece.shape):
                for dx, filled in enumerate(row):
                    if filled:
                        rect = pygame.Rect(left + dx * preview, top + dy * preview, preview - 1, preview - 1)
                        pygame.draw.rect(screen, color_for_value(value), rect)

    def _draw_banner(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        if snap.phase is GamePhase.PAUSED:
            text = "Paused - P to resume"
        elif snap.phase is GamePhase.OVER:
            text = f"Game Over ({snap.score}) - R to restart, ESC to quit"
        elif snap.phase is GamePhase.IDLE:
            text = "Press R to start"
        else:
            return
        font = self._font_obj()
        surf = font.render(text, True, (255, 255, 255))
        rect = surf.get_rect(center=(screen.get_width() // 2, self.margin // 2 + 4))
        screen.blit(surf, rect)

    def draw(self, screen: pygame.Surface, snap: GameSnapshot, high_score: int = 0) -> None:
        grid_surf = self._grid_surface(snap.display_grid())
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_side_panel(screen, snap, high_score)
        self._draw_banner(screen, snap)
        pygame.display.flip()
