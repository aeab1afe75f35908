from __future__ import annotations

from typing import Optional, Tuple

import pygame

from ttrys.game import CellState, Game, Piece
from ttrys.game.rotation import bounding_matrix

from .palette import EMPTY_RGB, xterm_to_rgb

TEXT_RGB = (230, 230, 230)
PAUSED_RGB = (255, 220, 90)
GAME_OVER_RGB = (255, 100, 100)


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 7) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None
        self._banner_font: Optional[pygame.font.Font] = None

    def window_size(self, game: Game) -> Tuple[int, int]:
        width = self.margin * 3 + (game.board.width + self.panel_cells) * self.cell_size
        height = self.margin * 2 + game.board.height * self.cell_size
        return width, height

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        return self._font

    @property
    def banner_font(self) -> pygame.font.Font:
        if self._banner_font is None:
            self._banner_font = pygame.font.SysFont(None, 48)
        return self._banner_font

    def _cell_rect(self, x0: int, y0: int, col: int, row: int) -> pygame.Rect:
        return pygame.Rect(x0 + col * self.cell_size, y0 + row * self.cell_size,
                           self.cell_size - 1, self.cell_size - 1)

    def _grid_surface(self, game: Game) -> pygame.Surface:
        states = game.board.states
        colors = game.board.colors
        h, w = states.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((20, 20, 26))
        for y in range(h):
            # Board row 0 is the bottom of the screen
            row = h - 1 - y
            for x in range(w):
                if states[y, x] == CellState.EMPTY:
                    color = EMPTY_RGB
                else:
                    color = xterm_to_rgb(colors[y, x])
                pygame.draw.rect(surf, color, self._cell_rect(0, 0, x, row))
        return surf

    def _draw_next(self, screen: pygame.Surface, game: Game, x0: int, y0: int) -> None:
        piece: Piece = game.next_piece
        m = bounding_matrix(piece)
        color = xterm_to_rgb(game.piece_color(piece))
        h, w = m.shape
        for y in range(h):
            for x in range(w):
                if m[y, x]:
                    pygame.draw.rect(screen, color, self._cell_rect(x0, y0, x, h - 1 - y))

    def _draw_panel(self, screen: pygame.Surface, game: Game) -> None:
        x0 = self.margin * 2 + game.board.width * self.cell_size
        y0 = self.margin
        screen.blit(self.font.render("Next", True, TEXT_RGB), (x0, y0))
        self._draw_next(screen, game, x0, y0 + 28)

        lines = [
            f"Score: {game.stats.score}",
            f"Lines: {game.stats.rows_cleared}",
            f"Level: {game.level.number}",
            "",
            "Arrows: move / drop",
            "Up, X: rotate CW",
            "Z: rotate CCW",
            "P: pause  Esc: quit",
        ]
        y = y0 + 28 + 3 * self.cell_size
        for txt in lines:
            screen.blit(self.font.render(txt, True, TEXT_RGB), (x0, y))
            y += 22

    def _draw_banner(self, screen: pygame.Surface, text: str, color: Tuple[int, int, int]) -> None:
        img = self.banner_font.render(text, True, color)
        board_w = screen.get_width() - self.panel_cells * self.cell_size - self.margin
        rect = img.get_rect(center=(board_w // 2, screen.get_height() // 2))
        screen.blit(img, rect)

    def draw(self, screen: pygame.Surface, game: Game) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(game), (self.margin, self.margin))
        self._draw_panel(screen, game)
        if game.game_over:
            self._draw_banner(screen, "GAME OVER", GAME_OVER_RGB)
        elif game.paused:
            self._draw_banner(screen, "PAUSED", PAUSED_RGB)
        pygame.display.flip()
