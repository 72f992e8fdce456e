import math
from typing import Tuple

import numpy as np
import pygame

from game2048.direction import SIZE
from game2048.display import Display

# ------------------------
# Config
# ------------------------
GRID_N = SIZE
TILE_SIZE = 110
GAP = 12
BORDER = 18
HUD_HEIGHT = 120
WINDOW_W = BORDER * 2 + GRID_N * TILE_SIZE + (GRID_N - 1) * GAP
WINDOW_H = HUD_HEIGHT + BORDER * 2 + GRID_N * TILE_SIZE + (GRID_N - 1) * GAP

# Colors
BG_COLOR = (250, 248, 239)
BOARD_BG = (187, 173, 160)
EMPTY_TILE = (205, 193, 180)
TEXT_DARK = (119, 110, 101)
TEXT_LIGHT = (249, 246, 242)

VALUE_COLORS = {
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
}

KEYS = {
    pygame.K_UP: 'Up', pygame.K_w: 'Up',
    pygame.K_DOWN: 'Down', pygame.K_s: 'Down',
    pygame.K_LEFT: 'Left', pygame.K_a: 'Left',
    pygame.K_RIGHT: 'Right', pygame.K_d: 'Right',
    pygame.K_n: 'New Game', pygame.K_r: 'New Game',
    pygame.K_q: 'Quit', pygame.K_ESCAPE: 'Quit',
}


# Fallback for > 2048
def color_for(v: int) -> Tuple[int, int, int]:
    if v in VALUE_COLORS:
        return VALUE_COLORS[v]
    t = min(1.0, math.log2(max(2048, v)) - 11)  # 2048 -> 0, 4096 -> 1
    base = (60, 58, 50)
    return (int(237*(1-t) + base[0]*t), int(194*(1-t) + base[1]*t), int(46*(1-t) + base[2]*t))


def grid_to_px(r: int, c: int) -> Tuple[int, int]:
    x = BORDER + c * (TILE_SIZE + GAP)
    y = HUD_HEIGHT + BORDER + r * (TILE_SIZE + GAP)
    return x, y


class WindowDisplay(Display):
    """pygame window. Tiles are tracked from the reported events and redrawn on refresh."""

    def __init__(self):
        pygame.init()
        pygame.display.set_caption("2048")
        self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        self.font_title = pygame.font.SysFont("arial", 56, bold=True)
        self.font_big = pygame.font.SysFont("arial", 40, bold=True)
        self.font_med = pygame.font.SysFont("arial", 32, bold=True)
        self.font_small = pygame.font.SysFont("arial", 20, bold=True)
        self.tiles = np.zeros((GRID_N, GRID_N), dtype=int)
        self.score = 0
        self.max_score = 0
        self.over = False
        self.won = False

    def read_command(self) -> str:
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                return 'Quit'
            if event.type == pygame.KEYDOWN and event.key in KEYS:
                return KEYS[event.key]
            if event.type in (pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED):
                self.refresh()

    def report_tile(self, value, row, col):
        self.tiles[row, col] = value

    def report_move(self, value, from_row, from_col, to_row, to_col):
        self.tiles[from_row, from_col] = 0
        self.tiles[to_row, to_col] = value

    def report_merge(self, old_value, new_value, from_row, from_col, to_row, to_col):
        self.tiles[from_row, from_col] = 0
        self.tiles[to_row, to_col] = new_value

    def report_score(self, score, max_score):
        self.score = score
        self.max_score = max_score

    def report_game_end(self, won=False):
        self.over = True
        self.won = won
        self.refresh()

    def clear_display(self):
        self.tiles[:] = 0
        self.over = False
        self.won = False

    # ------------------------
    # Rendering
    # ------------------------
    def _draw_board(self):
        surface = self.screen
        surface.fill(BG_COLOR)
        pygame.draw.rect(surface, BOARD_BG, pygame.Rect(BORDER, BORDER, WINDOW_W - 2 * BORDER, HUD_HEIGHT - BORDER),
                         border_radius=10)
        board_rect = pygame.Rect(BORDER, HUD_HEIGHT, WINDOW_W - 2 * BORDER, WINDOW_H - HUD_HEIGHT - BORDER)
        pygame.draw.rect(surface, BOARD_BG, board_rect, border_radius=12)

    def _draw_hud(self):
        title = self.font_title.render("2048", True, TEXT_DARK)
        self.screen.blit(title, (BORDER + 4, BORDER - 2))

        def small_box(label: str, value: str, x: int):
            rect = pygame.Rect(x, BORDER + 8, 140, 56)
            pygame.draw.rect(self.screen, BOARD_BG, rect, border_radius=8)
            lab = self.font_small.render(label, True, TEXT_LIGHT)
            val = self.font_small.render(value, True, TEXT_LIGHT)
            self.screen.blit(lab, (rect.x + 12, rect.y + 8))
            self.screen.blit(val, (rect.x + 12, rect.y + 28))

        small_box("SCORE", str(self.score), WINDOW_W - BORDER - 140)
        small_box("BEST", str(self.max_score), WINDOW_W - BORDER - 140 - 12 - 140)

    def _draw_tiles(self):
        for r in range(GRID_N):
            for c in range(GRID_N):
                x, y = grid_to_px(r, c)
                value = int(self.tiles[r, c])
                rect = pygame.Rect(x, y, TILE_SIZE, TILE_SIZE)
                if value == 0:
                    pygame.draw.rect(self.screen, EMPTY_TILE, rect, border_radius=8)
                    continue
                pygame.draw.rect(self.screen, color_for(value), rect, border_radius=8)
                font = self.font_big if value < 1024 else self.font_med
                text_color = TEXT_DARK if value <= 4 else TEXT_LIGHT
                text_surf = font.render(str(value), True, text_color)
                self.screen.blit(text_surf, text_surf.get_rect(center=rect.center))

    def refresh(self):
        self._draw_board()
        self._draw_hud()
        self._draw_tiles()
        if self.over:
            overlay = pygame.Surface((WINDOW_W, WINDOW_H), pygame.SRCALPHA)
            overlay.fill((255, 255, 255, 180))
            self.screen.blit(overlay, (0, 0))
            msg = self.font_title.render("You Win!" if self.won else "Game Over", True, TEXT_DARK)
            self.screen.blit(msg, msg.get_rect(center=(WINDOW_W // 2, WINDOW_H // 2)))
        pygame.display.flip()

    def close(self):
        pygame.quit()
