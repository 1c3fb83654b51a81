"""
Rendering helpers for the Tetris host.

Everything here reads a ``Snapshot`` and never touches the game itself.

- Pre-render one cell sprite per kind id (solid + ghost outline) and blit them.
- Pre-render the static background (grid, border, panel frames) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from tetris_config import COLS, ROWS
from tetris_game import Snapshot, PieceView
from tetris_layout import PREVIEW_CELLS, Dims

# Purple palette keyed by kind id
COLORS: Dict[int, Tuple[int, int, int]] = {
    1: (233, 213, 255),
    2: (192, 132, 252),
    3: (168, 85, 247),
    4: (147, 51, 234),
    5: (126, 34, 206),
    6: (217, 70, 239),
    7: (139, 92, 246),
}
BG = (0, 0, 0)
GRID = (32, 0, 64)
ACCENT = (168, 85, 247)
TEXT = (192, 132, 252)


def cell_color(shape) -> int:
    """Kind id of the first filled cell of ``shape``."""
    for row in shape:
        for v in row:
            if v: return v
    return 0


@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    speed: float = -1.0
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    speed_s: Optional[pygame.Surface] = None
    next_key: Optional[tuple] = None
    next_s: Optional[pygame.Surface] = None


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (grid + border + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        for x in range(COLS + 1):
            X = d.board_x + x * d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS + 1):
            Y = d.board_y + y * d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        pygame.draw.rect(self.bg, ACCENT, (d.board_x - 2, d.board_y - 2, d.board_w + 4, d.board_h + 4), 2)
        frame = pygame.Rect(d.pv_x - 6, d.pv_y - 6, d.pv_size + 12, d.pv_size + 12)
        pygame.draw.rect(self.bg, ACCENT, frame, 1)

    # ---------- Cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[int, pygame.Surface] = {}
        self.ghost_surf: Dict[int, pygame.Surface] = {}
        c = self.dims.cell
        for k, col in COLORS.items():
            s = pygame.Surface((c - 2, c - 2))
            s.fill(col)
            pygame.draw.rect(s, (255, 255, 255), (1, 1, c - 4, c - 4), 1)
            self.cell_surf[k] = s
            g = pygame.Surface((c - 2, c - 2), pygame.SRCALPHA)
            g.fill((*col, 50))
            pygame.draw.rect(g, (*col, 130), (0, 0, c - 2, c - 2), 1)
            self.ghost_surf[k] = g

    def _blit_cell(self, screen, surf, bx, by):
        if by < 0: return
        screen.blit(surf, self.dims.cell_pos(bx, by))

    def _blit_piece(self, screen, p: PieceView, y: int, sprites):
        for r, row in enumerate(p.shape):
            for c, v in enumerate(row):
                if v: self._blit_cell(screen, sprites[v], p.x + c, y + r)

    # ---------- Frame ----------
    def draw(self, screen: pygame.Surface, snap: Snapshot):
        screen.blit(self.bg, (0, 0))
        for y, row in enumerate(snap.board):
            for x, v in enumerate(row):
                if v: self._blit_cell(screen, self.cell_surf[v], x, y)
        p = snap.current_piece
        if p is not None:
            if not snap.paused and snap.ghost_y is not None and snap.ghost_y != p.y:
                self._blit_piece(screen, p, snap.ghost_y, self.ghost_surf)
            self._blit_piece(screen, p, p.y, self.cell_surf)
        self.draw_panel_hud(screen, snap)
        if snap.game_over:
            self._banner(screen, "GAME OVER", f"Score: {snap.score}  Level: {snap.level}")
        elif snap.paused:
            self._banner(screen, "PAUSED", "P to resume")

    def _banner(self, screen, title, sub):
        w, h = screen.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 200))
        screen.blit(shade, (0, 0))
        t = self.big_font.render(title, True, ACCENT)
        screen.blit(t, t.get_rect(center=(w // 2, h // 2 - 20)))
        s = self.font.render(sub, True, TEXT)
        screen.blit(s, s.get_rect(center=(w // 2, h // 2 + 20)))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, snap: Snapshot):
        d = self.dims
        f = self.font
        if snap.score != self.hud.score:
            self.hud.score = snap.score
            self.hud.score_s = f.render(f"Score: {snap.score}", True, TEXT)
        if snap.level != self.hud.level:
            self.hud.level = snap.level
            self.hud.level_s = f.render(f"Level: {snap.level}", True, TEXT)
        if snap.lines != self.hud.lines:
            self.hud.lines = snap.lines
            self.hud.lines_s = f.render(f"Lines: {snap.lines}", True, TEXT)
        if snap.speed_factor != self.hud.speed:
            self.hud.speed = snap.speed_factor
            self.hud.speed_s = f.render(f"Speed: {snap.speed_factor:.1f}x", True, TEXT)
        nxt = snap.next_piece.shape if snap.next_piece is not None else None
        if nxt != self.hud.next_key:
            self.hud.next_key = nxt
            self.hud.next_s = self._preview(nxt) if nxt else None
        for i, surf in enumerate((self.hud.score_s, self.hud.level_s, self.hud.lines_s, self.hud.speed_s)):
            screen.blit(surf, d.hud_pos(i))
        screen.blit(f.render("NEXT", True, ACCENT), (d.hud_x, d.next_label_y))
        if self.hud.next_s:
            screen.blit(self.hud.next_s, (d.pv_x, d.pv_y))

    def _preview(self, shape) -> pygame.Surface:
        d = self.dims
        s = pygame.Surface((d.pv_size, d.pv_size), pygame.SRCALPHA)
        offx = (PREVIEW_CELLS - len(shape[0])) // 2
        offy = max(0, (PREVIEW_CELLS - len(shape)) // 2)
        col = COLORS[cell_color(shape)]
        block = pygame.Surface((d.pv_cell - 2, d.pv_cell - 2))
        block.fill(col)
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v:
                    s.blit(block, ((x + offx) * d.pv_cell + 1, (y + offy) * d.pv_cell + 1))
        return s
