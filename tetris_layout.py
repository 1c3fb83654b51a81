"""Screen geometry for the host: board, side panel, HUD rows, next preview"""
from dataclasses import dataclass
from typing import Optional, Tuple

from tetris_config import CONFIG, COLS, ROWS
from tetris_piece import KINDS

# Every catalog shape fits this square, so one preview box serves all kinds
PREVIEW_CELLS = max(len(k.shape) for k in KINDS)
HUD_LINES = ("score", "level", "lines", "speed")


@dataclass
class Dims:
    cell: int
    margin: int
    board_x: int
    board_y: int
    board_w: int
    board_h: int
    panel_x: int
    panel_y: int
    panel_w: int
    total_w: int
    total_h: int
    line_h: int
    hud_x: int
    hud_y: int
    next_label_y: int
    pv_cell: int
    pv_x: int
    pv_y: int

    @property
    def pv_size(self) -> int:
        return self.pv_cell * PREVIEW_CELLS

    def hud_pos(self, i: int) -> Tuple[int, int]:
        return self.hud_x, self.hud_y + i * self.line_h

    def cell_pos(self, bx: int, by: int) -> Tuple[int, int]:
        """Top-left pixel of board cell (bx, by), inset by one for the grid."""
        return self.board_x + bx * self.cell + 1, self.board_y + by * self.cell + 1


def compute_dims(cell: Optional[int] = None) -> Dims:
    cell = int(CONFIG["CELL_SIZE"] if cell is None else cell)
    margin = 16
    board_w, board_h = COLS * cell, ROWS * cell

    pv_cell = max(12, int(cell * 0.75))
    panel_w = max(160, pv_cell * PREVIEW_CELLS + 2 * margin)
    panel_x = margin + board_w + margin

    line_h = 24
    hud_x, hud_y = panel_x + 12, margin + 12
    next_label_y = hud_y + len(HUD_LINES) * line_h + 14

    return Dims(
        cell=cell, margin=margin,
        board_x=margin, board_y=margin, board_w=board_w, board_h=board_h,
        panel_x=panel_x, panel_y=margin, panel_w=panel_w,
        total_w=panel_x + panel_w + margin, total_h=margin + board_h + margin,
        line_h=line_h, hud_x=hud_x, hud_y=hud_y, next_label_y=next_label_y,
        pv_cell=pv_cell, pv_x=hud_x, pv_y=next_label_y + line_h + 4,
    )
