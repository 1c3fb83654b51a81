"""Board helpers: validity, merge, sweep, ghost"""
from typing import List, Sequence

from tetris_config import COLS, ROWS, EMPTY
from tetris_piece import Piece

Board = List[List[int]]


def new_board() -> Board:
    return [[EMPTY] * COLS for _ in range(ROWS)]


def is_valid_move(board: Sequence[Sequence[int]], shape: Sequence[Sequence[int]], x: int, y: int) -> bool:
    """True if every filled cell of shape at (x, y) is in bounds and on an empty cell.

    Cells above the top edge only have their column checked.
    """
    for cy, row in enumerate(shape):
        for cx, v in enumerate(row):
            if not v: continue
            bx, by = x + cx, y + cy
            if bx < 0 or bx >= COLS or by >= ROWS: return False
            if by >= 0 and board[by][bx] != EMPTY: return False
    return True


def fits(board: Sequence[Sequence[int]], piece: Piece) -> bool:
    return is_valid_move(board, piece.shape, piece.x, piece.y)


def merge(board: Board, piece: Piece) -> None:
    for cy, row in enumerate(piece.shape):
        for cx, v in enumerate(row):
            if v:
                by, bx = piece.y + cy, piece.x + cx
                if 0 <= by < ROWS and 0 <= bx < COLS: board[by][bx] = v


def sweep(board: Board) -> int:
    """Clear full rows bottom-up and return how many were removed."""
    c = 0; y = ROWS - 1
    while y >= 0:
        if all(board[y][x] != EMPTY for x in range(COLS)):
            del board[y]; board.insert(0, [EMPTY] * COLS); c += 1
        else: y -= 1
    return c


def ghost_y(board: Sequence[Sequence[int]], piece: Piece) -> int:
    """Lowest y the piece can reach by falling straight down."""
    y = piece.y
    while is_valid_move(board, piece.shape, piece.x, y + 1):
        y += 1
    return y
