"""Lock & line clear: merge a grounded piece, sweep rows, score the clear"""
import logging
from dataclasses import dataclass

from tetris_config import LINES_PER_LEVEL, SCORE_TABLE
from tetris_board import Board, merge, sweep
from tetris_piece import Piece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LockResult:
    cleared: int
    points: int
    lines: int
    level: int
    leveled_up: bool


def level_for_lines(lines: int) -> int:
    return lines // LINES_PER_LEVEL + 1


def score_for_clear(cleared: int, level: int) -> int:
    """Points for clearing ``cleared`` rows in one lock at ``level``."""
    return SCORE_TABLE[cleared] * level


def lock_piece(board: Board, piece: Piece, level: int, lines: int) -> LockResult:
    """Merge ``piece`` into ``board`` (in place) and clear completed rows.

    Points use the level in effect *before* the clear; the returned level
    is recomputed from the new line total.
    """
    merge(board, piece)
    cleared = sweep(board)
    points = score_for_clear(cleared, level)
    total = lines + cleared
    new_level = level_for_lines(total)
    logger.debug("Locked %s at (%d,%d): cleared=%d points=%d", piece.kind.name, piece.x, piece.y, cleared, points)
    return LockResult(cleared, points, total, new_level, new_level > level)
