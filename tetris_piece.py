"""Tetromino catalog, piece model and clockwise rotation"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from tetris_config import COLS

Shape = List[List[int]]


@dataclass(frozen=True)
class Kind:
    id: int
    name: str
    shape: Tuple[Tuple[int, ...], ...]
    color: str


# Filled cells carry the kind id so a merged board remembers colors
KINDS: Tuple[Kind, ...] = (
    Kind(1, "I", ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)), "purple-100"),
    Kind(2, "J", ((2,0,0),(2,2,2),(0,0,0)), "purple-300"),
    Kind(3, "L", ((0,0,3),(3,3,3),(0,0,0)), "purple-500"),
    Kind(4, "O", ((4,4),(4,4)), "purple-700"),
    Kind(5, "S", ((0,5,5),(5,5,0),(0,0,0)), "purple-900"),
    Kind(6, "T", ((0,6,0),(6,6,6),(0,0,0)), "fuchsia-500"),
    Kind(7, "Z", ((7,7,0),(0,7,7),(0,0,0)), "violet-600"),
)
KINDS_BY_NAME: Dict[str, Kind] = {k.name: k for k in KINDS}

SPAWN_X, SPAWN_Y = COLS // 2 - 1, 0


def rotate_cw(m: Shape) -> Shape:
    """Transpose, then reverse each row."""
    return [list(r)[::-1] for r in zip(*m)]


@dataclass
class Piece:
    kind: Kind
    shape: Shape
    x: int
    y: int

    @staticmethod
    def spawn(kind: Kind) -> "Piece":
        return Piece(kind, [list(r) for r in kind.shape], SPAWN_X, SPAWN_Y)

    def moved(self, dx: int = 0, dy: int = 0) -> "Piece":
        return Piece(self.kind, [r[:] for r in self.shape], self.x + dx, self.y + dy)


def rotate(piece: Piece) -> Piece:
    """Return a rotated copy at the same origin. No kicks; the caller validates."""
    return Piece(piece.kind, rotate_cw(piece.shape), piece.x, piece.y)
