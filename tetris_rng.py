"""Piece generator: uniform draws with replacement from an injectable source"""
import random
from typing import Optional, Protocol

from tetris_piece import KINDS, Kind, Piece


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class PieceGenerator:
    """Hands out freshly spawned pieces.

    Every draw is independent: repeats and droughts are possible, there is
    no 7-bag. Pass ``rng`` (anything with ``randrange``) or ``seed`` to make
    the sequence reproducible.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def next_kind(self) -> Kind:
        return KINDS[self.rng.randrange(len(KINDS))]

    def next(self) -> Piece:
        return Piece.spawn(self.next_kind())
