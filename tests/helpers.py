from __future__ import annotations

from typing import Iterable, Sequence

from tetris_config import COLS, ROWS
from tetris_game import TetrisGame
from tetris_piece import KINDS

KIND_INDEX = {k.name: i for i, k in enumerate(KINDS)}


class FixedRandom:
    """Random source that replays kind names in a loop."""

    def __init__(self, names: Sequence[str]) -> None:
        self.values = [KIND_INDEX[n] for n in names]
        self.calls = 0

    def randrange(self, stop: int) -> int:
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        return v % stop


def make_game(names: Sequence[str] = ("O",), speed_factor: float = 1.0) -> TetrisGame:
    game = TetrisGame(speed_factor=speed_factor, rng=FixedRandom(names))
    game.start()
    return game


def fill_row(board, y: int, value: int = 1, holes: Iterable[int] = ()) -> None:
    skip = set(holes)
    board[y] = [0 if x in skip else value for x in range(COLS)]


def block_spawn(game: TetrisGame) -> None:
    # column stack under the spawn area that completes no row
    for y in range(2, ROWS):
        game.board[y][4] = 1
        game.board[y][5] = 1
