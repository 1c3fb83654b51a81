import sys, os

# Ensure the project root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import FixedRandom, KIND_INDEX, block_spawn, fill_row, make_game

__all__ = [
    "FixedRandom",
    "KIND_INDEX",
    "block_spawn",
    "fill_row",
    "make_game",
]
