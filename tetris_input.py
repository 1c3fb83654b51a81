"""Input dispatcher: keys and swipe/tap gestures -> game actions"""
from typing import Dict, Optional, Tuple

import pygame

from tetris_game import Action

KEYMAP: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.TOGGLE_PAUSE,
}

SWIPE_MIN_PX = 50
TAP_MAX_PX = 20


def swipe_action(start: Tuple[float, float], end: Tuple[float, float]) -> Optional[Action]:
    """Classify a drag from ``start`` to ``end`` (screen px, y grows downward).

    The dominant axis wins; short vertical drags that are not taps do nothing.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) > abs(dy):
        if abs(dx) > SWIPE_MIN_PX:
            return Action.MOVE_RIGHT if dx > 0 else Action.MOVE_LEFT
        return None
    if abs(dy) > SWIPE_MIN_PX:
        return Action.HARD_DROP if dy > 0 else Action.SOFT_DROP
    if abs(dx) < TAP_MAX_PX and abs(dy) < TAP_MAX_PX:
        return Action.ROTATE
    return None


class InputDispatcher:
    """Forwards translated events to ``game.dispatch``; keeps no game state."""
    def __init__(self, game, keymap: Optional[Dict[int, Action]] = None):
        self.game = game
        self.keymap = dict(KEYMAP if keymap is None else keymap)
        self.press: Optional[Tuple[float, float]] = None

    def handle_key(self, key: int) -> Optional[Action]:
        a = self.keymap.get(key)
        if a is not None: self.game.dispatch(a)
        return a

    def handle_swipe(self, start, end) -> Optional[Action]:
        a = swipe_action(start, end)
        if a is not None: self.game.dispatch(a)
        return a

    def handle_event(self, e) -> Optional[Action]:
        if e.type == pygame.KEYDOWN:
            return self.handle_key(e.key)
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self.press = e.pos; return None
        if e.type == pygame.MOUSEBUTTONUP and e.button == 1 and self.press is not None:
            start, self.press = self.press, None
            return self.handle_swipe(start, e.pos)
        return None
