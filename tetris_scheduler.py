"""Drop curve and the accumulator-driven drop scheduler"""
from tetris_config import BASE_INTERVAL_MS, LEVEL_DECREMENT_MS, MIN_INTERVAL_MS, clamp_speed_factor


def drop_interval(level: int, speed_factor: float = 1.0) -> float:
    """Milliseconds between automatic drops at ``level``."""
    base = max(BASE_INTERVAL_MS - (level - 1) * LEVEL_DECREMENT_MS, MIN_INTERVAL_MS)
    return base / speed_factor


class DropScheduler:
    """Counts gravity ticks as the host loop feeds it elapsed time.

    Level and speed factor changes only affect the interval used for the
    next comparison; time already accumulated is kept. ``arm`` always
    begins a fresh interval.
    """

    def __init__(self, level: int = 1, speed_factor: float = 1.0):
        self.level = level
        self.speed_factor = clamp_speed_factor(speed_factor)
        self.acc = 0.0
        self.armed = False

    @property
    def interval(self) -> float:
        return drop_interval(self.level, self.speed_factor)

    def set_speed_factor(self, value: float) -> None:
        self.speed_factor = clamp_speed_factor(value)

    def arm(self) -> None:
        self.acc = 0.0
        self.armed = True

    def cancel(self) -> None:
        self.armed = False
        self.acc = 0.0

    def advance(self, dt_ms: float) -> None:
        if self.armed: self.acc += dt_ms

    def pop_tick(self) -> bool:
        """Consume one interval if it has elapsed.

        Ticks are popped one at a time so a level-up caused by one tick
        already shortens the interval for the next.
        """
        if not self.armed: return False
        grav = self.interval
        if self.acc < grav: return False
        self.acc -= grav
        return True
