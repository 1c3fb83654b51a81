"""Gameplay constants and live-editable CONFIG"""
import logging
import math

logger = logging.getLogger(__name__)

COLS, ROWS = 10, 20
EMPTY = 0

# Drop curve (ms): max(BASE - (level-1)*DECREMENT, MIN) / speed factor
BASE_INTERVAL_MS = 800
LEVEL_DECREMENT_MS = 50
MIN_INTERVAL_MS = 100

LINES_PER_LEVEL = 10
SCORE_TABLE = (0, 100, 300, 500, 800)

# Slider bounds for the overlay; the engine itself accepts any positive factor
SPEED_FACTOR_MIN = 0.2
SPEED_FACTOR_MAX = 2.0
SPEED_FACTOR_STEP = 0.1
SPEED_FACTOR_FLOOR = 0.1

CONFIG = {
    "CELL_SIZE": 30,
    "SPEED_FACTOR": 1.0,
    "SEED": None,
    "LOG_LEVEL": "INFO",
}


def clamp_speed_factor(value) -> float:
    """Coerce an external speed factor into a positive, finite float.

    Any finite positive value passes through. NaN, non-numbers and values
    <= 0 fall back to SPEED_FACTOR_FLOOR. Infinity would make the drop
    interval zero, so it falls back to the fastest slider value.
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        logger.warning("Speed factor %r is not a number; using %s", value, SPEED_FACTOR_FLOOR)
        return SPEED_FACTOR_FLOOR
    if math.isinf(v) and v > 0:
        logger.warning("Speed factor %r out of range; clamped to %s", value, SPEED_FACTOR_MAX)
        return SPEED_FACTOR_MAX
    if math.isnan(v) or v <= 0:
        logger.warning("Speed factor %r out of range; clamped to %s", value, SPEED_FACTOR_FLOOR)
        return SPEED_FACTOR_FLOOR
    return v
