from __future__ import annotations

import math
from typing import Optional

# Backlight levels (intel_backlight raw units)
MAX = 3000.0  # 40%
MID = 2000.0  # 25%
MIN = 1125.0  # 15%

# Ambient light
MAX_LUX = 2500.0  # noon
MIN_LUX = 400.0   # night

STEP = 10

SUBSYSTEM = "backlight"
DEVICE = "intel_backlight"


def lux_to_brightness(lux: float) -> int:
    """Map ambient illuminance to a backlight level.

    Flat at MIN up to MIN_LUX and at MAX beyond MAX_LUX; in between a
    quadratic Bezier over (MIN, MID, MAX).
    """
    if lux > MAX_LUX:
        return int(MAX)
    if lux <= MIN_LUX:
        return int(MIN)

    # (0, 1]
    t = (lux - MIN_LUX) / (MAX_LUX - MIN_LUX)
    p = (1.0 - t) ** 2 * MIN + 2.0 * t * (1.0 - t) * MID + t ** 2 * MAX
    return int(math.floor(p))


def next_step(current: Optional[int], target: int, step: int = STEP) -> Optional[int]:
    """Next value to send toward target, or None to hold."""
    if current is None:
        return target
    if abs(current - target) < step:
        return None
    if current > target:
        return current - step
    return current + step
