import time
from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def wall_seconds() -> float:
    # Wall clock, not monotonic: the gap must include time spent suspended
    return time.time()
