from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Reading:
    ts_utc: datetime
    lux: float
    target: int


@dataclass
class ComponentStatus:
    restarts: int = 0
    last_error: Optional[str] = None
    last_error_utc: Optional[datetime] = None


@dataclass
class LiveState:
    mode: str = "dbus"
    last_reading: Optional[Reading] = None
    current_brightness: Optional[int] = None
    monitor: ComponentStatus = field(default_factory=ComponentStatus)
    actuator: ComponentStatus = field(default_factory=ComponentStatus)
    fatal_error: Optional[str] = None
