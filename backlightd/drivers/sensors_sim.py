from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Optional, Literal

from ..core.timeutil import now_utc
from ..domain.errors import SimulatedServiceError


PatternType = Literal["manual", "sine", "step", "ramp", "random"]


@dataclass
class PatternConfig:
    type: PatternType = "manual"
    baseline: float = 1400.0
    amplitude: float = 1200.0
    period_s: float = 600.0
    noise: float = 0.0
    step_low: float = 300.0
    step_high: float = 2800.0
    step_period_s: float = 120.0
    ramp_min: float = 0.0
    ramp_max: float = 3000.0
    ramp_period_s: float = 600.0


class SimulatedLightSensor:
    """In-process stand-in for iio-sensor-proxy."""

    def __init__(self, lux: float = 1450.0) -> None:
        self._enabled = True
        self._manual_value: Optional[float] = float(lux)
        self._pattern = PatternConfig()
        self._t0 = now_utc()
        self._failures_pending = 0
        self.claims = 0
        self.reads = 0

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def set_manual(self, lux: float) -> None:
        self._pattern.type = "manual"
        self._manual_value = float(lux)

    def set_pattern(self, cfg: PatternConfig) -> None:
        self._pattern = cfg
        if cfg.type != "manual":
            self._manual_value = None

    def fail_next(self, count: int = 1) -> None:
        """Make the next `count` bus calls raise."""
        self._failures_pending += max(0, int(count))

    def status(self) -> dict:
        return {
            "enabled": self._enabled,
            "manual_value": self._manual_value,
            "pattern": self._pattern.__dict__,
            "claims": self.claims,
            "reads": self.reads,
            "failures_pending": self._failures_pending,
        }

    def _pattern_value(self, t: float) -> float:
        p = self._pattern
        if p.type == "manual":
            return float(self._manual_value if self._manual_value is not None else p.baseline)

        if p.type == "sine":
            return p.baseline + p.amplitude * math.sin(2 * math.pi * t / max(p.period_s, 1.0))

        if p.type == "step":
            phase = (t % max(p.step_period_s, 1.0)) / max(p.step_period_s, 1.0)
            return p.step_high if phase >= 0.5 else p.step_low

        if p.type == "ramp":
            phase = (t % max(p.ramp_period_s, 1.0)) / max(p.ramp_period_s, 1.0)
            return p.ramp_min + (p.ramp_max - p.ramp_min) * phase

        if p.type == "random":
            return p.baseline + random.uniform(-p.amplitude, p.amplitude)

        return p.baseline

    def _check(self) -> None:
        if not self._enabled:
            raise SimulatedServiceError("Sim sensor disabled")
        if self._failures_pending > 0:
            self._failures_pending -= 1
            raise SimulatedServiceError("Simulated sensor failure")

    async def claim_light(self) -> None:
        self._check()
        self.claims += 1

    async def light_level(self) -> float:
        self._check()
        self.reads += 1
        t = (now_utc() - self._t0).total_seconds()
        base = self._pattern_value(t)
        if self._pattern.noise > 0:
            base += random.uniform(-self._pattern.noise, self._pattern.noise)
        return max(0.0, base)
