from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Literal


class SimManualRequest(BaseModel):
    lux: float = Field(ge=0)


class SimPatternRequest(BaseModel):
    type: Literal["manual", "sine", "step", "ramp", "random"]
    baseline: float = 1400
    amplitude: float = 1200
    period_s: float = 600
    noise: float = 0
    step_low: float = 300
    step_high: float = 2800
    step_period_s: float = 120
    ramp_min: float = 0
    ramp_max: float = 3000
    ramp_period_s: float = 600


class SimFailRequest(BaseModel):
    sensor_failures: int = Field(default=0, ge=0, le=100)
    session_failures: int = Field(default=0, ge=0, le=100)
