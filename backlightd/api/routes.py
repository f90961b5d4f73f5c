from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core.timeutil import now_utc
from ..domain.models import ComponentStatus
from ..drivers.sensors_sim import PatternConfig, SimulatedLightSensor
from ..drivers.session_sim import SimulatedSession
from ..services.daemon import BacklightDaemon
from .schemas import SimFailRequest, SimManualRequest, SimPatternRequest

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependency getters ---
# main.create_app() swaps these out through app.dependency_overrides.
def get_daemon() -> BacklightDaemon:  # overridden in main
    raise RuntimeError("Daemon dependency not configured")

def get_sim_sensor() -> Optional[SimulatedLightSensor]:  # overridden in main
    return None

def get_sim_session() -> Optional[SimulatedSession]:  # overridden in main
    return None


def _require_sim(obj):
    if obj is None:
        raise HTTPException(status_code=409, detail="Simulation not available (mode is not 'sim')")
    return obj


def _component(status: ComponentStatus) -> dict:
    return {
        "restarts": status.restarts,
        "last_error": status.last_error,
        "last_error_utc": status.last_error_utc.isoformat() if status.last_error_utc else None,
    }


@router.get("/live")
async def get_live(daemon: BacklightDaemon = Depends(get_daemon)):
    live = daemon.live
    r = live.last_reading
    return {
        "app": daemon.cfg.app_name,
        "mode": live.mode,
        "now_utc": now_utc().isoformat(),
        "last_reading": {
            "ts_utc": r.ts_utc.isoformat() if r else None,
            "lux": r.lux if r else None,
            "target": r.target if r else None,
        },
        "current_brightness": live.current_brightness,
        "monitor": _component(live.monitor),
        "actuator": _component(live.actuator),
        "fatal_error": live.fatal_error,
    }


# --- Simulation endpoints ---
@router.get("/sim")
async def sim_status(
    sensor: Optional[SimulatedLightSensor] = Depends(get_sim_sensor),
    session: Optional[SimulatedSession] = Depends(get_sim_session),
):
    sensor = _require_sim(sensor)
    session = _require_sim(session)
    return {"sensor": sensor.status(), "backlight": session.brightness}


@router.post("/sim/manual")
async def sim_set_manual(
    req: SimManualRequest,
    sensor: Optional[SimulatedLightSensor] = Depends(get_sim_sensor),
):
    _require_sim(sensor).set_manual(req.lux)
    return {"ok": True, "mode": "manual", "lux": req.lux}


@router.post("/sim/pattern")
async def sim_set_pattern(
    req: SimPatternRequest,
    sensor: Optional[SimulatedLightSensor] = Depends(get_sim_sensor),
):
    cfg = PatternConfig(**req.model_dump())
    _require_sim(sensor).set_pattern(cfg)
    return {"ok": True, "pattern": cfg.__dict__}


@router.post("/sim/fail")
async def sim_fail(
    req: SimFailRequest,
    sensor: Optional[SimulatedLightSensor] = Depends(get_sim_sensor),
    session: Optional[SimulatedSession] = Depends(get_sim_session),
):
    _require_sim(sensor).fail_next(req.sensor_failures)
    _require_sim(session).fail_next(req.session_failures)
    logger.info(
        "Injected failures: sensor=%d session=%d", req.sensor_failures, req.session_failures
    )
    return {"ok": True, "sensor_failures": req.sensor_failures, "session_failures": req.session_failures}
