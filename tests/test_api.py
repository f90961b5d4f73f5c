from __future__ import annotations

import time

from fastapi.testclient import TestClient

from backlightd.core.config import Settings
from backlightd.main import Runtime, build_runtime, create_app
from backlightd.services.daemon import BacklightDaemon


def _poll(client: TestClient, cond, timeout: float = 3.0) -> dict:
    deadline = time.monotonic() + timeout
    while True:
        live = client.get("/api/live").json()
        if cond(live):
            return live
        assert time.monotonic() < deadline, live
        time.sleep(0.01)


def test_live_tracks_simulated_sensor(fast_settings: Settings) -> None:
    runtime = build_runtime(fast_settings)
    runtime.sim_sensor.set_manual(100.0)
    app = create_app(runtime)

    with TestClient(app) as client:
        live = _poll(client, lambda s: s["current_brightness"] == 1125)
        assert live["mode"] == "sim"
        assert live["last_reading"]["target"] == 1125
        assert live["fatal_error"] is None

        r = client.post("/api/sim/manual", json={"lux": 2600})
        assert r.json() == {"ok": True, "mode": "manual", "lux": 2600}
        _poll(client, lambda s: s["last_reading"]["target"] == 3000)

        status = client.get("/api/sim").json()
        assert status["sensor"]["manual_value"] == 2600
        assert status["sensor"]["claims"] >= 2
        assert 1125 <= status["backlight"] <= 3000


def test_injected_failures_show_up_as_restarts(fast_settings: Settings) -> None:
    app = create_app(build_runtime(fast_settings))

    with TestClient(app) as client:
        _poll(client, lambda s: s["current_brightness"] is not None)
        r = client.post("/api/sim/fail", json={"sensor_failures": 1, "session_failures": 0})
        assert r.status_code == 200
        live = _poll(client, lambda s: s["monitor"]["restarts"] >= 1)
        assert live["monitor"]["last_error"] == "Simulated sensor failure"
        assert live["actuator"]["restarts"] == 0


def test_pattern_endpoint(fast_settings: Settings) -> None:
    runtime = build_runtime(fast_settings)
    app = create_app(runtime)
    client = TestClient(app)

    r = client.post("/api/sim/pattern", json={"type": "step", "step_low": 100, "step_high": 3000})
    assert r.status_code == 200
    assert r.json()["pattern"]["type"] == "step"
    assert runtime.sim_sensor.status()["manual_value"] is None


def test_manual_rejects_negative_lux(fast_settings: Settings) -> None:
    client = TestClient(create_app(build_runtime(fast_settings)))
    r = client.post("/api/sim/manual", json={"lux": -1})
    assert r.status_code == 422


def test_sim_endpoints_unavailable_outside_sim_mode() -> None:
    cfg = Settings(mode="dbus")
    daemon = BacklightDaemon(cfg, connect_sensor=lambda: None, connect_session=lambda: None)
    client = TestClient(create_app(Runtime(daemon=daemon)))

    assert client.get("/api/sim").status_code == 409
    assert client.post("/api/sim/manual", json={"lux": 10}).status_code == 409

    live = client.get("/api/live").json()
    assert live["mode"] == "dbus"
    assert live["last_reading"] == {"ts_utc": None, "lux": None, "target": None}
    assert live["current_brightness"] is None
