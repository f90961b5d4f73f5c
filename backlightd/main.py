from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .core.config import Settings
from .core.log import configure_logging

from .api.routes import router as api_router
import backlightd.api.routes as routes_module

from .drivers.sensors_sim import SimulatedLightSensor
from .drivers.session_sim import SimulatedSession
from .services.daemon import BacklightDaemon


logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    daemon: BacklightDaemon
    sim_sensor: Optional[SimulatedLightSensor] = None
    sim_session: Optional[SimulatedSession] = None


def build_runtime(cfg: Settings) -> Runtime:
    if cfg.mode.lower() == "sim":
        sim_sensor = SimulatedLightSensor()
        sim_session = SimulatedSession()
        daemon = BacklightDaemon(
            cfg,
            connect_sensor=lambda: sim_sensor,
            connect_session=lambda: sim_session,
        )
        return Runtime(daemon=daemon, sim_sensor=sim_sensor, sim_session=sim_session)

    if cfg.mode.lower() != "dbus":
        raise ValueError(f"Unsupported mode: {cfg.mode}")

    # sd-bus is only needed when talking to the real services
    from .drivers.dbus_services import connect_sensor, connect_session

    daemon = BacklightDaemon(
        cfg,
        connect_sensor=connect_sensor,
        connect_session=connect_session,
    )
    return Runtime(daemon=daemon)


def create_app(runtime: Runtime, manage_daemon: bool = True) -> FastAPI:
    """Status API app. With manage_daemon the app lifespan also runs the daemon."""
    daemon = runtime.daemon

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not manage_daemon:
            yield
            return
        configure_logging(daemon.cfg.log_level, daemon.cfg.log_file)
        await daemon.start()
        try:
            yield
        finally:
            await daemon.stop()

    app = FastAPI(title=daemon.cfg.app_name, lifespan=lifespan)
    app.state.runtime = runtime

    # Make the dependency functions in routes resolve to the real ones
    app.dependency_overrides[routes_module.get_daemon] = lambda: daemon
    app.dependency_overrides[routes_module.get_sim_sensor] = lambda: runtime.sim_sensor
    app.dependency_overrides[routes_module.get_sim_session] = lambda: runtime.sim_session

    app.include_router(api_router, prefix="/api")
    return app


async def serve_api(server: uvicorn.Server) -> bool:
    """Run the status API until told to exit. False if it never came up."""
    try:
        await server.serve()
    except SystemExit:
        # uvicorn exits the process when it cannot bind; the daemon must not go with it
        cfg = server.config
        logger.error("Status API unavailable on %s:%s, continuing without it", cfg.host, cfg.port)
        return False
    except OSError as e:
        logger.error("Status API failed: %s, continuing without it", e)
        return False
    return True


async def run(
    runtime: Runtime,
    stop: Optional[asyncio.Event] = None,
    install_signal_handlers: bool = True,
) -> int:
    """Run the daemon until a signal or a fatal error; returns the exit status."""
    daemon = runtime.daemon
    cfg = daemon.cfg
    configure_logging(cfg.log_level, cfg.log_file)

    if stop is None:
        stop = asyncio.Event()
    if install_signal_handlers:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, stop.set)
    daemon.on_fatal = lambda exc: stop.set()

    await daemon.start()

    server: Optional[uvicorn.Server] = None
    api_task: Optional[asyncio.Task] = None
    if cfg.api_port is not None:
        server = uvicorn.Server(
            uvicorn.Config(
                create_app(runtime, manage_daemon=False),
                host=cfg.api_host,
                port=cfg.api_port,
                lifespan="off",
                log_config=None,
            )
        )
        api_task = asyncio.create_task(serve_api(server), name="status_api")

    try:
        await stop.wait()
    finally:
        if server is not None and api_task is not None:
            server.should_exit = True
            await api_task
        await daemon.stop()

    if daemon.fatal_error is not None:
        logger.critical("Exiting after fatal error: %s", daemon.fatal_error)
        return 1
    return 0
