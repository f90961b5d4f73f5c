from __future__ import annotations
import asyncio
import logging
from typing import Callable, Optional

from ..core.config import Settings
from ..domain.channel import TargetChannel
from ..domain.interfaces import SensorFactory, SessionFactory
from ..domain.models import LiveState
from .actuator import BrightnessActuator
from .monitor import LightMonitor
from .supervisor import Supervisor


logger = logging.getLogger(__name__)


class BacklightDaemon:
    """Owns the target channel and the two supervised loops."""

    def __init__(
        self,
        cfg: Settings,
        connect_sensor: SensorFactory,
        connect_session: SessionFactory,
        on_fatal: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        self.cfg = cfg
        self.live = LiveState(mode=cfg.mode)
        self.channel = TargetChannel()
        self.on_fatal = on_fatal
        self.fatal_error: Optional[BaseException] = None

        self.monitor = LightMonitor(
            connect=connect_sensor,
            channel=self.channel,
            live=self.live,
            poll_seconds=cfg.poll_seconds,
            time_warp_seconds=cfg.time_warp_seconds,
        )
        self.actuator = BrightnessActuator(
            connect=connect_session,
            channel=self.channel,
            live=self.live,
            tick_seconds=cfg.tick_seconds,
        )
        self.supervisors = [
            Supervisor(self.monitor, self.live.monitor, cfg.restart_cooldown_seconds),
            Supervisor(self.actuator, self.live.actuator, cfg.restart_cooldown_seconds),
        ]

    async def start(self) -> None:
        logger.info("Starting %s (mode=%s)", self.cfg.app_name, self.cfg.mode)
        for sup in self.supervisors:
            task = sup.start()
            task.add_done_callback(self._task_done)

    async def stop(self) -> None:
        for sup in self.supervisors:
            await sup.stop()
        self.channel.close()
        logger.info("Shutdown complete")

    def _task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if self.fatal_error is None:
            self.fatal_error = exc
            self.live.fatal_error = f"{task.get_name()}: {exc}"
            logger.critical("Fatal error in %s: %s", task.get_name(), exc)
            if self.on_fatal is not None:
                self.on_fatal(exc)
