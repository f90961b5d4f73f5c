from __future__ import annotations
import asyncio
import logging
from typing import Optional, Protocol

from ..core.timeutil import now_utc
from ..domain.errors import ChannelClosed, TimeWarpDetected
from ..domain.models import ComponentStatus


logger = logging.getLogger(__name__)


class Component(Protocol):
    name: str

    async def run(self) -> None:
        ...


class Supervisor:
    """Runs a component session forever, restarting it after a cooldown."""

    def __init__(
        self,
        component: Component,
        status: ComponentStatus,
        cooldown_seconds: float = 10.0,
    ) -> None:
        self._component = component
        self._status = status
        self._cooldown_seconds = cooldown_seconds

        self._task: Optional[asyncio.Task] = None
        self._stop: Optional[asyncio.Event] = None

    @property
    def name(self) -> str:
        return self._component.name

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    def start(self) -> asyncio.Task:
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(self.run(), name=f"{self.name}_supervisor")
        return self._task

    async def stop(self) -> None:
        if self._stop is not None:
            self._stop.set()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except ChannelClosed:
                # Already reported when the task ended
                pass
            self._task = None

    async def run(self) -> None:
        if self._stop is None:
            self._stop = asyncio.Event()

        while not self._stop.is_set():
            try:
                await self._component.run()
            except ChannelClosed:
                logger.critical("%s: target channel closed, giving up", self.name)
                raise
            except TimeWarpDetected as e:
                logger.warning("%s: %s, restarting session", self.name, e)
                self._record(e)
            except Exception as e:
                logger.exception("%s: %s", self.name, e)
                self._record(e)

            # cooldown with stop awareness
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._cooldown_seconds)
            except asyncio.TimeoutError:
                pass

        logger.info("%s supervisor stopped", self.name)

    def _record(self, exc: BaseException) -> None:
        self._status.restarts += 1
        self._status.last_error = str(exc) or type(exc).__name__
        self._status.last_error_utc = now_utc()
