from __future__ import annotations
import asyncio
import logging
from typing import Optional

from ..domain.brightness import DEVICE, STEP, SUBSYSTEM, next_step
from ..domain.channel import TargetChannel
from ..domain.interfaces import SessionFactory
from ..domain.models import LiveState


logger = logging.getLogger(__name__)


class BrightnessActuator:
    """Ramps the backlight toward the latest target, one step per tick."""

    name = "actuator"

    def __init__(
        self,
        connect: SessionFactory,
        channel: TargetChannel,
        live: LiveState,
        tick_seconds: float = 0.05,
        step: int = STEP,
    ) -> None:
        self._connect = connect
        self._channel = channel
        self._live = live
        self._tick_seconds = tick_seconds
        self._step = step
        # Survives restarts; the channel is drained, so the last target must be kept
        self._target: Optional[int] = None

    async def run(self) -> None:
        """One actuator session; returns only by raising."""
        session = self._connect()
        current: Optional[int] = None
        self._live.current_brightness = None
        logger.info("Actuator session started (tick_seconds=%s step=%d)", self._tick_seconds, self._step)

        while True:
            await asyncio.sleep(self._tick_seconds)

            if self._target is None:
                self._target = await self._channel.receive()
            else:
                self._target = self._channel.latest(self._target)

            new = next_step(current, self._target, self._step)
            if new is None:
                continue

            await session.set_brightness(SUBSYSTEM, DEVICE, new)
            if current is None:
                logger.info("Backlight set to %d", new)
            current = new
            self._live.current_brightness = current
