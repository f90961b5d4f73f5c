from __future__ import annotations
import asyncio
import logging
from typing import Callable

from ..core.timeutil import now_utc, wall_seconds
from ..domain.brightness import lux_to_brightness
from ..domain.channel import TargetChannel
from ..domain.errors import TimeWarpDetected
from ..domain.interfaces import SensorFactory
from ..domain.models import LiveState, Reading


logger = logging.getLogger(__name__)


class LightMonitor:
    """Polls the ambient light sensor and publishes target brightness."""

    name = "monitor"

    def __init__(
        self,
        connect: SensorFactory,
        channel: TargetChannel,
        live: LiveState,
        poll_seconds: float = 5.0,
        time_warp_seconds: float = 20.0,
        clock: Callable[[], float] = wall_seconds,
    ) -> None:
        self._connect = connect
        self._channel = channel
        self._live = live
        self._poll_seconds = poll_seconds
        self._time_warp_seconds = time_warp_seconds
        self._clock = clock

    async def run(self) -> None:
        """One monitor session; returns only by raising."""
        sensor = self._connect()
        await sensor.claim_light()
        logger.info(
            "Monitor session started (poll_seconds=%s time_warp_seconds=%s)",
            self._poll_seconds,
            self._time_warp_seconds,
        )

        last = self._clock()
        while True:
            # A long gap means the host slept; the claim may be stale after resume
            now = self._clock()
            elapsed = now - last
            if elapsed > self._time_warp_seconds:
                logger.info("time warp found: %.1fs since last poll", elapsed)
                raise TimeWarpDetected(elapsed)
            last = now

            # Ownership can be lost to other clients, so claim every time
            await sensor.claim_light()
            lux = await sensor.light_level()

            target = lux_to_brightness(lux)
            self._channel.publish(target)
            self._live.last_reading = Reading(ts_utc=now_utc(), lux=lux, target=target)
            logger.info("%04d lux -> brightness %d", int(lux), target)

            await asyncio.sleep(self._poll_seconds)
