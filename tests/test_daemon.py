from __future__ import annotations

import asyncio

from backlightd.core.config import Settings
from backlightd.drivers.sensors_sim import SimulatedLightSensor
from backlightd.drivers.session_sim import SimulatedSession
from backlightd.services.daemon import BacklightDaemon

from conftest import wait_until


def test_converges_to_sensor_target(fast_settings: Settings) -> None:
    sensor = SimulatedLightSensor(lux=300.0)
    session = SimulatedSession()

    async def scenario():
        daemon = BacklightDaemon(fast_settings, lambda: sensor, lambda: session)
        await daemon.start()
        await wait_until(lambda: daemon.live.current_brightness == 1125)

        sensor.set_manual(450.0)
        target = daemon.live.last_reading.target
        await wait_until(lambda: daemon.live.last_reading.target != target)
        new_target = daemon.live.last_reading.target
        await wait_until(
            lambda: abs(daemon.live.current_brightness - new_target) < 10, timeout=5.0
        )
        await daemon.stop()
        return daemon, new_target

    daemon, new_target = asyncio.run(scenario())
    assert new_target > 1125
    assert daemon.fatal_error is None
    assert daemon.channel.closed


def test_sensor_outage_is_survived(fast_settings: Settings) -> None:
    sensor = SimulatedLightSensor(lux=3000.0)
    session = SimulatedSession()
    sensor.fail_next(2)

    async def scenario():
        daemon = BacklightDaemon(fast_settings, lambda: sensor, lambda: session)
        await daemon.start()
        await wait_until(lambda: daemon.live.current_brightness == 3000)
        await daemon.stop()
        return daemon

    daemon = asyncio.run(scenario())
    assert daemon.live.monitor.restarts == 2
    assert daemon.live.actuator.restarts == 0
    assert daemon.fatal_error is None


def test_broken_channel_is_fatal(fast_settings: Settings) -> None:
    fatal: list[BaseException] = []
    sensor = SimulatedLightSensor(lux=1000.0)
    session = SimulatedSession()

    async def scenario():
        daemon = BacklightDaemon(
            fast_settings, lambda: sensor, lambda: session, on_fatal=fatal.append
        )
        await daemon.start()
        await wait_until(lambda: daemon.live.current_brightness is not None)
        daemon.channel.close()
        await wait_until(lambda: daemon.fatal_error is not None)
        await daemon.stop()
        return daemon

    daemon = asyncio.run(scenario())
    assert len(fatal) == 1
    assert daemon.live.fatal_error is not None
