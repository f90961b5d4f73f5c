from __future__ import annotations

import logging

import sdbus
from sdbus import DbusInterfaceCommonAsync, dbus_method_async, dbus_property_async

from .dbus_names import (
    LIGHT_LEVEL_SIGNATURE,
    LOGIN1_SERVICE,
    LOGIN1_SESSION_INTERFACE,
    LOGIN1_SESSION_PATH,
    SENSOR_PROXY_INTERFACE,
    SENSOR_PROXY_PATH,
    SENSOR_PROXY_SERVICE,
    SET_BRIGHTNESS_SIGNATURE,
)

logger = logging.getLogger(__name__)


class SensorProxyInterface(DbusInterfaceCommonAsync, interface_name=SENSOR_PROXY_INTERFACE):
    @dbus_method_async("", "")
    async def claim_light(self) -> None:
        raise NotImplementedError

    @dbus_property_async(LIGHT_LEVEL_SIGNATURE)
    def light_level(self) -> float:
        raise NotImplementedError


class Login1SessionInterface(DbusInterfaceCommonAsync, interface_name=LOGIN1_SESSION_INTERFACE):
    @dbus_method_async(SET_BRIGHTNESS_SIGNATURE, "")
    async def set_brightness(self, subsystem: str, name: str, brightness: int) -> None:
        raise NotImplementedError


class HadessLightSensor:
    """iio-sensor-proxy ambient light sensor on the system bus."""

    def __init__(self, bus: sdbus.SdBus | None = None) -> None:
        self._proxy = SensorProxyInterface.new_proxy(SENSOR_PROXY_SERVICE, SENSOR_PROXY_PATH, bus=bus)

    async def claim_light(self) -> None:
        await self._proxy.claim_light()

    async def light_level(self) -> float:
        return float(await self._proxy.light_level.get_async())


class Login1Session:
    """logind session of the caller; SetBrightness needs no polkit rule."""

    def __init__(self, bus: sdbus.SdBus | None = None) -> None:
        self._proxy = Login1SessionInterface.new_proxy(LOGIN1_SERVICE, LOGIN1_SESSION_PATH, bus=bus)

    async def set_brightness(self, subsystem: str, name: str, brightness: int) -> None:
        await self._proxy.set_brightness(subsystem, name, int(brightness))


def connect_sensor() -> HadessLightSensor:
    bus = sdbus.sd_bus_open_system()
    logger.info("Connected to system bus for %s", SENSOR_PROXY_SERVICE)
    return HadessLightSensor(bus=bus)


def connect_session() -> Login1Session:
    bus = sdbus.sd_bus_open_system()
    logger.info("Connected to system bus for %s", LOGIN1_SERVICE)
    return Login1Session(bus=bus)
