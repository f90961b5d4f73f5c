from __future__ import annotations
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class LightSensorService(Protocol):
    async def claim_light(self) -> None:
        ...

    async def light_level(self) -> float:
        ...


@runtime_checkable
class SessionService(Protocol):
    async def set_brightness(self, subsystem: str, name: str, brightness: int) -> None:
        ...


# Called at the start of every session so a restart gets a fresh connection
SensorFactory = Callable[[], LightSensorService]
SessionFactory = Callable[[], SessionService]
