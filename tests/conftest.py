from __future__ import annotations

import asyncio
import os

# Must be set before backlightd.core.config builds its settings singleton
os.environ.setdefault("BACKLIGHTD_MODE", "sim")

import pytest

from backlightd.core.config import Settings


async def wait_until(cond, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not cond():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.001)


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        mode="sim",
        poll_seconds=0.01,
        tick_seconds=0.001,
        time_warp_seconds=60.0,
        restart_cooldown_seconds=0.02,
    )
