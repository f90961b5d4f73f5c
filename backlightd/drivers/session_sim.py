from __future__ import annotations
import logging

from ..domain.errors import SimulatedServiceError

logger = logging.getLogger(__name__)


class SimulatedSession:
    """Records SetBrightness calls instead of touching hardware."""

    def __init__(self) -> None:
        self.applied: list[tuple[str, str, int]] = []
        self._failures_pending = 0

    @property
    def brightness(self) -> int | None:
        return self.applied[-1][2] if self.applied else None

    def fail_next(self, count: int = 1) -> None:
        self._failures_pending += max(0, int(count))

    async def set_brightness(self, subsystem: str, name: str, brightness: int) -> None:
        if self._failures_pending > 0:
            self._failures_pending -= 1
            raise SimulatedServiceError("Simulated SetBrightness failure")
        self.applied.append((subsystem, name, int(brightness)))
        logger.debug("BACKLIGHT %s/%s=%d", subsystem, name, brightness)
