from __future__ import annotations


class BacklightError(Exception):
    """Base class for daemon errors."""


class TimeWarpDetected(BacklightError):
    """Too much wall-clock time passed between two polls (suspend/resume)."""

    def __init__(self, elapsed_s: float) -> None:
        super().__init__(f"time warp: {elapsed_s:.1f}s since last poll")
        self.elapsed_s = elapsed_s


class ChannelClosed(BacklightError):
    """The target channel between monitor and actuator is gone."""


class SimulatedServiceError(BacklightError):
    """Injected failure from a simulated sensor or session."""
