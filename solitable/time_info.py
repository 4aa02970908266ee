"""Game clock with dilated, clamped frame deltas."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class TimeInfo:
    """Accumulated times and the latest frame deltas, in seconds."""

    current_time: float = 0.0
    current_dt: float = 0.0
    ui_time: float = 0.0
    ui_dt: float = 0.0
    real_world_time: float = 0.0
    real_world_dt: float = 0.0


@dataclass
class Clock:
    """Measures runtime and advances a :class:`TimeInfo` once per frame."""

    time_source: Optional[Callable[[], float]] = None
    time_rate: float = 1.0
    info: TimeInfo = field(default_factory=TimeInfo)
    last_time: float = 0.0
    start_time: Optional[float] = None

    def __post_init__(self) -> None:
        if self.time_source is None:
            self.time_source = time.perf_counter

    def init(self) -> None:
        """Start measuring runtime from now."""
        self.start_time = self.time_source()

    def get_time(self) -> float:
        """Seconds since :meth:`init`, which is called on first use."""
        if self.start_time is None:
            self.init()
        return self.time_source() - self.start_time

    def update(self, dt_max: float) -> TimeInfo:
        """Advance the clock by one frame and return the updated times."""
        now = self.get_time()
        delta = now - self.last_time
        dilated_dt = delta * self.time_rate
        clamped_dt = min(dilated_dt, dt_max)

        info = self.info
        info.current_dt = clamped_dt
        info.current_time += clamped_dt
        info.real_world_dt = dilated_dt
        info.real_world_time += dilated_dt
        info.ui_dt = delta
        info.ui_time += delta

        self.last_time = now
        return info