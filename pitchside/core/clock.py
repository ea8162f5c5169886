"""Session clock.

Turns wall-clock tick times into bounded simulation steps. Simulation
time only advances by the steps actually integrated, so a paused gap
never shows up in dt or in recorded timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SessionClock:
    """Tracks simulation time for one drill session.

    Attributes:
        max_step: Largest dt a single tick may integrate (seconds)
        current_time: Simulation seconds elapsed
        tick_count: Number of integrated ticks
    """
    max_step: float = 0.1
    current_time: float = 0.0
    tick_count: int = 0

    _last_wall: Optional[float] = field(default=None, repr=False)

    def rebaseline(self) -> None:
        """Forget the last wall time; the next tick integrates dt = 0."""
        self._last_wall = None

    def clamp_step(self, dt: float) -> float:
        """Clamp a raw step into [0, max_step]."""
        if dt != dt or dt < 0:  # NaN or clock went backwards
            return 0.0
        return min(dt, self.max_step)

    def delta_for(self, now: float) -> float:
        """Step to integrate for a tick delivered at wall time `now`."""
        last = self._last_wall
        self._last_wall = now
        if last is None:
            return 0.0
        return self.clamp_step(now - last)

    def advance(self, dt: float) -> float:
        """Advance simulation time by an already-clamped dt."""
        self.current_time += dt
        self.tick_count += 1
        return dt

