"""Per-participant position traces recorded while a drill runs."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..errors import TraceConsumedError


@dataclass
class PositionTrace:
    """Append-only (t, x, y) samples for one participant.

    Times are simulation seconds, so they only move forward and never
    include paused time. The trace is frozen at stop and handed to the
    analytics engine exactly once.
    """
    participant_id: str
    times: list[float] = field(default_factory=list)
    xs: list[float] = field(default_factory=list)
    ys: list[float] = field(default_factory=list)
    frozen: bool = False
    consumed: bool = False

    def append(self, t: float, x: float, y: float) -> bool:
        """Record a sample; returns False if it was not recorded.

        Samples after freezing, or not later than the last one, are dropped.
        """
        if self.frozen:
            return False
        if self.times and t <= self.times[-1]:
            return False
        self.times.append(t)
        self.xs.append(x)
        self.ys.append(y)
        return True

    def freeze(self) -> None:
        self.frozen = True

    def consume(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Hand the samples over as arrays. Allowed once."""
        if self.consumed:
            raise TraceConsumedError(f"trace for {self.participant_id} was already analyzed")
        self.frozen = True
        self.consumed = True
        return (
            np.asarray(self.times, dtype=float),
            np.asarray(self.xs, dtype=float),
            np.asarray(self.ys, dtype=float),
        )

    def __len__(self) -> int:
        return len(self.times)
