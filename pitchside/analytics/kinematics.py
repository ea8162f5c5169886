"""
Kinematic metrics from a position trace.

Steps:
1. Instantaneous speed per sample pair, with dt floored and speed capped
   so tracking glitches cannot produce absurd values
2. Trailing rolling mean over roughly one second of samples
3. High-speed running time: seconds spent with smoothed speed above 4.7 m/s
4. Sprint bouts: contiguous runs of smoothed speed at or above 5.5 m/s that
   last at least one second
5. 95th percentile of smoothed speed (nearest rank)

SPEED CONTEXT:
- Walking: ~1.5 m/s
- Jogging: ~3-4 m/s
- Running: ~4-5.5 m/s
- Sprinting: >5.5 m/s
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Sequence

import numpy as np

from ..config import AnalyticsConfig
from .trace import PositionTrace


MIN_DT_S = 1e-6


@dataclass(frozen=True)
class SessionMetrics:
    """Derived athletic metrics for one participant's session."""
    distance_m: float = 0.0
    duration_s: float = 0.0
    avg_speed_mps: float = 0.0
    max_speed_mps: float = 0.0
    p95_speed_mps: float = 0.0
    high_speed_time_s: float = 0.0
    sprint_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


ZERO_METRICS = SessionMetrics()


def instantaneous_speeds(
    t: np.ndarray, x: np.ndarray, y: np.ndarray, speed_cap: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Per-pair step distances, durations and capped speeds."""
    dd = np.hypot(np.diff(x), np.diff(y))
    dt = np.maximum(np.diff(t), MIN_DT_S)
    v = np.minimum(dd / dt, speed_cap)
    return dd, dt, v


def smoothing_window(dt: np.ndarray, smoothing_seconds: float) -> int:
    """Number of samples spanning roughly smoothing_seconds."""
    if dt.size == 0:
        return 1
    median_dt = float(np.median(dt))
    if median_dt <= 0:
        return 1
    return max(1, int(math.floor(smoothing_seconds / median_dt + 0.5)))


def rolling_mean(values: np.ndarray, window: int) -> np.ndarray:
    """Trailing rolling mean.

    The first window - 1 entries average over however many samples exist
    so far, so the output has the same length as the input.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return values
    window = max(1, int(window))
    cumsum = np.concatenate(([0.0], np.cumsum(values)))
    idx = np.arange(1, values.size + 1)
    start = np.maximum(idx - window, 0)
    return (cumsum[idx] - cumsum[start]) / (idx - start)


def nearest_rank_percentile(values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile: the ceil(p/100 * n)-th smallest value."""
    ordered = np.sort(np.asarray(values, dtype=float))
    n = ordered.size
    if n == 0:
        return 0.0
    rank = max(1, math.ceil(p / 100.0 * n))
    return float(ordered[min(rank, n) - 1])


def count_sprint_bouts(
    speeds: np.ndarray, dt: np.ndarray, threshold: float, min_duration: float
) -> int:
    """Count maximal runs with speed >= threshold lasting >= min_duration.

    Runs are measured by summing the dt of their samples; short runs are
    simply ignored.
    """
    count = 0
    run_time = 0.0
    for speed, step in zip(speeds, dt):
        if speed >= threshold:
            run_time += float(step)
            continue
        if run_time > 0 and run_time >= min_duration - 1e-9:
            count += 1
        run_time = 0.0
    if run_time > 0 and run_time >= min_duration - 1e-9:
        count += 1
    return count


def compute_session_metrics(
    t: Sequence[float],
    x: Sequence[float],
    y: Sequence[float],
    config: AnalyticsConfig = AnalyticsConfig(),
) -> SessionMetrics:
    """Compute SessionMetrics from parallel time/x/y sequences.

    Fewer than two samples, or a trace with no elapsed time, yields zero
    metrics rather than an error.
    """
    t = np.asarray(t, dtype=float)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if t.size < 2:
        return ZERO_METRICS

    duration = float(t[-1] - t[0])
    if duration <= 0:
        return ZERO_METRICS

    dd, dt, v = instantaneous_speeds(t, x, y, config.speed_cap_mps)
    distance = float(dd.sum())

    smooth = rolling_mean(v, smoothing_window(dt, config.smoothing_seconds))
    high_speed_time = float(dt[smooth >= config.high_speed_mps].sum())
    sprints = count_sprint_bouts(smooth, dt, config.sprint_mps, config.min_sprint_s)

    return SessionMetrics(
        distance_m=distance,
        duration_s=duration,
        avg_speed_mps=distance / duration,
        max_speed_mps=float(v.max()),
        p95_speed_mps=nearest_rank_percentile(smooth, config.percentile),
        high_speed_time_s=high_speed_time,
        sprint_count=sprints,
    )


def metrics_from_trace(trace: PositionTrace, config: AnalyticsConfig = AnalyticsConfig()) -> SessionMetrics:
    """Consume a trace and compute its metrics."""
    t, x, y = trace.consume()
    return compute_session_metrics(t, x, y, config)
