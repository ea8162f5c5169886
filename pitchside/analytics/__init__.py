"""Kinematic analytics: traces in, session metrics out."""

from .kinematics import (
    ZERO_METRICS,
    SessionMetrics,
    compute_session_metrics,
    count_sprint_bouts,
    instantaneous_speeds,
    metrics_from_trace,
    nearest_rank_percentile,
    rolling_mean,
    smoothing_window,
)
from .trace import PositionTrace

__all__ = [
    "PositionTrace",
    "SessionMetrics",
    "ZERO_METRICS",
    "compute_session_metrics",
    "count_sprint_bouts",
    "instantaneous_speeds",
    "metrics_from_trace",
    "nearest_rank_percentile",
    "rolling_mean",
    "smoothing_window",
]
