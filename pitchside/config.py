"""
Pitchside configuration.

Tunables for the analytics engine, the rating protocol, each drill and the
HTTP server. Server settings can be overridden via environment variables;
everything else is plain defaults that callers override per session.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


# =============================================================================
# Analytics / rating
# =============================================================================

@dataclass(frozen=True)
class AnalyticsConfig:
    """Thresholds for deriving metrics from a position trace."""

    smoothing_seconds: float = 1.0  # Rolling-mean window length
    speed_cap_mps: float = 12.0  # Tracking glitches above this are clamped
    high_speed_mps: float = 4.7
    sprint_mps: float = 5.5
    min_sprint_s: float = 1.0
    percentile: float = 95.0

    def validate(self) -> list[str]:
        errors = []
        if self.smoothing_seconds <= 0:
            errors.append("smoothing_seconds must be positive")
        if self.speed_cap_mps <= 0:
            errors.append("speed_cap_mps must be positive")
        if not 0 < self.percentile <= 100:
            errors.append("percentile must be in (0, 100]")
        return errors


@dataclass(frozen=True)
class RatingConfig:
    """Rules for turning session speeds into a speed rating."""

    max_realistic_speed_mps: float = 9.0  # Maps to a rating of 100
    window: int = 6  # Sessions kept for the rolling average
    bootstrap_sessions: int = 2  # Histories this short (incl. the new one) bootstrap

    def validate(self) -> list[str]:
        errors = []
        if self.max_realistic_speed_mps <= 0:
            errors.append("max_realistic_speed_mps must be positive")
        if self.window < 1:
            errors.append("window must be at least 1")
        if self.bootstrap_sessions < 0:
            errors.append("bootstrap_sessions must not be negative")
        return errors


# =============================================================================
# Drills
# =============================================================================

@dataclass(frozen=True)
class BallConfig:
    radius_m: float = 0.11
    restitution: float = 0.7  # Fraction of speed kept after a wall bounce
    friction_per_second: float = 0.6  # Velocity multiplier per simulated second
    stop_speed_mps: float = 0.2  # Slower than this snaps to rest
    wall_epsilon_m: float = 0.02


@dataclass(frozen=True)
class ChaseConfig:
    contact_radius_m: float = 1.5  # Participant center to ball center
    kick_speed_mps: float = 10.0
    kick_jitter_rad: float = math.pi / 4
    teammate_bias: float = 0.3  # Blend of kick direction toward the other participant
    collision_iterations: int = 8
    ball_bias: float = 0.7  # Share of a ball/participant overlap taken by the ball
    repulsion_buffer_m: float = 0.3
    repulsion_strength: float = 0.8


@dataclass(frozen=True)
class ShuttleConfig:
    left_fraction: float = 0.2  # End cones as a fraction of pitch length
    right_fraction: float = 0.8
    turn_threshold_m: float = 0.6
    lane_offset_m: float = 6.0


@dataclass(frozen=True)
class SlalomConfig:
    gate_count: int = 8
    first_gate_fraction: float = 0.15
    last_gate_fraction: float = 0.85
    gate_offset_m: float = 6.0  # Lateral weave either side of the lane
    reach_radius_m: float = 1.0
    lead_in_m: float = 5.0  # Start this far before the first gate
    lane_offset_m: float = 6.0
    error_turn_angle_deg: float = 90.0
    error_speed_mps: float = 4.5


@dataclass(frozen=True)
class DrillConfig:
    """Per-session configuration handed to start_session."""

    max_step_s: float = 0.1  # Largest dt one tick may integrate
    seed: Optional[int] = None
    fatigue: bool = True
    player_radius_m: float = 0.5
    collision_margin_m: float = 0.04
    ball: BallConfig = field(default_factory=BallConfig)
    chase: ChaseConfig = field(default_factory=ChaseConfig)
    shuttle: ShuttleConfig = field(default_factory=ShuttleConfig)
    slalom: SlalomConfig = field(default_factory=SlalomConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if self.max_step_s <= 0:
            errors.append("max_step_s must be positive")
        if not 0 <= self.ball.restitution <= 1:
            errors.append("ball.restitution must be in [0, 1]")
        if not 0 < self.ball.friction_per_second <= 1:
            errors.append("ball.friction_per_second must be in (0, 1]")
        if self.slalom.gate_count < 1:
            errors.append("slalom.gate_count must be at least 1")
        errors.extend(self.analytics.validate())
        errors.extend(self.rating.validate())
        return errors


# =============================================================================
# Server
# =============================================================================

@dataclass
class ServerConfig:
    """Settings for the HTTP/WebSocket API."""

    host: str = field(default_factory=lambda: os.getenv("PITCHSIDE_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("PITCHSIDE_PORT", 8000))
    tick_rate_ms: int = field(default_factory=lambda: _env_int("PITCHSIDE_TICK_RATE_MS", 50))
    max_session_seconds: float = field(
        default_factory=lambda: _env_float("PITCHSIDE_MAX_SESSION_SECONDS", 600.0)
    )
    log_level: str = field(default_factory=lambda: os.getenv("PITCHSIDE_LOG_LEVEL", "INFO"))

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        errors = []
        if not 0 < self.port < 65536:
            errors.append("PITCHSIDE_PORT must be a valid port")
        if self.tick_rate_ms < 10:
            errors.append("PITCHSIDE_TICK_RATE_MS must be at least 10")
        if self.max_session_seconds <= 0:
            errors.append("PITCHSIDE_MAX_SESSION_SECONDS must be positive")
        return errors


# Singleton config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global server configuration."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Override the global server configuration (used by tests)."""
    global _config
    _config = config
