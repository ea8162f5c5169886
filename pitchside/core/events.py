"""Event system for drill state changes.

Drills emit events as things happen (kicks, reps, gates, technique
errors); the session records them and the report and logs read them back.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class EventType(str, Enum):
    """Types of events that can occur during a drill."""

    # Lifecycle
    SESSION_START = "session_start"
    SESSION_PAUSED = "session_paused"
    SESSION_RESUMED = "session_resumed"
    SESSION_STOP = "session_stop"

    # Chase
    KICK = "kick"
    BALL_BOUNCE = "ball_bounce"
    BALL_STOPPED = "ball_stopped"

    # Shuttle
    REP_COMPLETED = "rep_completed"

    # Slalom
    GATE_CLEARED = "gate_cleared"
    TECHNIQUE_ERROR = "technique_error"
    DRILL_FINISHED = "drill_finished"


@dataclass
class Event:
    """An event that occurred during a drill.

    Attributes:
        type: The type of event
        tick: Tick on which it occurred
        time: Simulation seconds when it occurred
        player_id: Participant involved (if any)
        data: Additional event-specific data
        description: Human-readable description
    """
    type: EventType
    tick: int
    time: float
    player_id: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def __str__(self) -> str:
        parts = [f"[{self.time:.2f}s]", self.type.value]
        if self.player_id:
            parts.append(f"by {self.player_id}")
        if self.description:
            parts.append(f"- {self.description}")
        return " ".join(parts)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "tick": self.tick,
            "time": round(self.time, 3),
            "player_id": self.player_id,
            "data": self.data,
            "description": self.description,
        }


EventHandler = Callable[[Event], None]


class EventBus:
    """Pub/sub bus for drill events, with a recorded history.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.KICK, on_kick)
        bus.emit_simple(EventType.KICK, tick=3, time=0.15, player_id="p1")
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[EventHandler]] = defaultdict(list)
        self._global_handlers: list[EventHandler] = []
        self._history: list[Event] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to a specific event type."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        self._global_handlers.append(handler)

    def emit(self, event: Event) -> None:
        """Record an event and notify subscribers."""
        self._history.append(event)
        for handler in self._handlers[event.type]:
            handler(event)
        for handler in self._global_handlers:
            handler(event)

    def emit_simple(
        self,
        event_type: EventType,
        tick: int,
        time: float,
        player_id: Optional[str] = None,
        description: str = "",
        **data: Any,
    ) -> Event:
        """Convenience method to emit an event with less boilerplate."""
        event = Event(
            type=event_type,
            tick=tick,
            time=time,
            player_id=player_id,
            description=description,
            data=data,
        )
        self.emit(event)
        return event

    @property
    def history(self) -> list[Event]:
        return self._history

    def get_events_by_type(self, event_type: EventType) -> list[Event]:
        """Get all events of a specific type from history."""
        return [e for e in self._history if e.type == event_type]

    def __len__(self) -> int:
        return len(self._history)

    def __bool__(self) -> bool:
        """EventBus is always truthy (even with empty history)."""
        return True
