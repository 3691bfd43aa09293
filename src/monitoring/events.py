# path: src/monitoring/events.py
"""
Event schemas for navigation monitoring.

This module defines:
- EventType enum
- MonitoringEvent (structured navigation events)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted by the navigation controller and runtime."""

    # EXPLORING <-> TREASURE_HUNTING transitions
    NAV_MODE_CHANGE = auto()

    # A treasure was detected and tagged
    TREASURE_TAGGED = auto()

    # A* results
    PATH_PLANNED = auto()
    PATH_NOT_FOUND = auto()

    # Route execution
    PATH_ACTIVATED = auto()
    CHECKPOINT_REACHED = auto()
    PATH_COMPLETED = auto()

    # Degenerate orientation math, turn skipped for this tick
    ORIENTATION_SKIPPED = auto()

    # No more destinations
    NAVIGATION_FINISHED = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the navigation controller or the simulation.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("agent.navigation", "runtime.simulation")
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (cells, mode, path sizes)
    correlation_id: Optional[str] = None  # Used for grouping events per run

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
