# src/monitoring/__init__.py
"""
Monitoring for the navigation agent: typed events, an in-process bus,
a JSONL trace writer and a rich dashboard.
"""

from __future__ import annotations

from .events import EventType, MonitoringEvent
from .bus import EventBus
from .logger import JsonFileLogger, log_event
from .dashboard import NavDashboard

__all__ = [
    "EventType",
    "MonitoringEvent",
    "EventBus",
    "JsonFileLogger",
    "log_event",
    "NavDashboard",
]
