# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Ensure src/ is on sys.path for test imports like `import nav`, `import agent`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from monitoring.bus import EventBus  # noqa: E402
from monitoring.events import MonitoringEvent  # noqa: E402


@pytest.fixture
def recorded_bus() -> Tuple[EventBus, List[MonitoringEvent]]:
    """An EventBus plus the list every published event lands in."""
    bus = EventBus()
    events: List[MonitoringEvent] = []
    bus.subscribe(events.append)
    return bus, events
