# path: src/runtime/error_handling.py

"""
Error handling helpers for the navigation runtime.

Wraps controller ticks in a guard that reports TICK_EXCEPTION events on the
monitoring bus before letting the exception propagate.

This does NOT change the semantics of NavigationController; it wraps calls
from the simulation loop.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from agent.navigation import NavigationController
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from nav.node import Vec3
from world.treasure import Treasure

logger = logging.getLogger(__name__)


def safe_tick_with_logging(
    controller: NavigationController,
    agent_position: Vec3,
    treasures: Sequence[Treasure],
    bus: Optional[EventBus],
    tick: Optional[int] = None,
    run_id: Optional[str] = None,
) -> None:
    """
    Call controller.tick() inside a try/except block.

    If the tick throws, we:
    - Emit a LOG event with subtype "TICK_EXCEPTION".
    - Re-raise the exception so the runtime can decide whether to abort
      or continue.
    """
    try:
        controller.tick(agent_position, treasures)
    except Exception as exc:
        logger.error("Navigation tick %s raised %r", tick, exc)
        log_event(
            bus=bus,
            module="runtime.safe_tick",
            event_type=EventType.LOG,
            message="Navigation tick raised an exception",
            payload={
                "subtype": "TICK_EXCEPTION",
                "tick": tick,
                "position": list(agent_position),
                "mode": controller.mode.name,
                "exception_repr": repr(exc),
            },
            correlation_id=run_id,
        )
        raise
