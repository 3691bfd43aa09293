# src/agent/__init__.py
"""
Agent-side navigation: pose and steering, exploration planning, and the
EXPLORING / TREASURE_HUNTING controller.
"""

from __future__ import annotations

from .body import AgentBody, Steering, rotate_yaw, yaw_to_face
from .state import NavigationState, NavMode
from .exploration import initial_path, plan_sweep_legs, sweep_waypoints, waypoint_path
from .navigation import NavigationController

__all__ = [
    "AgentBody",
    "Steering",
    "rotate_yaw",
    "yaw_to_face",
    "NavigationState",
    "NavMode",
    "initial_path",
    "plan_sweep_legs",
    "sweep_waypoints",
    "waypoint_path",
    "NavigationController",
]
