# src/agent/body.py
"""
Agent pose: position, facing, and the two motion commands the navigation
controller relies on ("turn to face" and "advance one step").

Rotations are yaw-only (about +Y); everything is computed in the x-z plane.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Protocol

from nav.node import Vec3

logger = logging.getLogger(__name__)

# Off-axis nudge applied to a target direction that is collinear with forward.
COLLINEAR_NUDGE = 0.05
_COLLINEAR_EPS = 1e-9


def _normalize_planar(x: float, z: float) -> Optional[tuple[float, float]]:
    length = math.hypot(x, z)
    if length == 0.0:
        return None
    return x / length, z / length


def yaw_to_face(position: Vec3, forward: Vec3, target: Vec3) -> float:
    """
    Signed yaw (radians, about +Y) that turns `forward` toward `target`.

    Both vectors are projected onto the x-z plane. When the target lies
    straight ahead or straight behind, the target direction is nudged off
    axis before normalizing, so the rotation axis stays defined. Returns NaN
    when either direction is degenerate (target at the agent's position, or
    a vertical forward vector); callers skip the turn in that case.
    """
    f = _normalize_planar(forward.x, forward.z)
    t = _normalize_planar(target.x - position.x, target.z - position.z)
    if f is None or t is None:
        return math.nan

    fx, fz = f
    tx, tz = t

    # Collinear (ahead or behind): cross product would vanish.
    if abs(fz * tx - fx * tz) < _COLLINEAR_EPS:
        nudged = _normalize_planar(tx + COLLINEAR_NUDGE, tz + COLLINEAR_NUDGE)
        if nudged is None:
            return math.nan
        tx, tz = nudged

    cross_y = fz * tx - fx * tz
    dot = max(-1.0, min(1.0, fx * tx + fz * tz))
    return math.atan2(cross_y, dot)


def rotate_yaw(v: Vec3, radians: float) -> Vec3:
    """Rotate a vector about +Y."""
    c, s = math.cos(radians), math.sin(radians)
    return Vec3(v.x * c + v.z * s, v.y, -v.x * s + v.z * c)


class Steering(Protocol):
    """What the navigation controller needs from the agent it drives."""

    def turn_to_face(self, target: Vec3) -> Optional[float]:
        ...


@dataclass
class AgentBody:
    """
    Minimal movable agent.

    forward is kept horizontal and unit length. heading accumulates applied
    yaw for display.
    """

    position: Vec3
    forward: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 1.0))
    step_size: float = 10.0
    heading: float = 0.0

    def turn_to_face(self, target: Vec3) -> Optional[float]:
        """
        Rotate to face `target`.

        Returns the applied yaw, or None when the angle came out NaN and the
        turn was skipped.
        """
        yaw = yaw_to_face(self.position, self.forward, target)
        if math.isnan(yaw):
            logger.debug("turn_to_face(%s) from %s skipped: NaN yaw", target, self.position)
            return None
        self.forward = rotate_yaw(self.forward, yaw)
        self.heading = (self.heading + yaw) % (2 * math.pi)
        return yaw

    def step_towards(self, target: Vec3, elevation: Optional[float] = None) -> float:
        """
        Advance up to step_size toward `target` in the x-z plane.

        `elevation`, when given, becomes the new y (the caller samples the
        terrain). Returns the distance moved.
        """
        dx = target.x - self.position.x
        dz = target.z - self.position.z
        dist = math.hypot(dx, dz)
        if dist == 0.0:
            return 0.0
        move = min(self.step_size, dist)
        y = self.position.y if elevation is None else elevation
        self.position = Vec3(
            self.position.x + dx / dist * move,
            y,
            self.position.z + dz / dist * move,
        )
        return move
