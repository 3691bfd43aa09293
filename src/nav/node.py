# src/nav/node.py
"""
NavNode: a point in the search graph / a checkpoint on a produced path.

Planning happens on the x-z plane. `y` is the terrain elevation at the node
and is carried along for movement and display only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple, Optional, Tuple

# (cx, cz) integer grid coordinates
Cell = Tuple[int, int]


class Vec3(NamedTuple):
    """World-space position. y is elevation."""

    x: float
    y: float
    z: float

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def planar_distance(self, other: "Vec3") -> float:
        """Distance measured in the flat x-z plane."""
        return math.hypot(self.x - other.x, self.z - other.z)

    def distance(self, other: "Vec3") -> float:
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )


def quantize(position: Vec3, spacing: int) -> Cell:
    """
    Map a world position to its grid cell.

    Truncates toward zero (int()), it does not round: x = 299 with
    spacing 150 is cell 1, x = -10 is cell 0.
    """
    return int(position.x / spacing), int(position.z / spacing)


class NodeKind(Enum):
    """
    Classification tag for visualizers. Drives none of the search decisions.

    VERTEX    terrain vertex
    WAYPOINT  node to follow in a path
    A_STAR    node in an A* open or closed set
    PATH      node in a found path (result of A*)
    WALL      obstacle marker
    """

    VERTEX = auto()
    WAYPOINT = auto()
    A_STAR = auto()
    PATH = auto()
    WALL = auto()


@dataclass(eq=False)
class NavNode:
    """
    Search node / path checkpoint.

    Costs:
        cost_from_start  g, movement cost from the origin along the known path
        cost_to_goal     h, heuristic estimate to the goal
        total_cost       f = g + h, the only priority key

    `parent` links form a tree of back-pointers for one search. Equality is
    identity; use `same_cell` for grid-cell comparisons.
    """

    position: Vec3
    kind: NodeKind = NodeKind.VERTEX
    cost_from_start: float = 0.0
    cost_to_goal: float = 0.0
    total_cost: float = 0.0
    parent: Optional["NavNode"] = None

    def set_costs(self, cost_from_start: float, cost_to_goal: float) -> None:
        """Update g and h, keeping f = g + h."""
        self.cost_from_start = cost_from_start
        self.cost_to_goal = cost_to_goal
        self.total_cost = cost_from_start + cost_to_goal

    def cell(self, spacing: int) -> Cell:
        return quantize(self.position, spacing)

    def same_cell(self, other: "NavNode", spacing: int) -> bool:
        """True if both nodes quantize to the same x-z cell."""
        return self.cell(spacing) == other.cell(spacing)

    def __lt__(self, other: "NavNode") -> bool:
        return self.total_cost < other.total_cost

    def __le__(self, other: "NavNode") -> bool:
        return self.total_cost <= other.total_cost

    def __repr__(self) -> str:
        return (
            f"NavNode(({self.position.x:.0f}, {self.position.y:.0f}, "
            f"{self.position.z:.0f}), {self.kind.name}, f={self.total_cost:.2f})"
        )
