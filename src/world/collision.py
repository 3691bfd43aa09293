# src/world/collision.py
"""
Obstacle collision helpers.

This is the occupancy predicate the navigation grid consumes. Obstacles are
bounding spheres; the agent is a sphere of `agent_radius` centered on the
position being tested.

This module does NOT:
    - Render or build bounding volumes from meshes
    - Decide which objects are collidable (callers hand in the spheres)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from nav.node import Vec3
from .terrain import HeightMapTerrain


@dataclass(frozen=True)
class BoundingSphere:
    center: Vec3
    radius: float


@dataclass
class ObstacleField:
    """
    Collection of static obstacle spheres.

    The main entrypoint is `is_occupied(position)`, usable directly as a
    NavGrid OccupancyFn.
    """

    obstacles: List[BoundingSphere] = field(default_factory=list)
    agent_radius: float = 0.0

    def add(self, center: Vec3, radius: float) -> None:
        self.obstacles.append(BoundingSphere(center, float(radius)))

    def is_occupied(self, position: Vec3) -> bool:
        """
        True if an agent standing at `position` would overlap an obstacle.

        Touching spheres do not count as a collision.
        """
        for sphere in self.obstacles:
            if position.distance(sphere.center) < sphere.radius + self.agent_radius:
                return True
        return False

    def __len__(self) -> int:
        return len(self.obstacles)

    @classmethod
    def from_cells(
        cls,
        terrain: HeightMapTerrain,
        cells: Iterable[Tuple[int, int]],
        radius: float,
        *,
        agent_radius: float = 0.0,
    ) -> "ObstacleField":
        """
        One sphere per cell, centered on the cell vertex at surface height.
        """
        field_ = cls(agent_radius=agent_radius)
        for cell in cells:
            field_.add(terrain.vertex(cell), radius)
        return field_


def wall_cells(start: Tuple[int, int], end: Tuple[int, int]) -> List[Tuple[int, int]]:
    """Cells of an axis-aligned wall segment, both ends inclusive."""
    (x0, z0), (x1, z1) = start, end
    if x0 != x1 and z0 != z1:
        raise ValueError(f"Wall from {start} to {end} is not axis-aligned")
    xs: Sequence[int] = range(min(x0, x1), max(x0, x1) + 1)
    zs: Sequence[int] = range(min(z0, z1), max(z0, z1) + 1)
    return [(x, z) for x in xs for z in zs]
