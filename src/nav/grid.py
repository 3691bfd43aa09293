# navigation grid abstraction over the terrain height map
# src/nav/grid.py
"""
NavGrid: 8-connected navigation grid over a terrain oracle.

This module does not know what the obstacles are. It only:
- Quantizes world positions to cells.
- Exposes walkability queries.
- Uses a pluggable is_occupied callback to decide collisions.

Terrain heights come from the terrain oracle; obstacle geometry belongs to
world.collision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol

from .node import Cell, NavNode, NodeKind, Vec3, quantize

# Signature for an occupancy callback:
#   is_occupied(world_position) -> bool
OccupancyFn = Callable[[Vec3], bool]

# Neighbor offsets in expansion order. The order is part of the observable
# behavior: equal-cost candidates are inserted into the open set in this order.
NEIGHBOR_OFFSETS = (
    (-1, 0),   # left
    (1, 0),    # right
    (0, -1),   # up
    (0, 1),    # down
    (-1, -1),  # upper left
    (1, -1),   # upper right
    (-1, 1),   # lower left
    (1, 1),    # lower right
)


class TerrainOracle(Protocol):
    """Read-only height map the grid is derived from."""

    spacing: int

    def in_range(self, cx: int, cz: int) -> bool:
        ...

    def surface_elevation(self, cx: int, cz: int) -> float:
        """Elevation at a cell; a sentinel value outside the map."""
        ...


@dataclass
class NavGrid:
    """
    Navigation grid built on top of a terrain oracle.

    Responsibilities:
    - Map world positions <-> cells (truncating quantization).
    - Provide walkability tests (is_walkable).
    - Provide the 8-directional neighbor set for pathfinding.
    """

    terrain: TerrainOracle
    is_occupied: OccupancyFn

    @property
    def spacing(self) -> int:
        return self.terrain.spacing

    # ------------------------------------------------------------------
    # Coordinate helpers
    # ------------------------------------------------------------------

    def cell_of(self, position: Vec3) -> Cell:
        return quantize(position, self.spacing)

    def cell_position(self, cell: Cell) -> Vec3:
        """World position of a cell's vertex, on the terrain surface."""
        cx, cz = cell
        return Vec3(
            float(cx * self.spacing),
            float(self.terrain.surface_elevation(cx, cz)),
            float(cz * self.spacing),
        )

    def snap(self, position: Vec3) -> Vec3:
        """Snap a world position onto its cell vertex."""
        return self.cell_position(self.cell_of(position))

    # ------------------------------------------------------------------
    # Core queries
    # ------------------------------------------------------------------

    def in_range(self, cell: Cell) -> bool:
        return self.terrain.in_range(cell[0], cell[1])

    def is_walkable(self, cell: Cell) -> bool:
        """
        A cell is walkable when it is on the map and the agent, standing on
        the terrain surface at the cell vertex, does not collide.
        """
        if not self.in_range(cell):
            return False
        return not self.is_occupied(self.cell_position(cell))

    def neighbors_8dir(self, cell: Cell) -> List[NavNode]:
        """
        Fresh A_STAR nodes for the walkable cardinal and diagonal neighbors.

        Unwalkable cells are silently left out.
        """
        cx, cz = cell
        neighbors: List[NavNode] = []
        for dx, dz in NEIGHBOR_OFFSETS:
            candidate = (cx + dx, cz + dz)
            if self.is_walkable(candidate):
                neighbors.append(
                    NavNode(self.cell_position(candidate), NodeKind.A_STAR)
                )
        return neighbors
