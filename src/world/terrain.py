# src/world/terrain.py
"""
Height-map terrain oracle.

Generating height maps is someone else's job; this only stores one and
answers elevation queries per grid cell. Queries outside the map return
OUT_OF_RANGE_ELEVATION instead of failing; callers that care use in_range().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from nav.node import Vec3

# Elevation reported for cells outside the map.
OUT_OF_RANGE_ELEVATION = 0.0


@dataclass
class HeightMapTerrain:
    """
    Square height map indexed as heights[cx][cz].

    Parameters:
        heights:
            size x size elevations.
        spacing:
            World distance between neighboring cell vertices.
    """

    heights: List[List[float]]
    spacing: int = 150

    def __post_init__(self) -> None:
        size = len(self.heights)
        for column in self.heights:
            if len(column) != size:
                raise ValueError(
                    f"Height map must be square, got a {size}-wide map "
                    f"with a column of {len(column)}"
                )
        if self.spacing <= 0:
            raise ValueError(f"spacing must be positive, got {self.spacing}")

    @classmethod
    def flat(cls, size: int, spacing: int = 150, elevation: float = 0.0) -> "HeightMapTerrain":
        """Level terrain, handy for tests and simple worlds."""
        return cls([[elevation] * size for _ in range(size)], spacing)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]], spacing: int = 150) -> "HeightMapTerrain":
        return cls([list(map(float, row)) for row in rows], spacing)

    @property
    def size(self) -> int:
        return len(self.heights)

    @property
    def extent(self) -> float:
        """World length of one side of the map."""
        return float(self.size * self.spacing)

    def in_range(self, cx: int, cz: int) -> bool:
        return 0 <= cx < self.size and 0 <= cz < self.size

    def surface_elevation(self, cx: int, cz: int) -> float:
        if not self.in_range(cx, cz):
            return OUT_OF_RANGE_ELEVATION
        return float(self.heights[cx][cz])

    def vertex(self, cell: Tuple[int, int]) -> Vec3:
        """World position of a cell vertex, on the surface."""
        cx, cz = cell
        return Vec3(
            float(cx * self.spacing),
            self.surface_elevation(cx, cz),
            float(cz * self.spacing),
        )

    def surface_at(self, x: float, z: float) -> float:
        """Elevation of the cell containing world position (x, z)."""
        return self.surface_elevation(int(x / self.spacing), int(z / self.spacing))
