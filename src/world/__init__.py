# src/world/__init__.py
"""
World collaborators consumed by the navigation subsystem.

- HeightMapTerrain: terrain oracle (surface elevation per cell)
- ObstacleField: occupancy predicate over obstacle bounding spheres
- Treasure: detectable, taggable targets
"""

from __future__ import annotations

from .terrain import HeightMapTerrain, OUT_OF_RANGE_ELEVATION
from .collision import BoundingSphere, ObstacleField, wall_cells
from .treasure import Treasure

__all__ = [
    "HeightMapTerrain",
    "OUT_OF_RANGE_ELEVATION",
    "BoundingSphere",
    "ObstacleField",
    "wall_cells",
    "Treasure",
]
