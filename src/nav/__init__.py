# src/nav/__init__.py
"""
Navigation subsystem.

Provides:
- Vec3, NavNode, NodeKind: positions and search/path nodes
- PriorityQueue: binary min-heap used as the A* open set
- NavGrid: 8-connected walkability queries over a terrain oracle
- Pathfinder: A* search producing start -> goal node sequences
- Path, PathType: checkpoint traversal (SINGLE / REVERSE / LOOP)
"""

from __future__ import annotations

from .node import Cell, NavNode, NodeKind, Vec3, quantize
from .heap import PriorityQueue
from .grid import NavGrid, OccupancyFn, TerrainOracle
from .pathfinder import Pathfinder, PathfindingResult, heuristic, step_cost
from .path import Path, PathType

__all__ = [
    "Cell",
    "NavNode",
    "NodeKind",
    "Vec3",
    "quantize",
    "PriorityQueue",
    "NavGrid",
    "OccupancyFn",
    "TerrainOracle",
    "Pathfinder",
    "PathfindingResult",
    "heuristic",
    "step_cost",
    "Path",
    "PathType",
]
