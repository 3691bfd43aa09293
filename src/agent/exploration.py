# src/agent/exploration.py
"""
Exploration route planning.

The agent sweeps the map in lanes (boustrophedon / lawnmower pattern):

        lo                                hi
    m    .................................. s
         |                                  |
    m+w  x1 <------------------------------ x0
         |
    m+2w x2 ------------------------------> x3
                                            |
    ...                                    ...

Lanes are `lane_width` cells apart so the detection radius covers the band
between them. Each pair of consecutive waypoints becomes one A* leg.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from nav.grid import NavGrid
from nav.node import Cell, NavNode, NodeKind
from nav.path import Path, PathType
from nav.pathfinder import Pathfinder

logger = logging.getLogger(__name__)


def sweep_waypoints(size: int, margin: int, lane_width: int) -> List[Cell]:
    """
    Waypoint cells of the sweep, in visiting order.

    Starts at (size - margin, margin) and alternates between the x = margin
    and x = size - margin edges, one lane further in z each time, until the
    next lane would leave the map.
    """
    if lane_width <= 0:
        raise ValueError(f"lane_width must be positive, got {lane_width}")
    lo, hi = margin, size - margin
    if not 0 <= lo < hi <= size:
        raise ValueError(f"margin {margin} leaves no room on a {size}-cell map")

    lanes = list(range(margin, size, lane_width))
    x = hi
    waypoints: List[Cell] = [(x, lanes[0])]
    for z in lanes[1:]:
        waypoints.append((x, z))
        x = lo if x == hi else hi
        waypoints.append((x, z))
    return waypoints


def plan_sweep_legs(
    pathfinder: Pathfinder,
    waypoints: Sequence[Cell],
    tag: NodeKind = NodeKind.WAYPOINT,
) -> List[Path]:
    """
    One SINGLE Path per consecutive waypoint pair.

    Legs A* cannot connect are logged and left out; the sweep continues
    with the next pair.
    """
    grid = pathfinder.grid
    legs: List[Path] = []
    for i, (a, b) in enumerate(zip(waypoints, waypoints[1:])):
        nodes = pathfinder.find_path(grid.cell_position(a), grid.cell_position(b), tag)
        if not nodes:
            logger.warning("Sweep leg %d %s -> %s has no path, skipping", i, a, b)
            continue
        legs.append(Path(nodes, PathType.SINGLE, name=f"sweep-{i}"))
    logger.info("Planned %d of %d sweep legs", len(legs), max(len(waypoints) - 1, 0))
    return legs


def initial_path(grid: NavGrid, cell: Cell) -> Path:
    """
    One-node path to the first sweep waypoint.

    The agent follows it while the rest of the world (obstacles) is still
    being loaded, before the sweep legs can be planned.
    """
    node = NavNode(grid.cell_position(cell), NodeKind.VERTEX)
    return Path([node], PathType.SINGLE, name="initial")


def waypoint_path(grid: NavGrid, cells: Iterable[Cell], mode: PathType) -> Path:
    """Straight waypoint route through the given cells, no A* involved."""
    nodes = [NavNode(grid.cell_position(c), NodeKind.WAYPOINT) for c in cells]
    return Path(nodes, mode)
