# A* pathfinding over NavGrid
# src/nav/pathfinder.py
"""
A* pathfinding over NavGrid.

- 8-directional neighbors on the x-z plane.
- Step cost: spacing for axis-aligned moves, spacing * sqrt(2) for diagonals.
- Manhattan distance heuristic on cells, scaled by spacing. This is not
  admissible for diagonal moves; paths are near-optimal, not guaranteed optimal.
- Closed cells are never reopened, even if a cheaper route shows up later.
- Goal test is grid-cell equality, never float equality.
- The start node sits on the vertex of the start cell, so every step in a
  returned path is exactly one axis or diagonal grid move.

"No path" is a normal outcome: an empty path, never an exception.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from .grid import NavGrid
from .heap import PriorityQueue
from .node import Cell, NavNode, NodeKind, Vec3

logger = logging.getLogger(__name__)

NO_PATH_FOUND = "no_path_found"
MAX_EXPANSIONS_EXHAUSTED = "max_expansions_exhausted"


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: List[NavNode]
    success: bool
    reason: str | None = None
    expansions: int = 0


def step_cost(a: Cell, b: Cell, spacing: int) -> float:
    """
    Movement cost between two adjacent cells.

    A Manhattan distance of 2 between neighbors means a diagonal step.
    """
    if abs(a[0] - b[0]) + abs(a[1] - b[1]) == 2:
        return spacing * math.sqrt(2)
    return float(spacing)


def heuristic(a: Cell, goal: Cell, spacing: int) -> float:
    """Manhattan distance between cells, scaled to world units."""
    return float(spacing * (abs(a[0] - goal[0]) + abs(a[1] - goal[1])))


class Pathfinder:
    """
    A* engine bound to one NavGrid.

    Parameters:
        resift_on_improve:
            When an open node gets a cheaper g, move it to its new heap
            position (decrease-key). False leaves the heap entry where it
            was, so the entry may surface later than its new cost says.
        max_expansions:
            Optional budget on popped nodes; None means search until the
            open set is empty.
    """

    def __init__(
        self,
        grid: NavGrid,
        *,
        resift_on_improve: bool = True,
        max_expansions: Optional[int] = None,
    ) -> None:
        self.grid = grid
        self.resift_on_improve = resift_on_improve
        self.max_expansions = max_expansions

    @property
    def spacing(self) -> int:
        return self.grid.spacing

    def find_path(
        self,
        start: Vec3,
        goal: Vec3,
        tag: NodeKind = NodeKind.PATH,
    ) -> List[NavNode]:
        """Ordered start -> goal nodes, or an empty list if unreachable."""
        return self.search(start, goal, tag).path

    def search(
        self,
        start: Vec3,
        goal: Vec3,
        tag: NodeKind = NodeKind.PATH,
    ) -> PathfindingResult:
        """
        A* search from start to goal.

        Returns a PathfindingResult with:
          - path: start..goal nodes re-tagged with `tag`, or empty
          - success: bool
          - reason: if not success, why
          - expansions: number of nodes popped from the open set
        """
        spacing = self.spacing
        start_cell = self.grid.cell_of(start)
        goal_cell = self.grid.cell_of(goal)

        root = NavNode(self.grid.cell_position(start_cell), NodeKind.A_STAR)
        root.set_costs(0.0, 0.0)

        open_set: PriorityQueue[NavNode] = PriorityQueue(
            key=lambda n: n.cell(spacing)
        )
        closed: Dict[Cell, NavNode] = {}
        open_set.insert(root)

        expansions = 0
        while not open_set.is_empty():
            if self.max_expansions is not None and expansions >= self.max_expansions:
                logger.debug(
                    "A* budget of %d expansions exhausted (%s -> %s)",
                    self.max_expansions,
                    start_cell,
                    goal_cell,
                )
                return PathfindingResult(
                    path=[],
                    success=False,
                    reason=MAX_EXPANSIONS_EXHAUSTED,
                    expansions=expansions,
                )

            current = open_set.extract_min()
            expansions += 1
            current_cell = current.cell(spacing)
            closed[current_cell] = current

            if current_cell == goal_cell:
                path = _reconstruct_path(current, tag)
                logger.debug(
                    "A* found %d-node path %s -> %s after %d expansions",
                    len(path),
                    start_cell,
                    goal_cell,
                    expansions,
                )
                return PathfindingResult(path=path, success=True, expansions=expansions)

            for n in self.grid.neighbors_8dir(current_cell):
                n_cell = n.cell(spacing)
                if n_cell in closed:
                    continue

                candidate_g = current.cost_from_start + step_cost(
                    current_cell, n_cell, spacing
                )
                existing = open_set.find(n_cell)

                if existing is None:
                    n.parent = current
                    n.set_costs(candidate_g, heuristic(n_cell, goal_cell, spacing))
                    open_set.insert(n)
                elif candidate_g < existing.cost_from_start:
                    # Better route to an open node, via current.
                    existing.parent = current
                    existing.set_costs(candidate_g, existing.cost_to_goal)
                    if self.resift_on_improve:
                        open_set.reprioritize(existing)

        logger.debug(
            "A* exhausted open set without reaching %s from %s (%d expansions)",
            goal_cell,
            start_cell,
            expansions,
        )
        return PathfindingResult(
            path=[], success=False, reason=NO_PATH_FOUND, expansions=expansions
        )


def _reconstruct_path(current: NavNode, tag: NodeKind) -> List[NavNode]:
    """Walk parent links back to the root, then reverse to start -> goal."""
    path: List[NavNode] = []
    node: Optional[NavNode] = current
    while node is not None:
        node.kind = tag
        path.append(node)
        node = node.parent
    path.reverse()
    return path
