# src/nav/path.py
"""
Path: an ordered collection of NavNodes that the agent traverses.

Traversal modes:
    SINGLE   traverse the nodes once, then report done
    REVERSE  ping-pong: at the end, walk the nodes back the other way
    LOOP     at the end, start again from the first node

REVERSE keeps the stored nodes untouched and flips a direction flag instead
of reversing the list in place. The checkpoint sequence is the same.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from .node import NavNode


class PathType(Enum):
    SINGLE = auto()
    REVERSE = auto()
    LOOP = auto()


class Path:
    """
    Route with a cursor over its checkpoints.

    `cursor` indexes the next unread node in the current traversal
    orientation and stays within [0, len - 1].
    """

    def __init__(
        self,
        nodes: Iterable[NavNode],
        mode: PathType = PathType.SINGLE,
        name: str | None = None,
    ) -> None:
        self._nodes: Tuple[NavNode, ...] = tuple(nodes)
        self.mode = mode
        self.name = name
        self._cursor = 0
        self._forward = True
        # Nothing to traverse on an empty path.
        self._done = not self._nodes

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> Tuple[NavNode, ...]:
        """Nodes in construction order."""
        return self._nodes

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def done(self) -> bool:
        return self._done

    def is_done(self) -> bool:
        return self._done

    def __len__(self) -> int:
        return len(self._nodes)

    def ordered_nodes(self) -> List[NavNode]:
        """Nodes in the current traversal orientation."""
        return list(self._nodes) if self._forward else list(reversed(self._nodes))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def next_checkpoint(self) -> Optional[NavNode]:
        """
        Return the next checkpoint and advance the cursor.

        At the last node:
            SINGLE   return it and mark the path done
            REVERSE  flip direction, return the new first node (the same
                     endpoint) and continue from the one after it
            LOOP     return it and rewind to the first node
        """
        if not self._nodes:
            return None

        last = len(self._nodes) - 1
        if self._cursor < last:
            node = self._at(self._cursor)
            self._cursor += 1
            return node

        if self.mode is PathType.SINGLE:
            self._done = True
            return self._at(self._cursor)

        if self.mode is PathType.REVERSE:
            self._forward = not self._forward
            node = self._at(0)
            self._cursor = min(1, last)
            return node

        # LOOP
        node = self._at(self._cursor)
        self._cursor = 0
        return node

    def current_checkpoint(self) -> Optional[NavNode]:
        """
        Peek at what next_checkpoint() would return, without side effects.

        At the end of a REVERSE path this is the shared endpoint the
        reversal starts from, which is the node under the cursor anyway.
        """
        if not self._nodes:
            return None
        return self._at(self._cursor)

    def _at(self, idx: int) -> NavNode:
        if self._forward:
            return self._nodes[idx]
        return self._nodes[len(self._nodes) - 1 - idx]

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return (
            f"Path({label}{len(self._nodes)} nodes, {self.mode.name}, "
            f"cursor={self._cursor}, done={self._done})"
        )
