#"src/agent/state.py"

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Optional

from nav.node import NavNode
from nav.path import Path


class NavMode(Enum):
    """
    Navigation modes of the agent.

        EXPLORING         following the exploration sweep legs
        TREASURE_HUNTING  following on-demand A* routes to detected treasure
    """

    EXPLORING = auto()
    TREASURE_HUNTING = auto()


@dataclass
class NavigationState:
    """
    Mutable state owned by one NavigationController.

    Fields
    ------
    mode:
        Current NavMode.

    active_path:
        Path currently being followed, if any.

    next_goal:
        Checkpoint the agent is walking toward. It was already read from
        active_path (the path cursor is past it).

    exploration_queue / treasure_queue:
        FIFO queues of Paths waiting to become active.

    saved_exploration_path:
        Exploration path suspended by a treasure excursion, resumed when
        the treasure queue runs dry if it is not done yet.

    finished:
        True once exploration is exhausted and no treasure hunt is active.

    tagged_treasures:
        Number of treasures detected and opened so far.
    """

    mode: NavMode = NavMode.EXPLORING
    active_path: Optional[Path] = None
    next_goal: Optional[NavNode] = None

    exploration_queue: Deque[Path] = field(default_factory=deque)
    treasure_queue: Deque[Path] = field(default_factory=deque)
    saved_exploration_path: Optional[Path] = None

    finished: bool = False
    tagged_treasures: int = 0

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    def has_resumable_exploration(self) -> bool:
        """True if a suspended exploration path still has checkpoints left."""
        saved = self.saved_exploration_path
        return saved is not None and not saved.is_done()
