# src/world/treasure.py

from __future__ import annotations

from dataclasses import dataclass

from nav.node import Vec3


@dataclass
class Treasure:
    """
    A treasure the agent can detect and tag.

    `home` marks the distinguished treasure after which the agent also
    plans a route back to where it came from.
    """

    name: str
    position: Vec3
    home: bool = False
    is_open: bool = False

    def open(self) -> bool:
        """Tag the treasure. Returns False if it was already open."""
        if self.is_open:
            return False
        self.is_open = True
        return True
