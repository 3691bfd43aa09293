# NavigationConfig and section dataclasses
# src/env/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class GridConfig:
    """Grid geometry shared by terrain and pathfinder."""
    spacing: int = 150   # world units between cell vertices
    size: int = 512      # cells per side


@dataclass
class AgentConfig:
    """Agent placement and route-following thresholds."""
    start_cell: Tuple[int, int] = (480, 26)
    snap_distance: float = 10.0     # planar distance that counts as "reached"
    detect_radius: float = 4000.0   # treasure detection range
    step_size: float = 10.0         # distance moved per tick
    radius: float = 0.0             # bounding sphere used for collisions


@dataclass
class PathfinderConfig:
    resift_on_improve: bool = True
    max_expansions: Optional[int] = None  # None = unbounded


@dataclass
class ExplorationConfig:
    """Sweep pattern parameters, in cells."""
    margin: int = 26
    lane_width: int = 52


@dataclass
class TerrainConfig:
    elevation: float = 0.0


@dataclass
class TreasureConfig:
    name: str
    cell: Tuple[int, int]
    home: bool = False


@dataclass
class ObstacleConfig:
    cell: Tuple[int, int]
    radius: float


@dataclass
class NavigationConfig:
    """Fully resolved navigation configuration."""
    grid: GridConfig = field(default_factory=GridConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    pathfinder: PathfinderConfig = field(default_factory=PathfinderConfig)
    exploration: ExplorationConfig = field(default_factory=ExplorationConfig)
    terrain: TerrainConfig = field(default_factory=TerrainConfig)
    treasures: List[TreasureConfig] = field(default_factory=list)
    obstacles: List[ObstacleConfig] = field(default_factory=list)
