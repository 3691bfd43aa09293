# src/env/__init__.py
"""
Navigation configuration: YAML loader and the dataclasses it fills.
"""

from __future__ import annotations

from .loader import DEFAULT_CONFIG_PATH, load_navigation_config, parse_navigation_config
from .schema import (
    AgentConfig,
    ExplorationConfig,
    GridConfig,
    NavigationConfig,
    ObstacleConfig,
    PathfinderConfig,
    TerrainConfig,
    TreasureConfig,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "load_navigation_config",
    "parse_navigation_config",
    "AgentConfig",
    "ExplorationConfig",
    "GridConfig",
    "NavigationConfig",
    "ObstacleConfig",
    "PathfinderConfig",
    "TerrainConfig",
    "TreasureConfig",
]
