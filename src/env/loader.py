# src/env/loader.py
"""
Load navigation configuration from YAML.

Default location is config/navigation.yaml under the project root. Every
section is optional and falls back to the dataclass defaults in env.schema;
malformed structure raises ValueError, a missing file FileNotFoundError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from world.collision import wall_cells

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

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "navigation.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(section)}")
    return section


def _cell(value: Any, where: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{where}: cell must be a [x, z] pair, got {value!r}")
    return int(value[0]), int(value[1])


def _items(data: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    items = data.get(name) or []
    if not isinstance(items, list):
        raise ValueError(f"'{name}' must be a list, got {type(items)}")
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"{name}[{i}] must be a mapping, got {type(item)}")
    return items


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_navigation_config(data: Dict[str, Any]) -> NavigationConfig:
    """Build a NavigationConfig from an already-parsed mapping."""
    grid_cfg = _section(data, "grid")
    agent_cfg = _section(data, "agent")
    pf_cfg = _section(data, "pathfinder")
    exp_cfg = _section(data, "exploration")
    terrain_cfg = _section(data, "terrain")

    grid = GridConfig(
        spacing=int(grid_cfg.get("spacing", GridConfig.spacing)),
        size=int(grid_cfg.get("size", GridConfig.size)),
    )
    if grid.spacing <= 0 or grid.size <= 0:
        raise ValueError(f"grid.spacing and grid.size must be positive, got {grid}")

    defaults = AgentConfig()
    agent = AgentConfig(
        start_cell=_cell(agent_cfg.get("start_cell", defaults.start_cell), "agent.start_cell"),
        snap_distance=float(agent_cfg.get("snap_distance", defaults.snap_distance)),
        detect_radius=float(agent_cfg.get("detect_radius", defaults.detect_radius)),
        step_size=float(agent_cfg.get("step_size", defaults.step_size)),
        radius=float(agent_cfg.get("radius", defaults.radius)),
    )

    max_expansions = pf_cfg.get("max_expansions")
    pathfinder = PathfinderConfig(
        resift_on_improve=bool(pf_cfg.get("resift_on_improve", True)),
        max_expansions=None if max_expansions is None else int(max_expansions),
    )

    exploration = ExplorationConfig(
        margin=int(exp_cfg.get("margin", ExplorationConfig.margin)),
        lane_width=int(exp_cfg.get("lane_width", ExplorationConfig.lane_width)),
    )

    terrain = TerrainConfig(elevation=float(terrain_cfg.get("elevation", 0.0)))

    treasures = [
        TreasureConfig(
            name=str(item.get("name") or f"treasure-{i}"),
            cell=_cell(item.get("cell"), f"treasures[{i}]"),
            home=bool(item.get("home", False)),
        )
        for i, item in enumerate(_items(data, "treasures"))
    ]

    obstacles: List[ObstacleConfig] = []
    for i, item in enumerate(_items(data, "obstacles")):
        where = f"obstacles[{i}]"
        if "radius" not in item:
            raise ValueError(f"{where} must define a 'radius'")
        radius = float(item["radius"])
        if "wall" in item:
            ends = item["wall"]
            if not isinstance(ends, list) or len(ends) != 2:
                raise ValueError(f"{where}: wall must be a [[x, z], [x, z]] pair")
            cells = wall_cells(_cell(ends[0], where), _cell(ends[1], where))
        else:
            cells = [_cell(item.get("cell"), where)]
        obstacles.extend(ObstacleConfig(cell=cell, radius=radius) for cell in cells)

    return NavigationConfig(
        grid=grid,
        agent=agent,
        pathfinder=pathfinder,
        exploration=exploration,
        terrain=terrain,
        treasures=treasures,
        obstacles=obstacles,
    )


def load_navigation_config(path: Optional[Path] = None) -> NavigationConfig:
    """Main entry point: returns a fully resolved NavigationConfig."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data = _load_yaml(config_path)
    if "grid" not in data:
        raise ValueError(f"{config_path} must define a 'grid' mapping.")
    config = parse_navigation_config(data)
    logger.debug(
        "Loaded navigation config from %s (%d treasures, %d obstacles)",
        config_path,
        len(config.treasures),
        len(config.obstacles),
    )
    return config
