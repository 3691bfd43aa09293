# path: src/runtime/simulation.py

"""
Tick-driven simulation of one navigating agent.

Wires the world (terrain, obstacles, treasures), the A* stack and the
NavigationController from a NavigationConfig, then repeatedly:

    1. ticks the controller with the agent's current position
    2. moves the agent one step toward the controller's next goal,
       following the terrain surface

There is no rendering and no physics beyond that single step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from agent.body import AgentBody
from agent.exploration import initial_path, plan_sweep_legs, sweep_waypoints
from agent.navigation import NavigationController
from agent.state import NavMode
from env.schema import NavigationConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from nav.grid import NavGrid
from nav.node import Vec3
from nav.pathfinder import Pathfinder
from world.collision import ObstacleField
from world.terrain import HeightMapTerrain
from world.treasure import Treasure

from .error_handling import safe_tick_with_logging

logger = logging.getLogger(__name__)

MODULE = "runtime.simulation"


@dataclass
class SimulationReport:
    """Outcome of Simulation.run()."""

    ticks: int
    finished: bool
    mode: NavMode
    tagged: int
    final_position: Vec3

    def to_dict(self) -> dict:
        return {
            "ticks": self.ticks,
            "finished": self.finished,
            "mode": self.mode.name,
            "tagged": self.tagged,
            "final_position": list(self.final_position),
        }


class Simulation:
    """
    One agent in one world.

    Build it with from_config() for the usual wiring, or hand in the parts
    directly (tests do this with tiny worlds).
    """

    def __init__(
        self,
        terrain: HeightMapTerrain,
        body: AgentBody,
        controller: NavigationController,
        treasures: List[Treasure],
        bus: Optional[EventBus] = None,
        run_id: Optional[str] = None,
    ) -> None:
        self.terrain = terrain
        self.body = body
        self.controller = controller
        self.treasures = treasures
        self._bus = bus
        self._run_id = run_id
        self.ticks = 0

    @classmethod
    def from_config(
        cls,
        config: NavigationConfig,
        bus: Optional[EventBus] = None,
        run_id: Optional[str] = None,
    ) -> "Simulation":
        grid_cfg = config.grid
        terrain = HeightMapTerrain.flat(
            grid_cfg.size, grid_cfg.spacing, config.terrain.elevation
        )

        obstacles = ObstacleField(agent_radius=config.agent.radius)
        for ob in config.obstacles:
            obstacles.add(terrain.vertex(ob.cell), ob.radius)

        grid = NavGrid(terrain, obstacles.is_occupied)
        pathfinder = Pathfinder(
            grid,
            resift_on_improve=config.pathfinder.resift_on_improve,
            max_expansions=config.pathfinder.max_expansions,
        )

        treasures = [
            Treasure(t.name, terrain.vertex(t.cell), home=t.home)
            for t in config.treasures
        ]

        body = AgentBody(
            position=terrain.vertex(config.agent.start_cell),
            step_size=config.agent.step_size,
        )

        waypoints = sweep_waypoints(
            grid_cfg.size, config.exploration.margin, config.exploration.lane_width
        )
        controller = NavigationController(
            pathfinder,
            body,
            initial_path=initial_path(grid, waypoints[0]),
            snap_distance=config.agent.snap_distance,
            detect_radius=config.agent.detect_radius,
            bus=bus,
            correlation_id=run_id,
        )
        controller.load_exploration(plan_sweep_legs(pathfinder, waypoints))

        logger.info(
            "Simulation ready: %dx%d grid, %d obstacles, %d treasures, %d sweep waypoints",
            grid_cfg.size,
            grid_cfg.size,
            len(obstacles),
            len(treasures),
            len(waypoints),
        )
        return cls(terrain, body, controller, treasures, bus=bus, run_id=run_id)

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    @property
    def finished(self) -> bool:
        return self.controller.finished

    def step(self) -> None:
        """One tick: let the controller decide, then move the body."""
        safe_tick_with_logging(
            self.controller,
            self.body.position,
            self.treasures,
            self._bus,
            tick=self.ticks,
            run_id=self._run_id,
        )
        self.ticks += 1

        goal = self.controller.next_goal
        if self.controller.finished or goal is None:
            return
        target = goal.position
        self.body.step_towards(target, self.terrain.surface_at(target.x, target.z))

    def run(self, max_ticks: int) -> SimulationReport:
        """Step until navigation finishes or `max_ticks` ticks have run."""
        while not self.finished and self.ticks < max_ticks:
            self.step()

        report = SimulationReport(
            ticks=self.ticks,
            finished=self.finished,
            mode=self.controller.mode,
            tagged=self.controller.tagged_treasure_count,
            final_position=self.body.position,
        )
        if not report.finished:
            logger.warning("Simulation stopped after %d ticks without finishing", self.ticks)
        log_event(
            bus=self._bus,
            module=MODULE,
            event_type=EventType.LOG,
            message="Simulation run ended",
            payload={"subtype": "RUN_SUMMARY", **report.to_dict()},
            correlation_id=self._run_id,
        )
        return report

