# src/agent/navigation.py
"""
NavigationController: the agent's route-execution state machine.

Modes:
    EXPLORING         follow the queued exploration legs, one Path at a time
    TREASURE_HUNTING  follow A* routes to treasure detected within range

Each tick:
    1. Detect at most one untagged treasure within detect_radius. Tag it,
       plan a route to it (and back, for the home treasure), suspend the
       exploration path, and switch to TREASURE_HUNTING.
    2. Unless finished, check whether the agent is within snap_distance of
       the checkpoint it walks toward (x-z plane). If so, take the next
       checkpoint from the active path and turn toward it. When the path is
       done, pick the next one:
         - TREASURE_HUNTING: next treasure route, else back to EXPLORING,
           resuming the suspended exploration path if it is not done.
         - EXPLORING: next exploration leg, else finished.

"No path" and degenerate turns are reported (log + monitoring event) and
recovered locally; nothing here raises for them.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from nav.node import NavNode, NodeKind, Vec3
from nav.path import Path, PathType
from nav.pathfinder import Pathfinder
from world.treasure import Treasure

from .body import Steering
from .state import NavigationState, NavMode

logger = logging.getLogger(__name__)

MODULE = "agent.navigation"


class NavigationController:
    """
    Owns the navigation queues and the active path of one agent.

    Parameters:
        pathfinder:
            A* engine used for treasure routes.
        body:
            Agent the controller steers (turn_to_face).
        initial_path:
            First path to follow. If None, the first exploration leg is used.
        exploration_paths:
            Exploration legs, followed in order after the initial path.
        snap_distance:
            Planar distance at which a checkpoint counts as reached.
        detect_radius:
            Distance under which an untagged treasure is detected.
        bus:
            Optional monitoring EventBus.
    """

    def __init__(
        self,
        pathfinder: Pathfinder,
        body: Steering,
        *,
        initial_path: Optional[Path] = None,
        exploration_paths: Iterable[Path] = (),
        snap_distance: float = 10.0,
        detect_radius: float = 4000.0,
        bus: Optional[EventBus] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.pathfinder = pathfinder
        self.body = body
        self.snap_distance = float(snap_distance)
        self.detect_radius = float(detect_radius)
        self._bus = bus
        self._correlation_id = correlation_id

        self.state = NavigationState()
        self.state.exploration_queue.extend(exploration_paths)

        if initial_path is not None:
            if not len(initial_path):
                raise ValueError("initial_path has no checkpoints")
            self._activate(initial_path)
        else:
            self._handle_exploring_done()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def mode(self) -> NavMode:
        return self.state.mode

    @property
    def finished(self) -> bool:
        return self.state.finished

    @property
    def tagged_treasure_count(self) -> int:
        return self.state.tagged_treasures

    @property
    def active_path(self) -> Optional[Path]:
        return self.state.active_path

    @property
    def next_goal(self) -> Optional[NavNode]:
        return self.state.next_goal

    def load_exploration(self, paths: Iterable[Path]) -> None:
        """Append exploration legs to the queue (e.g. once obstacles are known)."""
        self.state.exploration_queue.extend(paths)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, agent_position: Vec3, treasures: Sequence[Treasure]) -> None:
        """Advance the state machine by one simulation step."""
        treasure = self._detect_treasure(agent_position, treasures)
        if treasure is not None:
            self._start_treasure_hunt(agent_position, treasure)

        if not self.state.finished:
            self._move(agent_position)

    # ------------------------------------------------------------------
    # Treasure handling
    # ------------------------------------------------------------------

    def _detect_treasure(
        self, agent_position: Vec3, treasures: Sequence[Treasure]
    ) -> Optional[Treasure]:
        """Open the first untagged treasure within range, if any."""
        for treasure in treasures:
            if treasure.is_open:
                continue
            if agent_position.distance(treasure.position) < self.detect_radius:
                treasure.open()
                self.state.tagged_treasures += 1
                logger.info(
                    "Treasure %s tagged (%d so far)",
                    treasure.name,
                    self.state.tagged_treasures,
                )
                self._emit(
                    EventType.TREASURE_TAGGED,
                    f"Treasure {treasure.name} tagged",
                    {
                        "treasure": treasure.name,
                        "home": treasure.home,
                        "tagged_count": self.state.tagged_treasures,
                    },
                )
                return treasure
        return None

    def _start_treasure_hunt(self, agent_position: Vec3, treasure: Treasure) -> None:
        if not self._plan_treasure_paths(agent_position, treasure):
            # Nothing reachable: keep doing whatever we were doing.
            return

        state = self.state
        if state.mode is NavMode.EXPLORING:
            active = state.active_path
            if active is not None and not active.is_done():
                state.saved_exploration_path = active

        self._set_mode(NavMode.TREASURE_HUNTING)
        state.finished = False
        self._activate(state.treasure_queue.popleft())

    def _plan_treasure_paths(self, agent_position: Vec3, treasure: Treasure) -> int:
        """
        Queue the route to `treasure` (and back, for the home treasure).

        Returns the number of paths queued.
        """
        grid = self.pathfinder.grid
        start = grid.snap(agent_position)
        goal = grid.snap(treasure.position)

        forward = self._plan(start, goal, f"to-{treasure.name}")
        if forward is None:
            return 0
        self.state.treasure_queue.append(forward)
        queued = 1

        if treasure.home:
            backward = self._plan(goal, start, f"from-{treasure.name}")
            if backward is not None:
                self.state.treasure_queue.append(backward)
                queued += 1
        return queued

    def _plan(self, start: Vec3, goal: Vec3, name: str) -> Optional[Path]:
        result = self.pathfinder.search(start, goal, NodeKind.PATH)
        grid = self.pathfinder.grid
        payload = {
            "path": name,
            "start_cell": list(grid.cell_of(start)),
            "goal_cell": list(grid.cell_of(goal)),
            "expansions": result.expansions,
        }
        if not result.success:
            logger.info("No route for %s: %s", name, result.reason)
            payload["reason"] = result.reason
            self._emit(EventType.PATH_NOT_FOUND, f"No route for {name}", payload)
            return None

        payload["nodes"] = len(result.path)
        self._emit(EventType.PATH_PLANNED, f"Route {name} planned", payload)
        return Path(result.path, PathType.SINGLE, name=name)

    # ------------------------------------------------------------------
    # Route execution
    # ------------------------------------------------------------------

    def _move(self, agent_position: Vec3) -> None:
        goal = self.state.next_goal
        path = self.state.active_path
        if goal is None or path is None:
            return

        distance = agent_position.planar_distance(goal.position)
        if distance > self.snap_distance:
            return

        self.state.next_goal = path.next_checkpoint()
        self._emit(
            EventType.CHECKPOINT_REACHED,
            "Checkpoint reached",
            {"path": path.name, "cursor": path.cursor, "distance": distance},
        )

        self._orient()
        if not path.is_done():
            return

        logger.debug("Path traversal of %r is done", path)
        self._emit(EventType.PATH_COMPLETED, f"Path {path.name} completed", {"path": path.name})
        if self.state.mode is NavMode.TREASURE_HUNTING:
            self._handle_treasure_done()
        else:
            self._handle_exploring_done()

    def _handle_treasure_done(self) -> None:
        state = self.state
        if state.treasure_queue:
            self._activate(state.treasure_queue.popleft())
            return

        self._set_mode(NavMode.EXPLORING)
        if state.has_resumable_exploration():
            # Same object, same cursor; next_goal stays on the spot we are
            # standing on, so the next tick advances into the resumed path.
            state.active_path = state.saved_exploration_path
            state.saved_exploration_path = None
            self._emit(
                EventType.PATH_ACTIVATED,
                "Exploration path resumed",
                {"path": state.active_path.name, "resumed": True},
            )
            return

        state.saved_exploration_path = None
        self._handle_exploring_done()

    def _handle_exploring_done(self) -> None:
        state = self.state
        while state.exploration_queue:
            path = state.exploration_queue.popleft()
            if not len(path):
                logger.warning("Skipping exploration path %r: no checkpoints", path)
                continue
            self._activate(path)
            return

        state.finished = True
        logger.info("No more destinations; navigation finished")
        self._emit(
            EventType.NAVIGATION_FINISHED,
            "Navigation finished",
            {"tagged_count": state.tagged_treasures},
        )

    def _activate(self, path: Path) -> None:
        self.state.active_path = path
        self.state.next_goal = path.next_checkpoint()
        self._emit(
            EventType.PATH_ACTIVATED,
            f"Path {path.name} activated",
            {"path": path.name, "nodes": len(path), "resumed": False},
        )
        self._orient()

    def _orient(self) -> None:
        goal = self.state.next_goal
        if goal is None:
            return
        if self.body.turn_to_face(goal.position) is None:
            logger.warning("Turn toward %s skipped: orientation is NaN", goal.position)
            self._emit(
                EventType.ORIENTATION_SKIPPED,
                "Orientation skipped (NaN yaw)",
                {"target": list(goal.position)},
            )

    def _set_mode(self, mode: NavMode) -> None:
        if self.state.mode is mode:
            return
        self.state.mode = mode
        logger.info("Navigation mode -> %s", mode.name)
        self._emit(EventType.NAV_MODE_CHANGE, f"Mode changed to {mode.name}", {"mode": mode.name})

    def _emit(self, event_type: EventType, message: str, payload: dict) -> None:
        log_event(
            bus=self._bus,
            module=MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=self._correlation_id,
        )

    def pending_paths(self) -> List[Path]:
        """Queued treasure routes followed by queued exploration legs."""
        return list(self.state.treasure_queue) + list(self.state.exploration_queue)
