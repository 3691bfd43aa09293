# tests/test_navigation_controller.py
"""
Tests for agent.navigation.NavigationController.

The controller never moves the agent itself; tests place the agent on the
checkpoints by hand and tick. A fake body records turn requests.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from agent.exploration import waypoint_path
from agent.navigation import NavigationController
from agent.state import NavMode
from monitoring.bus import EventBus
from monitoring.events import EventType, MonitoringEvent
from nav.grid import NavGrid
from nav.node import Cell, NavNode, NodeKind, Vec3
from nav.path import Path, PathType
from nav.pathfinder import Pathfinder
from world.collision import ObstacleField
from world.terrain import HeightMapTerrain
from world.treasure import Treasure


class FakeBody:
    """Records turn_to_face calls; returns a fixed yaw (None = degenerate)."""

    def __init__(self, yaw: Optional[float] = 0.0) -> None:
        self.yaw = yaw
        self.targets: List[Vec3] = []

    def turn_to_face(self, target: Vec3) -> Optional[float]:
        self.targets.append(target)
        return self.yaw


def make_pathfinder(size: int = 20, blocked: Iterable[Cell] = ()) -> Pathfinder:
    terrain = HeightMapTerrain.flat(size, 150)
    obstacles = ObstacleField.from_cells(terrain, blocked, radius=100.0)
    return Pathfinder(NavGrid(terrain, obstacles.is_occupied))


def pos(pf: Pathfinder, cell: Cell) -> Vec3:
    return pf.grid.cell_position(cell)


def cell_of(pf: Pathfinder, node: Optional[NavNode]) -> Cell:
    assert node is not None
    return pf.grid.cell_of(node.position)


def leg(pf: Pathfinder, *cells: Cell) -> Path:
    return waypoint_path(pf.grid, cells, PathType.SINGLE)


def collect(bus: EventBus) -> List[MonitoringEvent]:
    events: List[MonitoringEvent] = []
    bus.subscribe(events.append)
    return events


def types(events: List[MonitoringEvent]) -> List[EventType]:
    return [e.event_type for e in events]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_initial_path_becomes_active_and_agent_turns_toward_it():
    pf = make_pathfinder()
    body = FakeBody()
    initial = leg(pf, (2, 2))

    ctl = NavigationController(pf, body, initial_path=initial)

    assert ctl.active_path is initial
    assert cell_of(pf, ctl.next_goal) == (2, 2)
    assert body.targets == [pos(pf, (2, 2))]
    assert ctl.mode is NavMode.EXPLORING
    assert not ctl.finished


def test_empty_initial_path_is_rejected():
    pf = make_pathfinder()
    with pytest.raises(ValueError):
        NavigationController(pf, FakeBody(), initial_path=Path([]))


def test_without_initial_path_first_exploration_leg_is_used():
    pf = make_pathfinder()
    first = leg(pf, (1, 1), (4, 1))
    second = leg(pf, (4, 1), (4, 4))

    ctl = NavigationController(pf, FakeBody(), exploration_paths=[first, second])

    assert ctl.active_path is first
    assert ctl.pending_paths() == [second]


def test_nothing_to_follow_finishes_immediately():
    pf = make_pathfinder()
    bus = EventBus()
    events = collect(bus)

    ctl = NavigationController(pf, FakeBody(), bus=bus)

    assert ctl.finished
    assert EventType.NAVIGATION_FINISHED in types(events)


def test_empty_exploration_leg_is_skipped():
    pf = make_pathfinder()
    real = leg(pf, (1, 1), (4, 1))

    ctl = NavigationController(pf, FakeBody(), exploration_paths=[Path([]), real])

    assert ctl.active_path is real
    assert cell_of(pf, ctl.next_goal) == (1, 1)
    assert not ctl.finished


def test_only_empty_exploration_legs_finish_instead_of_stalling(caplog):
    pf = make_pathfinder()
    initial = leg(pf, (2, 2))
    ctl = NavigationController(pf, FakeBody(), initial_path=initial)
    ctl.load_exploration([Path([], name="blank")])

    with caplog.at_level("WARNING", logger="agent.navigation"):
        for _ in range(5):
            ctl.tick(pos(pf, (2, 2)), [])

    assert ctl.finished
    assert ctl.pending_paths() == []
    assert "no checkpoints" in caplog.text


# ---------------------------------------------------------------------------
# Route execution
# ---------------------------------------------------------------------------


def test_tick_far_from_checkpoint_does_not_advance():
    pf = make_pathfinder()
    path = leg(pf, (2, 2), (6, 2))
    ctl = NavigationController(pf, FakeBody(), initial_path=path)
    goal = ctl.next_goal

    ctl.tick(pos(pf, (10, 10)), [])

    assert ctl.next_goal is goal
    assert path.cursor == 1


def test_snap_distance_is_planar_and_inclusive():
    pf = make_pathfinder()
    ctl = NavigationController(
        pf, FakeBody(), initial_path=leg(pf, (2, 2), (6, 2), (6, 6)), snap_distance=10.0
    )
    here = pos(pf, (2, 2))

    # 10 units away on x, far above on y: still counts as reached
    ctl.tick(Vec3(here.x + 10.0, here.y + 500.0, here.z), [])

    assert cell_of(pf, ctl.next_goal) == (6, 2)


def test_exploration_legs_are_followed_in_order_until_finished():
    pf = make_pathfinder()
    bus = EventBus()
    events = collect(bus)
    initial = leg(pf, (2, 2))
    first = leg(pf, (2, 2), (5, 2), (5, 5))
    second = leg(pf, (5, 5), (8, 5))

    ctl = NavigationController(
        pf, FakeBody(), initial_path=initial, exploration_paths=[first, second], bus=bus
    )

    ctl.tick(pos(pf, (2, 2)), [])
    assert ctl.active_path is first
    assert cell_of(pf, ctl.next_goal) == (2, 2)

    ctl.tick(pos(pf, (2, 2)), [])
    assert cell_of(pf, ctl.next_goal) == (5, 2)

    # handing out the last checkpoint completes the leg
    ctl.tick(pos(pf, (5, 2)), [])
    assert first.is_done()
    assert ctl.active_path is second
    assert cell_of(pf, ctl.next_goal) == (5, 5)

    ctl.tick(pos(pf, (5, 5)), [])
    assert second.is_done()
    assert ctl.finished
    assert types(events).count(EventType.PATH_COMPLETED) == 3
    assert types(events)[-1] is EventType.NAVIGATION_FINISHED


def test_finished_stays_finished_without_new_treasure():
    pf = make_pathfinder()
    ctl = NavigationController(pf, FakeBody(), initial_path=leg(pf, (2, 2)))
    ctl.tick(pos(pf, (2, 2)), [])
    assert ctl.finished
    goal = ctl.next_goal

    for _ in range(3):
        ctl.tick(pos(pf, (2, 2)), [])

    assert ctl.finished
    assert ctl.next_goal is goal


def test_degenerate_orientation_is_skipped_and_reported(caplog):
    pf = make_pathfinder()
    bus = EventBus()
    events = collect(bus)

    with caplog.at_level("WARNING", logger="agent.navigation"):
        NavigationController(pf, FakeBody(yaw=None), initial_path=leg(pf, (2, 2)), bus=bus)

    assert EventType.ORIENTATION_SKIPPED in types(events)
    assert "skipped" in caplog.text


# ---------------------------------------------------------------------------
# Treasure hunting
# ---------------------------------------------------------------------------


def test_detected_treasure_starts_hunt_and_suspends_exploration():
    pf = make_pathfinder()
    bus = EventBus()
    events = collect(bus)
    sweep = leg(pf, (2, 2), (2, 8), (2, 14))
    ctl = NavigationController(
        pf, FakeBody(), exploration_paths=[sweep], detect_radius=1000.0, bus=bus
    )
    gold = Treasure("gold", pos(pf, (6, 2)))
    here = pos(pf, (2, 2))

    # 40 units off the vertex: same cell, outside the snap distance
    ctl.tick(Vec3(here.x + 40.0, here.y, here.z), [gold])

    assert gold.is_open
    assert ctl.tagged_treasure_count == 1
    assert ctl.mode is NavMode.TREASURE_HUNTING
    assert ctl.active_path is not None and ctl.active_path.name == "to-gold"
    assert ctl.state.saved_exploration_path is sweep
    assert cell_of(pf, ctl.next_goal) == (2, 2)
    assert [n.kind for n in ctl.active_path.nodes] == [NodeKind.PATH] * 5
    kinds = types(events)
    assert kinds.index(EventType.TREASURE_TAGGED) < kinds.index(EventType.PATH_PLANNED)
    assert EventType.NAV_MODE_CHANGE in kinds


def test_exploration_resumes_same_path_after_treasure():
    pf = make_pathfinder()
    bus = EventBus()
    events = collect(bus)
    sweep = leg(pf, (2, 2), (2, 8), (2, 14))
    ctl = NavigationController(
        pf, FakeBody(), exploration_paths=[sweep], detect_radius=1000.0, bus=bus
    )
    gold = Treasure("gold", pos(pf, (6, 2)))
    here = pos(pf, (2, 2))
    ctl.tick(Vec3(here.x + 40.0, here.y, here.z), [gold])

    for cell in [(2, 2), (3, 2), (4, 2), (5, 2)]:
        ctl.tick(pos(pf, cell), [gold])

    assert ctl.mode is NavMode.EXPLORING
    assert ctl.active_path is sweep
    assert sweep.cursor == 1
    assert cell_of(pf, ctl.next_goal) == (6, 2)
    resumed = [e for e in events if e.event_type is EventType.PATH_ACTIVATED and e.payload["resumed"]]
    assert len(resumed) == 1

    ctl.tick(pos(pf, (6, 2)), [gold])

    assert cell_of(pf, ctl.next_goal) == (2, 8)
    assert ctl.tagged_treasure_count == 1


def test_home_treasure_also_plans_the_way_back():
    pf = make_pathfinder()
    ctl = NavigationController(
        pf, FakeBody(), initial_path=leg(pf, (2, 2), (2, 10)), detect_radius=1000.0
    )
    home = Treasure("home", pos(pf, (6, 2)), home=True)

    ctl.tick(Vec3(pos(pf, (2, 2)).x + 40.0, 0.0, pos(pf, (2, 2)).z), [home])

    assert ctl.active_path is not None and ctl.active_path.name == "to-home"
    pending = ctl.pending_paths()
    assert pending[0].name == "from-home"
    back = pending[0].nodes
    assert cell_of(pf, back[0]) == (6, 2)
    assert cell_of(pf, back[-1]) == (2, 2)

    for cell in [(2, 2), (3, 2), (4, 2), (5, 2)]:
        ctl.tick(pos(pf, cell), [home])

    assert ctl.mode is NavMode.TREASURE_HUNTING
    assert ctl.active_path is pending[0]


def test_unreachable_treasure_is_tagged_but_exploration_continues():
    pf = make_pathfinder(blocked=[(6, 2)])
    bus = EventBus()
    events = collect(bus)
    sweep = leg(pf, (2, 2), (2, 8))
    ctl = NavigationController(
        pf, FakeBody(), initial_path=sweep, detect_radius=1000.0, bus=bus
    )
    walled = Treasure("walled", pos(pf, (6, 2)))

    ctl.tick(Vec3(pos(pf, (2, 2)).x + 40.0, 0.0, pos(pf, (2, 2)).z), [walled])

    assert walled.is_open
    assert ctl.tagged_treasure_count == 1
    assert ctl.mode is NavMode.EXPLORING
    assert ctl.active_path is sweep
    not_found = [e for e in events if e.event_type is EventType.PATH_NOT_FOUND]
    assert len(not_found) == 1
    assert not_found[0].payload["reason"] == "no_path_found"


def test_new_treasure_clears_finished():
    pf = make_pathfinder()
    ctl = NavigationController(pf, FakeBody(), detect_radius=1000.0)
    assert ctl.finished

    ctl.tick(pos(pf, (2, 2)), [Treasure("late", pos(pf, (4, 2)))])

    assert not ctl.finished
    assert ctl.mode is NavMode.TREASURE_HUNTING


def test_at_most_one_treasure_tagged_per_tick():
    pf = make_pathfinder()
    ctl = NavigationController(
        pf, FakeBody(), initial_path=leg(pf, (9, 9), (9, 12)), detect_radius=2000.0
    )
    treasures = [Treasure("a", pos(pf, (4, 2))), Treasure("b", pos(pf, (2, 4)))]
    far = pos(pf, (19, 19))

    ctl.tick(pos(pf, (2, 2)), treasures)
    assert ctl.tagged_treasure_count == 1
    assert treasures[0].is_open and not treasures[1].is_open

    ctl.tick(far, treasures)
    assert ctl.tagged_treasure_count == 1

    ctl.tick(pos(pf, (2, 2)), treasures)
    assert ctl.tagged_treasure_count == 2
    assert ctl.active_path is not None and ctl.active_path.name == "to-b"
