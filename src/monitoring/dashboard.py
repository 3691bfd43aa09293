# rich-based navigation summary
#src/monitoring/dashboard.py
"""
Navigation dashboard.

A small `rich` view that subscribes to the monitoring EventBus and renders:

- Agent status:
    - Navigation mode
    - Finished flag
    - Treasures tagged

- Route activity:
    - Paths planned / not found
    - Paths activated / completed
    - Checkpoints reached

- Diagnostics:
    - Orientation skips
    - Last event message

Runs entirely in-process. `render()` builds a renderable; callers decide
whether to print it once or feed it to rich.live.Live.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .bus import EventBus
from .events import EventType, MonitoringEvent

# Counter name per event type, for the route activity table
_COUNTED = {
    EventType.PATH_PLANNED: "paths_planned",
    EventType.PATH_NOT_FOUND: "paths_not_found",
    EventType.PATH_ACTIVATED: "paths_activated",
    EventType.PATH_COMPLETED: "paths_completed",
    EventType.CHECKPOINT_REACHED: "checkpoints_reached",
    EventType.ORIENTATION_SKIPPED: "orientation_skips",
}


class NavDashboard:
    """
    Terminal summary bound to a monitoring.EventBus.

    It consumes MonitoringEvents and keeps a small in-memory state
    representation, rendered on demand via rich.
    """

    def __init__(self, bus: EventBus, console: Optional[Console] = None) -> None:
        self._bus = bus
        self._console = console or Console()

        self._state: Dict[str, Any] = {
            "mode": "UNKNOWN",
            "finished": False,
            "tagged": [],
            "last_message": "",
            "counters": {name: 0 for name in _COUNTED.values()},
        }

        self._bus.subscribe(self._on_event)

    @property
    def state(self) -> Dict[str, Any]:
        return self._state

    # --------------------------------------------------------
    # Event handler
    # --------------------------------------------------------

    def _on_event(self, event: MonitoringEvent) -> None:
        """Update dashboard state. Must stay cheap and non-blocking."""
        et = event.event_type
        self._state["last_message"] = event.message

        counter = _COUNTED.get(et)
        if counter is not None:
            self._state["counters"][counter] += 1

        if et == EventType.NAV_MODE_CHANGE:
            self._state["mode"] = event.payload.get("mode", "UNKNOWN")
            self._state["finished"] = False

        elif et == EventType.TREASURE_TAGGED:
            tagged: List[str] = self._state["tagged"]
            tagged.append(str(event.payload.get("treasure", "?")))

        elif et == EventType.NAVIGATION_FINISHED:
            self._state["finished"] = True

    # --------------------------------------------------------
    # Rendering helpers
    # --------------------------------------------------------

    def _render_agent_panel(self) -> Panel:
        txt = Text()
        txt.append("Mode: ", style="bold")
        txt.append(f"{self._state['mode']}\n")
        txt.append("Finished: ", style="bold")
        txt.append(f"{'yes' if self._state['finished'] else 'no'}\n")
        txt.append("Tagged: ", style="bold")
        tagged = self._state["tagged"]
        txt.append(f"{len(tagged)} ({', '.join(tagged) if tagged else '<none>'})")
        return Panel(txt, title="Agent Status", border_style="cyan")

    def _render_route_panel(self) -> Panel:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Counter", style="bold")
        table.add_column("Value", justify="right")
        for name, value in self._state["counters"].items():
            table.add_row(name.replace("_", " "), str(value))
        return Panel(table, title="Route Activity", border_style="green")

    def _render_last_event(self) -> Panel:
        message = self._state["last_message"] or "<no events yet>"
        return Panel(Text(message), title="Last Event", border_style="yellow")

    def render(self) -> Group:
        return Group(
            self._render_agent_panel(),
            self._render_route_panel(),
            self._render_last_event(),
        )

    def print(self) -> None:
        self._console.print(self.render())

    def close(self) -> None:
        self._bus.unsubscribe(self._on_event)
