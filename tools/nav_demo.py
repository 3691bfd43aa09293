#!/usr/bin/env python3
"""
tools/nav_demo.py

Run the navigation simulation headless and print a summary.

Default mode:
    - Loads config/navigation.yaml (or --config)
    - Sweeps the map, detours to every treasure it detects
    - Optionally writes all monitoring events as JSONL (--events-log)
    - Prints the rich dashboard and the run report
"""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import List, Optional

# ---------------------------------------------------------------------------
# Ensure src/ is on sys.path when running as a script
# ---------------------------------------------------------------------------

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# ---------------------------------------------------------------------------
# Imports from the project
# ---------------------------------------------------------------------------

from agent.logging_config import configure_logging, parse_level  # type: ignore[import]
from env.loader import DEFAULT_CONFIG_PATH, load_navigation_config  # type: ignore[import]
from monitoring.bus import EventBus  # type: ignore[import]
from monitoring.dashboard import NavDashboard  # type: ignore[import]
from monitoring.logger import JsonFileLogger  # type: ignore[import]
from runtime.simulation import Simulation  # type: ignore[import]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Headless treasure-hunting navigation demo",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Navigation YAML config.",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=20000,
        help="Maximum number of simulation ticks.",
    )
    parser.add_argument(
        "--events-log",
        type=Path,
        default=None,
        help="Write monitoring events to this JSONL file.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    args = parser.parse_args(argv)

    configure_logging(parse_level(args.log_level))

    config = load_navigation_config(args.config)
    bus = EventBus()
    dashboard = NavDashboard(bus)
    trace = JsonFileLogger(args.events_log, bus) if args.events_log else None

    try:
        sim = Simulation.from_config(config, bus=bus, run_id=uuid.uuid4().hex[:8])
        report = sim.run(args.ticks)
    finally:
        if trace is not None:
            trace.close()

    dashboard.print()
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
