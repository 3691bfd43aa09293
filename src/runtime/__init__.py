# path: src/runtime/__init__.py

"""
Runtime wiring for the navigation stack.

Holds the tick-driven Simulation and the guarded tick helper it uses.

Usage:
    python tools/nav_demo.py --ticks 20000
"""

from __future__ import annotations

from .error_handling import safe_tick_with_logging
from .simulation import Simulation, SimulationReport

__all__ = ["Simulation", "SimulationReport", "safe_tick_with_logging"]
