"""
Title: Fuel Consumption Scheduler
Author: Control Panel Engineering Team
Date Created: 2026-10-14
Last Modified: 2026-10-17
Version: 1.1

Purpose:
Drains the eight fuel reservoirs in their fixed order while the engines are
online, exhausting each reservoir before moving to the next. Reservoir levels
never go negative, and consumption stops silently once every reservoir is
empty. Band crossings (low, critical) are logged per reservoir, and a
heartbeat is signalled every N ticks while the engines run.

Targeted Requirements:
- Fuel is drawn from the first non-empty reservoir in order and never goes
  negative.
- No fuel is consumed while the engines are offline.

Scope and Limitations:
- Tick-driven; the periodic task that calls `tick` owns the 1 s cadence.
- Consumption rate is constant; thrust settings do not affect it.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- panel_configuration.py, game_state.py, event_log.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

from dataclasses import replace

from event_log import band_changed, format_numeric_message
from game_state import GameState, SystemSnapshot
from panel_configuration import FUEL_TANKS, PanelConfiguration


def consume_fuel(systems: SystemSnapshot, amount: float) -> tuple[SystemSnapshot, float]:
    remaining = max(0.0, float(amount))
    changes: dict[str, float] = {}

    for tank in FUEL_TANKS:
        if remaining <= 0:
            break
        level = getattr(systems, tank)
        if level <= 0:
            continue
        taken = min(remaining, level)
        changes[tank] = max(0.0, level - taken)
        remaining -= taken

    consumed = max(0.0, float(amount)) - remaining
    if not changes:
        return systems, 0.0
    return replace(systems, **changes), consumed


class FuelScheduler:
    def __init__(self, config: PanelConfiguration):
        self._config = config
        self.ticks = 0

    def tick(self, state: GameState) -> bool:
        # Returns True when the heartbeat is due on this tick.
        if not state.systems.engines:
            return False

        before = state.systems
        after, _ = consume_fuel(before, self._config.fuel_per_tick)
        state.systems = after

        for tank in FUEL_TANKS:
            old, new = getattr(before, tank), getattr(after, tank)
            if old != new and band_changed(tank, old, new):
                level, message = format_numeric_message(tank, new)
                state.logs.emit(level, message, "Fuel Management")

        self.ticks += 1
        every = self._config.heartbeat_every_ticks
        return every > 0 and self.ticks % every == 0
