"""
Title: Emergency Reset Trigger
Author: Control Panel Engineering Team
Date Created: 2026-10-14
Last Modified: 2026-10-16
Version: 1.0

Purpose:
Detects the EMERGENCY + ABORT footer combination and builds the replacement
state: the initial snapshot carrying a single critical log entry, with both
triggering controls off. Replacement is total; nothing from the previous
state survives.

Targeted Requirements:
- Engaging both emergency guards returns the panel to its initial state and
  clears the saved snapshot.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- control_catalog.py, game_state.py, ship_states.py
"""

import time
from typing import Callable

from control_catalog import ABORT_CONTROL, EMERGENCY_CONTROL
from control_store import ControlStore
from game_state import GameState
from ship_states import LogLevel

RESET_MESSAGE = "EMERGENCY SYSTEM RESET EXECUTED - All systems returned to initial state, mission data cleared"
RESET_SOURCE = "Emergency Systems"


def is_triggered(controls: ControlStore) -> bool:
    return controls.is_on(EMERGENCY_CONTROL) and controls.is_on(ABORT_CONTROL)


def reset_state(
    log_capacity: int = 100,
    wall_clock: Callable[[], float] = time.time,
    starter_damage: float = 50.0,
) -> GameState:
    state = GameState.initial(log_capacity=log_capacity, wall_clock=wall_clock, starter_damage=starter_damage)
    state.controls.set_flag(EMERGENCY_CONTROL, False)
    state.controls.set_flag(ABORT_CONTROL, False)
    state.logs.emit(LogLevel.CRITICAL, RESET_MESSAGE, RESET_SOURCE)
    return state
