"""
Title: Engine Ignition State Machine and Reactor Thermal Step
Author: Control Panel Engineering Team
Date Created: 2026-10-14
Last Modified: 2026-10-18
Version: 1.3

Purpose:
Implements the engine ignition sequence OFFLINE -> STARTING -> ONLINE | FAILED.
A start command is accepted only from READY (engine master, both engine power
supplies and both ready toggles on). STARTING lasts the configured ignition
duration measured from the stored start timestamp; on expiry a single uniform
draw against the starter damage decides between ONLINE and FAILED. FAILED is
reported and collapses to OFFLINE, clearing both ready toggles.

Also implements the once-per-second reactor temperature step toward the
target of the current ignition state, and the mission clock that runs while
the ship is online.

Targeted Requirements:
- Ignition starts only from READY, lasts 5000 ms and resolves with a single
  starter-damage draw.
- The reactor temperature approaches the target for the current ignition state
  at the configured rate.

Scope and Limitations:
- The starter damage is read, never modified.
- No thermal model beyond a rate-limited step toward a fixed target.
- Time is passed in as a parameter; the caller owns the clock.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- random (standard library)
- panel_configuration.py, game_state.py, ship_states.py, event_log.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

import logging
import math
import random
from dataclasses import replace

from control_catalog import ENGINE_READY_CONTROLS
from event_log import band_changed, format_numeric_message
from game_state import GameState, SystemSnapshot, clamp_field
from panel_configuration import PanelConfiguration
from ship_states import IgnitionState, LogLevel

logger = logging.getLogger(__name__)

SOURCE = "Engine Ignition"


def ignition_state(systems: SystemSnapshot) -> IgnitionState:
    if systems.engines:
        return IgnitionState.ONLINE
    if systems.engine_starting:
        return IgnitionState.STARTING
    if systems.engine_ready:
        return IgnitionState.READY
    return IgnitionState.OFFLINE


class EngineIgnition:
    def __init__(self, config: PanelConfiguration, rng: random.Random | None = None):
        self._config = config
        self._rng = rng if rng is not None else random.Random()

    def start(self, state: GameState, now: float) -> tuple[bool, str]:
        current = ignition_state(state.systems)

        if current == IgnitionState.STARTING:
            reason = "Ignition rejected: sequence already in progress"
        elif current == IgnitionState.ONLINE:
            reason = "Ignition rejected: engines already online"
        elif current != IgnitionState.READY:
            reason = "Ignition rejected: engine power supply not primed"
        else:
            reason = ""

        if reason:
            state.logs.emit(LogLevel.WARNING, reason, SOURCE)
            return False, reason

        state.systems = replace(
            state.systems,
            engine_starting=True,
            engine_startup_start_time=float(now),
            engine_startup_progress=0.0,
        )
        state.logs.emit(
            LogLevel.INFO,
            f"ENGINE IGNITION SEQUENCE INITIATED - Starter engaged, "
            f"{self._config.ignition_duration_ms} ms to ignition",
            SOURCE,
        )
        return True, "Ignition sequence started"

    def poll(self, state: GameState, now: float) -> IgnitionState | None:
        """
        Advance a running ignition sequence to time `now`.

        Returns None when no sequence is running, STARTING while the window is
        still open, and ONLINE or FAILED on the poll that completes it.
        """
        systems = state.systems
        if not systems.engine_starting:
            return None

        duration_ms = self._config.ignition_duration_ms
        # Rounded so accumulated float steps land on the boundary.
        elapsed_ms = round((float(now) - systems.engine_startup_start_time) * 1000.0, 6)

        if elapsed_ms < duration_ms:
            progress = clamp_field("engine_startup_progress", 100.0 * max(0.0, elapsed_ms) / duration_ms)
            state.systems = replace(systems, engine_startup_progress=progress)
            return IgnitionState.STARTING

        draw = self._rng.random()
        threshold = systems.starter_damage / 100.0
        logger.debug("Ignition draw %.6f against failure threshold %.6f", draw, threshold)

        if draw < threshold:
            state.systems = replace(systems, engine_starting=False, engine_startup_progress=0.0)
            for control_id in ENGINE_READY_CONTROLS:
                state.controls.set_flag(control_id, False)
            state.logs.emit(
                LogLevel.CRITICAL,
                f"ENGINE IGNITION FAILED - Starter damage {systems.starter_damage:.0f}%, "
                f"engine priming lost",
                SOURCE,
                data={"draw": draw, "starter_damage": systems.starter_damage},
            )
            return IgnitionState.FAILED

        state.systems = replace(systems, engine_starting=False, engines=True, engine_startup_progress=100.0)
        state.logs.emit(
            LogLevel.SYSTEM,
            "ENGINES ONLINE - Ignition sequence complete, main drive available",
            SOURCE,
            data={"draw": draw, "starter_damage": systems.starter_damage},
        )
        return IgnitionState.ONLINE

    def stop(self, state: GameState) -> tuple[bool, str]:
        current = ignition_state(state.systems)

        if current == IgnitionState.ONLINE:
            state.systems = replace(state.systems, engines=False, engine_startup_progress=0.0)
            state.logs.emit(LogLevel.WARNING, "ENGINES SHUTDOWN - Manual shutdown command executed", SOURCE)
            return True, "Engines stopped"

        if current == IgnitionState.STARTING:
            state.systems = replace(state.systems, engine_starting=False, engine_startup_progress=0.0)
            state.logs.emit(LogLevel.WARNING, "ENGINE IGNITION ABORTED - Starter disengaged by operator", SOURCE)
            return True, "Ignition aborted"

        reason = "Shutdown rejected: engines not running"
        state.logs.emit(LogLevel.WARNING, reason, SOURCE)
        return False, reason


def reactor_step(state: GameState, config: PanelConfiguration, dt: float) -> float:
    # Returns the new reactor temperature.
    systems = state.systems
    target, rate = config.temperature_target(systems.power, ignition_state(systems))

    current = systems.reactor_temperature
    diff = target - current
    step = min(rate * max(0.0, dt), abs(diff))
    new_temp = clamp_field("reactor_temperature", current + math.copysign(step, diff))

    changes = {"reactor_temperature": new_temp}
    if state.spaceship_online:
        changes["mission_time"] = clamp_field("mission_time", systems.mission_time + max(0.0, dt))
    state.systems = replace(systems, **changes)

    if band_changed("reactor_temperature", current, new_temp):
        level, message = format_numeric_message("reactor_temperature", new_temp)
        state.logs.emit(level, message, "Reactor Core")
    return new_temp
