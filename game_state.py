"""
Title: Game State Container
Author: Control Panel Engineering Team
Date Created: 2026-10-13
Last Modified: 2026-10-19
Version: 1.4

Purpose:
Defines the explicit state container for the control panel core: the control
store, the subsystem snapshot, the derived ship status flags, the startup
sequence flags, the active console, the event log, the navigation command
interface and the persistence metadata. Provides the initial snapshot factory
and a JSON-friendly dict form used by the state store, including the
"merge onto the initial snapshot" rule for loading.

Targeted Requirements:
- A persisted snapshot is merged onto the initial state; unknown keys are
  ignored and missing keys keep their initial values.

Scope and Limitations:
- A single snapshot is persisted; there is no schema versioning.
- A snapshot with both emergency reset guards engaged loads with both
  guards released, so a load never leaves a pending reset behind.
- An ignition sequence in progress is not resumed after a load because the
  monotonic start time of a previous run has no meaning in this one.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- control_store.py, event_log.py, ship_states.py, control_catalog.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

import time
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable

from control_catalog import (
    ABORT_CONTROL,
    CONSOLE_SELECTORS,
    DEFAULT_CONSOLE,
    DEFAULT_SELECTOR,
    EMERGENCY_CONTROL,
    SELECTOR_TO_CONSOLE,
    default_controls,
    is_dial,
)
from control_store import ControlStore
from event_log import DEFAULT_CAPACITY, EventLog, LogEntry
from panel_configuration import FUEL_TANKS
from ship_states import ShipStatus

NAVIGATION_HISTORY_CAPACITY = 8

BOOLEAN_SYSTEMS: tuple[str, ...] = (
    "power",
    "power_systems",
    "life_support",
    "engines",
    "engine_ready",
    "engine_starting",
    "navigation",
    "shields",
    "weapons",
    "communications",
    "sensors",
    "defensive_array",
    "propulsion",
    "cargo_systems",
    "maintenance",
    "emergency_protocols",
    "core_systems",
)

# Declared bounds for numeric fields; None = unbounded above.
NUMERIC_BOUNDS: dict[str, tuple[float, float | None]] = {
    "hull_integrity": (0.0, 100.0),
    "battery_power": (0.0, 100.0),
    "reactor_temperature": (0.0, 2500.0),
    **{tank: (0.0, 100.0) for tank in FUEL_TANKS},
    "mission_time": (0.0, None),
    "heading": (0.0, 360.0),
    "speed": (0.0, None),
    "engine_startup_progress": (0.0, 100.0),
    "starter_damage": (0.0, 100.0),
}


def clamp_field(name: str, value: float) -> float:
    lo, hi = NUMERIC_BOUNDS[name]
    value = max(lo, float(value))
    if hi is not None:
        value = min(hi, value)
    return value


@dataclass(frozen=True)
class SystemSnapshot:
    power: bool = False
    power_systems: bool = False
    life_support: bool = False
    engines: bool = False
    engine_ready: bool = False
    engine_starting: bool = False
    navigation: bool = False
    shields: bool = False
    weapons: bool = False
    communications: bool = False
    sensors: bool = False
    defensive_array: bool = False
    propulsion: bool = False
    cargo_systems: bool = False
    maintenance: bool = False
    emergency_protocols: bool = False
    core_systems: bool = False

    hull_integrity: float = 98.7
    battery_power: float = 98.7
    reactor_temperature: float = 150.0
    main_fuel: float = 100.0
    reserve_fuel: float = 100.0
    boost_fuel: float = 100.0
    emergency_fuel: float = 100.0
    coolant_fuel: float = 100.0
    auxiliary_fuel: float = 100.0
    maneuver_fuel: float = 100.0
    scram_fuel: float = 100.0
    mission_time: float = 0.0
    heading: float = 0.0
    speed: float = 0.0
    engine_startup_progress: float = 0.0
    engine_startup_start_time: float = 0.0
    starter_damage: float = 50.0

    def fuel_levels(self) -> dict[str, float]:
        return {tank: getattr(self, tank) for tank in FUEL_TANKS}

    def total_fuel(self) -> float:
        return sum(self.fuel_levels().values())

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def merged(cls, base: "SystemSnapshot", raw: dict[str, Any]) -> "SystemSnapshot":
        changes: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in raw:
                continue
            value = raw[f.name]
            if f.name in BOOLEAN_SYSTEMS:
                if not isinstance(value, bool):
                    raise TypeError(f"system field {f.name!r} expects a boolean, got {value!r}")
                changes[f.name] = value
            elif f.name in NUMERIC_BOUNDS:
                changes[f.name] = clamp_field(f.name, _number(f.name, value))
            else:
                changes[f.name] = _number(f.name, value)
        snapshot = replace(base, **changes)
        if snapshot.engine_starting:
            snapshot = replace(snapshot, engine_starting=False, engine_startup_progress=0.0)
        return snapshot


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"field {name!r} expects a number, got {value!r}")
    return float(value)


@dataclass
class GameState:
    controls: ControlStore = field(default_factory=ControlStore)
    systems: SystemSnapshot = field(default_factory=SystemSnapshot)
    critical_controls_met: bool = False
    spaceship_online: bool = False
    spaceship_standby: bool = False
    power_gain_panel_complete: bool = False
    footer_critical_complete: bool = False
    current_console: str = DEFAULT_CONSOLE
    logs: EventLog = field(default_factory=EventLog)
    navigation_command_activated: bool = False
    navigation_command_history: list[str] = field(default_factory=list)
    battery_balanced: bool = False
    last_saved: float | None = None

    @classmethod
    def initial(
        cls,
        log_capacity: int = DEFAULT_CAPACITY,
        wall_clock: Callable[[], float] = time.time,
        starter_damage: float = 50.0,
    ) -> "GameState":
        return cls(
            systems=SystemSnapshot(starter_damage=clamp_field("starter_damage", starter_damage)),
            logs=EventLog(capacity=log_capacity, wall_clock=wall_clock),
        )

    @property
    def ship_status(self) -> ShipStatus:
        if self.spaceship_online:
            return ShipStatus.ONLINE
        if self.spaceship_standby:
            return ShipStatus.STANDBY
        return ShipStatus.OFFLINE

    def record_navigation_command(self, text: str, capacity: int = NAVIGATION_HISTORY_CAPACITY) -> None:
        self.navigation_command_history.append(f"> {text}")
        del self.navigation_command_history[:-capacity]

    def to_dict(self) -> dict[str, Any]:
        return {
            "controls": self.controls.snapshot(),
            "systems": self.systems.to_dict(),
            "critical_controls_met": self.critical_controls_met,
            "spaceship_online": self.spaceship_online,
            "spaceship_standby": self.spaceship_standby,
            "startup_sequence": {
                "power_gain_panel_complete": self.power_gain_panel_complete,
                "footer_critical_complete": self.footer_critical_complete,
            },
            "current_console": self.current_console,
            "logs": [entry.to_dict() for entry in self.logs],
            "navigation_command_activated": self.navigation_command_activated,
            "navigation_command_history": list(self.navigation_command_history),
            "battery_balanced": self.battery_balanced,
            "last_saved": self.last_saved,
        }

    @classmethod
    def from_dict(
        cls,
        raw: dict[str, Any],
        base: "GameState | None" = None,
        history_capacity: int = NAVIGATION_HISTORY_CAPACITY,
    ) -> "GameState":
        """
        Merge a persisted snapshot onto the initial state.

        Unknown keys are ignored and missing keys keep their initial values.
        Wrongly-typed values raise TypeError/ValueError/KeyError so the caller
        can fall back to the initial snapshot.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"persisted state must be an object, got {type(raw).__name__}")

        state = base if base is not None else cls.initial()

        controls = default_controls()
        for cid, value in dict(raw.get("controls", {})).items():
            if cid not in controls:
                continue
            if is_dial(cid):
                controls[cid] = _number(cid, value)
            elif isinstance(value, bool):
                controls[cid] = value
            else:
                raise TypeError(f"control {cid!r} expects a boolean, got {value!r}")
        if sum(1 for slot in CONSOLE_SELECTORS if controls[slot]) != 1:
            for slot in CONSOLE_SELECTORS:
                controls[slot] = slot == DEFAULT_SELECTOR
        if controls[EMERGENCY_CONTROL] and controls[ABORT_CONTROL]:
            controls[EMERGENCY_CONTROL] = controls[ABORT_CONTROL] = False
        state.controls = ControlStore(values=controls)
        state.current_console = SELECTOR_TO_CONSOLE[state.controls.active_selector()]

        state.systems = SystemSnapshot.merged(state.systems, dict(raw.get("systems", {})))

        for key in ("critical_controls_met", "spaceship_online", "spaceship_standby",
                    "navigation_command_activated", "battery_balanced"):
            if key in raw:
                setattr(state, key, bool(raw[key]))

        startup = dict(raw.get("startup_sequence", {}))
        state.power_gain_panel_complete = bool(startup.get("power_gain_panel_complete", state.power_gain_panel_complete))
        state.footer_critical_complete = bool(startup.get("footer_critical_complete", state.footer_critical_complete))

        if "logs" in raw:
            logs = state.logs.copy_empty()
            logs.restore(LogEntry.from_dict(item) for item in raw["logs"])
            state.logs = logs

        if "navigation_command_history" in raw:
            history = [str(item) for item in raw["navigation_command_history"]]
            state.navigation_command_history = history[-history_capacity:]

        last_saved = raw.get("last_saved")
        state.last_saved = None if last_saved is None else _number("last_saved", last_saved)
        return state
