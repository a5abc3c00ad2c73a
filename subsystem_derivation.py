"""
Title: Subsystem Derivation Engine
Author: Control Panel Engineering Team
Date Created: 2026-10-13
Last Modified: 2026-10-18
Version: 1.4

Purpose:
Recomputes every derived subsystem status from the current controls and the
prior snapshot: the critical-controls gate, the three-value ship status, the
startup sequence flags, the fifteen boolean subsystems and the battery
balance diagnostic. The computation is pure; it returns a Derivation that the
controller applies to the live state.

Each subsystem is the AND of a power precondition and one explicit secondary
condition. Log messages are produced only for values that actually flip, so
deriving twice from unchanged inputs yields the same snapshot and no logs.

Targeted Requirements:
- Subsystem flags and ship status are recomputed from the controls after
  every accepted input.

Scope and Limitations:
- `engines` and `engine_starting` are owned by the ignition state machine and
  the interlock monitor; derivation carries them through unchanged.
- Power, power systems and emergency protocols are one flip and log once.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)
- control_catalog.py, game_state.py, ship_states.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

from dataclasses import dataclass, field, replace

from control_catalog import (
    BATTERY_DIALS,
    COMMS_SUPPLY_CONTROLS,
    CRITICAL_CONTROLS,
    DIAL_MAX,
    DIAL_MIN,
    ENGINE_PRIMING_CONTROLS,
    FOOTER_CRITICAL_CONTROLS,
    POWER_GAIN_CONTROLS,
)
from game_state import GameState, SystemSnapshot
from ship_states import LogLevel, ShipStatus

PendingLog = tuple[LogLevel, str, str]

BATTERY_BALANCE_TARGET = 50.0
BATTERY_BALANCE_TOLERANCE = 1.0

# field -> (on text, off text, on level, off level, source)
SUBSYSTEM_MESSAGES: dict[str, tuple[str, str, LogLevel, LogLevel, str]] = {
    "power": (
        "SHIP POWER STATUS: FULLY OPERATIONAL - Power level: 100% - All systems nominal",
        "SHIP POWER STATUS: CRITICAL FAILURE - Power level: 0% - All systems offline",
        LogLevel.SYSTEM, LogLevel.CRITICAL, "Ship Power Core",
    ),
    "life_support": (
        "Life support systems ACTIVE", "Life support systems OFFLINE",
        LogLevel.INFO, LogLevel.CRITICAL, "Environmental Systems",
    ),
    "engine_ready": (
        "Engine power supply PRIMED - Engine ready for engagement",
        "Engine power supply STANDBY - Engine requires power supply setup",
        LogLevel.INFO, LogLevel.WARNING, "Engine Power Supply",
    ),
    "navigation": (
        "Navigation systems LOCKED", "Navigation systems OFFLINE",
        LogLevel.INFO, LogLevel.WARNING, "Navigation Systems",
    ),
    "shields": (
        "Shield systems ACTIVE", "Shield systems OFFLINE",
        LogLevel.INFO, LogLevel.WARNING, "Defensive Systems",
    ),
    "weapons": (
        "Weapon systems READY", "Weapon systems SAFE",
        LogLevel.WARNING, LogLevel.INFO, "Weapons Systems",
    ),
    "core_systems": (
        "CORE SYSTEMS ENGAGED - System activated and operational",
        "CORE SYSTEMS OFFLINE - System deactivated or failed",
        LogLevel.SYSTEM, LogLevel.WARNING, "Ship Systems",
    ),
    "communications": (
        "Communication systems ACTIVE", "Communication systems OFFLINE",
        LogLevel.INFO, LogLevel.WARNING, "Communications",
    ),
    "sensors": (
        "Sensor array NOMINAL", "Sensor array OFFLINE",
        LogLevel.INFO, LogLevel.WARNING, "Sensor Systems",
    ),
    "defensive_array": (
        "Defensive array READY", "Defensive array OFFLINE",
        LogLevel.INFO, LogLevel.WARNING, "Defensive Systems",
    ),
    "propulsion": (
        "Propulsion systems ENGAGED", "Propulsion systems OFFLINE",
        LogLevel.INFO, LogLevel.WARNING, "Propulsion Systems",
    ),
    "cargo_systems": (
        "Cargo systems ACTIVE", "Cargo systems STANDBY",
        LogLevel.INFO, LogLevel.WARNING, "Cargo Management",
    ),
    "maintenance": (
        "Maintenance systems ACTIVE", "Maintenance systems STANDBY",
        LogLevel.INFO, LogLevel.WARNING, "Maintenance",
    ),
}


@dataclass
class Derivation:
    systems: SystemSnapshot
    critical_controls_met: bool
    spaceship_online: bool
    spaceship_standby: bool
    power_gain_panel_complete: bool
    footer_critical_complete: bool
    navigation_command_activated: bool
    battery_balanced: bool
    logs: list[PendingLog] = field(default_factory=list)

    @property
    def ship_status(self) -> ShipStatus:
        if self.spaceship_online:
            return ShipStatus.ONLINE
        if self.spaceship_standby:
            return ShipStatus.STANDBY
        return ShipStatus.OFFLINE


def _status_logs(prior: GameState, online: bool, standby: bool) -> list[PendingLog]:
    if online and not prior.spaceship_online:
        return [(
            LogLevel.SYSTEM,
            "SPACESHIP STATUS: FULLY ONLINE - All power systems engaged, core initialization "
            "complete, ship ready for operation",
            "Ship Power Core",
        )]
    if standby and not prior.spaceship_standby:
        return [(
            LogLevel.WARNING,
            "SPACESHIP STATUS: STANDBY MODE - Power systems active but safety protocols not fully engaged",
            "Ship Power Core",
        )]
    if not online and not standby and (prior.spaceship_online or prior.spaceship_standby):
        return [(
            LogLevel.CRITICAL,
            "SPACESHIP STATUS: COMPLETE POWER FAILURE - All systems offline, emergency protocols recommended",
            "Ship Power Core",
        )]
    return []


def _startup_logs(prior: GameState, panel: bool, footer: bool) -> list[PendingLog]:
    logs: list[PendingLog] = []
    if panel != prior.power_gain_panel_complete:
        logs.append((
            LogLevel.SYSTEM if panel else LogLevel.CRITICAL,
            f"POWER GAIN PANEL: {'COMPLETE' if panel else 'INCOMPLETE'} - "
            f"{'All power controls engaged' if panel else 'Power distribution compromised'}",
            "Power Gain Systems",
        ))
    if footer != prior.footer_critical_complete:
        logs.append((
            LogLevel.SYSTEM if footer else LogLevel.WARNING,
            f"SAFETY PROTOCOLS: {'ENGAGED' if footer else 'STANDBY'} - "
            f"{'SAFE/ARM/LOCK/KEY sequence complete' if footer else 'Safety systems not fully initialized'}",
            "Safety Systems",
        ))
    return logs


def battery_dials_balanced(state: GameState, powered: bool) -> bool:
    if not powered:
        return False
    for dial in BATTERY_DIALS:
        value = min(DIAL_MAX, max(DIAL_MIN, float(state.controls.get(dial, 0.0))))
        if abs(value - BATTERY_BALANCE_TARGET) > BATTERY_BALANCE_TOLERANCE:
            return False
    return True


def derive(state: GameState) -> Derivation:
    controls = state.controls
    prior = state.systems

    critical = controls.all_on(CRITICAL_CONTROLS)
    panel = controls.all_on(POWER_GAIN_CONTROLS)
    footer = controls.all_on(FOOTER_CRITICAL_CONTROLS)
    online = panel and footer
    standby = panel and not footer

    logs = _status_logs(state, online, standby)
    logs.extend(_startup_logs(state, panel, footer))

    nav_activated = state.navigation_command_activated
    was_offline = not (state.spaceship_online or state.spaceship_standby)
    if not online and not standby and not was_offline:
        nav_activated = False

    power = critical
    shields = power and controls.is_on("shield")
    values = {
        "power": power,
        "power_systems": power,
        "emergency_protocols": power,
        "life_support": power and controls.is_on("aux-pwr") and controls.is_on("prim-pwr"),
        "engine_ready": controls.all_on(ENGINE_PRIMING_CONTROLS),
        "navigation": power and nav_activated,
        "shields": shields,
        "weapons": power and controls.is_on("emergency") and controls.is_on("override"),
        "core_systems": online or standby,
        "communications": power and controls.all_on(COMMS_SUPPLY_CONTROLS),
        "sensors": power and controls.is_on("monitor"),
        "defensive_array": shields and controls.is_on("isolate"),
        "propulsion": prior.engines and controls.is_on("forward"),
        "cargo_systems": power and controls.is_on("reserve"),
        "maintenance": power and controls.is_on("reset"),
    }

    for name, (on_text, off_text, on_level, off_level, source) in SUBSYSTEM_MESSAGES.items():
        new = values[name]
        if new == getattr(prior, name):
            continue
        logs.append((on_level, on_text, source) if new else (off_level, off_text, source))

    balanced = battery_dials_balanced(state, online or standby)
    if balanced != state.battery_balanced:
        if balanced:
            logs.append((LogLevel.INFO, "BATTERY BANKS BALANCED - All cells within calibration tolerance", "Battery Monitoring"))
        else:
            logs.append((LogLevel.WARNING, "BATTERY BANKS UNBALANCED - Calibration required", "Battery Monitoring"))

    return Derivation(
        systems=replace(prior, **values),
        critical_controls_met=critical,
        spaceship_online=online,
        spaceship_standby=standby,
        power_gain_panel_complete=panel,
        footer_critical_complete=footer,
        navigation_command_activated=nav_activated,
        battery_balanced=balanced,
        logs=logs,
    )


def apply_derivation(state: GameState, result: Derivation) -> None:
    state.systems = result.systems
    state.critical_controls_met = result.critical_controls_met
    state.spaceship_online = result.spaceship_online
    state.spaceship_standby = result.spaceship_standby
    state.power_gain_panel_complete = result.power_gain_panel_complete
    state.footer_critical_complete = result.footer_critical_complete
    state.navigation_command_activated = result.navigation_command_activated
    state.battery_balanced = result.battery_balanced
    for level, message, source in result.logs:
        state.logs.emit(level, message, source)
