"""
Title: Operator Control Log Table
Author: Control Panel Engineering Team
Date Created: 2026-10-13
Last Modified: 2026-10-15
Version: 1.0

Purpose:
Maps an operator mutation of an operationally significant control to the one
log entry it produces: level, message and source. Switches are described by
their new value; dials by the value written.

Targeted Requirements:
- Each operator switch and dial write produces its fixed log message.

Scope and Limitations:
- Controls without an entry here change silently; the derivation engine may
  still log the subsystem flips they cause.
- Console selector changes are logged by the controller, not here.

Dependencies:
- Python 3.10+
- control_catalog.py, ship_states.py
"""

from control_catalog import FOOTER_CRITICAL_CONTROLS, FOOTER_LABELS
from ship_states import LogLevel

ControlMessage = tuple[LogLevel, str, str]

POWER_LABELS = {
    "pwr-1": "PRIMARY REACTOR",
    "pwr-2": "SECONDARY REACTOR",
    "pwr-5": "BACKUP SYSTEMS",
    "pwr-6": "AUXILIARY POWER",
    "pwr-7": "EMERGENCY POWER",
    "pwr-8": "SHUTDOWN SYSTEMS",
    "pwr-9": "REACTOR CORE",
    "pwr-10": "COOLING SYSTEMS",
}

CONFIG_LABELS = {
    "config-1": "AUTO-RECHARGE",
    "config-2": "BOOST MODE",
    "config-3": "REGENERATION",
    "config-4": "STANDBY MODE",
}

FEED_LABELS = {
    "feed-1": "PRIMARY FEED",
    "feed-2": "SECONDARY FEED",
    "feed-3": "AUXILIARY FEED",
}


def _pick(on: bool, when_on: str, when_off: str) -> str:
    return when_on if on else when_off


def _level(on: bool, when_on: LogLevel = LogLevel.SYSTEM, when_off: LogLevel = LogLevel.WARNING) -> LogLevel:
    return when_on if on else when_off


def switch_message(control_id: str, on: bool) -> ControlMessage | None:
    if control_id == "master-toggle":
        return (
            _level(on),
            f"MASTER POWER {_pick(on, 'ENGAGED', 'DISENGAGED')} - Main power distribution {_pick(on, 'active', 'offline')}",
            "Power Systems",
        )
    if control_id in POWER_LABELS:
        return (
            _level(on),
            f"{POWER_LABELS[control_id]} {_pick(on, 'ONLINE', 'OFFLINE')} - Power distribution {_pick(on, 'engaged', 'disengaged')}",
            "Power Systems",
        )
    if control_id == "aux-pwr":
        return (
            _level(on),
            f"AUXILIARY POWER {_pick(on, 'ENGAGED', 'OFFLINE')} - Backup power systems {_pick(on, 'active', 'inactive')}",
            "Power Distribution",
        )
    if control_id == "prim-pwr":
        return (
            _level(on),
            f"PRIMARY POWER {_pick(on, 'ENGAGED', 'OFFLINE')} - Main power grid {_pick(on, 'active', 'inactive')}",
            "Power Distribution",
        )
    if control_id == "sec-pwr":
        return (
            _level(on),
            f"SECONDARY POWER {_pick(on, 'ENGAGED', 'OFFLINE')} - Secondary power grid {_pick(on, 'active', 'inactive')}",
            "Power Distribution",
        )
    if control_id == "emergency":
        return (
            _level(on, LogLevel.CRITICAL),
            f"EMERGENCY PROTOCOLS {_pick(on, 'ACTIVATED', 'DEACTIVATED')} - All safety systems {_pick(on, 'engaged', 'standby')}",
            "Emergency Systems",
        )
    if control_id == "f13":
        return (
            _level(on, LogLevel.CRITICAL),
            f"ABORT SEQUENCE {_pick(on, 'INITIATED', 'CANCELLED')} - Mission abort protocols {_pick(on, 'active', 'standby')}",
            "Emergency Systems",
        )
    if control_id == "shield":
        return (
            _level(on, LogLevel.INFO),
            f"SHIELD SYSTEMS {_pick(on, 'ACTIVATED', 'DEACTIVATED')} - Defensive energy field {_pick(on, 'online', 'offline')}",
            "Defensive Systems",
        )
    if control_id in CONFIG_LABELS:
        return (
            LogLevel.INFO,
            f"BATTERY CONFIG: {CONFIG_LABELS[control_id]} {_pick(on, 'ENABLED', 'DISABLED')} - Power management updated",
            "Battery Configuration",
        )
    if control_id == "charge-mode":
        return (
            _level(on, LogLevel.SYSTEM, LogLevel.INFO),
            f"CHARGE MODE {_pick(on, 'ACTIVATED', 'DEACTIVATED')} - Battery charging {_pick(on, 'engaged', 'standby')}",
            "Battery Systems",
        )
    if control_id in FEED_LABELS:
        return (
            _level(on),
            f"ENGINE POWER {FEED_LABELS[control_id]} {_pick(on, 'ENGAGED', 'OFFLINE')} - Propulsion power {_pick(on, 'connected', 'disconnected')}",
            "Engine Power Systems",
        )
    if control_id in ("forward", "reverse"):
        return (
            _level(on, LogLevel.INFO),
            f"THRUST DIRECTION: {control_id.upper()} {_pick(on, 'ENGAGED', 'OFFLINE')} - Engine thrust vector {_pick(on, 'active', 'neutral')}",
            "Propulsion Control",
        )
    if control_id == "engine-master":
        return (
            _level(on),
            f"ENGINE MASTER POWER {_pick(on, 'ENGAGED', 'DISENGAGED')} - Engine power distribution {_pick(on, 'active', 'offline')}",
            "Engine Power Supply",
        )
    if control_id in ("engine-pwr-1", "engine-pwr-2"):
        label = "ENGINE POWER A" if control_id == "engine-pwr-1" else "ENGINE POWER B"
        return (
            _level(on),
            f"{label} {_pick(on, 'ONLINE', 'OFFLINE')} - Engine auxiliary power {_pick(on, 'engaged', 'disengaged')}",
            "Engine Power Supply",
        )
    if control_id in ("engine-ready-1", "engine-ready-2"):
        label = "ENGINE READY 1" if control_id == "engine-ready-1" else "ENGINE READY 2"
        return (
            _level(on, LogLevel.INFO),
            f"{label} {_pick(on, 'ENGAGED', 'STANDBY')} - Engine priming sequence {_pick(on, 'active', 'incomplete')}",
            "Engine Priming",
        )
    if control_id in ("comms-master", "comms-pwr-1", "comms-pwr-2"):
        label = {"comms-master": "COMMS MASTER POWER", "comms-pwr-1": "COMMS POWER A", "comms-pwr-2": "COMMS POWER B"}[control_id]
        return (
            _level(on),
            f"{label} {_pick(on, 'ENGAGED', 'DISENGAGED')} - Communications power {_pick(on, 'active', 'offline')}",
            "Communications Power Supply",
        )
    if control_id in FOOTER_CRITICAL_CONTROLS:
        return (
            _level(on),
            f"SAFETY SYSTEM: {FOOTER_LABELS[control_id]} {_pick(on, 'ENGAGED', 'DISENGAGED')} - "
            f"{_pick(on, 'Safety protocol activated', 'Safety protocol deactivated')}",
            "Safety Systems",
        )
    if control_id == "distribute":
        return (
            _level(on, LogLevel.INFO),
            f"POWER DISTRIBUTION {_pick(on, 'ACTIVE', 'OFFLINE')} - {_pick(on, 'Power routing engaged', 'Power routing disabled')}",
            "Power Distribution",
        )
    if control_id == "reserve":
        return (
            _level(on, LogLevel.INFO),
            f"POWER RESERVE {_pick(on, 'ENGAGED', 'OFFLINE')} - {_pick(on, 'Emergency power available', 'Emergency power disconnected')}",
            "Power Reserve",
        )
    if control_id == "boost":
        return (
            _level(on, LogLevel.WARNING, LogLevel.INFO),
            f"POWER BOOST {_pick(on, 'ACTIVATED', 'OFFLINE')} - {_pick(on, 'Overload protection disabled', 'Normal power limits restored')}",
            "Power Systems",
        )
    if control_id == "margin":
        return (
            _level(on, LogLevel.INFO),
            f"POWER MARGIN {_pick(on, 'ENGAGED', 'OFFLINE')} - {_pick(on, 'Power reserve buffer active', 'Power reserve buffer disabled')}",
            "Power Management",
        )
    if control_id == "clear":
        return (
            LogLevel.INFO,
            f"SYSTEM CLEAR {_pick(on, 'EXECUTED', 'CANCELLED')} - {_pick(on, 'System cache flushed', 'Clear operation aborted')}",
            "System Control",
        )
    if control_id == "execute":
        return (
            _level(on),
            f"COMMAND EXECUTE {_pick(on, 'ENGAGED', 'STANDBY')} - {_pick(on, 'System command processing active', 'Command execution paused')}",
            "System Control",
        )
    return None


def dial_message(control_id: str, value: float) -> ControlMessage | None:
    shown = f"{value:g}"
    if control_id in ("out-1", "out-2"):
        side = "PORT" if control_id == "out-1" else "STARBOARD"
        return LogLevel.INFO, f"{side} BATTERY OUTPUT set to {shown}% - Power distribution adjusted", "Battery Systems"
    if control_id in ("mon-1", "mon-2"):
        side = "PORT" if control_id == "mon-1" else "STARBOARD"
        return LogLevel.INFO, f"{side} BATTERY MONITOR level: {shown}% - System monitoring updated", "Battery Monitoring"
    if control_id == "cue-1":
        high = value > 50
        return (
            LogLevel.WARNING if high else LogLevel.INFO,
            f"ALERT SYSTEM level: {shown}% - {'High alert condition' if high else 'Normal monitoring'}",
            "Alert Systems",
        )
    if control_id == "nav-thrust":
        return LogLevel.INFO, f"THRUST CONTROL set to {shown}% - Propulsion thrust vector adjusted", "Navigation Control"
    if control_id == "nav-vector":
        return LogLevel.INFO, f"VECTOR CONTROL set to {shown}% - Engine vector control updated", "Navigation Control"
    return None
