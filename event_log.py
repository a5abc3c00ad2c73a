"""
Title: Event Log Emitter
Author: Control Panel Engineering Team
Date Created: 2026-10-13
Last Modified: 2026-10-17
Version: 1.2

Purpose:
Provides the bounded, insertion-ordered event log that makes every meaningful
control panel transition observable. Each entry carries a wall-clock
timestamp, one of five severities, a message, a source subsystem and optional
structured data. Entries are mirrored to the Python logging module at the
matching level so the console log and the panel log tell the same story.

Also holds the numeric band tables used to level entries for hull integrity,
battery power, reactor temperature and fuel reservoirs.

Targeted Requirements:
- Log entries are kept newest-last within a bounded capacity.
- Numeric system writes are logged only when their band changes.

Scope and Limitations:
- Capacity is fixed at construction; the oldest entry is evicted first.
- The operator "clear" action appends a marker entry. It does not empty the
  buffer.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- collections, dataclasses, logging (standard library)
- ship_states.py

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
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from ship_states import LogLevel

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
FILTERED_LEVELS = frozenset({LogLevel.CRITICAL, LogLevel.ERROR, LogLevel.SYSTEM})


@dataclass(frozen=True)
class LogEntry:
    timestamp: float
    level: LogLevel
    message: str
    source: str
    data: dict[str, Any] | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "source": self.source,
        }
        if self.data is not None:
            out["data"] = dict(self.data)
        return out

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "LogEntry":
        return cls(
            timestamp=float(raw["timestamp"]),
            level=LogLevel(raw["level"]),
            message=str(raw["message"]),
            source=str(raw["source"]),
            data=raw.get("data"),
        )


class EventLog:
    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        wall_clock: Callable[[], float] = time.time,
    ):
        if capacity < 1:
            raise ValueError(f"log capacity must be at least 1 (got {capacity})")
        self._capacity = capacity
        self._wall_clock = wall_clock
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def __eq__(self, other) -> bool:
        if not isinstance(other, EventLog):
            return NotImplemented
        return self._capacity == other._capacity and list(self._entries) == list(other._entries)

    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def last(self) -> LogEntry | None:
        return self._entries[-1] if self._entries else None

    def emit(
        self,
        level: LogLevel,
        message: str,
        source: str,
        data: dict[str, Any] | None = None,
    ) -> LogEntry:
        entry = LogEntry(
            timestamp=float(self._wall_clock()),
            level=level,
            message=message,
            source=source,
            data=data,
        )
        self.append(entry)
        return entry

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)
        logger.log(entry.level.python_level, "[%s] %s", entry.source, entry.message)

    def restore(self, entries: Iterable[LogEntry]) -> None:
        # Persisted entries were mirrored when first emitted; do not repeat them.
        self._entries.extend(entries)

    def visible(self, show_all: bool) -> list[LogEntry]:
        if show_all:
            return self.entries()
        return [e for e in self._entries if e.level in FILTERED_LEVELS]

    def operator_clear(self) -> LogEntry:
        return self.emit(LogLevel.SYSTEM, "Log buffer cleared by operator", "Log System")

    def copy_empty(self) -> "EventLog":
        return EventLog(capacity=self._capacity, wall_clock=self._wall_clock)


# -------------------------
# Numeric band tables
# -------------------------

# (upper-or-lower bound, level, description); first match wins.
HULL_BANDS = (
    (20.0, LogLevel.CRITICAL, "Critical structural damage"),
    (50.0, LogLevel.ERROR, "Critical structural damage"),
    (80.0, LogLevel.WARNING, "Hull integrity compromised"),
)
BATTERY_BANDS = (
    (20.0, LogLevel.WARNING, "Low power reserves"),
)
FUEL_BANDS = (
    (10.0, LogLevel.CRITICAL, "Critical fuel reserves"),
    (25.0, LogLevel.WARNING, "Low fuel warning"),
)
# Temperature bands trip above the threshold rather than below it.
TEMPERATURE_BANDS = (
    (800.0, LogLevel.CRITICAL, "Critical overheating"),
    (600.0, LogLevel.ERROR, "Temperature critical"),
    (400.0, LogLevel.WARNING, "Temperature elevated"),
)

_NOMINAL_TEXT = {
    "hull_integrity": "Structural integrity nominal",
    "battery_power": "Power reserves adequate",
    "reactor_temperature": "Temperature nominal",
    "fuel": "Fuel reserves adequate",
}

FIELD_LABELS = {
    "hull_integrity": "HULL INTEGRITY",
    "battery_power": "BATTERY POWER",
    "reactor_temperature": "REACTOR TEMPERATURE",
    "main_fuel": "MAIN FUEL",
    "reserve_fuel": "RESERVE FUEL",
    "boost_fuel": "BOOST FUEL",
    "emergency_fuel": "EMERGENCY FUEL",
    "coolant_fuel": "COOLANT FUEL",
    "auxiliary_fuel": "AUXILIARY FUEL",
    "maneuver_fuel": "MANEUVER FUEL",
    "scram_fuel": "SCRAM FUEL",
    "mission_time": "MISSION TIME",
    "heading": "SHIP HEADING",
    "speed": "SHIP SPEED",
    "starter_damage": "STARTER DAMAGE",
}


def _band_family(field_name: str) -> str:
    if field_name.endswith("_fuel"):
        return "fuel"
    return field_name


def classify_band(field_name: str, value: float) -> tuple[LogLevel, str]:
    family = _band_family(field_name)
    if family == "reactor_temperature":
        for threshold, level, text in TEMPERATURE_BANDS:
            if value > threshold:
                return level, text
        return LogLevel.INFO, _NOMINAL_TEXT[family]

    bands = {"hull_integrity": HULL_BANDS, "battery_power": BATTERY_BANDS, "fuel": FUEL_BANDS}.get(family)
    if bands is None:
        return LogLevel.INFO, ""
    for threshold, level, text in bands:
        if value < threshold:
            return level, text
    return LogLevel.INFO, _NOMINAL_TEXT[family]


def band_changed(field_name: str, old: float, new: float) -> bool:
    return classify_band(field_name, old)[0] != classify_band(field_name, new)[0]


def format_numeric_message(field_name: str, value: float) -> tuple[LogLevel, str]:
    label = FIELD_LABELS.get(field_name, field_name.upper().replace("_", " "))
    level, text = classify_band(field_name, value)

    if field_name == "reactor_temperature":
        return level, f"{label} at {value:.0f}°C - {text}"
    if field_name == "mission_time":
        hours, rest = divmod(int(value), 3600)
        return level, f"{label} {hours}h {rest // 60}m elapsed"
    if field_name == "heading":
        return level, f"{label} {value:.1f}° - Course updated"
    if field_name == "speed":
        return level, f"{label} {value:.2f} LY/h - Current velocity"
    if text:
        return level, f"{label} at {value:.1f}% - {text}"
    return level, f"{label} changed to {value:.1f}"
