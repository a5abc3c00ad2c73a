"""
Title: Spacecraft State Definitions
Author: Control Panel Engineering Team
Date Created: 2026-10-12
Last Modified: 2026-10-14
Version: 1.1

Purpose:
Defines the authoritative enumerations used across the control panel core:
the three-value ship status classification, the engine ignition states, and
the five event log severities.

Targeted Requirements:
- Defines the ship status, ignition states and log levels shared by every
  component.

Scope and Limitations:
- Logical states only; no timing or sensor information is encoded here.
- FAILED is a transient ignition state. It is reported in a log entry and
  immediately collapsed back to OFFLINE; it is never stored.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- enum (standard library)

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
from enum import Enum, auto


class ShipStatus(Enum):
    OFFLINE = auto()
    STANDBY = auto()
    ONLINE = auto()


class IgnitionState(Enum):
    OFFLINE = auto()
    READY = auto()
    STARTING = auto()
    ONLINE = auto()
    FAILED = auto()


class LogLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    SYSTEM = "system"

    @property
    def python_level(self) -> int:
        # Mirror level used when an entry is forwarded to the logging module.
        return _PYTHON_LEVELS[self]


_PYTHON_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SYSTEM: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}
