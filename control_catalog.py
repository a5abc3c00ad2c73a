"""
Title: Control Panel Catalogue
Author: Control Panel Engineering Team
Date Created: 2026-10-12
Last Modified: 2026-10-16
Version: 1.2

Purpose:
Defines the fixed, enumerable set of operator controls on the spacecraft
control panel, their declared defaults, and the named groups the rest of the
system reasons about (critical power set, console selector slots, engine and
communications power supplies, outernet links, battery dials).

Targeted Requirements:
- Declares every operator control id, the console selector group and the
  control groups consumed by derivation and interlocks.

Scope and Limitations:
- The control set is fixed at start-up; nothing here is mutated at runtime.
- Dial controls carry a nominal 0-100 range; the catalogue declares it but
  does not enforce it.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

# Power & gain panel
POWER_GAIN_CONTROLS: tuple[str, ...] = (
    "pwr-1", "pwr-2", "pwr-5", "pwr-6", "pwr-7", "pwr-8", "pwr-9", "pwr-10",
    "master-toggle",
)

# Console readout toggles
READOUT_TOGGLES: tuple[str, ...] = (
    "aux-pwr", "prim-pwr", "sec-pwr", "override", "auto-cal", "manual",
    "feed-1", "feed-2", "feed-3", "sync", "lock", "release",
    "shield", "isolate", "latch", "emergency", "reset", "standby",
    "forward", "reverse", "active", "record", "monitor", "mute",
    "distribute", "reserve", "boost", "margin", "clear", "execute",
    "digital-1", "digital-2", "analog", "cache", "flush", "buffer",
    "limit", "thresh", "gate", "comp", "low-freq", "mid-freq", "hi-freq",
)

# Footer strip: SAFE, ARM, LOCK, KEY, NAV.1..NAV.8, EMERGENCY, ABORT
FOOTER_TOGGLES: tuple[str, ...] = tuple(f"f{i}" for i in range(14))
FOOTER_CRITICAL_CONTROLS: tuple[str, ...] = ("f0", "f1", "f2", "f3")
FOOTER_LABELS: dict[str, str] = {
    "f0": "SAFE", "f1": "ARM", "f2": "LOCK", "f3": "KEY",
    "f12": "EMERGENCY", "f13": "ABORT",
}

CONSOLE_SELECTORS: tuple[str, ...] = tuple(f"f{i}" for i in range(4, 12))
CONSOLES: tuple[str, ...] = tuple(f"nav{i}" for i in range(1, 9))
SELECTOR_TO_CONSOLE: dict[str, str] = dict(zip(CONSOLE_SELECTORS, CONSOLES))
CONSOLE_TO_SELECTOR: dict[str, str] = dict(zip(CONSOLES, CONSOLE_SELECTORS))
DEFAULT_SELECTOR = "f4"
DEFAULT_CONSOLE = "nav1"

EMERGENCY_CONTROL = "f12"
ABORT_CONTROL = "f13"

BATTERY_TOGGLES: tuple[str, ...] = ("config-1", "config-2", "config-3", "config-4", "charge-mode")
BATTERY_DIALS: tuple[str, ...] = ("out-1", "out-2", "mon-1", "mon-2", "cue-1")

ENGINE_MASTER = "engine-master"
ENGINE_POWER_CONTROLS: tuple[str, ...] = ("engine-pwr-1", "engine-pwr-2")
ENGINE_READY_CONTROLS: tuple[str, ...] = ("engine-ready-1", "engine-ready-2")
ENGINE_SUPPLY_CONTROLS: tuple[str, ...] = (ENGINE_MASTER, *ENGINE_POWER_CONTROLS)
ENGINE_PRIMING_CONTROLS: tuple[str, ...] = (*ENGINE_SUPPLY_CONTROLS, *ENGINE_READY_CONTROLS)

NAVIGATION_DIALS: tuple[str, ...] = ("nav-thrust", "nav-vector")

COMMS_MASTER = "comms-master"
COMMS_SUPPLY_CONTROLS: tuple[str, ...] = (COMMS_MASTER, "comms-pwr-1", "comms-pwr-2")

LINK_TOGGLES: tuple[str, ...] = (
    "conn-satellite", "conn-radio", "conn-laser", "conn-quantum",
    "conn-microwave", "conn-infrared", "conn-plasma", "conn-neural",
    "conn-gravitic", "conn-psionic", "conn-temporal", "conn-dimensional",
    "conn-subspace", "conn-hyperwave", "conn-tachyon", "conn-darkmatter",
)

# Primary power is online only when every one of these is on.
CRITICAL_CONTROLS: tuple[str, ...] = (*POWER_GAIN_CONTROLS, *FOOTER_CRITICAL_CONTROLS)

DIAL_CONTROLS: tuple[str, ...] = (*BATTERY_DIALS, *NAVIGATION_DIALS)
DIAL_MIN = 0.0
DIAL_MAX = 100.0

SWITCH_CONTROLS: tuple[str, ...] = (
    *POWER_GAIN_CONTROLS,
    *READOUT_TOGGLES,
    *FOOTER_TOGGLES,
    *BATTERY_TOGGLES,
    *ENGINE_PRIMING_CONTROLS,
    *COMMS_SUPPLY_CONTROLS,
    *LINK_TOGGLES,
)


def default_controls() -> dict[str, bool | float]:
    # Declared defaults: every switch off except NAV.1, every dial at 0.
    controls: dict[str, bool | float] = {cid: False for cid in SWITCH_CONTROLS}
    controls[DEFAULT_SELECTOR] = True
    for cid in DIAL_CONTROLS:
        controls[cid] = 0.0
    return controls


def is_switch(control_id: str) -> bool:
    return control_id in _SWITCH_SET


def is_dial(control_id: str) -> bool:
    return control_id in _DIAL_SET


def is_selector(control_id: str) -> bool:
    return control_id in _SELECTOR_SET


_SWITCH_SET = frozenset(SWITCH_CONTROLS)
_DIAL_SET = frozenset(DIAL_CONTROLS)
_SELECTOR_SET = frozenset(CONSOLE_SELECTORS)
