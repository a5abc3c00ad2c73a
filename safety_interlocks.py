"""
Title: Safety Interlock Monitor
Author: Control Panel Engineering Team
Date Created: 2026-10-14
Last Modified: 2026-10-19
Version: 1.3

Purpose:
Issues one-way corrective writes after derivation when a subsystem has lost a
dependency it requires: engine and communications master switches drop when
ship power is lost, running engines shut down and a running ignition
sequence is aborted when the engine power supply is incomplete, and the
outernet link toggles follow the communications status.

The controller asks for the next correction, applies it, re-derives, and asks
again. Each rule fires at most once per dispatched action, so the loop is
bounded by the number of rules.

Targeted Requirements:
- Engine and communications masters drop on power loss.
- A broken engine supply shuts down running engines and aborts ignition.

Scope and Limitations:
- Rules only ever switch things off or align links; they never start an
  ignition sequence or switch on a primary control.

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
from typing import Any, Callable

from control_catalog import COMMS_MASTER, ENGINE_MASTER, ENGINE_SUPPLY_CONTROLS, LINK_TOGGLES
from game_state import GameState
from ship_states import LogLevel


@dataclass(frozen=True)
class Correction:
    rule: str
    level: LogLevel
    message: str
    source: str
    control_writes: dict[str, bool] = field(default_factory=dict)
    system_writes: dict[str, Any] = field(default_factory=dict)

    def apply(self, state: GameState) -> None:
        for control_id, value in self.control_writes.items():
            state.controls.set_flag(control_id, value)
        if self.system_writes:
            state.systems = replace(state.systems, **self.system_writes)
        state.logs.emit(self.level, self.message, self.source)


def _engine_master_power_loss(state: GameState) -> Correction | None:
    if state.systems.power or not state.controls.is_on(ENGINE_MASTER):
        return None
    return Correction(
        rule="engine-master-power-loss",
        level=LogLevel.WARNING,
        message="ENGINE MASTER - Automatically disengaged due to power loss",
        source="Engine Power Supply",
        control_writes={ENGINE_MASTER: False},
    )


def _comms_master_power_loss(state: GameState) -> Correction | None:
    if state.systems.power or not state.controls.is_on(COMMS_MASTER):
        return None
    return Correction(
        rule="comms-master-power-loss",
        level=LogLevel.WARNING,
        message="COMMUNICATIONS MASTER - Automatically disengaged due to power loss",
        source="Communications Power Supply",
        control_writes={COMMS_MASTER: False},
    )


def _engine_supply_lost(state: GameState) -> Correction | None:
    if not state.systems.engines or state.controls.all_on(ENGINE_SUPPLY_CONTROLS):
        return None
    return Correction(
        rule="engine-supply-lost",
        level=LogLevel.CRITICAL,
        message="ENGINES SHUTDOWN - Power supply disrupted, engines automatically disengaged",
        source="Engine Power Supply",
        system_writes={"engines": False, "engine_startup_progress": 0.0},
    )


def _ignition_supply_lost(state: GameState) -> Correction | None:
    if not state.systems.engine_starting or state.controls.all_on(ENGINE_SUPPLY_CONTROLS):
        return None
    return Correction(
        rule="ignition-supply-lost",
        level=LogLevel.CRITICAL,
        message="ENGINE IGNITION ABORTED - Power supply disrupted during ignition sequence",
        source="Engine Ignition",
        system_writes={"engine_starting": False, "engine_startup_progress": 0.0},
    )


def _links_follow_communications(state: GameState) -> Correction | None:
    target = state.systems.communications
    if all(state.controls.is_on(link) is target for link in LINK_TOGGLES):
        return None
    if target:
        level, message = LogLevel.INFO, "OUTERNET LINKS ESTABLISHED - All channels synchronised with communications"
    else:
        level, message = LogLevel.WARNING, "OUTERNET LINKS DROPPED - Communications offline, all channels closed"
    return Correction(
        rule="links-follow-communications",
        level=level,
        message=message,
        source="Communications",
        control_writes={link: target for link in LINK_TOGGLES},
    )


Rule = Callable[[GameState], Correction | None]

DEFAULT_RULES: tuple[Rule, ...] = (
    _engine_master_power_loss,
    _comms_master_power_loss,
    _engine_supply_lost,
    _ignition_supply_lost,
    _links_follow_communications,
)


class InterlockMonitor:
    def __init__(self, rules: tuple[Rule, ...] = DEFAULT_RULES):
        self._rules = rules

    @property
    def max_passes(self) -> int:
        return len(self._rules)

    def next_correction(self, state: GameState, fired: set[str]) -> Correction | None:
        for rule in self._rules:
            correction = rule(state)
            if correction is not None and correction.rule not in fired:
                return correction
        return None

    def settle(self, state: GameState, rederive: Callable[[], None]) -> list[str]:
        # Returns the rule names that fired, in order.
        fired: list[str] = []
        for _ in range(self.max_passes):
            correction = self.next_correction(state, set(fired))
            if correction is None:
                break
            correction.apply(state)
            fired.append(correction.rule)
            rederive()
        return fired
