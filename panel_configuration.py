"""
Title: Control Panel Timing and Capacity Configuration (PanelConfiguration)
Author: Control Panel Engineering Team
Date Created: 2026-10-12
Last Modified: 2026-10-17
Version: 1.3

Purpose:
Defines an immutable data model holding every timing, rate and capacity
constant of the control panel core: ignition duration and poll period, fuel
tick size, reactor temperature profile, autosave cadence, log and command
history capacities. Components read their constants from one instance so a
test or the CLI can run the whole panel with different timing.

Targeted Requirements:
- Timing, capacity and starter damage values are validated before any
  component uses them.

Scope and Limitations:
- Values are static once instantiated.
- Reactor temperature rates are expressed in degrees per second and applied
  by the 1 s reactor step; no thermal model beyond step-toward-target.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- dataclasses (standard library)

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

from dataclasses import dataclass, field

from ship_states import IgnitionState


FUEL_TANKS: tuple[str, ...] = (
    "main_fuel",
    "reserve_fuel",
    "boost_fuel",
    "emergency_fuel",
    "coolant_fuel",
    "auxiliary_fuel",
    "maneuver_fuel",
    "scram_fuel",
)


def _default_temperature_profile() -> dict[IgnitionState | None, tuple[float, float]]:
    # (target degrees, rate degrees/second); None key = no ship power.
    return {
        None: (0.0, 2.0),
        IgnitionState.OFFLINE: (150.0, 5.0),
        IgnitionState.READY: (1000.0, 10.0),
        IgnitionState.STARTING: (2000.0, 20.0),
        IgnitionState.ONLINE: (2200.0, 20.0),
    }


@dataclass(frozen=True)
class PanelConfiguration:
    name: str = "MK1"

    ignition_duration_ms: int = 5000
    ignition_poll_ms: int = 100

    fuel_tick_s: float = 1.0
    fuel_per_tick: float = 0.1
    heartbeat_every_ticks: int = 60

    reactor_step_s: float = 1.0
    temperature_profile: dict = field(default_factory=_default_temperature_profile)

    autosave_s: float = 30.0
    reload_delay_s: float = 0.1

    log_capacity: int = 100
    navigation_history_capacity: int = 8

    starter_damage: float = 50.0

    @property
    def ignition_duration_s(self) -> float:
        return self.ignition_duration_ms / 1000.0

    @property
    def ignition_poll_s(self) -> float:
        return self.ignition_poll_ms / 1000.0

    def polls_per_ignition(self) -> int:
        # Number of 100 ms polls needed to cover the whole ignition window.
        return -(-self.ignition_duration_ms // self.ignition_poll_ms)

    def temperature_target(self, powered: bool, state: IgnitionState) -> tuple[float, float]:
        if not powered:
            return self.temperature_profile[None]
        if state == IgnitionState.FAILED:
            state = IgnitionState.OFFLINE
        return self.temperature_profile[state]

    def validate(self) -> None:
        if self.ignition_duration_ms <= 0 or self.ignition_poll_ms <= 0:
            raise ValueError(
                f"{self.name}: ignition timing must be positive "
                f"(duration={self.ignition_duration_ms} ms, poll={self.ignition_poll_ms} ms)"
            )
        if self.fuel_tick_s <= 0 or self.reactor_step_s <= 0 or self.autosave_s <= 0:
            raise ValueError(f"{self.name}: periodic task periods must be positive")
        if self.fuel_per_tick < 0:
            raise ValueError(f"{self.name}: fuel_per_tick must not be negative")
        if self.log_capacity < 1 or self.navigation_history_capacity < 1:
            raise ValueError(f"{self.name}: capacities must be at least 1")
        if not 0.0 <= self.starter_damage <= 100.0:
            raise ValueError(f"{self.name}: starter_damage={self.starter_damage} outside 0-100")
        for key, (target, rate) in self.temperature_profile.items():
            if target < 0 or rate <= 0:
                raise ValueError(f"{self.name}: invalid temperature profile entry for {key}")
