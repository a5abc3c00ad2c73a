"""
Title: Application Context Container for the Control Panel
Author: Control Panel Engineering Team
Date Created: 2026-10-16
Last Modified: 2026-10-18
Version: 1.1

Purpose:
Defines a central application context object for the control panel
simulation. The AppContext aggregates the controller, shared configuration,
clock, persistence collaborators, timer supervision and lifecycle control
primitives into a single explicit container to simplify wiring and
controlled shutdown across the application.

Targeted Requirements:
- Bundles the controller, configuration, timers, state store and command recorder
  shared by the console loop and the signal handlers.

Scope and Limitations:
- Acts purely as a dependency container; contains no control or safety logic.

Dependencies:
- Python 3.10+
- dataclasses, threading, typing (standard library)
- spaceship_controller.py, panel_configuration.py, periodic_tasks.py,
  state_recorder.py, command_recorder.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

from dataclasses import dataclass
from threading import Event
from typing import Callable

from command_recorder import CommandRecorder
from panel_configuration import PanelConfiguration
from periodic_tasks import TimerSupervisor
from spaceship_controller import SpaceshipController
from state_recorder import JsonStateStore


@dataclass
class AppContext:
    controller: SpaceshipController
    config: PanelConfiguration
    clock: Callable[[], float]
    shutdown_event: Event

    state_store: JsonStateStore | None = None
    timers: TimerSupervisor | None = None
    recorder: CommandRecorder | None = None

    def shutdown(self) -> None:
        self.shutdown_event.set()
