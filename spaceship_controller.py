"""
Title: Spacecraft Control Panel Controller
Author: Control Panel Engineering Team
Date Created: 2026-10-15
Last Modified: 2026-10-19
Version: 1.7

Purpose:
Single logical writer for the control panel state. Every input (operator
toggles and dial writes, engine start/stop, navigation commands, timer ticks,
persistence loads) is wrapped in an Action and processed through one
serialized queue. Each action runs to completion, including derivation and
every interlock pass, before the next starts:

    mutation -> emergency reset check -> derivation -> interlock passes
             -> notifications -> timer sync -> published snapshot

Actions dispatched from inside an action (for example by a notification sink)
are queued behind it, never processed recursively. Commands return True when
accepted and False when rejected or ignored.

Targeted Requirements:
- Every input is processed through one serialized queue and settles fully
  before the next input starts.

Scope and Limitations:
- The state container is owned by the controller and injected collaborators
  (clock, wall clock, random source, state store, notifier, reload callback)
  are all replaceable for tests.
- The published snapshot handed to autosave is a plain dict built after each
  action; autosave never takes the dispatch lock.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- threading, random, time, logging (standard library)
- every core module of the control panel
"""

# Change Log:
#
# 1.7 (2026-10-19)
#   - Fuel ticks and reactor steps settle derivation and interlocks.
#
# 1.6 (2026-10-19)
#   - Ignition stop during STARTING aborts the sequence instead of rejecting.
#
# 1.5 (2026-10-18)
#   - Added numeric system writes with band-classified logging.
#   - Added battery calibration and prime/kill footer actions.
#
# 1.4 (2026-10-17)
#   - Autosave reads the published snapshot instead of the live state.
#
# 1.3 (2026-10-16)
#   - Re-entrant dispatch is queued behind the running action.
#
# 1.0 (2026-10-15)
#   - Initial serialized controller with derivation and interlock passes.

import logging
import random
import threading
import time
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Callable

from control_catalog import (
    BATTERY_DIALS,
    FOOTER_CRITICAL_CONTROLS,
    SELECTOR_TO_CONSOLE,
    is_selector,
)
from control_messages import dial_message, switch_message
from emergency_reset import is_triggered, reset_state
from engine_ignition import EngineIgnition, ignition_state, reactor_step
from event_log import format_numeric_message
from fuel_scheduler import FuelScheduler
from game_state import NUMERIC_BOUNDS, GameState, clamp_field
from notifications import NotificationEvent, Notifier, toggle_event
from panel_configuration import PanelConfiguration
from safety_interlocks import InterlockMonitor
from ship_states import IgnitionState, LogLevel, ShipStatus
from subsystem_derivation import apply_derivation, derive

logger = logging.getLogger(__name__)

PRIME_CONTROLS = ("f0", "f1", "f2")
CALIBRATION_LEVEL = 50.0


class ActionType(Enum):
    TOGGLE = auto()
    SET_VALUE = auto()
    START_ENGINES = auto()
    STOP_ENGINES = auto()
    POLL_IGNITION = auto()
    FUEL_TICK = auto()
    REACTOR_STEP = auto()
    NAVIGATION_COMMAND = auto()
    PRIME = auto()
    KILL_SWITCH = auto()
    CALIBRATE_BATTERIES = auto()
    SET_SYSTEM_VALUE = auto()
    CLEAR_LOGS = auto()
    LOAD_STATE = auto()


@dataclass
class Action:
    type: ActionType
    control_id: str | None = None
    value: Any = None
    result: bool | None = field(default=None, compare=False)
    message: str = field(default="", compare=False)


def _schedule_with_timer(delay_s: float, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    timer.start()


class SpaceshipController:
    def __init__(
        self,
        config: PanelConfiguration | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
        state: GameState | None = None,
        state_store=None,
        notifier: Notifier | None = None,
        host_reload: Callable[[], None] | None = None,
        scheduler: Callable[[float, Callable[[], None]], None] = _schedule_with_timer,
    ):
        self._config = config if config is not None else PanelConfiguration()
        self._config.validate()

        self._clock = clock
        self._wall_clock = wall_clock
        self._ignition = EngineIgnition(self._config, rng)
        self._fuel = FuelScheduler(self._config)
        self._interlocks = InterlockMonitor()
        self._notifier = notifier if notifier is not None else Notifier()

        self.state_store = state_store
        self.host_reload = host_reload
        self._scheduler = scheduler
        self.timers = None

        self._state = state if state is not None else self._initial_state()

        self._queue: deque[Action] = deque()
        self._lock = threading.Lock()
        self._draining_thread: int | None = None

        self._published: dict[str, Any] = self._state.to_dict()
        self._handlers: dict[ActionType, Callable[[Action], bool]] = {
            ActionType.TOGGLE: self._handle_toggle,
            ActionType.SET_VALUE: self._handle_set_value,
            ActionType.START_ENGINES: self._handle_start_engines,
            ActionType.STOP_ENGINES: self._handle_stop_engines,
            ActionType.POLL_IGNITION: self._handle_poll_ignition,
            ActionType.FUEL_TICK: self._handle_fuel_tick,
            ActionType.REACTOR_STEP: self._handle_reactor_step,
            ActionType.NAVIGATION_COMMAND: self._handle_navigation_command,
            ActionType.PRIME: self._handle_prime,
            ActionType.KILL_SWITCH: self._handle_kill_switch,
            ActionType.CALIBRATE_BATTERIES: self._handle_calibrate_batteries,
            ActionType.SET_SYSTEM_VALUE: self._handle_set_system_value,
            ActionType.CLEAR_LOGS: self._handle_clear_logs,
            ActionType.LOAD_STATE: self._handle_load_state,
        }

    # -------------------------
    # Properties / small helpers
    # -------------------------

    @property
    def config(self) -> PanelConfiguration:
        return self._config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def ship_status(self) -> ShipStatus:
        return self._state.ship_status

    @property
    def ignition(self) -> IgnitionState:
        return ignition_state(self._state.systems)

    @property
    def fuel_scheduler(self) -> FuelScheduler:
        return self._fuel

    def log(self, msg: str) -> None:
        print(msg)

    def published_snapshot(self) -> dict[str, Any]:
        return self._published

    def _initial_state(self) -> GameState:
        return GameState.initial(
            log_capacity=self._config.log_capacity,
            wall_clock=self._wall_clock,
            starter_damage=self._config.starter_damage,
        )

    # -------------------------
    # Serialized dispatch
    # -------------------------

    def dispatch(self, action: Action) -> Action:
        self._queue.append(action)

        if self._draining_thread == threading.get_ident():
            # Re-entrant: the outer drain loop picks it up after the current action.
            return action

        with self._lock:
            self._draining_thread = threading.get_ident()
            try:
                while self._queue:
                    self._process(self._queue.popleft())
            finally:
                self._draining_thread = None
        return action

    def _process(self, action: Action) -> None:
        prior_status = self._state.ship_status
        prior_ready = self._state.systems.engine_ready
        prior_engines = self._state.systems.engines

        action.result = bool(self._handlers[action.type](action))

        self._notify_transitions(prior_status, prior_ready, prior_engines)
        self._sync_timers()
        self._published = self._state.to_dict()

    def _settle(self) -> None:
        apply_derivation(self._state, derive(self._state))
        self._interlocks.settle(
            self._state,
            lambda: apply_derivation(self._state, derive(self._state)),
        )

    def _notify_transitions(self, prior_status: ShipStatus, prior_ready: bool, prior_engines: bool) -> None:
        systems = self._state.systems
        if self._state.ship_status == ShipStatus.ONLINE and prior_status != ShipStatus.ONLINE:
            self._notifier.notify(NotificationEvent.SHIP_ONLINE)
        if systems.engine_ready and not prior_ready:
            self._notifier.notify(NotificationEvent.ENGINE_READY)
        if systems.engines and not prior_engines:
            self._notifier.notify(NotificationEvent.ENGINE_ONLINE)

    def _sync_timers(self) -> None:
        if self.timers is None:
            return
        systems = self._state.systems
        self.timers.sync(systems.engines, systems.engine_starting)

    # -------------------------
    # Commands
    # -------------------------

    def _run(self, action_type: ActionType, control_id: str | None = None, value: Any = None) -> bool:
        action = self.dispatch(Action(action_type, control_id=control_id, value=value))
        return bool(action.result)

    def toggle(self, control_id: str) -> bool:
        return self._run(ActionType.TOGGLE, control_id)

    def set_value(self, control_id: str, value: float) -> bool:
        return self._run(ActionType.SET_VALUE, control_id, value)

    def start_engines(self) -> bool:
        return self._run(ActionType.START_ENGINES)

    def stop_engines(self) -> bool:
        return self._run(ActionType.STOP_ENGINES)

    def poll_ignition(self, now: float | None = None) -> bool:
        return self._run(ActionType.POLL_IGNITION, value=now)

    def fuel_tick(self) -> bool:
        return self._run(ActionType.FUEL_TICK)

    def reactor_step(self, dt: float | None = None) -> bool:
        return self._run(ActionType.REACTOR_STEP, value=dt)

    def navigation_command(self, text: str) -> bool:
        return self._run(ActionType.NAVIGATION_COMMAND, value=text)

    def prime(self) -> bool:
        return self._run(ActionType.PRIME)

    def kill_switch(self) -> bool:
        return self._run(ActionType.KILL_SWITCH)

    def calibrate_batteries(self) -> bool:
        return self._run(ActionType.CALIBRATE_BATTERIES)

    def set_system_value(self, field_name: str, value: float) -> bool:
        return self._run(ActionType.SET_SYSTEM_VALUE, field_name, value)

    def operator_clear_logs(self) -> bool:
        return self._run(ActionType.CLEAR_LOGS)

    def load_state(self, state: GameState) -> bool:
        return self._run(ActionType.LOAD_STATE, value=state)

    def autosave(self) -> bool:
        if self.state_store is None:
            return False
        return self.state_store.save_snapshot(self._published)

    # -------------------------
    # Handlers
    # -------------------------

    def _apply_switch(self, control_id: str) -> bool:
        state = self._state
        if not state.controls.toggle(control_id):
            return False

        if is_selector(control_id):
            console = SELECTOR_TO_CONSOLE[control_id]
            state.current_console = console
            state.logs.emit(LogLevel.INFO, f"Switched to navigation console {console.upper()}", "Navigation")
        else:
            message = switch_message(control_id, state.controls.is_on(control_id))
            if message is not None:
                state.logs.emit(*message)

        event = toggle_event(control_id)
        if event is not None:
            self._notifier.notify(event, control_id=control_id)
        return True

    def _handle_toggle(self, action: Action) -> bool:
        if not self._apply_switch(action.control_id):
            return False

        if is_triggered(self._state.controls):
            self._emergency_reset()
            return True

        self._settle()
        return True

    def _emergency_reset(self) -> None:
        self._state = reset_state(
            log_capacity=self._config.log_capacity,
            wall_clock=self._wall_clock,
            starter_damage=self._config.starter_damage,
        )
        self._fuel.ticks = 0
        if self.state_store is not None:
            self.state_store.clear()
        self.log("EMERGENCY RESET: panel returned to initial state")
        if self.host_reload is not None:
            self._scheduler(self._config.reload_delay_s, self.host_reload)

    def _handle_set_value(self, action: Action) -> bool:
        state = self._state
        try:
            value = float(action.value)
        except (TypeError, ValueError):
            return False
        if not state.controls.set_value(action.control_id, value):
            return False

        message = dial_message(action.control_id, value)
        if message is not None:
            state.logs.emit(*message)
        self._settle()
        return True

    def _handle_start_engines(self, action: Action) -> bool:
        accepted, reason = self._ignition.start(self._state, self._clock())
        action.message = reason
        if not accepted:
            self.log(reason)
            return False
        self._notifier.notify(NotificationEvent.ENGINE_IGNITION_CYCLE)
        self._settle()
        return True

    def _handle_stop_engines(self, action: Action) -> bool:
        accepted, reason = self._ignition.stop(self._state)
        action.message = reason
        if not accepted:
            self.log(reason)
            return False
        self._settle()
        return True

    def _handle_poll_ignition(self, action: Action) -> bool:
        now = self._clock() if action.value is None else float(action.value)
        outcome = self._ignition.poll(self._state, now)
        if outcome is None:
            return False
        if outcome != IgnitionState.STARTING:
            self._settle()
        return True

    def _handle_fuel_tick(self, action: Action) -> bool:
        if not self._state.systems.engines:
            return False
        if self._fuel.tick(self._state):
            self._notifier.notify(
                NotificationEvent.ENGINE_HEARTBEAT,
                ticks=self._fuel.ticks,
                total_fuel=self._state.systems.total_fuel(),
            )
        self._settle()
        return True

    def _handle_reactor_step(self, action: Action) -> bool:
        dt = self._config.reactor_step_s if action.value is None else float(action.value)
        reactor_step(self._state, self._config, dt)
        self._settle()
        return True

    def _handle_navigation_command(self, action: Action) -> bool:
        state = self._state
        text = str(action.value or "").strip()
        if not text:
            return False

        state.record_navigation_command(text, self._config.navigation_history_capacity)
        command = text.lower()

        if command == "start":
            state.navigation_command_activated = True
            state.logs.emit(
                LogLevel.INFO,
                "Navigation command interface activated - Navigation systems coming online",
                "Navigation Console",
            )
        elif command == "quit":
            state.navigation_command_activated = False
            state.logs.emit(
                LogLevel.WARNING,
                "Navigation command interface deactivated - Navigation systems going offline",
                "Navigation Console",
            )
        else:
            state.logs.emit(LogLevel.WARNING, f"Unknown command: {text}", "Navigation Console")
            return False

        self._settle()
        return True

    def _handle_prime(self, action: Action) -> bool:
        changed = [cid for cid in PRIME_CONTROLS if not self._state.controls.is_on(cid)]
        for control_id in changed:
            self._apply_switch(control_id)
        if not changed:
            return False
        self._settle()
        return True

    def _handle_kill_switch(self, action: Action) -> bool:
        changed = [cid for cid in FOOTER_CRITICAL_CONTROLS if self._state.controls.is_on(cid)]
        for control_id in changed:
            self._apply_switch(control_id)
        if not changed:
            return False
        self._settle()
        return True

    def _handle_calibrate_batteries(self, action: Action) -> bool:
        state = self._state
        for dial in BATTERY_DIALS:
            state.controls.set_value(dial, CALIBRATION_LEVEL)
        state.logs.emit(
            LogLevel.INFO,
            f"BATTERY CALIBRATION - All battery dials set to {CALIBRATION_LEVEL:.0f}%",
            "Battery Systems",
        )
        self._settle()
        return True

    def _handle_set_system_value(self, action: Action) -> bool:
        field_name = action.control_id
        if field_name not in NUMERIC_BOUNDS:
            return False
        try:
            value = clamp_field(field_name, float(action.value))
        except (TypeError, ValueError):
            return False

        state = self._state
        old = getattr(state.systems, field_name)
        if abs(value - old) < 0.01:
            return True

        state.systems = replace(state.systems, **{field_name: value})
        level, message = format_numeric_message(field_name, value)
        state.logs.emit(level, message, "Ship Systems")
        self._settle()
        return True

    def _handle_clear_logs(self, action: Action) -> bool:
        self._state.logs.operator_clear()
        return True

    def _handle_load_state(self, action: Action) -> bool:
        loaded = action.value
        if not isinstance(loaded, GameState):
            return False
        self._state = loaded
        self._fuel.ticks = 0
        logger.info("Panel state loaded (status=%s)", loaded.ship_status.name)
        self._settle()
        return True
