#!/usr/bin/env python3
"""
Title: Control Panel Command-Line Interface
Author: Control Panel Engineering Team
Date Created: 2026-10-16
Last Modified: 2026-10-19
Version: 1.2

Purpose:
Interactive operator console for the control panel core. Parses one command
per line, forwards it to the controller, prints the result, and annunciates
the ship status whenever it changes. Each command is appended to the CSV
command trail when a recorder is wired.

Targeted Requirements:
- The ship status is annunciated only when it changes.

Dependencies:
- Python 3.10+
- app_context.py, spaceship_controller.py, event_log.py
"""

from control_catalog import CONSOLE_TO_SELECTOR, is_dial, is_switch
from event_log import LogEntry
from game_state import BOOLEAN_SYSTEMS, NUMERIC_BOUNDS
from ship_states import ShipStatus

PROMPT = "panel> "


class StatusAnnunciator:
    # Prints the ship status only when it differs from the last one printed.
    def __init__(self):
        self._last: ShipStatus | None = None

    def reset(self) -> None:
        self._last = None

    def __call__(self, controller) -> None:
        status = controller.ship_status
        if status != self._last:
            print(f"STATUS: {status.name}")
            self._last = status


def _print_help() -> None:
    print(
        """
Commands
  help                         Print help
  q                            Quit (state is saved)

Panel inputs
  toggle <id>                  Flip a switch or select a console slot (f4..f11)
  set <id> <value>             Write a dial (out-1 out-2 mon-1 mon-2 cue-1 nav-thrust nav-vector)
  console <nav1..nav8>         Select a navigation console
  prime                        Engage SAFE/ARM/LOCK
  kill                         Disengage SAFE/ARM/LOCK/KEY
  calibrate                    Set all battery dials to 50%

Engines and navigation
  start                        Begin the engine ignition sequence
  stop                         Stop running engines or abort ignition
  nav <text>                   Send a navigation console command (start, quit)

Systems
  sys <field> <value>          Write a numeric system value (clamped)
  status                       Print ship status summary
  systems                      Print all subsystem values
  logs [all]                   Print the event log (filtered unless EMERGENCY is on)
  clear-logs                   Mark the log buffer as cleared
  save                         Save state now
"""
    )


def _fmt_entry(entry: LogEntry) -> str:
    return f"[{entry.level.value.upper():8}] {entry.source}: {entry.message}"


def _print_status(controller) -> None:
    state = controller.state
    systems = state.systems
    print("\n=== STATUS ===")
    print(f"Ship: {state.ship_status.name}")
    print(f"Console: {state.current_console.upper()}")
    print(f"CriticalControlsMet: {state.critical_controls_met}")
    print(f"PowerGainPanel: {state.power_gain_panel_complete}  SafetyProtocols: {state.footer_critical_complete}")
    print(f"Ignition: {controller.ignition.name}  Progress: {systems.engine_startup_progress:.0f}%")
    print(f"ReactorTemperature: {systems.reactor_temperature:.1f}  MissionTime: {systems.mission_time:.0f}s")
    print(f"TotalFuel: {systems.total_fuel():.1f}  StarterDamage: {systems.starter_damage:.0f}%")
    print(f"NavigationCommand: {state.navigation_command_activated}  BatteryBalanced: {state.battery_balanced}")
    print("=============\n")


def _print_systems(controller) -> None:
    systems = controller.state.systems
    for name in BOOLEAN_SYSTEMS:
        print(f"  {name:22} {'ON' if getattr(systems, name) else 'off'}")
    for name in NUMERIC_BOUNDS:
        print(f"  {name:22} {getattr(systems, name):.2f}")


def _print_logs(controller, show_all: bool) -> None:
    state = controller.state
    entries = state.logs.visible(show_all or state.controls.is_on("emergency"))
    if not entries:
        print("(no log entries)")
    for entry in entries:
        print(_fmt_entry(entry))


def run_command(ctx, line: str) -> bool:
    # Returns False when the operator asked to quit.
    controller = ctx.controller
    cmd = line.strip()
    if not cmd:
        return True

    parts = cmd.split()
    op = parts[0].lower()
    accepted: bool | None = None

    if op in ("q", "quit", "exit"):
        ctx.shutdown()
        return False

    if op == "help":
        _print_help()

    elif op == "toggle":
        if len(parts) != 2 or not is_switch(parts[1]):
            print("Usage: toggle <switch id>")
        else:
            accepted = controller.toggle(parts[1])

    elif op == "set":
        if len(parts) != 3 or not is_dial(parts[1]):
            print("Usage: set <dial id> <value>")
        else:
            try:
                value = float(parts[2])
            except ValueError:
                print("Invalid value.")
            else:
                accepted = controller.set_value(parts[1], value)

    elif op == "console":
        selector = CONSOLE_TO_SELECTOR.get(parts[1].lower()) if len(parts) == 2 else None
        if selector is None:
            print("Usage: console <nav1..nav8>")
        else:
            accepted = controller.toggle(selector)

    elif op == "start":
        accepted = controller.start_engines()

    elif op == "stop":
        accepted = controller.stop_engines()

    elif op == "nav":
        if len(parts) < 2:
            print("Usage: nav <command>")
        else:
            accepted = controller.navigation_command(cmd.split(maxsplit=1)[1])

    elif op == "prime":
        accepted = controller.prime()

    elif op == "kill":
        accepted = controller.kill_switch()

    elif op == "calibrate":
        accepted = controller.calibrate_batteries()

    elif op == "sys":
        if len(parts) != 3 or parts[1] not in NUMERIC_BOUNDS:
            print("Usage: sys <numeric field> <value>")
        else:
            try:
                value = float(parts[2])
            except ValueError:
                print("Invalid value.")
            else:
                accepted = controller.set_system_value(parts[1], value)

    elif op == "status":
        _print_status(controller)

    elif op == "systems":
        _print_systems(controller)

    elif op == "logs":
        _print_logs(controller, show_all=len(parts) == 2 and parts[1].lower() == "all")

    elif op == "clear-logs":
        accepted = controller.operator_clear_logs()

    elif op == "save":
        accepted = controller.autosave()
        print("State saved." if accepted else "State not saved.")

    else:
        print("Unknown command. Type 'help'.")
        return True

    if accepted is not None:
        print("OK" if accepted else "REJECTED")

    if ctx.recorder is not None:
        ctx.recorder.record(
            command=cmd,
            action=op,
            accepted=bool(accepted) if accepted is not None else True,
            ship_status=controller.ship_status.name,
        )
    return True


def command_loop(ctx, annunciator: StatusAnnunciator | None = None) -> None:
    annunciator = annunciator if annunciator is not None else StatusAnnunciator()
    _print_help()
    annunciator(ctx.controller)

    while not ctx.shutdown_event.is_set():
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            ctx.shutdown()
            break

        if not run_command(ctx, line):
            break
        annunciator(ctx.controller)


if __name__ == "__main__":
    from main import main

    raise SystemExit(main())
