#!/usr/bin/env python3
import argparse
import logging
import random
import signal
import threading
import time
from pathlib import Path
from typing import Any

from app_context import AppContext
from cli import StatusAnnunciator, command_loop
from command_recorder import CommandRecorder
from game_state import GameState
from panel_configuration import PanelConfiguration
from periodic_tasks import TimerSupervisor
from spaceship_controller import SpaceshipController
from state_recorder import JsonStateStore


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def setup_signal_handlers(ctx: AppContext):
    def _handle_shutdown(signum, frame):
        logging.info("Shutdown signal received (%s)", signum)
        ctx.shutdown()

    signal.signal(signal.SIGINT, _handle_shutdown)
    signal.signal(signal.SIGTERM, _handle_shutdown)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Spacecraft control panel simulation")
    parser.add_argument("--state-file", default="panel_state.json", help="Path to the JSON state snapshot")
    parser.add_argument("--command-log", default="command_log.csv", help="Path to the CSV command trail")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the ignition random source")
    parser.add_argument("--starter-damage", type=float, default=50.0, help="Starter damage percentage (0-100)")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    parser.add_argument("--fresh", action="store_true", help="Ignore any saved state on start-up")
    return parser


def initialize(args: argparse.Namespace) -> AppContext:
    logging.info("Initializing application")

    config = PanelConfiguration(name="MK1", starter_damage=args.starter_damage)
    config.validate()

    clock = time.monotonic
    store = JsonStateStore(
        filepath=Path(args.state_file),
        clock=time.time,
        history_capacity=config.navigation_history_capacity,
    )
    recorder = CommandRecorder(filepath=Path(args.command_log), clock=time.time)

    def initial() -> GameState:
        return GameState.initial(
            log_capacity=config.log_capacity,
            starter_damage=config.starter_damage,
        )

    state = initial() if args.fresh else store.load_or_initial(initial)

    def host_reload() -> None:
        logging.warning("Host reload requested after emergency reset")
        print("\n*** PANEL RELOADED ***")

    controller = SpaceshipController(
        config=config,
        clock=clock,
        rng=random.Random(args.seed),
        state_store=store,
        host_reload=host_reload,
    )
    timers = TimerSupervisor(controller, config)
    controller.timers = timers
    controller.load_state(state)

    ctx = AppContext(
        controller=controller,
        config=config,
        clock=clock,
        shutdown_event=threading.Event(),
        state_store=store,
        timers=timers,
        recorder=recorder,
    )
    return ctx


def main(argv: Any = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        ctx = initialize(args)
    except ValueError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 2

    setup_signal_handlers(ctx)
    ctx.timers.start()

    command_loop(ctx, StatusAnnunciator())

    ctx.timers.shutdown()
    if not ctx.controller.autosave():
        logging.warning("Final state save failed")
    logging.info("Main loop terminated")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
