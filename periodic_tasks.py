"""
Title: Periodic Tasks and Timer Supervision
Author: Control Panel Engineering Team
Date Created: 2026-10-15
Last Modified: 2026-10-18
Version: 1.2

Purpose:
Provides a lightweight periodic task abstraction (background daemon thread
plus stop event, or synchronous stepping for tests) and the supervisor that
keeps the control panel's timer-driven processes in line with the state:

- fuel tick (1 s)          runs only while the engines are online
- ignition poll (100 ms)   runs only while an ignition sequence is starting
- reactor step (1 s)       runs while the panel runs
- autosave (30 s)          runs while the panel runs

Targeted Requirements:
- Fuel and ignition tasks run only while the engine state requires them.
- A failing task body is logged and never stops the task.

Scope and Limitations:
- Timing is approximate and not real-time deterministic.
- Task bodies go through the controller's serialized dispatch; the tasks
  themselves hold no panel state.
- Stopping is idempotent and never raises, including from the task's own
  thread.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.

Dependencies:
- Python 3.10+
- threading, logging (standard library)
- panel_configuration.py

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
import threading
from typing import Callable, Protocol

from panel_configuration import PanelConfiguration

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(self, name: str, period_s: float, body: Callable[[], None]):
        self._name = name
        self._period_s = float(period_s)
        self._body = body
        self._running = False
        self._stop_evt = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def period_s(self) -> float:
        return self._period_s

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._stop_evt = threading.Event()
            self._thread = threading.Thread(target=self._run, args=(self._stop_evt,), name=self._name, daemon=True)
            self._thread.start()
        logger.debug("Periodic task %s started (period=%.3fs)", self._name, self._period_s)

    def stop(self, join: bool = True) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._stop_evt.set()
            thread, self._thread = self._thread, None
        if join and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        logger.debug("Periodic task %s stopped", self._name)

    def step(self, n: int = 1) -> None:
        for _ in range(max(1, int(n))):
            self._tick()

    def _tick(self) -> None:
        try:
            self._body()
        except Exception:
            logger.exception("Unhandled exception in periodic task %s", self._name)

    def _run(self, stop_evt: threading.Event) -> None:
        while not stop_evt.wait(self._period_s):
            self._tick()


class PanelDriver(Protocol):
    def fuel_tick(self): ...
    def poll_ignition(self, now: float | None = None): ...
    def reactor_step(self, dt: float | None = None): ...
    def autosave(self) -> bool: ...


TaskFactory = Callable[[str, float, Callable[[], None]], PeriodicTask]


class TimerSupervisor:
    def __init__(
        self,
        driver: PanelDriver,
        config: PanelConfiguration,
        task_factory: TaskFactory = PeriodicTask,
    ):
        self._config = config
        self.fuel = task_factory("fuel-tick", config.fuel_tick_s, driver.fuel_tick)
        self.ignition = task_factory("ignition-poll", config.ignition_poll_s, driver.poll_ignition)
        self.reactor = task_factory(
            "reactor-step", config.reactor_step_s, lambda: driver.reactor_step(config.reactor_step_s)
        )
        self.autosave = task_factory("autosave", config.autosave_s, driver.autosave)

    def tasks(self) -> tuple[PeriodicTask, ...]:
        return self.fuel, self.ignition, self.reactor, self.autosave

    def start(self) -> None:
        self.reactor.start()
        self.autosave.start()

    def sync(self, engines_online: bool, engine_starting: bool) -> None:
        if engines_online:
            self.fuel.start()
        else:
            self.fuel.stop(join=False)

        if engine_starting:
            self.ignition.start()
        else:
            self.ignition.stop(join=False)

    def shutdown(self) -> None:
        for task in self.tasks():
            task.stop()
