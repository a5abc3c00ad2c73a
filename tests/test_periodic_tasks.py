"""
Title: Periodic Task and Timer Supervision Tests
Date Created: 2026-10-16
Last Modified: 2026-10-19
Version: 1.2

Purpose:
Verifies the stoppable periodic task (idempotent start/stop, exception
isolation, self-stop from its own thread) and that the timer supervisor keeps
the fuel and ignition tasks aligned with the engine state the controller
publishes after every action.

Dependencies:
- Python 3.10+
- pytest
- periodic_tasks.py, spaceship_controller.py
"""

import logging
import threading

from control_catalog import CRITICAL_CONTROLS
from panel_configuration import PanelConfiguration
from periodic_tasks import PeriodicTask, TimerSupervisor
from spaceship_controller import SpaceshipController


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.t: float = float(start)

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


class FakeTask:
    def __init__(self, name: str, period_s: float, body):
        self.name = name
        self.period_s = period_s
        self.body = body
        self.running = False
        self.starts = 0
        self.stops = 0

    def start(self) -> None:
        if not self.running:
            self.starts += 1
        self.running = True

    def stop(self, join: bool = True) -> None:
        if self.running:
            self.stops += 1
        self.running = False

    def step(self, n: int = 1) -> None:
        for _ in range(n):
            self.body()


class FixedDraw:
    def random(self) -> float:
        return 0.99


class QuietController(SpaceshipController):
    def log(self, msg: str) -> None:
        pass


class TestPeriodicTask:
    def test_step_runs_body_synchronously(self):
        calls = []
        task = PeriodicTask("count", 60.0, lambda: calls.append(1))

        task.step(3)

        assert len(calls) == 3
        assert task.running is False

    def test_stop_is_idempotent(self):
        task = PeriodicTask("idle", 60.0, lambda: None)
        task.stop()

        task.start()
        task.start()
        assert task.running is True

        task.stop()
        task.stop()
        assert task.running is False

    def test_body_exception_is_logged_not_raised(self, caplog):
        def explode():
            raise RuntimeError("boom")

        task = PeriodicTask("faulty", 60.0, explode)
        with caplog.at_level(logging.ERROR, logger="periodic_tasks"):
            task.step()

        assert any("faulty" in r.getMessage() for r in caplog.records)

    def test_task_runs_on_its_thread_and_can_stop_itself(self):
        done = threading.Event()
        ran_on = []

        def body():
            ran_on.append(threading.current_thread().name)
            task.stop()
            done.set()

        task = PeriodicTask("self-stop", 0.01, body)
        task.start()

        assert done.wait(timeout=2.0)
        assert ran_on[0] == "self-stop"
        assert task.running is False


class TestTimerSupervisor:
    def _wired(self):
        clock = FakeClock()
        controller = QuietController(
            config=PanelConfiguration(name="TEST"),
            clock=clock,
            wall_clock=clock,
            rng=FixedDraw(),
        )
        timers = TimerSupervisor(controller, controller.config, task_factory=FakeTask)
        controller.timers = timers
        return controller, clock, timers

    def test_start_runs_reactor_and_autosave_only(self):
        _, _, timers = self._wired()

        timers.start()

        assert timers.reactor.running and timers.autosave.running
        assert not timers.fuel.running and not timers.ignition.running

    def test_periods_come_from_configuration(self):
        _, _, timers = self._wired()
        assert timers.fuel.period_s == 1.0
        assert timers.ignition.period_s == 0.1
        assert timers.reactor.period_s == 1.0
        assert timers.autosave.period_s == 30.0

    def test_ignition_and_fuel_follow_engine_state(self):
        c, clock, timers = self._wired()
        for control_id in CRITICAL_CONTROLS:
            c.toggle(control_id)
        for control_id in ("engine-master", "engine-pwr-1", "engine-pwr-2", "engine-ready-1", "engine-ready-2"):
            c.toggle(control_id)

        c.start_engines()
        assert timers.ignition.running is True
        assert timers.fuel.running is False

        clock.advance(5.0)
        timers.ignition.step()

        assert c.state.systems.engines is True
        assert timers.ignition.running is False
        assert timers.fuel.running is True

        timers.fuel.step(3)
        assert c.fuel_scheduler.ticks == 3

        c.stop_engines()
        assert timers.fuel.running is False
        assert timers.fuel.starts == 1 and timers.fuel.stops == 1

    def test_power_loss_during_ignition_stops_poll_task(self):
        c, _, timers = self._wired()
        for control_id in CRITICAL_CONTROLS:
            c.toggle(control_id)
        for control_id in ("engine-master", "engine-pwr-1", "engine-pwr-2", "engine-ready-1", "engine-ready-2"):
            c.toggle(control_id)
        c.start_engines()
        assert timers.ignition.running is True

        c.toggle("pwr-1")

        assert timers.ignition.running is False
        assert timers.fuel.running is False

    def test_shutdown_stops_everything(self):
        _, _, timers = self._wired()
        timers.start()
        timers.sync(engines_online=True, engine_starting=True)

        timers.shutdown()

        assert not any(task.running for task in timers.tasks())

    def test_reactor_task_steps_by_configured_interval(self):
        c, _, timers = self._wired()
        for control_id in CRITICAL_CONTROLS:
            c.toggle(control_id)

        timers.reactor.step(5)

        assert c.state.systems.mission_time == 5.0
