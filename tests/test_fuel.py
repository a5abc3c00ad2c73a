"""
Title: Fuel Consumption Scheduler Tests
Date Created: 2026-10-15
Last Modified: 2026-10-19
Version: 1.2

Purpose:
Verifies cascading consumption across the eight reservoirs, that no level
ever goes negative, that nothing is consumed while the engines are offline,
that band crossings are logged, the periodic engine heartbeat, and that a
controller fuel tick settles the interlocks.

Dependencies:
- Python 3.10+
- pytest
- fuel_scheduler.py, game_state.py, spaceship_controller.py
"""

from dataclasses import replace

import pytest

from control_catalog import CRITICAL_CONTROLS
from fuel_scheduler import FuelScheduler, consume_fuel
from game_state import GameState, SystemSnapshot
from notifications import NotificationEvent, Notifier
from panel_configuration import FUEL_TANKS, PanelConfiguration
from ship_states import LogLevel
from spaceship_controller import SpaceshipController


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.t: float = float(start)

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


class FixedDraw:
    def random(self) -> float:
        return 0.99


class QuietController(SpaceshipController):
    def log(self, msg: str) -> None:
        pass


def running_state(**systems) -> GameState:
    state = GameState.initial()
    state.systems = replace(state.systems, engines=True, **systems)
    return state


class TestConsumeFuel:
    def test_draws_from_first_non_empty_tank(self):
        systems, consumed = consume_fuel(SystemSnapshot(), 0.1)

        assert consumed == pytest.approx(0.1)
        assert systems.main_fuel == pytest.approx(99.9)
        assert systems.reserve_fuel == 100.0

    def test_cascades_into_next_tank(self):
        systems, consumed = consume_fuel(SystemSnapshot(main_fuel=0.05), 0.1)

        assert consumed == pytest.approx(0.1)
        assert systems.main_fuel == 0.0
        assert systems.reserve_fuel == pytest.approx(99.95)

    def test_skips_empty_tanks(self):
        empty = {tank: 0.0 for tank in FUEL_TANKS[:3]}
        systems, _ = consume_fuel(SystemSnapshot(**empty), 0.1)

        assert systems.emergency_fuel == pytest.approx(99.9)

    def test_all_empty_consumes_nothing(self):
        empty = SystemSnapshot(**{tank: 0.0 for tank in FUEL_TANKS})
        systems, consumed = consume_fuel(empty, 0.1)

        assert consumed == 0.0
        assert systems is empty


class TestFuelScheduler:
    def test_thousand_ticks_consume_one_hundred_units(self):
        state = running_state()
        scheduler = FuelScheduler(PanelConfiguration())
        before = state.systems.total_fuel()

        for _ in range(1000):
            scheduler.tick(state)
            assert all(level >= 0.0 for level in state.systems.fuel_levels().values())

        assert before - state.systems.total_fuel() == pytest.approx(100.0, abs=1e-6)
        assert state.systems.main_fuel == pytest.approx(0.0, abs=1e-6)

    def test_no_consumption_while_engines_offline(self):
        state = GameState.initial()
        scheduler = FuelScheduler(PanelConfiguration())

        assert scheduler.tick(state) is False
        assert state.systems.total_fuel() == 800.0
        assert scheduler.ticks == 0

    def test_exhausted_reservoirs_stay_at_zero(self):
        state = running_state(**{tank: 0.0 for tank in FUEL_TANKS[:-1]}, scram_fuel=0.05)
        scheduler = FuelScheduler(PanelConfiguration())

        scheduler.tick(state)
        scheduler.tick(state)

        assert state.systems.total_fuel() == 0.0

    def test_band_crossing_logged_once(self):
        state = running_state(main_fuel=25.05)
        scheduler = FuelScheduler(PanelConfiguration())

        scheduler.tick(state)
        scheduler.tick(state)

        fuel_logs = [e for e in state.logs if e.source == "Fuel Management"]
        assert len(fuel_logs) == 1
        assert fuel_logs[0].level == LogLevel.WARNING
        assert fuel_logs[0].message.startswith("MAIN FUEL at ")
        assert fuel_logs[0].message.endswith("Low fuel warning")

    def test_heartbeat_every_sixty_ticks(self):
        state = running_state()
        scheduler = FuelScheduler(PanelConfiguration())

        due = [scheduler.tick(state) for _ in range(120)]

        assert [i + 1 for i, flag in enumerate(due) if flag] == [60, 120]


class TestControllerFuelTick:
    def _online(self, controller: SpaceshipController, clock: FakeClock) -> None:
        for control_id in CRITICAL_CONTROLS:
            controller.toggle(control_id)
        for control_id in ("engine-master", "engine-pwr-1", "engine-pwr-2", "engine-ready-1", "engine-ready-2"):
            controller.toggle(control_id)
        controller.start_engines()
        clock.advance(5.0)
        controller.poll_ignition()
        assert controller.state.systems.engines is True

    def test_heartbeat_is_published_as_notification(self):
        events = []
        clock = FakeClock()
        controller = QuietController(
            config=PanelConfiguration(name="TEST", heartbeat_every_ticks=2),
            clock=clock,
            wall_clock=clock,
            rng=FixedDraw(),
            notifier=Notifier(lambda event, payload: events.append((event, payload))),
        )
        self._online(controller, clock)

        controller.fuel_tick()
        controller.fuel_tick()

        heartbeats = [payload for event, payload in events if event == NotificationEvent.ENGINE_HEARTBEAT]
        assert len(heartbeats) == 1
        assert heartbeats[0]["ticks"] == 2
        assert heartbeats[0]["total_fuel"] == pytest.approx(799.8)

    def test_tick_after_supply_loss_settles_engines_offline(self):
        clock = FakeClock()
        controller = QuietController(
            config=PanelConfiguration(name="TEST"),
            clock=clock,
            wall_clock=clock,
            rng=FixedDraw(),
        )
        controller.state.systems = replace(controller.state.systems, engines=True)

        assert controller.fuel_tick() is True

        assert controller.state.systems.engines is False
        assert controller.state.logs.last().message.startswith("ENGINES SHUTDOWN - Power supply disrupted")
        assert controller.fuel_tick() is False

    def test_tick_rejected_while_engines_offline(self):
        controller = SpaceshipController(config=PanelConfiguration(name="TEST"))
        assert controller.fuel_tick() is False
