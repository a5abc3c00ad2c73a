"""
Title: JSON State Store Tests
Author: Control Panel Engineering Team
Date Created: 2026-10-16
Last Modified: 2026-10-19
Version: 1.2

Purpose:
Verifies saving and loading the single persisted panel snapshot: the
last_saved stamp, merge onto the initial snapshot for missing keys, ignoring
unknown keys, trimming the navigation history to the configured capacity,
releasing engaged emergency reset guards, falling back to the initial state
for malformed or wrongly typed data, and failed writes reporting False
instead of raising.

Targeted Requirements:
- Snapshot merge, corrupt snapshot fallback and reset guard release on load.

Dependencies:
- Python 3.10+
- pytest (tmp_path, caplog)
- state_recorder.py, game_state.py, spaceship_controller.py

Related Documents:
- Control Panel Requirements
- Control Panel Architecture Description
- Control Panel Hazard Log

Safety and Certification Disclaimer:
All artefacts in this repository are produced for academic assessment purposes only.
They do not represent certified software and must not be used in real-world aerospace
or safety-critical systems.
"""

import json
import logging

from control_catalog import CRITICAL_CONTROLS
from game_state import GameState
from panel_configuration import PanelConfiguration
from ship_states import ShipStatus
from spaceship_controller import SpaceshipController
from state_recorder import JsonStateStore


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.t: float = float(start)

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


class QuietController(SpaceshipController):
    def log(self, msg: str) -> None:
        pass


def make_store(tmp_path, start: float = 1_700_000_000.0) -> tuple[JsonStateStore, FakeClock]:
    clock = FakeClock(start)
    return JsonStateStore(filepath=tmp_path / "state" / "panel.json", clock=clock), clock


class TestSaveLoad:
    def test_save_then_load_restores_panel(self, tmp_path):
        store, clock = make_store(tmp_path)
        controller = QuietController(config=PanelConfiguration(name="TEST"), wall_clock=clock, state_store=store)
        for control_id in CRITICAL_CONTROLS:
            controller.toggle(control_id)
        controller.toggle("f7")
        controller.navigation_command("start")

        assert controller.autosave() is True

        loaded = store.load()
        assert loaded is not None
        assert loaded.controls == controller.state.controls
        assert loaded.systems == controller.state.systems
        assert loaded.current_console == "nav4"
        assert loaded.ship_status == ShipStatus.ONLINE
        assert loaded.navigation_command_history == ["> start"]
        assert [e.message for e in loaded.logs] == [e.message for e in controller.state.logs]
        assert loaded.last_saved == clock.t

    def test_save_creates_parent_directory(self, tmp_path):
        store, _ = make_store(tmp_path)
        assert store.save(GameState.initial()) is True
        assert store.path.exists()

    def test_missing_file_loads_initial(self, tmp_path):
        store, _ = make_store(tmp_path)
        assert store.load() is None
        assert store.load_or_initial().to_dict() == GameState.initial().to_dict()

    def test_clear_removes_snapshot(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.save(GameState.initial())

        store.clear()
        store.clear()

        assert not store.path.exists()


class TestMerge:
    def test_missing_keys_keep_initial_values(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(json.dumps({"systems": {"hull_integrity": 42.0}}), encoding="utf-8")

        loaded = store.load()

        assert loaded.systems.hull_integrity == 42.0
        assert loaded.systems.battery_power == 98.7
        assert loaded.controls.is_on("f4") is True
        assert loaded.last_saved is None

    def test_unknown_keys_are_ignored(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(
            json.dumps({"mystery": 1, "controls": {"warp-core": True, "shield": True}, "systems": {"cloak": True}}),
            encoding="utf-8",
        )

        loaded = store.load()

        assert loaded is not None
        assert loaded.controls.is_on("shield") is True
        assert "warp-core" not in loaded.controls.values

    def test_numeric_fields_are_clamped(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(json.dumps({"systems": {"main_fuel": 250.0, "hull_integrity": -3}}), encoding="utf-8")

        loaded = store.load()

        assert loaded.systems.main_fuel == 100.0
        assert loaded.systems.hull_integrity == 0.0

    def test_ignition_in_progress_is_not_resumed(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(
            json.dumps({"systems": {"engine_starting": True, "engine_startup_progress": 40.0}}),
            encoding="utf-8",
        )

        loaded = store.load()

        assert loaded.systems.engine_starting is False
        assert loaded.systems.engine_startup_progress == 0.0

    def test_navigation_history_trimmed_to_last_eight(self, tmp_path):
        store, _ = make_store(tmp_path)
        history = [f"> cmd{i}" for i in range(12)]
        store.path.write_text(json.dumps({"navigation_command_history": history}), encoding="utf-8")

        loaded = store.load()

        assert loaded.navigation_command_history == history[-8:]

    def test_broken_selector_group_is_repaired(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(json.dumps({"controls": {"f4": True, "f9": True}}), encoding="utf-8")

        loaded = store.load()

        assert [slot for slot in ("f4", "f9") if loaded.controls.is_on(slot)] == ["f4"]
        assert loaded.current_console == "nav1"

    def test_navigation_history_trimmed_to_configured_capacity(self, tmp_path):
        store = JsonStateStore(filepath=tmp_path / "panel.json", clock=FakeClock(), history_capacity=3)
        history = [f"> cmd{i}" for i in range(6)]
        store.path.write_text(json.dumps({"navigation_command_history": history}), encoding="utf-8")

        loaded = store.load()

        assert loaded.navigation_command_history == ["> cmd3", "> cmd4", "> cmd5"]

    def test_engaged_reset_guards_load_released(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(
            json.dumps({"controls": {"f12": True, "f13": True, "shield": True}}),
            encoding="utf-8",
        )

        loaded = store.load()

        assert loaded.controls.is_on("f12") is False
        assert loaded.controls.is_on("f13") is False
        assert loaded.controls.is_on("shield") is True

    def test_unrelated_toggle_after_load_does_not_reset(self, tmp_path):
        store, clock = make_store(tmp_path)
        store.path.write_text(
            json.dumps({"controls": {"f12": True, "f13": True, "shield": True}}),
            encoding="utf-8",
        )
        controller = QuietController(config=PanelConfiguration(name="TEST"), wall_clock=clock, state_store=store)
        controller.load_state(store.load())

        controller.toggle("monitor")

        assert controller.state.controls.is_on("shield") is True
        assert controller.state.controls.is_on("monitor") is True
        assert store.path.exists()
        assert not any(e.message.startswith("EMERGENCY SYSTEM RESET") for e in controller.state.logs)


class TestCorruptSnapshot:
    def test_malformed_json_falls_back_to_initial(self, tmp_path, caplog):
        store, _ = make_store(tmp_path)
        store.path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="state_recorder"):
            assert store.load() is None
            state = store.load_or_initial()

        assert state.ship_status == ShipStatus.OFFLINE
        assert len(state.logs) == 0
        assert any("Failed to load panel state" in r.getMessage() for r in caplog.records)

    def test_wrong_types_fall_back_to_initial(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(json.dumps({"systems": {"power": "yes"}}), encoding="utf-8")

        assert store.load() is None

    def test_non_object_root_falls_back_to_initial(self, tmp_path):
        store, _ = make_store(tmp_path)
        store.path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

        assert store.load() is None

    def test_save_to_directory_path_returns_false(self, tmp_path):
        target = tmp_path / "occupied"
        (target.with_suffix(".tmp")).mkdir()
        store = JsonStateStore(filepath=target, clock=FakeClock())

        assert store.save(GameState.initial()) is False
