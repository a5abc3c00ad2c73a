"""
Title: Panel Configuration Validation Tests
Date Created: 2026-10-13
Last Modified: 2026-10-17
Version: 1.0

Purpose:
Verifies the default timing constants, the derived helpers and that invalid
configurations are rejected with ValueError before any component uses them.

Dependencies:
- Python 3.10+
- pytest
- panel_configuration.py, ship_states.py
"""

import pytest

from panel_configuration import PanelConfiguration
from ship_states import IgnitionState


class TestDefaults:
    def test_timing_defaults(self):
        config = PanelConfiguration()
        config.validate()

        assert config.ignition_duration_s == 5.0
        assert config.ignition_poll_s == 0.1
        assert config.polls_per_ignition() == 50
        assert config.fuel_tick_s == 1.0 and config.fuel_per_tick == 0.1
        assert config.autosave_s == 30.0
        assert config.reload_delay_s == 0.1

    @pytest.mark.parametrize(
        "powered, state, expected",
        [
            (False, IgnitionState.ONLINE, (0.0, 2.0)),
            (True, IgnitionState.OFFLINE, (150.0, 5.0)),
            (True, IgnitionState.READY, (1000.0, 10.0)),
            (True, IgnitionState.STARTING, (2000.0, 20.0)),
            (True, IgnitionState.ONLINE, (2200.0, 20.0)),
            (True, IgnitionState.FAILED, (150.0, 5.0)),
        ],
    )
    def test_temperature_targets(self, powered, state, expected):
        assert PanelConfiguration().temperature_target(powered, state) == expected


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"ignition_duration_ms": 0},
            {"ignition_poll_ms": -100},
            {"fuel_tick_s": 0.0},
            {"reactor_step_s": -1.0},
            {"autosave_s": 0.0},
            {"fuel_per_tick": -0.1},
            {"log_capacity": 0},
            {"navigation_history_capacity": 0},
            {"starter_damage": 100.5},
            {"starter_damage": -1.0},
        ],
    )
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ValueError):
            PanelConfiguration(name="BAD", **overrides).validate()

    def test_invalid_temperature_profile_raises(self):
        profile = PanelConfiguration().temperature_profile
        profile[IgnitionState.READY] = (1000.0, 0.0)

        with pytest.raises(ValueError, match="temperature profile"):
            PanelConfiguration(temperature_profile=profile).validate()

    def test_configuration_is_immutable(self):
        config = PanelConfiguration()
        with pytest.raises(AttributeError):
            config.starter_damage = 10.0
