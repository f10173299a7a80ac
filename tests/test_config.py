"""Tests for TargetConfig and settings validation."""

from __future__ import annotations

import logging

import pytest


class TestTargetConfig:

    def test_defaults(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.resolver import TieBreak

        config = TargetConfig()
        assert config.calendar_name == "Thermostat"
        assert config.granularity_minutes == 15
        assert config.lookahead_minutes == 180
        assert config.default_target == 0
        assert config.tie_break is TieBreak.EARLIEST_CREATED

    def test_resolution(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.resolution import BucketResolution

        assert TargetConfig(granularity_minutes=30).resolution == BucketResolution(30)

    def test_tie_break_from_string(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.resolver import TieBreak

        config = TargetConfig(tie_break="latest_created")
        assert config.tie_break is TieBreak.LATEST_CREATED

    @pytest.mark.parametrize(
        "kwargs, fragment",
        [
            ({"granularity_minutes": 0}, "granularity_minutes must be >= 1"),
            ({"lookahead_minutes": -1}, "lookahead_minutes must be >= 0"),
            ({"calendar_name": ""}, "calendar_name"),
            ({"default_target": "warm"}, "default_target must be an integer"),
            ({"tie_break": "newest"}, "tie_break must be one of"),
        ],
        ids=["granularity", "lookahead", "name", "default", "tie_break"],
    )
    def test_invalid(self, kwargs, fragment):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.types import ConfigurationError

        with pytest.raises(ConfigurationError, match=fragment):
            TargetConfig(**kwargs)

    def test_all_errors_reported(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.types import ConfigurationError

        with pytest.raises(ConfigurationError) as exc_info:
            TargetConfig(granularity_minutes=0, lookahead_minutes=-5)
        assert "granularity_minutes" in exc_info.value.reason
        assert "lookahead_minutes" in exc_info.value.reason

    def test_frozen(self):
        from setpoint_schedule.config import TargetConfig

        with pytest.raises(AttributeError):
            TargetConfig().granularity_minutes = 5  # type: ignore[misc]


class TestFromMapping:
    """String-valued settings as delivered by an automation engine."""

    def test_full_mapping(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.resolver import TieBreak

        config = TargetConfig.from_mapping({
            "calendarName": "Heating",
            "calendarGranularity": "30",
            "calendarLookahead": "240",
            "defaultTarget": "16",
            "tieBreak": "latest_created",
        })
        assert config == TargetConfig(
            calendar_name="Heating",
            granularity_minutes=30,
            lookahead_minutes=240,
            default_target=16,
            tie_break=TieBreak.LATEST_CREATED,
        )

    def test_missing_and_empty_keep_defaults(self):
        from setpoint_schedule.config import TargetConfig

        config = TargetConfig.from_mapping({"calendarName": "", "calendarGranularity": ""})
        assert config == TargetConfig()

    def test_unparseable_number_warns_and_keeps_default(self, caplog):
        from setpoint_schedule.config import TargetConfig

        with caplog.at_level(logging.WARNING, logger="setpoint_schedule"):
            config = TargetConfig.from_mapping({"calendarLookahead": "three hours"})
        assert config.lookahead_minutes == 180
        assert "calendarLookahead" in caplog.text

    def test_parsed_but_invalid_raises(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.types import ConfigurationError

        with pytest.raises(ConfigurationError, match="granularity_minutes"):
            TargetConfig.from_mapping({"calendarGranularity": "0"})

    def test_unknown_tie_break_raises(self):
        from setpoint_schedule.config import TargetConfig
        from setpoint_schedule.types import ConfigurationError

        with pytest.raises(ConfigurationError, match="tie_break"):
            TargetConfig.from_mapping({"tieBreak": "random"})


class TestValidateConfig:

    def test_valid(self):
        from setpoint_schedule.schema import validate_config

        assert validate_config("Thermostat", 15, 180, 0) == []

    def test_bool_is_not_an_integer(self):
        from setpoint_schedule.schema import validate_config

        errors = validate_config("Thermostat", True, 180, False)
        assert len(errors) == 2
