"""Tests for WatchdogConfig."""

import logging

import pytest

from apptimer.config import WatchdogConfig
from apptimer.errors import ConfigError


class TestValidate:
    """Tests for WatchdogConfig.validate."""

    def test_valid_config(self, directory):
        """Test a valid configuration is built with defaults."""
        config = WatchdogConfig.validate("game.exe", 30, directory=directory)

        assert config.target_name == "game.exe"
        assert config.timer_minutes == 30
        assert config.max_cpu_percent == 1.0
        assert config.verbose is True
        assert config.cadence_minutes == 1
        assert directory.lookups == ["game.exe"]

    def test_custom_values(self, directory):
        """Test optional values are kept."""
        config = WatchdogConfig.validate("game.exe", 5, max_cpu_percent=2.5, verbose=False, directory=directory)

        assert config.max_cpu_percent == 2.5
        assert config.verbose is False

    def test_config_is_frozen(self, directory):
        """Test the configuration can't be changed after validation."""
        config = WatchdogConfig.validate("game.exe", 5, directory=directory)

        with pytest.raises(AttributeError):
            config.timer_minutes = 10

    def test_empty_target(self, directory):
        """Test an empty target name is rejected."""
        with pytest.raises(ConfigError):
            WatchdogConfig.validate("", 5, directory=directory)

    def test_target_not_running(self, directory):
        """Test a target that isn't running is rejected."""
        with pytest.raises(ConfigError, match="not running"):
            WatchdogConfig.validate("missing.exe", 5, directory=directory)

    @pytest.mark.parametrize("minutes", [0, -3])
    def test_non_positive_timer(self, directory, minutes):
        """Test timers below one minute are rejected."""
        with pytest.raises(ConfigError):
            WatchdogConfig.validate("game.exe", minutes, directory=directory)

    def test_fractional_timer(self, directory):
        """Test a timer must be whole minutes."""
        with pytest.raises(ConfigError):
            WatchdogConfig.validate("game.exe", 1.5, directory=directory)

    @pytest.mark.parametrize("threshold", [0.0, -1.0])
    def test_non_positive_threshold(self, directory, threshold):
        """Test a threshold of zero or less is rejected."""
        with pytest.raises(ConfigError):
            WatchdogConfig.validate("game.exe", 5, max_cpu_percent=threshold, directory=directory)

    def test_impractical_threshold_warns(self, directory, caplog):
        """Test a threshold of 25% or more warns but is accepted."""
        with caplog.at_level(logging.WARNING, logger="apptimer.config"):
            config = WatchdogConfig.validate("game.exe", 5, max_cpu_percent=25.0, directory=directory)

        assert config.max_cpu_percent == 25.0
        assert "not practical" in caplog.text

    def test_practical_threshold_does_not_warn(self, directory, caplog):
        """Test a normal threshold doesn't warn."""
        with caplog.at_level(logging.WARNING, logger="apptimer.config"):
            WatchdogConfig.validate("game.exe", 5, max_cpu_percent=5.0, directory=directory)

        assert "not practical" not in caplog.text
