"""
Tests for environment configuration.
"""

import pytest
from pydantic import ValidationError

from ..config import GameConfig
from ..engine_core.timer import TimerExpiry


class TestGameConfig:
    """Tests for GameConfig settings loading."""

    def test_defaults(self):
        config = GameConfig()

        assert config.timer_seconds == 60
        assert config.timer_expiry == TimerExpiry.HOLD
        assert config.catalog_path is None
        assert config.log_level == "INFO"
        assert config.server_clock is True
        assert config.clock_interval == 1.0
        assert config.allowed_origins_list == ["*"]

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("JOBGUESS_TIMER_SECONDS", "90")
        monkeypatch.setenv("JOBGUESS_TIMER_EXPIRY", "advance")
        monkeypatch.setenv("JOBGUESS_CATALOG_PATH", "/tmp/jobs.json")
        monkeypatch.setenv("JOBGUESS_LOG_LEVEL", "debug")
        monkeypatch.setenv("JOBGUESS_SESSION_MAX_AGE", "600")
        monkeypatch.setenv("JOBGUESS_SERVER_CLOCK", "false")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,")

        config = GameConfig()

        assert config.timer_seconds == 90
        assert config.timer_expiry == TimerExpiry.ADVANCE
        assert config.catalog_path == "/tmp/jobs.json"
        assert config.log_level == "DEBUG"
        assert config.session_max_age == 600
        assert config.server_clock is False
        assert config.allowed_origins_list == ["http://a.test", "http://b.test"]

    def test_arguments_override_environment(self, monkeypatch):
        monkeypatch.setenv("JOBGUESS_TIMER_SECONDS", "90")
        assert GameConfig(timer_seconds=15).timer_seconds == 15

    def test_empty_variable_uses_default(self, monkeypatch):
        monkeypatch.setenv("JOBGUESS_TIMER_SECONDS", "")
        assert GameConfig().timer_seconds == 60

    @pytest.mark.parametrize("var,value", [
        ("JOBGUESS_TIMER_SECONDS", "0"),
        ("JOBGUESS_TIMER_SECONDS", "soon"),
        ("JOBGUESS_TIMER_EXPIRY", "explode"),
        ("JOBGUESS_LOG_LEVEL", "LOUD"),
        ("JOBGUESS_CLOCK_INTERVAL", "0"),
    ])
    def test_invalid_values(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        with pytest.raises(ValidationError):
            GameConfig()
