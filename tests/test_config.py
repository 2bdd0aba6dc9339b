"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from hue_lights.config import HueConfig


class TestHueConfig:
    """Test defaults, validation and environment parsing."""

    def test_defaults(self):
        cfg = HueConfig()
        assert cfg.bridge_ip is None
        assert cfg.username is None
        assert cfg.client_name == "hue-lights"
        assert cfg.timeout == 2.0
        assert cfg.rate_limit == 25
        assert cfg.rate_window == 1.0
        assert cfg.rate_poll_interval == 0.1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HUE_BRIDGE_IP", "10.0.0.2")
        monkeypatch.setenv("HUE_USERNAME", "abcdef0123456789")
        monkeypatch.setenv("HUE_CLIENT_NAME", "kitchen-panel")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("HUE_RATE_LIMIT", "10")
        monkeypatch.setenv("HUE_RATE_POLL_INTERVAL", "0.05")

        cfg = HueConfig.from_env()

        assert cfg.bridge_ip == "10.0.0.2"
        assert cfg.username == "abcdef0123456789"
        assert cfg.client_name == "kitchen-panel"
        assert cfg.log_level == "DEBUG"
        assert cfg.rate_limit == 10
        assert cfg.rate_poll_interval == 0.05

    def test_empty_env_values_mean_unset(self, monkeypatch):
        monkeypatch.setenv("HUE_BRIDGE_IP", "")
        monkeypatch.setenv("HUE_USERNAME", "")

        cfg = HueConfig.from_env()

        assert cfg.bridge_ip is None
        assert cfg.username is None

    def test_invalid_ip(self):
        with pytest.raises(ValidationError):
            HueConfig(bridge_ip="not-an-ip")

    def test_short_username(self):
        with pytest.raises(ValidationError):
            HueConfig(username="short")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            HueConfig(log_level="LOUD")

    def test_rate_limit_bounds(self):
        with pytest.raises(ValidationError):
            HueConfig(rate_limit=0)
        with pytest.raises(ValidationError):
            HueConfig(rate_window=0)
