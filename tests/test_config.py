"""Tests for warble.config — AppConfig defaults and immutability."""

import dataclasses

import pytest

from warble.config import AppConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.static_dir == "assets"
        assert config.static_url == "/"
        assert config.ws_idle_timeout is None
        assert config.ws_max_message_size == 1_048_576
        assert config.log_level == "info"
        assert config.access_log is True

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            AppConfig().port = 1  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(AppConfig(), ws_idle_timeout=30.0)
        assert config.ws_idle_timeout == 30.0
