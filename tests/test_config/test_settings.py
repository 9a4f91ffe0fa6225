"""Tests for environment settings."""

import pytest

from iot_status.config import Settings


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults match the documented probe deadlines."""
        for key in [
            "IOT_STATUS_CONNECT_TIMEOUT",
            "IOT_STATUS_TOTAL_TIMEOUT",
            "IOT_STATUS_PING_TIMEOUT",
            "IOT_STATUS_USER_AGENT",
            "IOT_STATUS_HTTP_PORT",
        ]:
            monkeypatch.delenv(key, raising=False)

        settings = Settings.from_env()

        assert settings.connect_timeout == 2.0
        assert settings.total_timeout == 3.0
        assert settings.ping_timeout == 2.0
        assert settings.user_agent == "IOT-Monitor/1.0"
        assert settings.http_port == 8000

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values come from IOT_STATUS_* variables."""
        monkeypatch.setenv("IOT_STATUS_CONFIG_PATH", "/etc/iot/devices.ini")
        monkeypatch.setenv("IOT_STATUS_TOTAL_TIMEOUT", "4.5")
        monkeypatch.setenv("IOT_STATUS_MAX_CONCURRENCY", "32")
        monkeypatch.setenv("IOT_STATUS_LOG_LEVEL", "debug")
        monkeypatch.setenv("IOT_STATUS_INCLUDE_TRACEBACK", "yes")

        settings = Settings.from_env()

        assert settings.config_path == "/etc/iot/devices.ini"
        assert settings.total_timeout == 4.5
        assert settings.max_concurrency == 32
        assert settings.log_level == "DEBUG"
        assert settings.include_traceback is True

    @pytest.mark.parametrize("value", ["abc", "0", "-3"])
    def test_invalid_int_uses_default(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """Invalid or non-positive ints fall back to the default."""
        monkeypatch.setenv("IOT_STATUS_MAX_CONCURRENCY", value)

        assert Settings.from_env().max_concurrency == 256

    def test_invalid_float_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Invalid floats fall back to the default."""
        monkeypatch.setenv("IOT_STATUS_CONNECT_TIMEOUT", "soon")

        assert Settings.from_env().connect_timeout == 2.0

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("on", True), ("false", False), ("nope", False)])
    def test_bool_parsing(self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
        """Booleans accept 1/true/yes/on."""
        monkeypatch.setenv("IOT_STATUS_LOG_PAYLOADS", value)

        assert Settings.from_env().log_payloads is expected
