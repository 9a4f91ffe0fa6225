"""Tests for dependency injection container."""

import pytest

from iot_status.config import ConfigStore, Settings
from iot_status.dependencies import Dependencies
from iot_status.services import BatchCoordinator, HttpProbe, StatusChecker


class TestDependencies:
    """Test Dependencies container."""

    def test_create_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Dependencies.create() should load settings from the environment."""
        monkeypatch.setenv("IOT_STATUS_PING_TIMEOUT", "1.5")

        deps = Dependencies.create()

        assert isinstance(deps.settings, Settings)
        assert deps.settings.ping_timeout == 1.5

    def test_probe_uses_settings(self) -> None:
        """HTTP probe deadlines come from settings."""
        deps = Dependencies(settings=Settings(connect_timeout=0.5, total_timeout=1.0, user_agent="t/1"))

        probe = deps.http_probe()

        assert isinstance(probe, HttpProbe)
        assert probe.connect_timeout == 0.5
        assert probe.total_timeout == 1.0
        assert probe.user_agent == "t/1"

    def test_checker_and_coordinator_use_settings(self) -> None:
        """Checker and coordinator share ping and concurrency settings."""
        deps = Dependencies(settings=Settings(ping_timeout=0.7, max_concurrency=8))

        checker = deps.checker()
        coordinator = deps.coordinator()

        assert isinstance(checker, StatusChecker)
        assert checker.ping_timeout == 0.7
        assert isinstance(coordinator, BatchCoordinator)
        assert coordinator.ping_timeout == 0.7
        assert coordinator.max_concurrency == 8

    def test_open_store_reads_fresh_catalog(self, tmp_path) -> None:
        """Each store sees the file as it is now."""
        path = tmp_path / "devices.ini"
        deps = Dependencies(settings=Settings(config_path=str(path)))

        assert deps.open_store().categories() == {}
        path.write_text("[Printers]\nLobby = 10.0.0.20\n")

        store = deps.open_store()
        assert isinstance(store, ConfigStore)
        assert store.categories() == {"Printers": {"Lobby": "10.0.0.20"}}
