"""Dependency container for iot_status.

Holds settings only. Stores, probes and coordinators are built fresh for
each request so concurrent requests share no mutable state.
"""

from dataclasses import dataclass

from iot_status.config import ConfigStore, Settings
from iot_status.services import BatchCoordinator, HttpProbe, StatusChecker


@dataclass
class Dependencies:
    """Container for iot_status dependencies.

    Example:
        deps = Dependencies.create()
        store = deps.open_store()
        results = await deps.coordinator().check_many({...})
    """

    settings: Settings

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from environment settings."""
        return cls(settings=Settings.from_env())

    def open_store(self) -> ConfigStore:
        """Load the device catalog from disk."""
        return ConfigStore(self.settings.config_path)

    def http_probe(self) -> HttpProbe:
        """Create an HTTP probe with configured deadlines."""
        return HttpProbe(
            connect_timeout=self.settings.connect_timeout,
            total_timeout=self.settings.total_timeout,
            user_agent=self.settings.user_agent,
        )

    def checker(self) -> StatusChecker:
        """Create a single-device status checker."""
        return StatusChecker(self.http_probe(), ping_timeout=self.settings.ping_timeout)

    def coordinator(self) -> BatchCoordinator:
        """Create a batch coordinator."""
        return BatchCoordinator(
            self.http_probe(),
            ping_timeout=self.settings.ping_timeout,
            max_concurrency=self.settings.max_concurrency,
        )
