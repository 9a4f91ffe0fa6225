"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Device catalog
    config_path: str = field(default="DBconfigs.ini")

    # Probes
    connect_timeout: float = field(default=2.0)
    total_timeout: float = field(default=3.0)
    ping_timeout: float = field(default=2.0)
    max_concurrency: int = field(default=256)
    user_agent: str = field(default="IOT-Monitor/1.0")

    # Transport
    http_host: str = field(default="0.0.0.0")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=5000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from IOT_STATUS_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            config_path=os.getenv("IOT_STATUS_CONFIG_PATH", "DBconfigs.ini"),
            connect_timeout=cls._get_float("IOT_STATUS_CONNECT_TIMEOUT", 2.0),
            total_timeout=cls._get_float("IOT_STATUS_TOTAL_TIMEOUT", 3.0),
            ping_timeout=cls._get_float("IOT_STATUS_PING_TIMEOUT", 2.0),
            max_concurrency=cls._get_int("IOT_STATUS_MAX_CONCURRENCY", 256),
            user_agent=os.getenv("IOT_STATUS_USER_AGENT", "IOT-Monitor/1.0"),
            http_host=os.getenv("IOT_STATUS_HTTP_HOST", "0.0.0.0"),
            http_port=cls._get_int("IOT_STATUS_HTTP_PORT", 8000),
            log_level=os.getenv("IOT_STATUS_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("IOT_STATUS_LOG_COLORS", True),
            log_payloads=cls._get_bool("IOT_STATUS_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("IOT_STATUS_SLOW_THRESHOLD_MS", 5000),
            include_traceback=cls._get_bool("IOT_STATUS_INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get positive integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default
        if parsed <= 0:
            logger.warning("Non-positive value for %s: %s, using default %d", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get positive float (seconds) from environment."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid float for %s: %s, using default %.1f", key, value, default)
            return default
        if parsed <= 0:
            logger.warning("Non-positive value for %s: %s, using default %.1f", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")
