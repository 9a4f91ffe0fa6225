"""Configuration module for iot_status.

- Settings: Environment variable configuration
- DeviceConfigParser: Reads the INI device catalog
- ConfigStore: Validated, backed-up catalog persistence
"""

from iot_status.config.parser import Catalog, DeviceConfigParser
from iot_status.config.settings import Settings
from iot_status.config.store import ConfigStore

__all__ = ["Catalog", "ConfigStore", "DeviceConfigParser", "Settings"]
