"""Data models for iot_status."""

from iot_status.models.device import DeviceEntry, build_address_map
from iot_status.models.status import (
    OFFLINE,
    ONLINE,
    CatalogResult,
    DeviceStatus,
    StatusResult,
)

__all__ = [
    "build_address_map",
    "CatalogResult",
    "DeviceEntry",
    "DeviceStatus",
    "OFFLINE",
    "ONLINE",
    "StatusResult",
]
