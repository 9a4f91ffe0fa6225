"""Device status values and results."""

from dataclasses import dataclass
from typing import Final, Literal

DeviceStatus = Literal["online", "offline"]

ONLINE: Final[DeviceStatus] = "online"
OFFLINE: Final[DeviceStatus] = "offline"

# key -> status for one batch
StatusResult = dict[str, DeviceStatus]


@dataclass
class CatalogResult:
    """Outcome of a catalog mutation."""

    success: bool
    message: str
