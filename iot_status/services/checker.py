"""Single-device status policy: HTTP first, ping as fallback."""

import logging

from iot_status.models import OFFLINE, ONLINE, DeviceStatus
from iot_status.services.http_probe import HttpProbe
from iot_status.utils.ping import check_host_reachable

logger = logging.getLogger(__name__)


class StatusChecker:
    """Decide online/offline for one device address.

    HTTP is tried first since most devices serve a web interface; the ping
    fallback only runs for devices that did not answer HTTP.
    """

    def __init__(self, http_probe: HttpProbe, ping_timeout: float = 2.0) -> None:
        self.http_probe = http_probe
        self.ping_timeout = ping_timeout

    async def check(self, address: str) -> DeviceStatus:
        """Check one device.

        Args:
            address: Device address, with or without scheme.

        Returns:
            "online" if HTTP or ping succeeds, else "offline".
        """
        if await self.http_probe.probe(address):
            return ONLINE

        if await check_host_reachable(address, timeout=self.ping_timeout):
            logger.debug("%s has no HTTP but answers ping", address)
            return ONLINE

        return OFFLINE
