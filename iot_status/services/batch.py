"""Concurrent status checks for many devices.

The HTTP phase probes every device at once, so a batch takes about as long
as the slowest single probe. Devices that fail HTTP are then pinged.
"""

import asyncio
import logging
import time

from iot_status.models import OFFLINE, ONLINE, StatusResult
from iot_status.services.http_probe import HttpProbe
from iot_status.utils.ping import check_hosts_reachable

logger = logging.getLogger(__name__)


class BatchCoordinator:
    """Fan out device probes and collect a key -> status mapping.

    Example:
        >>> coordinator = BatchCoordinator(HttpProbe())
        >>> await coordinator.check_many({"Printers:Lobby": "10.0.0.20"})
        {'Printers:Lobby': 'online'}
    """

    def __init__(
        self,
        http_probe: HttpProbe,
        ping_timeout: float = 2.0,
        max_concurrency: int = 256,
    ) -> None:
        """Initialize the coordinator.

        Args:
            http_probe: Probe used for the HTTP phase.
            ping_timeout: Reply deadline for fallback pings.
            max_concurrency: Upper bound on probes in flight at once.
        """
        self.http_probe = http_probe
        self.ping_timeout = ping_timeout
        self.max_concurrency = max_concurrency

    async def check_many(self, entries: dict[str, str]) -> StatusResult:
        """Check every device in ``entries``.

        Args:
            entries: Dict of {device key: address}.

        Returns:
            Dict of {device key: "online" | "offline"} with exactly the
            keys of ``entries``.
        """
        if not entries:
            return {}

        start = time.perf_counter()
        keys = list(entries.keys())

        http_ok = await self._http_phase(list(entries.values()))
        results: StatusResult = {
            key: ONLINE if ok else OFFLINE for key, ok in zip(keys, http_ok)
        }

        fallback = {key: entries[key] for key, ok in zip(keys, http_ok) if not ok}
        if fallback:
            reachable = await check_hosts_reachable(
                fallback,
                timeout=self.ping_timeout,
                max_concurrency=self.max_concurrency,
            )
            for key, ok in reachable.items():
                if ok:
                    results[key] = ONLINE

        online = sum(1 for status in results.values() if status == ONLINE)
        logger.info(
            "Batch of %d devices completed in %.1fms: %d online, %d offline (%d pinged)",
            len(results),
            (time.perf_counter() - start) * 1000,
            online,
            len(results) - online,
            len(fallback),
        )
        return results

    async def _http_phase(self, addresses: list[str]) -> list[bool]:
        """Probe all addresses over HTTP concurrently with one shared client."""
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async with self.http_probe.create_client() as client:

            async def probe_one(address: str) -> bool:
                async with semaphore:
                    return await self.http_probe.probe(address, client=client)

            outcomes = await asyncio.gather(
                *(probe_one(address) for address in addresses),
                return_exceptions=True,
            )

        http_ok: list[bool] = []
        for address, outcome in zip(addresses, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "HTTP probe for %s raised %s: %s",
                    address,
                    type(outcome).__name__,
                    outcome,
                )
                http_ok.append(False)
            else:
                http_ok.append(outcome)
        return http_ok
