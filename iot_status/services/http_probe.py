"""HTTP reachability probe.

A device counts as reachable over HTTP when any status line comes back,
including redirects and 4xx/5xx errors. Only transport failures (refused
connection, DNS failure, timeout) are negative.
"""

import asyncio
import logging

import httpx

from iot_status.utils.address import normalize_address

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "IOT-Monitor/1.0"


class HttpProbe:
    """HEAD request prober with separate connect and total deadlines."""

    def __init__(
        self,
        connect_timeout: float = 2.0,
        total_timeout: float = 3.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the probe.

        Args:
            connect_timeout: Seconds allowed to establish the TCP connection.
            total_timeout: Seconds allowed for the whole request.
            user_agent: User-Agent header sent to devices.
            transport: Optional httpx transport (used by tests).
        """
        self.connect_timeout = connect_timeout
        self.total_timeout = total_timeout
        self.user_agent = user_agent
        self.transport = transport

    def create_client(self) -> httpx.AsyncClient:
        """Create a client configured for device probing.

        Certificates are not verified and redirects are not followed. The
        caller bounds concurrency, so the pool itself is unlimited.
        """
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.total_timeout, connect=self.connect_timeout),
            verify=False,
            follow_redirects=False,
            headers={"User-Agent": self.user_agent},
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=0),
            transport=self.transport,
        )

    async def probe(self, address: str, client: httpx.AsyncClient | None = None) -> bool:
        """Check whether a device answers HTTP.

        Args:
            address: Device address, with or without scheme.
            client: Shared client for batch probing; a private one is
                created when omitted.

        Returns:
            True if an HTTP status code was received.
        """
        url = f"http://{normalize_address(address)}"
        if client is None:
            async with self.create_client() as own_client:
                return await self._head(own_client, url)
        return await self._head(client, url)

    async def _head(self, client: httpx.AsyncClient, url: str) -> bool:
        try:
            response = await asyncio.wait_for(client.head(url), timeout=self.total_timeout)
        except TimeoutError:
            logger.debug("HTTP probe %s timed out after %.1fs", url, self.total_timeout)
            return False
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError) as e:
            logger.debug("HTTP probe %s failed: %s: %s", url, type(e).__name__, e)
            return False

        logger.debug("HTTP probe %s -> %d", url, response.status_code)
        return response.status_code > 0
