"""Tests for the single-device status policy."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from iot_status.services.checker import StatusChecker
from iot_status.services.http_probe import HttpProbe


def _refusing(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.mark.asyncio
async def test_http_success_is_online_without_ping() -> None:
    """HTTP takes precedence; ping is never consulted."""
    checker = StatusChecker(HttpProbe(transport=httpx.MockTransport(lambda r: httpx.Response(200))))

    with patch(
        "iot_status.services.checker.check_host_reachable", new_callable=AsyncMock
    ) as mock_ping:
        mock_ping.return_value = False

        assert await checker.check("10.0.0.5") == "online"
        mock_ping.assert_not_called()


@pytest.mark.asyncio
async def test_ping_fallback_rescues_headless_device() -> None:
    """A device without HTTP that answers ping is online."""
    checker = StatusChecker(HttpProbe(transport=httpx.MockTransport(_refusing)), ping_timeout=1.0)

    with patch(
        "iot_status.services.checker.check_host_reachable", new_callable=AsyncMock
    ) as mock_ping:
        mock_ping.return_value = True

        assert await checker.check("192.0.2.5") == "online"
        mock_ping.assert_awaited_once_with("192.0.2.5", timeout=1.0)


@pytest.mark.asyncio
async def test_both_probes_fail_is_offline() -> None:
    """No HTTP and no ping reply means offline."""
    checker = StatusChecker(HttpProbe(transport=httpx.MockTransport(_refusing)))

    with patch(
        "iot_status.services.checker.check_host_reachable", new_callable=AsyncMock
    ) as mock_ping:
        mock_ping.return_value = False

        assert await checker.check("10.0.0.1:9999") == "offline"


@pytest.mark.asyncio
async def test_external_domain_without_http_is_offline() -> None:
    """Public domains fall straight to offline when HTTP fails."""
    checker = StatusChecker(HttpProbe(transport=httpx.MockTransport(_refusing)))

    with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock) as mock_exec:
        assert await checker.check("example.com") == "offline"
        mock_exec.assert_not_called()
