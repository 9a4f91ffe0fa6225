"""Network-level reachability checks (single ICMP echo via the system ping)."""

import asyncio
import logging
import math
import os

from iot_status.utils.address import extract_host, is_external_domain, normalize_address

logger = logging.getLogger(__name__)


def build_ping_command(host: str, timeout: float) -> list[str]:
    """Build a single-packet ping command for the current platform.

    Args:
        host: Host or IP to ping.
        timeout: Reply deadline in seconds.

    Returns:
        Argument list for ``create_subprocess_exec``.
    """
    if os.name == "nt":
        return ["ping", "-n", "1", "-w", str(int(timeout * 1000)), host]
    return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout))), host]


async def check_host_reachable(address: str, timeout: float = 2.0) -> bool:
    """Check if a device answers a single ping.

    Hosts that look like public domains (.com/.org/.net) or that start
    with "-" are not pinged and always report False.

    Args:
        address: Device address, may include scheme, port and path.
        timeout: Reply deadline in seconds.

    Returns:
        True if the ping command exited with status 0, False otherwise.
    """
    host = extract_host(normalize_address(address))
    if not host or is_external_domain(host):
        return False
    # ping would read a leading dash as an option
    if host.startswith("-"):
        logger.debug("Refusing to ping option-like host %r", host)
        return False

    try:
        proc = await asyncio.create_subprocess_exec(
            *build_ping_command(host, timeout),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        logger.debug("Cannot run ping for %s: %s", host, e)
        return False

    try:
        returncode = await asyncio.wait_for(proc.wait(), timeout=timeout + 1)
    except TimeoutError:
        logger.debug("Ping for %s exceeded %.1fs, killing", host, timeout + 1)
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        return False

    return returncode == 0


async def check_hosts_reachable(
    addresses: dict[str, str],
    timeout: float = 2.0,
    max_concurrency: int | None = None,
) -> dict[str, bool]:
    """Ping multiple devices concurrently.

    Args:
        addresses: Dict of {key: address}.
        timeout: Reply deadline per host.
        max_concurrency: Upper bound on simultaneous ping processes.

    Returns:
        Dict of {key: is_reachable}.
    """
    if not addresses:
        return {}

    keys = list(addresses.keys())
    semaphore = asyncio.Semaphore(max_concurrency or len(addresses))

    async def ping_one(address: str) -> bool:
        async with semaphore:
            return await check_host_reachable(address, timeout)

    coros = [ping_one(address) for address in addresses.values()]

    results = await asyncio.gather(*coros)
    return dict(zip(keys, results))
